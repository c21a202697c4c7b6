"""
Domain models and the DynamoDB persistence boundary.
"""
