"""
Workspace tools: currency exchange, map links and translation.
"""
