"""
External AI gateway backed by Google Gemini.
"""

from trip_planner.gateway.gemini import GeminiGateway, WeatherReport

__all__ = ["GeminiGateway", "WeatherReport"]
