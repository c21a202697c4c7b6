"""
Trip planning workspace powered by Google Gemini.

This package implements the state core of a travel planning app: trip
projects with day-by-day itineraries, per-project AI chat sessions, the
view router that switches between the dashboard and a trip workspace,
and a gateway to Gemini for banners, weather, chat, photo edits and
translation.
"""

__version__ = "0.1.0"
