"""Itinerary generation service for a tourism platform."""

__version__ = "1.0.0"
