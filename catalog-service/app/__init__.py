"""
Catalog Service - Adapter exposing a stable video-game catalog API.

This package fetches games, game details, genres and platforms from the RAWG
API, normalizes and validates the responses, and serves them as immutable
domain entities.
"""

__version__ = "0.1.0"
