"""
Adapters layer - Storage integrations.
"""

from .json_store import JsonItineraryStore

__all__ = ["JsonItineraryStore"]
