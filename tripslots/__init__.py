"""
tripslots - Find free time slots for wishlist items in a shared trip itinerary.
"""

__version__ = "0.1.0"
