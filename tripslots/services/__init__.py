"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .slot_lookup import SlotLookupService
from .wishlist_promotion import (
    ItineraryStoreProtocol,
    PlaceDetailsProtocol,
    PromotionResult,
    WishlistPromotionService,
)

__all__ = [
    "SlotLookupService",
    "ItineraryStoreProtocol",
    "PlaceDetailsProtocol",
    "PromotionResult",
    "WishlistPromotionService",
]
