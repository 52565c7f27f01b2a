"""Wishlists domain - wishlists, their items and item ordering"""

from .router import router

__all__ = ["router"]
