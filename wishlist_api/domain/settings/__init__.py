"""Settings domain - per-user wishlist app preferences and notification opt-ins"""

from .router import router

__all__ = ["router"]
