"""Clients domain - registered API clients and their refresh tokens"""

from .router import router

__all__ = ["router"]
