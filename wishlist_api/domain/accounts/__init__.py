"""Accounts domain - user administration and bearer-token sign-in"""

from .router import auth_router, router

__all__ = ["router", "auth_router"]
