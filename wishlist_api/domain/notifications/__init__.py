"""Notifications domain - the notification catalog and its actions"""

from .router import router

__all__ = ["router"]
