"""Wishlist and salon booking REST API"""

__version__ = "1.0.0"
