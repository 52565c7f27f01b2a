"""Shared validation utilities"""

import re
from typing import Optional

from ..config import DEFAULT_PAGE_SIZE


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    # Basic email validation pattern
    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email


def validate_http_url(url: Optional[str]) -> Optional[str]:
    """Accept only http(s) links for item and image URLs"""
    if not url:
        return url

    url = url.strip()
    if not re.match(r"^https?://[^\s/$.?#].[^\s]*$", url, re.IGNORECASE):
        raise ValueError("URL must start with http:// or https://")

    return url


def parse_page_params(skip: str, top: str) -> tuple[int, int]:
    """
    Turn /page/{skip}/{top} path segments into (offset, limit).
    Non-numeric or negative values fall back to 0 and DEFAULT_PAGE_SIZE.
    """
    offset = int(skip) if skip.isdigit() else 0
    limit = int(top) if top.isdigit() and int(top) > 0 else DEFAULT_PAGE_SIZE
    return offset, limit
