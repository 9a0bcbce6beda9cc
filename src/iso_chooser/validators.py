"""
Validation utilities for iso-chooser-menu.
"""

import re
from typing import Any, Dict, Optional, TypeGuard

from .constants import ISO_FTYPE

_SHA256_PATTERN = re.compile(r"^[0-9a-fA-F]{64}$")


def is_feed_object(value: Any) -> TypeGuard[Dict[str, Any]]:
    """Check that a decoded JSON value is an object."""
    return isinstance(value, dict)


def is_iso_item(item: Any) -> TypeGuard[Dict[str, Any]]:
    """Check whether a feed item describes an ISO image."""
    if not is_feed_object(item):
        return False
    ftype = item.get("ftype")
    if ftype is not None:
        return ftype == ISO_FTYPE
    path = item.get("path")
    return isinstance(path, str) and path.endswith(".iso")


def is_sha256_hex(value: Optional[Any]) -> TypeGuard[str]:
    """Check for a hex encoded 256-bit digest."""
    return isinstance(value, str) and bool(_SHA256_PATTERN.match(value))
