"""
Catalog-specific exceptions.
"""

from core.exceptions import NotFoundError


class ClothingItemNotFoundError(NotFoundError):
    """Raised when a clothing item id does not exist."""

    default_error_code = "CLOTHING_ITEM_NOT_FOUND"
