"""
ObjectId parsing for ids that arrive as strings (token claims, path params).
"""

from typing import Optional

from bson import ObjectId


def parse_object_id(value) -> Optional[ObjectId]:
    """Return the ObjectId for ``value``, or None if it is not a valid id."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None
