import json
from typing import Any, Dict, Iterable, Optional

from app.core.errors import SalonError
from app.schemas.user import Address

def serialize_document(
    document: Optional[Dict[str, Any]], exclude: Iterable[str] = ("password",)
) -> Optional[Dict[str, Any]]:
    """Copy of a MongoDB document with a string ``_id`` and private fields dropped."""
    if document is None:
        return None
    data = {key: value for key, value in document.items() if key not in exclude}
    if "_id" in data:
        data["_id"] = str(data["_id"])
    return data

def parse_address(raw: Optional[str]) -> Optional[Address]:
    """Multipart forms carry the address as a JSON string."""
    if not raw:
        return None
    try:
        return Address(**json.loads(raw))
    except (ValueError, TypeError):
        raise SalonError("Invalid address")
