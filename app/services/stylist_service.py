from typing import Dict, Any, List, Optional
from app.db.mongodb import db
from app.schemas.stylist import StylistCreate, StylistProfileUpdate
from app.core.auth import get_password_hash, is_strong_password, verify_password
from app.core.errors import SalonError
from bson import ObjectId
from bson.errors import InvalidId
import logging
import time

logger = logging.getLogger(__name__)

async def create_stylist(stylist_in: StylistCreate, image_url: str) -> Dict[str, Any]:
    """
    Create a new stylist account
    """
    if not is_strong_password(stylist_in.password):
        raise SalonError("Please enter a strong password")

    if await get_stylist_by_email(stylist_in.email):
        raise SalonError("Stylist already exists")

    stylist_data = stylist_in.dict()
    stylist_data["password"] = get_password_hash(stylist_data["password"])
    stylist_data["image"] = image_url
    stylist_data["available"] = True
    stylist_data["date"] = int(time.time() * 1000)
    stylist_data["slots_booked"] = {}

    result = await db.db.stylists.insert_one(stylist_data)
    logger.info(f"Added stylist {result.inserted_id}")

    return await db.db.stylists.find_one({"_id": result.inserted_id})

async def get_stylist_by_id(stylist_id: str) -> Optional[Dict[str, Any]]:
    """
    Get a stylist by ID
    """
    try:
        return await db.db.stylists.find_one({"_id": ObjectId(stylist_id)})
    except InvalidId:
        return None

async def get_stylist_by_email(email: str) -> Optional[Dict[str, Any]]:
    return await db.db.stylists.find_one({"email": email})

async def authenticate_stylist(email: str, password: str) -> Dict[str, Any]:
    """
    Check stylist credentials; every failure reads the same
    """
    stylist = await get_stylist_by_email(email)
    if not stylist or not verify_password(password, stylist["password"]):
        raise SalonError("Invalid credentials")
    return stylist

async def get_all_stylists(include_email: bool = False) -> List[Dict[str, Any]]:
    """
    Get all stylists without their password (and without email for the public list)
    """
    projection = {"password": 0}
    if not include_email:
        projection["email"] = 0

    cursor = db.db.stylists.find({}, projection).sort("date", 1)
    return await cursor.to_list(length=None)

async def delete_stylist(stylist_id: str) -> bool:
    """
    Permanently remove a stylist
    """
    try:
        result = await db.db.stylists.delete_one({"_id": ObjectId(stylist_id)})
    except InvalidId:
        return False
    return result.deleted_count > 0

async def toggle_availability(stylist_id: str) -> Optional[bool]:
    """
    Flip the stylist's ``available`` flag and return the new value
    """
    stylist = await get_stylist_by_id(stylist_id)
    if not stylist:
        return None

    available = not stylist.get("available", True)
    await db.db.stylists.update_one(
        {"_id": stylist["_id"]},
        {"$set": {"available": available}}
    )
    return available

async def update_stylist_profile(
    stylist_id: str, stylist_update: StylistProfileUpdate
) -> Optional[Dict[str, Any]]:
    """
    Update fees, address and availability
    """
    stylist = await get_stylist_by_id(stylist_id)
    if not stylist:
        return None

    update_data = stylist_update.dict(exclude_unset=True, exclude_none=True)
    if update_data:
        await db.db.stylists.update_one(
            {"_id": stylist["_id"]},
            {"$set": update_data}
        )

    return await get_stylist_by_id(stylist_id)

async def claim_slot(stylist_id: str, slot_date: str, slot_time: str) -> bool:
    """
    Add a slot to ``slots_booked`` unless it is already there.

    Check and write happen in one document update, so of two bookings racing
    for the same slot only one gets it.
    """
    field = f"slots_booked.{slot_date}"
    result = await db.db.stylists.update_one(
        {"_id": ObjectId(stylist_id), field: {"$ne": slot_time}},
        {"$push": {field: slot_time}}
    )
    return result.modified_count > 0

async def release_slot(stylist_id: str, slot_date: str, slot_time: str) -> bool:
    """
    Remove a slot from ``slots_booked`` so it can be booked again
    """
    try:
        result = await db.db.stylists.update_one(
            {"_id": ObjectId(stylist_id)},
            {"$pull": {f"slots_booked.{slot_date}": slot_time}}
        )
    except InvalidId:
        return False
    return result.modified_count > 0

async def count_stylists() -> int:
    return await db.db.stylists.count_documents({})
