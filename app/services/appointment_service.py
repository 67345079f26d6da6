from typing import Dict, Any, List, Optional
from app.db.mongodb import db
from app.schemas.appointment import BookAppointmentRequest
from app.services.user_service import get_user_by_id
from app.services.stylist_service import get_stylist_by_id, claim_slot, release_slot
from app.services.slot_service import format_slot_date, format_slot_time, parse_slot
from app.core.config import settings
from app.core.errors import SalonError, NotFoundError
from app.utils.serializers import serialize_document
from bson import ObjectId
from bson.errors import InvalidId
import logging
import time

logger = logging.getLogger(__name__)

async def book_appointment(user_id: str, booking_in: BookAppointmentRequest) -> Dict[str, Any]:
    """
    Book a slot with a stylist for a customer.

    The slot is claimed on the stylist first; if the appointment cannot be
    stored afterwards the claim is given back. Slot labels are normalised
    before anything is looked up, so every spelling of a slot hits one key.
    """
    start = parse_slot(
        booking_in.slotDate,
        booking_in.slotTime,
        opening_hour=settings.OPENING_HOUR,
        closing_hour=settings.CLOSING_HOUR,
        slot_minutes=settings.SLOT_MINUTES,
    )
    slot_date = format_slot_date(start)
    slot_time = format_slot_time(start)

    stylist = await get_stylist_by_id(booking_in.stylistId)
    if not stylist:
        raise NotFoundError("Stylist not found")

    if stylist.get("available") is False:
        raise SalonError("Stylist Not Available")

    booked_times = (stylist.get("slots_booked") or {}).get(slot_date, [])
    if slot_time in booked_times:
        raise SalonError("Slot Not Available")

    user = await get_user_by_id(user_id)
    if not user:
        raise NotFoundError("User not found")

    stylist_id = str(stylist["_id"])
    if not await claim_slot(stylist_id, slot_date, slot_time):
        raise SalonError("Slot Not Available")

    appointment_data = {
        "userId": user_id,
        "stylistId": stylist_id,
        "slotDate": slot_date,
        "slotTime": slot_time,
        "userData": serialize_document(user),
        "stylistData": serialize_document(stylist, exclude=("password", "slots_booked")),
        "amount": stylist["fees"],
        "date": int(time.time() * 1000),
        "cancelled": False,
        "payment": False,
        "isCompleted": False,
    }

    try:
        result = await db.db.appointments.insert_one(appointment_data)
    except Exception:
        await release_slot(stylist_id, slot_date, slot_time)
        raise

    logger.info(
        f"Booked {slot_date} {slot_time} with stylist {stylist_id} "
        f"for user {user_id} (appointment {result.inserted_id})"
    )
    return await db.db.appointments.find_one({"_id": result.inserted_id})

async def get_appointment_by_id(appointment_id: str) -> Optional[Dict[str, Any]]:
    """
    Get an appointment by ID
    """
    try:
        return await db.db.appointments.find_one({"_id": ObjectId(appointment_id)})
    except InvalidId:
        return None

async def _find_appointments(query: Dict[str, Any], limit: Optional[int] = None) -> List[Dict[str, Any]]:
    cursor = db.db.appointments.find(query).sort("date", -1)
    if limit:
        cursor = cursor.limit(limit)
    return await cursor.to_list(length=limit)

async def get_user_appointments(user_id: str) -> List[Dict[str, Any]]:
    """
    Appointments of a customer, newest first
    """
    return await _find_appointments({"userId": user_id})

async def get_stylist_appointments(stylist_id: str) -> List[Dict[str, Any]]:
    """
    Appointments of a stylist, newest first
    """
    return await _find_appointments({"stylistId": stylist_id})

async def get_all_appointments(limit: Optional[int] = None) -> List[Dict[str, Any]]:
    return await _find_appointments({}, limit=limit)

async def cancel_appointment(appointment: Dict[str, Any]) -> Dict[str, Any]:
    """
    Cancel an appointment and free its slot on the stylist.

    Only the request that actually flips ``cancelled`` releases the slot.
    """
    result = await db.db.appointments.update_one(
        {"_id": appointment["_id"], "cancelled": False},
        {"$set": {"cancelled": True}}
    )
    if result.modified_count != 1:
        raise SalonError("Appointment already cancelled")

    await release_slot(appointment["stylistId"], appointment["slotDate"], appointment["slotTime"])

    logger.info(f"Cancelled appointment {appointment['_id']}")
    return await db.db.appointments.find_one({"_id": appointment["_id"]})

async def complete_appointment(appointment: Dict[str, Any]) -> Dict[str, Any]:
    """
    Mark an appointment as completed
    """
    await db.db.appointments.update_one(
        {"_id": appointment["_id"]},
        {"$set": {"isCompleted": True}}
    )
    return await db.db.appointments.find_one({"_id": appointment["_id"]})

async def update_appointment_fields(appointment_id: str, fields: Dict[str, Any]) -> bool:
    """
    Set arbitrary fields on an appointment (payment flags, gateway references)
    """
    try:
        result = await db.db.appointments.update_one(
            {"_id": ObjectId(appointment_id)},
            {"$set": fields}
        )
    except InvalidId:
        return False
    return result.matched_count > 0

async def mark_appointment_paid(appointment_id: str) -> bool:
    return await update_appointment_fields(appointment_id, {"payment": True})

async def count_appointments(query: Optional[Dict[str, Any]] = None) -> int:
    return await db.db.appointments.count_documents(query or {})
