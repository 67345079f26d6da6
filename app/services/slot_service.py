"""
Bookable slot computation.

A stylist's free slots are derived, never stored: the salon day runs from the
opening hour up to (not including) the closing hour in fixed steps, and every
slot already recorded in the stylist's ``slots_booked`` map is left out.
"""
from datetime import datetime, timedelta
from typing import Dict, Iterator, List, NamedTuple, Optional
from zoneinfo import ZoneInfo

from app.core.config import settings
from app.core.errors import NotFoundError, SalonError
from app.services.stylist_service import get_stylist_by_id

OPENING_HOUR = 10
CLOSING_HOUR = 21
SLOT_MINUTES = 30
BOOKING_DAYS = 7

class Slot(NamedTuple):
    slot_date: str
    slot_time: str
    start: datetime

def format_slot_date(moment: datetime) -> str:
    """``5_3_2026`` for 5 March 2026, the key used in ``slots_booked``."""
    return f"{moment.day}_{moment.month}_{moment.year}"

def format_slot_time(moment: datetime) -> str:
    """``10:30 AM`` style time label."""
    return moment.strftime("%I:%M %p")

def next_slot_boundary(now: datetime, slot_minutes: int = SLOT_MINUTES) -> datetime:
    """First slot boundary strictly after ``now``."""
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    step = timedelta(minutes=slot_minutes)
    return midnight + ((now - midnight) // step + 1) * step

def parse_slot(
    slot_date: str,
    slot_time: str,
    opening_hour: int = OPENING_HOUR,
    closing_hour: int = CLOSING_HOUR,
    slot_minutes: int = SLOT_MINUTES,
) -> datetime:
    """
    Read a ``slotDate``/``slotTime`` pair back into the slot's start time.

    Padding and letter case are tolerated (``05_11_2026``, ``10:00 am``), but the
    time has to sit on the salon's grid. Callers should store the re-formatted
    labels so one real slot always maps to one key.
    """
    try:
        day, month, year = (int(part) for part in slot_date.split("_"))
        clock = datetime.strptime(slot_time.strip().upper(), "%I:%M %p")
        start = datetime(
            year, month, day, clock.hour, clock.minute,
            tzinfo=ZoneInfo(settings.SALON_TIMEZONE),
        )
    except ValueError:
        raise SalonError("Invalid slot")

    minutes = start.hour * 60 + start.minute
    opening = opening_hour * 60
    if minutes < opening or minutes >= closing_hour * 60 or (minutes - opening) % slot_minutes:
        raise SalonError("Invalid slot")
    return start

def iter_available_slots(
    slots_booked: Optional[Dict[str, List[str]]],
    now: datetime,
    days: int = BOOKING_DAYS,
    opening_hour: int = OPENING_HOUR,
    closing_hour: int = CLOSING_HOUR,
    slot_minutes: int = SLOT_MINUTES,
) -> Iterator[List[Slot]]:
    """
    Yield the free slots of ``days`` consecutive days, one list per day.

    Day 0 starts at the next boundary after ``now`` (never before opening),
    later days start at opening. A day with nothing free yields ``[]``.
    """
    booked = slots_booked or {}
    step = timedelta(minutes=slot_minutes)
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)

    for offset in range(days):
        day = today + timedelta(days=offset)
        opening = day.replace(hour=opening_hour)
        closing = day.replace(hour=closing_hour)

        current = opening
        if offset == 0:
            current = max(opening, next_slot_boundary(now, slot_minutes))

        slots = []
        while current < closing:
            slot_date = format_slot_date(current)
            slot_time = format_slot_time(current)
            if slot_time not in booked.get(slot_date, ()):
                slots.append(Slot(slot_date, slot_time, current))
            current += step
        yield slots

def salon_now() -> datetime:
    return datetime.now(ZoneInfo(settings.SALON_TIMEZONE))

async def get_stylist_slots(stylist_id: str, now: Optional[datetime] = None) -> Iterator[List[Slot]]:
    """Free slots for a stylist over the configured booking window."""
    stylist = await get_stylist_by_id(stylist_id)
    if not stylist:
        raise NotFoundError("Stylist not found")

    return iter_available_slots(
        stylist.get("slots_booked"),
        now or salon_now(),
        days=settings.BOOKING_DAYS,
        opening_hour=settings.OPENING_HOUR,
        closing_hour=settings.CLOSING_HOUR,
        slot_minutes=settings.SLOT_MINUTES,
    )
