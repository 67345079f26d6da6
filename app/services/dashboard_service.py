from typing import Dict, Any
from app.services.appointment_service import (
    count_appointments, get_all_appointments, get_stylist_appointments
)
from app.services.stylist_service import count_stylists
from app.services.user_service import count_users

LATEST_APPOINTMENTS = 5

async def get_admin_dashboard() -> Dict[str, Any]:
    """
    Totals across the salon and the most recent bookings
    """
    return {
        "stylists": await count_stylists(),
        "appointments": await count_appointments(),
        "customers": await count_users(),
        "latestAppointments": await get_all_appointments(limit=LATEST_APPOINTMENTS),
    }

async def get_stylist_dashboard(stylist_id: str) -> Dict[str, Any]:
    """
    Earnings, bookings and distinct customers of one stylist.

    An appointment counts towards earnings once it is completed or paid.
    """
    appointments = await get_stylist_appointments(stylist_id)

    earnings = sum(
        item["amount"] for item in appointments
        if item.get("isCompleted") or item.get("payment")
    )
    customers = {item["userId"] for item in appointments}

    return {
        "earnings": earnings,
        "appointments": len(appointments),
        "customers": len(customers),
        "latestAppointments": appointments[:LATEST_APPOINTMENTS],
    }
