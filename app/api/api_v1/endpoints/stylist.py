from fastapi import APIRouter, Depends
from app.core.auth import create_access_token, get_current_stylist_id
from app.core.errors import SalonError, NotFoundError
from app.schemas.user import LoginRequest, MessageResponse, TokenResponse
from app.schemas.stylist import (
    StylistListResponse, StylistProfileResponse, StylistProfileUpdate
)
from app.schemas.appointment import (
    AppointmentIdRequest, AppointmentListResponse, DashboardResponse, SlotsResponse
)
from app.services.stylist_service import (
    authenticate_stylist, get_all_stylists, get_stylist_by_id,
    toggle_availability, update_stylist_profile
)
from app.services.appointment_service import (
    cancel_appointment, complete_appointment, get_appointment_by_id,
    get_stylist_appointments
)
from app.services.dashboard_service import get_stylist_dashboard
from app.services.slot_service import get_stylist_slots
from app.utils.serializers import serialize_document

router = APIRouter()

@router.post("/login", response_model=TokenResponse)
async def login_stylist(credentials: LoginRequest):
    """
    Log a stylist in with email and password
    """
    stylist = await authenticate_stylist(credentials.email, credentials.password)
    token = create_access_token({"sub": str(stylist["_id"]), "role": "stylist"})
    return {"success": True, "token": token}

@router.get("/list", response_model=StylistListResponse)
async def list_stylists():
    """
    Public stylist list, without emails or passwords
    """
    stylists = await get_all_stylists()
    return {"success": True, "stylists": [serialize_document(s) for s in stylists]}

@router.get("/{stylist_id}/slots", response_model=SlotsResponse)
async def list_stylist_slots(stylist_id: str):
    """
    Free slots of a stylist for the booking window, one list per day
    """
    days = await get_stylist_slots(stylist_id)
    return {
        "success": True,
        "stylistId": stylist_id,
        "slots": [
            [
                {"slotDate": slot.slot_date, "slotTime": slot.slot_time, "datetime": slot.start}
                for slot in day
            ]
            for day in days
        ],
    }

@router.get("/appointments", response_model=AppointmentListResponse)
async def list_my_appointments(stylist_id: str = Depends(get_current_stylist_id)):
    appointments = await get_stylist_appointments(stylist_id)
    return {
        "success": True,
        "appointments": [serialize_document(item) for item in appointments],
    }

async def get_own_appointment(appointment_id: str, stylist_id: str) -> dict:
    appointment = await get_appointment_by_id(appointment_id)
    if not appointment or appointment["stylistId"] != stylist_id:
        raise SalonError("Action Failed")
    return appointment

@router.post("/cancel-appointment", response_model=MessageResponse)
async def cancel_my_appointment(
    request: AppointmentIdRequest,
    stylist_id: str = Depends(get_current_stylist_id)
):
    """
    Cancel one of the stylist's own appointments and free the slot
    """
    appointment = await get_own_appointment(request.appointmentId, stylist_id)
    await cancel_appointment(appointment)
    return {"success": True, "message": "Appointment Cancelled"}

@router.post("/complete-appointment", response_model=MessageResponse)
async def complete_my_appointment(
    request: AppointmentIdRequest,
    stylist_id: str = Depends(get_current_stylist_id)
):
    """
    Mark one of the stylist's own appointments as completed
    """
    appointment = await get_own_appointment(request.appointmentId, stylist_id)
    if appointment.get("cancelled"):
        raise SalonError("Action Failed")

    await complete_appointment(appointment)
    return {"success": True, "message": "Appointment Completed"}

@router.post("/change-availability", response_model=MessageResponse)
async def change_my_availability(stylist_id: str = Depends(get_current_stylist_id)):
    if await toggle_availability(stylist_id) is None:
        raise NotFoundError("Stylist not found")
    return {"success": True, "message": "Availability Changed"}

@router.get("/dashboard", response_model=DashboardResponse, response_model_exclude_none=True)
async def stylist_dashboard(stylist_id: str = Depends(get_current_stylist_id)):
    dash_data = await get_stylist_dashboard(stylist_id)
    dash_data["latestAppointments"] = [
        serialize_document(item) for item in dash_data["latestAppointments"]
    ]
    return {"success": True, "dashData": dash_data}

@router.get("/profile", response_model=StylistProfileResponse)
async def get_my_profile(stylist_id: str = Depends(get_current_stylist_id)):
    stylist = await get_stylist_by_id(stylist_id)
    if not stylist:
        raise NotFoundError("Stylist not found")
    return {"success": True, "profileData": serialize_document(stylist)}

@router.post("/update-profile", response_model=MessageResponse)
async def update_my_profile(
    stylist_update: StylistProfileUpdate,
    stylist_id: str = Depends(get_current_stylist_id)
):
    """
    Update fees, address and availability
    """
    if not await update_stylist_profile(stylist_id, stylist_update):
        raise NotFoundError("Stylist not found")
    return {"success": True, "message": "Profile Updated"}
