from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import ValidationError
from typing import Optional
from app.core.auth import check_admin_credentials, create_admin_token, require_admin
from app.core.errors import SalonError, NotFoundError
from app.schemas.user import LoginRequest, MessageResponse, TokenResponse
from app.schemas.stylist import StylistAdminListResponse, StylistCreate, StylistIdRequest
from app.schemas.appointment import (
    AppointmentIdRequest, AppointmentListResponse, DashboardResponse
)
from app.services.stylist_service import (
    create_stylist, delete_stylist, get_all_stylists, get_stylist_by_id, toggle_availability
)
from app.services.appointment_service import (
    cancel_appointment, get_all_appointments, get_appointment_by_id
)
from app.services.dashboard_service import get_admin_dashboard
from app.utils.file_upload import upload_image
from app.utils.serializers import parse_address, serialize_document

router = APIRouter()

@router.post("/login", response_model=TokenResponse)
async def login_admin(credentials: LoginRequest):
    """
    Log in with the configured admin email and password
    """
    if not check_admin_credentials(credentials.email, credentials.password):
        raise SalonError("Invalid credentials")
    return {"success": True, "token": create_admin_token()}

@router.post("/add-stylist", response_model=MessageResponse)
async def add_stylist(
    name: str = Form(""),
    email: str = Form(""),
    password: str = Form(""),
    serviceType: str = Form(""),
    qualification: str = Form(""),
    experience: str = Form(""),
    about: str = Form(""),
    fees: str = Form(""),
    address: str = Form(""),
    image: Optional[UploadFile] = File(None),
    admin: str = Depends(require_admin)
):
    """
    Add a stylist account; the profile image is required
    """
    fields = [name, email, password, serviceType, qualification, experience, about, fees, address]
    if not all(fields) or image is None or not image.filename:
        raise SalonError("Missing Details")

    try:
        stylist_in = StylistCreate(
            name=name,
            email=email,
            password=password,
            serviceType=serviceType,
            qualification=qualification,
            experience=experience,
            about=about,
            fees=fees,
            address=parse_address(address),
        )
    except ValidationError as e:
        if any(error["loc"] == ("email",) for error in e.errors()):
            raise SalonError("Please enter a valid email")
        raise SalonError(e.errors()[0]["msg"])

    image_url = await upload_image(image, folder="stylists")
    await create_stylist(stylist_in, image_url)
    return {"success": True, "message": "Stylist Added"}

@router.get("/all-stylists", response_model=StylistAdminListResponse)
async def list_all_stylists(admin: str = Depends(require_admin)):
    stylists = await get_all_stylists(include_email=True)
    return {"success": True, "stylists": [serialize_document(s) for s in stylists]}

@router.post("/delete-stylist", response_model=MessageResponse)
async def remove_stylist(request: StylistIdRequest, admin: str = Depends(require_admin)):
    """
    Permanently delete a stylist
    """
    if not request.stylistId:
        raise SalonError("Stylist ID is required")

    if not await get_stylist_by_id(request.stylistId):
        raise NotFoundError("Stylist not found")

    await delete_stylist(request.stylistId)
    return {"success": True, "message": "Stylist deleted successfully"}

@router.post("/change-availability", response_model=MessageResponse)
async def change_stylist_availability(
    request: StylistIdRequest,
    admin: str = Depends(require_admin)
):
    if not request.stylistId:
        raise SalonError("Stylist ID is required")

    if await toggle_availability(request.stylistId) is None:
        raise NotFoundError("Stylist not found")
    return {"success": True, "message": "Availability Changed"}

@router.get("/appointments", response_model=AppointmentListResponse)
async def list_all_appointments(admin: str = Depends(require_admin)):
    appointments = await get_all_appointments()
    return {
        "success": True,
        "appointments": [serialize_document(item) for item in appointments],
    }

@router.post("/cancel-appointment", response_model=MessageResponse)
async def cancel_any_appointment(
    request: AppointmentIdRequest,
    admin: str = Depends(require_admin)
):
    """
    Cancel any appointment and free the slot
    """
    appointment = await get_appointment_by_id(request.appointmentId)
    if not appointment:
        raise NotFoundError("Appointment not found")

    await cancel_appointment(appointment)
    return {"success": True, "message": "Appointment Cancelled"}

@router.get("/dashboard", response_model=DashboardResponse, response_model_exclude_none=True)
async def admin_dashboard(admin: str = Depends(require_admin)):
    dash_data = await get_admin_dashboard()
    dash_data["latestAppointments"] = [
        serialize_document(item) for item in dash_data["latestAppointments"]
    ]
    return {"success": True, "dashData": dash_data}
