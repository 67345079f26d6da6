from fastapi import APIRouter, Depends, File, Form, Header, UploadFile
from typing import Optional
from app.core.auth import create_access_token, get_current_user_id
from app.core.errors import SalonError, NotFoundError, ForbiddenError
from app.schemas.user import (
    LoginRequest, MessageResponse, TokenResponse, UserProfileResponse,
    UserProfileUpdate, UserRegister
)
from app.schemas.appointment import (
    AppointmentIdRequest, AppointmentListResponse, BookAppointmentRequest
)
from app.schemas.payment import (
    RazorpayOrderResponse, RazorpayVerifyRequest, StripeSessionResponse, StripeVerifyRequest
)
from app.services.user_service import (
    authenticate_user, create_user, get_user_by_id, update_user_profile
)
from app.services.appointment_service import (
    book_appointment, cancel_appointment, get_appointment_by_id, get_user_appointments
)
from app.services.payment_service import (
    create_razorpay_order, create_stripe_session, fetch_razorpay_order,
    verify_razorpay_payment, verify_stripe_payment
)
from app.utils.file_upload import upload_image
from app.utils.serializers import parse_address, serialize_document

router = APIRouter()

def user_token(user: dict) -> str:
    return create_access_token({"sub": str(user["_id"]), "role": "user"})

@router.post("/register", response_model=TokenResponse)
async def register_user(user_in: UserRegister):
    """
    Create a customer account and log it in
    """
    user = await create_user(user_in)
    return {"success": True, "token": user_token(user)}

@router.post("/login", response_model=TokenResponse)
async def login_user(credentials: LoginRequest):
    """
    Log a customer in with email and password
    """
    user = await authenticate_user(credentials.email, credentials.password)
    return {"success": True, "token": user_token(user)}

@router.get("/get-profile", response_model=UserProfileResponse)
async def get_profile(user_id: str = Depends(get_current_user_id)):
    user = await get_user_by_id(user_id)
    if not user:
        raise NotFoundError("User not found")
    return {"success": True, "userData": serialize_document(user)}

@router.post("/update-profile", response_model=MessageResponse)
async def update_profile(
    name: str = Form(""),
    phone: str = Form(""),
    dob: str = Form(""),
    gender: str = Form(""),
    address: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    user_id: str = Depends(get_current_user_id)
):
    """
    Update profile details; a new image, if sent, goes to object storage first
    """
    if not name or not phone or not dob or not gender:
        raise SalonError("Data Missing")

    profile = UserProfileUpdate(
        name=name, phone=phone, dob=dob, gender=gender, address=parse_address(address)
    )

    image_url = None
    if image is not None and image.filename:
        image_url = await upload_image(image, folder="users")

    updated = await update_user_profile(user_id, profile, image_url)
    if not updated:
        raise NotFoundError("User not found")

    return {"success": True, "message": "Profile Updated"}

@router.post("/book-appointment", response_model=MessageResponse)
async def book_new_appointment(
    booking_in: BookAppointmentRequest,
    user_id: str = Depends(get_current_user_id)
):
    """
    Book a free slot with a stylist
    """
    await book_appointment(user_id, booking_in)
    return {"success": True, "message": "Appointment Booked Successfully"}

@router.get("/appointments", response_model=AppointmentListResponse)
async def list_my_appointments(user_id: str = Depends(get_current_user_id)):
    """
    Appointments of the current customer, newest first
    """
    appointments = await get_user_appointments(user_id)
    return {
        "success": True,
        "appointments": [serialize_document(item) for item in appointments],
    }

@router.post("/cancel-appointment", response_model=MessageResponse)
async def cancel_my_appointment(
    request: AppointmentIdRequest,
    user_id: str = Depends(get_current_user_id)
):
    """
    Cancel one of the current customer's appointments and free the slot
    """
    appointment = await get_appointment_by_id(request.appointmentId)
    if not appointment:
        raise NotFoundError("Appointment not found")

    if appointment["userId"] != user_id:
        raise ForbiddenError("Unauthorized action")

    await cancel_appointment(appointment)
    return {"success": True, "message": "Appointment Cancelled"}

async def get_own_appointment(appointment_id: str, user_id: str) -> dict:
    appointment = await get_appointment_by_id(appointment_id)
    if appointment and appointment["userId"] != user_id:
        raise ForbiddenError("Unauthorized action")
    return appointment

@router.post("/payment-razorpay", response_model=RazorpayOrderResponse)
async def pay_with_razorpay(
    request: AppointmentIdRequest,
    user_id: str = Depends(get_current_user_id)
):
    """
    Start a Razorpay payment for an appointment
    """
    await get_own_appointment(request.appointmentId, user_id)
    order = await create_razorpay_order(request.appointmentId)
    return {"success": True, "order": order}

@router.post("/verify-razorpay", response_model=MessageResponse)
async def verify_razorpay(
    request: RazorpayVerifyRequest,
    user_id: str = Depends(get_current_user_id)
):
    order_info = await fetch_razorpay_order(request.razorpay_order_id)
    await get_own_appointment(order_info.get("receipt", ""), user_id)
    await verify_razorpay_payment(order_info)
    return {"success": True, "message": "Payment Successful"}

@router.post("/payment-stripe", response_model=StripeSessionResponse)
async def pay_with_stripe(
    request: AppointmentIdRequest,
    origin: Optional[str] = Header(None),
    user_id: str = Depends(get_current_user_id)
):
    """
    Start a Stripe Checkout payment; returns the hosted checkout URL
    """
    await get_own_appointment(request.appointmentId, user_id)
    session = await create_stripe_session(request.appointmentId, origin)
    return {"success": True, "session_url": session.url, "session_id": session.id}

@router.post("/verify-stripe", response_model=MessageResponse)
async def verify_stripe(
    request: StripeVerifyRequest,
    user_id: str = Depends(get_current_user_id)
):
    await get_own_appointment(request.appointmentId, user_id)
    await verify_stripe_payment(request.appointmentId, request.success)
    return {"success": True, "message": "Payment Successful"}
