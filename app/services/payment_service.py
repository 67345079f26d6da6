from typing import Dict, Any, Optional, Union
from fastapi import status
from fastapi.concurrency import run_in_threadpool
from app.core.config import settings
from app.core.errors import SalonError, NotFoundError
from app.services.appointment_service import (
    get_appointment_by_id, mark_appointment_paid, update_appointment_fields
)
import logging
import razorpay
from razorpay.errors import BadRequestError, GatewayError, ServerError
import stripe

logger = logging.getLogger(__name__)

RAZORPAY_ERRORS = (
    BadRequestError,
    GatewayError,
    ServerError,
)

def get_razorpay_client() -> razorpay.Client:
    return razorpay.Client(auth=(settings.RAZORPAY_KEY_ID, settings.RAZORPAY_KEY_SECRET))

def to_minor_units(amount: float) -> int:
    """Gateways take amounts in the currency's smallest unit."""
    return int(round(float(amount) * 100))

async def get_payable_appointment(appointment_id: str) -> Dict[str, Any]:
    """
    Load an appointment that can still be paid for
    """
    appointment = await get_appointment_by_id(appointment_id)
    if not appointment or appointment.get("cancelled"):
        raise SalonError("Appointment Cancelled or not found")
    if appointment.get("payment"):
        raise SalonError("Appointment already paid")
    return appointment

async def create_razorpay_order(appointment_id: str) -> Dict[str, Any]:
    """
    Create a Razorpay order for the appointment fee; the receipt carries the
    appointment id so verification can find it again
    """
    appointment = await get_payable_appointment(appointment_id)

    options = {
        "amount": to_minor_units(appointment["amount"]),
        "currency": settings.CURRENCY,
        "receipt": appointment_id,
    }

    try:
        order = await run_in_threadpool(get_razorpay_client().order.create, data=options)
    except RAZORPAY_ERRORS as e:
        logger.error(f"Razorpay order for appointment {appointment_id} failed: {e}")
        raise SalonError(str(e), status.HTTP_502_BAD_GATEWAY)

    await update_appointment_fields(appointment_id, {"razorpayOrderId": order["id"]})
    return order

async def fetch_razorpay_order(order_id: str) -> Dict[str, Any]:
    try:
        return await run_in_threadpool(get_razorpay_client().order.fetch, order_id)
    except RAZORPAY_ERRORS as e:
        logger.error(f"Razorpay order {order_id} lookup failed: {e}")
        raise SalonError(str(e), status.HTTP_502_BAD_GATEWAY)

async def verify_razorpay_payment(order_info: Dict[str, Any]) -> str:
    """
    Confirm a fetched Razorpay order was paid and flag the appointment named
    in its receipt. Returns the appointment id.
    """
    order_id = order_info.get("id")
    if order_info.get("status") != "paid":
        logger.info(f"Razorpay order {order_id} not paid: {order_info.get('status')}")
        raise SalonError("Payment Failed")

    appointment_id = order_info["receipt"]
    if not await mark_appointment_paid(appointment_id):
        raise NotFoundError("Appointment not found")

    logger.info(f"Appointment {appointment_id} paid via Razorpay order {order_id}")
    return appointment_id

async def create_stripe_session(appointment_id: str, origin: Optional[str] = None) -> Any:
    """
    Create a Stripe Checkout session for the appointment fee.
    The customer is sent back to ``<origin>/verify`` either way.
    """
    appointment = await get_payable_appointment(appointment_id)
    base_url = (origin or settings.FRONTEND_URL).rstrip("/")

    line_items = [
        {
            "price_data": {
                "currency": settings.CURRENCY.lower(),
                "product_data": {"name": "Appointment Fees"},
                "unit_amount": to_minor_units(appointment["amount"]),
            },
            "quantity": 1,
        }
    ]

    try:
        session = await run_in_threadpool(
            stripe.checkout.Session.create,
            api_key=settings.STRIPE_SECRET_KEY,
            success_url=f"{base_url}/verify?success=true&appointmentId={appointment_id}",
            cancel_url=f"{base_url}/verify?success=false&appointmentId={appointment_id}",
            line_items=line_items,
            mode="payment",
            metadata={"appointmentId": appointment_id},
        )
    except stripe.StripeError as e:
        logger.error(f"Stripe session for appointment {appointment_id} failed: {e}")
        raise SalonError(str(e), status.HTTP_502_BAD_GATEWAY)

    await update_appointment_fields(appointment_id, {"stripeSessionId": session.id})
    return session

async def verify_stripe_payment(appointment_id: str, success: Union[bool, str]) -> None:
    """
    Confirm a Stripe payment after the customer returns from Checkout.

    The redirect flag alone is not trusted: the stored session must report
    ``payment_status == "paid"``.
    """
    if str(success).lower() != "true":
        raise SalonError("Payment Failed")

    appointment = await get_appointment_by_id(appointment_id)
    if not appointment:
        raise NotFoundError("Appointment not found")

    session_id = appointment.get("stripeSessionId")
    if not session_id:
        raise SalonError("Payment Failed")

    try:
        session = await run_in_threadpool(
            stripe.checkout.Session.retrieve, session_id, api_key=settings.STRIPE_SECRET_KEY
        )
    except stripe.StripeError as e:
        logger.error(f"Stripe session {session_id} lookup failed: {e}")
        raise SalonError(str(e), status.HTTP_502_BAD_GATEWAY)

    if session.payment_status != "paid":
        raise SalonError("Payment Failed")

    await mark_appointment_paid(appointment_id)
    logger.info(f"Appointment {appointment_id} paid via Stripe session {session_id}")
