from pydantic import BaseModel
from typing import Dict, Any, Optional, Union

class RazorpayVerifyRequest(BaseModel):
    razorpay_order_id: str

class StripeVerifyRequest(BaseModel):
    appointmentId: str
    success: Union[bool, str]

class RazorpayOrderResponse(BaseModel):
    success: bool = True
    order: Dict[str, Any]

class StripeSessionResponse(BaseModel):
    success: bool = True
    session_url: str
    session_id: Optional[str] = None
