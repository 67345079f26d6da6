from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
from datetime import datetime

class BookAppointmentRequest(BaseModel):
    stylistId: str = Field(..., alias="stylId")
    slotDate: str = Field(..., pattern=r"^\d{1,2}_\d{1,2}_\d{4}$")
    slotTime: str = Field(..., min_length=1)

    class Config:
        populate_by_name = True

class AppointmentIdRequest(BaseModel):
    appointmentId: str

class AppointmentResponse(BaseModel):
    id: str = Field(..., alias="_id")
    userId: str
    stylistId: str
    slotDate: str
    slotTime: str
    userData: Dict[str, Any]
    stylistData: Dict[str, Any]
    amount: float
    date: int
    cancelled: bool = False
    payment: bool = False
    isCompleted: bool = False

    class Config:
        populate_by_name = True

class AppointmentListResponse(BaseModel):
    success: bool = True
    appointments: List[AppointmentResponse]

class SlotResponse(BaseModel):
    slotDate: str
    slotTime: str
    datetime: datetime

class SlotsResponse(BaseModel):
    success: bool = True
    stylistId: str
    slots: List[List[SlotResponse]]

class DashboardData(BaseModel):
    appointments: int
    customers: int
    latestAppointments: List[AppointmentResponse]
    stylists: Optional[int] = None
    earnings: Optional[float] = None

class DashboardResponse(BaseModel):
    success: bool = True
    dashData: DashboardData
