from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List, Dict
from app.schemas.user import Address

class StylistCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str
    serviceType: str = Field(..., min_length=1)
    qualification: str = Field(..., min_length=1)
    experience: str = Field(..., min_length=1)
    about: str = Field(..., min_length=1)
    fees: float = Field(..., gt=0)
    address: Address

class StylistProfileUpdate(BaseModel):
    fees: Optional[float] = Field(None, gt=0)
    address: Optional[Address] = None
    available: Optional[bool] = None

class StylistIdRequest(BaseModel):
    stylistId: Optional[str] = None

class StylistPublic(BaseModel):
    """Stylist as shown to customers: no email, no password."""
    id: str = Field(..., alias="_id")
    name: str
    image: str = ""
    serviceType: str
    qualification: str
    experience: str
    about: str
    available: bool = True
    fees: float
    address: Address = Field(default_factory=Address)
    date: int
    slots_booked: Dict[str, List[str]] = {}

    class Config:
        populate_by_name = True

class StylistDetail(StylistPublic):
    email: str

class StylistListResponse(BaseModel):
    success: bool = True
    stylists: List[StylistPublic]

class StylistAdminListResponse(BaseModel):
    success: bool = True
    stylists: List[StylistDetail]

class StylistProfileResponse(BaseModel):
    success: bool = True
    profileData: StylistDetail
