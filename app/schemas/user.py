from pydantic import BaseModel, EmailStr, Field
from typing import Optional

class Address(BaseModel):
    line1: str = ""
    line2: str = ""

class UserRegister(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str

class LoginRequest(BaseModel):
    email: str
    password: str

class TokenResponse(BaseModel):
    success: bool = True
    token: str

class UserProfile(BaseModel):
    id: str = Field(..., alias="_id")
    name: str
    email: str
    image: str = ""
    address: Address = Field(default_factory=Address)
    gender: str = "Not Selected"
    dob: str = "Not Selected"
    phone: str = "0000000000"

    class Config:
        populate_by_name = True

class UserProfileResponse(BaseModel):
    success: bool = True
    userData: UserProfile

class UserProfileUpdate(BaseModel):
    name: str
    phone: str
    dob: str
    gender: str
    address: Optional[Address] = None

class MessageResponse(BaseModel):
    success: bool = True
    message: str
