from typing import Dict, Any, Optional
from app.db.mongodb import db
from app.schemas.user import UserRegister, UserProfileUpdate
from app.core.auth import get_password_hash, is_strong_password, verify_password
from app.core.config import settings
from app.core.errors import SalonError
from bson import ObjectId
from bson.errors import InvalidId
import logging

logger = logging.getLogger(__name__)

async def create_user(user_in: UserRegister) -> Dict[str, Any]:
    """
    Create a new customer account with a hashed password
    """
    if not is_strong_password(user_in.password):
        raise SalonError("Please enter a strong password")

    if await get_user_by_email(user_in.email):
        raise SalonError("User already exists")

    user_data = user_in.dict()
    user_data["password"] = get_password_hash(user_data["password"])
    user_data["image"] = settings.DEFAULT_USER_IMAGE
    user_data["address"] = {"line1": "", "line2": ""}
    user_data["gender"] = "Not Selected"
    user_data["dob"] = "Not Selected"
    user_data["phone"] = "0000000000"

    result = await db.db.users.insert_one(user_data)
    logger.info(f"Registered user {result.inserted_id}")

    return await db.db.users.find_one({"_id": result.inserted_id})

async def get_user_by_email(email: str) -> Optional[Dict[str, Any]]:
    """
    Get a user by email
    """
    return await db.db.users.find_one({"email": email})

async def get_user_by_id(user_id: str) -> Optional[Dict[str, Any]]:
    """
    Get a user by ID
    """
    try:
        return await db.db.users.find_one({"_id": ObjectId(user_id)})
    except InvalidId:
        return None

async def authenticate_user(email: str, password: str) -> Dict[str, Any]:
    """
    Check customer credentials and return the user document
    """
    user = await get_user_by_email(email)
    if not user:
        raise SalonError("User does not exist")

    if not verify_password(password, user["password"]):
        raise SalonError("Invalid credentials")

    return user

async def update_user_profile(
    user_id: str, profile: UserProfileUpdate, image_url: Optional[str] = None
) -> Optional[Dict[str, Any]]:
    """
    Update profile details and, when given, the profile image
    """
    user = await get_user_by_id(user_id)
    if not user:
        return None

    update_data = profile.dict(exclude_none=True)
    if image_url:
        update_data["image"] = image_url

    await db.db.users.update_one(
        {"_id": ObjectId(user_id)},
        {"$set": update_data}
    )

    return await get_user_by_id(user_id)

async def count_users() -> int:
    return await db.db.users.count_documents({})
