from pydantic_settings import BaseSettings
from typing import List
import os
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    # App Settings
    APP_NAME: str = os.getenv("APP_NAME", "Sensaloon")
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:5173")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # MongoDB Settings
    MONGO_URI: str = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    DB_NAME: str = os.getenv("DB_NAME", "sensaloon_db")

    # JWT Auth
    SECRET_KEY: str = os.getenv("SECRET_KEY", "your_secret_key_here")
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))

    # Admin credentials (shared secret)
    ADMIN_EMAIL: str = os.getenv("ADMIN_EMAIL", "admin@sensaloon.com")
    ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "")

    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",  # customer app
        "http://localhost:5174",  # admin / stylist app
    ]

    # Payments
    CURRENCY: str = os.getenv("CURRENCY", "LKR")
    STRIPE_SECRET_KEY: str = os.getenv("STRIPE_SECRET_KEY", "")
    RAZORPAY_KEY_ID: str = os.getenv("RAZORPAY_KEY_ID", "")
    RAZORPAY_KEY_SECRET: str = os.getenv("RAZORPAY_KEY_SECRET", "")

    # Image storage (S3 compatible)
    STORAGE_ENDPOINT_URL: str = os.getenv("STORAGE_ENDPOINT_URL", "")
    STORAGE_ACCESS_KEY_ID: str = os.getenv("STORAGE_ACCESS_KEY_ID", "")
    STORAGE_SECRET_ACCESS_KEY: str = os.getenv("STORAGE_SECRET_ACCESS_KEY", "")
    STORAGE_BUCKET: str = os.getenv("STORAGE_BUCKET", "sensaloon-images")
    STORAGE_PUBLIC_URL: str = os.getenv("STORAGE_PUBLIC_URL", "")
    DEFAULT_USER_IMAGE: str = os.getenv("DEFAULT_USER_IMAGE", "")

    # Salon hours
    SALON_TIMEZONE: str = os.getenv("SALON_TIMEZONE", "Asia/Colombo")
    OPENING_HOUR: int = int(os.getenv("OPENING_HOUR", "10"))
    CLOSING_HOUR: int = int(os.getenv("CLOSING_HOUR", "21"))
    SLOT_MINUTES: int = int(os.getenv("SLOT_MINUTES", "30"))
    BOOKING_DAYS: int = int(os.getenv("BOOKING_DAYS", "7"))

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
