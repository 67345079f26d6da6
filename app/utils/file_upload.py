import logging
import os
import uuid

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import UploadFile, status
from fastapi.concurrency import run_in_threadpool

from app.core.config import settings
from app.core.errors import SalonError

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = [
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/webp",
    "image/gif",
]

def get_storage_client():
    """Create an S3 client for the configured bucket endpoint."""
    return boto3.client(
        "s3",
        endpoint_url=settings.STORAGE_ENDPOINT_URL or None,
        aws_access_key_id=settings.STORAGE_ACCESS_KEY_ID or None,
        aws_secret_access_key=settings.STORAGE_SECRET_ACCESS_KEY or None,
        config=Config(signature_version="s3v4"),
    )

def build_public_url(key: str) -> str:
    base = settings.STORAGE_PUBLIC_URL.rstrip("/")
    if not base:
        base = f"https://{settings.STORAGE_BUCKET}.s3.amazonaws.com"
    return f"{base}/{key}"

async def upload_image(file: UploadFile, folder: str = "images") -> str:
    """
    Upload an image to object storage and return its public URL.

    Nothing is rolled back if the caller's later database write fails.
    """
    if file.content_type not in ALLOWED_IMAGE_TYPES:
        raise SalonError("Only image files are allowed")

    file_extension = os.path.splitext(file.filename)[1].lower() if file.filename else ""
    key = f"{folder}/{uuid.uuid4()}{file_extension}"

    client = get_storage_client()
    try:
        await run_in_threadpool(
            client.upload_fileobj,
            file.file,
            settings.STORAGE_BUCKET,
            key,
            ExtraArgs={"ContentType": file.content_type},
        )
    except (BotoCoreError, ClientError) as e:
        logger.error(f"Image upload to {key} failed: {e}")
        raise SalonError(f"Image upload failed: {e}", status.HTTP_502_BAD_GATEWAY)

    logger.info(f"Uploaded image {key}")
    return build_public_url(key)
