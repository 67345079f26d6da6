import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from mongomock_motor import AsyncMongoMockClient

from main import app
from app.db.mongodb import db, create_indexes
from app.core.config import settings
from app.schemas.stylist import StylistCreate
from app.schemas.user import Address
from app.services.stylist_service import create_stylist

ADMIN_PASSWORD = "AdminPassword123"

test_user = {
    "name": "Test User",
    "email": "testuser@sensaloon.com",
    "password": "TestPassword123",
}

test_stylist = {
    "name": "Test Stylist",
    "email": "teststylist@sensaloon.com",
    "password": "StylistPassword123",
    "serviceType": "Hair Styling",
    "qualification": "Diploma in Hairdressing",
    "experience": "5 Years",
    "about": "Professional stylist with 5 years of experience",
    "fees": 2500,
    "address": {"line1": "12 Galle Road", "line2": "Colombo 03"},
}

@pytest_asyncio.fixture
async def mongo():
    """In-memory MongoDB standing in for the real connection."""
    db.client = AsyncMongoMockClient()
    db.db = db.client[settings.DB_NAME]
    await create_indexes()
    yield db.db
    db.client = None
    db.db = None

@pytest_asyncio.fixture
async def client(mongo, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_PASSWORD", ADMIN_PASSWORD)
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

@pytest_asyncio.fixture
async def stylist(mongo):
    data = dict(test_stylist)
    data["address"] = Address(**data["address"])
    return await create_stylist(StylistCreate(**data), "https://cdn.sensaloon.com/stylists/test.png")

@pytest_asyncio.fixture
async def user_token(client):
    response = await client.post("/api/v1/user/register", json=test_user)
    assert response.status_code == 200
    return response.json()["token"]

@pytest_asyncio.fixture
async def stylist_token(client, stylist):
    response = await client.post("/api/v1/stylist/login", json={
        "email": test_stylist["email"],
        "password": test_stylist["password"],
    })
    assert response.status_code == 200
    return response.json()["token"]

@pytest_asyncio.fixture
async def admin_token(client):
    response = await client.post("/api/v1/admin/login", json={
        "email": settings.ADMIN_EMAIL,
        "password": ADMIN_PASSWORD,
    })
    assert response.status_code == 200
    return response.json()["token"]

async def book(client, token, stylist_id, slot_date="20_10_2026", slot_time="10:00 AM"):
    return await client.post(
        "/api/v1/user/book-appointment",
        json={"stylId": stylist_id, "slotDate": slot_date, "slotTime": slot_time},
        headers={"token": token},
    )
