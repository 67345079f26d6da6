import json
import pytest

from app.core.config import settings
from app.db.mongodb import db
from app.utils import file_upload
from conftest import book, test_stylist


class FakeStorage:
    def __init__(self):
        self.uploads = []

    def upload_fileobj(self, fileobj, bucket, key, ExtraArgs=None):
        self.uploads.append((bucket, key, ExtraArgs, fileobj.read()))


@pytest.fixture
def storage(monkeypatch):
    fake = FakeStorage()
    monkeypatch.setattr(file_upload, "get_storage_client", lambda: fake)
    return fake


def stylist_form(**overrides):
    form = dict(test_stylist, fees="2500", address=json.dumps(test_stylist["address"]))
    form.update(overrides)
    return form


@pytest.mark.asyncio
async def test_admin_login(client):
    response = await client.post("/api/v1/admin/login", json={
        "email": settings.ADMIN_EMAIL, "password": "wrong"
    })
    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Invalid credentials"}


@pytest.mark.asyncio
async def test_admin_routes_need_admin_token(client, user_token):
    response = await client.get("/api/v1/admin/all-stylists")
    assert response.status_code == 401

    response = await client.get("/api/v1/admin/all-stylists", headers={"atoken": user_token})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_add_stylist(client, admin_token, storage):
    response = await client.post(
        "/api/v1/admin/add-stylist",
        data=stylist_form(),
        files={"image": ("portrait.png", b"\x89PNG fake", "image/png")},
        headers={"atoken": admin_token},
    )
    assert response.json() == {"success": True, "message": "Stylist Added"}

    bucket, key, extra, body = storage.uploads[0]
    assert bucket == settings.STORAGE_BUCKET
    assert key.startswith("stylists/") and key.endswith(".png")
    assert extra == {"ContentType": "image/png"}
    assert body == b"\x89PNG fake"

    stored = await db.db.stylists.find_one({"email": test_stylist["email"]})
    assert stored["image"].endswith(key)
    assert stored["available"] is True
    assert stored["slots_booked"] == {}
    assert stored["fees"] == 2500
    assert stored["password"] != test_stylist["password"]

    response = await client.get("/api/v1/admin/all-stylists", headers={"atoken": admin_token})
    stylists = response.json()["stylists"]
    assert len(stylists) == 1
    assert stylists[0]["email"] == test_stylist["email"]
    assert "password" not in stylists[0]

    response = await client.get("/api/v1/stylist/list")
    public = response.json()["stylists"]
    assert public[0]["name"] == test_stylist["name"]
    assert "email" not in public[0]
    assert "password" not in public[0]


@pytest.mark.asyncio
async def test_add_stylist_validation(client, admin_token, storage):
    headers = {"atoken": admin_token}
    image = {"image": ("portrait.png", b"fake", "image/png")}

    response = await client.post(
        "/api/v1/admin/add-stylist", data=stylist_form(about=""), files=image, headers=headers
    )
    assert response.json()["message"] == "Missing Details"

    response = await client.post("/api/v1/admin/add-stylist", data=stylist_form(), headers=headers)
    assert response.json()["message"] == "Missing Details"

    response = await client.post(
        "/api/v1/admin/add-stylist", data=stylist_form(email="broken"), files=image, headers=headers
    )
    assert response.json()["message"] == "Please enter a valid email"

    response = await client.post(
        "/api/v1/admin/add-stylist", data=stylist_form(password="short"), files=image, headers=headers
    )
    assert response.json()["message"] == "Please enter a strong password"

    response = await client.post(
        "/api/v1/admin/add-stylist",
        data=stylist_form(),
        files={"image": ("notes.txt", b"text", "text/plain")},
        headers=headers,
    )
    assert response.json()["message"] == "Only image files are allowed"

    assert await db.db.stylists.count_documents({}) == 0


@pytest.mark.asyncio
async def test_change_availability_and_delete(client, admin_token, stylist):
    headers = {"atoken": admin_token}
    stylist_id = str(stylist["_id"])

    response = await client.post(
        "/api/v1/admin/change-availability", json={"stylistId": stylist_id}, headers=headers
    )
    assert response.json() == {"success": True, "message": "Availability Changed"}
    stored = await db.db.stylists.find_one({"_id": stylist["_id"]})
    assert stored["available"] is False

    response = await client.post("/api/v1/admin/delete-stylist", json={}, headers=headers)
    assert response.json()["message"] == "Stylist ID is required"

    response = await client.post(
        "/api/v1/admin/delete-stylist", json={"stylistId": stylist_id}, headers=headers
    )
    assert response.json() == {"success": True, "message": "Stylist deleted successfully"}
    assert await db.db.stylists.count_documents({}) == 0

    response = await client.post(
        "/api/v1/admin/delete-stylist", json={"stylistId": stylist_id}, headers=headers
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_admin_appointments_cancel_and_dashboard(client, admin_token, user_token, stylist):
    headers = {"atoken": admin_token}
    stylist_id = str(stylist["_id"])
    await book(client, user_token, stylist_id, slot_time="10:00 AM")
    await book(client, user_token, stylist_id, slot_time="10:30 AM")

    response = await client.get("/api/v1/admin/appointments", headers=headers)
    appointments = response.json()["appointments"]
    assert len(appointments) == 2

    response = await client.post(
        "/api/v1/admin/cancel-appointment",
        json={"appointmentId": appointments[0]["_id"]},
        headers=headers,
    )
    assert response.json()["success"] is True

    stored = await db.db.stylists.find_one({"_id": stylist["_id"]})
    assert len(stored["slots_booked"]["20_10_2026"]) == 1

    response = await client.get("/api/v1/admin/dashboard", headers=headers)
    dash_data = response.json()["dashData"]
    assert dash_data["stylists"] == 1
    assert dash_data["appointments"] == 2
    assert dash_data["customers"] == 1
    assert len(dash_data["latestAppointments"]) == 2
    assert "earnings" not in dash_data


@pytest.mark.asyncio
async def test_dashboard_lists_latest_five(client, admin_token, user_token, stylist):
    stylist_id = str(stylist["_id"])
    for hour in ("10", "11"):
        for minute in ("00", "30"):
            await book(client, user_token, stylist_id, slot_time=f"{hour}:{minute} AM")
    await book(client, user_token, stylist_id, slot_time="12:00 PM")
    await book(client, user_token, stylist_id, slot_time="12:30 PM")

    response = await client.get("/api/v1/admin/dashboard", headers={"atoken": admin_token})
    dash_data = response.json()["dashData"]
    assert dash_data["appointments"] == 6
    assert len(dash_data["latestAppointments"]) == 5
