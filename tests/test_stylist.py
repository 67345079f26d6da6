import pytest

from app.db.mongodb import db
from conftest import book, test_stylist


async def first_appointment_id():
    appointment = await db.db.appointments.find_one({})
    return str(appointment["_id"])


@pytest.mark.asyncio
async def test_stylist_login_failure(client, stylist):
    response = await client.post("/api/v1/stylist/login", json={
        "email": test_stylist["email"], "password": "WrongPassword123"
    })
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid credentials"


@pytest.mark.asyncio
async def test_profile_and_update(client, stylist_token):
    headers = {"stoken": stylist_token}
    response = await client.get("/api/v1/stylist/profile", headers=headers)
    profile = response.json()["profileData"]
    assert profile["email"] == test_stylist["email"]
    assert profile["fees"] == 2500
    assert "password" not in profile

    response = await client.post(
        "/api/v1/stylist/update-profile",
        json={"fees": 3000, "available": False, "address": {"line1": "5 Lake Drive", "line2": ""}},
        headers=headers,
    )
    assert response.json() == {"success": True, "message": "Profile Updated"}

    response = await client.get("/api/v1/stylist/profile", headers=headers)
    profile = response.json()["profileData"]
    assert profile["fees"] == 3000
    assert profile["available"] is False
    assert profile["address"]["line1"] == "5 Lake Drive"
    assert profile["name"] == test_stylist["name"]


@pytest.mark.asyncio
async def test_change_own_availability(client, stylist_token, stylist):
    response = await client.post("/api/v1/stylist/change-availability", headers={"stoken": stylist_token})
    assert response.json()["success"] is True
    stored = await db.db.stylists.find_one({"_id": stylist["_id"]})
    assert stored["available"] is False


@pytest.mark.asyncio
async def test_complete_and_dashboard(client, user_token, stylist_token, stylist):
    headers = {"stoken": stylist_token}
    stylist_id = str(stylist["_id"])
    await book(client, user_token, stylist_id, slot_time="10:00 AM")
    await book(client, user_token, stylist_id, slot_time="10:30 AM")

    response = await client.get("/api/v1/stylist/appointments", headers=headers)
    appointments = response.json()["appointments"]
    assert len(appointments) == 2

    response = await client.post(
        "/api/v1/stylist/complete-appointment",
        json={"appointmentId": appointments[0]["_id"]},
        headers=headers,
    )
    assert response.json() == {"success": True, "message": "Appointment Completed"}

    response = await client.get("/api/v1/stylist/dashboard", headers=headers)
    dash_data = response.json()["dashData"]
    assert dash_data["earnings"] == 2500
    assert dash_data["appointments"] == 2
    assert dash_data["customers"] == 1
    assert len(dash_data["latestAppointments"]) == 2
    assert "stylists" not in dash_data


@pytest.mark.asyncio
async def test_cancel_frees_slot_and_blocks_completion(client, user_token, stylist_token, stylist):
    headers = {"stoken": stylist_token}
    await book(client, user_token, str(stylist["_id"]))
    appointment_id = await first_appointment_id()

    response = await client.post(
        "/api/v1/stylist/cancel-appointment", json={"appointmentId": appointment_id}, headers=headers
    )
    assert response.json() == {"success": True, "message": "Appointment Cancelled"}

    stored = await db.db.stylists.find_one({"_id": stylist["_id"]})
    assert stored["slots_booked"]["20_10_2026"] == []

    response = await client.post(
        "/api/v1/stylist/complete-appointment", json={"appointmentId": appointment_id}, headers=headers
    )
    assert response.json() == {"success": False, "message": "Action Failed"}


@pytest.mark.asyncio
async def test_cannot_touch_other_stylists_appointments(client, user_token, stylist_token, stylist):
    await book(client, user_token, str(stylist["_id"]))
    appointment_id = await first_appointment_id()
    await db.db.appointments.update_one({}, {"$set": {"stylistId": "someone-else"}})

    for action in ("cancel-appointment", "complete-appointment"):
        response = await client.post(
            f"/api/v1/stylist/{action}",
            json={"appointmentId": appointment_id},
            headers={"stoken": stylist_token},
        )
        assert response.json() == {"success": False, "message": "Action Failed"}
