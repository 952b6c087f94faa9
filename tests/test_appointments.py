"""Appointment API tests: public booking, admin listing and cancellation."""

from datetime import datetime, timedelta, timezone

import pytest

from dentalbook.core.constants import ServiceType
from dentalbook.models.appointment import Appointment
from dentalbook.services.appointment_service import AppointmentService
from dentalbook.services.clinic_service import ClinicService
from dentalbook.utils.errors import ClinicClosedError

# ============================================================================
# FIXTURES
# ============================================================================


def _utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _payload(**overrides):
    data = {
        "patient_name": "Grace Hopper",
        "contact_info": "grace@example.com",
        "date": (_utcnow() + timedelta(days=3)).replace(microsecond=0).isoformat(),
        "service_type": "Hygiene",
        "notes": "First visit",
    }
    data.update(overrides)
    return data


@pytest.fixture
def seeded(db_session):
    """Three appointments: one past, two upcoming."""
    now = _utcnow().replace(microsecond=0)
    rows = [
        Appointment(
            patient_name="Alice Smith",
            contact_info="555-0100",
            date=now - timedelta(days=10),
            service_type=ServiceType.HYGIENE.value,
        ),
        Appointment(
            patient_name="Bob Jones",
            contact_info="bob@example.com",
            date=now + timedelta(days=2),
            service_type=ServiceType.EXTRACTION.value,
        ),
        Appointment(
            patient_name="alice smith",
            contact_info="555-0199",
            date=now + timedelta(days=5),
            service_type=ServiceType.HYGIENE.value,
            notes="Follow-up",
        ),
    ]
    db_session.add_all(rows)
    db_session.commit()
    for row in rows:
        db_session.refresh(row)
    return rows


# ============================================================================
# BOOKING
# ============================================================================

@pytest.mark.asyncio
async def test_anonymous_booking_is_accepted(async_client, admin_headers):
    r = await async_client.post("/appointments", json=_payload())
    assert r.status_code == 201
    body = r.json()
    assert body["status"] == "booked"
    assert isinstance(body["appointment_id"], int)

    listed = await async_client.get("/appointments", headers=admin_headers)
    assert listed.status_code == 200
    items = listed.json()["items"]
    assert [i["id"] for i in items] == [body["appointment_id"]]
    assert items[0]["patient_name"] == "Grace Hopper"
    assert items[0]["service_type"] == "Hygiene"
    assert items[0]["service_label"] == "Hygiene"
    assert items[0]["notes"] == "First visit"


@pytest.mark.asyncio
async def test_booking_ids_are_distinct(async_client):
    first = await async_client.post("/appointments", json=_payload())
    second = await async_client.post("/appointments", json=_payload(patient_name="Second Patient"))
    assert first.json()["appointment_id"] != second.json()["appointment_id"]


@pytest.mark.asyncio
async def test_booking_trims_whitespace(async_client, admin_headers):
    r = await async_client.post("/appointments", json=_payload(patient_name="  Grace Hopper  "))
    assert r.status_code == 201

    items = (await async_client.get("/appointments", headers=admin_headers)).json()["items"]
    assert items[0]["patient_name"] == "Grace Hopper"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"patient_name": "   "},
        {"contact_info": ""},
        {"service_type": "Haircut"},
        {"date": "not-a-date"},
    ],
)
async def test_invalid_booking_is_rejected(async_client, overrides):
    r = await async_client.post("/appointments", json=_payload(**overrides))
    assert r.status_code == 422
    assert r.json()["kind"] == "permanent"
    assert isinstance(r.json()["detail"], list)


@pytest.mark.asyncio
async def test_routing_errors_carry_kind(async_client):
    r = await async_client.get("/no-such-route")
    assert r.status_code == 404
    assert r.json()["kind"] == "permanent"

    r = await async_client.patch("/appointments", json=_payload())
    assert r.status_code == 405
    assert r.json()["kind"] == "permanent"


@pytest.mark.asyncio
async def test_booking_while_closed_is_refused(async_client, admin_headers):
    r = await async_client.put("/clinic/open", json={"is_open": False}, headers=admin_headers)
    assert r.status_code == 200

    r = await async_client.post("/appointments", json=_payload())
    assert r.status_code == 409
    assert r.json()["kind"] == "permanent"
    assert "closed" in r.json()["detail"].lower()

    listed = await async_client.get("/appointments", headers=admin_headers)
    assert listed.json()["total"] == 0


@pytest.mark.asyncio
async def test_service_refuses_booking_while_closed(db_session):
    await ClinicService.set_open(db_session, False)

    with pytest.raises(ClinicClosedError):
        AppointmentService.book_appointment(
            db_session,
            patient_name="Closed Day",
            contact_info="555-0101",
            date=_utcnow() + timedelta(days=1),
            service_type=ServiceType.HYGIENE,
        )


# ============================================================================
# ADMIN LISTING
# ============================================================================

@pytest.mark.asyncio
async def test_listing_requires_authentication(async_client):
    r = await async_client.get("/appointments")
    assert r.status_code == 401
    assert r.json()["kind"] == "unauthorized"


@pytest.mark.asyncio
async def test_listing_requires_admin_role(async_client, user_headers):
    r = await async_client.get("/appointments", headers=user_headers)
    assert r.status_code == 403
    assert r.json()["detail"] == "Admin access required"


@pytest.mark.asyncio
async def test_garbage_token_is_rejected_early(async_client):
    r = await async_client.get("/appointments", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401
    assert r.json() == {"detail": "Invalid token", "kind": "unauthorized"}


@pytest.mark.asyncio
async def test_list_filters(async_client, admin_headers, seeded):
    alice_past, bob, alice_next = seeded

    r = await async_client.get("/appointments", params={"name": "ALICE"}, headers=admin_headers)
    assert {i["id"] for i in r.json()["items"]} == {alice_past.id, alice_next.id}

    r = await async_client.get("/appointments", params={"service_type": "Extraction"}, headers=admin_headers)
    assert r.json()["items"][0]["service_label"] == "Extraction"
    assert [i["id"] for i in r.json()["items"]] == [bob.id]

    day = bob.date.date().isoformat()
    r = await async_client.get(
        "/appointments", params={"start_date": day, "end_date": day}, headers=admin_headers
    )
    assert [i["id"] for i in r.json()["items"]] == [bob.id]

    r = await async_client.get("/appointments", params={"order": "asc"}, headers=admin_headers)
    assert [i["id"] for i in r.json()["items"]] == [alice_past.id, bob.id, alice_next.id]

    r = await async_client.get("/appointments", params={"limit": 1, "skip": 1}, headers=admin_headers)
    assert [i["id"] for i in r.json()["items"]] == [bob.id]


@pytest.mark.asyncio
async def test_inverted_date_range_is_rejected(async_client, admin_headers):
    r = await async_client.get(
        "/appointments",
        params={"start_date": "2030-01-10", "end_date": "2030-01-01"},
        headers=admin_headers,
    )
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_list_by_service(async_client, admin_headers, seeded):
    alice_past, _, alice_next = seeded

    r = await async_client.get("/appointments/by-service/Hygiene", headers=admin_headers)
    assert r.status_code == 200
    assert [i["id"] for i in r.json()["items"]] == [alice_past.id, alice_next.id]

    r = await async_client.get("/appointments/by-service/BotoxConsultForCosmetic", headers=admin_headers)
    assert r.json() == {"items": [], "total": 0}


@pytest.mark.asyncio
async def test_list_by_patient_matches_whole_name(async_client, admin_headers, seeded):
    alice_past, _, alice_next = seeded

    r = await async_client.get("/appointments/by-patient", params={"name": "Alice Smith"}, headers=admin_headers)
    assert [i["id"] for i in r.json()["items"]] == [alice_past.id, alice_next.id]

    r = await async_client.get("/appointments/by-patient", params={"name": "Alice"}, headers=admin_headers)
    assert r.json()["total"] == 0


@pytest.mark.asyncio
async def test_upcoming_and_past(async_client, admin_headers, seeded):
    alice_past, bob, alice_next = seeded

    r = await async_client.get("/appointments/upcoming", headers=admin_headers)
    assert [i["id"] for i in r.json()["items"]] == [bob.id, alice_next.id]

    r = await async_client.get("/appointments/past", headers=admin_headers)
    assert [i["id"] for i in r.json()["items"]] == [alice_past.id]


# ============================================================================
# CANCELLATION
# ============================================================================

@pytest.mark.asyncio
async def test_cancel_removes_appointment(async_client, admin_headers, seeded):
    _, bob, _ = seeded

    r = await async_client.delete(f"/appointments/{bob.id}", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["data"]["status"] == "cancelled"

    r = await async_client.get("/appointments", headers=admin_headers)
    assert bob.id not in {i["id"] for i in r.json()["items"]}

    r = await async_client.delete(f"/appointments/{bob.id}", headers=admin_headers)
    assert r.status_code == 404
    assert r.json()["kind"] == "permanent"


@pytest.mark.asyncio
async def test_cancel_requires_admin(async_client, user_headers, seeded):
    r = await async_client.delete(f"/appointments/{seeded[0].id}", headers=user_headers)
    assert r.status_code == 403


# ============================================================================
# RATE LIMITING
# ============================================================================

@pytest.fixture
def strict_rate_limit(monkeypatch):
    from dentalbook.core.config import settings
    from dentalbook.dependencies.rate_limit import reset_rate_limits

    reset_rate_limits()
    monkeypatch.setattr(settings, "RATE_LIMIT_ENABLED", True)
    monkeypatch.setattr(settings, "RATE_LIMIT_REQUESTS", 2)
    yield
    reset_rate_limits()


@pytest.mark.asyncio
async def test_booking_is_rate_limited_per_client(async_client, strict_rate_limit):
    for _ in range(2):
        assert (await async_client.post("/appointments", json=_payload())).status_code == 201

    r = await async_client.post("/appointments", json=_payload())
    assert r.status_code == 429
    assert r.json()["kind"] == "permanent"

    r = await async_client.post(
        "/appointments", json=_payload(), headers={"X-Forwarded-For": "203.0.113.9"}
    )
    assert r.status_code == 201


@pytest.mark.asyncio
async def test_idle_client_buckets_are_swept(async_client, strict_rate_limit):
    from dentalbook.dependencies import rate_limit as rate_limit_module

    stale = rate_limit_module._buckets["198.51.100.7:/appointments"]
    stale.append(1.0)
    rate_limit_module._buckets["198.51.100.8:/appointments"]

    assert (await async_client.post("/appointments", json=_payload())).status_code == 201

    assert "198.51.100.7:/appointments" not in rate_limit_module._buckets
    assert "198.51.100.8:/appointments" not in rate_limit_module._buckets
    assert len(rate_limit_module._buckets) == 1
