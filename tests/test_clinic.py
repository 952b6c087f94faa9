"""Clinic configuration tests: open flag, opening hours and cached status."""

import json

import pytest

from dentalbook.services.clinic_service import STATUS_CACHE_KEY


@pytest.mark.asyncio
async def test_clinic_is_open_by_default(async_client):
    r = await async_client.get("/clinic/open")
    assert r.status_code == 200
    assert r.json() is True


@pytest.mark.asyncio
async def test_toggle_open_flag(async_client, admin_headers):
    r = await async_client.put("/clinic/open", json={"is_open": False}, headers=admin_headers)
    assert r.json() is False
    assert (await async_client.get("/clinic/open")).json() is False

    r = await async_client.put("/clinic/open", json={"is_open": True}, headers=admin_headers)
    assert r.json() is True
    assert (await async_client.get("/clinic/open")).json() is True


@pytest.mark.asyncio
async def test_toggle_requires_admin(async_client, user_headers):
    r = await async_client.put("/clinic/open", json={"is_open": False})
    assert r.status_code == 401

    r = await async_client.put("/clinic/open", json={"is_open": False}, headers=user_headers)
    assert r.status_code == 403

    assert (await async_client.get("/clinic/open")).json() is True


# ============================================================================
# OPENING HOURS
# ============================================================================

@pytest.mark.asyncio
async def test_set_and_get_opening_hours(async_client, admin_headers):
    r = await async_client.put(
        "/clinic/hours/monday", json={"open_hour": 9, "close_hour": 17}, headers=admin_headers
    )
    assert r.status_code == 200
    assert r.json() == {"day": "Monday", "open_hour": 9, "close_hour": 17}

    r = await async_client.get("/clinic/hours/Monday")
    assert r.status_code == 200
    assert (r.json()["open_hour"], r.json()["close_hour"]) == (9, 17)

    r = await async_client.put(
        "/clinic/hours/Monday", json={"open_hour": 8, "close_hour": 12}, headers=admin_headers
    )
    assert r.json()["close_hour"] == 12
    assert (await async_client.get("/clinic/hours/MONDAY")).json()["open_hour"] == 8


@pytest.mark.asyncio
async def test_unconfigured_day_is_not_found(async_client):
    r = await async_client.get("/clinic/hours/Sunday")
    assert r.status_code == 404
    assert r.json()["kind"] == "permanent"


@pytest.mark.asyncio
async def test_unknown_day_is_bad_request(async_client, admin_headers):
    r = await async_client.get("/clinic/hours/Funday")
    assert r.status_code == 400

    r = await async_client.put(
        "/clinic/hours/Funday", json={"open_hour": 9, "close_hour": 17}, headers=admin_headers
    )
    assert r.status_code == 400


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "hours",
    [
        {"open_hour": 17, "close_hour": 9},
        {"open_hour": 9, "close_hour": 9},
        {"open_hour": -1, "close_hour": 9},
        {"open_hour": 9, "close_hour": 24},
    ],
)
async def test_invalid_hours_are_rejected(async_client, admin_headers, hours):
    r = await async_client.put("/clinic/hours/Tuesday", json=hours, headers=admin_headers)
    assert r.status_code == 422

    assert (await async_client.get("/clinic/hours/Tuesday")).status_code == 404


@pytest.mark.asyncio
async def test_clear_opening_hours(async_client, admin_headers):
    await async_client.put(
        "/clinic/hours/Friday", json={"open_hour": 10, "close_hour": 14}, headers=admin_headers
    )

    r = await async_client.delete("/clinic/hours/Friday", headers=admin_headers)
    assert r.status_code == 204
    assert (await async_client.get("/clinic/hours/Friday")).status_code == 404

    r = await async_client.delete("/clinic/hours/Friday", headers=admin_headers)
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_hours_writes_require_admin(async_client, user_headers):
    r = await async_client.put(
        "/clinic/hours/Monday", json={"open_hour": 9, "close_hour": 17}, headers=user_headers
    )
    assert r.status_code == 403

    r = await async_client.delete("/clinic/hours/Monday", headers=user_headers)
    assert r.status_code == 403


# ============================================================================
# STATUS SNAPSHOT
# ============================================================================

@pytest.mark.asyncio
async def test_status_lists_days_in_week_order(async_client, admin_headers):
    for day in ("Wednesday", "Monday"):
        await async_client.put(
            f"/clinic/hours/{day}", json={"open_hour": 9, "close_hour": 17}, headers=admin_headers
        )

    r = await async_client.get("/clinic/status")
    assert r.status_code == 200
    body = r.json()
    assert body["is_open"] is True
    assert list(body["opening_hours"]) == ["Monday", "Wednesday"]


@pytest.mark.asyncio
async def test_status_is_cached_and_invalidated_on_write(async_client, admin_headers, mock_redis):
    r = await async_client.get("/clinic/status")
    assert r.json()["is_open"] is True
    assert json.loads(mock_redis.store[STATUS_CACHE_KEY])["is_open"] is True

    await async_client.put("/clinic/open", json={"is_open": False}, headers=admin_headers)
    assert STATUS_CACHE_KEY not in mock_redis.store

    r = await async_client.get("/clinic/status")
    assert r.json()["is_open"] is False

    await async_client.put(
        "/clinic/hours/Saturday", json={"open_hour": 9, "close_hour": 13}, headers=admin_headers
    )
    assert STATUS_CACHE_KEY not in mock_redis.store

    r = await async_client.get("/clinic/status")
    assert r.json()["opening_hours"]["Saturday"] == {"open_hour": 9, "close_hour": 13}


@pytest.mark.asyncio
async def test_status_served_from_cache(async_client, mock_redis):
    mock_redis.store[STATUS_CACHE_KEY] = json.dumps(
        {"is_open": False, "opening_hours": {}, "updated_at": None}
    )

    r = await async_client.get("/clinic/status")
    assert r.json()["is_open"] is False
    assert (await async_client.get("/clinic/open")).json() is True
