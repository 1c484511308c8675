"""Shift Routes — creation, windowed listing, assignment and comments over HTTP.

Invariants:
    - Only admins create shifts; members read them; outsiders get 403
    - from/to are RFC 3339 with an offset; the window is [from, to) on starts_at
    - Members assign to themselves; only admins assign to others
    - Comments: admins, superadmins and the current assignee only
"""

from uuid import uuid4

from tests.services.route_helpers import auth, create_shift, user_id

WINDOW = {"from": "2024-01-01T00:00:00Z", "to": "2024-01-08T00:00:00Z"}


async def test_admin_creates_shift(client, schedule, alice):
    shift = await create_shift(client, alice, schedule["id"])
    assert shift["schedule_id"] == schedule["id"]
    assert shift["period"] == "morning"
    assert shift["assigned_user_id"] is None


async def test_offset_times_are_stored_in_utc(client, schedule, alice):
    shift = await create_shift(
        client, alice, schedule["id"],
        starts_at="2024-01-01T10:00:00+02:00", ends_at="2024-01-01T14:00:00+02:00",
    )
    res = await client.get(f"/api/shifts/{shift['id']}", headers=auth(alice))
    assert res.json()["starts_at"].startswith("2024-01-01T08:00:00")


async def test_member_cannot_create_shift(client, schedule, bob):
    res = await client.post(
        f"/api/schedules/{schedule['id']}/shifts",
        json={
            "starts_at": "2024-01-01T08:00:00Z",
            "ends_at": "2024-01-01T12:00:00Z",
            "period": "morning",
        },
        headers=auth(bob),
    )
    assert res.status_code == 403


async def test_shift_must_end_after_start(client, schedule, alice):
    res = await client.post(
        f"/api/schedules/{schedule['id']}/shifts",
        json={
            "starts_at": "2024-01-01T12:00:00Z",
            "ends_at": "2024-01-01T12:00:00Z",
            "period": "afternoon",
        },
        headers=auth(alice),
    )
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "ends_at must be after starts_at"


async def test_naive_times_are_rejected(client, schedule, alice):
    res = await client.post(
        f"/api/schedules/{schedule['id']}/shifts",
        json={
            "starts_at": "2024-01-01T08:00:00",
            "ends_at": "2024-01-01T12:00:00",
            "period": "morning",
        },
        headers=auth(alice),
    )
    assert res.status_code == 400


async def test_list_shifts_in_window(client, schedule, alice, bob):
    late = await create_shift(
        client, alice, schedule["id"],
        starts_at="2024-01-03T18:00:00Z", ends_at="2024-01-03T22:00:00Z", period="night",
    )
    early = await create_shift(client, alice, schedule["id"])
    await create_shift(
        client, alice, schedule["id"],
        starts_at="2024-01-08T00:00:00Z", ends_at="2024-01-08T04:00:00Z",
    )

    res = await client.get(
        f"/api/schedules/{schedule['id']}/shifts", params=WINDOW, headers=auth(bob),
    )
    assert res.status_code == 200
    assert [s["id"] for s in res.json()] == [early["id"], late["id"]]


async def test_list_shifts_requires_membership(client, schedule, carol):
    res = await client.get(
        f"/api/schedules/{schedule['id']}/shifts", params=WINDOW, headers=auth(carol),
    )
    assert res.status_code == 403


async def test_list_shifts_invalid_bounds(client, schedule, alice):
    res = await client.get(
        f"/api/schedules/{schedule['id']}/shifts",
        params={"from": "yesterday", "to": WINDOW["to"]},
        headers=auth(alice),
    )
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "invalid from (RFC3339 required)"

    res = await client.get(
        f"/api/schedules/{schedule['id']}/shifts",
        params={"from": WINDOW["from"], "to": "2024-01-08"},
        headers=auth(alice),
    )
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "invalid to (RFC3339 required)"


async def test_list_shifts_missing_bounds(client, schedule, alice):
    res = await client.get(
        f"/api/schedules/{schedule['id']}/shifts", headers=auth(alice),
    )
    assert res.status_code == 400


async def test_get_shift_access(client, schedule, alice, bob, carol):
    shift = await create_shift(client, alice, schedule["id"])
    assert (await client.get(f"/api/shifts/{shift['id']}", headers=auth(bob))).status_code == 200
    assert (await client.get(f"/api/shifts/{shift['id']}", headers=auth(carol))).status_code == 403
    assert (await client.get(f"/api/shifts/{uuid4()}", headers=auth(bob))).status_code == 404


# ─── Assignment ──────────────────────────────────────────────────

async def test_member_takes_shift_with_empty_body(client, schedule, alice, bob):
    shift = await create_shift(client, alice, schedule["id"])
    res = await client.post(f"/api/shifts/{shift['id']}/assign", headers=auth(bob))
    assert res.status_code == 204

    fetched = (await client.get(f"/api/shifts/{shift['id']}", headers=auth(bob))).json()
    assert fetched["assigned_user_id"] == await user_id(client, bob)


async def test_member_takes_shift_with_empty_object(client, schedule, alice, bob):
    shift = await create_shift(client, alice, schedule["id"])
    res = await client.post(
        f"/api/shifts/{shift['id']}/assign", json={}, headers=auth(bob),
    )
    assert res.status_code == 204


async def test_member_cannot_assign_someone_else(client, schedule, alice, bob):
    shift = await create_shift(client, alice, schedule["id"])
    alice_id = await user_id(client, alice)
    res = await client.post(
        f"/api/shifts/{shift['id']}/assign",
        json={"assigned_user_id": alice_id},
        headers=auth(bob),
    )
    assert res.status_code == 403
    assert res.json()["error"]["message"] == "only admins can assign shifts to other users"


async def test_admin_assigns_member(client, schedule, alice, bob):
    shift = await create_shift(client, alice, schedule["id"])
    bob_id = await user_id(client, bob)
    res = await client.post(
        f"/api/shifts/{shift['id']}/assign",
        json={"assigned_user_id": bob_id},
        headers=auth(alice),
    )
    assert res.status_code == 204
    fetched = (await client.get(f"/api/shifts/{shift['id']}", headers=auth(alice))).json()
    assert fetched["assigned_user_id"] == bob_id


async def test_outsider_cannot_take_shift(client, schedule, alice, carol):
    shift = await create_shift(client, alice, schedule["id"])
    res = await client.post(f"/api/shifts/{shift['id']}/assign", headers=auth(carol))
    assert res.status_code == 403


async def test_assign_unknown_shift(client, schedule, bob):
    res = await client.post(f"/api/shifts/{uuid4()}/assign", headers=auth(bob))
    assert res.status_code == 404


# ─── Comments ────────────────────────────────────────────────────

async def _comment(client, token, shift_id, body):
    return await client.post(
        f"/api/shifts/{shift_id}/comments", json={"body": body}, headers=auth(token),
    )


async def test_assignee_and_admin_comment_in_order(client, schedule, alice, bob):
    shift = await create_shift(client, alice, schedule["id"])
    await client.post(f"/api/shifts/{shift['id']}/assign", headers=auth(bob))

    first = await _comment(client, bob, shift["id"], "  groceries done  ")
    assert first.status_code == 201
    assert first.json()["body"] == "groceries done"
    second = await _comment(client, alice, shift["id"], "thanks!")
    assert second.status_code == 201

    res = await client.get(f"/api/shifts/{shift['id']}/comments", headers=auth(bob))
    assert [c["body"] for c in res.json()] == ["groceries done", "thanks!"]


async def test_non_assignee_member_cannot_comment(client, schedule, alice, bob):
    shift = await create_shift(client, alice, schedule["id"])
    res = await _comment(client, bob, shift["id"], "can I?")
    assert res.status_code == 403


async def test_blank_comment_rejected(client, schedule, alice):
    shift = await create_shift(client, alice, schedule["id"])
    res = await _comment(client, alice, shift["id"], "   ")
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "comment body is required"


async def test_outsider_cannot_read_comments(client, schedule, alice, carol):
    shift = await create_shift(client, alice, schedule["id"])
    res = await client.get(f"/api/shifts/{shift['id']}/comments", headers=auth(carol))
    assert res.status_code == 403
