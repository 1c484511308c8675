"""Schedule Routes — schedules, membership and role management over HTTP.

Invariants:
    - Creator becomes the schedule admin; any authenticated user may create
    - Non-members get 403 on schedule-scoped reads; superadmins see everything
    - Only admins (or superadmins) add members or change roles
"""

from uuid import uuid4

from tests.services.route_helpers import (
    add_member, auth, create_schedule, register, user_id,
)


async def test_create_schedule_makes_creator_admin(client, alice):
    created = await create_schedule(client, alice)
    assert created["name"] == "Grandma care"
    assert created["subject_type"] == "person"

    res = await client.get("/api/schedules", headers=auth(alice))
    assert res.status_code == 200
    assert res.json() == [{"schedule": created, "role": "admin"}]


async def test_create_schedule_trims_and_requires_name(client, alice):
    res = await client.post(
        "/api/schedules",
        json={"name": "   ", "subject_type": "pet", "subject_name": "Rex"},
        headers=auth(alice),
    )
    assert res.status_code == 400

    created = await create_schedule(client, alice, name="  Rex walks  ")
    assert created["name"] == "Rex walks"


async def test_list_schedules_only_mine_newest_first(client, alice, carol):
    first = await create_schedule(client, alice, "first")
    second = await create_schedule(client, alice, "second")
    await create_schedule(client, carol, "carol's")

    listed = (await client.get("/api/schedules", headers=auth(alice))).json()
    assert [item["schedule"]["id"] for item in listed] == [second["id"], first["id"]]


async def test_get_schedule_member_and_non_member(client, schedule, bob, carol):
    res = await client.get(f"/api/schedules/{schedule['id']}", headers=auth(bob))
    assert res.status_code == 200
    assert res.json()["id"] == schedule["id"]

    res = await client.get(f"/api/schedules/{schedule['id']}", headers=auth(carol))
    assert res.status_code == 403
    assert res.json()["error"]["message"] == "not a member of this schedule"


async def test_superadmin_reads_any_schedule(client, schedule, superadmin):
    res = await client.get(f"/api/schedules/{schedule['id']}", headers=auth(superadmin))
    assert res.status_code == 200


async def test_unknown_schedule(client, superadmin, carol):
    missing = uuid4()
    res = await client.get(f"/api/schedules/{missing}", headers=auth(superadmin))
    assert res.status_code == 404
    res = await client.get(f"/api/schedules/{missing}", headers=auth(carol))
    assert res.status_code == 403


async def test_list_members(client, schedule, alice, bob):
    res = await client.get(f"/api/schedules/{schedule['id']}/members", headers=auth(bob))
    assert res.status_code == 200
    members = [(m["user"]["email"], m["role"]) for m in res.json()]
    assert members == [("alice@example.com", "admin"), ("bob@example.com", "user")]


async def test_add_member_unknown_email(client, schedule, alice):
    res = await client.post(
        f"/api/schedules/{schedule['id']}/members",
        json={"email": "nobody@example.com", "role": "user"},
        headers=auth(alice),
    )
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "user email not found"


async def test_add_member_twice_conflicts(client, schedule, alice):
    res = await client.post(
        f"/api/schedules/{schedule['id']}/members",
        json={"email": "BOB@example.com", "role": "admin"},
        headers=auth(alice),
    )
    assert res.status_code == 409
    assert res.json()["error"]["message"] == "user already in schedule"


async def test_plain_member_cannot_add_members(client, schedule, bob, carol):
    res = await client.post(
        f"/api/schedules/{schedule['id']}/members",
        json={"email": "carol@example.com", "role": "user"},
        headers=auth(bob),
    )
    assert res.status_code == 403
    assert res.json()["error"]["message"] == "schedule admin role required"


async def test_invalid_role_is_validation_error(client, schedule, alice, carol):
    res = await client.post(
        f"/api/schedules/{schedule['id']}/members",
        json={"email": "carol@example.com", "role": "owner"},
        headers=auth(alice),
    )
    assert res.status_code == 400


async def test_promote_member_to_admin(client, schedule, alice, bob, carol):
    bob_id = await user_id(client, bob)
    res = await client.post(
        f"/api/schedules/{schedule['id']}/members/{bob_id}/role",
        json={"role": "admin"},
        headers=auth(alice),
    )
    assert res.status_code == 204

    # promoted member can now manage membership
    await add_member(client, bob, schedule["id"], "carol@example.com")
    listed = (await client.get("/api/schedules", headers=auth(bob))).json()
    assert listed[0]["role"] == "admin"


async def test_set_role_for_non_member_is_not_found(client, schedule, alice, carol):
    carol_id = await user_id(client, carol)
    res = await client.post(
        f"/api/schedules/{schedule['id']}/members/{carol_id}/role",
        json={"role": "admin"},
        headers=auth(alice),
    )
    assert res.status_code == 404


async def test_superadmin_manages_membership_without_joining(client, schedule, superadmin, carol):
    await add_member(client, superadmin, schedule["id"], "carol@example.com")
    members = (await client.get(
        f"/api/schedules/{schedule['id']}/members", headers=auth(superadmin),
    )).json()
    emails = [m["user"]["email"] for m in members]
    assert "carol@example.com" in emails
    assert "root@example.com" not in emails


async def test_sql_backed_schedule_flow(sql_client):
    await register(sql_client, "root@example.com")
    owner = await register(sql_client, "owner@example.com")
    await register(sql_client, "member@example.com")
    created = await create_schedule(sql_client, owner)
    await add_member(sql_client, owner, created["id"], "member@example.com")

    res = await sql_client.get(
        f"/api/schedules/{created['id']}/members", headers=auth(owner),
    )
    assert [m["role"] for m in res.json()] == ["admin", "user"]
