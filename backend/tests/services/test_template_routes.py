"""Template Routes — storing rotation templates and applying them to a week.

Invariants:
    - Only admins create and apply templates; members list them
    - Apply creates one shift per slot, in slot order, and returns them (201)
    - Apply is not idempotent: applying the same week twice duplicates shifts
    - Apply is not atomic: shifts from slots before a bad slot stay created
    - A template can only be applied through its own schedule
"""

from uuid import uuid4

from tests.services.route_helpers import auth, create_schedule, register

WINDOW = {"from": "2024-01-01T00:00:00Z", "to": "2024-01-15T00:00:00Z"}

WEEK = {
    "slots": [
        {"dow": 0, "period": "morning", "start": "08:00", "end": "12:00"},
        {"dow": 5, "period": "night", "start": "22:00", "end": "06:00"},
    ],
}


async def _create_template(client, token, schedule_id, definition=WEEK, name="week"):
    return await client.post(
        f"/api/schedules/{schedule_id}/templates",
        json={"name": name, "definition": definition},
        headers=auth(token),
    )


async def _apply(client, token, schedule_id, template_id, week_start="2024-01-01"):
    return await client.post(
        f"/api/schedules/{schedule_id}/templates/{template_id}/apply",
        json={"week_start": week_start},
        headers=auth(token),
    )


async def _shifts(client, token, schedule_id):
    res = await client.get(
        f"/api/schedules/{schedule_id}/shifts", params=WINDOW, headers=auth(token),
    )
    return res.json()


async def test_create_and_list_templates(client, schedule, alice, bob):
    res = await _create_template(client, alice, schedule["id"])
    assert res.status_code == 201
    assert res.json()["definition"] == WEEK

    listed = await client.get(f"/api/schedules/{schedule['id']}/templates", headers=auth(bob))
    assert listed.status_code == 200
    assert [t["name"] for t in listed.json()] == ["week"]


async def test_member_cannot_create_template(client, schedule, bob):
    res = await _create_template(client, bob, schedule["id"])
    assert res.status_code == 403


async def test_template_name_required(client, schedule, alice):
    res = await _create_template(client, alice, schedule["id"], name="  ")
    assert res.status_code == 400


async def test_apply_creates_dated_shifts(client, schedule, alice):
    template = (await _create_template(client, alice, schedule["id"])).json()
    res = await _apply(client, alice, schedule["id"], template["id"])
    assert res.status_code == 201

    created = res.json()
    assert len(created) == 2
    assert created[0]["starts_at"].startswith("2024-01-01T08:00:00")
    assert created[0]["ends_at"].startswith("2024-01-01T12:00:00")
    assert created[1]["period"] == "night"
    assert created[1]["starts_at"].startswith("2024-01-06T22:00:00")
    assert created[1]["ends_at"].startswith("2024-01-07T06:00:00")
    assert all(s["assigned_user_id"] is None for s in created)


async def test_apply_twice_duplicates_shifts(client, schedule, alice):
    template = (await _create_template(client, alice, schedule["id"])).json()
    await _apply(client, alice, schedule["id"], template["id"])
    await _apply(client, alice, schedule["id"], template["id"])
    assert len(await _shifts(client, alice, schedule["id"])) == 4


async def test_bad_slot_keeps_earlier_shifts(client, schedule, alice):
    definition = {
        "slots": [
            {"dow": 0, "period": "morning", "start": "08:00", "end": "12:00"},
            {"dow": 7, "period": "night", "start": "22:00", "end": "06:00"},
            {"dow": 2, "period": "morning", "start": "08:00", "end": "12:00"},
        ],
    }
    template = (await _create_template(client, alice, schedule["id"], definition)).json()
    res = await _apply(client, alice, schedule["id"], template["id"])
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "slot.dow must be 0..6"

    remaining = await _shifts(client, alice, schedule["id"])
    assert len(remaining) == 1
    assert remaining[0]["starts_at"].startswith("2024-01-01T08:00:00")


async def test_bad_clock_reports_the_field(client, schedule, alice):
    definition = {"slots": [{"dow": 0, "period": "sleep", "start": "8am", "end": "12:00"}]}
    template = (await _create_template(client, alice, schedule["id"], definition)).json()
    res = await _apply(client, alice, schedule["id"], template["id"])
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "slot.start must be HH:MM"


async def test_invalid_definition_creates_nothing(client, schedule, alice):
    template = (await _create_template(client, alice, schedule["id"], {"days": []})).json()
    res = await _apply(client, alice, schedule["id"], template["id"])
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "invalid template definition"
    assert await _shifts(client, alice, schedule["id"]) == []


async def test_invalid_week_start(client, schedule, alice):
    template = (await _create_template(client, alice, schedule["id"])).json()
    res = await _apply(client, alice, schedule["id"], template["id"], week_start="01/01/2024")
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "week_start must be YYYY-MM-DD"


async def test_member_cannot_apply(client, schedule, alice, bob):
    template = (await _create_template(client, alice, schedule["id"])).json()
    res = await _apply(client, bob, schedule["id"], template["id"])
    assert res.status_code == 403


async def test_unknown_template(client, schedule, alice):
    res = await _apply(client, alice, schedule["id"], uuid4())
    assert res.status_code == 404


async def test_template_from_another_schedule(client, schedule, alice):
    template = (await _create_template(client, alice, schedule["id"])).json()
    other = await create_schedule(client, alice, "other")
    res = await _apply(client, alice, other["id"], template["id"])
    assert res.status_code == 403
    assert res.json()["error"]["message"] == "template belongs to another schedule"


async def test_superadmin_applies_without_membership(client, schedule, alice, superadmin):
    template = (await _create_template(client, alice, schedule["id"])).json()
    res = await _apply(client, superadmin, schedule["id"], template["id"])
    assert res.status_code == 201
    assert len(res.json()) == 2


async def test_sql_backed_partial_apply(sql_client):
    await register(sql_client, "root@example.com")
    owner = await register(sql_client, "owner@example.com")
    created = await create_schedule(sql_client, owner)
    definition = {
        "slots": [
            {"dow": 1, "period": "afternoon", "start": "13:00", "end": "17:00"},
            {"dow": 3, "period": "night", "start": "22:00", "end": "bad"},
        ],
    }
    template = (await _create_template(sql_client, owner, created["id"], definition)).json()
    res = await _apply(sql_client, owner, created["id"], template["id"])
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "slot.end must be HH:MM"

    remaining = await _shifts(sql_client, owner, created["id"])
    assert [s["starts_at"][:16] for s in remaining] == ["2024-01-02T13:00"]
