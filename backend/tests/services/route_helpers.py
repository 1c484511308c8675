"""Route test helpers — thin wrappers over the HTTP API used by several test modules."""

PASSWORD = "password123"


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


async def register(client, email: str, password: str = PASSWORD) -> str:
    res = await client.post(
        "/api/auth/register", json={"email": email, "password": password},
    )
    assert res.status_code == 200, res.text
    return res.json()["token"]


async def user_id(client, token: str) -> str:
    res = await client.get("/api/me", headers=auth(token))
    return res.json()["id"]


async def create_schedule(client, token: str, name: str = "Grandma care") -> dict:
    res = await client.post(
        "/api/schedules",
        json={"name": name, "subject_type": "person", "subject_name": "Grandma"},
        headers=auth(token),
    )
    assert res.status_code == 201, res.text
    return res.json()


async def add_member(client, token: str, schedule_id: str, email: str, role: str = "user"):
    res = await client.post(
        f"/api/schedules/{schedule_id}/members",
        json={"email": email, "role": role},
        headers=auth(token),
    )
    assert res.status_code == 204, res.text


async def create_shift(
    client, token: str, schedule_id: str,
    starts_at: str = "2024-01-01T08:00:00Z", ends_at: str = "2024-01-01T12:00:00Z",
    period: str = "morning",
) -> dict:
    res = await client.post(
        f"/api/schedules/{schedule_id}/shifts",
        json={"starts_at": starts_at, "ends_at": ends_at, "period": period},
        headers=auth(token),
    )
    assert res.status_code == 201, res.text
    return res.json()
