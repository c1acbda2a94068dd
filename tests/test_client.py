"""Client & Bulk Registration - TeamSignupClient and run_load against the ASGI app.

Tests cover:
    - Registration sends the stored device id; removal sends it as X-Device-ID
    - A second client on another device cannot remove the member
    - Error responses surface as ApiError with the server's message and code
    - run_load registers `count` members with unique names, and leaves the
      shared session bound to the last one without device ownership
"""

import pytest
from httpx import ASGITransport

from teamsignup.client import ApiError, TeamSignupClient
from teamsignup.infrastructure.device_identity import DEVICE_ID_KEY, MemoryStorage
from teamsignup.load_members import run_load
from teamsignup.main import app


@pytest.fixture
async def api(make_client):
    """Client factory; make_client installs the test database overrides."""
    opened: list[TeamSignupClient] = []

    def _open(storage=None) -> TeamSignupClient:
        c = TeamSignupClient(
            "http://test",
            device_storage=storage or MemoryStorage(),
            transport=ASGITransport(app=app),
        )
        opened.append(c)
        return c

    yield _open

    for c in opened:
        await c.aclose()


@pytest.fixture
async def project(api, test_settings):
    admin = api()
    await admin.admin_login(test_settings.admin_password)
    return await admin.create_project("Web Dev")


async def test_register_uses_stored_device_id(api, project):
    storage = MemoryStorage()
    storage.set(DEVICE_ID_KEY, "D1")
    aya = api(storage)

    member = await aya.register("Aya", "123 456 7890", project["id"])

    assert member["whatsappNumber"] == "+201234567890"
    assert await aya.me() == member["id"]


async def test_owner_removes_self_with_same_device(api, project):
    aya = api()
    member = await aya.register("Aya", "+201234567890", project["id"])

    await aya.remove_member(member["id"])

    assert await aya.list_members(project["id"]) == []
    assert await aya.me() is None


async def test_other_device_cannot_remove(api, project):
    aya = api()
    member = await aya.register("Aya", "+201234567890", project["id"])

    with pytest.raises(ApiError) as exc_info:
        await api().remove_member(member["id"])

    assert exc_info.value.status_code == 403
    assert exc_info.value.message == "You can only remove yourself from teams"
    assert len(await aya.list_members(project["id"])) == 1


async def test_duplicate_registration_raises_api_error(api, project):
    await api().register("Aya", "+201234567890", project["id"])

    with pytest.raises(ApiError) as exc_info:
        await api().register("Omar", "+201234567890", project["id"])

    assert exc_info.value.status_code == 400
    assert exc_info.value.code == "CONFLICT"


async def test_admin_flow(api, test_settings):
    admin = api()
    assert await admin.is_admin() is False
    await admin.admin_login(test_settings.admin_password)
    assert await admin.is_admin() is True

    created = await admin.create_project("Mobile App")
    assert await admin.get_project(created["id"]) == created
    await admin.delete_project(created["id"])
    assert await admin.list_projects() == []

    await admin.admin_logout()
    assert await admin.is_admin() is False


async def test_wrong_admin_password_raises(api):
    with pytest.raises(ApiError) as exc_info:
        await api().admin_login("guess")
    assert exc_info.value.status_code == 401


async def test_run_load_registers_count_members(api, project):
    loader = api()

    report = await run_load(loader, project["id"], count=12, concurrency=1, seed=7)

    assert report.succeeded == 12
    assert report.errors == {}
    members = await loader.list_members(project["id"])
    assert len(members) == report.succeeded
    assert len({m["name"] for m in members}) == len(members)
    assert all(1 <= m["sectionNumber"] <= 4 for m in members)


async def test_run_load_leaves_client_bound_to_last_registration(api, project):
    loader = api()

    await run_load(loader, project["id"], count=3, concurrency=1, seed=1)

    members = await loader.list_members(project["id"])
    assert await loader.me() == members[-1]["id"]
    with pytest.raises(ApiError) as exc_info:
        await loader.remove_member(members[-1]["id"])
    assert exc_info.value.status_code == 403
