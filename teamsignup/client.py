"""Team Signup Client - async HTTP client that threads device identity through requests.

Invariants:
    - One httpx.AsyncClient per TeamSignupClient; it keeps the session cookie
    - The device id comes from get_or_create_device_id and is sent as
      `deviceId` on registration and `X-Device-ID` on removal
    - Non-2xx responses raise ApiError carrying the server's error message
"""

import logging
from pathlib import Path

import httpx

from teamsignup.core.repository_protocols import DeviceIdStorage
from teamsignup.infrastructure.device_identity import (
    JsonFileStorage, get_or_create_device_id,
)

logger = logging.getLogger(__name__)

DEFAULT_DEVICE_FILE = Path.home() / ".teamsignup" / "device.json"


class ApiError(Exception):
    """Non-success response from the team-signup API."""

    def __init__(self, status_code: int, message: str, code: str | None = None):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.code = code


class TeamSignupClient:
    """Typed wrapper over the team-signup HTTP API."""

    def __init__(
        self,
        base_url: str,
        device_storage: DeviceIdStorage | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._storage = device_storage or JsonFileStorage(DEFAULT_DEVICE_FILE)
        self._http = httpx.AsyncClient(
            base_url=base_url, timeout=timeout, transport=transport,
        )

    async def __aenter__(self) -> "TeamSignupClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    @property
    def device_id(self) -> str:
        return get_or_create_device_id(self._storage)

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        response = await self._http.request(method, url, **kwargs)
        if response.is_success:
            return response
        message, code = response.reason_phrase, None
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = body.get("error", message)
            code = body.get("code")
        logger.debug(f"{method} {url} failed: {response.status_code} {message}")
        raise ApiError(response.status_code, message, code)

    # ─── Identity ────────────────────────────────────────────────

    async def me(self) -> str | None:
        response = await self._request("GET", "/api/me")
        return response.json()["userId"]

    async def admin_login(self, password: str) -> None:
        await self._request("POST", "/api/admin/login", json={"password": password})

    async def admin_logout(self) -> None:
        await self._request("POST", "/api/admin/logout")

    async def is_admin(self) -> bool:
        response = await self._request("GET", "/api/admin/status")
        return response.json()["isAdmin"]

    # ─── Projects ────────────────────────────────────────────────

    async def list_projects(self) -> list[dict]:
        return (await self._request("GET", "/api/projects")).json()

    async def get_project(self, project_id: str) -> dict:
        return (await self._request("GET", f"/api/projects/{project_id}")).json()

    async def list_members(self, project_id: str) -> list[dict]:
        response = await self._request("GET", f"/api/projects/{project_id}/members")
        return response.json()

    async def create_project(self, name: str) -> dict:
        response = await self._request("POST", "/api/projects", json={"name": name})
        return response.json()

    async def delete_project(self, project_id: str) -> None:
        await self._request("DELETE", f"/api/projects/{project_id}")

    # ─── Members ─────────────────────────────────────────────────

    async def register(
        self,
        name: str,
        whatsapp_number: str,
        project_id: str,
        section_number: int | None = None,
        photo_url: str | None = None,
        device_id: str | None = None,
    ) -> dict:
        """Register and bind the new member to this client's session."""
        payload = {
            "name": name,
            "whatsappNumber": whatsapp_number,
            "projectId": project_id,
            "deviceId": device_id or self.device_id,
        }
        if section_number is not None:
            payload["sectionNumber"] = section_number
        if photo_url is not None:
            payload["photoUrl"] = photo_url
        response = await self._request("POST", "/api/members", json=payload)
        return response.json()

    async def remove_member(self, member_id: str) -> None:
        await self._request(
            "DELETE", f"/api/members/{member_id}",
            headers={"X-Device-ID": self.device_id},
        )
