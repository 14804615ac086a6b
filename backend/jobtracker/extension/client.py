from __future__ import annotations

from typing import Any

import httpx

from jobtracker.config import settings
from jobtracker.extension.session import TokenSession


class ApiError(Exception):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.reason_phrase or "Request failed"
    if isinstance(body, dict):
        detail = body.get("detail") or body.get("error")
        if isinstance(detail, str) and detail:
            return detail
    return "Request failed"


class ApiClient:
    """Async client for the tracker REST API; the bearer token comes from the session."""

    def __init__(
        self,
        session: TokenSession,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
    ) -> None:
        self.session = session
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self.transport = transport
        self.timeout = timeout or settings.request_timeout_seconds

    async def request(self, method: str, endpoint: str, **kwargs: Any) -> Any:
        headers = {"Content-Type": "application/json", **kwargs.pop("headers", {})}
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.request(method, f"{self.base_url}{endpoint}", headers=headers, **kwargs)

        if response.is_error:
            raise ApiError(response.status_code, _error_message(response))
        if response.status_code == 204:
            return None
        try:
            return response.json()
        except ValueError:
            raise ApiError(response.status_code, "Invalid response") from None

    # Auth
    async def register(self, email: str, password: str, name: str) -> dict[str, Any]:
        data = await self.request("POST", "/auth/register", json={"email": email, "password": password, "name": name})
        self.session.set(data["token"])
        return data

    async def login(self, email: str, password: str) -> dict[str, Any]:
        data = await self.request("POST", "/auth/login", json={"email": email, "password": password})
        self.session.set(data["token"])
        return data

    def logout(self) -> None:
        self.session.clear()

    async def me(self) -> dict[str, Any]:
        return await self.request("GET", "/auth/me")

    # Jobs
    async def list_jobs(
        self,
        status: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[dict[str, Any]]:
        params = {key: value for key, value in (("status", status), ("limit", limit), ("offset", offset)) if value}
        return await self.request("GET", "/jobs", params=params)

    async def get_job(self, job_id: int) -> dict[str, Any]:
        return await self.request("GET", f"/jobs/{job_id}")

    async def create_job(self, payload: dict[str, Any]) -> dict[str, Any]:
        return await self.request("POST", "/jobs", json=payload)

    async def update_job(self, job_id: int, payload: dict[str, Any]) -> dict[str, Any]:
        return await self.request("PUT", f"/jobs/{job_id}", json=payload)

    async def delete_job(self, job_id: int) -> None:
        await self.request("DELETE", f"/jobs/{job_id}")

    async def job_stats(self) -> dict[str, Any]:
        return await self.request("GET", "/jobs/stats")

    # Interviews
    async def list_interviews(self, job_id: int) -> list[dict[str, Any]]:
        return await self.request("GET", f"/jobs/{job_id}/interviews")

    async def create_interview(self, job_id: int, payload: dict[str, Any]) -> dict[str, Any]:
        return await self.request("POST", f"/jobs/{job_id}/interviews", json=payload)

    async def update_interview(self, job_id: int, interview_id: int, payload: dict[str, Any]) -> dict[str, Any]:
        return await self.request("PUT", f"/jobs/{job_id}/interviews/{interview_id}", json=payload)

    async def delete_interview(self, job_id: int, interview_id: int) -> None:
        await self.request("DELETE", f"/jobs/{job_id}/interviews/{interview_id}")
