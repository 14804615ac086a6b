from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import httpx

from jobtracker.extension.client import ApiClient, ApiError
from jobtracker.extension.session import TokenSession


logger = logging.getLogger(__name__)

Notifier = Callable[[str, str], None]

UNKNOWN_TITLE = "Unknown Title"
UNKNOWN_COMPANY = "Unknown Company"


def log_notification(title: str, message: str) -> None:
    logger.info("%s %s", title, message)


class BackgroundRelay:
    """Forwards messages from the extraction agent to the backend.

    Handles ``saveJob`` and ``checkAuth``; any other action yields ``None`` so
    a different listener can answer it.
    """

    def __init__(self, client: ApiClient, session: TokenSession, notifier: Notifier = log_notification) -> None:
        self.client = client
        self.session = session
        self.notifier = notifier

    async def handle_message(self, message: dict[str, Any]) -> dict[str, Any] | None:
        action = message.get("action")
        if action == "saveJob":
            return await self.save_job(message.get("data") or {})
        if action == "checkAuth":
            return await self.check_auth()
        return None

    async def save_job(self, job_data: dict[str, Any]) -> dict[str, Any]:
        if not self.session.token:
            return {"success": False, "error": "Please log in first", "requiresAuth": True}

        payload = {
            "title": job_data.get("title") or UNKNOWN_TITLE,
            "company": job_data.get("company") or UNKNOWN_COMPANY,
            "location": job_data.get("location"),
            "salary": job_data.get("salary"),
            "url": job_data.get("url"),
        }
        try:
            job = await self.client.create_job({key: value for key, value in payload.items() if value is not None})
            if not isinstance(job, dict):
                raise ApiError(201, "Invalid response")
        except (ApiError, httpx.HTTPError) as exc:
            logger.warning("Saving job failed: %s", exc)
            return {"success": False, "error": str(exc) or "Request failed"}

        title = job.get("title") or payload["title"]
        company = job.get("company") or payload["company"]
        self.notifier("Job Saved!", f"{title} at {company}")
        return {"success": True, "job": job}

    async def check_auth(self) -> dict[str, Any]:
        if not self.session.token:
            return {"authenticated": False}
        try:
            await self.client.me()
        except (ApiError, httpx.HTTPError) as exc:
            logger.info("Stored token rejected, clearing it: %s", exc)
            self.session.clear()
            return {"authenticated": False}
        return {"authenticated": True}
