from __future__ import annotations

import asyncio
import enum
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from jobtracker.config import settings
from jobtracker.extension.extractor import JobDetails, extract_job
from jobtracker.extension.page import fetch_page


logger = logging.getLogger(__name__)

MessageSender = Callable[[dict[str, Any]], Awaitable[dict[str, Any] | None]]
PageFetcher = Callable[[str], Awaitable[str]]


class ButtonAction(str, enum.Enum):
    NONE = "none"
    CREATE = "create"
    REPLACE = "replace"
    REMOVE = "remove"


class ButtonState(str, enum.Enum):
    IDLE = "idle"
    SAVING = "saving"
    SAVED = "saved"
    ERROR = "error"


@dataclass
class SaveButton:
    job: JobDetails
    state: ButtonState = ButtonState.IDLE

    @property
    def title(self) -> str | None:
        return self.job.title


def reconcile_button(current_title: str | None, job: JobDetails | None) -> ButtonAction:
    """Decide what to do with the save button after a re-extraction.

    ``current_title`` is the title the existing button was created for, or
    None when no button is shown. A button whose title no longer matches the
    page is stale: single-page job boards swap the posting without a reload.
    """
    has_button = current_title is not None
    if job is None or not job.title:
        return ButtonAction.REMOVE if has_button else ButtonAction.NONE
    if not has_button:
        return ButtonAction.CREATE
    if current_title != job.title:
        return ButtonAction.REPLACE
    return ButtonAction.NONE


class ExtractionAgent:
    """Page-side agent: tracks the visited page and its save button.

    The host environment calls ``on_page`` whenever the page may have changed
    (initial load, DOM mutation, history navigation, polling).
    """

    def __init__(
        self,
        send_message: MessageSender,
        fetcher: PageFetcher = fetch_page,
        reset_seconds: float | None = None,
    ) -> None:
        self.send_message = send_message
        self.fetcher = fetcher
        self.reset_seconds = settings.button_reset_seconds if reset_seconds is None else reset_seconds
        self.html = ""
        self.url = ""
        self.button: SaveButton | None = None
        self._reset_handle: asyncio.TimerHandle | None = None

    def extract(self) -> JobDetails | None:
        if not self.url:
            return None
        return extract_job(self.html, self.url)

    def on_page(self, html: str, url: str) -> ButtonAction:
        self.html = html
        self.url = url
        job = self.extract()
        action = reconcile_button(self.button.title if self.button else None, job)
        if action is ButtonAction.REMOVE:
            self.button = None
        elif action in (ButtonAction.CREATE, ButtonAction.REPLACE):
            self.button = SaveButton(job=job)
        if action is not ButtonAction.NONE:
            logger.debug("Save button %s for %s", action.value, url)
        return action

    async def visit(self, url: str) -> ButtonAction:
        html = await self.fetcher(url)
        return self.on_page(html, url)

    def handle_message(self, message: dict[str, Any]) -> dict[str, Any] | None:
        if message.get("action") != "extractJob":
            return None
        job = self.extract()
        return job.to_payload() if job else None

    async def click_save(self) -> dict[str, Any]:
        button = self.button
        if button is None:
            return {"success": False, "error": "No job detected on this page"}

        button.state = ButtonState.SAVING
        job = self.extract() or button.job
        try:
            response = await self.send_message({"action": "saveJob", "data": job.to_payload()})
        except Exception as exc:
            logger.error("Save request failed: %s", exc)
            response = {"success": False, "error": str(exc)}
        response = response or {"success": False, "error": "Unknown error"}

        button.state = ButtonState.SAVED if response.get("success") else ButtonState.ERROR
        self._schedule_reset(button)
        return response

    def _schedule_reset(self, button: SaveButton) -> None:
        if self._reset_handle is not None:
            self._reset_handle.cancel()
        loop = asyncio.get_running_loop()
        self._reset_handle = loop.call_later(self.reset_seconds, self._reset_button, button)

    def _reset_button(self, button: SaveButton) -> None:
        self._reset_handle = None
        button.state = ButtonState.IDLE
