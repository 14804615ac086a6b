from __future__ import annotations

import logging
import random

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from jobtracker.config import settings


logger = logging.getLogger(__name__)

USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/122.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/122.0 Safari/537.36",
]


@retry(
    retry=retry_if_exception_type(httpx.TransportError),
    stop=stop_after_attempt(3),
    wait=wait_exponential(min=1, max=8),
    reraise=True,
)
async def fetch_page(url: str, transport: httpx.AsyncBaseTransport | None = None) -> str:
    async with httpx.AsyncClient(
        timeout=settings.request_timeout_seconds,
        follow_redirects=True,
        transport=transport,
    ) as client:
        response = await client.get(url, headers={"User-Agent": random.choice(USER_AGENTS)})
    response.raise_for_status()
    logger.debug("Fetched %s (%d bytes)", url, len(response.text))
    return response.text
