from __future__ import annotations

import json
import logging
from pathlib import Path

from jobtracker.config import settings


logger = logging.getLogger(__name__)


class TokenSession:
    """Bearer token holder with an explicit load/set/clear lifecycle.

    The token lives in memory once loaded and is persisted to a small JSON
    file so it survives restarts. Nothing is read from disk until ``load``
    is called.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path or settings.token_file)
        self._token: str | None = None

    @property
    def token(self) -> str | None:
        return self._token

    def load(self) -> str | None:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            data = {}
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable token file %s", self.path)
            data = {}
        token = data.get("authToken") if isinstance(data, dict) else None
        self._token = token or None
        return self._token

    def set(self, token: str) -> None:
        self._token = token
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"authToken": token}), encoding="utf-8")

    def clear(self) -> None:
        self._token = None
        self.path.unlink(missing_ok=True)
