from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import httpx

from .api_client import ApiError, PayrollApiClient

logger = logging.getLogger(__name__)

SESSION_KEY = "businessId"


class SessionStore:
    """Persists the logged-in business id as a small JSON file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> Optional[str]:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("unreadable session file %s: %s", self.path, e)
            return None
        value = data.get(SESSION_KEY) if isinstance(data, dict) else None
        return value if isinstance(value, str) and value else None

    def save(self, business_id: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({SESSION_KEY: business_id}), encoding="utf-8")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


@dataclass(frozen=True)
class SessionState:
    is_logged_in: bool
    business: Optional[dict] = None

    @property
    def stack(self) -> str:
        """Which navigation stack the app should show."""
        return "main" if self.is_logged_in else "onboarding"


LOGGED_OUT = SessionState(is_logged_in=False)


class SessionManager:
    def __init__(self, api: PayrollApiClient, store: SessionStore):
        self._api = api
        self._store = store
        self.state = LOGGED_OUT

    def restore(self) -> SessionState:
        """Logged in only when the stored id is still the latest business."""
        stored_id = self._store.load()
        state = LOGGED_OUT
        if stored_id:
            try:
                business = self._api.get_latest_business()
            except (ApiError, httpx.HTTPError) as e:
                logger.info("session restore failed: %s", e)
                business = None
            if business and business.get("id") == stored_id:
                state = SessionState(is_logged_in=True, business=business)

        self.state = state
        return state

    def login(self, business: dict) -> SessionState:
        self._store.save(business["id"])
        self.state = SessionState(is_logged_in=True, business=business)
        logger.info("logged in: %s", business.get("businessEmail"))
        return self.state

    def logout(self) -> SessionState:
        self._store.clear()
        self.state = LOGGED_OUT
        logger.info("logged out")
        return self.state

    def refresh(self) -> SessionState:
        return self.restore()
