from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

import requests

from ..core.constants import DEFAULT_BACKEND_TIMEOUT_SECONDS


@dataclass(frozen=True)
class BackendConfig:
    url: str
    api_key: str
    timeout: float = DEFAULT_BACKEND_TIMEOUT_SECONDS
    schema: Optional[str] = None


class BackendConnection:
    """Singleton-like factory for HTTP sessions against the backend REST API.

    Note: We open a short-lived session per operation (safe for simple Flask apps).
    """

    _instance: Optional["BackendConnection"] = None

    def __init__(self, config: BackendConfig, *, session_factory: Callable[[], requests.Session] = requests.Session):
        self._config = config
        self._session_factory = session_factory

    @classmethod
    def get_instance(cls, config: BackendConfig) -> "BackendConnection":
        if cls._instance is None:
            cls._instance = BackendConnection(config)
        return cls._instance

    @property
    def timeout(self) -> float:
        return float(self._config.timeout)

    def url_for(self, path: str) -> str:
        return f"{self._config.url.rstrip('/')}/rest/v1/{path.lstrip('/')}"

    def connect(self) -> requests.Session:
        session = self._session_factory()
        session.headers.update(
            {
                "apikey": self._config.api_key,
                "Authorization": f"Bearer {self._config.api_key}",
                "Accept": "application/json",
                "Content-Type": "application/json",
            }
        )
        if self._config.schema:
            session.headers["Accept-Profile"] = self._config.schema
            session.headers["Content-Profile"] = self._config.schema
        return session
