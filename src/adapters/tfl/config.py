from __future__ import annotations

import os
from dataclasses import dataclass


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    return float(raw) if raw else default


@dataclass(frozen=True, slots=True)
class TflRuntimeConfig:
    base_url: str
    app_id: str
    app_key: str
    timeout_s: float

    @staticmethod
    def from_env() -> "TflRuntimeConfig":
        return TflRuntimeConfig(
            base_url=(os.getenv("TFL_API_BASE_URL") or "https://api.tfl.gov.uk")
            .strip()
            .rstrip("/"),
            app_id=(os.getenv("TFL_APP_ID") or "").strip(),
            app_key=(os.getenv("TFL_APP_KEY") or "").strip(),
            timeout_s=_env_float("TFL_TIMEOUT_S", 30.0),
        )

    def auth_params(self) -> dict[str, str]:
        """Query parameters sent with every request (empty without credentials)."""

        params: dict[str, str] = {}
        if self.app_id:
            params["app_id"] = self.app_id
        if self.app_key:
            params["app_key"] = self.app_key
        return params
