from __future__ import annotations

import os
from dataclasses import dataclass

import httpx
from dotenv import load_dotenv

from .errors import PlankaConfigError

BASE_URL_ENV = "PLANKA_BASE_URL"
USERNAME_ENV = "PLANKA_AGENT_EMAIL"
PASSWORD_ENV = "PLANKA_AGENT_PASSWORD"
LOG_LEVEL_ENV = "PLANKA_LOG_LEVEL"


@dataclass(frozen=True)
class PlankaConfig:
    base_url: str
    username: str
    password: str

    def __repr__(self) -> str:
        return f"PlankaConfig(base_url={self.base_url!r}, username={self.username!r})"


def _normalize_base_url(raw: str) -> str:
    try:
        url = httpx.URL(raw)
    except httpx.InvalidURL as exc:
        raise PlankaConfigError(f"Invalid {BASE_URL_ENV}: {raw}") from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise PlankaConfigError(f"Invalid {BASE_URL_ENV}: {raw}")
    return raw.rstrip("/")


def validate_config(config: PlankaConfig) -> PlankaConfig:
    """Check required values and return a copy with a normalized base URL."""
    missing = [
        name
        for name, value in (
            (BASE_URL_ENV, config.base_url),
            (USERNAME_ENV, config.username),
            (PASSWORD_ENV, config.password),
        )
        if not value
    ]
    if missing:
        raise PlankaConfigError(
            f"Missing required environment variables: {', '.join(missing)}"
        )
    return PlankaConfig(
        base_url=_normalize_base_url(config.base_url),
        username=config.username,
        password=config.password,
    )


def load_env_config(*, use_dotenv: bool = True) -> PlankaConfig:
    """Load PLANKA base URL and service-account credentials from the environment."""
    if use_dotenv:
        load_dotenv()
    return validate_config(
        PlankaConfig(
            base_url=os.getenv(BASE_URL_ENV, "").strip(),
            username=os.getenv(USERNAME_ENV, "").strip(),
            password=os.getenv(PASSWORD_ENV, ""),
        )
    )


__all__ = [
    "PlankaConfig",
    "load_env_config",
    "validate_config",
    "BASE_URL_ENV",
    "USERNAME_ENV",
    "PASSWORD_ENV",
    "LOG_LEVEL_ENV",
]
