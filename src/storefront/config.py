"""Runtime settings for the storefront client, read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _get_env(*keys: str, default: str | None = None) -> str | None:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_float(*keys: str, default: float) -> float:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    return float(v)


def _get_bool(*keys: str, default: bool) -> bool:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    if v.lower() in _TRUTHY:
        return True
    if v.lower() in _FALSY:
        return False
    raise ValueError(f"Invalid boolean for {keys[0]}: {v!r}")


@dataclass(frozen=True)
class Settings:
    backend_url: str
    data_dir: str
    http_timeout: float
    cart_key: str
    token_key: str
    demote_on_unauthorized: bool
    log_dir: str | None = None


def load_settings() -> Settings:
    """Build settings from environment variables (and a ``.env`` file if present)."""
    return Settings(
        backend_url=(_get_env("STOREFRONT_BACKEND_URL", "BACKEND_URL", default="http://localhost:8000") or "").rstrip("/"),
        data_dir=_get_env("STOREFRONT_DATA_DIR", default=str(Path.home() / ".handestiy")) or "",
        http_timeout=_get_float("STOREFRONT_HTTP_TIMEOUT", default=10.0),
        cart_key=_get_env("STOREFRONT_CART_KEY", default="handestiy_cart") or "handestiy_cart",
        token_key=_get_env("STOREFRONT_TOKEN_KEY", default="handestiy_admin_token") or "handestiy_admin_token",
        demote_on_unauthorized=_get_bool("STOREFRONT_DEMOTE_ON_UNAUTHORIZED", default=True),
        log_dir=_get_env("STOREFRONT_LOG_DIR", default=None),
    )
