from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[1]
load_dotenv(dotenv_path=ROOT_DIR / ".env")


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


def _get_decimal(*keys: str, default: str) -> Decimal:
    v = _get_env(*keys, default=default)
    return Decimal(str(v))


@dataclass(frozen=True)
class Settings:
    database_url: str
    origin_postal_code: str
    quote_url: str
    quote_key: str
    quote_timeout: float
    free_shipping_threshold: Decimal
    notice_ms: float


def load_settings() -> Settings:
    return Settings(
        database_url=_get_env(
            "STOREFRONT_DATABASE_URL", "DATABASE_URL", default="sqlite+aiosqlite:///:memory:"
        ) or "sqlite+aiosqlite:///:memory:",
        origin_postal_code=_get_env("STOREFRONT_ORIGIN_POSTAL_CODE", default="01001000") or "01001000",
        quote_url=_get_env(
            "STOREFRONT_QUOTE_URL", default="https://www.cepcerto.com/ws/json-frete"
        ) or "https://www.cepcerto.com/ws/json-frete",
        quote_key=_get_env("STOREFRONT_QUOTE_KEY", default="teste") or "teste",
        quote_timeout=_get_float("STOREFRONT_QUOTE_TIMEOUT", default=10.0),
        free_shipping_threshold=_get_decimal("STOREFRONT_FREE_SHIPPING_THRESHOLD", default="130"),
        notice_ms=_get_float("STOREFRONT_NOTICE_MS", default=2000.0),
    )


settings = load_settings()

if len(settings.origin_postal_code) != 8 or not settings.origin_postal_code.isdigit():
    raise RuntimeError("STOREFRONT_ORIGIN_POSTAL_CODE must be exactly 8 digits")
