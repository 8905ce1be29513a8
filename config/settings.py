from __future__ import annotations

import os
from functools import lru_cache
from typing import FrozenSet, Optional

from dotenv import load_dotenv


load_dotenv()


DEFAULT_ENDPOINT_BASE = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL_ID = "gemini-2.0-flash-exp"
DEFAULT_REASONING_MODELS = "gemini-2.0-flash-thinking-exp"


def _split_csv(raw: Optional[str]) -> FrozenSet[str]:
    return frozenset(item.strip() for item in (raw or "").split(",") if item.strip())


def _optional_float(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    return float(raw)


class Settings:
    """Session configuration loaded from environment variables.

    Every value can be overridden by keyword so a session engine can be
    built from explicit configuration instead of process globals.
    """

    def __init__(
        self,
        *,
        app_env: Optional[str] = None,
        api_key: Optional[str] = None,
        endpoint_base: Optional[str] = None,
        default_model_id: Optional[str] = None,
        reasoning_models: Optional[FrozenSet[str]] = None,
        request_timeout: Optional[float] = None,
        turn_timeout: Optional[float] = None,
        model_image_url: Optional[str] = None,
        log_level: Optional[str] = None,
    ) -> None:
        self.app_env: str = app_env or os.getenv("APP_ENV", "development")
        self.api_key: Optional[str] = api_key or os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
        self.endpoint_base: str = (
            endpoint_base or os.getenv("GEMINI_ENDPOINT_BASE", DEFAULT_ENDPOINT_BASE)
        ).rstrip("/")
        self.default_model_id: str = default_model_id or os.getenv("GEMINI_MODEL", DEFAULT_MODEL_ID)
        self.reasoning_models: FrozenSet[str] = (
            frozenset(reasoning_models)
            if reasoning_models is not None
            else _split_csv(os.getenv("GEMINI_REASONING_MODELS", DEFAULT_REASONING_MODELS))
        )
        self.request_timeout: float = (
            request_timeout if request_timeout is not None else float(os.getenv("REQUEST_TIMEOUT", "60"))
        )
        # None leaves a turn unbounded; the httpx timeout still applies per request.
        self.turn_timeout: Optional[float] = (
            turn_timeout if turn_timeout is not None else _optional_float(os.getenv("TURN_TIMEOUT"))
        )
        self.model_image_url: str = model_image_url or os.getenv("MODEL_IMAGE_URL", "/gemini.png")
        self.log_level: str = log_level or os.getenv("LOG_LEVEL", "INFO")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
