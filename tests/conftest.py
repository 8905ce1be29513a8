"""
Shared fixtures: explicit settings and a scripted completion service.
"""

from typing import Any, Callable, Dict, List, Optional

import pytest

from config.settings import Settings
from conversation.engine import SessionEngine


class FakeCompletionService:
    """Completion service stand-in returning scripted segments or raising."""

    def __init__(self) -> None:
        self.segments: List[str] = ["Hello there"]
        self.error: Optional[BaseException] = None
        self.calls: List[Dict[str, Any]] = []
        self.on_call: Optional[Callable[[], None]] = None

    async def generate(self, request: Dict[str, Any], model_id: str) -> List[str]:
        self.calls.append({"request": request, "contents": request["contents"], "model_id": model_id})
        if self.on_call is not None:
            self.on_call()
        if self.error is not None:
            raise self.error
        return list(self.segments)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        api_key="test-key",
        endpoint_base="https://gemini.test/v1beta",
        default_model_id="gemini-2.0-flash-exp",
        reasoning_models=frozenset({"gemini-2.0-flash-thinking-exp"}),
        request_timeout=5.0,
        model_image_url="/gemini.png",
    )


@pytest.fixture
def fake_service() -> FakeCompletionService:
    return FakeCompletionService()


@pytest.fixture
def engine(fake_service: FakeCompletionService, settings: Settings) -> SessionEngine:
    return SessionEngine(service=fake_service, settings=settings)
