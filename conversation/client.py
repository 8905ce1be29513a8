from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol

import httpx

from conversation.errors import CompletionServiceError
from conversation.payload import extract_error_message, extract_segments


logger = logging.getLogger(__name__)


class CompletionService(Protocol):
    async def generate(self, request: Dict[str, Any], model_id: str) -> List[str]:
        ...


class GeminiClient:
    """generateContent over REST, one non-streaming request per call."""

    def __init__(
        self,
        api_key: Optional[str],
        endpoint_base: str,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.endpoint_base = endpoint_base.rstrip("/")
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    def endpoint_for(self, model_id: str) -> str:
        return f"{self.endpoint_base}/models/{model_id}:generateContent"

    async def generate(self, request: Dict[str, Any], model_id: str) -> List[str]:
        params = {"key": self.api_key} if self.api_key else None
        try:
            response = await self._client.post(
                self.endpoint_for(model_id),
                params=params,
                json=request,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise CompletionServiceError(
                _error_message(exc.response), status_code=exc.response.status_code
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("Completion request failed: %s", exc)
            raise CompletionServiceError() from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise CompletionServiceError(status_code=response.status_code) from exc
        return extract_segments(data)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "GeminiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


def _error_message(response: httpx.Response) -> Optional[str]:
    try:
        return extract_error_message(response.json())
    except ValueError:
        return None
