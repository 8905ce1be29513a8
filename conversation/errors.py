from __future__ import annotations

from typing import Optional


class CompletionServiceError(Exception):
    """The completion service could not produce a usable reply.

    ``message`` is the human-readable text reported by the service, or None
    when nothing readable was available (network failure, empty body).
    """

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None) -> None:
        super().__init__(message or "completion service error")
        self.message = message
        self.status_code = status_code


class MalformedResponseError(CompletionServiceError):
    """Response body did not have the generateContent structure."""


class EmptyResponseError(CompletionServiceError):
    """Response carried no text segments."""
