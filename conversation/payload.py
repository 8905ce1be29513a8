"""Mapping between the message log and the generateContent wire format."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence

from conversation.errors import EmptyResponseError, MalformedResponseError
from conversation.models import Message, ReasoningReply, Reply, Role, SimpleReply


def build_contents(history: Iterable[Message]) -> List[Dict[str, Any]]:
    contents: List[Dict[str, Any]] = []
    for message in history:
        role = "user" if message.role == Role.USER else "model"
        contents.append({"role": role, "parts": [{"text": message.content}]})
    return contents


def build_request(history: Iterable[Message]) -> Dict[str, Any]:
    return {"contents": build_contents(history)}


def extract_segments(body: Any) -> List[str]:
    """Return the text parts of the first candidate in a response body."""
    if not isinstance(body, dict):
        raise MalformedResponseError()
    candidates = body.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        raise MalformedResponseError()
    content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
    if not isinstance(content, dict):
        raise MalformedResponseError()
    parts = content.get("parts") or []
    if not isinstance(parts, list):
        raise MalformedResponseError()

    segments: List[str] = []
    for part in parts:
        if isinstance(part, dict) and isinstance(part.get("text"), str):
            segments.append(part["text"])
    return segments


def extract_error_message(body: Any) -> Optional[str]:
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str) and error["message"]:
        return error["message"]
    message = body.get("message")
    if isinstance(message, str) and message:
        return message
    return None


def is_reasoning_model(model_id: str, reasoning_models: Iterable[str] = ()) -> bool:
    return model_id in set(reasoning_models) or "thinking" in model_id.lower()


def classify_response(
    segments: Sequence[str],
    model_id: str,
    reasoning_models: Iterable[str] = (),
) -> Reply:
    """Pick the reply shape for a list of response segments.

    A reasoning model with at least two segments yields thinking + output.
    Anything else with at least one segment is a plain reply built from the
    first segment. No segments at all is a service failure.
    """
    if not segments:
        raise EmptyResponseError()
    if len(segments) >= 2 and is_reasoning_model(model_id, reasoning_models):
        return ReasoningReply(thinking=segments[0], output=segments[1])
    return SimpleReply(text=segments[0])
