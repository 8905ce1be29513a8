from __future__ import annotations

import asyncio
import logging
import time
from enum import Enum
from typing import Callable, Optional, Tuple

from config.settings import Settings
from conversation.client import CompletionService
from conversation.errors import CompletionServiceError
from conversation.history import HistoryStore
from conversation.models import Message
from conversation.payload import build_request, classify_response
from conversation.view import ReasoningToggles


logger = logging.getLogger(__name__)

FALLBACK_ERROR_TEXT = "Sorry, an error occurred."
TIMEOUT_ERROR_TEXT = "Request timed out."
TYPING_PLACEHOLDER = "Typing..."


class TurnPhase(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    APPENDING_SUCCESS = "appending_success"
    APPENDING_ERROR = "appending_error"


class SessionEngine:
    """Runs conversation turns against a completion service, one at a time.

    A turn appends the user message, sends the whole history, and appends
    exactly one model message: the reply, or an error message carrying the
    service's diagnostic. ``in_flight`` is raised before the request goes out
    and lowered on every exit path, and a submission made while it is raised
    is ignored.
    """

    def __init__(
        self,
        service: CompletionService,
        settings: Settings,
        on_change: Optional[Callable[["SessionEngine"], None]] = None,
    ) -> None:
        self._service = service
        self._settings = settings
        self._on_change = on_change
        self._history = HistoryStore()
        self._in_flight = False
        # Bumped on reset so a turn started before the reset cannot write into the new session.
        self._generation = 0
        self.phase = TurnPhase.IDLE
        self.pending_input = ""
        self.selected_model_id = settings.default_model_id
        self.reasoning_toggles = ReasoningToggles()

    @property
    def history(self) -> Tuple[Message, ...]:
        return self._history.snapshot()

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def placeholder(self) -> Optional[str]:
        return TYPING_PLACEHOLDER if self._in_flight else None

    def set_draft(self, text: str) -> None:
        self.pending_input = text

    def select_model(self, model_id: str) -> None:
        self.selected_model_id = model_id

    def reset_session(self) -> None:
        self._generation += 1
        self._history.clear()
        self._in_flight = False
        self.phase = TurnPhase.IDLE
        self.pending_input = ""
        self.reasoning_toggles.clear()
        logger.info("Session reset")
        self._notify()

    async def submit_turn(self, raw_text: Optional[str] = None) -> Optional[Message]:
        """Submit one user turn; returns the appended model message.

        Uses the pending draft when ``raw_text`` is None. Blank input and
        submissions while another turn is in flight return None without
        touching any state. A turn whose session was reset before the reply
        arrived also returns None; its reply is dropped.
        """
        text = self.pending_input if raw_text is None else raw_text
        if not text or not text.strip():
            return None
        if self._in_flight:
            logger.warning("Turn rejected: another turn is still in flight")
            return None

        generation = self._generation
        model_id = self.selected_model_id
        self._history.append(Message.user(text))
        self.pending_input = ""
        self._in_flight = True
        self.phase = TurnPhase.SUBMITTING
        started = time.perf_counter()

        try:
            self._notify()
            reply, ok = await self._complete(model_id, started)
            if generation != self._generation:
                logger.info("Discarding reply for a turn submitted before reset")
                return None
            self.phase = TurnPhase.APPENDING_SUCCESS if ok else TurnPhase.APPENDING_ERROR
            self._history.append(reply)
            self._notify()
            return reply
        finally:
            if generation == self._generation:
                self._in_flight = False
                self.phase = TurnPhase.IDLE
                self._notify()

    async def _complete(self, model_id: str, started: float) -> Tuple[Message, bool]:
        """Run the service call; returns the model message and whether it succeeded."""
        request = build_request(self._history.snapshot())
        image = self._settings.model_image_url
        logger.info("Submitting turn: model=%s history_len=%s", model_id, len(request["contents"]))

        try:
            call = self._service.generate(request, model_id)
            if self._settings.turn_timeout is not None:
                segments = await asyncio.wait_for(call, timeout=self._settings.turn_timeout)
            else:
                segments = await call
            reply = classify_response(segments, model_id, self._settings.reasoning_models)
        except asyncio.TimeoutError:
            logger.warning("Turn timed out after %.1fs: model=%s", self._settings.turn_timeout, model_id)
            return Message.error(TIMEOUT_ERROR_TEXT, image=image), False
        except CompletionServiceError as exc:
            logger.warning(
                "Completion failed: model=%s status=%s message=%s", model_id, exc.status_code, exc.message
            )
            return Message.error(exc.message or FALLBACK_ERROR_TEXT, image=image), False
        except Exception as exc:
            logger.exception("Unexpected completion failure: %s", exc)
            return Message.error(FALLBACK_ERROR_TEXT, image=image), False

        elapsed = time.perf_counter() - started
        logger.info("Model responded: kind=%s elapsed=%.3fs", reply.kind, elapsed)
        return Message.from_reply(reply, thinking_time=elapsed, image=image), True

    def _notify(self) -> None:
        if self._on_change is None:
            return
        try:
            self._on_change(self)
        except Exception as exc:
            # Hook errors are logged; the turn still records both messages.
            logger.exception("Change callback failed: %s", exc)
