from __future__ import annotations

from typing import Set


class ReasoningToggles:
    """Which reasoning messages currently have their thinking expanded.

    Presentation state only, keyed by message id; messages themselves are
    never touched.
    """

    def __init__(self) -> None:
        self._expanded: Set[str] = set()

    def toggle(self, message_id: str) -> bool:
        if message_id in self._expanded:
            self._expanded.discard(message_id)
            return False
        self._expanded.add(message_id)
        return True

    def is_expanded(self, message_id: str) -> bool:
        return message_id in self._expanded

    def clear(self) -> None:
        self._expanded.clear()
