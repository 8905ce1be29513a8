from __future__ import annotations

from typing import Iterator, List, Tuple

from conversation.models import Message


class HistoryStore:
    """Append-only, ordered log of the session's messages."""

    def __init__(self) -> None:
        self._messages: List[Message] = []

    def append(self, record: Message) -> None:
        self._messages.append(record)

    def snapshot(self) -> Tuple[Message, ...]:
        return tuple(self._messages)

    def clear(self) -> None:
        self._messages.clear()

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self.snapshot())
