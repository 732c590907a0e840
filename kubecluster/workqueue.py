"""A work queue that accepts every call and queues nothing."""

from __future__ import annotations

from datetime import timedelta
from typing import Any


class FakeWorkQueue:
    """Rate-limiting work queue interface that never holds items.

    Every call is accepted and noted in ``calls`` as ``(operation, args)``,
    but the queue stays empty: its length is always 0 and ``get`` never
    yields an item.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def _record(self, operation: str, *args: Any) -> None:
        self.calls.append((operation, args))

    def add(self, item: Any) -> None:
        self._record("add", item)

    def __len__(self) -> int:
        return 0

    def get(self) -> tuple[Any, bool]:
        """Return ``(item, shutdown)``; always ``(None, False)``."""
        return None, False

    def done(self, item: Any) -> None:
        self._record("done", item)

    def shut_down(self) -> None:
        self._record("shut_down")

    def shut_down_with_drain(self) -> None:
        self._record("shut_down_with_drain")

    def shutting_down(self) -> bool:
        return True

    def add_after(self, item: Any, duration: timedelta | float) -> None:
        self._record("add_after", item, duration)

    def add_rate_limited(self, item: Any) -> None:
        self._record("add_rate_limited", item)

    def forget(self, item: Any) -> None:
        self._record("forget", item)

    def num_requeues(self, item: Any) -> int:
        """Return how often ``item`` was requeued; always 0."""
        self._record("num_requeues", item)
        return 0