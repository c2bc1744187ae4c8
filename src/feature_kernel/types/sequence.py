from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(slots=True)
class ItemSequence(Generic[T]):
    # Append-only ordered container used by every AST composite and the listener set.
    _items: list[T] = field(default_factory=list)

    def append(self, item: T) -> None:
        self._items.append(item)

    def last(self) -> T | None:
        # Empty sequence yields None rather than raising (parser relies on this).
        if not self._items:
            return None
        return self._items[-1]

    def for_each_sync(self, fn: Callable[[T], object]) -> None:
        # Full synchronous traversal; fn gets no continuation.
        for item in list(self._items):
            fn(item)

    async def for_each_async(self, fn: Callable[[T], Awaitable[object]]) -> None:
        # Snapshot first: appends during an in-flight traversal are not visited by it.
        # Item N+1 is only started after fn(item N) has completed.
        pending = list(self._items)
        while pending:
            item = pending.pop(0)
            await fn(item)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)
