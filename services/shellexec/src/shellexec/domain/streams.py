from __future__ import annotations

from collections import deque
from collections.abc import AsyncIterator, Iterator
from typing import Generic, Protocol, TypeVar

from shellexec.domain.virtual_file import VirtualFile

T = TypeVar("T")
T_contra = TypeVar("T_contra", contravariant=True)


class Writer(Protocol[T_contra]):
    def write(self, item: T_contra, /) -> object: ...


W = TypeVar("W", bound=Writer)


class OneShotStream(Generic[T]):
    """Finite, non-restartable sequence over items that are already buffered.

    Consumers may pull (sync or async iteration) or push (``pipe``). Every item
    is handed out exactly once across all consumption styles; once drained the
    stream stays ended.
    """

    def __init__(self, items: list[T]) -> None:
        self._pending: deque[T] = deque(items)

    @property
    def ended(self) -> bool:
        return not self._pending

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        if not self._pending:
            raise StopIteration
        return self._pending.popleft()

    def __aiter__(self) -> AsyncIterator[T]:
        return self

    async def __anext__(self) -> T:
        if not self._pending:
            raise StopAsyncIteration
        return self._pending.popleft()

    def pipe(self, sink: W) -> W:
        for item in self:
            sink.write(item)
        return sink


class ByteStream(OneShotStream[bytes]):
    """Single-chunk byte stream with a minimal file-like ``read``."""

    def __init__(self, payload: bytes) -> None:
        super().__init__([payload])

    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        if not self._pending:
            return b""
        chunk = self._pending.popleft()
        if size is None or size < 0 or size >= len(chunk):
            return chunk
        self._pending.appendleft(chunk[size:])
        return chunk[:size]


class VirtualFileStream(OneShotStream[VirtualFile]):
    def __init__(self, file: VirtualFile) -> None:
        super().__init__([file])
