# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Lazy, re-sliceable windows over a byte source.

A ``LazyContent`` is a ``(source, offset, length)`` triple. Slicing only
recomputes the triple; bytes move when ``stream``, ``bytes`` or ``text`` is
awaited, and only the bytes of the current window are requested from the
source.

Example::

    content = LazyContent(HostByteSource("/srv/log.txt", 1_000_000))
    tail = content.slice(-4096)
    print(await tail.text())
"""

from __future__ import annotations

import builtins
from collections.abc import AsyncGenerator
from contextlib import aclosing
from dataclasses import dataclass

from ._source import ByteSource, MemoryByteSource

__all__ = ["LazyContent"]


def _clamp(index: int, size: int) -> int:
    if index < 0:
        return max(size + index, 0)
    return min(index, size)


@dataclass(slots=True, frozen=True)
class LazyContent:
    """Immutable byte window ``[offset, offset + length)`` of a source.

    ``length`` defaults to the rest of the source after ``offset``.

    Raises:
        ValueError: If the window does not fit inside the source.
    """

    source: ByteSource
    offset: int = 0
    length: int | None = None

    def __post_init__(self) -> None:
        total = self.source.total_length
        if self.length is None:
            object.__setattr__(self, "length", max(total - self.offset, 0))
        length = self.byte_length
        if self.offset < 0 or length < 0 or self.offset + length > total:
            msg = (
                f"Window offset={self.offset} length={length} does not fit "
                f"a source of {total} bytes"
            )
            raise ValueError(msg)

    @classmethod
    def from_bytes(cls, data: builtins.bytes) -> LazyContent:
        """Wrap an in-memory buffer."""
        return cls(MemoryByteSource(data))

    @property
    def byte_length(self) -> int:
        """Length of the current window in bytes."""
        return self.length if self.length is not None else 0

    @property
    def end(self) -> int:
        """Absolute end offset of the window in the source (exclusive)."""
        return self.offset + self.byte_length

    def slice(self, start: int | None = None, end: int | None = None) -> LazyContent:
        """Return a narrower window sharing the same source.

        Indices are relative to the current window. Negative values count from
        its end and every result is clamped to ``[0, byte_length]``, so this
        never raises. No I/O happens.
        """
        size = self.byte_length
        relative_start = 0 if start is None else _clamp(start, size)
        relative_end = size if end is None else _clamp(end, size)
        return LazyContent(
            self.source,
            offset=self.offset + relative_start,
            length=max(relative_end - relative_start, 0),
        )

    def stream(self) -> AsyncGenerator[builtins.bytes, None]:
        """Start a fresh, single-pass read of exactly the current window.

        Chunks arrive in offset order. Close the iterator early with
        ``aclose()`` (or ``contextlib.aclosing``) to release the underlying
        handle before exhaustion.
        """
        return self.source.read(self.offset, self.end)

    async def text(self, encoding: str = "utf-8", errors: str = "strict") -> str:
        """Read the window and decode it as text."""
        data = await self.bytes()
        return data.decode(encoding, errors)

    async def bytes(self) -> builtins.bytes:
        """Read the whole window into a single buffer."""
        async with aclosing(self.stream()) as chunks:
            parts: list[builtins.bytes] = [chunk async for chunk in chunks]
        return b"".join(parts)
