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

"""Byte sources: readable resources with a fixed length.

Defines the ``ByteSource`` protocol consumed by ``LazyContent`` and the two
implementations shipped with the library:

- ``HostByteSource``: a file on the local disk, read with ``aiofiles``
- ``MemoryByteSource``: an in-memory ``bytes`` buffer

Sources do not validate ranges. Callers pass ``0 <= start <= end <= total_length``.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from . import _host
from ._types import DEFAULT_CHUNK_SIZE

__all__ = [
    "ByteSource",
    "HostByteSource",
    "MemoryByteSource",
]


@runtime_checkable
class ByteSource(Protocol):
    """Readable resource of known length.

    ``read`` returns an async iterator of chunks whose concatenation is exactly
    ``[start, end)``. Chunk sizes are unspecified. Reading is forward only.

    Example::

        async for chunk in source.read(0, source.total_length):
            digest.update(chunk)
    """

    @property
    def total_length(self) -> int:
        """Length in bytes, fixed when the source was created."""
        ...

    def read(self, start: int, end: int) -> AsyncGenerator[bytes, None]:
        """Yield the bytes of ``[start, end)`` in offset order."""
        ...


@dataclass(slots=True, frozen=True)
class HostByteSource:
    """Byte source backed by a file on the host filesystem.

    ``total_length`` is the size observed when the file was discovered and is
    not refreshed if the file later grows. Each ``read`` opens a fresh handle.

    Attributes:
        path: Absolute path of the backing file.
        total_length: File size at discovery time.
        chunk_size: Maximum size of a yielded chunk.
    """

    path: str
    total_length: int
    chunk_size: int = DEFAULT_CHUNK_SIZE

    def __post_init__(self) -> None:
        if self.chunk_size <= 0:
            msg = f"chunk_size must be positive, got {self.chunk_size}"
            raise ValueError(msg)

    def read(self, start: int, end: int) -> AsyncGenerator[bytes, None]:
        """Stream ``[start, end)`` of the backing file.

        Raises:
            NotFoundError: When iterated, if the file no longer exists.
        """
        return _host.read_range(self.path, start, end, chunk_size=self.chunk_size)


@dataclass(slots=True, frozen=True)
class MemoryByteSource:
    """Byte source backed by an immutable ``bytes`` buffer."""

    data: bytes
    chunk_size: int = DEFAULT_CHUNK_SIZE

    def __post_init__(self) -> None:
        if self.chunk_size <= 0:
            msg = f"chunk_size must be positive, got {self.chunk_size}"
            raise ValueError(msg)

    @property
    def total_length(self) -> int:
        return len(self.data)

    async def read(self, start: int, end: int) -> AsyncGenerator[bytes, None]:
        view = memoryview(self.data)
        for offset in range(start, end, self.chunk_size):
            yield bytes(view[offset : min(offset + self.chunk_size, end)])
