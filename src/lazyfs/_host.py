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

"""Host filesystem primitives.

Every call that touches the local disk goes through this module. Metadata
operations (stat, listing, creation) are synchronous; content reads, writes
and deletions are coroutines backed by ``aiofiles`` so they suspend the
calling task instead of the event loop.

A missing path always surfaces as :class:`~lazyfs.errors.NotFoundError`.
Any other ``OSError`` propagates unchanged.

Example usage::

    info = stat("/srv/data/report.csv")
    async for chunk in read_range(info.path, 0, info.size):
        consume(chunk)
"""

from __future__ import annotations

import asyncio
import os
import shutil
from collections.abc import AsyncGenerator, AsyncIterable
from dataclasses import dataclass, field
from typing import Any, Self

import aiofiles
import aiofiles.os

from ._types import DEFAULT_CHUNK_SIZE, EntryKind, HostEntry, HostStat
from .errors import NotFoundError

__all__ = [
    "HostWriteSink",
    "list_dir",
    "make_dir",
    "read_range",
    "remove_tree",
    "stat",
    "touch",
    "unlink",
]


def stat(path: str) -> HostStat:
    """Return metadata for ``path``, following symbolic links.

    Raises:
        NotFoundError: If nothing exists at ``path``.
    """
    try:
        result = os.stat(path)
    except FileNotFoundError:
        raise NotFoundError(f'Path "{path}" does not exist') from None
    return HostStat.from_stat_result(
        path, result, is_symbolic_link=os.path.islink(path)
    )


def list_dir(path: str) -> list[HostEntry]:
    """List the entries of ``path`` ordered by name.

    Raises:
        NotFoundError: If the directory does not exist.
        NotADirectoryError: If ``path`` is not a directory.
    """
    try:
        with os.scandir(path) as iterator:
            entries = [
                HostEntry(name=item.name, kind=_entry_kind(item))
                for item in iterator
            ]
    except FileNotFoundError:
        raise NotFoundError(f'Directory "{path}" does not exist') from None
    entries.sort(key=lambda e: e.name)
    return entries


def _entry_kind(item: os.DirEntry[str]) -> EntryKind:
    is_symbolic_link = item.is_symlink()
    try:
        mode = item.stat().st_mode
    except FileNotFoundError:
        # Dangling symlink, or the entry vanished after it was listed.
        return EntryKind(is_symbolic_link=is_symbolic_link)
    return EntryKind.from_mode(mode, is_symbolic_link=is_symbolic_link)


def make_dir(path: str) -> None:
    """Create ``path`` and any missing parents. Existing directories are kept."""
    os.makedirs(path, exist_ok=True)


def touch(path: str) -> None:
    """Create an empty file at ``path`` if it does not exist yet.

    Raises:
        NotFoundError: If the parent directory does not exist.
    """
    try:
        with open(path, "ab"):
            pass
    except FileNotFoundError:
        raise NotFoundError(
            f'Parent directory "{os.path.dirname(path)}" does not exist'
        ) from None


async def read_range(
    path: str,
    start: int,
    end: int,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> AsyncGenerator[bytes, None]:
    """Yield the bytes of ``[start, end)`` from the file at ``path``.

    The file is opened when iteration begins and closed when the generator
    finishes, fails or is closed early with ``aclose()``. Chunks are at most
    ``chunk_size`` bytes. If the file shrank since ``end`` was computed the
    stream stops at the current end of file. An empty range still opens the
    file, so a vanished file is reported either way.

    Raises:
        NotFoundError: If the file no longer exists when reading begins.
    """
    try:
        handle = await aiofiles.open(path, "rb")
    except FileNotFoundError:
        raise NotFoundError(f'File "{path}" does not exist') from None
    try:
        if end <= start:
            return
        _ = await handle.seek(start)
        remaining = end - start
        while remaining > 0:
            chunk = await handle.read(min(chunk_size, remaining))
            if not chunk:
                break
            remaining -= len(chunk)
            yield chunk
    finally:
        await handle.close()


async def unlink(path: str) -> None:
    """Remove the file at ``path``.

    Raises:
        NotFoundError: If the file is already absent.
    """
    try:
        await aiofiles.os.remove(path)
    except FileNotFoundError:
        raise NotFoundError(f'File "{path}" does not exist') from None


async def remove_tree(path: str) -> None:
    """Recursively remove the directory at ``path`` in a worker thread.

    Raises:
        NotFoundError: If the directory is absent, including when a
            concurrent deletion removes it mid-operation.
    """
    try:
        await asyncio.to_thread(shutil.rmtree, path)
    except FileNotFoundError:
        raise NotFoundError(f'Directory "{path}" does not exist') from None


@dataclass(slots=True)
class HostWriteSink:
    """Ordered byte sink writing straight into a destination file.

    The destination is truncated when the sink opens. There is no temp file
    and no rename: if a write fails, the handle is closed and the partially
    written file is left as the host produced it.

    Example::

        sink = await HostWriteSink.open("/srv/out.bin")
        async with sink:
            await sink.write_all(content.stream())
    """

    _path: str
    _handle: Any
    _bytes_written: int = field(default=0, init=False)
    _closed: bool = field(default=False, init=False)

    @classmethod
    async def open(cls, path: str) -> HostWriteSink:
        """Open ``path`` for writing, truncating any existing file.

        Raises:
            NotFoundError: If the parent directory does not exist.
        """
        try:
            handle = await aiofiles.open(path, "wb")
        except FileNotFoundError:
            raise NotFoundError(
                f'Parent directory "{os.path.dirname(path)}" does not exist'
            ) from None
        return cls(_path=path, _handle=handle)

    @property
    def path(self) -> str:
        """Destination path."""
        return self._path

    @property
    def bytes_written(self) -> int:
        """Total bytes written so far."""
        return self._bytes_written

    @property
    def closed(self) -> bool:
        """True once the sink has been closed."""
        return self._closed

    def _check_closed(self) -> None:
        if self._closed:
            msg = "I/O operation on closed sink"
            raise ValueError(msg)

    async def write(self, data: bytes) -> int:
        """Append ``data`` to the destination."""
        self._check_closed()
        written: int = await self._handle.write(data)
        self._bytes_written += written
        return written

    async def write_all(self, chunks: AsyncIterable[bytes]) -> int:
        """Drain ``chunks`` into the destination in order."""
        self._check_closed()
        total = 0
        async for chunk in chunks:
            total += await self.write(chunk)
        return total

    async def close(self) -> None:
        """Flush and close the destination. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        try:
            await self._handle.flush()
        finally:
            await self._handle.close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        await self.close()
