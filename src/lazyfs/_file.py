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

"""Regular files as path-aware lazy blobs.

A ``File`` pairs a ``LazyContent`` window with the metadata captured when the
file was discovered. Reading is delegated to the window; ``save`` and
``delete`` act on the host filesystem at ``path``.
"""

from __future__ import annotations

import builtins
import mimetypes
import os
from collections.abc import AsyncGenerator
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from . import _host
from ._content import LazyContent
from ._path import StrPath, resolve_path
from ._source import HostByteSource, MemoryByteSource
from ._types import DEFAULT_CHUNK_SIZE, REGULAR_FILE, EntryKind, HostStat
from .logging import StructuredLogger, get_logger

if TYPE_CHECKING:
    from ._directory import Directory

__all__ = ["File", "lookup_content_type"]

logger: StructuredLogger = get_logger(__name__, context={"component": "file"})


def lookup_content_type(name: str) -> str:
    """Return the MIME type implied by the extension of ``name``, or ``""``."""
    content_type, _ = mimetypes.guess_type(name, strict=False)
    return content_type or ""


@dataclass(slots=True, frozen=True)
class File:
    """A regular file on the filesystem.

    ``path`` is resolved to an absolute path once, at construction, and never
    re-derived from the disk. When ``content_type`` is omitted it is looked up
    from the extension of ``path``; pass ``""`` to leave it unset.

    Example::

        report = open_file("reports/q3.csv")
        header = await report.slice(0, 256).text()
    """

    path: str
    content: LazyContent
    content_type: str | None = None
    last_modified: datetime | None = None
    kind: EntryKind = REGULAR_FILE

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", resolve_path(self.path))
        if self.content_type is None:
            object.__setattr__(self, "content_type", lookup_content_type(self.path))

    @classmethod
    def from_stat(
        cls, info: HostStat, *, chunk_size: int = DEFAULT_CHUNK_SIZE
    ) -> File:
        """Build a file whose content lazily reads ``info.path`` from disk."""
        source = HostByteSource(info.path, info.size, chunk_size=chunk_size)
        return cls(
            path=info.path,
            content=LazyContent(source),
            last_modified=info.modified_at,
            kind=info.kind,
        )

    @classmethod
    def from_bytes(
        cls,
        data: builtins.bytes,
        name: StrPath,
        *,
        content_type: str | None = None,
    ) -> File:
        """Build an in-memory file that can later be saved or written."""
        return cls(
            path=os.fspath(name),
            content=LazyContent(MemoryByteSource(data)),
            content_type=content_type,
        )

    @classmethod
    def from_text(
        cls,
        text: str,
        name: StrPath,
        *,
        content_type: str | None = None,
        encoding: str = "utf-8",
    ) -> File:
        """Build an in-memory file holding ``text`` encoded with ``encoding``."""
        return cls.from_bytes(text.encode(encoding), name, content_type=content_type)

    @property
    def name(self) -> str:
        """Final segment of ``path``."""
        return os.path.basename(self.path)

    @property
    def dirname(self) -> str:
        """Absolute path of the parent directory."""
        return os.path.dirname(self.path)

    @property
    def dir(self) -> Directory:
        """The parent directory. Does not touch the disk."""
        from ._directory import Directory

        return Directory(self.dirname)

    @property
    def byte_length(self) -> int:
        return self.content.byte_length

    @property
    def size(self) -> int:
        return self.content.byte_length

    @property
    def is_file(self) -> bool:
        return self.kind.is_file

    @property
    def is_directory(self) -> bool:
        return self.kind.is_directory

    @property
    def is_symbolic_link(self) -> bool:
        return self.kind.is_symbolic_link

    @property
    def is_socket(self) -> bool:
        return self.kind.is_socket

    @property
    def is_fifo(self) -> bool:
        return self.kind.is_fifo

    def stat(self) -> HostStat:
        """Stat ``path`` now. Unlike the handle's fields this is never cached.

        Raises:
            NotFoundError: If the file no longer exists.
        """
        return _host.stat(self.path)

    def slice(
        self,
        start: int | None = None,
        end: int | None = None,
        content_type: str | None = None,
    ) -> File:
        """Return a file over a narrower window of the same bytes.

        The result keeps this file's ``path``, ``last_modified`` and kind
        flags. Its ``content_type`` is the one given here, or empty.
        """
        return File(
            path=self.path,
            content=self.content.slice(start, end),
            content_type=content_type or "",
            last_modified=self.last_modified,
            kind=self.kind,
        )

    def stream(self) -> AsyncGenerator[builtins.bytes, None]:
        """Start a fresh read of the current window. See ``LazyContent.stream``."""
        return self.content.stream()

    async def text(self, encoding: str = "utf-8", errors: str = "strict") -> str:
        return await self.content.text(encoding, errors)

    async def bytes(self) -> builtins.bytes:
        return await self.content.bytes()

    async def save(self) -> File:
        """Write the current window to ``path`` and return the re-opened file.

        The parent directory is created if missing. An existing file at
        ``path`` is overwritten in place; a failure mid-write raises and leaves
        the destination as the host left it.
        """
        from ._open import open_directory

        return await open_directory(self.dirname).write(self)

    async def delete(self) -> None:
        """Remove ``path`` from disk. The handle itself stays usable.

        Raises:
            NotFoundError: If the file is already absent.
        """
        await _host.unlink(self.path)
        logger.debug(
            "file.delete",
            event="file.delete",
            context={"path": self.path},
        )
