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

"""Directories and the handles they hand out for their children.

Listing calls go to the host every time; nothing is cached. Child lookups
treat an entry that is missing or of the wrong kind as ``None`` and never
raise for it, including when the entry vanishes between listing and stat.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import aclosing
from dataclasses import dataclass
from datetime import datetime
from typing import Final

from . import _host
from ._content import LazyContent
from ._file import File
from ._path import (
    NamePattern,
    child_path,
    compile_pattern,
    is_entry_name,
    resolve_path,
)
from ._source import HostByteSource, MemoryByteSource
from ._types import DEFAULT_CHUNK_SIZE, EntryKind, HostEntry
from .errors import NotFoundError
from .logging import StructuredLogger, get_logger

__all__ = ["Directory"]

logger: StructuredLogger = get_logger(__name__, context={"component": "directory"})

_DIRECTORY: Final[EntryKind] = EntryKind(is_directory=True)


@dataclass(slots=True, frozen=True)
class Directory:
    """A directory on the filesystem.

    ``path`` is resolved to an absolute path once, at construction. The
    ``chunk_size`` is handed to every file this directory produces.

    Example::

        fixtures = open("tests/fixtures")
        for file in fixtures.files(r"\\.txt$"):
            print(file.name, file.size)
    """

    path: str
    last_modified: datetime | None = None
    kind: EntryKind = _DIRECTORY
    chunk_size: int = DEFAULT_CHUNK_SIZE

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", resolve_path(self.path))
        if self.chunk_size <= 0:
            msg = f"chunk_size must be positive, got {self.chunk_size}"
            raise ValueError(msg)

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
        return Directory(self.dirname, chunk_size=self.chunk_size)

    def entry_names(self) -> list[str]:
        """Names of all entries, listed fresh on every call."""
        return [entry.name for entry in _host.list_dir(self.path)]

    def entries(self) -> list[HostEntry]:
        """All entries with their kind flags, listed fresh on every call."""
        return _host.list_dir(self.path)

    def file(self, name: str) -> File | None:
        """Return the regular file called ``name``, or ``None``."""
        if not is_entry_name(name):
            return None
        try:
            info = _host.stat(child_path(self.path, name))
        except NotFoundError:
            return None
        if not info.kind.is_file:
            return None
        return File.from_stat(info, chunk_size=self.chunk_size)

    def subdir(self, name: str) -> Directory | None:
        """Return the subdirectory called ``name``, or ``None``."""
        if not is_entry_name(name):
            return None
        try:
            info = _host.stat(child_path(self.path, name))
        except NotFoundError:
            return None
        if not info.kind.is_directory:
            return None
        return Directory(
            info.path,
            last_modified=info.modified_at,
            kind=info.kind,
            chunk_size=self.chunk_size,
        )

    def files(self, pattern: NamePattern | None = None) -> Iterator[File]:
        """Yield the files whose name matches ``pattern`` (a regex, searched).

        Each call lists the directory again. Entries that disappear before
        they can be stat'ed are skipped.
        """
        regex = compile_pattern(pattern)
        for entry in self.entries():
            if not entry.is_file or regex.search(entry.name) is None:
                continue
            file = self.file(entry.name)
            if file is None:
                self._log_vanished(entry.name)
                continue
            yield file

    def subdirs(self, pattern: NamePattern | None = None) -> Iterator[Directory]:
        """Yield the subdirectories whose name matches ``pattern``."""
        regex = compile_pattern(pattern)
        for entry in self.entries():
            if not entry.is_directory or regex.search(entry.name) is None:
                continue
            subdir = self.subdir(entry.name)
            if subdir is None:
                self._log_vanished(entry.name)
                continue
            yield subdir

    async def write(self, file: File) -> File:
        """Write ``file``'s bytes into this directory under ``file.name``.

        The stored ``dirname`` of ``file`` is ignored. Any existing file of the
        same name is truncated and rewritten chunk by chunk.

        Returns:
            A fresh handle reflecting the written file's size and mtime.

        Raises:
            NotFoundError: If this directory is missing, or the written file
                is removed before it can be re-opened.
        """
        destination = child_path(self.path, file.name)
        content = file.content
        if _reads_from(content, destination):
            # Opening the sink truncates the destination, so read the window first.
            content = LazyContent(MemoryByteSource(await content.bytes()))

        sink = await _host.HostWriteSink.open(destination)
        async with sink, aclosing(content.stream()) as chunks:
            _ = await sink.write_all(chunks)

        logger.debug(
            "directory.write",
            event="directory.write",
            context={"path": destination, "bytes_written": sink.bytes_written},
        )
        written = self.file(file.name)
        if written is None:
            raise NotFoundError(f'File "{destination}" does not exist')
        return written

    async def remove(self, file: File | str) -> None:
        """Delete the child file given by handle or by name.

        Raises:
            NotFoundError: If no such file exists.
        """
        name = file.name if isinstance(file, File) else file
        target = child_path(self.path, name)
        await _host.unlink(target)
        logger.debug(
            "directory.remove",
            event="directory.remove",
            context={"path": target},
        )

    async def delete(self) -> None:
        """Recursively delete this directory. The handle itself stays usable.

        Raises:
            NotFoundError: If the directory is already gone or vanishes midway.
            PermissionError: If an entry cannot be removed.
        """
        await _host.remove_tree(self.path)
        logger.debug(
            "directory.delete",
            event="directory.delete",
            context={"path": self.path},
        )

    def _log_vanished(self, name: str) -> None:
        logger.debug(
            "directory.skip_vanished",
            event="directory.skip_vanished",
            context={"directory": self.path, "name": name},
        )


def _reads_from(content: LazyContent, path: str) -> bool:
    source = content.source
    if not isinstance(source, HostByteSource):
        return False
    try:
        return os.path.samefile(source.path, path)
    except FileNotFoundError:
        return False
