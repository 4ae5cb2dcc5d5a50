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

"""Value types shared by the host layer and the entry handles.

All types are immutable frozen dataclasses. They capture what the host
reported at discovery time and are never refreshed afterwards.

- **Kind flags**: ``EntryKind`` - file/directory/symlink/socket/FIFO booleans
- **Host metadata**: ``HostStat``, ``HostEntry`` - results of stat and listing

Constants:

- ``DEFAULT_CHUNK_SIZE``: Upper bound on a single streamed chunk (64KB)
"""

from __future__ import annotations

import os
import stat as stat_module
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Final

DEFAULT_CHUNK_SIZE: Final[int] = 65_536


@dataclass(slots=True, frozen=True)
class EntryKind:
    """Kind flags of a filesystem entry, captured once at discovery.

    Attributes:
        is_file: True if the entry is a regular file.
        is_directory: True if the entry is a directory.
        is_symbolic_link: True if the path itself is a symbolic link.
        is_socket: True if the entry is a Unix domain socket.
        is_fifo: True if the entry is a named pipe.
    """

    is_file: bool = False
    is_directory: bool = False
    is_symbolic_link: bool = False
    is_socket: bool = False
    is_fifo: bool = False

    @classmethod
    def from_mode(cls, mode: int, *, is_symbolic_link: bool = False) -> EntryKind:
        """Build flags from an ``st_mode`` value."""
        return cls(
            is_file=stat_module.S_ISREG(mode),
            is_directory=stat_module.S_ISDIR(mode),
            is_symbolic_link=is_symbolic_link,
            is_socket=stat_module.S_ISSOCK(mode),
            is_fifo=stat_module.S_ISFIFO(mode),
        )


REGULAR_FILE: Final[EntryKind] = EntryKind(is_file=True)


@dataclass(slots=True, frozen=True)
class HostStat:
    """Metadata returned by the host ``stat`` primitive.

    Attributes:
        path: Absolute path that was inspected.
        size: Size in bytes at the time of the call.
        modified_at: Last modification time (UTC).
        kind: Kind flags of the entry.

    Example::

        info = stat("/srv/data/report.csv")
        if info.kind.is_file and info.size > 0:
            ...
    """

    path: str
    size: int
    modified_at: datetime
    kind: EntryKind

    @classmethod
    def from_stat_result(
        cls, path: str, result: os.stat_result, *, is_symbolic_link: bool = False
    ) -> HostStat:
        """Convert an ``os.stat_result`` into a ``HostStat``."""
        return cls(
            path=path,
            size=result.st_size,
            modified_at=datetime.fromtimestamp(result.st_mtime, tz=UTC),
            kind=EntryKind.from_mode(
                result.st_mode, is_symbolic_link=is_symbolic_link
            ),
        )


@dataclass(slots=True, frozen=True)
class HostEntry:
    """Directory listing entry returned by the host ``list_dir`` primitive.

    Kind flags follow symlinks, so a link to a regular file reports
    ``is_file=True`` and ``is_symbolic_link=True``.

    Attributes:
        name: Entry name without any directory part.
        kind: Kind flags of the entry.
    """

    name: str
    kind: EntryKind

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


__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "REGULAR_FILE",
    "EntryKind",
    "HostEntry",
    "HostStat",
]
