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

"""Files and directories as lazy, path-aware blobs.

``lazyfs`` exposes on-disk files through the same slice/stream/text/bytes
contract as in-memory buffers. Content is read only when requested and only
for the selected byte range.

Example usage::

    import asyncio

    import lazyfs

    fixtures = lazyfs.open("tests/fixtures")
    print(fixtures.entry_names())

    a = fixtures.file("a.txt")
    print(asyncio.run(a.slice(0, 5).text()))

    note = lazyfs.File.from_text("hello\\n", "note.txt")
    saved = asyncio.run(fixtures.write(note))
"""

from __future__ import annotations

from ._content import LazyContent
from ._directory import Directory
from ._file import File, lookup_content_type
from ._open import open, open_directory, open_file  # noqa: A004
from ._source import ByteSource, HostByteSource, MemoryByteSource
from ._types import DEFAULT_CHUNK_SIZE, EntryKind, HostEntry, HostStat
from .errors import LazyFsError, NotFoundError, WrongKindError

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "ByteSource",
    "Directory",
    "EntryKind",
    "File",
    "HostByteSource",
    "HostEntry",
    "HostStat",
    "LazyContent",
    "LazyFsError",
    "MemoryByteSource",
    "NotFoundError",
    "WrongKindError",
    "lookup_content_type",
    "open",
    "open_directory",
    "open_file",
]
