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

"""Entry points that resolve a path into a ``Directory`` or ``File``.

Each call stats the path, creates it when missing and allowed, checks its
kind and builds the handle. Nothing is remembered between calls.
"""

from __future__ import annotations

from collections.abc import Callable

from . import _host
from ._directory import Directory
from ._file import File
from ._path import StrPath, resolve_path
from ._types import DEFAULT_CHUNK_SIZE, HostStat
from .errors import NotFoundError, WrongKindError
from .logging import StructuredLogger, get_logger

__all__ = ["open", "open_directory", "open_file"]

logger: StructuredLogger = get_logger(__name__, context={"component": "resolver"})


def _stat_or_create(
    path: str,
    *,
    label: str,
    auto_create: bool,
    create: Callable[[str], None],
) -> HostStat:
    try:
        return _host.stat(path)
    except NotFoundError:
        if not auto_create:
            raise NotFoundError(f'{label} "{path}" does not exist') from None

    create(path)
    logger.debug(
        "resolver.create",
        event="resolver.create",
        context={"path": path, "kind": label.lower()},
    )
    return _host.stat(path)


def open_directory(
    path: StrPath,
    *,
    auto_create: bool = True,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Directory:
    """Open and return the directory at ``path``.

    By default a missing directory is created, including missing parents.
    Opt out with ``auto_create=False``.

    Raises:
        NotFoundError: If the directory is missing and ``auto_create`` is False.
        WrongKindError: If ``path`` exists but is not a directory.
    """
    resolved = resolve_path(path)
    info = _stat_or_create(
        resolved, label="Directory", auto_create=auto_create, create=_host.make_dir
    )
    if not info.kind.is_directory:
        raise WrongKindError(f'Path "{resolved}" is not a directory')
    return Directory(
        resolved,
        last_modified=info.modified_at,
        kind=info.kind,
        chunk_size=chunk_size,
    )


def open_file(
    path: StrPath,
    *,
    auto_create: bool = True,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> File:
    """Open and return the regular file at ``path``.

    By default a missing file is created empty; its parent directory must
    already exist. Opt out with ``auto_create=False``.

    Raises:
        NotFoundError: If the file is missing and ``auto_create`` is False, or
            its parent directory is missing.
        WrongKindError: If ``path`` exists but is not a regular file.
    """
    resolved = resolve_path(path)
    info = _stat_or_create(
        resolved, label="File", auto_create=auto_create, create=_host.touch
    )
    if not info.kind.is_file:
        raise WrongKindError(f'Path "{resolved}" is not a file')
    return File.from_stat(info, chunk_size=chunk_size)


open = open_directory  # noqa: A001
