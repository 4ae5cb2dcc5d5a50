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

"""Base exception hierarchy for :mod:`lazyfs`."""

from __future__ import annotations


class LazyFsError(Exception):
    """Base class for all lazyfs exceptions.

    Catch this to handle any library-specific failure with a single handler
    while letting other host errors (``PermissionError``, disk full and so on)
    propagate as the builtin ``OSError`` subclasses they already are.

    Example:
        Catch any lazyfs-specific error::

            try:
                directory = open("data", auto_create=False)
            except LazyFsError as e:
                logger.error("Cannot open data directory: %s", e)

    Note:
        Subclasses also inherit from standard exception types so callers that
        already catch ``FileNotFoundError`` or ``ValueError`` keep working.
    """


class NotFoundError(LazyFsError, FileNotFoundError):
    """Raised when a path that is required to exist is absent.

    The host layer converts every "no such file or directory" failure into
    this type, so callers never have to inspect ``errno`` themselves.

    Common scenarios:
        - Resolving a missing path with ``auto_create=False``
        - Reading a file that was deleted after its handle was created
        - Deleting a file that is already gone

    Example:
        Handling a stale handle::

            file = directory.file("report.csv")
            await file.delete()
            try:
                await file.text()
            except NotFoundError:
                ...

    Note:
        This exception also inherits from ``FileNotFoundError``.
    """


class WrongKindError(LazyFsError, ValueError):
    """Raised when a path exists but is not the kind of entry requested.

    ``open`` requires a directory and ``open_file`` requires a regular file.
    Lookup helpers such as ``Directory.file`` return ``None`` instead of
    raising this error.

    Note:
        This exception also inherits from ``ValueError``.
    """


__all__ = [
    "LazyFsError",
    "NotFoundError",
    "WrongKindError",
]
