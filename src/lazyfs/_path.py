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

"""Path and name-pattern utilities.

Functions:
    resolve_path: Turn a user supplied path into an absolute, normalized string
    is_entry_name: Check that a string names a direct child
    child_path: Join a directory path and a single entry name
    compile_pattern: Normalize an optional name filter into a compiled regex
"""

from __future__ import annotations

import os
import re
from typing import Final

type StrPath = str | os.PathLike[str]
type NamePattern = str | re.Pattern[str]

_MATCH_ALL: Final[re.Pattern[str]] = re.compile("")


def resolve_path(path: StrPath) -> str:
    """Return ``path`` as an absolute, normalized string.

    Relative paths are resolved against the current working directory.
    Symbolic links are not followed, so the result names the entry the
    caller asked for.

    Examples:
        >>> resolve_path("/srv//data/./reports/")
        '/srv/data/reports'
    """
    return os.path.abspath(os.fspath(path))


def is_entry_name(name: str) -> bool:
    """Return True if ``name`` can name a direct child of a directory."""
    if not name or name in {".", ".."}:
        return False
    return os.sep not in name and "/" not in name


def child_path(directory: str, name: str) -> str:
    """Return the absolute path of ``name`` inside ``directory``.

    Raises:
        ValueError: If ``name`` is empty, ``.``/``..`` or contains a separator.
    """
    if not is_entry_name(name):
        msg = f"Invalid entry name: {name!r}"
        raise ValueError(msg)
    return os.path.join(directory, name)


def compile_pattern(pattern: NamePattern | None) -> re.Pattern[str]:
    """Compile an optional name filter.

    ``None`` matches every name. Strings are compiled as regular expressions
    and tested with ``search`` semantics, so ``"b"`` matches ``"b.txt"``.

    Raises:
        ValueError: If ``pattern`` is not a valid regular expression.
    """
    if pattern is None:
        return _MATCH_ALL
    if isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(pattern)
    except re.error as err:
        msg = f"Invalid name pattern: {err}"
        raise ValueError(msg) from err


__all__ = [
    "NamePattern",
    "StrPath",
    "child_path",
    "compile_pattern",
    "is_entry_name",
    "resolve_path",
]
