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

"""Tests for the ``open`` / ``open_file`` resolvers."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

import lazyfs
from lazyfs import (
    Directory,
    File,
    LazyFsError,
    NotFoundError,
    WrongKindError,
    open,
    open_directory,
    open_file,
)


class TestOpen:
    """Tests for opening directories."""

    def test_open_is_open_directory(self) -> None:
        assert lazyfs.open is open_directory

    def test_opens_existing_directory(self, fixtures: Path) -> None:
        directory = open(fixtures)
        assert isinstance(directory, Directory)
        assert directory.path == str(fixtures)
        assert directory.last_modified is not None
        assert directory.kind.is_directory

    def test_creates_missing_directory(self, fixtures: Path) -> None:
        target = fixtures / "does-not-exist"
        directory = open(target)
        assert target.is_dir()
        assert directory.name == "does-not-exist"
        assert directory.path == str(target)
        assert directory.dirname == str(fixtures)
        asyncio.run(directory.delete())
        assert not target.exists()

    def test_creates_missing_parents(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "c"
        assert open(target).name == "c"
        assert target.is_dir()

    def test_missing_without_auto_create_raises(self, tmp_path: Path) -> None:
        target = tmp_path / "missing-dir"
        with pytest.raises(NotFoundError, match="missing-dir"):
            _ = open(target, auto_create=False)
        assert not target.exists()

    def test_file_path_raises_wrong_kind(self, fixtures: Path) -> None:
        with pytest.raises(WrongKindError, match="is not a directory"):
            _ = open(fixtures / "a.txt")

    def test_errors_share_a_base_class(self, fixtures: Path) -> None:
        with pytest.raises(LazyFsError):
            _ = open(fixtures / "a.txt")
        with pytest.raises(LazyFsError):
            _ = open(fixtures / "nope", auto_create=False)

    def test_relative_path_is_resolved(
        self, fixtures: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(fixtures)
        assert open("sub").path == str(fixtures / "sub")

    def test_permission_errors_propagate(
        self, fixtures: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def _denied(path: str) -> None:
            raise PermissionError(f"denied: {path}")

        monkeypatch.setattr(lazyfs._host, "make_dir", _denied)
        with pytest.raises(PermissionError, match="denied"):
            _ = open(fixtures / "new")


class TestOpenFile:
    """Tests for opening files."""

    def test_opens_existing_file(self, fixtures: Path) -> None:
        path = fixtures / "a.txt"
        file = open_file(path)
        assert isinstance(file, File)
        assert file.name == "a.txt"
        assert file.path == str(path)
        assert file.dirname == str(fixtures)
        assert asyncio.run(file.text()) == "This is file a.\n"

    def test_creates_missing_file(self, fixtures: Path) -> None:
        path = fixtures / "does-not-exist.txt"
        file = open_file(path)
        assert path.is_file()
        assert file.name == "does-not-exist.txt"
        assert file.size == 0
        assert asyncio.run(file.text()) == ""
        asyncio.run(file.delete())
        assert not path.exists()

    def test_missing_without_auto_create_raises(self, fixtures: Path) -> None:
        path = fixtures / "does-not-exist.txt"
        with pytest.raises(NotFoundError, match="does-not-exist.txt"):
            _ = open_file(path, auto_create=False)
        assert not path.exists()

    def test_missing_parent_raises_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(NotFoundError, match="Parent directory"):
            _ = open_file(tmp_path / "nowhere" / "file.txt")

    def test_directory_path_raises_wrong_kind(self, fixtures: Path) -> None:
        with pytest.raises(WrongKindError, match="is not a file"):
            _ = open_file(fixtures / "sub")

    def test_wrong_kind_is_a_value_error(self, fixtures: Path) -> None:
        with pytest.raises(ValueError):
            _ = open_file(fixtures / "sub")
