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

"""Tests for ``Directory`` handles."""

from __future__ import annotations

import asyncio
import os
import re
from pathlib import Path

import pytest

from lazyfs import Directory, EntryKind, File, HostEntry, NotFoundError, open
from lazyfs import _host


class TestMetadata:
    """Tests for path and parent metadata."""

    def test_path_parts(self, fixtures: Path) -> None:
        directory = open(fixtures)
        assert directory.path == str(fixtures)
        assert directory.name == "fixtures"
        assert directory.dirname == str(fixtures.parent)

    def test_dir_is_parent(self, fixtures: Path) -> None:
        assert open(fixtures).dir.name == fixtures.parent.name

    def test_path_stays_stable_after_rename(self, fixtures: Path) -> None:
        directory = open(fixtures)
        fixtures.rename(fixtures.with_name("renamed"))
        assert directory.path == str(fixtures)
        assert directory.name == "fixtures"

    def test_rejects_non_positive_chunk_size(self, fixtures: Path) -> None:
        with pytest.raises(ValueError, match="chunk_size"):
            Directory(str(fixtures), chunk_size=0)


class TestListing:
    """Tests for ``entry_names`` and ``entries``."""

    def test_entry_names(self, fixtures: Path) -> None:
        assert open(fixtures).entry_names() == [
            "a.txt",
            "b.txt",
            "c.txt",
            "sub",
            "sub2",
        ]

    def test_entries_carry_kind(self, fixtures: Path) -> None:
        entries = open(fixtures).entries()
        assert [entry.name for entry in entries] == [
            "a.txt",
            "b.txt",
            "c.txt",
            "sub",
            "sub2",
        ]
        assert [entry.is_directory for entry in entries] == [
            False,
            False,
            False,
            True,
            True,
        ]

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="named pipes unsupported")
    def test_entries_report_fifos(self, fixtures: Path) -> None:
        os.mkfifo(fixtures / "pipe")
        entry = next(e for e in open(fixtures).entries() if e.name == "pipe")
        assert entry.is_fifo
        assert not entry.is_file
        assert not entry.is_directory
        assert not entry.is_socket
        assert [file.name for file in open(fixtures).files()] == [
            "a.txt",
            "b.txt",
            "c.txt",
        ]

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_entries_report_symlinks(self, fixtures: Path) -> None:
        (fixtures / "link.txt").symlink_to(fixtures / "a.txt")
        (fixtures / "dangling").symlink_to(fixtures / "missing")
        entries = {e.name: e for e in open(fixtures).entries()}
        assert entries["link.txt"].is_file
        assert entries["link.txt"].is_symbolic_link
        assert entries["dangling"].kind == EntryKind(is_symbolic_link=True)

    def test_listing_is_live(self, fixtures: Path) -> None:
        directory = open(fixtures)
        assert "d.txt" not in directory.entry_names()
        _ = (fixtures / "d.txt").write_text("d")
        assert "d.txt" in directory.entry_names()

    def test_listing_repeats_in_same_order(self, fixtures: Path) -> None:
        directory = open(fixtures)
        assert directory.entry_names() == directory.entry_names()


class TestLookup:
    """Tests for ``file`` and ``subdir``."""

    def test_file_returns_handle(self, fixtures: Path) -> None:
        file = open(fixtures).file("a.txt")
        assert isinstance(file, File)
        assert file.name == "a.txt"

    def test_file_missing_returns_none(self, fixtures: Path) -> None:
        assert open(fixtures).file("does-not-exist.txt") is None

    def test_file_on_directory_returns_none(self, fixtures: Path) -> None:
        assert open(fixtures).file("sub") is None

    def test_subdir_returns_handle(self, fixtures: Path) -> None:
        sub = open(fixtures).subdir("sub")
        assert isinstance(sub, Directory)
        assert sub.name == "sub"
        assert sub.last_modified is not None

    def test_subdir_missing_returns_none(self, fixtures: Path) -> None:
        assert open(fixtures).subdir("does-not-exist") is None

    def test_subdir_on_file_returns_none(self, fixtures: Path) -> None:
        assert open(fixtures).subdir("a.txt") is None

    @pytest.mark.parametrize("name", ["", ".", "..", "sub/x", "../fixtures"])
    def test_invalid_names_return_none(self, fixtures: Path, name: str) -> None:
        directory = open(fixtures)
        assert directory.file(name) is None
        assert directory.subdir(name) is None

    def test_reads_file_contents(self, fixtures: Path) -> None:
        file = open(fixtures).file("a.txt")
        assert file is not None
        assert asyncio.run(file.text()) == "This is file a.\n"
        assert asyncio.run(file.slice(0, 5).text()) == "This "

    def test_files_inherit_chunk_size(self, fixtures: Path) -> None:
        file = Directory(str(fixtures), chunk_size=4).file("a.txt")
        assert file is not None

        async def _run() -> list[bytes]:
            return [chunk async for chunk in file.stream()]

        assert len(asyncio.run(_run())) == 4


class TestGenerators:
    """Tests for ``files`` and ``subdirs``."""

    def test_files(self, fixtures: Path) -> None:
        names = [file.name for file in open(fixtures).files()]
        assert names == ["a.txt", "b.txt", "c.txt"]

    def test_files_with_pattern(self, fixtures: Path) -> None:
        files = list(open(fixtures).files("b"))
        assert [file.name for file in files] == ["b.txt"]

    def test_files_with_compiled_pattern(self, fixtures: Path) -> None:
        files = open(fixtures).files(re.compile(r"^[ac]\."))
        assert [file.name for file in files] == ["a.txt", "c.txt"]

    def test_subdirs(self, fixtures: Path) -> None:
        names = [sub.name for sub in open(fixtures).subdirs()]
        assert names == ["sub", "sub2"]

    def test_subdirs_with_pattern(self, fixtures: Path) -> None:
        names = [sub.name for sub in open(fixtures).subdirs("2")]
        assert names == ["sub2"]

    def test_generators_are_lazy_and_restartable(self, fixtures: Path) -> None:
        directory = open(fixtures)
        iterator = directory.files()
        _ = (fixtures / "d.txt").write_text("d")
        assert [file.name for file in iterator] == ["a.txt", "b.txt", "c.txt", "d.txt"]
        (fixtures / "d.txt").unlink()
        assert [file.name for file in directory.files()] == ["a.txt", "b.txt", "c.txt"]

    def test_invalid_pattern_raises(self, fixtures: Path) -> None:
        with pytest.raises(ValueError, match="Invalid name pattern"):
            _ = list(open(fixtures).files("("))

    def test_vanished_entries_are_skipped(
        self, fixtures: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        real_list_dir = _host.list_dir

        def _list_dir(path: str) -> list[HostEntry]:
            return [
                *real_list_dir(path),
                HostEntry(name="ghost.txt", kind=EntryKind(is_file=True)),
                HostEntry(name="ghost", kind=EntryKind(is_directory=True)),
            ]

        monkeypatch.setattr(_host, "list_dir", _list_dir)
        directory = open(fixtures)
        assert [f.name for f in directory.files()] == ["a.txt", "b.txt", "c.txt"]
        assert [d.name for d in directory.subdirs()] == ["sub", "sub2"]


class TestWrite:
    """Tests for ``write`` and ``remove``."""

    def test_write_uses_file_name_only(self, fixtures: Path, tmp_path: Path) -> None:
        source = File.from_text("copied\n", tmp_path / "elsewhere" / "copy.txt")
        written = asyncio.run(open(fixtures / "sub").write(source))
        assert written.path == str(fixtures / "sub" / "copy.txt")
        assert (fixtures / "sub" / "copy.txt").read_text() == "copied\n"
        assert not (tmp_path / "elsewhere").exists()

    def test_write_copies_window_of_another_file(self, fixtures: Path) -> None:
        a = open(fixtures).file("a.txt")
        assert a is not None
        written = asyncio.run(open(fixtures / "sub2").write(a.slice(8)))
        assert written.name == "a.txt"
        assert asyncio.run(written.text()) == "file a.\n"

    def test_write_overwrites_existing_file(self, fixtures: Path) -> None:
        written = asyncio.run(open(fixtures).write(File.from_text("B", "b.txt")))
        assert written.size == 1
        assert (fixtures / "b.txt").read_text() == "B"

    def test_write_into_deleted_directory_raises(self, fixtures: Path) -> None:
        sub = open(fixtures / "sub")
        sub_path = fixtures / "sub"
        sub_path.rmdir()
        with pytest.raises(NotFoundError):
            asyncio.run(sub.write(File.from_text("x", "x.txt")))

    def test_remove_by_name(self, fixtures: Path) -> None:
        asyncio.run(open(fixtures).remove("b.txt"))
        assert not (fixtures / "b.txt").exists()

    def test_remove_by_handle(self, fixtures: Path) -> None:
        directory = open(fixtures)
        file = directory.file("c.txt")
        assert file is not None
        asyncio.run(directory.remove(file))
        assert directory.entry_names() == ["a.txt", "b.txt", "sub", "sub2"]

    def test_remove_missing_raises_not_found(self, fixtures: Path) -> None:
        with pytest.raises(NotFoundError):
            asyncio.run(open(fixtures).remove("missing.txt"))


class TestDelete:
    """Tests for recursive ``delete``."""

    def test_delete_removes_tree(self, fixtures: Path) -> None:
        _ = (fixtures / "sub" / "deep.txt").write_text("deep")
        directory = open(fixtures)
        asyncio.run(directory.delete())
        assert not fixtures.exists()
        assert directory.name == "fixtures"

    def test_delete_missing_raises_not_found(self, fixtures: Path) -> None:
        directory = open(fixtures / "sub")
        asyncio.run(directory.delete())
        with pytest.raises(NotFoundError):
            asyncio.run(directory.delete())

    def test_delete_permission_error_propagates(
        self, fixtures: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def _denied(path: str) -> None:
            raise PermissionError(f"denied: {path}")

        monkeypatch.setattr(_host, "remove_tree", _denied)
        directory = open(fixtures)
        with pytest.raises(PermissionError, match="denied"):
            asyncio.run(directory.delete())
        assert fixtures.is_dir()

    def test_remove_permission_error_propagates(
        self, fixtures: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def _denied(path: str) -> None:
            raise PermissionError(f"denied: {path}")

        monkeypatch.setattr(_host, "unlink", _denied)
        with pytest.raises(PermissionError, match="denied"):
            asyncio.run(open(fixtures).remove("a.txt"))
        assert (fixtures / "a.txt").exists()
