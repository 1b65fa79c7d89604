"""Tests for the Source Loader."""

from collections.abc import Callable
from pathlib import Path

import pytest

from genmock.config.packages import PackageRef
from genmock.core.errors import ErrorCode, SourceError
from genmock.golang.loader import load_package, parse_source


class TestParseSource:
    """parse_source tests."""

    def test_parses_file_and_reads_package(self, write_go: Callable[[str, str], Path]) -> None:
        path = write_go("foo.go", "package foo\n\ntype X int\n")

        source_file = parse_source(path)

        assert source_file.package == "foo"
        assert source_file.path == path
        assert source_file.root.type == "source_file"

    def test_parses_given_content(self, tmp_path: Path) -> None:
        source_file = parse_source(tmp_path / "virtual.go", b"package virt\n")

        assert source_file.package == "virt"

    def test_syntax_error_is_fatal(self, write_go: Callable[[str, str], Path]) -> None:
        path = write_go("bad.go", "package bad\n\ntype X interface {\n    Foo(\n")

        with pytest.raises(SourceError) as exc_info:
            parse_source(path)

        assert exc_info.value.code == ErrorCode.SOURCE_PARSE_ERROR

    def test_missing_file_is_unreadable(self, tmp_path: Path) -> None:
        with pytest.raises(SourceError) as exc_info:
            parse_source(tmp_path / "missing.go")

        assert exc_info.value.code == ErrorCode.SOURCE_UNREADABLE


class TestLoadPackage:
    """load_package tests."""

    def test_single_file(self, write_go: Callable[[str, str], Path]) -> None:
        path = write_go("foo.go", "package foo\n")

        units = load_package(PackageRef(source=path))

        assert len(units) == 1
        assert [f.path for f in units[0].files] == [path]

    def test_directory_files_in_lexical_order(
        self, tmp_path: Path, write_go: Callable[[str, str], Path]
    ) -> None:
        write_go("pkg/b.go", "package pkg\n")
        write_go("pkg/a.go", "package pkg\n")
        write_go("pkg/c.go", "package pkg\n")

        units = load_package(PackageRef(source=tmp_path / "pkg", directory=tmp_path / "pkg"))

        assert [f.path.name for f in units[0].files] == ["a.go", "b.go", "c.go"]

    def test_directory_grouped_by_package(
        self, tmp_path: Path, write_go: Callable[[str, str], Path]
    ) -> None:
        write_go("pkg/a_test.go", "package pkg_test\n")
        write_go("pkg/a.go", "package pkg\n")

        units = load_package(PackageRef(source=tmp_path / "pkg", directory=tmp_path / "pkg"))

        assert [u.package for u in units] == ["pkg", "pkg_test"]

    def test_excludes_output_file_and_subdirectories(
        self, tmp_path: Path, write_go: Callable[[str, str], Path]
    ) -> None:
        write_go("pkg/a.go", "package pkg\n")
        write_go("pkg/mockfooer.go", "this is not go")
        write_go("pkg/sub/b.go", "package sub\n")
        write_go("pkg/notes.txt", "ignored")

        units = load_package(
            PackageRef(source=tmp_path / "pkg", directory=tmp_path / "pkg"),
            exclude=tmp_path / "pkg" / "mockfooer.go",
        )

        assert [u.package for u in units] == ["pkg"]
        assert [f.path.name for f in units[0].files] == ["a.go"]

    def test_same_name_in_other_directory_is_not_excluded(
        self, tmp_path: Path, write_go: Callable[[str, str], Path]
    ) -> None:
        """Only the exact output path is skipped, not every file with its name."""
        write_go("store/store.go", "package store\n")

        units = load_package(
            PackageRef(source=tmp_path / "store", directory=tmp_path / "store"),
            exclude=tmp_path / "mocks" / "store.go",
        )

        assert [f.path.name for f in units[0].files] == ["store.go"]

    def test_missing_directory_is_unreadable(self, tmp_path: Path) -> None:
        missing = tmp_path / "nope"

        with pytest.raises(SourceError) as exc_info:
            load_package(PackageRef(source=missing, directory=missing))

        assert exc_info.value.code == ErrorCode.SOURCE_UNREADABLE
