"""Tests for the genmock command."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from genmock.cli.main import cli

runner = CliRunner()


class TestValidation:
    """Flag validation."""

    @pytest.mark.parametrize(
        "args",
        [
            ["--interface", "Fooer", "--mock-package", "mocks"],
            ["--package", "foo.go", "--mock-package", "mocks"],
            ["--package", "foo.go", "--interface", "Fooer"],
        ],
    )
    def test_given_missing_required_flag_then_usage_and_exit_2(self, args: list[str]) -> None:
        result = runner.invoke(cli, args)

        assert result.exit_code == 2
        assert "Usage:" in result.output

    def test_given_invalid_identifier_then_usage_and_exit_2(self, fooer_go: Path) -> None:
        result = runner.invoke(
            cli,
            ["--package", str(fooer_go), "--interface", "Foo-er", "--mock-package", "mocks"],
        )

        assert result.exit_code == 2
        assert "Usage:" in result.output
        assert "interface" in result.output


class TestGenerate:
    """Successful and failing generation runs."""

    def test_given_interface_when_run_then_writes_default_outfile(
        self, tmp_path: Path, fooer_go: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        # Given
        monkeypatch.chdir(tmp_path)

        # When
        result = runner.invoke(
            cli,
            ["--package", str(fooer_go), "--interface", "Fooer", "--mock-package", "mocks"],
        )

        # Then
        assert result.exit_code == 0, result.output
        outfile = tmp_path / "mockfooer.go"
        assert outfile.exists()
        assert outfile.read_text().startswith("package mocks\n")
        assert "Wrote" in result.output
        assert "2 methods" in result.output

    def test_given_outfile_and_mock_name_then_used(self, tmp_path: Path, fooer_go: Path) -> None:
        outfile = tmp_path / "fakes.go"

        result = runner.invoke(
            cli,
            [
                "--package",
                str(fooer_go),
                "--interface",
                "Fooer",
                "--mock-package",
                "fakes",
                "--outfile",
                str(outfile),
                "--mock",
                "FakeFooer",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "type FakeFooer struct {" in outfile.read_text()

    def test_given_unknown_interface_then_exit_2_and_no_file(
        self, tmp_path: Path, fooer_go: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(
            cli,
            ["--package", str(fooer_go), "--interface", "Nope", "--mock-package", "mocks"],
        )

        assert result.exit_code == 2
        assert "Interface Nope not found" in result.output
        assert not (tmp_path / "mocknope.go").exists()

    def test_given_unparseable_source_then_exit_2(
        self, tmp_path: Path, write_go, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        path = write_go("bad.go", "package bad\n\ntype X interface {\n")

        result = runner.invoke(
            cli, ["--package", str(path), "--interface", "X", "--mock-package", "mocks"]
        )

        assert result.exit_code == 2
        assert "Failed to parse" in result.output

    def test_given_directory_package_then_mock_imports_it(self, go_module: Path) -> None:
        outfile = go_module / "mocks" / "mockstore.go"

        result = runner.invoke(
            cli,
            [
                "--package",
                str(go_module / "store"),
                "--interface",
                "Store",
                "--mock-package",
                "mocks",
                "--outfile",
                str(outfile),
            ],
        )

        assert result.exit_code == 0, result.output
        assert 'utmocklocal "example.com/proj/store"' in outfile.read_text()

    def test_given_skipped_method_then_warns(self, tmp_path: Path, write_go) -> None:
        path = write_go("clash.go", "package clash\n\ntype C interface {\n    SetReturns()\n}\n")

        result = runner.invoke(
            cli,
            [
                "--package",
                str(path),
                "--interface",
                "C",
                "--mock-package",
                "mocks",
                "--outfile",
                str(tmp_path / "mockc.go"),
            ],
        )

        assert result.exit_code == 0, result.output
        assert "Failed to synthesize method SetReturns" in result.output
        assert "incomplete" in result.output
