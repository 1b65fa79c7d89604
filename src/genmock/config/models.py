"""Pydantic configuration models.

``GenerateOptions`` is built once from the command line and handed, frozen,
to every stage of the pipeline. Nothing downstream reads flags or globals.
"""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from genmock.config.packages import PackageRef, resolve_package
from genmock.core.errors import ConfigError

_GO_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class GenerateOptions(BaseModel):
    """Everything one generation run needs."""

    model_config = ConfigDict(frozen=True)

    package: str = Field(description="File, directory or import path holding the interface.")
    interface: str = Field(description="Exact name of the interface to mock.")
    mock_package: str = Field(description="Package clause of the generated file.")
    outfile: Path = Field(description="Where the generated mock is written.")
    mock_name: str = Field(description="Name of the generated struct.")
    source: PackageRef

    @field_validator("interface", "mock_package", "mock_name")
    @classmethod
    def validate_identifier(cls, v: str) -> str:
        if not _GO_IDENTIFIER.match(v):
            raise ValueError(f"not a Go identifier: {v!r}")
        return v

    @property
    def output_dir(self) -> Path:
        return self.outfile.parent

    def is_foreign_package(self) -> bool:
        """True when the mock is written outside the interface's own package."""
        if self.source.directory is None:
            return False
        return self.source.directory.resolve() != self.output_dir.resolve()

    @classmethod
    def build(
        cls,
        *,
        package: str,
        interface: str,
        mock_package: str,
        outfile: str | Path | None = None,
        mock_name: str | None = None,
        cwd: Path | None = None,
    ) -> GenerateOptions:
        """Apply defaults, resolve the package and validate.

        Raises:
            ConfigError: if a value is invalid or the package cannot be resolved
        """
        base = cwd or Path.cwd()
        if not outfile:
            outfile = f"mock{interface.lower()}.go"
        out = Path(outfile).expanduser()
        if not out.is_absolute():
            out = base / out

        # Validate names before touching the filesystem or the go toolchain
        for field, value in (("interface", interface), ("mock-package", mock_package)):
            if not _GO_IDENTIFIER.match(value):
                raise ConfigError.invalid_value(field, value, "must be a Go identifier")

        source = resolve_package(package, cwd=base)

        try:
            return cls(
                package=package,
                interface=interface,
                mock_package=mock_package,
                outfile=out,
                mock_name=mock_name or f"Mock{interface}",
                source=source,
            )
        except ValidationError as e:
            err = e.errors()[0]
            field = ".".join(str(p) for p in err["loc"])
            raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e
