"""Mock generation pipeline.

load -> locate -> (qualify) -> translate -> reconcile imports -> render.
Every stage gets fresh values; nothing survives between runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from genmock.config.constants import LOCAL_PACKAGE_ALIAS
from genmock.core.errors import ConfigError, OutputError, SourceError, SynthesisError
from genmock.golang.loader import load_package
from genmock.golang.locator import LocateResult, locate_interface
from genmock.mockgen.imports import reconcile_imports
from genmock.mockgen.render import render_unit
from genmock.mockgen.translator import translate_interface
from genmock.mockgen.unit import new_mock_unit

if TYPE_CHECKING:
    from genmock.config.models import GenerateOptions
    from genmock.golang.models import ImportRef, InterfaceDecl

log = structlog.get_logger(__name__)


@dataclass
class GeneratedMock:
    interface: InterfaceDecl
    source: str
    methods: int
    imports: list[ImportRef] = field(default_factory=list)
    skipped: list[SynthesisError] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.skipped


def find_interface(options: GenerateOptions) -> LocateResult:
    """Load the source package and locate the requested interface.

    Raises:
        SourceError: if the source can't be read or parsed, or has no such interface
        ConfigError: if the mock goes to another package, the interface uses
            types local to its own package, and that package has no import path
    """
    exclude = None if options.source.is_file else options.outfile
    for unit in load_package(options.source, exclude=exclude):
        located = locate_interface(unit, options.interface)
        if located.found:
            if options.is_foreign_package():
                located = _qualify(located, options)
            return located
    raise SourceError.interface_not_found(options.interface, str(options.source.source))


def _qualify(located: LocateResult, options: GenerateOptions) -> LocateResult:
    import_path = options.source.import_path
    if import_path is not None:
        return located.qualified(LOCAL_PACKAGE_ALIAS, import_path)
    if located.interface is not None and located.interface.has_local_refs():
        raise ConfigError.package_unresolved(
            str(options.source.source),
            "the interface uses types local to its package, which has no import path; "
            "run inside a Go module or write the mock into the same directory",
        )
    return located


def build_mock(located: LocateResult, *, package: str, mock_name: str) -> GeneratedMock:
    """Turn a located interface into mock source text."""
    if located.interface is None:
        raise ValueError("build_mock needs a located interface")

    unit = new_mock_unit(package, mock_name)
    translation = translate_interface(located.interface, mock_name)
    unit.methods.extend(translation.methods)
    added = reconcile_imports(unit, located.imports)
    source = render_unit(unit)

    log.info(
        "mock_built",
        interface=located.interface.name,
        mock=mock_name,
        methods=len(translation.methods),
        skipped=len(translation.skipped),
    )
    return GeneratedMock(
        interface=located.interface,
        source=source,
        methods=len(translation.methods),
        imports=added,
        skipped=translation.skipped,
    )


def generate_mock(options: GenerateOptions) -> GeneratedMock:
    located = find_interface(options)
    return build_mock(located, package=options.mock_package, mock_name=options.mock_name)


def write_mock(mock: GeneratedMock, path: Path) -> None:
    """Write generated source to ``path``.

    Raises:
        OutputError: if the file can't be written
    """
    try:
        path.write_text(mock.source, encoding="utf-8")
    except OSError as e:
        raise OutputError.unwritable(str(path), e.strerror or str(e)) from e
    log.debug("mock_written", path=str(path), size=len(mock.source))
