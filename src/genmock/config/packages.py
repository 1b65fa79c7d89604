"""Resolve the ``--package`` argument to something the loader can read.

Three forms are accepted:

- a path to a single ``.go`` file;
- a directory holding a Go package;
- an import path the Go toolchain can resolve.

Directories are mapped to their import path through the nearest ``go.mod``
so that the mock can import the interface's package when it is generated
elsewhere. Only when that fails do we shell out to ``go list``; a directory
neither can place is still loaded, just without an import path.
"""

from __future__ import annotations

import re
import subprocess
from pathlib import Path

import structlog
from pydantic import BaseModel, ConfigDict

from genmock.config.constants import GO_SOURCE_SUFFIX
from genmock.core.errors import ConfigError

log = structlog.get_logger(__name__)

_MODULE_LINE = re.compile(r"^\s*module\s+(\"?)([^\s\"]+)\1\s*(?://.*)?$", re.MULTILINE)

GO_LIST_TIMEOUT_SEC = 30


class PackageRef(BaseModel):
    """Where the interface source lives.

    ``directory`` and ``import_path`` are None in single-file mode, in which
    case local types are never qualified.
    """

    model_config = ConfigDict(frozen=True)

    source: Path
    directory: Path | None = None
    import_path: str | None = None

    @property
    def is_file(self) -> bool:
        return self.directory is None


def resolve_package(package: str, *, cwd: Path | None = None) -> PackageRef:
    """Resolve a file path, directory or import path to a PackageRef."""
    base = cwd or Path.cwd()

    if package.endswith(GO_SOURCE_SUFFIX):
        return PackageRef(source=_absolute(package, base))

    candidate = _absolute(package, base)
    if candidate.is_dir():
        import_path = module_import_path(candidate)
        if import_path is None:
            try:
                candidate, import_path = _go_list(str(candidate), base)
            except ConfigError as e:
                log.debug(
                    "import_path_unavailable",
                    directory=str(candidate),
                    reason=e.details.get("reason"),
                )
        log.debug("package_resolved", directory=str(candidate), import_path=import_path)
        return PackageRef(source=candidate, directory=candidate, import_path=import_path)

    directory, import_path = _go_list(package, base)
    log.debug("package_resolved", directory=str(directory), import_path=import_path)
    return PackageRef(source=directory, directory=directory, import_path=import_path)


def module_import_path(directory: Path) -> str | None:
    """Derive a directory's import path from the closest enclosing go.mod.

    Returns None when no go.mod is found or it declares no module.
    """
    directory = directory.resolve()
    for root in (directory, *directory.parents):
        go_mod = root / "go.mod"
        if not go_mod.is_file():
            continue
        match = _MODULE_LINE.search(go_mod.read_text(encoding="utf-8", errors="replace"))
        if match is None:
            return None
        module = match.group(2)
        rel = directory.relative_to(root)
        if rel == Path("."):
            return module
        return f"{module}/{rel.as_posix()}"
    return None


def _go_list(package: str, cwd: Path) -> tuple[Path, str]:
    try:
        proc = subprocess.run(
            ["go", "list", "-f", "{{.Dir}}\n{{.ImportPath}}", package],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=True,
            timeout=GO_LIST_TIMEOUT_SEC,
        )
    except FileNotFoundError as e:
        raise ConfigError.package_unresolved(package, "go toolchain not found") from e
    except subprocess.CalledProcessError as e:
        reason = (e.stderr or "").strip() or f"go list exited with {e.returncode}"
        raise ConfigError.package_unresolved(package, reason) from e
    except subprocess.TimeoutExpired as e:
        raise ConfigError.package_unresolved(package, "go list timed out") from e

    lines = proc.stdout.strip().splitlines()
    if len(lines) < 2 or not lines[0]:
        raise ConfigError.package_unresolved(package, "unexpected go list output")
    return Path(lines[0]), lines[1]


def _absolute(path: str, base: Path) -> Path:
    p = Path(path).expanduser()
    if not p.is_absolute():
        p = base / p
    return p.resolve()
