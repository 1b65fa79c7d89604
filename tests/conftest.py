"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages,
and provides helpers for writing small Go packages into tmp_path.
"""

import sys
import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of genmock modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("genmock"):
        del sys.modules[module_name]


FOOER_SOURCE = """\
package foo

type Fooer interface {
    Foo(a int, b ...string) (int, error)
    Bar()
}
"""

STORE_SOURCE = """\
package store

import (
    "context"
    "time"
)

// Store persists things.
type Store interface {
    // Get fetches a thing.
    Get(ctx context.Context, id string) (*Thing, error)
    Put(t Thing, ttl time.Duration) error
}

type Thing struct {
    Name string
}
"""


@pytest.fixture
def write_go(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write dedented Go source to tmp_path/<relative> and return its path."""

    def _write(relative: str, source: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source))
        return path

    return _write


@pytest.fixture
def go_module(tmp_path: Path, write_go: Callable[[str, str], Path]) -> Path:
    """A Go module at tmp_path with a ``store`` package and an empty ``mocks`` dir."""
    write_go("go.mod", "module example.com/proj\n\ngo 1.21\n")
    write_go("store/store.go", STORE_SOURCE)
    (tmp_path / "mocks").mkdir()
    return tmp_path


@pytest.fixture
def fooer_go(write_go: Callable[[str, str], Path]) -> Path:
    """Single file declaring ``Fooer`` (a variadic method and a bare method)."""
    return write_go("foo/foo.go", FOOER_SOURCE)


@pytest.fixture
def store_go(go_module: Path) -> Path:
    """``store/store.go`` inside ``go_module``."""
    return go_module / "store" / "store.go"


@pytest.fixture
def loose_store_go(write_go: Callable[[str, str], Path]) -> Path:
    """``store/store.go`` with no go.mod above it."""
    return write_go("store/store.go", STORE_SOURCE)
