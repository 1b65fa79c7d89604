"""Source Loader: parse Go files with tree-sitter.

A directory is loaded as one or more packages. Files are read in lexical
filename order and grouped by their package clause, so ``foo`` and
``foo_test`` living side by side come back as two separate units.
Subdirectories are never visited.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

from genmock.config.constants import GO_SOURCE_SUFFIX
from genmock.core.errors import SourceError

if TYPE_CHECKING:
    from tree_sitter import Node, Parser, Tree

    from genmock.config.packages import PackageRef

log = structlog.get_logger(__name__)


@dataclass
class SourceFile:
    """A parsed Go file."""

    path: Path
    source: bytes
    tree: Tree
    package: str

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def text(self, node: Node) -> str:
        return self.source[node.start_byte : node.end_byte].decode("utf-8")


@dataclass
class SourceUnit:
    """All files sharing a package clause."""

    package: str
    files: list[SourceFile] = field(default_factory=list)


@lru_cache(maxsize=1)
def go_language() -> Any:
    try:
        import tree_sitter
        import tree_sitter_go
    except ImportError as e:
        raise ImportError(
            "tree-sitter and tree-sitter-go are required. Install with: pip install genmock"
        ) from e
    return tree_sitter.Language(tree_sitter_go.language())


def new_parser() -> Parser:
    import tree_sitter

    parser = tree_sitter.Parser()
    parser.language = go_language()
    return parser


def parse_source(path: Path, content: bytes | None = None) -> SourceFile:
    """Parse one file. Reads ``path`` when ``content`` is not given.

    Raises:
        SourceError: if the file can't be read or has syntax errors
    """
    if content is None:
        try:
            content = path.read_bytes()
        except OSError as e:
            raise SourceError.unreadable(str(path), e.strerror or str(e)) from e

    tree = new_parser().parse(content)
    root = tree.root_node
    if root.has_error:
        raise SourceError.parse_error(str(path), first_error_line(root))

    return SourceFile(path=path, source=content, tree=tree, package=package_name(root, content))


def load_package(ref: PackageRef, *, exclude: Path | None = None) -> list[SourceUnit]:
    """Parse everything ``ref`` points at.

    Args:
        ref: Resolved package reference
        exclude: File to skip in directory mode (the output file, so a
            previous run's mock is not fed back in). Only that exact file is
            skipped; a same-named file in another directory is still read.
    """
    if ref.is_file:
        source_file = parse_source(ref.source)
        return [SourceUnit(package=source_file.package, files=[source_file])]

    directory = ref.source
    skip = exclude.resolve() if exclude is not None else None
    try:
        paths = sorted(
            p
            for p in directory.iterdir()
            if p.suffix == GO_SOURCE_SUFFIX and p.is_file() and p.resolve() != skip
        )
    except OSError as e:
        raise SourceError.unreadable(str(directory), e.strerror or str(e)) from e

    units: dict[str, SourceUnit] = {}
    for path in paths:
        source_file = parse_source(path)
        units.setdefault(source_file.package, SourceUnit(source_file.package)).files.append(
            source_file
        )

    log.debug(
        "package_loaded",
        directory=str(directory),
        files=len(paths),
        packages=sorted(units),
    )
    return [units[name] for name in sorted(units)]


def package_name(root: Node, source: bytes) -> str:
    for child in root.named_children:
        if child.type == "package_clause":
            for ident in child.named_children:
                if ident.type == "package_identifier":
                    return source[ident.start_byte : ident.end_byte].decode("utf-8")
    return ""


def first_error_line(root: Node) -> int:
    """1-based line of the first ERROR or missing node."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node.start_point[0] + 1
        if node.has_error:
            stack.extend(reversed(node.children))
    return root.start_point[0] + 1
