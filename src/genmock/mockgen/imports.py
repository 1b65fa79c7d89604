"""Import Reconciler.

The candidate imports are every import the locator saw in the interface's
package, plus the synthetic alias for the package itself. Only those whose
local name is used as a qualifier in the generated code are kept, so the
mock has no unused imports and needs nothing it does not import.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

import structlog

from genmock.golang.loader import new_parser
from genmock.golang.models import ImportRef
from genmock.mockgen.render import render_unit
from genmock.mockgen.unit import MockUnit

if TYPE_CHECKING:
    from tree_sitter import Node

log = structlog.get_logger(__name__)

_BINDING_NODES = frozenset(
    {
        "parameter_declaration",
        "variadic_parameter_declaration",
        "short_var_declaration",
        "range_clause",
        "var_spec",
    }
)


def used_qualifiers(source: str) -> set[str]:
    """Identifiers used on the left of a qualified type, or of a selector.

    Selectors on names the source binds itself (receivers, parameters, local
    variables) are method or field accesses, not package references, and
    are left out.
    """
    data = source.encode("utf-8")
    tree = new_parser().parse(data)
    types: set[str] = set()
    selectors: set[str] = set()
    bound: set[str] = set()
    stack = [tree.root_node]
    while stack:
        node = stack.pop()
        if node.type == "qualified_type":
            target = node.child_by_field_name("package")
            if target is not None:
                types.add(_text(data, target))
        elif node.type == "selector_expression":
            target = node.child_by_field_name("operand")
            if target is not None and target.type == "identifier":
                selectors.add(_text(data, target))
        elif node.type in _BINDING_NODES:
            bound.update(_bound_names(data, node))
        stack.extend(node.named_children)
    return types | (selectors - bound)


def _bound_names(data: bytes, node: Node) -> list[str]:
    if node.type in ("short_var_declaration", "range_clause"):
        left = node.child_by_field_name("left")
        idents = left.named_children if left is not None else []
    else:
        idents = node.children_by_field_name("name")
    return [_text(data, n) for n in idents if n.type == "identifier"]


def _text(data: bytes, node: Node) -> str:
    return data[node.start_byte : node.end_byte].decode("utf-8")


def filter_used(candidates: Iterable[ImportRef], used: set[str]) -> list[ImportRef]:
    """Keep candidates whose local name is in ``used``.

    The first import to claim a local name wins; exact duplicates collapse
    and a different path under an already-claimed name is dropped.
    """
    kept: dict[str, ImportRef] = {}
    for ref in candidates:
        name = ref.local_name
        if name not in used:
            continue
        existing = kept.get(name)
        if existing is None:
            kept[name] = ref
        elif existing.path != ref.path:
            log.warning("import_conflict", name=name, kept=existing.path, dropped=ref.path)
    return list(kept.values())


def sort_imports(imports: Iterable[ImportRef]) -> list[ImportRef]:
    """Order an import block the way gofmt does: by path, then alias."""
    return sorted(set(imports), key=lambda ref: (ref.path, ref.alias or ""))


def reconcile_imports(unit: MockUnit, candidates: Iterable[ImportRef]) -> list[ImportRef]:
    """Merge the used candidates into ``unit.imports``.

    Returns the imports added beyond the unit's base imports. When there are
    none the import block is left exactly as it was.
    """
    used = used_qualifiers(render_unit(unit, verify=False))
    base = list(unit.imports)
    survivors = filter_used([*base, *candidates], used)
    added = [ref for ref in survivors if ref not in base]
    if added:
        unit.imports = sort_imports(survivors)
    log.debug(
        "imports_reconciled",
        qualifiers=sorted(used),
        added=[ref.render() for ref in added],
    )
    return added
