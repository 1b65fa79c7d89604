"""Interface Locator.

Walks the parsed package looking for ``type <Name> interface { ... }`` and,
along the way, collects every import spec it passes. The walk is an explicit
depth-first stack; once the interface is found it keeps going only to finish
collecting imports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog

from genmock.core.errors import SourceError
from genmock.golang.models import (
    PREDECLARED_TYPES,
    FuncSignature,
    ImportRef,
    InterfaceDecl,
    MethodSignature,
    Parameter,
    Result,
    TypeExpr,
)

if TYPE_CHECKING:
    from tree_sitter import Node

    from genmock.golang.loader import SourceFile, SourceUnit

log = structlog.get_logger(__name__)

# Node names differ between tree-sitter-go releases
_METHOD_NODES = frozenset({"method_elem", "method_spec"})
_PARAM_NODES = frozenset({"parameter_declaration", "variadic_parameter_declaration"})


@dataclass
class LocateResult:
    """What the locator found: the interface (if any) and candidate imports."""

    interface: InterfaceDecl | None = None
    imports: list[ImportRef] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.interface is not None

    def qualified(self, alias: str, import_path: str) -> LocateResult:
        """Copy with local types qualified by ``alias`` and, if anything
        changed, an ``alias "import_path"`` candidate import added."""
        if self.interface is None:
            return self
        interface, changed = self.interface.qualify_local_types(alias)
        if not changed:
            return self
        log.debug("local_types_qualified", alias=alias, import_path=import_path)
        return LocateResult(
            interface=interface,
            imports=[*self.imports, ImportRef(path=import_path, alias=alias)],
        )


def locate_interface(unit: SourceUnit, name: str) -> LocateResult:
    """Find interface ``name`` in any file of ``unit``.

    Raises:
        SourceError: if the interface is generic
    """
    result = LocateResult()
    for source_file in unit.files:
        stack: list[Node] = [source_file.root]
        while stack:
            node = stack.pop()
            if node.type == "import_spec":
                result.imports.append(_import_ref(source_file, node))
                continue
            if node.type == "type_spec" and _is_interface_spec(node):
                if result.interface is None and _field_text(source_file, node, "name") == name:
                    result.interface = _capture(source_file, node, name)
                # Interfaces don't nest declarations worth visiting
                continue
            stack.extend(reversed(node.named_children))
    return result


def _is_interface_spec(node: Node) -> bool:
    type_node = node.child_by_field_name("type")
    return type_node is not None and type_node.type == "interface_type"


def _capture(source_file: SourceFile, node: Node, name: str) -> InterfaceDecl:
    if node.child_by_field_name("type_parameters") is not None:
        raise SourceError.unsupported(name, "generic interfaces are not supported")
    interface = _interface_decl(source_file, name, node.child_by_field_name("type"))
    log.debug(
        "interface_found",
        interface=name,
        path=str(source_file.path),
        methods=len(interface.methods),
    )
    return interface


def _interface_decl(source_file: SourceFile, name: str, node: Node) -> InterfaceDecl:
    methods: list[MethodSignature] = []
    for child in node.named_children:
        if child.type in _METHOD_NODES:
            methods.append(_method_signature(source_file, child))
        elif child.type != "comment":
            log.debug(
                "interface_element_skipped",
                interface=name,
                element=source_file.text(child),
            )
    return InterfaceDecl(
        name=name,
        package=source_file.package,
        path=source_file.path,
        methods=tuple(methods),
    )


def _method_signature(source_file: SourceFile, node: Node) -> MethodSignature:
    params = node.child_by_field_name("parameters")
    result = node.child_by_field_name("result")
    signature = FuncSignature(
        params=_parameters(source_file, params) if params is not None else (),
        results=_results(source_file, result) if result is not None else (),
    )
    return MethodSignature(
        name=_field_text(source_file, node, "name"),
        signature=signature,
        doc=_doc_comment(source_file, node),
    )


def _parameters(source_file: SourceFile, node: Node) -> tuple[Parameter, ...]:
    params: list[Parameter] = []
    for group, decl in enumerate(c for c in node.named_children if c.type in _PARAM_NODES):
        type_node = decl.child_by_field_name("type")
        if type_node is None:
            continue
        type_expr = type_expr_from_node(source_file, type_node)
        variadic = decl.type == "variadic_parameter_declaration"
        names = [source_file.text(n) for n in decl.children_by_field_name("name")]
        if not names:
            params.append(Parameter(None, type_expr, variadic=variadic, group=group))
        for param_name in names:
            params.append(Parameter(param_name, type_expr, variadic=variadic, group=group))
    return tuple(params)


def _results(source_file: SourceFile, node: Node) -> tuple[Result, ...]:
    if node.type != "parameter_list":
        return (Result(None, type_expr_from_node(source_file, node)),)
    return tuple(Result(p.name, p.type) for p in _parameters(source_file, node))


def type_expr_from_node(source_file: SourceFile, node: Node) -> TypeExpr:
    """Lift a type node into a TypeExpr, noting local and qualified names."""
    start = node.start_byte
    local_refs: list[int] = []
    qualifiers: set[str] = set()

    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "qualified_type":
            package = current.child_by_field_name("package")
            if package is not None:
                qualifiers.add(source_file.text(package))
            continue
        if current.type == "type_identifier" and source_file.text(current) not in PREDECLARED_TYPES:
            # Offsets are in characters, not bytes
            prefix = source_file.source[start : current.start_byte].decode("utf-8")
            local_refs.append(len(prefix))
        stack.extend(current.named_children)

    return TypeExpr(
        text=source_file.text(node),
        local_refs=tuple(sorted(local_refs)),
        qualifiers=frozenset(qualifiers),
    )


def _import_ref(source_file: SourceFile, node: Node) -> ImportRef:
    path_node = node.child_by_field_name("path")
    path = source_file.text(path_node)[1:-1] if path_node is not None else ""
    name_node = node.child_by_field_name("name")
    alias = source_file.text(name_node) if name_node is not None else None
    return ImportRef(path=path, alias=alias)


def _doc_comment(source_file: SourceFile, node: Node) -> tuple[str, ...]:
    """Comment lines directly above ``node``, with no blank line between."""
    lines: list[str] = []
    expected_row = node.start_point[0] - 1
    prev = node.prev_named_sibling
    while prev is not None and prev.type == "comment" and prev.end_point[0] == expected_row:
        before = prev.prev_named_sibling
        if before is not None and before.end_point[0] == prev.start_point[0]:
            # Trailing comment on the previous line's code
            break
        lines[:0] = source_file.text(prev).splitlines()
        expected_row = prev.start_point[0] - 1
        prev = before
    return tuple(line.strip() for line in lines)


def _field_text(source_file: SourceFile, node: Node, name: str) -> str:
    child = node.child_by_field_name(name)
    return source_file.text(child) if child is not None else ""
