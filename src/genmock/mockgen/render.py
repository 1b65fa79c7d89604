"""Renderer: write a MockUnit out as gofmt-style Go source.

The output is re-parsed before it is returned; a mock that does not parse
means the pipeline produced something it should not have, and is treated
as an internal error rather than written to disk.
"""

from __future__ import annotations

from itertools import groupby

import structlog

from genmock.core.errors import InternalError
from genmock.golang.loader import first_error_line, new_parser
from genmock.golang.models import FuncSignature, Parameter
from genmock.mockgen.unit import (
    DeclareResult,
    MockMethod,
    MockUnit,
    ReturnResults,
    StageParams,
    Statement,
    TrackCall,
)

log = structlog.get_logger(__name__)

_PREAMBLE = """\
type {mock} struct {{
\tut.CallTracker
}}

func New{mock}(t *testing.T) *{mock} {{
\treturn &{mock}{{ut.NewCallRecords(t)}}
}}

func (m *{mock}) AddCall(name string, params ...interface{{}}) ut.CallTracker {{
\tm.CallTracker.AddCall(name, params...)
\treturn m
}}

func (m *{mock}) SetReturns(params ...interface{{}}) ut.CallTracker {{
\tm.CallTracker.SetReturns(params...)
\treturn m
}}
"""


def render_unit(unit: MockUnit, *, verify: bool = True) -> str:
    """Serialize ``unit`` to Go source.

    Raises:
        InternalError: if ``verify`` is set and the output does not parse
    """
    if not unit.package or not unit.mock_name:
        raise InternalError.render_failed("unit has no package or mock name")

    parts = [f"package {unit.package}\n"]
    if unit.header:
        parts.append("".join(f"// {line}\n" for line in unit.header))
    if unit.imports:
        parts.append(render_imports(unit))
    parts.append(_PREAMBLE.format(mock=unit.mock_name))
    parts.extend(render_method(m) for m in unit.methods)
    source = "\n".join(parts)

    if verify:
        tree = new_parser().parse(source.encode("utf-8"))
        if tree.root_node.has_error:
            line = first_error_line(tree.root_node)
            log.error("render_invalid", mock=unit.mock_name, line=line)
            raise InternalError.render_failed(f"generated code has a syntax error near line {line}")
    return source


def render_imports(unit: MockUnit) -> str:
    if len(unit.imports) == 1:
        return f"import {unit.imports[0].render()}\n"
    lines = "".join(f"\t{ref.render()}\n" for ref in unit.imports)
    return f"import (\n{lines})\n"


def render_method(method: MockMethod) -> str:
    lines = list(method.doc)
    lines.append(
        f"func ({method.receiver} *{method.receiver_type}) {method.name}"
        f"({render_params(method.signature.params)}){render_results(method.signature)} {{"
    )
    for stmt in method.body:
        lines.extend(f"\t{line}" for line in render_statement(stmt))
    lines.append("}")
    return "\n".join(lines) + "\n"


def render_params(params: tuple[Parameter, ...]) -> str:
    """Parameters, keeping declarations like ``a, b int`` together."""
    groups: list[str] = []
    for _, members in groupby(params, key=lambda p: (p.group, p.variadic, p.type.text)):
        group = list(members)
        prefix = "..." if group[0].variadic else ""
        type_text = f"{prefix}{group[0].type.text}"
        names = [p.name for p in group if p.name]
        if names:
            groups.append(f"{', '.join(names)} {type_text}")
        else:
            groups.extend(type_text for _ in group)
    return ", ".join(groups)


def render_results(signature: FuncSignature) -> str:
    results = signature.results
    if not results:
        return ""
    if len(results) == 1 and results[0].name is None:
        return f" {results[0].type.text}"
    items = [f"{r.name} {r.type.text}" if r.name else r.type.text for r in results]
    return f" ({', '.join(items)})"


def render_statement(stmt: Statement) -> list[str]:
    match stmt:
        case StageParams(var=var, fixed=fixed, variadic=variadic):
            offset = len(fixed)
            size = f"{offset}+len({variadic})" if offset else f"len({variadic})"
            index = f"{offset}+j" if offset else "j"
            lines = [f"{var} := make([]interface{{}}, {size})"]
            lines.extend(f"{var}[{i}] = {name}" for i, name in enumerate(fixed))
            lines.extend(
                [
                    f"for j, p := range {variadic} {{",
                    f"\t{var}[{index}] = p",
                    "}",
                ]
            )
            return lines
        case TrackCall(receiver=receiver, method=method, args=args, spread=spread):
            call_args = [f'"{method}"', *args]
            if spread:
                call_args[-1] += "..."
            capture = f"{stmt.results_var} := " if stmt.results_var else ""
            return [f"{capture}{receiver}.TrackCall({', '.join(call_args)})"]
        case DeclareResult(results_var=results_var, index=index, type=type_expr):
            local = stmt.local
            return [
                f"var {local} {type_expr.text}",
                f"if {results_var}[{index}] != nil {{",
                f"\t{local} = {results_var}[{index}].({type_expr.text})",
                "}",
            ]
        case ReturnResults(results_var=results_var, count=count):
            return ["return " + ", ".join(f"{results_var}_{i}" for i in range(count))]
    raise InternalError.render_failed(f"unknown statement {type(stmt).__name__}")
