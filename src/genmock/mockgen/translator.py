"""Signature Translator: turn interface methods into mock methods.

For ``Foo(a int, b ...string) (int, error)`` the generated body is::

    ut__params := make([]interface{}, 1+len(b))
    ut__params[0] = a
    for j, p := range b {
        ut__params[1+j] = p
    }
    r := i.TrackCall("Foo", ut__params...)
    var r_0 int
    if r[0] != nil {
        r_0 = r[0].(int)
    }
    var r_1 error
    if r[1] != nil {
        r_1 = r[1].(error)
    }
    return r_0, r_1

Without a variadic parameter the staging block is left out and the
parameters are passed to TrackCall directly, which saves an allocation on
every call. A nil stored result leaves the zero value in place: asserting
nil to a non-interface type would panic.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

import structlog

from genmock.config.constants import PARAMS_VAR, RECEIVER_NAME, RESULTS_VAR
from genmock.core.errors import SynthesisError
from genmock.golang.models import FuncSignature, InterfaceDecl, MethodSignature, Parameter
from genmock.mockgen.unit import (
    DeclareResult,
    MockMethod,
    ReturnResults,
    StageParams,
    Statement,
    TrackCall,
)

log = structlog.get_logger(__name__)

# Methods the generated struct already has
RESERVED_METHODS = frozenset({"AddCall", "SetReturns", "TrackCall", "CallTracker"})

# Builtins the generated body refers to
_BODY_BUILTINS = frozenset({"len", "make", "nil"})


@dataclass
class TranslationResult:
    methods: list[MockMethod] = field(default_factory=list)
    skipped: list[SynthesisError] = field(default_factory=list)


def translate_interface(interface: InterfaceDecl, mock_name: str) -> TranslationResult:
    """Translate every method; a method that fails is skipped, not fatal."""
    result = TranslationResult()
    for method in interface.methods:
        try:
            result.methods.append(translate_method(method, mock_name))
        except SynthesisError as e:
            log.warning("method_skipped", method=method.name, reason=e.details.get("reason"))
            result.skipped.append(e)
    log.debug(
        "interface_translated",
        interface=interface.name,
        methods=len(result.methods),
        skipped=len(result.skipped),
    )
    return result


def translate_method(method: MethodSignature, mock_name: str) -> MockMethod:
    """Build the mock method for one interface method.

    Raises:
        SynthesisError: if the method can't be expressed on the mock
    """
    if not method.name:
        raise SynthesisError.method_failed("<unnamed>", "method has no name")
    if method.name in RESERVED_METHODS:
        raise SynthesisError.method_failed(method.name, "name clashes with a mock helper method")
    _check_variadic(method)

    signature = _name_params(method.signature).without_result_names()
    taken = _taken_names(signature)
    receiver = _fresh(RECEIVER_NAME, taken)
    taken.add(receiver)

    body: list[Statement] = []
    names = tuple(p.name or "" for p in signature.params)
    if signature.is_variadic:
        params_var = _fresh(PARAMS_VAR, taken)
        taken.add(params_var)
        body.append(StageParams(var=params_var, fixed=names[:-1], variadic=names[-1]))
        args: tuple[str, ...] = (params_var,)
    else:
        args = names

    results_var = None
    if signature.results:
        results_var = _fresh_results_var(taken, len(signature.results))

    body.append(
        TrackCall(
            receiver=receiver,
            method=method.name,
            args=args,
            spread=signature.is_variadic,
            results_var=results_var,
        )
    )

    if results_var is not None:
        for index, res in enumerate(signature.results):
            body.append(DeclareResult(results_var=results_var, index=index, type=res.type))
        body.append(ReturnResults(results_var=results_var, count=len(signature.results)))

    return MockMethod(
        receiver=receiver,
        receiver_type=mock_name,
        name=method.name,
        signature=signature,
        body=tuple(body),
        doc=method.doc,
    )


def _check_variadic(method: MethodSignature) -> None:
    params = method.signature.params
    if any(p.variadic for p in params[:-1]):
        raise SynthesisError.method_failed(method.name, "only the final parameter may be variadic")


def _name_params(signature: FuncSignature) -> FuncSignature:
    """Give every parameter a name the body can use.

    Unnamed or blank parameters become ``pN``. A name that would shadow a
    builtin the body calls, or a package the signature's types refer to,
    gets a trailing underscore.
    """
    reserved = _BODY_BUILTINS | _qualifiers(signature)
    if all(p.name and p.name != "_" and p.name not in reserved for p in signature.params):
        return signature
    taken = {p.name for p in signature.params if p.name} | reserved
    params: list[Parameter] = []
    for index, param in enumerate(signature.params):
        if param.name and param.name != "_":
            if param.name in reserved:
                name = _fresh(param.name, taken)
                taken.add(name)
                param = replace(param, name=name)
            params.append(param)
            continue
        name = _fresh(f"p{index}", taken)
        taken.add(name)
        # Each synthesized name stands alone: "_, _ int" becomes "p0 int, p1 int"
        params.append(replace(param, name=name, group=-1 - index))
    return replace(signature, params=tuple(params))


def _qualifiers(signature: FuncSignature) -> set[str]:
    names: set[str] = set()
    for param in signature.params:
        names |= param.type.qualifiers
    for res in signature.results:
        names |= res.type.qualifiers
    return names


def _taken_names(signature: FuncSignature) -> set[str]:
    return {p.name for p in signature.params if p.name} | _qualifiers(signature)


def _fresh(base: str, taken: set[str]) -> str:
    name = base
    while name in taken:
        name += "_"
    return name


def _fresh_results_var(taken: set[str], count: int) -> str:
    name = RESULTS_VAR
    while name in taken or any(f"{name}_{i}" in taken for i in range(count)):
        name += "_"
    return name
