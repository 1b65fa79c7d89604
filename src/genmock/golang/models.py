"""Syntax-shape model of a Go interface.

These are plain immutable values lifted out of the tree-sitter tree. Nothing
here resolves types: a type is its source text plus the positions of the
unqualified names in it, which is all that qualification needs.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from pathlib import Path

# Types a package-local name can never shadow in practice
PREDECLARED_TYPES = frozenset(
    {
        "any",
        "bool",
        "byte",
        "comparable",
        "complex64",
        "complex128",
        "error",
        "float32",
        "float64",
        "int",
        "int8",
        "int16",
        "int32",
        "int64",
        "rune",
        "string",
        "uint",
        "uint8",
        "uint16",
        "uint32",
        "uint64",
        "uintptr",
    }
)

_MAJOR_VERSION = re.compile(r"^v[0-9]+$")
_GOPKG_VERSION = re.compile(r"^(?P<name>.+)\.v[0-9]+$")


@dataclass(frozen=True, slots=True)
class ImportRef:
    """One import spec: a path and an optional local alias."""

    path: str
    alias: str | None = None

    @property
    def local_name(self) -> str:
        """The identifier code uses to refer to this import.

        The alias if there is one, else the last path segment. A trailing
        major-version segment (``/v2``) or ``gopkg.in`` suffix (``yaml.v3``)
        is not part of the package name.
        """
        if self.alias:
            return self.alias
        segments = self.path.split("/")
        name = segments[-1]
        if _MAJOR_VERSION.match(name) and len(segments) > 1:
            name = segments[-2]
        if m := _GOPKG_VERSION.match(name):
            name = m.group("name")
        return name

    def render(self) -> str:
        if self.alias:
            return f'{self.alias} "{self.path}"'
        return f'"{self.path}"'


@dataclass(frozen=True, slots=True)
class TypeExpr:
    """A type as written in source.

    ``local_refs`` holds offsets into ``text`` where an unqualified,
    non-predeclared type name starts. ``qualifiers`` holds the package
    names the type already references.
    """

    text: str
    local_refs: tuple[int, ...] = ()
    qualifiers: frozenset[str] = frozenset()

    @property
    def has_local_refs(self) -> bool:
        return bool(self.local_refs)

    def qualify(self, alias: str) -> TypeExpr:
        """Return a copy with every local type name prefixed by ``alias.``."""
        if not self.local_refs:
            return self
        text = self.text
        for offset in sorted(self.local_refs, reverse=True):
            text = f"{text[:offset]}{alias}.{text[offset:]}"
        return TypeExpr(text=text, qualifiers=self.qualifiers | {alias})

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class Parameter:
    """A single parameter.

    Parameters declared together (``a, b int``) share a ``group`` so the
    signature can be written back the way it was declared. For a variadic
    parameter ``type`` is the element type.
    """

    name: str | None
    type: TypeExpr
    variadic: bool = False
    group: int = 0


@dataclass(frozen=True, slots=True)
class Result:
    name: str | None
    type: TypeExpr


@dataclass(frozen=True, slots=True)
class FuncSignature:
    params: tuple[Parameter, ...] = ()
    results: tuple[Result, ...] = ()

    @property
    def is_variadic(self) -> bool:
        return bool(self.params) and self.params[-1].variadic

    @property
    def fixed_params(self) -> tuple[Parameter, ...]:
        return self.params[:-1] if self.is_variadic else self.params

    def has_local_refs(self) -> bool:
        return any(p.type.has_local_refs for p in self.params) or any(
            r.type.has_local_refs for r in self.results
        )

    def without_result_names(self) -> FuncSignature:
        return replace(self, results=tuple(Result(None, r.type) for r in self.results))

    def qualify(self, alias: str) -> FuncSignature:
        return FuncSignature(
            params=tuple(replace(p, type=p.type.qualify(alias)) for p in self.params),
            results=tuple(replace(r, type=r.type.qualify(alias)) for r in self.results),
        )


@dataclass(frozen=True, slots=True)
class MethodSignature:
    name: str
    signature: FuncSignature
    doc: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class InterfaceDecl:
    """An interface found in source, with the package it was declared in."""

    name: str
    package: str
    path: Path
    methods: tuple[MethodSignature, ...] = field(default_factory=tuple)

    def has_local_refs(self) -> bool:
        return any(m.signature.has_local_refs() for m in self.methods)

    def qualify_local_types(self, alias: str) -> tuple[InterfaceDecl, bool]:
        """Return a copy whose package-local type names are qualified.

        The bool reports whether anything needed qualifying.
        """
        if not self.has_local_refs():
            return self, False
        methods = tuple(replace(m, signature=m.signature.qualify(alias)) for m in self.methods)
        return replace(self, methods=methods), True
