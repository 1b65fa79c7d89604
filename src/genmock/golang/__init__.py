"""Go source handling: loading, the interface model and the locator."""

from genmock.golang.loader import SourceFile, SourceUnit, load_package, parse_source
from genmock.golang.locator import LocateResult, locate_interface
from genmock.golang.models import (
    FuncSignature,
    ImportRef,
    InterfaceDecl,
    MethodSignature,
    Parameter,
    Result,
    TypeExpr,
)

__all__ = [
    "FuncSignature",
    "ImportRef",
    "InterfaceDecl",
    "LocateResult",
    "MethodSignature",
    "Parameter",
    "Result",
    "SourceFile",
    "SourceUnit",
    "TypeExpr",
    "load_package",
    "locate_interface",
    "parse_source",
]
