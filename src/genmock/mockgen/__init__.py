"""Mock synthesis: translate, reconcile imports, render."""

from genmock.mockgen.generator import (
    GeneratedMock,
    build_mock,
    find_interface,
    generate_mock,
    write_mock,
)
from genmock.mockgen.imports import reconcile_imports, used_qualifiers
from genmock.mockgen.render import render_unit
from genmock.mockgen.translator import TranslationResult, translate_interface, translate_method
from genmock.mockgen.unit import MockMethod, MockUnit, new_mock_unit

__all__ = [
    "GeneratedMock",
    "MockMethod",
    "MockUnit",
    "TranslationResult",
    "build_mock",
    "find_interface",
    "generate_mock",
    "new_mock_unit",
    "reconcile_imports",
    "render_unit",
    "translate_interface",
    "translate_method",
    "used_qualifiers",
    "write_mock",
]
