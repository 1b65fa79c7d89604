"""Tests for the Renderer."""

import pytest

from genmock.core.errors import InternalError
from genmock.golang.models import FuncSignature, MethodSignature, Parameter, Result, TypeExpr
from genmock.mockgen.render import render_method, render_params, render_results, render_unit
from genmock.mockgen.translator import translate_method
from genmock.mockgen.unit import MockUnit, new_mock_unit

FOO = MethodSignature(
    "Foo",
    FuncSignature(
        params=(
            Parameter("a", TypeExpr("int"), group=0),
            Parameter("b", TypeExpr("string"), variadic=True, group=1),
        ),
        results=(Result(None, TypeExpr("int")), Result(None, TypeExpr("error"))),
    ),
)


class TestRenderMethod:
    """render_method tests."""

    def test_variadic_method_body(self) -> None:
        source = render_method(translate_method(FOO, "MockFooer"))

        assert source == (
            "func (i *MockFooer) Foo(a int, b ...string) (int, error) {\n"
            "\tut__params := make([]interface{}, 1+len(b))\n"
            "\tut__params[0] = a\n"
            "\tfor j, p := range b {\n"
            "\t\tut__params[1+j] = p\n"
            "\t}\n"
            '\tr := i.TrackCall("Foo", ut__params...)\n'
            "\tvar r_0 int\n"
            "\tif r[0] != nil {\n"
            "\t\tr_0 = r[0].(int)\n"
            "\t}\n"
            "\tvar r_1 error\n"
            "\tif r[1] != nil {\n"
            "\t\tr_1 = r[1].(error)\n"
            "\t}\n"
            "\treturn r_0, r_1\n"
            "}\n"
        )

    def test_bare_method_only_records(self) -> None:
        method = translate_method(MethodSignature("Bar", FuncSignature()), "MockFooer")

        source = render_method(method)

        assert source == 'func (i *MockFooer) Bar() {\n\ti.TrackCall("Bar")\n}\n'

    def test_only_variadic_param(self) -> None:
        sig = FuncSignature(params=(Parameter("xs", TypeExpr("int"), variadic=True),))

        source = render_method(translate_method(MethodSignature("Sum", sig), "MockSummer"))

        assert "\tut__params := make([]interface{}, len(xs))\n" in source
        assert "\t\tut__params[j] = p\n" in source

    def test_doc_comment_above_method(self) -> None:
        method = translate_method(
            MethodSignature("Bar", FuncSignature(), doc=("// Bar bars.",)), "MockFooer"
        )

        assert render_method(method).startswith("// Bar bars.\nfunc (i *MockFooer) Bar() {")


class TestRenderSignature:
    """Parameter and result list rendering."""

    def test_grouped_params_kept_together(self) -> None:
        params = (
            Parameter("a", TypeExpr("int"), group=0),
            Parameter("b", TypeExpr("int"), group=0),
            Parameter("c", TypeExpr("int"), group=1),
        )

        assert render_params(params) == "a, b int, c int"

    def test_single_result_unparenthesized(self) -> None:
        assert render_results(FuncSignature(results=(Result(None, TypeExpr("error")),))) == " error"

    def test_no_results(self) -> None:
        assert render_results(FuncSignature()) == ""


class TestRenderUnit:
    """render_unit tests."""

    def test_preamble(self) -> None:
        unit = new_mock_unit("mocks", "MockFooer")

        source = render_unit(unit)

        assert source.startswith(
            "package mocks\n"
            "\n"
            "// THIS CODE IS AUTO-GENERATED BY genmock\n"
            "// github.com/philpearl/ut/genmock\n"
            "\n"
            "import (\n"
            '\t"testing"\n'
            '\t"github.com/philpearl/ut"\n'
            ")\n"
            "\n"
            "type MockFooer struct {\n"
            "\tut.CallTracker\n"
            "}\n"
        )
        assert "func NewMockFooer(t *testing.T) *MockFooer {\n" in source
        assert "\treturn &MockFooer{ut.NewCallRecords(t)}\n" in source
        assert (
            "func (m *MockFooer) AddCall(name string, params ...interface{}) ut.CallTracker {\n"
            "\tm.CallTracker.AddCall(name, params...)\n"
            "\treturn m\n"
            "}\n"
        ) in source
        assert (
            "func (m *MockFooer) SetReturns(params ...interface{}) ut.CallTracker {\n"
            "\tm.CallTracker.SetReturns(params...)\n"
            "\treturn m\n"
            "}\n"
        ) in source

    def test_methods_follow_preamble(self) -> None:
        unit = new_mock_unit("mocks", "MockFooer")
        unit.methods.append(translate_method(FOO, "MockFooer"))

        source = render_unit(unit)

        assert source.index("SetReturns") < source.index(") Foo(a int")
        assert source.endswith("\treturn r_0, r_1\n}\n")

    def test_invalid_output_is_internal_error(self) -> None:
        unit = new_mock_unit("mocks", "MockFooer")
        broken = FuncSignature(results=(Result(None, TypeExpr("map[")),))
        unit.methods.append(translate_method(MethodSignature("Broken", broken), "MockFooer"))

        with pytest.raises(InternalError):
            render_unit(unit)

    def test_missing_package_is_internal_error(self) -> None:
        with pytest.raises(InternalError):
            render_unit(MockUnit(package="", mock_name="MockFooer", imports=[]))
