"""The synthetic compilation unit that becomes the mock file.

Method bodies are kept as small statement values rather than text so the
translator's decisions (staging or not, which results are reconstructed)
stay visible until the renderer writes them out.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from genmock.config.constants import HEADER_LINES, TESTING_IMPORT_PATH, TRACKER_IMPORT_PATH
from genmock.golang.models import FuncSignature, ImportRef, TypeExpr


@dataclass(frozen=True, slots=True)
class StageParams:
    """Copy fixed params and the variadic tail into one []interface{}."""

    var: str
    fixed: tuple[str, ...]
    variadic: str


@dataclass(frozen=True, slots=True)
class TrackCall:
    """``[r := ]i.TrackCall("Name", args...)``."""

    receiver: str
    method: str
    args: tuple[str, ...]
    spread: bool = False
    results_var: str | None = None


@dataclass(frozen=True, slots=True)
class DeclareResult:
    """Zero-valued local for result ``index``, filled from the tracker if non-nil."""

    results_var: str
    index: int
    type: TypeExpr

    @property
    def local(self) -> str:
        return f"{self.results_var}_{self.index}"


@dataclass(frozen=True, slots=True)
class ReturnResults:
    results_var: str
    count: int


Statement = StageParams | TrackCall | DeclareResult | ReturnResults


@dataclass(frozen=True, slots=True)
class MockMethod:
    receiver: str
    receiver_type: str
    name: str
    signature: FuncSignature
    body: tuple[Statement, ...]
    doc: tuple[str, ...] = ()


@dataclass
class MockUnit:
    """Everything that goes into one generated file.

    The struct, its constructor and the AddCall/SetReturns passthroughs are
    fixed in shape and derived from ``mock_name``; ``methods`` holds one
    entry per interface method.
    """

    package: str
    mock_name: str
    imports: list[ImportRef]
    header: tuple[str, ...] = HEADER_LINES
    methods: list[MockMethod] = field(default_factory=list)


BASE_IMPORTS = (
    ImportRef(TESTING_IMPORT_PATH),
    ImportRef(TRACKER_IMPORT_PATH),
)


def new_mock_unit(package: str, mock_name: str) -> MockUnit:
    return MockUnit(package=package, mock_name=mock_name, imports=list(BASE_IMPORTS))
