"""Pydantic models for the combined analysis output."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from testforge.analysis.specs.schemas import SpecCoverage, Specification
from testforge.analysis.static.schemas import FunctionInfo
from testforge.constants import DiagnosticKind


class Diagnostic(BaseModel):
    """A per-file problem that reduced the completeness of the output."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    file_name: str
    kind: DiagnosticKind
    message: str
    line: int | None = None


class AnalysisResult(BaseModel):
    """Everything the core hands to test generation and the UI."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    functions: list[FunctionInfo] = Field(
        default_factory=lambda: list[FunctionInfo]()
    )
    specifications: list[Specification] = Field(
        default_factory=lambda: list[Specification]()
    )
    coverage: SpecCoverage = Field(default_factory=SpecCoverage)
    diagnostics: list[Diagnostic] = Field(
        default_factory=lambda: list[Diagnostic]()
    )
