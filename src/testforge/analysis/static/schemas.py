"""Pydantic models for static analysis output."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from testforge.constants import FunctionShape


class _CamelModel(BaseModel):
    """Serializes with camelCase aliases for downstream consumers."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class ParamInfo(_CamelModel):
    """A function parameter and its inferred type label."""

    name: str
    type: str | None = None


class SourceSpan(_CamelModel):
    """Byte range and 1-based start line of a function node."""

    start: int = Field(ge=0)
    end: int = Field(ge=0)
    line: int = Field(ge=1)


class ParsedFunction(_CamelModel):
    """A function unit extracted from one parsed file."""

    name: str = Field(min_length=1)
    params: list[ParamInfo] = Field(
        default_factory=lambda: list[ParamInfo]()
    )
    return_type: str | None = None
    code: str
    file_name: str
    span: SourceSpan
    shape: FunctionShape


class FunctionInfo(_CamelModel):
    """A function unit as consumed by test generation and UI listing."""

    name: str = Field(min_length=1)
    params: list[ParamInfo] = Field(
        default_factory=lambda: list[ParamInfo]()
    )
    return_type: str | None = None
    file_name: str
    code: str
    line: int = Field(ge=1)
    complexity: int = Field(default=1, ge=1)
    has_spec: bool = False
