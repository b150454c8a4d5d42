"""Static analysis: deterministic code analysis via tree-sitter."""

from testforge.analysis.static.analyzer import analyze_code_file
from testforge.analysis.static.complexity import compute_complexity
from testforge.analysis.static.function_extractor import extract_functions
from testforge.analysis.static.parser import (
    ParsedSource,
    SourceOptions,
    options_for_file,
    parse_source,
)
from testforge.analysis.static.schemas import (
    FunctionInfo,
    ParamInfo,
    ParsedFunction,
    SourceSpan,
)

__all__ = [
    "FunctionInfo",
    "ParamInfo",
    "ParsedFunction",
    "ParsedSource",
    "SourceOptions",
    "SourceSpan",
    "analyze_code_file",
    "compute_complexity",
    "extract_functions",
    "options_for_file",
    "parse_source",
]
