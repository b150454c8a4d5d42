"""Turn one source file into FunctionInfo records."""

from __future__ import annotations

import logging

from testforge.analysis.static.complexity import complexity_for_span
from testforge.analysis.static.function_extractor import extract_functions
from testforge.analysis.static.parser import (
    ParsedSource,
    SourceOptions,
    parse_source,
)
from testforge.analysis.static.schemas import FunctionInfo, ParsedFunction

logger = logging.getLogger(__name__)


def analyze_code_file(
    content: str,
    file_name: str,
    options: SourceOptions | None = None,
) -> list[FunctionInfo]:
    """Parse, extract and score every function in one file.

    Raises :class:`~testforge.errors.ParseError` if the file does not
    parse; callers decide whether that is fatal.
    """
    parsed = parse_source(content, file_name, options)
    functions = [
        to_function_info(parsed, fn) for fn in extract_functions(parsed)
    ]
    logger.debug(
        "event=file_analyzed file=%s functions=%d",
        file_name,
        len(functions),
    )
    return functions


def to_function_info(
    parsed: ParsedSource, fn: ParsedFunction
) -> FunctionInfo:
    """Drop the tree position and attach complexity."""
    return FunctionInfo(
        name=fn.name,
        params=fn.params,
        return_type=fn.return_type,
        file_name=fn.file_name,
        code=fn.code,
        line=fn.span.line,
        complexity=complexity_for_span(parsed.tree, fn.span),
    )
