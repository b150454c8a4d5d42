"""Run the full analysis over an ordered collection of input files."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from testforge.analysis.schemas import AnalysisResult, Diagnostic
from testforge.analysis.specs.coverage import mentioned_functions
from testforge.analysis.specs.extractor import extract_specifications
from testforge.analysis.specs.matcher import match_specifications
from testforge.analysis.specs.schemas import SpecCoverage, Specification
from testforge.analysis.static.analyzer import analyze_code_file
from testforge.analysis.static.schemas import FunctionInfo
from testforge.constants import ERROR_TRUNCATION_CHARS, DiagnosticKind
from testforge.errors import ParseError
from testforge.ingestion.schemas import SourceFile

logger = logging.getLogger(__name__)


@dataclass
class FileOutcome:
    """What a single input file contributed."""

    file_name: str
    functions: list[FunctionInfo] = field(
        default_factory=lambda: list[FunctionInfo]()
    )
    specifications: list[Specification] = field(
        default_factory=lambda: list[Specification]()
    )
    document: str | None = None
    diagnostic: Diagnostic | None = None


def analyze_file(source: SourceFile) -> FileOutcome:
    """Analyze one file; a parse failure yields zero functions."""
    if source.is_documentation:
        specs = extract_specifications(source.content)
        logger.debug(
            "event=specs_extracted file=%s specifications=%d",
            source.file_name,
            len(specs),
        )
        return FileOutcome(
            file_name=source.file_name,
            specifications=specs,
            document=source.content,
        )

    try:
        functions = analyze_code_file(source.content, source.file_name)
    except ParseError as exc:
        logger.warning(
            "event=parse_failed file=%s error=%s",
            exc.file_name,
            str(exc)[:ERROR_TRUNCATION_CHARS],
        )
        return FileOutcome(
            file_name=source.file_name,
            diagnostic=Diagnostic(
                file_name=exc.file_name,
                kind=DiagnosticKind.PARSE_FAILURE,
                message=exc.message,
                line=exc.line,
            ),
        )
    return FileOutcome(file_name=source.file_name, functions=functions)


def analyze_sources(files: Sequence[SourceFile]) -> AnalysisResult:
    """Analyze files sequentially; output order follows input order."""
    return assemble_result([analyze_file(f) for f in files])


async def run_analysis(files: Sequence[SourceFile]) -> AnalysisResult:
    """Analyze files in worker threads, one per file.

    Files share no state, so they run concurrently; ``gather`` keeps
    the results in input order so output matches analyze_sources().
    """
    outcomes = await asyncio.gather(
        *(asyncio.to_thread(analyze_file, f) for f in files)
    )
    return assemble_result(list(outcomes))


def assemble_result(outcomes: Sequence[FileOutcome]) -> AnalysisResult:
    """Match all specifications against all functions and flag coverage."""
    functions = [fn for o in outcomes for fn in o.functions]
    extracted = [spec for o in outcomes for spec in o.specifications]
    diagnostics = [o.diagnostic for o in outcomes if o.diagnostic]

    specifications = match_specifications(extracted, functions)
    specified = {
        s.mapped_function for s in specifications if s.mapped_function
    }
    documents = [o.document for o in outcomes if o.document is not None]
    specified |= mentioned_functions(documents, (fn.name for fn in functions))
    functions = [
        fn.model_copy(update={"has_spec": fn.name in specified})
        for fn in functions
    ]
    matched_count = sum(1 for fn in functions if fn.has_spec)

    logger.info(
        "event=analysis_complete files=%d functions=%d"
        " specifications=%d matched=%d failed=%d",
        len(outcomes),
        len(functions),
        len(specifications),
        matched_count,
        len(diagnostics),
    )
    return AnalysisResult(
        functions=functions,
        specifications=specifications,
        coverage=SpecCoverage(
            matched_count=matched_count,
            total_functions=len(functions),
        ),
        diagnostics=diagnostics,
    )
