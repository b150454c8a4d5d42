"""Source analysis core: functions, specifications and their mapping."""

from testforge.analysis.pipeline import (
    analyze_file,
    analyze_sources,
    run_analysis,
)
from testforge.analysis.schemas import AnalysisResult, Diagnostic

__all__ = [
    "AnalysisResult",
    "Diagnostic",
    "analyze_file",
    "analyze_sources",
    "run_analysis",
]
