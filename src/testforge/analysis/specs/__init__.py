"""Documentation analysis: specifications and their function mapping."""

from testforge.analysis.specs.coverage import mentioned_functions
from testforge.analysis.specs.extractor import (
    EVIDENCE_RULES,
    EvidencePattern,
    extract_specifications,
)
from testforge.analysis.specs.matcher import (
    candidate_name,
    match_specifications,
    resolve_specification,
)
from testforge.analysis.specs.schemas import SpecCoverage, Specification

__all__ = [
    "EVIDENCE_RULES",
    "EvidencePattern",
    "SpecCoverage",
    "Specification",
    "candidate_name",
    "extract_specifications",
    "match_specifications",
    "mentioned_functions",
    "resolve_specification",
]
