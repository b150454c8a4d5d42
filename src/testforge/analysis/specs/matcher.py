"""Reconcile extracted specifications with extracted functions by name."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from testforge.analysis.specs.schemas import Specification
from testforge.analysis.static.schemas import FunctionInfo
from testforge.constants import Confidence, MatchRule

logger = logging.getLogger(__name__)

_CANDIDATE = re.compile(r"^(?P<name>[A-Za-z_$][\w$]*)(?:\(|:)")


def match_specifications(
    specifications: Sequence[Specification],
    functions: Sequence[FunctionInfo],
) -> list[Specification]:
    """Resolve ``mapped_function``/``confidence`` for every specification.

    Returns new instances in input order. Rules run from strongest to
    weakest and the first that applies wins, so re-running on the
    output never lowers a mapping of confidence 90 or more.
    """
    names = list(dict.fromkeys(fn.name for fn in functions))
    return [resolve_specification(spec, names)[0] for spec in specifications]


def resolve_specification(
    spec: Specification,
    names: Sequence[str],
) -> tuple[Specification, MatchRule]:
    """Apply the matching cascade to one specification.

    ``names`` are the distinct function names in discovery order.
    Returns the resolved copy and the rule that decided it.
    """
    known = set(names)

    if (
        spec.mapped_function is not None
        and spec.confidence is not None
        and spec.confidence > Confidence.TRUSTED_FLOOR
        and spec.mapped_function in known
    ):
        return spec.model_copy(), MatchRule.TRUSTED

    candidate = candidate_name(spec.description)
    if candidate is not None:
        if candidate in known:
            return (
                _mapped(spec, candidate, Confidence.EXACT_MATCH),
                MatchRule.EXACT,
            )

        folded = candidate.lower()
        for name in names:
            if name.lower() == folded:
                return (
                    _mapped(spec, name, Confidence.CASE_INSENSITIVE_MATCH),
                    MatchRule.CASE_INSENSITIVE,
                )

        fuzzy = [n for n in names if n in candidate or candidate in n]
        if len(fuzzy) == 1:
            return (
                _mapped(spec, fuzzy[0], Confidence.SUBSTRING_MATCH),
                MatchRule.SUBSTRING,
            )
        if len(fuzzy) > 1:
            logger.debug(
                "event=spec_match_ambiguous candidate=%s matches=%d",
                candidate,
                len(fuzzy),
            )

    return (
        spec.model_copy(update={"mapped_function": None, "confidence": None}),
        MatchRule.UNMAPPED,
    )


def candidate_name(description: str) -> str | None:
    """Leading ``name(`` or ``name:`` identifier of a description."""
    m = _CANDIDATE.match(description)
    return m.group("name") if m else None


def _mapped(spec: Specification, name: str, confidence: int) -> Specification:
    return spec.model_copy(
        update={"mapped_function": name, "confidence": confidence}
    )
