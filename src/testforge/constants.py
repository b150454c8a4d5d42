"""Shared constants: single source of truth for cross-module values.

StrEnum members are str-compatible, so JSON output and log lines
work unchanged.
"""

from __future__ import annotations

from enum import StrEnum

# ── String Enums ─────────────────────────────────────────


class SourceType(StrEnum):
    """How a JavaScript/TypeScript file is parsed."""

    SCRIPT = "script"
    MODULE = "module"


class Dialect(StrEnum):
    """Source language family; selects the tree-sitter grammar."""

    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"


class FunctionShape(StrEnum):
    """Syntactic construct a function unit was extracted from."""

    DECLARATION = "declaration"
    VARIABLE = "variable"
    METHOD = "method"
    EXPORT = "export"


class EvidenceRule(StrEnum):
    """Documentation pattern that produced a specification."""

    BOLD_SIGNATURE = "bold_signature"
    BOLD_BULLET = "bold_bullet"
    CODE_BLOCK = "code_block"
    REQUIREMENT_MENTION = "requirement_mention"


class MatchRule(StrEnum):
    """Matcher rule that resolved (or failed to resolve) a specification."""

    TRUSTED = "trusted"
    EXACT = "exact"
    CASE_INSENSITIVE = "case_insensitive"
    SUBSTRING = "substring"
    UNMAPPED = "unmapped"


class DiagnosticKind(StrEnum):
    """Per-file problems reported alongside analysis output."""

    PARSE_FAILURE = "parse_failure"


# ── Confidence Weights ───────────────────────────────────


class Confidence:
    """Named confidence weights (0-100): single source of truth."""

    # Specification extraction evidence
    BOLD_SIGNATURE = 90  # **name(params)**: name plus parameter list
    BOLD_BULLET = 85  # - **name**: description
    CODE_BLOCK = 80  # name(params) { inside a fenced block
    REQUIREMENT_MENTION = 70  # incidental name(...) in a bullet

    # Specification matching
    TRUSTED_FLOOR = 80  # carried mappings must exceed this
    EXACT_MATCH = 95
    CASE_INSENSITIVE_MATCH = 90
    SUBSTRING_MATCH = 75

    FLOOR = 0
    CEILING = 100


# ── tree-sitter Node Kinds ───────────────────────────────

# Every node kind that opens a new function scope. "function" is the
# pre-0.21 tree-sitter-javascript name of function_expression.
FUNCTION_SCOPE_NODE_TYPES = frozenset({
    "function_declaration",
    "generator_function_declaration",
    "function_expression",
    "function",
    "generator_function",
    "arrow_function",
    "method_definition",
})

# ── Type Labels ──────────────────────────────────────────

COMPARISON_OPERATORS = frozenset({
    "==",
    "===",
    "!=",
    "!==",
    "<",
    ">",
    "<=",
    ">=",
    "instanceof",
    "in",
})

LOGICAL_OPERATORS = frozenset({"&&", "||"})

# ── Misc ─────────────────────────────────────────────────

ERROR_TRUNCATION_CHARS = 200
