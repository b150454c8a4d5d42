"""Tests for mapping specifications onto extracted functions."""

from __future__ import annotations

import logging

import pytest

from testforge.analysis.specs.matcher import (
    candidate_name,
    match_specifications,
    resolve_specification,
)
from testforge.analysis.specs.schemas import Specification
from testforge.analysis.static.schemas import FunctionInfo
from testforge.constants import MatchRule


def _fn(name: str) -> FunctionInfo:
    return FunctionInfo(
        name=name,
        file_name="src/app.js",
        code=f"function {name}() {{}}",
        line=1,
    )


def _spec(
    description: str,
    mapped_function: str | None = None,
    confidence: int | None = None,
) -> Specification:
    return Specification(
        description=description,
        mapped_function=mapped_function,
        confidence=confidence,
    )


def test_exact_match_beats_longer_name() -> None:
    """getUser maps to getUser, not getUserById."""
    spec = _spec("getUser(name): Finds a user", "getUser", 80)
    resolved, rule = resolve_specification(spec, ["getUserById", "getUser"])

    assert rule is MatchRule.EXACT
    assert resolved.mapped_function == "getUser"
    assert resolved.confidence == 95


def test_trusted_mapping_kept() -> None:
    spec = _spec("parseDate(str): Parses", "parseDate", 90)
    resolved, rule = resolve_specification(spec, ["parseDate"])

    assert rule is MatchRule.TRUSTED
    assert resolved == spec
    assert resolved is not spec


def test_trusted_mapping_to_missing_function_rematched() -> None:
    spec = _spec("render: Draws the view", "render", 85)
    resolved, rule = resolve_specification(spec, ["paint"])

    assert rule is MatchRule.UNMAPPED
    assert resolved.mapped_function is None
    assert resolved.confidence is None


def test_case_insensitive_match() -> None:
    spec = _spec("ParseDate: Parses a date")
    resolved, rule = resolve_specification(spec, ["format", "parsedate"])

    assert rule is MatchRule.CASE_INSENSITIVE
    assert resolved.mapped_function == "parsedate"
    assert resolved.confidence == 90


def test_case_insensitive_takes_first_in_order() -> None:
    spec = _spec("Load(x): loads")
    resolved, _ = resolve_specification(spec, ["LOAD", "load"])
    assert resolved.mapped_function == "LOAD"


@pytest.mark.parametrize(
    ("description", "names", "expected"),
    [
        ("parse(text): Parses", ["parseDate", "format"], "parseDate"),
        ("formatDateTime(d): Formats", ["formatDate", "parse"], "formatDate"),
    ],
)
def test_single_substring_match(
    description: str, names: list[str], expected: str
) -> None:
    resolved, rule = resolve_specification(_spec(description), names)

    assert rule is MatchRule.SUBSTRING
    assert resolved.mapped_function == expected
    assert resolved.confidence == 75


def test_ambiguous_substring_is_unmapped(
    caplog: pytest.LogCaptureFixture,
) -> None:
    """parse matches both parseA and parseB, so neither is chosen."""
    spec = _spec("parse(x): Parses", "parse", 80)
    with caplog.at_level(logging.DEBUG, logger="testforge.analysis.specs"):
        resolved, rule = resolve_specification(spec, ["parseA", "parseB"])

    assert rule is MatchRule.UNMAPPED
    assert resolved.mapped_function is None
    assert resolved.confidence is None
    assert "event=spec_match_ambiguous" in caplog.text


def test_no_candidate_is_unmapped() -> None:
    spec = _spec("Adds days to a date with addDays(date, days)", "addDays", 70)
    resolved, rule = resolve_specification(spec, ["addDays"])

    assert rule is MatchRule.UNMAPPED
    assert resolved.mapped_function is None
    assert resolved.description == spec.description


def test_no_functions_unmaps_everything() -> None:
    specs = [_spec("f(): x", "f", 90), _spec("g: y", "g", 85)]
    result = match_specifications(specs, [])
    assert [(s.mapped_function, s.confidence) for s in result] == [
        (None, None),
        (None, None),
    ]


def test_match_preserves_order_and_returns_new_instances() -> None:
    specs = [
        _spec("beta(): second", "beta", 90),
        _spec("alpha: first"),
    ]
    functions = [_fn("alpha"), _fn("beta"), _fn("alpha")]
    result = match_specifications(specs, functions)

    assert [s.mapped_function for s in result] == ["beta", "alpha"]
    assert [s.confidence for s in result] == [90, 95]
    assert all(r is not s for r, s in zip(result, specs, strict=True))
    assert specs[1].mapped_function is None


def test_matching_is_idempotent() -> None:
    specs = [
        _spec("getUser(id): by id", "getUser", 80),
        _spec("Load: loads"),
        _spec("fmt(d): formats"),
        _spec("nothing here"),
    ]
    functions = [_fn("getUser"), _fn("load"), _fn("fmtDate")]

    once = match_specifications(specs, functions)
    twice = match_specifications(once, functions)

    assert [(s.mapped_function, s.confidence) for s in once] == [
        ("getUser", 95),
        ("load", 90),
        ("fmtDate", 75),
        (None, None),
    ]
    assert twice == once


@pytest.mark.parametrize(
    ("description", "expected"),
    [
        ("parseDate(str): Parses", "parseDate"),
        ("formatDate: Formats", "formatDate"),
        ("$el(sel): jQuery style", "$el"),
        ("Adds days with addDays(d)", None),
        ("", None),
    ],
)
def test_candidate_name(description: str, expected: str | None) -> None:
    assert candidate_name(description) == expected
