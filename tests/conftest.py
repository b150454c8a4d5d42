"""Shared test fixtures: sample project paths and snippet parsing."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from testforge.analysis.static.function_extractor import extract_functions
from testforge.analysis.static.parser import ParsedSource, parse_source
from testforge.analysis.static.schemas import ParsedFunction

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures" / "sample_project"


@pytest.fixture
def sample_project() -> Path:
    """Directory with JS/TS sources, a broken file and a README."""
    return FIXTURE_DIR


@pytest.fixture
def parse() -> Callable[..., ParsedSource]:
    """Parse a snippet; the file name picks the grammar."""

    def _parse(code: str, file_name: str = "snippet.js") -> ParsedSource:
        return parse_source(code, file_name)

    return _parse


@pytest.fixture
def functions_of() -> Callable[..., list[ParsedFunction]]:
    """Extract function units from a snippet."""

    def _extract(
        code: str, file_name: str = "snippet.js"
    ) -> list[ParsedFunction]:
        return extract_functions(parse_source(code, file_name))

    return _extract
