"""Environment-based configuration and analysis lookup tables."""

from __future__ import annotations

import logging
from typing import Annotated, Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode


class Settings(BaseSettings):
    """Reads from .env file and TESTFORGE_* environment variables."""

    # Logging
    log_level: str = "INFO"
    debug_mode: bool = False

    # Ingestion
    max_file_size_bytes: int = 1_048_576  # 1MB
    skip_directories: Annotated[list[str], NoDecode] = [
        "node_modules",
        "bower_components",
        "vendor",
        "build",
        "dist",
        "coverage",
        ".next",
        ".git",
        ".svn",
        ".hg",
    ]

    @field_validator("skip_directories", mode="before")
    @classmethod
    def _parse_skip_directories(cls, v: Any) -> Any:
        """Accept comma-separated string or JSON array."""
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level: {v!r}")
        return level

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "TESTFORGE_",
        "extra": "ignore",
    }


# File extension → (grammar dialect, source type, JSX enabled)
EXTENSION_MAP: dict[str, tuple[str, str, bool]] = {
    # JavaScript
    ".js": ("javascript", "module", False),
    ".mjs": ("javascript", "module", False),
    ".cjs": ("javascript", "script", False),
    ".jsx": ("javascript", "module", True),
    # TypeScript
    ".ts": ("typescript", "module", False),
    ".mts": ("typescript", "module", False),
    ".cts": ("typescript", "script", False),
    ".tsx": ("typescript", "module", True),
}

# Extensions treated as prose documentation
DOC_EXTENSIONS: frozenset[str] = frozenset({".md", ".markdown", ".txt"})

# Grammar name → (import path, language factory) for tree-sitter grammars
GRAMMAR_MODULES: dict[str, tuple[str, str]] = {
    "javascript": ("tree_sitter_javascript", "language"),
    "typescript": ("tree_sitter_typescript", "language_typescript"),
    "tsx": ("tree_sitter_typescript", "language_tsx"),
}
