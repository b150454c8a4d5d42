"""File ingestion: turn paths on disk into analysis inputs."""

from testforge.ingestion.loader import (
    collect_sources,
    is_documentation_file,
    is_source_file,
)
from testforge.ingestion.schemas import SourceFile

__all__ = [
    "SourceFile",
    "collect_sources",
    "is_documentation_file",
    "is_source_file",
]
