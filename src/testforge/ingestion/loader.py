"""Read source and documentation files from disk into SourceFile inputs."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

import pathspec

from testforge.config import DOC_EXTENSIONS, EXTENSION_MAP, Settings
from testforge.ingestion.schemas import SourceFile

logger = logging.getLogger(__name__)


def is_source_file(file_name: str | Path) -> bool:
    """True for JavaScript/TypeScript files the parser understands."""
    return Path(file_name).suffix.lower() in EXTENSION_MAP


def is_documentation_file(file_name: str | Path) -> bool:
    """True for prose files scanned for specifications."""
    return Path(file_name).suffix.lower() in DOC_EXTENSIONS


def collect_sources(
    paths: Iterable[Path],
    settings: Settings | None = None,
) -> list[SourceFile]:
    """Load every recognized file under ``paths``, in a stable order.

    Directories are walked recursively, skipping hidden directories,
    ``settings.skip_directories`` and ``.gitignore`` matches. File names
    are relative to the walked directory; explicitly named files keep
    the path as given. Unreadable, oversized and non-UTF-8 files are
    skipped with a warning.
    """
    cfg = settings or Settings()
    skip_dirs = set(cfg.skip_directories)
    sources: list[SourceFile] = []

    for path in paths:
        if path.is_dir():
            gitignore_spec = _load_gitignore(path)
            for file_path in _walk_files(path, skip_dirs, gitignore_spec):
                source = _load(
                    file_path,
                    file_path.relative_to(path).as_posix(),
                    cfg,
                )
                if source is not None:
                    sources.append(source)
        elif path.is_file():
            if not (is_source_file(path) or is_documentation_file(path)):
                logger.warning(
                    "event=file_skipped reason=unsupported file=%s", path
                )
                continue
            source = _load(path, path.as_posix(), cfg)
            if source is not None:
                sources.append(source)
        else:
            logger.warning("event=file_skipped reason=missing file=%s", path)

    return sources


def _load(path: Path, file_name: str, cfg: Settings) -> SourceFile | None:
    try:
        size = path.stat().st_size
        if size > cfg.max_file_size_bytes:
            logger.warning(
                "event=file_skipped reason=too_large file=%s bytes=%d",
                file_name,
                size,
            )
            return None
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning(
            "event=file_skipped reason=unreadable file=%s error=%s",
            file_name,
            exc,
        )
        return None

    return SourceFile(
        file_name=file_name,
        content=content,
        is_documentation=is_documentation_file(path),
    )


def _walk_files(
    root: Path,
    skip_dirs: set[str],
    gitignore_spec: pathspec.PathSpec,
) -> list[Path]:
    """Recognized files under ``root``, sorted, without escaping it.

    Symlinks that resolve outside the root are skipped.
    """
    resolved_root = root.resolve()
    files: list[Path] = []
    pending = [root]
    while pending:
        current = pending.pop()
        for item in sorted(current.iterdir()):
            if item.is_symlink():
                if not item.resolve().is_relative_to(resolved_root):
                    continue
            rel = item.relative_to(root).as_posix()
            if item.is_dir():
                if item.name.startswith(".") or item.name in skip_dirs:
                    continue
                if gitignore_spec.match_file(rel + "/"):
                    continue
                pending.append(item)
            elif item.is_file():
                if gitignore_spec.match_file(rel):
                    continue
                if is_source_file(item) or is_documentation_file(item):
                    files.append(item)
    return sorted(files)


def _load_gitignore(root: Path) -> pathspec.PathSpec:
    """Load .gitignore patterns using pathspec."""
    gitignore = root / ".gitignore"
    if not gitignore.exists():
        return pathspec.GitIgnoreSpec.from_lines([])
    try:
        with open(gitignore, encoding="utf-8") as f:
            return pathspec.GitIgnoreSpec.from_lines(f)
    except OSError:
        return pathspec.GitIgnoreSpec.from_lines([])
