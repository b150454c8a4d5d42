"""Parse JavaScript/TypeScript source text into tree-sitter trees."""

from __future__ import annotations

import importlib
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import PurePath

import tree_sitter

from testforge.config import EXTENSION_MAP, GRAMMAR_MODULES
from testforge.constants import Dialect, SourceType
from testforge.errors import ParseError

logger = logging.getLogger(__name__)

_MODULE_ONLY_NODE_TYPES = frozenset({"import_statement", "export_statement"})
_JSX_NODE_TYPES = frozenset({"jsx_element", "jsx_self_closing_element"})
_ERROR_SNIPPET_CHARS = 40


@dataclass(frozen=True)
class SourceOptions:
    """Parse hints: language family, script vs module, JSX."""

    dialect: Dialect = Dialect.JAVASCRIPT
    source_type: SourceType = SourceType.MODULE
    jsx: bool = False

    @property
    def grammar(self) -> str:
        """Key into GRAMMAR_MODULES for these options."""
        if self.dialect is Dialect.TYPESCRIPT:
            return "tsx" if self.jsx else "typescript"
        return "javascript"


@dataclass(frozen=True)
class ParsedSource:
    """A successfully parsed file: tree plus the exact bytes it covers."""

    file_name: str
    source: bytes
    tree: tree_sitter.Tree
    options: SourceOptions

    @property
    def root(self) -> tree_sitter.Node:
        return self.tree.root_node

    def slice(self, start: int, end: int) -> str:
        """Decode the source between two byte offsets."""
        return self.source[start:end].decode("utf-8")


def options_for_file(file_name: str) -> SourceOptions:
    """Derive parse options from a file's extension.

    Unknown extensions are parsed as plain JavaScript modules.
    """
    ext = PurePath(file_name).suffix.lower()
    dialect, source_type, jsx = EXTENSION_MAP.get(
        ext, ("javascript", "module", False)
    )
    return SourceOptions(
        dialect=Dialect(dialect),
        source_type=SourceType(source_type),
        jsx=jsx,
    )


def parse_source(
    content: str,
    file_name: str,
    options: SourceOptions | None = None,
) -> ParsedSource:
    """Parse one file's text into a :class:`ParsedSource`.

    Raises :class:`ParseError` when the text is not valid syntax for
    the requested options. tree-sitter recovers from errors by
    inserting ERROR/missing nodes; any such node counts as a failure.
    """
    opts = options or options_for_file(file_name)
    parser = _get_parser(opts.grammar)
    if parser is None:
        raise ParseError(
            file_name, f"no tree-sitter grammar available for {opts.grammar}"
        )

    try:
        source = content.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ParseError(
            file_name, f"source is not encodable as UTF-8: {exc.reason}"
        ) from exc
    tree = parser.parse(source)
    root = tree.root_node

    if root.has_error:
        bad = _first_error_node(root)
        if bad is None:
            raise ParseError(file_name, "invalid syntax")
        raise ParseError(
            file_name,
            _describe_error(bad),
            line=bad.start_point[0] + 1,
            column=bad.start_point[1] + 1,
        )

    if opts.source_type is SourceType.SCRIPT:
        for child in root.named_children:
            if child.type in _MODULE_ONLY_NODE_TYPES:
                raise ParseError(
                    file_name,
                    "'import' and 'export' may appear only in modules",
                    line=child.start_point[0] + 1,
                    column=child.start_point[1] + 1,
                )

    if not opts.jsx:
        for node in walk(root):
            if node.type in _JSX_NODE_TYPES:
                raise ParseError(
                    file_name,
                    "JSX syntax is not enabled for this file",
                    line=node.start_point[0] + 1,
                    column=node.start_point[1] + 1,
                )

    return ParsedSource(
        file_name=file_name, source=source, tree=tree, options=opts
    )


def walk(node: tree_sitter.Node) -> Iterator[tree_sitter.Node]:
    """Yield ``node`` and all its descendants in document order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def node_text(node: tree_sitter.Node | None) -> str:
    """Source text of a node, or empty string."""
    if node is None or not node.text:
        return ""
    return node.text.decode("utf-8")


def _first_error_node(node: tree_sitter.Node) -> tree_sitter.Node | None:
    """Locate the first ERROR or missing node in document order."""
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error_node(child)
            if found is not None:
                return found
    return None


def _describe_error(node: tree_sitter.Node) -> str:
    if node.is_missing:
        return f"missing {node.type!r}"
    snippet = node_text(node).split("\n", 1)[0]
    if len(snippet) > _ERROR_SNIPPET_CHARS:
        snippet = snippet[:_ERROR_SNIPPET_CHARS] + "..."
    return f"unexpected token near {snippet!r}"


# ---------------------------------------------------------------------------
# Grammar cache
# ---------------------------------------------------------------------------

_language_cache: dict[str, tree_sitter.Language] = {}


def _get_parser(grammar: str) -> tree_sitter.Parser | None:
    """Create a parser over a cached tree-sitter language.

    Languages are immutable and shared; parsers are not, so each call
    gets its own and files can be parsed from worker threads.
    """
    lang = _language_cache.get(grammar)
    if lang is None:
        entry = GRAMMAR_MODULES.get(grammar)
        if entry is None:
            return None
        module_name, factory = entry
        try:
            mod = importlib.import_module(module_name)
            capsule: object = getattr(mod, factory)()
            lang = tree_sitter.Language(capsule)
        except (ImportError, AttributeError):
            logger.warning(
                "event=grammar_unavailable grammar=%s module=%s",
                grammar,
                module_name,
            )
            return None
        _language_cache[grammar] = lang
    return tree_sitter.Parser(lang)
