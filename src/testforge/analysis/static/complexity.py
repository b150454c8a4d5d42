"""Cyclomatic complexity by counting branch points in a subtree."""

from __future__ import annotations

import tree_sitter

from testforge.analysis.static.parser import node_text, walk
from testforge.analysis.static.schemas import SourceSpan
from testforge.constants import LOGICAL_OPERATORS

# for_in_statement covers both for-in and for-of; switch_default is
# counted like any other case clause.
_BRANCH_NODE_TYPES = frozenset({
    "if_statement",
    "for_statement",
    "for_in_statement",
    "while_statement",
    "do_statement",
    "switch_case",
    "switch_default",
    "ternary_expression",
})


def compute_complexity(node: tree_sitter.Node) -> int:
    """Return 1 plus the number of branch points under ``node``.

    Nested functions are part of the subtree and count too.
    """
    complexity = 1
    for child in walk(node):
        if child.type in _BRANCH_NODE_TYPES:
            complexity += 1
        elif child.type == "binary_expression":
            operator = node_text(child.child_by_field_name("operator"))
            if operator in LOGICAL_OPERATORS:
                complexity += 1
    return complexity


def complexity_for_span(tree: tree_sitter.Tree, span: SourceSpan) -> int:
    """Complexity of the function node recorded at ``span``."""
    node = tree.root_node.descendant_for_byte_range(span.start, span.end)
    while node is not None and (
        node.start_byte > span.start or node.end_byte < span.end
    ):
        node = node.parent
    if node is None:
        return 1

    # Narrow to the node covering exactly the span, if an ancestor
    # was returned
    while True:
        exact = next(
            (
                c
                for c in node.children
                if c.start_byte == span.start and c.end_byte == span.end
            ),
            None,
        )
        if exact is None:
            break
        node = exact
    return compute_complexity(node)
