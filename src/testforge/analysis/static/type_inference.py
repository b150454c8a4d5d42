"""Guess parameter and return type labels without a type checker.

Signals are tried strongest first: an explicit TypeScript annotation,
then a JSDoc tag in the comment directly above the function, then
structural evidence (default values for parameters, return statements
for the function). A missing signal yields ``None``, never a
placeholder label.

Return statements that disagree are resolved by the last recognized
one in source order. This is a known imprecision: ``return 1`` then
``return "x"`` is labelled ``string``.
"""

from __future__ import annotations

import re

import tree_sitter

from testforge.analysis.static.parser import node_text
from testforge.constants import (
    COMPARISON_OPERATORS,
    FUNCTION_SCOPE_NODE_TYPES,
    LOGICAL_OPERATORS,
)

_PARAM_TAG = re.compile(
    r"@param\s+\{(?P<type>[^}]+)\}\s+\[?(?:\.\.\.)?(?P<name>[A-Za-z_$][\w$]*)"
)
_RETURNS_TAG = re.compile(r"@returns?\s+\{(?P<type>[^}]+)\}")

# TypeScript parameter wrappers carrying pattern/type/value fields
_TS_PARAM_TYPES = frozenset({"required_parameter", "optional_parameter"})

_DEFAULT_VALUE_LABELS: dict[str, str] = {
    "string": "string",
    "template_string": "string",
    "number": "number",
    "true": "boolean",
    "false": "boolean",
    "array": "Array",
    "object": "Object",
}

_RETURN_VALUE_LABELS: dict[str, str] = {
    **_DEFAULT_VALUE_LABELS,
    "null": "null",
    "undefined": "void",
}


def find_doc_comment(anchor: tree_sitter.Node) -> str | None:
    """Return the ``/** ... */`` block directly preceding ``anchor``.

    Decorators between the comment and the anchor are skipped.
    """
    prev = anchor.prev_sibling
    while prev is not None and prev.type == "decorator":
        prev = prev.prev_sibling
    if prev is None or prev.type != "comment":
        return None
    text = node_text(prev)
    if not text.startswith("/**"):
        return None
    return text


def infer_param_type(
    param: tree_sitter.Node,
    name: str,
    doc: str | None,
) -> str | None:
    """Infer a parameter's type label.

    ``name`` is the parameter's display name (``...rest`` for rest
    parameters); ``doc`` is the function's JSDoc block, if any.
    """
    if param.type in _TS_PARAM_TYPES:
        annotation = param.child_by_field_name("type")
        if annotation is not None:
            return annotation_text(annotation)

    if doc:
        tagged = _jsdoc_param_type(doc, name.removeprefix("..."))
        if tagged:
            return tagged

    default = _default_value(param)
    if default is not None:
        return _DEFAULT_VALUE_LABELS.get(unwrap_parentheses(default).type)
    return None


def infer_return_type(
    function: tree_sitter.Node,
    doc: str | None,
) -> str | None:
    """Infer the return type label of a function-like node."""
    annotation = function.child_by_field_name("return_type")
    if annotation is not None:
        return annotation_text(annotation)

    if doc:
        m = _RETURNS_TAG.search(doc)
        if m and m.group("type").strip():
            return m.group("type").strip()

    body = function.child_by_field_name("body")
    if body is None:
        return None
    if body.type != "statement_block":
        # Concise arrow body: the expression is the return value
        return _expression_label(body)

    label: str | None = None
    for statement in _own_return_statements(body):
        value = _first_named(statement)
        if value is None:
            label = label or "void"
            continue
        observed = _expression_label(value)
        if observed is not None:
            label = observed
    return label


def annotation_text(annotation: tree_sitter.Node) -> str:
    """Type text of a ``: Type`` annotation node, without the colon."""
    return node_text(annotation).lstrip(":").strip()


def _jsdoc_param_type(doc: str, name: str) -> str | None:
    for m in _PARAM_TAG.finditer(doc):
        if m.group("name") == name:
            return m.group("type").strip() or None
    return None


def _default_value(param: tree_sitter.Node) -> tree_sitter.Node | None:
    if param.type == "assignment_pattern":
        return param.child_by_field_name("right")
    if param.type in _TS_PARAM_TYPES:
        return param.child_by_field_name("value")
    return None


def _own_return_statements(
    body: tree_sitter.Node,
) -> list[tree_sitter.Node]:
    """Return statements of this function, skipping nested functions."""
    found: list[tree_sitter.Node] = []
    stack = [body]
    while stack:
        node = stack.pop()
        if node.type == "return_statement":
            found.append(node)
            continue
        for child in reversed(node.children):
            if child.type not in FUNCTION_SCOPE_NODE_TYPES:
                stack.append(child)
    return found


def _expression_label(expr: tree_sitter.Node) -> str | None:
    expr = unwrap_parentheses(expr)
    if expr.type == "binary_expression":
        operator = node_text(expr.child_by_field_name("operator"))
        if operator in COMPARISON_OPERATORS:
            return "boolean"
        if operator in LOGICAL_OPERATORS or operator == "??":
            return None
        return "number"
    return _RETURN_VALUE_LABELS.get(expr.type)


def unwrap_parentheses(expr: tree_sitter.Node) -> tree_sitter.Node:
    """Strip redundant parentheses around an expression."""
    while expr.type == "parenthesized_expression":
        inner = _first_named(expr)
        if inner is None:
            break
        expr = inner
    return expr


def _first_named(node: tree_sitter.Node) -> tree_sitter.Node | None:
    for child in node.named_children:
        if child.type != "comment":
            return child
    return None
