"""Extract function units from a parsed JavaScript/TypeScript tree."""

from __future__ import annotations

import logging
import re

import tree_sitter

from testforge.analysis.static.parser import ParsedSource, node_text
from testforge.analysis.static.schemas import (
    ParamInfo,
    ParsedFunction,
    SourceSpan,
)
from testforge.analysis.static.type_inference import (
    find_doc_comment,
    infer_param_type,
    infer_return_type,
    unwrap_parentheses,
)
from testforge.constants import FunctionShape

logger = logging.getLogger(__name__)

# Node kinds that can yield function units. Anything else is walked
# through but never matched.
_FUNCTION_NODE_SHAPES: dict[str, FunctionShape] = {
    "function_declaration": FunctionShape.DECLARATION,
    "generator_function_declaration": FunctionShape.DECLARATION,
    "lexical_declaration": FunctionShape.VARIABLE,
    "variable_declaration": FunctionShape.VARIABLE,
    "method_definition": FunctionShape.METHOD,
    "export_statement": FunctionShape.EXPORT,
}

# Initializers that make a variable declarator a function unit
_FUNCTION_VALUE_TYPES = frozenset({
    "function_expression",
    "function",
    "generator_function",
    "arrow_function",
})

_IDENTIFIER = re.compile(r"^[A-Za-z_$][\w$]*$")


def extract_functions(parsed: ParsedSource) -> list[ParsedFunction]:
    """Find every named function-like construct, in document order.

    Duplicate names are all reported. Nested functions are included.
    """
    results: list[ParsedFunction] = []
    stack: list[tuple[tree_sitter.Node, bool]] = [(parsed.root, False)]

    while stack:
        node, exported = stack.pop()
        shape = _FUNCTION_NODE_SHAPES.get(node.type)

        if shape is FunctionShape.EXPORT:
            stack.extend((child, True) for child in reversed(node.children))
            continue

        if shape is FunctionShape.DECLARATION:
            fn = _extract_declaration(node, parsed, exported)
            if fn is not None:
                results.append(fn)
        elif shape is FunctionShape.VARIABLE:
            results.extend(_extract_variables(node, parsed, exported))
        elif shape is FunctionShape.METHOD:
            fn = _extract_method(node, parsed)
            if fn is not None:
                results.append(fn)

        stack.extend((child, False) for child in reversed(node.children))

    return results


def _extract_declaration(
    node: tree_sitter.Node,
    parsed: ParsedSource,
    exported: bool,
) -> ParsedFunction | None:
    """``function name(...) {}``, optionally behind ``export``."""
    name_node = node.child_by_field_name("name")
    if name_node is None:
        logger.debug(
            "event=function_skipped reason=anonymous file=%s line=%d",
            parsed.file_name,
            node.start_point[0] + 1,
        )
        return None

    anchor = node.parent if exported and node.parent else node
    return _build(
        name=node_text(name_node),
        function=node,
        code_node=node,
        doc=find_doc_comment(anchor),
        parsed=parsed,
        shape=FunctionShape.EXPORT if exported else FunctionShape.DECLARATION,
    )


def _extract_variables(
    node: tree_sitter.Node,
    parsed: ParsedSource,
    exported: bool,
) -> list[ParsedFunction]:
    """``const name = function/arrow`` declarators of one statement."""
    declarators = [
        c for c in node.named_children if c.type == "variable_declarator"
    ]
    anchor = node.parent if exported and node.parent else node
    doc = find_doc_comment(anchor)
    results: list[ParsedFunction] = []

    for decl in declarators:
        value = decl.child_by_field_name("value")
        if value is not None:
            value = unwrap_parentheses(value)
        if value is None or value.type not in _FUNCTION_VALUE_TYPES:
            continue
        target = decl.child_by_field_name("name")
        if target is None or target.type != "identifier":
            # Destructuring targets have no single name
            continue
        results.append(
            _build(
                name=node_text(target),
                function=value,
                code_node=node if len(declarators) == 1 else decl,
                doc=doc,
                parsed=parsed,
                shape=FunctionShape.VARIABLE,
            )
        )
    return results


def _extract_method(
    node: tree_sitter.Node,
    parsed: ParsedSource,
) -> ParsedFunction | None:
    """Class methods whose key is a plain identifier or string.

    Accessors, constructors, private ``#names`` and non-literal computed
    keys are skipped. Object-literal methods are not class methods.
    """
    if node.parent is None or node.parent.type != "class_body":
        return None
    name_node = node.child_by_field_name("name")
    if name_node is None:
        return None

    for child in node.children:
        if child.start_byte >= name_node.start_byte:
            break
        if child.type in ("get", "set"):
            return None

    name = _method_key(name_node)
    if name is None or name == "constructor":
        return None

    return _build(
        name=name,
        function=node,
        code_node=node,
        doc=find_doc_comment(node),
        parsed=parsed,
        shape=FunctionShape.METHOD,
    )


def _method_key(key: tree_sitter.Node) -> str | None:
    """Resolve a method key to a plain identifier, if it has one."""
    if key.type == "computed_property_name":
        inner = [c for c in key.named_children if c.type != "comment"]
        if len(inner) != 1 or inner[0].type != "string":
            return None
        key = inner[0]

    if key.type == "property_identifier":
        name = node_text(key)
    elif key.type == "string":
        name = node_text(key)[1:-1]
    else:
        return None
    return name if _IDENTIFIER.match(name) else None


def _build(
    *,
    name: str,
    function: tree_sitter.Node,
    code_node: tree_sitter.Node,
    doc: str | None,
    parsed: ParsedSource,
    shape: FunctionShape,
) -> ParsedFunction:
    return ParsedFunction(
        name=name,
        params=_describe_params(function, doc),
        return_type=infer_return_type(function, doc),
        code=parsed.slice(code_node.start_byte, code_node.end_byte),
        file_name=parsed.file_name,
        span=SourceSpan(
            start=function.start_byte,
            end=function.end_byte,
            line=function.start_point[0] + 1,
        ),
        shape=shape,
    )


def _describe_params(
    function: tree_sitter.Node,
    doc: str | None,
) -> list[ParamInfo]:
    # Arrow functions with a bare parameter: x => ...
    single = function.child_by_field_name("parameter")
    if single is not None:
        nodes = [single]
    else:
        params = function.child_by_field_name("parameters")
        nodes = (
            [
                c
                for c in params.named_children
                if c.type not in ("comment", "decorator")
            ]
            if params is not None
            else []
        )

    described: list[ParamInfo] = []
    for param in nodes:
        name = param_name(param)
        described.append(
            ParamInfo(name=name, type=infer_param_type(param, name, doc))
        )
    return described


def param_name(param: tree_sitter.Node) -> str:
    """Display name of a parameter node.

    Identifiers keep their name, defaults use the bound name, rest
    parameters become ``...name`` and destructuring ``{...}``/``[...]``.
    """
    if param.type in ("required_parameter", "optional_parameter"):
        pattern = param.child_by_field_name("pattern")
        return param_name(pattern) if pattern is not None else "param"
    if param.type in ("identifier", "this"):
        return node_text(param)
    if param.type == "assignment_pattern":
        left = param.child_by_field_name("left")
        return param_name(left) if left is not None else "param"
    if param.type == "rest_pattern":
        inner = param.named_children[0] if param.named_children else None
        if inner is not None and inner.type == "identifier":
            return f"...{node_text(inner)}"
        return "param"
    if param.type == "object_pattern":
        return "{...}"
    if param.type == "array_pattern":
        return "[...]"
    return "param"
