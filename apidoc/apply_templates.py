"""Expansion of `%%-key-%%` template references against the params tree."""

import logging
import re

from apidoc.errors import DuplicateParamError, TemplateError
from apidoc.extract_metainfo import children_without_properties
from apidoc.markdown_nodes import (
    CodeNode,
    HeadingNode,
    ListItemNode,
    MarkdownNode,
    TextNode,
    children_of,
    clone_node,
    text_of,
)
from apidoc.parse_variable import parse_variable

logger = logging.getLogger(__name__)

# Nesting limit for templates that expand into other templates
MAX_TEMPLATE_DEPTH = 32

_INLINE_MARKER = "-inline- = %%"
_APPEND_MARKER = " = %%"
_TEMPLATE_RE = re.compile(r"%%-template-[^%]+-%%")


def template_key(text: str) -> str:
    """Return the reference key under which a params heading is addressed."""
    return f"%%-{text}-%%"


def check_no_duplicate_param_entries(params: list[MarkdownNode] | None) -> None:
    """Reject params sources that define the same literal key twice."""
    if not params:
        return
    entries: set[str] = set()
    for node in params:
        text = text_of(node)
        if text in entries:
            raise DuplicateParamError(
                "Duplicate param entry, for language-specific params use prefix "
                "(e.g. js-...)",
                text,
            )
        entries.add(text)


def apply_templates(
    body: list[MarkdownNode], params: list[MarkdownNode]
) -> list[MarkdownNode]:
    """Return a new body tree with every template reference expanded.

    Three forms are recognized:

    - `<label>-inline- = %%-key-%%` is replaced by one sibling per entry
      listed under `key`, each named `<label><entry name>`.
    - `<label> = %%-key-%%` keeps the node, renamed to `<label>`, and appends
      the children of `key`.
    - `%%-template-<name>-%%` anywhere in a node's text replaces the node by
      the children of that template.

    Neither `body` nor `params` is modified; expanded nodes never share child
    lists with either input.
    """
    params_map = {template_key(text_of(node)): node for node in params}
    expanded = _expand_all(body, params_map, 0)
    logger.debug(
        "Expanded templates: %d top-level nodes -> %d", len(body), len(expanded)
    )
    return expanded


def _lookup(params_map: dict[str, MarkdownNode], key: str) -> MarkdownNode:
    template = params_map.get(key)
    if template is None:
        raise TemplateError("Bad template", key)
    return template


def _expand_all(
    nodes: list[MarkdownNode], params_map: dict[str, MarkdownNode], depth: int
) -> list[MarkdownNode]:
    result: list[MarkdownNode] = []
    for node in nodes:
        result.extend(_expand(node, params_map, depth))
    return result


def _expand(
    node: MarkdownNode, params_map: dict[str, MarkdownNode], depth: int
) -> list[MarkdownNode]:
    if isinstance(node, CodeNode):
        return [clone_node(node)]
    if depth > MAX_TEMPLATE_DEPTH:
        raise TemplateError("Template expansion is too deep", node.text)

    text = node.text
    if _INLINE_MARKER in text:
        label, key = text.split("-inline- = ")[:2]
        listing = _lookup(params_map, key.strip())
        expanded = []
        for entry in children_of(listing):
            template = _lookup(params_map, text_of(entry).strip())
            declarations = children_without_properties(template)
            if not declarations:
                raise TemplateError("Template has no declaration", text_of(entry))
            arg_name = parse_variable(text_of(declarations[0])).name
            children = [*children_of(node), *children_of(template)]
            expanded.append(
                _rebuild(node, label + arg_name, children, params_map, depth + 1)
            )
        return expanded

    if _APPEND_MARKER in text:
        label, key = text.split(" = ")[:2]
        template = _lookup(params_map, key.strip())
        children = [*children_of(node), *children_of(template)]
        return [_rebuild(node, label, children, params_map, depth + 1)]

    match = _TEMPLATE_RE.search(text)
    if match:
        template = _lookup(params_map, match.group(0))
        return _expand_all(children_of(template), params_map, depth + 1)

    return [_rebuild(node, text, children_of(node), params_map, depth)]


def _rebuild(
    node: HeadingNode | ListItemNode | TextNode,
    text: str,
    children: list[MarkdownNode],
    params_map: dict[str, MarkdownNode],
    depth: int,
) -> MarkdownNode:
    """Create a fresh node of the same variant with expanded children."""
    if isinstance(node, HeadingNode):
        return HeadingNode(node.level, text, _expand_all(children, params_map, depth))
    if isinstance(node, ListItemNode):
        return ListItemNode(
            node.li_type, text, _expand_all(children, params_map, depth)
        )
    return TextNode(text)
