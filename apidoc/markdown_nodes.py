"""Node variants of the markdown tree consumed by the API parser."""

import copy
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field


@dataclass
class HeadingNode:
    """A `#`, `##` or `###` heading and everything nested below it."""

    level: int
    text: str
    children: list["MarkdownNode"] = field(default_factory=list)


@dataclass
class ListItemNode:
    """A list item; `li_type` is `bullet` (`*`), `default` (`-`) or `ordinal`."""

    li_type: str
    text: str
    children: list["MarkdownNode"] = field(default_factory=list)


@dataclass
class TextNode:
    """A plain paragraph."""

    text: str


@dataclass
class CodeNode:
    """A fenced or indented code block."""

    lang: str
    text: str


MarkdownNode = HeadingNode | ListItemNode | TextNode | CodeNode


def children_of(node: MarkdownNode) -> list[MarkdownNode]:
    """Return the child list of a container node, or an empty list for leaves."""
    if isinstance(node, HeadingNode | ListItemNode):
        return node.children
    return []


def text_of(node: MarkdownNode) -> str:
    """Return the raw text of a node; code blocks carry no grammar text."""
    if isinstance(node, CodeNode):
        return ""
    return node.text


def is_bullet(node: MarkdownNode) -> bool:
    return isinstance(node, ListItemNode) and node.li_type == "bullet"


def is_default_item(node: MarkdownNode) -> bool:
    return isinstance(node, ListItemNode) and node.li_type == "default"


def clone_node(node: MarkdownNode) -> MarkdownNode:
    """Deep copy a node so the copy shares no child lists with the original."""
    return copy.deepcopy(node)


def visit_all(nodes: Iterable[MarkdownNode]) -> Iterator[MarkdownNode]:
    """Yield every node of the tree depth-first, parents before children."""
    for node in nodes:
        yield node
        yield from visit_all(children_of(node))
