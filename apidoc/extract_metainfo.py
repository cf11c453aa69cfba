"""Extraction of since/experimental/langs metadata from heading bullets."""

import re

from apidoc.documentation import Langs, Metainfo
from apidoc.errors import MissingSinceError
from apidoc.markdown_nodes import (
    HeadingNode,
    MarkdownNode,
    children_of,
    is_bullet,
    text_of,
)

_ALIAS_RE = re.compile(r"alias-(\w+)[\s]*:(.*)")


def is_metainfo_bullet(node: MarkdownNode) -> bool:
    """Check if a node is one of the `langs:`/`since:`/`experimental` bullets."""
    if not is_bullet(node):
        return False
    text = text_of(node)
    return (
        text.startswith("langs:") or text.startswith("since:") or text == "experimental"
    )


def children_without_properties(node: MarkdownNode) -> list[MarkdownNode]:
    return [c for c in children_of(node) if not is_metainfo_bullet(c)]


def extract_langs(node: MarkdownNode) -> Langs:
    for child in children_of(node):
        if not is_bullet(child) or not text_of(child).startswith("langs:"):
            continue
        only = text_of(child)[len("langs:") :].strip()
        aliases: dict[str, str] = {}
        for alias in children_of(child):
            match = _ALIAS_RE.match(text_of(alias))
            if match:
                aliases[match.group(1).strip()] = match.group(2).strip()
        return Langs(
            only=[lang.strip() for lang in only.split(",")] if only else None,
            aliases=aliases,
        )
    return Langs()


def extract_since(node: HeadingNode) -> str:
    for child in node.children:
        if is_bullet(child) and text_of(child).startswith("since:"):
            text = text_of(child)
            return text[text.index(":") + 1 :].strip()
    raise MissingSinceError("Missing since: v1.** declaration", node.text)


def extract_experimental(node: HeadingNode) -> bool:
    return any(
        is_bullet(child) and text_of(child) == "experimental"
        for child in node.children
    )


def extract_metainfo(node: HeadingNode) -> Metainfo:
    """Collect the metadata every class, member and argument heading carries."""
    return Metainfo(
        since=extract_since(node),
        experimental=extract_experimental(node),
        langs=extract_langs(node),
    )
