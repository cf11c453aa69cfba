"""Selection of the prose children of a heading."""

from apidoc.extract_metainfo import children_without_properties
from apidoc.markdown_nodes import HeadingNode, MarkdownNode, is_default_item


def extract_comments(node: MarkdownNode) -> list[MarkdownNode]:
    """Return the children that document a heading.

    Sub-headings and `-` items are excluded: the latter hold type and return
    declarations.
    """
    return [
        c
        for c in children_without_properties(node)
        if not isinstance(c, HeadingNode) and not is_default_item(c)
    ]
