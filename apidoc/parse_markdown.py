"""Build the API node tree from markdown text with markdown-it-py."""

from markdown_it import MarkdownIt
from markdown_it.token import Token

from apidoc.markdown_nodes import (
    CodeNode,
    HeadingNode,
    ListItemNode,
    MarkdownNode,
    TextNode,
)


def _li_type(token: Token) -> str:
    """Map a list opening token to the list item tag used by the grammar."""
    if token.type == "ordered_list_open":
        return "ordinal"
    if token.markup == "*":
        return "bullet"
    return "default"


def parse_markdown(content: str) -> list[MarkdownNode]:
    """Parse markdown into a tree of headings, list items, text and code.

    Headings nest under the nearest shallower heading, list items nest under
    their parent item. The first paragraph of a list item becomes its text,
    with line breaks folded into single spaces so declarations may wrap.
    """
    tokens = MarkdownIt("commonmark").parse(content)

    root: list[MarkdownNode] = []
    headings: list[HeadingNode] = []
    lists: list[str] = []
    items: list[ListItemNode] = []
    awaiting_item_text = False

    def container() -> list[MarkdownNode]:
        if items:
            return items[-1].children
        if headings:
            return headings[-1].children
        return root

    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token.type == "heading_open":
            level = int(token.tag[1:])
            heading = HeadingNode(level, tokens[i + 1].content.strip())
            while headings and headings[-1].level >= level:
                headings.pop()
            (headings[-1].children if headings else root).append(heading)
            headings.append(heading)
            # Skip the inline and closing tokens of the heading
            i += 3
            continue

        if token.type in ("bullet_list_open", "ordered_list_open"):
            lists.append(_li_type(token))
        elif token.type in ("bullet_list_close", "ordered_list_close"):
            lists.pop()
        elif token.type == "list_item_open":
            item = ListItemNode(lists[-1], "")
            container().append(item)
            items.append(item)
            awaiting_item_text = True
        elif token.type == "list_item_close":
            items.pop()
            awaiting_item_text = False
        elif token.type == "inline":
            if awaiting_item_text:
                items[-1].text = " ".join(
                    line.strip() for line in token.content.splitlines()
                ).strip()
                awaiting_item_text = False
            else:
                container().append(TextNode(token.content))
        elif token.type in ("fence", "code_block"):
            container().append(CodeNode(token.info.strip(), token.content))
            awaiting_item_text = False
        elif token.type == "html_block":
            container().append(TextNode(token.content.strip()))
        i += 1
    return root
