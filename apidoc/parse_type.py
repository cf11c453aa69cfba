"""Recursive parsing of a declaration item and its nested properties."""

from dataclasses import dataclass

from apidoc.documentation import DEFAULT_SINCE, Member, Metainfo, Type
from apidoc.markdown_nodes import ListItemNode, TextNode
from apidoc.parse_variable import parse_variable


@dataclass
class ParsedType:
    """A declaration item turned into a Type, with the flags of its line."""

    name: str
    type: Type
    text: str
    optional: bool
    experimental: bool


def parse_type(item: ListItemNode) -> ParsedType:
    """Parse a declaration item; each nested item becomes a property of its type.

    Nested items are parsed with the same grammar, so object properties may
    themselves be objects to any depth.
    """
    declaration = parse_variable(item.text)
    properties = []
    for child in item.children:
        if not isinstance(child, ListItemNode):
            continue
        nested = parse_type(child)
        properties.append(
            Member.create_property(
                Metainfo(since=DEFAULT_SINCE, experimental=nested.experimental),
                nested.name,
                nested.type,
                [TextNode(nested.text)],
                required=not nested.optional,
            )
        )
    return ParsedType(
        name=declaration.name,
        type=Type(declaration.type, properties),
        text=declaration.text,
        optional=declaration.optional,
        experimental=declaration.experimental,
    )
