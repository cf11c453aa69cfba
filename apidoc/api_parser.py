"""Three-pass parser turning the API markdown grammar into a Documentation."""

import logging
import re
from pathlib import Path
from typing import Any

from apidoc.apply_templates import apply_templates, check_no_duplicate_param_entries
from apidoc.documentation import (
    DEFAULT_SINCE,
    ApiClass,
    Documentation,
    Member,
    Metainfo,
    Type,
)
from apidoc.errors import DuplicateClassError, GrammarError, UnknownReferenceError
from apidoc.extract_comments import extract_comments
from apidoc.extract_metainfo import children_without_properties, extract_metainfo
from apidoc.load_config import load_config
from apidoc.markdown_nodes import (
    HeadingNode,
    ListItemNode,
    MarkdownNode,
    is_bullet,
    is_default_item,
    visit_all,
)
from apidoc.parse_markdown import parse_markdown
from apidoc.parse_type import parse_type
from apidoc.read_api_sources import read_api_sources
from apidoc.resolve_override import Resolution, apply_override, resolve_override

logger = logging.getLogger(__name__)

_CLASS_PREFIX = "class:"
_EXTENDS_PREFIX = "extends: ["
_MEMBER_RE = re.compile(
    r"^(event|method|property|async method|optional method|optional async method)"
    r": ([^.]+)\.(.*)"
)
_ARGUMENT_RE = re.compile(r"^(param|option): (.*)")


class ApiParser:
    """Builds the documentation model from an already parsed markdown tree.

    Classes (level 1), members (level 2) and arguments (level 3) are parsed in
    three separate passes, each relying on the previous ones being complete.
    """

    def __init__(
        self,
        body: list[MarkdownNode],
        params: list[MarkdownNode] | None = None,
        config: dict[str, Any] | None = None,
    ) -> None:
        self.config = config or load_config()
        check_no_duplicate_param_entries(params)
        api = apply_templates(body, params or [])

        self.classes: dict[str, ApiClass] = {}
        for level, parse in (
            (1, self.parse_class),
            (2, self.parse_member),
            (3, self.parse_argument),
        ):
            for node in visit_all(api):
                if isinstance(node, HeadingNode) and node.level == level:
                    parse(node)

        self.documentation = Documentation(list(self.classes.values()))
        self.documentation.index()
        logger.info(
            "Parsed %d classes, %d members",
            len(self.classes),
            sum(len(c.members) for c in self.classes.values()),
        )

    def parse_class(self, node: HeadingNode) -> None:
        if not node.text.startswith(_CLASS_PREFIX):
            logger.debug("Skipping non-class heading: %s", node.text)
            return
        name = node.text[len(_CLASS_PREFIX) :].strip()
        extends = None
        for child in node.children:
            if is_bullet(child) and child.text.startswith(_EXTENDS_PREFIX):
                end = child.text.find("]")
                if end < 0:
                    raise GrammarError("Invalid extends declaration", child.text)
                extends = child.text[len(_EXTENDS_PREFIX) : end]
                break

        clazz = ApiClass(
            name=name,
            metainfo=extract_metainfo(node),
            extends=extends,
            comments=extract_comments(node),
        )
        if name in self.classes:
            if self.config["rules"]["duplicate_classes"] == "error":
                raise DuplicateClassError("Duplicate class", node.text)
            logger.warning("Class %s is declared more than once, last one wins", name)
        self.classes[name] = clazz
        logger.debug("Class %s (extends %s)", name, extends)

    def parse_member(self, spec: HeadingNode) -> None:
        match = _MEMBER_RE.match(spec.text)
        if not match:
            raise GrammarError("Invalid member", spec.text)
        keyword, class_name, name = match.groups()

        return_type = Type("void")
        optional = False
        for item in spec.children:
            if isinstance(item, ListItemNode) and is_default_item(item):
                parsed = parse_type(item)
                return_type, optional = parsed.type, parsed.optional
                break

        metainfo = extract_metainfo(spec)
        comments = extract_comments(spec)
        if keyword == "event":
            member = Member.create_event(metainfo, name, return_type, comments)
        elif keyword == "property":
            member = Member.create_property(
                metainfo, name, return_type, comments, required=not optional
            )
        else:
            member = Member.create_method(metainfo, name, [], return_type, comments)
            member.is_async = "async" in keyword
            member.required = "optional" not in keyword

        clazz = self.classes.get(class_name)
        if clazz is None:
            raise UnknownReferenceError(f"Invalid class {class_name}", spec.text)
        existing = next(
            (m for m in clazz.members if m.name == name and m.kind == member.kind),
            None,
        )
        resolution = resolve_override(existing, member, context=spec.text)
        if existing is None or resolution is Resolution.INSERT:
            clazz.members.append(member)
        else:
            apply_override(existing, member, resolution)

    def parse_argument(self, spec: HeadingNode) -> None:
        match = _ARGUMENT_RE.match(spec.text)
        if not match:
            raise GrammarError("Invalid argument heading", spec.text)

        # "test.describe.only.title" is argument "title" of method "describe.only"
        parts = match.group(2).split(".")
        class_name = parts[0]
        name = parts[-1]
        method_name = ".".join(parts[1:-1])

        clazz = self.classes.get(class_name)
        if clazz is None:
            raise UnknownReferenceError(f"Invalid class {class_name}", spec.text)
        method = next(
            (m for m in clazz.members if m.kind == "method" and m.name == method_name),
            None,
        )
        if method is None:
            raise UnknownReferenceError(
                f"Invalid method {class_name}.{method_name}", spec.text
            )
        if not name:
            raise GrammarError("Invalid member name", spec.text)

        if match.group(1) == "param":
            arg = self.parse_property(spec)
            arg.name = name
            existing = next((a for a in method.args if a.name == name), None)
            resolution = resolve_override(
                existing, arg, declaration=True, context=spec.text
            )
            if existing is None or resolution is Resolution.INSERT:
                method.args.append(arg)
            else:
                apply_override(existing, arg, resolution)
            return

        options = next((a for a in method.args if a.name == "options"), None)
        if options is None:
            options = Member.create_property(
                Metainfo(since=DEFAULT_SINCE),
                "options",
                Type("Object"),
                required=False,
            )
            method.args.append(options)
        option = self.parse_property(spec)
        option.required = False
        options.type.properties.append(option)

    def parse_property(self, spec: HeadingNode) -> Member:
        """Parse the declaration line of an argument heading into a property."""
        declarations = children_without_properties(spec)
        if not declarations or not isinstance(declarations[0], ListItemNode):
            raise GrammarError("Missing declaration line", spec.text)
        parsed = parse_type(declarations[0])
        return Member.create_property(
            extract_metainfo(spec),
            parsed.name,
            parsed.type,
            extract_comments(spec),
            required=not parsed.optional,
        )


def parse_api(
    api_dir: str | Path,
    params_path: str | Path | None = None,
    config: dict[str, Any] | None = None,
) -> Documentation:
    """Read, expand and parse every grammar file of `api_dir`."""
    config = config or load_config()
    body, params = read_api_sources(
        Path(api_dir), Path(params_path) if params_path else None, config
    )
    params_nodes = parse_markdown(params) if params is not None else None
    return ApiParser(parse_markdown(body), params_nodes, config).documentation
