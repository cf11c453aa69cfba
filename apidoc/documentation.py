"""In-memory documentation model: classes, members, arguments and types."""

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from apidoc.markdown_nodes import MarkdownNode

# Since-version given to entries the parser synthesizes (options, nested properties)
DEFAULT_SINCE = "v1.0"


@dataclass
class Langs:
    """Language applicability of a declaration.

    `only` is None when the declaration applies to every language.
    """

    only: list[str] | None = None
    aliases: dict[str, str] = field(default_factory=dict)
    types: dict[str, "Type"] = field(default_factory=dict)
    overrides: dict[str, "Member"] = field(default_factory=dict)

    def applies_to(self, lang: str) -> bool:
        return self.only is None or lang in self.only


@dataclass
class Metainfo:
    since: str
    experimental: bool = False
    langs: Langs = field(default_factory=Langs)


@dataclass
class Type:
    """A type expression and, for object-like types, its nested properties."""

    name: str
    properties: list["Member"] = field(default_factory=list)


@dataclass
class Member:
    """An event, property or method of a class; arguments are properties too."""

    kind: str  # event/property/method
    name: str
    type: Type
    metainfo: Metainfo
    comments: list[MarkdownNode] = field(default_factory=list)
    args: list["Member"] = field(default_factory=list)
    required: bool = True
    is_async: bool = False
    class_name: str | None = None
    args_by_name: dict[str, "Member"] = field(default_factory=dict)

    @property
    def langs(self) -> Langs:
        return self.metainfo.langs

    @property
    def since(self) -> str:
        return self.metainfo.since

    @property
    def experimental(self) -> bool:
        return self.metainfo.experimental

    @classmethod
    def create_event(
        cls,
        metainfo: Metainfo,
        name: str,
        type_: Type,
        comments: list[MarkdownNode] | None = None,
    ) -> "Member":
        return cls("event", name, type_, metainfo, list(comments or []))

    @classmethod
    def create_property(
        cls,
        metainfo: Metainfo,
        name: str,
        type_: Type,
        comments: list[MarkdownNode] | None = None,
        required: bool = True,
    ) -> "Member":
        return cls(
            "property", name, type_, metainfo, list(comments or []), required=required
        )

    @classmethod
    def create_method(
        cls,
        metainfo: Metainfo,
        name: str,
        args: list["Member"],
        return_type: Type,
        comments: list[MarkdownNode] | None = None,
    ) -> "Member":
        return cls("method", name, return_type, metainfo, list(comments or []), args)

    def index(self) -> None:
        """Build the name lookup for arguments; first declaration per name wins."""
        self.args_by_name = {}
        for arg in self.args:
            self.args_by_name.setdefault(arg.name, arg)


@dataclass
class ApiClass:
    """A documented class and its members in declaration order."""

    name: str
    metainfo: Metainfo
    members: list[Member] = field(default_factory=list)
    extends: str | None = None
    comments: list[MarkdownNode] = field(default_factory=list)
    properties: dict[str, Member] = field(default_factory=dict)
    methods: dict[str, Member] = field(default_factory=dict)
    events: dict[str, Member] = field(default_factory=dict)

    @property
    def langs(self) -> Langs:
        return self.metainfo.langs

    def index(self) -> None:
        self.properties, self.methods, self.events = {}, {}, {}
        by_kind = {
            "property": self.properties,
            "method": self.methods,
            "event": self.events,
        }
        for member in self.members:
            member.class_name = self.name
            by_kind[member.kind].setdefault(member.name, member)
            member.index()


class Documentation:
    """Root of the model; call `index()` once every class is attached."""

    def __init__(self, classes: list[ApiClass]) -> None:
        self.classes_array = list(classes)
        self.classes: Mapping[str, ApiClass] = MappingProxyType({})
        self._members: Mapping[tuple[str, str], tuple[Member, ...]] = (
            MappingProxyType({})
        )

    def index(self) -> None:
        classes: dict[str, ApiClass] = {}
        members: dict[tuple[str, str], list[Member]] = {}
        for clazz in self.classes_array:
            classes[clazz.name] = clazz
            clazz.index()
            for member in clazz.members:
                members.setdefault((clazz.name, member.name), []).append(member)
        self.classes = MappingProxyType(classes)
        self._members = MappingProxyType(
            {key: tuple(value) for key, value in members.items()}
        )

    def get_class(self, name: str) -> ApiClass | None:
        return self.classes.get(name)

    def find_members(self, class_name: str, name: str) -> tuple[Member, ...]:
        """Return every member declared as `class_name.name`, in declaration order."""
        return self._members.get((class_name, name), ())

    def get_member(
        self, class_name: str, name: str, kind: str | None = None
    ) -> Member | None:
        for member in self.find_members(class_name, name):
            if kind is None or member.kind == kind:
                return member
        return None

    def base_classes(self, name: str) -> list[ApiClass]:
        """Return the documented ancestors of a class, nearest first."""
        chain: list[ApiClass] = []
        seen = {name}
        clazz = self.classes.get(name)
        while clazz and clazz.extends and clazz.extends not in seen:
            seen.add(clazz.extends)
            clazz = self.classes.get(clazz.extends)
            if clazz:
                chain.append(clazz)
        return chain

    def filter_for_language(self, lang: str) -> "Documentation":
        """Return a new indexed model restricted to what applies to `lang`.

        Aliases, type overrides and declaration overrides recorded for `lang`
        are applied. This model is left untouched.
        """
        aliases = {
            clazz.name: clazz.langs.aliases.get(lang, clazz.name)
            for clazz in self.classes_array
        }
        classes = []
        for clazz in self.classes_array:
            if not clazz.langs.applies_to(lang):
                continue
            filtered = copy.deepcopy(clazz)
            filtered.name = aliases[clazz.name]
            if filtered.extends:
                filtered.extends = aliases.get(filtered.extends, filtered.extends)
            filtered.members = [
                _filter_member(member, lang)
                for member in filtered.members
                if member.langs.applies_to(lang)
            ]
            classes.append(filtered)
        documentation = Documentation(classes)
        documentation.index()
        return documentation


def _filter_member(member: Member, lang: str) -> Member:
    """Apply the language view to an already copied member, in place."""
    member.name = member.langs.aliases.get(lang, member.name)
    member.type = _filter_type(member.langs.types.get(lang, member.type), lang)
    args = []
    for arg in member.args:
        arg = arg.langs.overrides.get(lang, arg)
        if arg.langs.applies_to(lang):
            args.append(_filter_member(arg, lang))
    member.args = args
    return member


def _filter_type(type_: Type, lang: str) -> Type:
    type_.properties = [
        _filter_member(prop, lang)
        for prop in type_.properties
        if prop.langs.applies_to(lang)
    ]
    return type_
