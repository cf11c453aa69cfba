"""Parser for single declaration lines such as `` `name` ?<Type> text``."""

import re
from dataclasses import dataclass

from apidoc.errors import GrammarError

_NAME_PATTERNS = (
    re.compile(r"^`([^`]+)` (.*)"),
    re.compile(r"^(returns): (.*)"),
    re.compile(r"^(type): (.*)"),
    re.compile(r"^(argument): (.*)"),
)

FLAGS = "?e"


@dataclass(frozen=True)
class VariableDeclaration:
    """The pieces of one declaration line."""

    name: str
    type: str
    text: str
    optional: bool = False
    experimental: bool = False


def parse_variable(line: str) -> VariableDeclaration:
    """Split a declaration line into name, flags, type body and trailing text.

    The type body is everything between the first `<` and its matching `>`,
    so nested generics such as `<[Array]<[Object]<[string], [int]>>>` are kept
    whole.
    """
    match = None
    for pattern in _NAME_PATTERNS:
        match = pattern.match(line)
        if match:
            break
    if not match:
        raise GrammarError("Invalid argument", line)

    name = match.group(1)
    remainder = match.group(2)
    optional = False
    experimental = False
    while remainder and remainder[0] in FLAGS:
        if remainder[0] == "?":
            optional = True
        else:
            experimental = True
        remainder = remainder[1:]
    if not remainder.startswith("<"):
        raise GrammarError(f'Bad argument "{name}"', line)

    depth = 0
    for i, c in enumerate(remainder):
        if c == "<":
            depth += 1
        elif c == ">":
            depth -= 1
        if depth == 0:
            return VariableDeclaration(
                name=name,
                type=remainder[1:i],
                text=remainder[i + 2 :],
                optional=optional,
                experimental=experimental,
            )
    raise GrammarError("Unbalanced type brackets", line)
