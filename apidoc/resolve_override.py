"""Reconciliation of duplicate declarations that differ by target language."""

from enum import Enum

from apidoc.documentation import Member
from apidoc.errors import AmbiguousOverrideError


class Resolution(Enum):
    """What to do with a candidate that repeats an existing declaration."""

    INSERT = "insert"
    TYPE_OVERRIDE = "type-override"
    DECLARATION_OVERRIDE = "declaration-override"


def is_type_override(
    existing: Member, candidate: Member, context: str | None = None
) -> bool:
    """Decide whether `candidate` overrides `existing` instead of adding to it.

    Declarations without a `langs:` restriction always override. A candidate
    restricted to a subset of the existing languages overrides; disjoint
    languages make a separate declaration. A partial overlap is ambiguous.
    """
    existing_only = existing.langs.only
    candidate_only = candidate.langs.only
    if not existing_only or not candidate_only:
        return True
    if all(lang in existing_only for lang in candidate_only):
        return True
    if any(lang in existing_only for lang in candidate_only):
        raise AmbiguousOverrideError(
            "Ambiguous language override for", context or candidate.name
        )
    return False


def resolve_override(
    existing: Member | None,
    candidate: Member,
    *,
    declaration: bool = False,
    context: str | None = None,
) -> Resolution:
    """Classify a candidate member or argument against a prior declaration.

    With `declaration=True` (arguments), an override replaces the whole
    declaration per language and therefore needs an explicit `langs:` list.
    """
    if existing is None or not is_type_override(existing, candidate, context):
        return Resolution.INSERT
    if not declaration:
        return Resolution.TYPE_OVERRIDE
    if not candidate.langs.only:
        raise AmbiguousOverrideError(
            "Override does not have lang", context or candidate.name
        )
    return Resolution.DECLARATION_OVERRIDE


def apply_override(existing: Member, candidate: Member, resolution: Resolution) -> None:
    """Record the candidate on `existing` for each of its languages."""
    for lang in candidate.langs.only or []:
        if resolution is Resolution.TYPE_OVERRIDE:
            existing.langs.types[lang] = candidate.type
        elif resolution is Resolution.DECLARATION_OVERRIDE:
            existing.langs.overrides[lang] = candidate
