"""Tests for language override resolution."""

import pytest

from apidoc.documentation import Langs, Member, Metainfo, Type
from apidoc.errors import AmbiguousOverrideError
from apidoc.resolve_override import (
    Resolution,
    apply_override,
    is_type_override,
    resolve_override,
)


def member(only: list[str] | None, type_name: str = "[string]") -> Member:
    return Member.create_property(
        Metainfo("v1.0", langs=Langs(only=only)), "value", Type(type_name)
    )


@pytest.mark.parametrize(
    ("existing", "candidate", "expected"),
    [
        (None, ["js"], True),
        (["js"], None, True),
        (["js", "python"], ["python"], True),
        (["js", "python"], ["python", "js"], True),
        (["js"], ["java", "csharp"], False),
    ],
)
def test_is_type_override(
    existing: list[str] | None, candidate: list[str] | None, expected: bool
) -> None:
    """Verify the admissibility rule for each language relationship."""
    assert is_type_override(member(existing), member(candidate)) == expected


def test_partial_overlap_raises() -> None:
    """Verify that intersecting, non-nested lists are ambiguous."""
    with pytest.raises(AmbiguousOverrideError, match="method: Foo.value"):
        is_type_override(
            member(["js", "python"]), member(["python", "java"]), "method: Foo.value"
        )


def test_resolve_without_existing_inserts() -> None:
    """Verify that a first declaration is always inserted."""
    assert resolve_override(None, member(None)) is Resolution.INSERT
    assert resolve_override(None, member(None), declaration=True) is Resolution.INSERT


def test_resolve_member_and_argument_overrides() -> None:
    """Verify the two override flavours and the langs requirement."""
    existing = member(None)
    assert resolve_override(existing, member(["java"])) is Resolution.TYPE_OVERRIDE
    assert (
        resolve_override(existing, member(["java"]), declaration=True)
        is Resolution.DECLARATION_OVERRIDE
    )
    assert resolve_override(member(["js"]), member(["java"])) is Resolution.INSERT
    with pytest.raises(AmbiguousOverrideError, match="Override does not have lang"):
        resolve_override(existing, member(None), declaration=True)


def test_apply_override_records_per_language() -> None:
    """Verify that overrides are stored for each language of the candidate."""
    existing = member(None)
    candidate = member(["java", "csharp"], "[long]")
    apply_override(existing, candidate, Resolution.TYPE_OVERRIDE)
    assert existing.langs.types == {"java": candidate.type, "csharp": candidate.type}
    assert existing.type.name == "[string]"

    apply_override(existing, candidate, Resolution.DECLARATION_OVERRIDE)
    assert existing.langs.overrides["csharp"] is candidate
