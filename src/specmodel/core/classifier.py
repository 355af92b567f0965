"""
Member classification for specification classes.

Decides what each field or method declaration of a class is: ignored,
data field, fixture, feature, or helper. Malformed declarations raise
instead of returning a verdict.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .config import DEFAULT_CONFIG, ParserConfig
from .errors import make_modifier_error, make_naming_error, make_structural_error
from .ir import FixtureRole
from .syntax import ClassNode, FieldNode, MethodNode


class MemberCategory(str, Enum):
    """Verdict tags returned by the classifier."""

    IGNORED = "ignored"
    FIELD = "field"
    FIXTURE = "fixture"
    FEATURE = "feature"
    HELPER = "helper"


@dataclass(frozen=True)
class Classification:
    """
    Classifier verdict for one declaration.

    ``role`` is set for fixtures; ``shared`` and ``property_name`` for fields.
    """

    category: MemberCategory
    role: FixtureRole | None = None
    shared: bool = False
    property_name: str | None = None


IGNORED = Classification(MemberCategory.IGNORED)


def classify(
    declaration: FieldNode | MethodNode,
    owner: ClassNode,
    config: ParserConfig = DEFAULT_CONFIG,
) -> Classification:
    """
    Classify a field or method declaration of ``owner``.

    Raises:
        StructuralError: User-written constructor
        NamingError: Fixture name with wrong capitalization
        ModifierError: Static fixture or feature method
    """
    if isinstance(declaration, FieldNode):
        return classify_field(declaration, owner, config)
    return classify_method(declaration, owner)


def classify_field(
    node: FieldNode, owner: ClassNode, config: ParserConfig = DEFAULT_CONFIG
) -> Classification:
    """Fields are data unless internal, static, or synthetic without a property."""
    if node.name.startswith(config.internal_prefix):
        return IGNORED

    prop = owner.get_property(node.name)
    if prop is None and (node.is_static or node.is_synthetic):
        return IGNORED

    return Classification(
        MemberCategory.FIELD,
        shared=node.has_annotation(config.shared_annotation),
        property_name=prop.name if prop else None,
    )


def classify_method(node: MethodNode, owner: ClassNode) -> Classification:
    """Apply the method rules in order: synthetic, constructor, fixture, feature."""
    if node.is_synthetic:
        return IGNORED

    if node.is_constructor:
        raise make_structural_error(
            "Constructors are not allowed; instead, define a 'setup()' or 'setupSpec()' method",
            owner,
            node.position,
            node.name,
        )

    role = fixture_role(node, owner)
    if role is not None:
        return Classification(MemberCategory.FIXTURE, role=role)

    if is_feature_method(node, owner):
        return Classification(MemberCategory.FEATURE)

    return Classification(MemberCategory.HELPER)


def fixture_role(node: MethodNode, owner: ClassNode) -> FixtureRole | None:
    """
    Match a method name against the fixture names.

    Only wrong capitalization is detected as a misspelling.
    """
    for role in FixtureRole:
        if role.value.lower() != node.name.lower():
            continue

        if role.value != node.name:
            raise make_naming_error(
                f"Misspelled '{role.value}()' method (wrong capitalization)",
                owner,
                node.position,
                node.name,
            )
        if node.is_static:
            raise make_modifier_error(
                "Fixture methods must not be static", owner, node.position, node.name
            )
        return role

    return None


def is_feature_method(node: MethodNode, owner: ClassNode) -> bool:
    """A method with at least one labeled top-level statement is a feature."""
    if not node.has_labels:
        return False
    if node.is_static:
        raise make_modifier_error(
            "Feature methods must not be static", owner, node.position, node.name
        )
    return True
