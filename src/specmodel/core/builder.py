"""
Specification builder.

Walks the members of one class in declaration order, classifies each,
and assembles the resulting Specification. All counters live on a
ParseContext created for a single build, so independent builds never
share mutable state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .assembler import assemble, single_block
from .classifier import MemberCategory, classify
from .config import DEFAULT_CONFIG, DuplicateFixturePolicy, ParserConfig
from .errors import make_duplicate_fixture_error
from .ir import (
    FeatureMethod,
    FieldSpec,
    FixtureMethod,
    FixtureRole,
    HelperMethod,
    Specification,
)
from .syntax import ClassNode, FieldNode, MethodNode

logger = logging.getLogger(__name__)


@dataclass
class ParseContext:
    """Mutable state of one class parse."""

    owner: ClassNode
    config: ParserConfig = DEFAULT_CONFIG
    field_count: int = 0
    feature_count: int = 0
    fields: list[FieldSpec] = field(default_factory=list)
    methods: list[FeatureMethod | HelperMethod] = field(default_factory=list)
    fixtures: dict[FixtureRole, FixtureMethod] = field(default_factory=dict)

    def next_field_ordinal(self) -> int:
        ordinal = self.field_count
        self.field_count += 1
        return ordinal

    def next_feature_ordinal(self) -> int:
        ordinal = self.feature_count
        self.feature_count += 1
        return ordinal


class SpecBuilder:
    """Builds a Specification from a class syntax tree."""

    def __init__(self, config: ParserConfig | None = None):
        self.config = config or DEFAULT_CONFIG

    def build(self, cls: ClassNode) -> Specification:
        """
        Parse one class.

        Raises:
            SpecParseError: On the first malformed member; nothing is
                returned for a class that fails
        """
        ctx = ParseContext(owner=cls, config=self.config)
        logger.debug("Building specification %s", cls.name)

        for field_node in cls.fields:
            self._visit_field(ctx, field_node)
        for method_node in cls.methods:
            self._visit_method(ctx, method_node)

        spec = Specification(
            name=cls.name,
            source_file=cls.source_file,
            position=cls.position,
            fields=ctx.fields,
            methods=ctx.methods,
            setup=ctx.fixtures.get(FixtureRole.SETUP),
            cleanup=ctx.fixtures.get(FixtureRole.CLEANUP),
            setup_spec=ctx.fixtures.get(FixtureRole.SETUP_SPEC),
            cleanup_spec=ctx.fixtures.get(FixtureRole.CLEANUP_SPEC),
        )
        logger.debug(
            "Built %s: %d fields, %d features, %d helpers, %d fixtures",
            cls.name,
            len(spec.fields),
            len(spec.features),
            len(spec.helpers),
            len(spec.fixture_methods),
        )
        return spec

    def _visit_field(self, ctx: ParseContext, node: FieldNode) -> None:
        verdict = classify(node, ctx.owner, ctx.config)
        if verdict.category is MemberCategory.IGNORED:
            logger.debug("Ignoring field %s.%s", ctx.owner.name, node.name)
            return

        ctx.fields.append(
            FieldSpec(
                name=node.name,
                ordinal=ctx.next_field_ordinal(),
                shared=verdict.shared,
                property_name=verdict.property_name,
                position=node.position,
            )
        )

    def _visit_method(self, ctx: ParseContext, node: MethodNode) -> None:
        verdict = classify(node, ctx.owner, ctx.config)
        logger.debug("Method %s.%s: %s", ctx.owner.name, node.name, verdict.category.value)

        if verdict.category is MemberCategory.IGNORED:
            return

        if verdict.role is not None:
            self._add_fixture(ctx, verdict.role, node)
        elif verdict.category is MemberCategory.FEATURE:
            ctx.methods.append(
                FeatureMethod(
                    name=node.name,
                    ordinal=ctx.next_feature_ordinal(),
                    blocks=assemble(node, ctx.owner),
                    position=node.position,
                )
            )
        else:
            ctx.methods.append(
                HelperMethod(
                    name=node.name,
                    blocks=single_block(node.statements),
                    position=node.position,
                )
            )

    def _add_fixture(self, ctx: ParseContext, role: FixtureRole, node: MethodNode) -> None:
        if role in ctx.fixtures:
            if ctx.config.duplicate_fixtures is DuplicateFixturePolicy.ERROR:
                raise make_duplicate_fixture_error(
                    f"Duplicate '{role.value}()' method; only one is allowed per specification",
                    ctx.owner,
                    node.position,
                    node.name,
                )
            logger.warning(
                "%s: '%s()' declared more than once; the declaration at %s replaces the earlier one",
                ctx.owner.name,
                role.value,
                node.position,
            )

        ctx.fixtures[role] = FixtureMethod(
            name=node.name,
            role=role,
            blocks=single_block(node.statements),
            position=node.position,
        )


def build_spec(cls: ClassNode, config: ParserConfig | None = None) -> Specification:
    """Build the Specification for one class syntax tree."""
    return SpecBuilder(config).build(cls)
