"""
Member types for the specification IR.

Fields keep their declaration ordinal; methods come in three variants
(fixture, feature, helper), each owning its blocks.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from ..grammar import BlockKind
from ..syntax import SourcePosition
from .blocks import Block


class FixtureRole(str, Enum):
    """Lifecycle hooks a specification may declare, keyed by method name."""

    SETUP = "setup"
    CLEANUP = "cleanup"
    SETUP_SPEC = "setupSpec"
    CLEANUP_SPEC = "cleanupSpec"


class FieldSpec(BaseModel):
    """
    A data field of a specification.

    Attributes:
        name: Field name
        ordinal: Declaration-order index among fields
        shared: Value persists across iterations of a feature
        property_name: Name of the declared property owning this field, if any
        position: Source position of the declaration
    """

    name: str
    ordinal: int
    shared: bool = False
    property_name: str | None = None
    position: SourcePosition = Field(default_factory=SourcePosition)

    model_config = ConfigDict(frozen=True)

    @property
    def is_property(self) -> bool:
        return self.property_name is not None


class MethodSpec(BaseModel):
    """Common shape of all method variants."""

    name: str
    blocks: list[Block] = Field(default_factory=list)
    position: SourcePosition = Field(default_factory=SourcePosition)

    model_config = ConfigDict(frozen=True)

    @property
    def first_block(self) -> Block | None:
        return self.blocks[0] if self.blocks else None

    @property
    def last_block(self) -> Block | None:
        return self.blocks[-1] if self.blocks else None

    def get_blocks(self, kind: BlockKind) -> list[Block]:
        """All blocks of one kind, in order."""
        return [b for b in self.blocks if b.kind is kind]

    @property
    def block_kinds(self) -> list[BlockKind]:
        return [b.kind for b in self.blocks]


class FixtureMethod(MethodSpec):
    """A lifecycle hook; its body is a single anonymous block."""

    category: Literal["fixture"] = "fixture"
    role: FixtureRole


class FeatureMethod(MethodSpec):
    """A test scenario, decomposed into labeled blocks."""

    category: Literal["feature"] = "feature"
    ordinal: int

    @property
    def has_data_table(self) -> bool:
        return any(b.kind is BlockKind.DATA_TABLE for b in self.blocks)


class HelperMethod(MethodSpec):
    """Any other method; its body is a single anonymous block."""

    category: Literal["helper"] = "helper"
