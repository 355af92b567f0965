"""
Block grammar for feature methods.

A feature method body is a sequence of labeled blocks. Each block kind is
introduced by a fixed label token and may only be followed by a fixed set
of kinds. The table below is the single source of truth for that grammar;
the block assembler only ever looks things up here.

Example:
    def "pushing onto a stack"():
        setup:
            stack = Stack()
        when:
            stack.push(1)
        then:
            stack.size() == 1
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict


class BlockKind(str, Enum):
    """Kinds of blocks a method body can be split into."""

    ANONYMOUS = "anonymous"  # statements before the first label
    SETUP = "setup"
    STIMULUS = "stimulus"
    OUTCOME = "outcome"
    SINGLE_OUTCOME = "single_outcome"
    CLEANUP = "cleanup"
    DATA_TABLE = "data_table"
    METHOD_END = "method_end"  # terminal pseudo-kind, never instantiated


class GrammarDescriptor(BaseModel):
    """
    Static grammar record for one block kind.

    Attributes:
        kind: Block kind this record describes
        label: Label token introducing the kind (None for anonymous/end)
        successors: Kinds that may legally follow, in declared order
    """

    kind: BlockKind
    label: str | None
    successors: tuple[BlockKind, ...]

    model_config = ConfigDict(frozen=True)

    def allows(self, kind: BlockKind) -> bool:
        return kind in self.successors

    @property
    def successor_labels(self) -> tuple[str, ...]:
        """Successors rendered as label tokens, for diagnostics."""
        return tuple(display_name(kind) for kind in self.successors)


METHOD_END_DISPLAY = "end-of-method"

_TAIL = (BlockKind.CLEANUP, BlockKind.DATA_TABLE, BlockKind.METHOD_END)

GRAMMAR: Mapping[BlockKind, GrammarDescriptor] = MappingProxyType(
    {
        BlockKind.ANONYMOUS: GrammarDescriptor(
            kind=BlockKind.ANONYMOUS,
            label=None,
            successors=(
                BlockKind.SETUP,
                BlockKind.STIMULUS,
                BlockKind.OUTCOME,
                BlockKind.SINGLE_OUTCOME,
                *_TAIL,
            ),
        ),
        BlockKind.SETUP: GrammarDescriptor(
            kind=BlockKind.SETUP,
            label="setup",
            successors=(
                BlockKind.STIMULUS,
                BlockKind.OUTCOME,
                BlockKind.SINGLE_OUTCOME,
                *_TAIL,
            ),
        ),
        # a stimulus must be answered by an outcome, nothing else
        BlockKind.STIMULUS: GrammarDescriptor(
            kind=BlockKind.STIMULUS,
            label="when",
            successors=(BlockKind.OUTCOME,),
        ),
        BlockKind.OUTCOME: GrammarDescriptor(
            kind=BlockKind.OUTCOME,
            label="then",
            successors=(BlockKind.STIMULUS, BlockKind.OUTCOME, *_TAIL),
        ),
        BlockKind.SINGLE_OUTCOME: GrammarDescriptor(
            kind=BlockKind.SINGLE_OUTCOME,
            label="expect",
            successors=_TAIL,
        ),
        BlockKind.CLEANUP: GrammarDescriptor(
            kind=BlockKind.CLEANUP,
            label="cleanup",
            successors=(BlockKind.DATA_TABLE, BlockKind.METHOD_END),
        ),
        BlockKind.DATA_TABLE: GrammarDescriptor(
            kind=BlockKind.DATA_TABLE,
            label="where",
            successors=(BlockKind.METHOD_END,),
        ),
        BlockKind.METHOD_END: GrammarDescriptor(
            kind=BlockKind.METHOD_END,
            label=None,
            successors=(),
        ),
    }
)

_BY_LABEL: Mapping[str, GrammarDescriptor] = MappingProxyType(
    {d.label: d for d in GRAMMAR.values() if d.label is not None}
)


def descriptor(kind: BlockKind) -> GrammarDescriptor:
    """Get the grammar record for a block kind."""
    return GRAMMAR[kind]


def lookup_label(label: str) -> GrammarDescriptor | None:
    """Resolve a label token (case-sensitive) to its grammar record."""
    return _BY_LABEL.get(label)


def label_tokens() -> tuple[str, ...]:
    """All recognized label tokens, in table order."""
    return tuple(_BY_LABEL)


def display_name(kind: BlockKind) -> str:
    """Render a kind the way users write it: its label token."""
    if kind is BlockKind.METHOD_END:
        return METHOD_END_DISPLAY
    label = GRAMMAR[kind].label
    return label if label is not None else kind.value
