"""
Block types for the specification IR.

A block is one phase of a method body: the statements that follow a label
up to the next label, plus any description strings written directly
under the label.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from ..grammar import BlockKind, GrammarDescriptor, descriptor, display_name
from ..syntax import StatementNode


class Block(BaseModel):
    """
    A labeled (or leading anonymous) phase of a method.

    Attributes:
        kind: Block kind from the block grammar
        descriptions: Description strings, in source order
        statements: Statements of this block, in source order
    """

    kind: BlockKind
    descriptions: tuple[str, ...] = ()
    statements: tuple[StatementNode, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def label(self) -> str:
        """Label token as written in source (``anonymous`` for the lead block)."""
        return display_name(self.kind)

    @property
    def grammar(self) -> GrammarDescriptor:
        return descriptor(self.kind)

    @property
    def is_anonymous(self) -> bool:
        return self.kind is BlockKind.ANONYMOUS

    @property
    def is_empty(self) -> bool:
        return not self.descriptions and not self.statements

    def __str__(self) -> str:
        return f"Block({self.label}: {len(self.statements)} statements)"
