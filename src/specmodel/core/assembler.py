"""
Block assembly for method bodies.

Splits the statements of a feature method into blocks in one forward
pass, checking every label against the block grammar. Fixture and helper
bodies are wrapped in a single anonymous block without any checks.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .errors import make_label_error
from .grammar import BlockKind, GrammarDescriptor, descriptor, display_name, lookup_label
from .ir import Block
from .syntax import ClassNode, MethodNode, SourcePosition, StatementNode


@dataclass
class _BlockDraft:
    kind: BlockKind
    descriptions: list[str] = field(default_factory=list)
    statements: list[StatementNode] = field(default_factory=list)

    def add(self, stmt: StatementNode) -> None:
        if stmt.literal is not None:
            self.descriptions.append(stmt.literal)
        else:
            self.statements.append(stmt)

    def freeze(self) -> Block:
        return Block(
            kind=self.kind,
            descriptions=tuple(self.descriptions),
            statements=tuple(self.statements),
        )


class BlockAssembler:
    """
    Splits one method body into blocks.

    The assembler keeps the current block and its grammar record; a
    labeled statement opens a new block if the grammar allows it after
    the current one. The input statements are never modified.
    """

    def __init__(self, method: MethodNode, owner: ClassNode):
        self.method = method
        self.owner = owner
        self.blocks: list[_BlockDraft] = []
        self.current = self._open(BlockKind.ANONYMOUS)
        self.grammar: GrammarDescriptor = descriptor(BlockKind.ANONYMOUS)

    def _open(self, kind: BlockKind) -> _BlockDraft:
        draft = _BlockDraft(kind)
        self.blocks.append(draft)
        return draft

    def assemble(self) -> list[Block]:
        """
        Run the pass over all statements.

        Raises:
            LabelError: Unknown label, label not allowed where it appears,
                or the body ends while a mandatory block is still missing
        """
        for stmt in self.method.statements:
            if stmt.label is not None:
                self._start_block(stmt.label, stmt.position)
            self.current.add(stmt)

        self._check_successor(BlockKind.METHOD_END, self.method.last_position)
        return [draft.freeze() for draft in self.blocks]

    def _start_block(self, label: str, position: SourcePosition) -> None:
        resolved = lookup_label(label)
        if resolved is None:
            raise make_label_error(
                f"Unrecognized block label: {label}",
                self.owner,
                position,
                self.method.name,
                label=label,
            )
        self._check_successor(resolved.kind, position)
        self.current = self._open(resolved.kind)
        self.grammar = resolved

    def _check_successor(self, kind: BlockKind, position: SourcePosition) -> None:
        if self.grammar.allows(kind):
            return
        allowed = self.grammar.successor_labels
        label = display_name(kind)
        raise make_label_error(
            f"'{label}' is not allowed here; instead, use one of: {', '.join(allowed)}",
            self.owner,
            position,
            self.method.name,
            label=label,
            allowed=allowed,
        )


def assemble(method: MethodNode, owner: ClassNode) -> list[Block]:
    """Split a feature method body into grammar-checked blocks."""
    return BlockAssembler(method, owner).assemble()


def single_block(statements: Sequence[StatementNode]) -> list[Block]:
    """Wrap a fixture or helper body in one anonymous block, verbatim."""
    return [Block(kind=BlockKind.ANONYMOUS, statements=tuple(statements))]
