"""
Syntax tree types consumed by the specification builder.

These mirror what a host-language front-end exposes for one class: its
fields, properties, and methods, each method with its top-level
statements. Statement payloads are opaque; only the label, position, and
string-literal value of a statement are ever inspected.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SourcePosition(BaseModel):
    """1-indexed line/column of a syntax node."""

    line: int = 1
    column: int = 1

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


class StatementNode(BaseModel):
    """
    A top-level statement of a method body.

    Attributes:
        label: Statement label (e.g. ``when``), None if unlabeled
        position: Source position of the statement
        literal: Value of a bare string-literal statement, None otherwise
        expression: Opaque payload handed through to downstream stages
    """

    label: str | None = None
    position: SourcePosition = Field(default_factory=SourcePosition)
    literal: str | None = None
    expression: Any = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_labeled(self) -> bool:
        return self.label is not None

    @property
    def is_description(self) -> bool:
        return self.literal is not None


class PropertyNode(BaseModel):
    """A declared property of a class."""

    name: str
    position: SourcePosition = Field(default_factory=SourcePosition)

    model_config = ConfigDict(frozen=True)


class FieldNode(BaseModel):
    """A field declaration."""

    name: str
    is_static: bool = False
    is_synthetic: bool = False
    annotations: list[str] = Field(default_factory=list)
    position: SourcePosition = Field(default_factory=SourcePosition)

    model_config = ConfigDict(frozen=True)

    def has_annotation(self, name: str) -> bool:
        """Check for an annotation by simple or qualified name."""
        return any(a == name or a.rsplit(".", 1)[-1] == name for a in self.annotations)


class MethodNode(BaseModel):
    """
    A method or constructor declaration.

    Attributes:
        name: Method name
        is_static: Declared static
        is_synthetic: Generated by the compiler rather than written by the user
        is_constructor: Declaration is a constructor
        statements: Top-level statements of the body, in source order
        position: Position of the declaration
        end_position: Position of the end of the body
    """

    name: str
    is_static: bool = False
    is_synthetic: bool = False
    is_constructor: bool = False
    statements: list[StatementNode] = Field(default_factory=list)
    position: SourcePosition = Field(default_factory=SourcePosition)
    end_position: SourcePosition | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def last_position(self) -> SourcePosition:
        """Where the body ends; falls back to the declaration."""
        if self.end_position is not None:
            return self.end_position
        if self.statements:
            return self.statements[-1].position
        return self.position

    @property
    def has_labels(self) -> bool:
        return any(s.is_labeled for s in self.statements)


class ClassNode(BaseModel):
    """Syntax tree of one class, members in declaration order."""

    name: str
    source_file: str | None = None
    fields: list[FieldNode] = Field(default_factory=list)
    properties: list[PropertyNode] = Field(default_factory=list)
    methods: list[MethodNode] = Field(default_factory=list)
    position: SourcePosition = Field(default_factory=SourcePosition)

    model_config = ConfigDict(frozen=True)

    def get_property(self, name: str) -> PropertyNode | None:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None
