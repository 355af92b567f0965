"""
Error types for specification parsing, loading, and configuration.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .syntax import ClassNode, SourcePosition


class SpecModelError(Exception):
    """Base exception for all specmodel errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message

    @property
    def line(self) -> int | None:
        return self.context.line if self.context else None

    @property
    def column(self) -> int | None:
        return self.context.column if self.context else None


class SpecParseError(SpecModelError):
    """
    Raised when a class cannot be turned into a specification.

    Parse errors are always fatal for the class being parsed: no partial
    specification is produced.
    """

    pass


class StructuralError(SpecParseError):
    """
    Raised for members that are never allowed in a specification.

    Examples:
    - User-written constructors
    """

    pass


class NamingError(SpecParseError):
    """
    Raised when a fixture method name matches case-insensitively only.

    Examples:
    - ``Setup()`` or ``SETUP()`` instead of ``setup()``
    """

    pass


class ModifierError(SpecParseError):
    """
    Raised when a method carries a modifier its category forbids.

    Examples:
    - Static fixture method
    - Static feature method
    """

    pass


class LabelError(SpecParseError):
    """
    Raised when a block label breaks the block grammar.

    Examples:
    - Unrecognized label
    - Label not allowed after the preceding block
    - Method ending before a mandatory block
    """

    def __init__(
        self,
        message: str,
        context: Optional["ErrorContext"] = None,
        label: str | None = None,
        allowed: tuple[str, ...] = (),
    ):
        self.label = label
        self.allowed = allowed
        super().__init__(message, context)


class DuplicateFixtureError(SpecParseError):
    """Raised when a fixture role is declared more than once."""

    pass


class InputError(SpecModelError):
    """Raised when a serialized syntax tree cannot be loaded."""

    pass


class ConfigError(SpecModelError):
    """Raised when a configuration file is invalid."""

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        file: Path to the source file where error occurred
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        class_name: Optional name of the class being parsed
        method_name: Optional name of the method being parsed
    """

    file: Path | None
    line: int
    column: int
    class_name: str | None = None
    method_name: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "FooSpec.groovy:10:5 in FooSpec.bar"
        """
        location = f"{self.file or '<unknown>'}:{self.line}:{self.column}"
        if self.class_name:
            member = self.class_name
            if self.method_name:
                member += f".{self.method_name}"
            location += f" in {member}"
        return location


def _context_for(
    owner: ClassNode,
    position: SourcePosition,
    method_name: str | None = None,
) -> ErrorContext:
    return ErrorContext(
        file=Path(owner.source_file) if owner.source_file else None,
        line=position.line,
        column=position.column,
        class_name=owner.name,
        method_name=method_name,
    )


def make_structural_error(
    message: str, owner: ClassNode, position: SourcePosition, method_name: str | None = None
) -> StructuralError:
    """Create a StructuralError located at a member of ``owner``."""
    return StructuralError(message, _context_for(owner, position, method_name))


def make_naming_error(
    message: str, owner: ClassNode, position: SourcePosition, method_name: str | None = None
) -> NamingError:
    """Create a NamingError located at a member of ``owner``."""
    return NamingError(message, _context_for(owner, position, method_name))


def make_modifier_error(
    message: str, owner: ClassNode, position: SourcePosition, method_name: str | None = None
) -> ModifierError:
    """Create a ModifierError located at a member of ``owner``."""
    return ModifierError(message, _context_for(owner, position, method_name))


def make_duplicate_fixture_error(
    message: str, owner: ClassNode, position: SourcePosition, method_name: str | None = None
) -> DuplicateFixtureError:
    """Create a DuplicateFixtureError located at the second declaration."""
    return DuplicateFixtureError(message, _context_for(owner, position, method_name))


def make_label_error(
    message: str,
    owner: ClassNode,
    position: SourcePosition,
    method_name: str | None = None,
    label: str | None = None,
    allowed: tuple[str, ...] = (),
) -> LabelError:
    """
    Helper to create a LabelError with context.

    Args:
        message: Error description
        owner: Class being parsed
        position: Position of the offending statement (or method end)
        method_name: Method whose body is being assembled
        label: Offending label token
        allowed: Label tokens that would have been legal instead

    Returns:
        LabelError with context attached
    """
    return LabelError(
        message,
        _context_for(owner, position, method_name),
        label=label,
        allowed=allowed,
    )


def make_input_error(message: str, file: Path | None = None) -> InputError:
    """Create an InputError, located at the start of ``file`` when known."""
    if file is not None:
        return InputError(message, ErrorContext(file=file, line=1, column=1))
    return InputError(message)
