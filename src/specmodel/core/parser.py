"""
Parse entry points.

``build_spec`` parses one class; ``parse_files`` loads and parses whole
files and stops at the first error; ``parse_batch`` parses every class and
collects failures per class so one bad class does not hide the rest.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from . import ir
from .builder import build_spec
from .config import ParserConfig
from .errors import SpecParseError
from .syntax import ClassNode
from .syntax_loader import load_classes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParseOutcome:
    """Result of parsing one class: a specification or the error that stopped it."""

    class_name: str
    spec: ir.Specification | None = None
    error: SpecParseError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_files(files: list[Path], config: ParserConfig | None = None) -> list[ir.Specification]:
    """
    Parse every class in the given syntax tree files.

    Args:
        files: JSON/YAML syntax tree files
        config: Parser configuration (defaults if omitted)

    Returns:
        Specifications in file order, then declaration order

    Raises:
        InputError: If a file cannot be loaded
        SpecParseError: On the first class that fails to parse
    """
    specs: list[ir.Specification] = []
    for f in files:
        for cls in load_classes(f):
            specs.append(build_spec(cls, config))
    return specs


def parse_batch(
    classes: Iterable[ClassNode], config: ParserConfig | None = None
) -> list[ParseOutcome]:
    """Parse each class independently, recording failures instead of raising."""
    outcomes: list[ParseOutcome] = []
    for cls in classes:
        try:
            spec = build_spec(cls, config)
        except SpecParseError as e:
            logger.info("Failed to parse %s: %s", cls.name, e.message)
            outcomes.append(ParseOutcome(class_name=cls.name, error=e))
        else:
            outcomes.append(ParseOutcome(class_name=cls.name, spec=spec))
    return outcomes
