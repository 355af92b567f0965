"""Core specmodel functionality: syntax tree input, block grammar, IR, builder."""

from . import ir
from .builder import SpecBuilder, build_spec
from .config import ParserConfig, find_config_file, load_config
from .errors import (
    ConfigError,
    DuplicateFixtureError,
    ErrorContext,
    InputError,
    LabelError,
    ModifierError,
    NamingError,
    SpecModelError,
    SpecParseError,
    StructuralError,
)
from .parser import ParseOutcome, parse_batch, parse_files
from .syntax_loader import load_classes

__all__ = [
    "ir",
    "SpecBuilder",
    "build_spec",
    "ParserConfig",
    "load_config",
    "find_config_file",
    "SpecModelError",
    "SpecParseError",
    "StructuralError",
    "NamingError",
    "ModifierError",
    "LabelError",
    "DuplicateFixtureError",
    "InputError",
    "ConfigError",
    "ErrorContext",
    "ParseOutcome",
    "parse_batch",
    "parse_files",
    "load_classes",
]
