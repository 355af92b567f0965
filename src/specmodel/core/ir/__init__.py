"""
Specification IR types.

Types are organized into submodules and re-exported from this package.
"""

from ..grammar import BlockKind
from .blocks import Block
from .members import (
    FeatureMethod,
    FieldSpec,
    FixtureMethod,
    FixtureRole,
    HelperMethod,
    MethodSpec,
)
from .specification import Specification

__all__ = [
    "Block",
    "BlockKind",
    "FeatureMethod",
    "FieldSpec",
    "FixtureMethod",
    "FixtureRole",
    "HelperMethod",
    "MethodSpec",
    "Specification",
]
