"""
Specification aggregate for the IR.

One Specification is produced per parsed class and handed to downstream
rewriting stages and tooling.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field

from ..syntax import SourcePosition
from .members import FeatureMethod, FieldSpec, FixtureMethod, FixtureRole, HelperMethod

ScenarioOrHelper = Annotated[FeatureMethod | HelperMethod, Field(discriminator="category")]


class Specification(BaseModel):
    """
    Object model of one specification class.

    Attributes:
        name: Class name
        source_file: File the class was declared in, if known
        fields: Data fields in declaration order
        methods: Feature and helper methods in declaration order
        setup: ``setup()`` fixture, run before every feature
        cleanup: ``cleanup()`` fixture, run after every feature
        setup_spec: ``setupSpec()`` fixture, run once before all features
        cleanup_spec: ``cleanupSpec()`` fixture, run once after all features
    """

    name: str
    source_file: str | None = None
    position: SourcePosition = Field(default_factory=SourcePosition)
    fields: list[FieldSpec] = Field(default_factory=list)
    methods: list[ScenarioOrHelper] = Field(default_factory=list)
    setup: FixtureMethod | None = None
    cleanup: FixtureMethod | None = None
    setup_spec: FixtureMethod | None = None
    cleanup_spec: FixtureMethod | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def features(self) -> list[FeatureMethod]:
        return [m for m in self.methods if isinstance(m, FeatureMethod)]

    @property
    def helpers(self) -> list[HelperMethod]:
        return [m for m in self.methods if isinstance(m, HelperMethod)]

    @property
    def shared_fields(self) -> list[FieldSpec]:
        return [f for f in self.fields if f.shared]

    @property
    def fixture_methods(self) -> list[FixtureMethod]:
        """Declared fixtures in lifecycle order."""
        return [f for f in (self.setup_spec, self.setup, self.cleanup, self.cleanup_spec) if f]

    def get_fixture(self, role: FixtureRole) -> FixtureMethod | None:
        return {
            FixtureRole.SETUP: self.setup,
            FixtureRole.CLEANUP: self.cleanup,
            FixtureRole.SETUP_SPEC: self.setup_spec,
            FixtureRole.CLEANUP_SPEC: self.cleanup_spec,
        }[role]

    def get_method(self, name: str) -> FeatureMethod | HelperMethod | FixtureMethod | None:
        """Find a method of any category by name."""
        for method in [*self.methods, *self.fixture_methods]:
            if method.name == name:
                return method
        return None

    def get_field(self, name: str) -> FieldSpec | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def outline(self) -> dict[str, Any]:
        """
        Summarize the specification as plain data.

        Statement payloads are left out; each block reports its label,
        descriptions, and statement count.
        """

        def _method(method: FixtureMethod | FeatureMethod | HelperMethod) -> dict[str, Any]:
            data: dict[str, Any] = {
                "name": method.name,
                "category": method.category,
                "blocks": [
                    {
                        "label": block.label,
                        "descriptions": list(block.descriptions),
                        "statements": len(block.statements),
                    }
                    for block in method.blocks
                ],
            }
            if isinstance(method, FeatureMethod):
                data["ordinal"] = method.ordinal
            if isinstance(method, FixtureMethod):
                data["role"] = method.role.value
            return data

        return {
            "name": self.name,
            "source_file": self.source_file,
            "fields": [
                {"name": f.name, "ordinal": f.ordinal, "shared": f.shared} for f in self.fields
            ],
            "fixtures": [_method(f) for f in self.fixture_methods],
            "methods": [_method(m) for m in self.methods],
        }

    def __str__(self) -> str:
        return f"Specification({self.name}: {len(self.features)} features)"
