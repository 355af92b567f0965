"""Shared pytest fixtures for specmodel tests."""

from pathlib import Path

import pytest

from specmodel.core.syntax import (
    ClassNode,
    FieldNode,
    MethodNode,
    PropertyNode,
    SourcePosition,
    StatementNode,
)


def _at(line: int, column: int = 5) -> SourcePosition:
    return SourcePosition(line=line, column=column)


@pytest.fixture
def stack_class() -> ClassNode:
    """Return a well-formed specification class exercising every member category."""
    return ClassNode(
        name="StackSpec",
        source_file="StackSpec.groovy",
        fields=[
            FieldNode(name="stack", position=_at(3)),
            FieldNode(name="$spock_internal", position=_at(4)),
            FieldNode(name="MAX", is_static=True, position=_at(5)),
            FieldNode(name="database", annotations=["spock.lang.Shared"], position=_at(6)),
        ],
        methods=[
            MethodNode(
                name="setup",
                statements=[StatementNode(position=_at(9, 9), expression="stack = new Stack()")],
                position=_at(8),
            ),
            MethodNode(
                name="push an element",
                statements=[
                    StatementNode(label="when", position=_at(13, 9), expression="stack.push(1)"),
                    StatementNode(label="then", position=_at(15, 9), expression="stack.size() == 1"),
                ],
                position=_at(12),
                end_position=_at(16),
            ),
            MethodNode(
                name="pop an empty stack",
                statements=[
                    StatementNode(label="expect", position=_at(19, 9), literal="an empty stack"),
                    StatementNode(position=_at(20, 9), expression="stack.empty"),
                ],
                position=_at(18),
                end_position=_at(21),
            ),
            MethodNode(name="fill", statements=[StatementNode(expression="stack.push(0)")]),
            MethodNode(name="$getStaticMetaClass", is_synthetic=True),
        ],
        properties=[PropertyNode(name="stack")],
    )


@pytest.fixture
def stack_tree_data() -> dict:
    """Return the JSON form of a small class syntax tree."""
    return {
        "name": "CalculatorSpec",
        "fields": [{"name": "calculator"}],
        "methods": [
            {
                "name": "adds numbers",
                "statements": [
                    {"label": "when", "position": {"line": 5, "column": 9}, "expression": "r = 1 + 2"},
                    {"label": "then", "position": {"line": 7, "column": 9}, "expression": "r == 3"},
                ],
                "position": {"line": 4, "column": 5},
            }
        ],
    }


@pytest.fixture
def syntax_dir(tmp_path: Path) -> Path:
    """Return a scratch directory for syntax tree files."""
    directory = tmp_path / "trees"
    directory.mkdir()
    return directory
