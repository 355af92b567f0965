"""Tests for splitting method bodies into blocks."""

import pytest

from specmodel.core.assembler import assemble, single_block
from specmodel.core.errors import LabelError
from specmodel.core.grammar import BlockKind
from specmodel.core.syntax import ClassNode, MethodNode, SourcePosition, StatementNode

OWNER = ClassNode(name="StackSpec", source_file="StackSpec.groovy")

LABEL_KINDS = {
    "setup": BlockKind.SETUP,
    "when": BlockKind.STIMULUS,
    "then": BlockKind.OUTCOME,
    "expect": BlockKind.SINGLE_OUTCOME,
    "cleanup": BlockKind.CLEANUP,
    "where": BlockKind.DATA_TABLE,
}


def _stmt(
    label: str | None = None,
    expression: str | None = None,
    literal: str | None = None,
    line: int = 1,
) -> StatementNode:
    return StatementNode(
        label=label,
        expression=expression,
        literal=literal,
        position=SourcePosition(line=line, column=9),
    )


def _method(*statements: StatementNode, end_line: int = 99) -> MethodNode:
    return MethodNode(
        name="a feature",
        statements=list(statements),
        position=SourcePosition(line=1, column=5),
        end_position=SourcePosition(line=end_line, column=5),
    )


def _labels_only(*labels: str) -> MethodNode:
    return _method(*(_stmt(label, f"stmt{i}", line=i + 2) for i, label in enumerate(labels)))


class TestLegalWalks:
    """Label sequences that walk the grammar from start to end."""

    @pytest.mark.parametrize(
        "labels",
        [
            ["expect"],
            ["when", "then"],
            ["setup", "when", "then"],
            ["setup", "expect", "where"],
            ["when", "then", "when", "then", "then"],
            ["then", "cleanup"],
            ["setup", "when", "then", "cleanup", "where"],
            ["setup"],
            ["cleanup"],
            ["where"],
            ["expect", "cleanup", "where"],
        ],
    )
    def test_block_kinds_follow_labels(self, labels: list[str]) -> None:
        blocks = assemble(_labels_only(*labels), OWNER)

        expected = [BlockKind.ANONYMOUS] + [LABEL_KINDS[label] for label in labels]
        assert [b.kind for b in blocks] == expected
        assert blocks[0].is_empty

    def test_given_when_then_scenario(self) -> None:
        a = _stmt("when", "stmtA", line=3)
        b = _stmt("then", "stmtB", line=4)
        blocks = assemble(_method(_stmt("setup", literal="given text", line=2), a, b), OWNER)

        assert [b.kind for b in blocks] == [
            BlockKind.ANONYMOUS,
            BlockKind.SETUP,
            BlockKind.STIMULUS,
            BlockKind.OUTCOME,
        ]
        assert blocks[0].is_empty
        assert blocks[1].descriptions == ("given text",)
        assert blocks[1].statements == ()
        assert blocks[2].statements == (a,)
        assert blocks[3].statements == (b,)


class TestBlockContents:
    """Tests for descriptions and payload placement."""

    def test_leading_statements_go_to_anonymous_block(self) -> None:
        first = _stmt(expression="def x = 1")
        second = _stmt(expression="def y = 2")
        blocks = assemble(_method(first, second, _stmt("expect", "x < y")), OWNER)

        assert blocks[0].kind is BlockKind.ANONYMOUS
        assert blocks[0].statements == (first, second)

    def test_consecutive_descriptions_accumulate(self) -> None:
        blocks = assemble(
            _method(
                _stmt("setup", literal="a stack"),
                _stmt(literal="with one element"),
                _stmt(expression="stack.push(1)"),
                _stmt("expect", "stack.size() == 1"),
            ),
            OWNER,
        )

        setup = blocks[1]
        assert setup.kind is BlockKind.SETUP
        assert setup.descriptions == ("a stack", "with one element")
        assert [s.expression for s in setup.statements] == ["stack.push(1)"]
        assert len(blocks) == 3

    def test_labeled_payload_statement_kept(self) -> None:
        labeled = _stmt("when", "stack.pop()")
        blocks = assemble(_method(labeled, _stmt("then", "thrown(EmptyStackException)")), OWNER)
        assert blocks[1].statements == (labeled,)
        assert blocks[1].descriptions == ()

    def test_statement_order_preserved(self) -> None:
        body = [_stmt("then", "s0")] + [_stmt(expression=f"s{i}") for i in range(1, 5)]
        blocks = assemble(_method(*body), OWNER)
        assert [s.expression for s in blocks[1].statements] == ["s0", "s1", "s2", "s3", "s4"]

    def test_input_statements_not_mutated(self) -> None:
        method = _labels_only("when", "then")
        before = list(method.statements)
        assemble(method, OWNER)
        assert method.statements == before

    def test_empty_body(self) -> None:
        blocks = assemble(_method(), OWNER)
        assert len(blocks) == 1
        assert blocks[0].kind is BlockKind.ANONYMOUS
        assert blocks[0].is_empty


class TestGrammarViolations:
    """Tests for label errors."""

    def test_stimulus_followed_by_single_outcome(self) -> None:
        method = _method(_stmt("when", "stmtA", line=3), _stmt("expect", "stmtB", line=4))
        with pytest.raises(LabelError) as exc_info:
            assemble(method, OWNER)

        error = exc_info.value
        assert error.label == "expect"
        assert error.allowed == ("then",)
        assert (error.line, error.column) == (4, 9)
        assert "'expect' is not allowed here; instead, use one of: then" in error.message

    @pytest.mark.parametrize(
        ("labels", "offending", "allowed"),
        [
            (["when", "when"], "when", ("then",)),
            (["when", "cleanup"], "cleanup", ("then",)),
            (["expect", "then"], "then", ("cleanup", "where", "end-of-method")),
            (["cleanup", "setup"], "setup", ("where", "end-of-method")),
            (["where", "expect"], "expect", ("end-of-method",)),
            (["then", "setup"], "setup", ("when", "then", "cleanup", "where", "end-of-method")),
            (["expect", "expect"], "expect", ("cleanup", "where", "end-of-method")),
        ],
    )
    def test_illegal_adjacent_pair(
        self, labels: list[str], offending: str, allowed: tuple[str, ...]
    ) -> None:
        with pytest.raises(LabelError) as exc_info:
            assemble(_labels_only(*labels), OWNER)

        assert exc_info.value.label == offending
        assert exc_info.value.allowed == allowed
        assert exc_info.value.line == len(labels) + 1

    @pytest.mark.parametrize("prefix", [[], ["setup"], ["when"], ["where"]])
    def test_unrecognized_label(self, prefix: list[str]) -> None:
        method = _method(
            *(_stmt(label, "x", line=2) for label in prefix),
            _stmt("given", "x", line=10),
        )
        with pytest.raises(LabelError, match="Unrecognized block label: given") as exc_info:
            assemble(method, OWNER)
        assert exc_info.value.label == "given"
        assert exc_info.value.line == 10

    def test_labels_are_case_sensitive(self) -> None:
        with pytest.raises(LabelError, match="Unrecognized block label: When"):
            assemble(_labels_only("When", "then"), OWNER)

    def test_method_ending_after_stimulus(self) -> None:
        with pytest.raises(LabelError) as exc_info:
            assemble(_method(_stmt("when", "stack.pop()", line=3), end_line=42), OWNER)

        error = exc_info.value
        assert error.label == "end-of-method"
        assert error.allowed == ("then",)
        assert error.line == 42

    def test_error_context(self) -> None:
        with pytest.raises(LabelError) as exc_info:
            assemble(_labels_only("when", "expect"), OWNER)
        assert str(exc_info.value).startswith("StackSpec.groovy:3:9 in StackSpec.a feature")


class TestSingleBlock:
    """Tests for fixture/helper bodies."""

    def test_wraps_everything_verbatim(self) -> None:
        body = [_stmt(expression="a"), _stmt(literal="not a description"), _stmt(expression="b")]
        blocks = single_block(body)

        assert len(blocks) == 1
        assert blocks[0].kind is BlockKind.ANONYMOUS
        assert blocks[0].statements == tuple(body)
        assert blocks[0].descriptions == ()


def test_block_payloads_are_immutable() -> None:
    blocks = assemble(_method(_stmt("expect", "x == 1"), _stmt(literal="note")), OWNER)
    expect = blocks[1]

    assert isinstance(expect.statements, tuple)
    assert isinstance(expect.descriptions, tuple)
    with pytest.raises(AttributeError):
        expect.statements.append(_stmt(expression="y"))  # type: ignore[attr-defined]
