"""Unit tests for locating the node under a cursor position."""

from typing import Any

from ember_definitions.core.navigator import NodePath, locate
from ember_definitions.models import Position, SourceRange, SyntaxNode


def _pos(line: int = 0, column: int = 0) -> Position:
    return Position(line=line, column=column)


def _node(node_type: str, start: tuple[int, int], end: tuple[int, int], **props: Any) -> SyntaxNode:
    return SyntaxNode(type=node_type, range=SourceRange(start=_pos(*start), end=_pos(*end)), props=props)


def _sample_tree() -> tuple[SyntaxNode, SyntaxNode, SyntaxNode]:
    """``belongsTo('user');`` followed by trailing whitespace."""
    string = _node("StringLiteral", (0, 10), (0, 16), value="user")
    callee = _node("Identifier", (0, 0), (0, 9), name="belongsTo")
    call = _node("CallExpression", (0, 0), (0, 17), callee=callee, arguments=[string])
    program = _node("Program", (0, 0), (0, 30), body=[call])
    return program, call, string


class TestLocate:
    def test_finds_innermost_node(self) -> None:
        program, call, string = _sample_tree()

        path = locate(program, _pos(0, 12))

        assert path is not None
        assert path.node is string
        assert path.parent is call
        assert path.grandparent is program

    def test_chain_runs_from_root_to_target(self) -> None:
        program, call, string = _sample_tree()

        path = locate(program, _pos(0, 12))

        assert path is not None
        assert path.nodes() == [program, call, string]
        assert [entry.node for entry in path.ancestors()] == [call, program]

    def test_returns_current_node_when_no_child_contains_position(self) -> None:
        program, _, _ = _sample_tree()

        path = locate(program, _pos(0, 25))

        assert path is not None
        assert path.node is program
        assert path.parent is None
        assert path.parent_path is None

    def test_position_outside_root_returns_none(self) -> None:
        program, _, _ = _sample_tree()

        assert locate(program, _pos(3, 0)) is None

    def test_empty_tree_returns_none(self) -> None:
        assert locate(None, _pos(0, 0)) is None

    def test_later_sibling_wins_on_shared_boundary(self) -> None:
        first = _node("Identifier", (0, 0), (0, 5), name="first")
        second = _node("Identifier", (0, 5), (0, 9), name="second")
        root = _node("Sequence", (0, 0), (0, 9), items=[first, second])

        path = locate(root, _pos(0, 5))

        assert path is not None
        assert path.node is second

    def test_range_end_is_inclusive(self) -> None:
        program, _, string = _sample_tree()

        path = locate(program, _pos(0, 16))

        assert path is not None
        assert path.node is string

    def test_every_ancestor_contains_its_child(self) -> None:
        program, _, _ = _sample_tree()

        for column in range(0, 31):
            position = _pos(0, column)
            path = locate(program, position)
            assert path is not None
            assert path.node.range.contains(position)
            entry: NodePath | None = path
            while entry is not None and entry.parent_path is not None:
                assert entry.parent_path.node.range.contains_range(entry.node.range)
                entry = entry.parent_path

    def test_walks_multi_line_ranges(self) -> None:
        inner = _node("StringLiteral", (1, 4), (1, 10), value="date")
        outer = _node("CallExpression", (0, 2), (2, 1), arguments=[inner])
        root = _node("Program", (0, 0), (3, 0), body=[outer])

        assert locate(root, _pos(1, 6)).node is inner  # type: ignore[union-attr]
        assert locate(root, _pos(1, 2)).node is outer  # type: ignore[union-attr]
        assert locate(root, _pos(2, 5)).node is root  # type: ignore[union-attr]
