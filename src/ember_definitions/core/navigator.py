from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from ember_definitions.models import Position, SyntaxNode


@dataclass(frozen=True, eq=False)
class NodePath:
    """A node together with the chain of ancestors that leads to it.

    The root entry has no ``parent_path``; every other entry carries its
    parent's own ``NodePath``, so classifiers can walk upward as far as they
    need without nodes ever referring to their parents.
    """

    node: SyntaxNode
    parent_path: NodePath | None = None

    @property
    def parent(self) -> SyntaxNode | None:
        return self.parent_path.node if self.parent_path else None

    @property
    def grandparent(self) -> SyntaxNode | None:
        return self.parent_path.parent if self.parent_path else None

    def child(self, node: SyntaxNode) -> NodePath:
        return NodePath(node, self)

    def ancestors(self) -> Iterator[NodePath]:
        """Yield the ancestor entries, nearest first."""
        current = self.parent_path
        while current is not None:
            yield current
            current = current.parent_path

    def nodes(self) -> list[SyntaxNode]:
        """Return the nodes from the root down to this entry's node."""
        return [entry.node for entry in reversed([self, *self.ancestors()])]


def locate(tree: SyntaxNode | None, position: Position) -> NodePath | None:
    """Find the innermost node containing ``position`` and its ancestor chain.

    Among siblings that both contain the position (only possible on a shared
    boundary), the later one wins, so the node opening at that offset is
    preferred over the one closing there.
    """
    if tree is None or not tree.range.contains(position):
        return None

    path = NodePath(tree)
    while True:
        match: SyntaxNode | None = None
        for child in path.node.children():
            if child.range.contains(position):
                match = child
        if match is None:
            return path
        path = path.child(match)
