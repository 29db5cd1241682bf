from collections.abc import Iterator
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Position(BaseModel):
    """Zero-based line/column position."""

    model_config = ConfigDict(frozen=True)

    line: int
    column: int

    def key(self) -> tuple[int, int]:
        return (self.line, self.column)


class SourceRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: Position
    end: Position

    def contains(self, position: Position) -> bool:
        return self.start.key() <= position.key() <= self.end.key()

    def contains_range(self, other: "SourceRange") -> bool:
        return self.start.key() <= other.start.key() and other.end.key() <= self.end.key()


FILE_START = SourceRange(start=Position(line=0, column=0), end=Position(line=0, column=0))


class SyntaxNode(BaseModel):
    """One element of a parsed script or template tree.

    ``props`` holds the type-specific attributes in declaration order: child
    nodes, lists of child nodes, lists of strings or plain scalars. Nodes never
    point at their parent; ancestry is carried by ``NodePath``.
    """

    model_config = ConfigDict(frozen=True)

    type: str
    range: SourceRange
    props: dict[
        str, "SyntaxNode | list[SyntaxNode] | list[str] | bool | int | float | str | None"
    ] = Field(default_factory=dict)

    def get(self, name: str) -> Any:
        return self.props.get(name)

    def children(self) -> Iterator["SyntaxNode"]:
        for value in self.props.values():
            if isinstance(value, SyntaxNode):
                yield value
            elif isinstance(value, list):
                for item in value:
                    if isinstance(item, SyntaxNode):
                        yield item


SyntaxNode.model_rebuild()  # necessary for recursive types


class ItemKind(str, Enum):
    MODEL = "model"
    TRANSFORM = "transform"
    IMPORT_TARGET = "import"


class LayoutKind(str, Enum):
    CLASSIC = "classic"
    UNIFIED = "unified"


class Classification(BaseModel):
    model_config = ConfigDict(frozen=True)

    item_kind: ItemKind
    name: str


class Location(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    range: SourceRange = FILE_START

    @property
    def uri(self) -> str:
        return Path(self.path).absolute().as_uri()
