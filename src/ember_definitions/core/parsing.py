"""Turn source text into the ``SyntaxNode`` trees the definition core works on.

Scripts are parsed with tree-sitter and reshaped into the ESTree vocabulary
the classifiers speak (``CallExpression``, ``StringLiteral``,
``ImportDeclaration`` ...). Node types without a dedicated mapping keep their
tree-sitter name and expose their named children under ``children``.
Columns count characters within the line; tree-sitter byte columns are
converted on the way in.

Template trees are produced by an external Glimmer parser and loaded from
JSON.
"""

import logging
import re
from collections.abc import Callable
from pathlib import Path
from typing import cast

from tree_sitter import Node
from tree_sitter_language_pack import SupportedLanguage, get_parser

from ember_definitions.core.languages import detect_language_from_path, normalize_language
from ember_definitions.models import Position, SourceRange, SyntaxNode

logger = logging.getLogger(__name__)

_IDENTIFIER_TYPES = frozenset({"identifier", "property_identifier", "shorthand_property_identifier"})

_ESCAPE_PATTERN = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|[0-7]{1,3}|\r\n|.)", re.DOTALL)
_SINGLE_CHARACTER_ESCAPES = {"b": "\b", "f": "\f", "n": "\n", "r": "\r", "t": "\t", "v": "\v"}
_LINE_CONTINUATIONS = frozenset({"\n", "\r", "\r\n", "\u2028", "\u2029"})


def _unescape_character(match: re.Match[str]) -> str:
    escape = match.group(1)
    if escape in _LINE_CONTINUATIONS:
        return ""
    if escape.startswith("u{"):
        return chr(int(escape[2:-1], 16))
    if escape[0] in "ux" and len(escape) > 1:
        return chr(int(escape[1:], 16))
    if escape[0] in "01234567":
        return chr(int(escape, 8))
    return _SINGLE_CHARACTER_ESCAPES.get(escape, escape)


def unescape_string(raw: str) -> str:
    """Cooked value of a JavaScript string literal body (quotes already removed)."""
    return _ESCAPE_PATTERN.sub(_unescape_character, raw)


class ScriptParseError(ValueError):
    """The script contains syntax errors, so no definition lookup is attempted."""


class _ScriptConverter:
    def __init__(self, source: bytes) -> None:
        self._source = source
        self._handlers: dict[str, Callable[[Node], SyntaxNode]] = {
            "program": self._program,
            "import_statement": self._import_statement,
            "string": self._string,
            "call_expression": self._call_expression,
            "member_expression": self._member_expression,
            "template_string": self._template_string,
            "pair": self._pair,
            "object": self._object,
        }

    def convert(self, node: Node) -> SyntaxNode:
        if node.type in _IDENTIFIER_TYPES:
            return self._node("Identifier", node, name=self._text(node))
        handler = self._handlers.get(node.type)
        if handler is not None:
            return handler(node)
        return self._node(node.type, node, children=self._convert_all(self._named(node)))

    # -- helpers --

    def _text(self, node: Node) -> str:
        return self._source[node.start_byte : node.end_byte].decode("utf-8")

    def _position(self, row: int, byte_column: int, offset: int) -> Position:
        # tree-sitter counts columns in bytes; callers count characters.
        line_prefix = self._source[offset - byte_column : offset].decode("utf-8", errors="replace")
        return Position(line=row, column=len(line_prefix))

    def _point_at(self, offset: int) -> Position:
        line_start = self._source.rfind(b"\n", 0, offset) + 1
        return self._position(self._source.count(b"\n", 0, offset), offset - line_start, offset)

    def _range(self, node: Node) -> SourceRange:
        return SourceRange(
            start=self._position(node.start_point[0], node.start_point[1], node.start_byte),
            end=self._position(node.end_point[0], node.end_point[1], node.end_byte),
        )

    def _node(self, node_type: str, node: Node, **props: object) -> SyntaxNode:
        return SyntaxNode.model_validate({"type": node_type, "range": self._range(node), "props": props})

    @staticmethod
    def _named(node: Node) -> list[Node]:
        return [child for child in node.named_children if child.type != "comment"]

    def _convert_all(self, nodes: list[Node]) -> list[SyntaxNode]:
        return [self.convert(child) for child in nodes]

    def _optional(self, node: Node | None) -> SyntaxNode | None:
        return self.convert(node) if node is not None else None

    # -- handlers --

    def _program(self, node: Node) -> SyntaxNode:
        return self._node("Program", node, body=self._convert_all(self._named(node)))

    def _import_statement(self, node: Node) -> SyntaxNode:
        specifiers: list[SyntaxNode] = []
        for clause in self._named(node):
            if clause.type != "import_clause":
                continue
            for part in self._named(clause):
                if part.type == "identifier":
                    specifiers.append(self._node("ImportDefaultSpecifier", part, local=self.convert(part)))
                elif part.type == "namespace_import":
                    specifiers.append(
                        self._node("ImportNamespaceSpecifier", part, local=self._convert_all(self._named(part)))
                    )
                elif part.type == "named_imports":
                    specifiers.extend(self._import_specifier(spec) for spec in self._named(part))
        return self._node(
            "ImportDeclaration",
            node,
            specifiers=specifiers,
            source=self._optional(node.child_by_field_name("source")),
        )

    def _import_specifier(self, node: Node) -> SyntaxNode:
        return self._node(
            "ImportSpecifier",
            node,
            imported=self._optional(node.child_by_field_name("name")),
            local=self._optional(node.child_by_field_name("alias")),
        )

    def _string(self, node: Node) -> SyntaxNode:
        return self._node("StringLiteral", node, value=unescape_string(self._text(node)[1:-1]))

    def _call_expression(self, node: Node) -> SyntaxNode:
        callee = self._optional(node.child_by_field_name("function"))
        arguments = node.child_by_field_name("arguments")
        if arguments is not None and arguments.type == "template_string":
            return self._node("TaggedTemplateExpression", node, tag=callee, quasi=self.convert(arguments))
        args = self._convert_all(self._named(arguments)) if arguments is not None else []
        return self._node("CallExpression", node, callee=callee, arguments=args)

    def _member_expression(self, node: Node) -> SyntaxNode:
        return self._node(
            "MemberExpression",
            node,
            object=self._optional(node.child_by_field_name("object")),
            property=self._optional(node.child_by_field_name("property")),
        )

    def _template_string(self, node: Node) -> SyntaxNode:
        quasis: list[SyntaxNode] = []
        expressions: list[SyntaxNode] = []
        cursor = node.start_byte + 1
        for substitution in node.named_children:
            if substitution.type != "template_substitution":
                continue
            quasis.append(self._template_element(cursor, substitution.start_byte))
            expressions.extend(self._convert_all(self._named(substitution)))
            cursor = substitution.end_byte
        quasis.append(self._template_element(cursor, node.end_byte - 1))
        return self._node("TemplateLiteral", node, quasis=quasis, expressions=expressions)

    def _template_element(self, start: int, end: int) -> SyntaxNode:
        raw = self._source[start:end].decode("utf-8")
        return SyntaxNode(
            type="TemplateElement",
            range=SourceRange(start=self._point_at(start), end=self._point_at(end)),
            props={"value": raw},
        )

    def _pair(self, node: Node) -> SyntaxNode:
        return self._node(
            "ObjectProperty",
            node,
            key=self._optional(node.child_by_field_name("key")),
            value=self._optional(node.child_by_field_name("value")),
        )

    def _object(self, node: Node) -> SyntaxNode:
        return self._node("ObjectExpression", node, properties=self._convert_all(self._named(node)))


def parse_script(source: str | bytes, language: str = "javascript") -> SyntaxNode:
    resolved_language = normalize_language(language)
    source_bytes = source.encode("utf-8") if isinstance(source, str) else source

    parser = get_parser(cast(SupportedLanguage, resolved_language))
    tree = parser.parse(source_bytes)
    if tree.root_node.has_error:
        raise ScriptParseError(f"Could not parse {resolved_language} source: syntax error")

    logger.debug("Parsed %d bytes of %s", len(source_bytes), resolved_language)
    return _ScriptConverter(source_bytes).convert(tree.root_node)


def parse_script_file(path: str, language: str | None = None) -> SyntaxNode:
    file_path = Path(path)
    resolved_language = normalize_language(language) if language else detect_language_from_path(file_path)

    try:
        source_bytes = file_path.read_bytes()
    except FileNotFoundError:
        raise FileNotFoundError(f"File not found: {path}") from None

    return parse_script(source_bytes, resolved_language)


def load_template_tree(data: str | bytes) -> SyntaxNode:
    """Load a Glimmer template tree serialised as ``SyntaxNode`` JSON.

    The JSON comes from outside this package, typically ``@glimmer/syntax``
    ``preprocess`` output rewritten into ``type``/``range``/``props`` objects.
    The result feeds the template predicates in ``core.classifier``.
    """
    return SyntaxNode.model_validate_json(data)
