from pathlib import Path

from ember_definitions.core.definition import handle
from ember_definitions.core.languages import resolve_language
from ember_definitions.core.parsing import parse_script, parse_script_file
from ember_definitions.core.ports.layout import LayoutMetadata
from ember_definitions.core.project import get_layout_metadata
from ember_definitions.models import Location, Position, SyntaxNode


def existing_locations(locations: list[Location]) -> list[Location]:
    return [location for location in locations if Path(location.path).is_file()]


def _definitions_in_tree(
    tree: SyntaxNode,
    position: Position,
    root: str,
    document_uri: str,
    layout_metadata: LayoutMetadata | None,
    existing_only: bool,
) -> list[Location] | None:
    locations = handle(
        tree,
        position,
        root,
        layout_metadata if layout_metadata is not None else get_layout_metadata(),
        document_uri=document_uri,
    )
    if locations is None or not existing_only:
        return locations
    return existing_locations(locations)


def find_definition(
    source: str,
    position: Position,
    root: str,
    language: str | None = None,
    path: str | None = None,
    layout_metadata: LayoutMetadata | None = None,
    existing_only: bool = False,
) -> list[Location] | None:
    """Parse a script and return the definition candidates at ``position``.

    ``path`` names the document the source came from; it is used to detect the
    language and as the document reference import lookups require.
    """
    file_path = Path(path) if path else None
    resolved_language = resolve_language(language, file_path)
    tree = parse_script(source, resolved_language)

    document_uri = file_path.absolute().as_uri() if file_path else "untitled:"
    return _definitions_in_tree(tree, position, root, document_uri, layout_metadata, existing_only)


def find_definition_in_file(
    path: str,
    position: Position,
    root: str,
    language: str | None = None,
    layout_metadata: LayoutMetadata | None = None,
    existing_only: bool = False,
) -> list[Location] | None:
    """Read and parse the script at ``path``, then look up the definition at ``position``."""
    tree = parse_script_file(path, language)
    document_uri = Path(path).absolute().as_uri()
    return _definitions_in_tree(tree, position, root, document_uri, layout_metadata, existing_only)
