import logging
from collections.abc import Callable

from ember_definitions.core.classifier import (
    is_import_path_declaration,
    is_model_reference,
    is_transform_reference,
)
from ember_definitions.core.layout import paths_to_locations, resolve_candidates
from ember_definitions.core.navigator import NodePath, locate
from ember_definitions.core.ports.layout import LayoutMetadata
from ember_definitions.models import Classification, ItemKind, LayoutKind, Location, Position, SyntaxNode

logger = logging.getLogger(__name__)

# Tried in order; the first match wins.
CLASSIFIERS: tuple[tuple[ItemKind, Callable[[NodePath], bool]], ...] = (
    (ItemKind.MODEL, is_model_reference),
    (ItemKind.TRANSFORM, is_transform_reference),
    (ItemKind.IMPORT_TARGET, is_import_path_declaration),
)


def classify(path: NodePath) -> Classification | None:
    """Return the item kind and name the node under the cursor refers to."""
    matches = [kind for kind, predicate in CLASSIFIERS if predicate(path)]
    if not matches:
        return None
    if len(matches) > 1:
        logger.warning(
            "Node %s at %s matches several reference kinds %s; using %s",
            path.node.type,
            path.node.range.start.key(),
            [kind.value for kind in matches],
            matches[0].value,
        )

    name = path.node.get("value")
    if not isinstance(name, str):
        return None
    return Classification(item_kind=matches[0], name=name)


def layout_kind_for(root: str, layout_metadata: LayoutMetadata) -> tuple[LayoutKind, str | None]:
    if layout_metadata.is_unified_layout(root):
        return LayoutKind.UNIFIED, None
    return LayoutKind.CLASSIC, layout_metadata.pod_prefix_for(root)


def handle(
    tree: SyntaxNode | None,
    position: Position,
    root: str,
    layout_metadata: LayoutMetadata,
    *,
    document_uri: str | None,
) -> list[Location] | None:
    """Candidate definition locations for the reference at ``position``.

    ``None`` means nothing under the cursor could be classified. Import
    targets are only resolved for a loaded document, so an empty
    ``document_uri`` yields ``None`` for them.
    """
    path = locate(tree, position)
    if path is None:
        return None

    classification = classify(path)
    if classification is None:
        return None

    if classification.item_kind is ItemKind.IMPORT_TARGET and not document_uri:
        return None

    layout_kind, pod_prefix = layout_kind_for(root, layout_metadata)
    paths = resolve_candidates(root, layout_kind, pod_prefix, classification.item_kind, classification.name)
    logger.debug(
        "Resolved %s %r to %d candidate(s) (%s layout)",
        classification.item_kind.value,
        classification.name,
        len(paths),
        layout_kind.value,
    )
    return paths_to_locations(paths)
