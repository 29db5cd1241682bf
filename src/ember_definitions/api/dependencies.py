from __future__ import annotations

from ember_definitions.core.ports.layout import LayoutMetadata
from ember_definitions.core.project import get_layout_metadata as _get_layout_metadata


def get_layout_metadata() -> LayoutMetadata:
    """Layout metadata for the request, honouring the environment overrides."""
    return _get_layout_metadata()
