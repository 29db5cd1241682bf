"""FastMCP server exposing ember-definitions tools."""

from __future__ import annotations

from typing import Any

from fastmcp import FastMCP

from ember_definitions.core.ports.layout import LayoutMetadata
from ember_definitions.core.service import find_definition as _find_definition
from ember_definitions.models import Position


def create_mcp_server(layout_metadata: LayoutMetadata | None = None) -> FastMCP:
    """Create a FastMCP server; layout metadata defaults to detection on disk."""

    mcp = FastMCP(
        "ember-definitions",
        instructions="Find candidate definition files for references in Ember scripts.",
    )

    @mcp.tool()
    def find_definition(
        source: str,
        line: int,
        column: int,
        root: str,
        path: str | None = None,
        language: str | None = None,
        existing_only: bool = False,
    ) -> list[dict[str, Any]] | str:
        """Find candidate definition files for the reference at a zero-based line/column."""
        if path is None and language is None:
            return "Error: either 'path' or 'language' must be provided."
        try:
            locations = _find_definition(
                source,
                Position(line=line, column=column),
                root,
                language=language,
                path=path,
                layout_metadata=layout_metadata,
                existing_only=existing_only,
            )
        except ValueError as exc:
            return f"Error: {exc}"
        if locations is None:
            return []
        return [{"path": location.path, "uri": location.uri} for location in locations]

    return mcp
