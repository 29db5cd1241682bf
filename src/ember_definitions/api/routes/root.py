from __future__ import annotations

from typing import Any

from fastapi import APIRouter

router = APIRouter()


@router.get("/")
async def root() -> dict[str, Any]:
    """Root discovery endpoint."""
    return {
        "meta": {
            "title": "Ember Definitions API",
            "description": "Find candidate definition files for references in Ember scripts.",
            "version": "0.1.0",
        },
        "links": {
            "self": "/",
            "definition": "/definition",
            "openapi": "/openapi.json",
            "docs": "/docs",
        },
    }
