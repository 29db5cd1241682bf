from __future__ import annotations

from pydantic import BaseModel, Field

from ember_definitions.models import Location


class HealthResponse(BaseModel):
    status: str = "ok"


class DefinitionRequest(BaseModel):
    source: str
    line: int = Field(ge=0)
    column: int = Field(ge=0)
    root: str
    path: str | None = None
    language: str | None = None
    existing_only: bool = False


class DefinitionResponse(BaseModel):
    locations: list[Location] | None
