from fastapi import APIRouter, Depends, HTTPException

from ember_definitions.api.dependencies import get_layout_metadata
from ember_definitions.api.schemas import DefinitionRequest, DefinitionResponse
from ember_definitions.core.ports.layout import LayoutMetadata
from ember_definitions.core.service import find_definition
from ember_definitions.models import Position

router = APIRouter(prefix="/definition", tags=["definition"])


@router.post("", response_model=DefinitionResponse)
def definition(
    body: DefinitionRequest,
    layout_metadata: LayoutMetadata = Depends(get_layout_metadata),
) -> DefinitionResponse:
    if body.path is None and body.language is None:
        raise HTTPException(status_code=422, detail="Either 'path' or 'language' must be provided.")

    try:
        locations = find_definition(
            body.source,
            Position(line=body.line, column=body.column),
            body.root,
            language=body.language,
            path=body.path,
            layout_metadata=layout_metadata,
            existing_only=body.existing_only,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from None

    return DefinitionResponse(locations=locations)
