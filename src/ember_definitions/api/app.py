from __future__ import annotations

from fastapi import FastAPI

from ember_definitions.api.routes.definition import router as definition_router
from ember_definitions.api.routes.health import router as health_router
from ember_definitions.api.routes.root import router as root_router


def create_app() -> FastAPI:
    app = FastAPI(
        title="Ember Definitions API",
        description="Find candidate definition files for references in Ember scripts.",
        version="0.1.0",
    )

    app.include_router(root_router, include_in_schema=False)
    app.include_router(health_router, include_in_schema=False)
    app.include_router(definition_router)

    return app
