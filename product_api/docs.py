"""
docs.py — OpenAPI schema and Swagger UI

The schema is generated from the route annotations, then extended with
the Products tag description. Swagger UI is served at /docs with a
custom page title; ReDoc is disabled.

Called by: main.py (mount_docs), routers/products.py (ID_PARAMETER, json_body)
Depends on: config.py (app_title, app_version, app_description, docs_title)
"""

from fastapi import FastAPI
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.openapi.utils import get_openapi
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from .config import Settings

TAGS = [
    {"name": "Products", "description": "API operations related to products"},
]

ID_PARAMETER = {
    "name": "id",
    "in": "path",
    "required": True,
    "description": "The ID of the product",
    "schema": {"type": "integer"},
}


def json_body(model: type[BaseModel]) -> dict:
    """OpenAPI requestBody for routes that read the JSON body themselves."""
    return {
        "required": True,
        "content": {"application/json": {"schema": model.model_json_schema()}},
    }


def build_openapi(app: FastAPI, settings: Settings) -> dict:
    if app.openapi_schema:
        return app.openapi_schema
    app.openapi_schema = get_openapi(
        title=settings.app_title,
        version=settings.app_version,
        description=settings.app_description,
        routes=app.routes,
        tags=TAGS,
    )
    return app.openapi_schema


def mount_docs(app: FastAPI, settings: Settings) -> None:
    app.openapi = lambda: build_openapi(app, settings)

    @app.get("/docs", include_in_schema=False, response_class=HTMLResponse)
    async def swagger_ui() -> HTMLResponse:
        return get_swagger_ui_html(
            openapi_url=app.openapi_url,
            title=settings.docs_title,
            swagger_ui_parameters={"defaultModelsExpandDepth": -1},
        )
