"""Routes serving the OpenAPI document and Swagger UI for the naming API."""

from __future__ import annotations

import json
from typing import Any, Dict, List

import azure.functions as func
from azure_functions_openapi.openapi import get_openapi_json
from azure_functions_openapi.swagger_ui import render_swagger_ui

from app import app
from app.constants import API_TITLE, API_VERSION
from app.dependencies import naming_rules
from core.cloud import KNOWN_CLOUDS
from core.naming_config import ENVIRONMENTS, REGION_FULL_NAMES

_DEFS_REF = "#/$defs/"
_COMPONENTS_REF = "#/components/schemas/"


def _request_enums() -> Dict[str, List[str]]:
    """Allowed values for the request fields backed by fixed tables or the active rules."""

    provider = naming_rules.get_rule_provider()
    categories: List[str] = []
    for key in provider.list_resource_types():
        category = provider.get_rule(key).category
        if category not in categories:
            categories.append(category)
    return {
        "regionAbbreviation": sorted(REGION_FULL_NAMES),
        "environment": list(ENVIRONMENTS),
        "cloud": sorted(cloud.name for cloud in KNOWN_CLOUDS.values()),
        "category": categories,
    }


def _move_defs(node: Any, schemas: Dict[str, Any]) -> None:
    # Pydantic nests models under $defs; OpenAPI 3 expects them in components.
    if isinstance(node, list):
        for item in node:
            _move_defs(item, schemas)
        return
    if not isinstance(node, dict):
        return
    for name, schema in (node.pop("$defs", None) or {}).items():
        _move_defs(schema, schemas)
        schemas.setdefault(name, schema)
    ref = node.get("$ref")
    if isinstance(ref, str) and ref.startswith(_DEFS_REF):
        node["$ref"] = _COMPONENTS_REF + ref[len(_DEFS_REF):]
    for key, value in list(node.items()):
        if key != "$ref":
            _move_defs(value, schemas)


def _annotate_request_schema(schemas: Dict[str, Any], enums: Dict[str, List[str]]) -> None:
    properties = schemas.get("NameGenerationRequest", {}).get("properties", {})
    for field, values in enums.items():
        if field in properties and values:
            properties[field]["enum"] = values


def build_openapi_document(raw_json: str, enums: Dict[str, List[str]] | None = None) -> str:
    """Rewrite the generated document so Swagger UI can resolve schemas and call /api routes."""

    document = json.loads(raw_json)
    schemas = document.setdefault("components", {}).setdefault("schemas", {})
    _move_defs(document, schemas)
    _annotate_request_schema(schemas, _request_enums() if enums is None else enums)

    servers = document.setdefault("servers", [])
    if {"url": "/api"} not in servers:
        servers.append({"url": "/api"})
    return json.dumps(document)


@app.function_name(name="openapi_spec")
@app.route(
    route="openapi.json",
    methods=[func.HttpMethod.GET],
    auth_level=func.AuthLevel.ANONYMOUS,
)
def openapi_spec(req: func.HttpRequest) -> func.HttpResponse:
    """Serve the OpenAPI document for the naming API."""

    document = build_openapi_document(get_openapi_json(title=API_TITLE, version=API_VERSION))
    return func.HttpResponse(document, mimetype="application/json", status_code=200)


@app.function_name(name="swagger_ui")
@app.route(route="docs", methods=[func.HttpMethod.GET], auth_level=func.AuthLevel.ANONYMOUS)
def swagger_ui(req: func.HttpRequest) -> func.HttpResponse:
    return render_swagger_ui(title=f"{API_TITLE} Swagger", openapi_url="/api/openapi.json")
