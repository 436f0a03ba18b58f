"""HTTP routes for generating resource name sets."""

from __future__ import annotations

import logging
from typing import Any, Dict

import azure.functions as func
from azure_functions_openapi.decorator import openapi as openapi_doc

from app import app
from app.dependencies import generate_names
from app.errors import handle_name_generation_error
from app.models import NameGenerationRequest, NameGenerationResponse
from app.responses import build_names_response, json_message


def _payload_from_query(req: func.HttpRequest) -> Dict[str, Any]:
    return {key: value for key, value in req.params.items() if value != ""}


def _handle_generate_request(req: func.HttpRequest, *, log_prefix: str, from_query: bool = False) -> func.HttpResponse:
    logging.info("[%s] Processing name generation request.", log_prefix)

    if from_query:
        payload = _payload_from_query(req)
    else:
        try:
            payload = req.get_json()
        except ValueError:
            return json_message("Invalid JSON payload.", status_code=400)

    try:
        result = generate_names(payload)
        return build_names_response(result)
    except Exception as exc:  # centralised error handling
        return handle_name_generation_error(exc, log_prefix=log_prefix)


@app.function_name(name="generate_names")
@app.route(route="names", methods=[func.HttpMethod.POST])
@openapi_doc(
    summary="Generate a compliant resource name set",
    description=(
        "Builds every resource name defined by the naming rules from a region, environment, "
        "workload, optional unique suffix, optional organisation prefix and instance number. "
        "Names are truncated and normalised per Azure's length and character-set limits."
    ),
    tags=["Names"],
    request_model=NameGenerationRequest,
    response_model=NameGenerationResponse,
    operation_id="generateNames",
    route="/names",
    method="post",
)
def generate_names_post(req: func.HttpRequest) -> func.HttpResponse:
    """Generate a name set from a JSON body."""

    return _handle_generate_request(req, log_prefix="generate_names")


@app.function_name(name="generate_names_query")
@app.route(route="names", methods=[func.HttpMethod.GET])
@openapi_doc(
    summary="Generate a compliant resource name set from query parameters",
    description="Same as POST /names, reading the naming inputs from the query string.",
    tags=["Names"],
    response_model=NameGenerationResponse,
    operation_id="generateNamesFromQuery",
    route="/names",
    method="get",
)
def generate_names_get(req: func.HttpRequest) -> func.HttpResponse:
    """Generate a name set from query parameters."""

    return _handle_generate_request(req, log_prefix="generate_names_query", from_query=True)
