"""Routes exposing naming rule specifications as JSON."""

from __future__ import annotations

import azure.functions as func
from azure_functions_openapi.decorator import openapi as openapi_doc

from app import app
from app.constants import LIST_EXPAND_VALUES
from app.dependencies import naming_rules
from app.models import RuleDescriptionResponse, RuleListResponse
from app.responses import json_message, json_payload


def _handle_list_rules(req: func.HttpRequest) -> func.HttpResponse:
    expand = (req.params.get("expand") or "").lower()
    category = (req.params.get("category") or "").strip() or None
    resource_types = naming_rules.list_resource_types(category=category)

    if expand in LIST_EXPAND_VALUES:
        details = [naming_rules.describe_rule(resource_type) for resource_type in resource_types]
        return json_payload({"rules": details})

    return json_payload({"resourceTypes": list(resource_types)})


def _handle_get_rule(req: func.HttpRequest) -> func.HttpResponse:
    resource_type = (req.route_params.get("resource_type") or "").strip()
    if not resource_type:
        return json_message("Resource type is required.", status_code=400)

    try:
        rule_description = naming_rules.describe_rule(resource_type)
    except KeyError as exc:
        return json_message(str(exc.args[0]), status_code=404)

    return json_payload(rule_description)


@app.function_name(name="list_naming_rules")
@app.route(route="rules", methods=[func.HttpMethod.GET], auth_level=func.AuthLevel.ANONYMOUS)
@openapi_doc(
    summary="List available naming rules",
    description="Returns the resource-type keys of the active naming rules, optionally filtered by category.",
    tags=["Naming Rules"],
    response_model=RuleListResponse,
    operation_id="listNamingRules",
    route="/rules",
    method="get",
)
def list_naming_rules(req: func.HttpRequest) -> func.HttpResponse:
    """Return the collection of known naming rules."""

    return _handle_list_rules(req)


@app.function_name(name="get_naming_rule")
@app.route(route="rules/{resource_type}", methods=[func.HttpMethod.GET], auth_level=func.AuthLevel.ANONYMOUS)
@openapi_doc(
    summary="Retrieve a naming rule specification",
    description="Returns the name template, length limit, character set and normalisation flags for a resource type.",
    tags=["Naming Rules"],
    response_model=RuleDescriptionResponse,
    operation_id="getNamingRule",
    route="/rules/{resource_type}",
    method="get",
)
def get_naming_rule(req: func.HttpRequest) -> func.HttpResponse:
    """Return the rule details for a single resource type."""

    return _handle_get_rule(req)
