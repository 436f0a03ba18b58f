"""Routes exposing the fixed private DNS zone names per cloud."""

from __future__ import annotations

import logging

import azure.functions as func
from azure_functions_openapi.decorator import openapi as openapi_doc

from app import app
from app.dependencies import ConfigurationError, list_private_dns_zones
from app.models import PrivateDnsZonesResponse
from app.responses import json_message, json_payload


def _handle_dns_zones(req: func.HttpRequest) -> func.HttpResponse:
    cloud_name = (req.params.get("cloud") or "").strip() or None
    try:
        payload = list_private_dns_zones(cloud_name)
    except ConfigurationError as exc:
        logging.info("[private_dns_zones] Rejected cloud '%s'.", cloud_name)
        return json_message(str(exc), status_code=400)
    return json_payload(payload)


@app.function_name(name="private_dns_zones")
@app.route(route="dns-zones", methods=[func.HttpMethod.GET], auth_level=func.AuthLevel.ANONYMOUS)
@openapi_doc(
    summary="List private DNS zone names",
    description=(
        "Returns the platform-defined privatelink DNS zone names. They do not depend on any naming "
        "input, only on the cloud's storage and SQL DNS suffixes."
    ),
    tags=["Naming Rules"],
    response_model=PrivateDnsZonesResponse,
    operation_id="listPrivateDnsZones",
    route="/dns-zones",
    method="get",
)
def private_dns_zones(req: func.HttpRequest) -> func.HttpResponse:
    """Return the private DNS zone names for the requested cloud."""

    return _handle_dns_zones(req)
