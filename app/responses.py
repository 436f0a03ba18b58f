"""Helper utilities for building HTTP responses."""

from __future__ import annotations

import json
from typing import Mapping

import azure.functions as func

from core.name_service import NameGenerationResult


def build_names_response(result: NameGenerationResult) -> func.HttpResponse:
    return json_payload(result.to_dict(), status_code=200)


def json_message(message: str, *, status_code: int) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps({"message": message}),
        mimetype="application/json",
        status_code=status_code,
    )


def json_payload(payload: Mapping[str, object], *, status_code: int = 200) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps(payload),
        mimetype="application/json",
        status_code=status_code,
    )
