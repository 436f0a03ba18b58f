"""Shared error helpers for HTTP routes."""

from __future__ import annotations

import logging

import azure.functions as func

from .dependencies import ConfigurationError, NameValidationError
from .responses import json_message


def handle_name_generation_error(exc: Exception, *, log_prefix: str) -> func.HttpResponse:
    if isinstance(exc, NameValidationError):
        logging.warning("[%s] Generated name rejected: %s", log_prefix, exc)
        return json_message(str(exc), status_code=400)
    if isinstance(exc, ConfigurationError):
        return json_message(str(exc), status_code=400)

    logging.exception("[%s] Unexpected error", log_prefix)
    return json_message("Error generating names.", status_code=500)
