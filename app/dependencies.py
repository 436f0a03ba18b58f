"""Centralised imports for route dependencies."""

from __future__ import annotations

import logging
from typing import Iterable

from core import naming_rules
from core.name_service import (
    InvalidRequestError,
    NameGenerationResult,
    generate_names,
    list_private_dns_zones,
)
from core.naming_config import ConfigurationError
from core.validation import NameValidationError

__all__: Iterable[str] = (
    "ConfigurationError",
    "InvalidRequestError",
    "NameGenerationResult",
    "NameValidationError",
    "generate_names",
    "list_private_dns_zones",
    "logging",
    "naming_rules",
)
