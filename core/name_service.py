# File: core/name_service.py
# Summary: Shared orchestrator turning request payloads into generated name sets.
"""Shared orchestrator for generating Azure-compliant name sets."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from core.cloud import CloudSuffixes, resolve_cloud
from core.name_generator import NameSet, generate, private_dns_zone_names
from core.naming_config import ConfigurationError, NamingConfig
from core.naming_rules import list_resource_types

logger = logging.getLogger(__name__)


class InvalidRequestError(ConfigurationError):
    """Raised when a name generation payload is malformed."""


@dataclass
class NameGenerationResult:
    config: NamingConfig
    cloud: CloudSuffixes
    names: NameSet

    def to_dict(self) -> Dict[str, Any]:
        payload = self.config.to_dict()
        payload["regionFullName"] = self.config.region_full_name
        payload["instanceFormatted"] = self.config.instance_formatted
        payload["cloud"] = self.cloud.name
        payload["names"] = self.names.to_dict()
        return payload


def _split_list(value: Any, field: str) -> Optional[List[str]]:
    if value is None:
        return None
    if isinstance(value, str):
        items = [item.strip() for item in value.split(",")]
    elif isinstance(value, (list, tuple)):
        items = [str(item).strip() for item in value]
    else:
        raise InvalidRequestError(f"{field} must be a list or a comma-separated string")
    return [item for item in items if item]


def _resource_filter(payload: Mapping[str, Any]) -> Optional[List[str]]:
    resource_types = _split_list(payload.get("resourceTypes", payload.get("resource_types")), "resourceTypes")
    if resource_types is not None:
        known = {key.lower() for key in list_resource_types()}
        unknown = [key for key in resource_types if key.lower() not in known]
        if unknown:
            raise InvalidRequestError(f"Unknown resource type(s): {', '.join(unknown)}")

    category = payload.get("category")
    if not category:
        return resource_types

    in_category = list(list_resource_types(category=str(category)))
    if not in_category:
        raise InvalidRequestError(f"Unknown category '{category}'")
    if resource_types is None:
        return in_category
    wanted = {key.lower() for key in in_category}
    return [key for key in resource_types if key.lower() in wanted]


def generate_names(payload: Mapping[str, Any]) -> NameGenerationResult:
    """Build a NamingConfig from ``payload`` and generate its name set."""

    if not isinstance(payload, Mapping):
        raise InvalidRequestError("Request payload must be a JSON object.")

    config = NamingConfig.from_payload(payload)
    cloud = resolve_cloud(payload.get("cloud") or payload.get("cloudName"))
    resource_types = _resource_filter(payload)

    names = generate(config, cloud=cloud, resource_types=resource_types)
    logger.info(
        "Generated %d names for workload '%s' (%s/%s, instance %s) in %s",
        len(names),
        config.workload_name,
        config.region_abbreviation,
        config.environment,
        config.instance_formatted,
        cloud.name,
    )
    return NameGenerationResult(config=config, cloud=cloud, names=names)


def list_private_dns_zones(cloud_name: Optional[str] = None) -> Dict[str, Any]:
    """Return the private DNS zone names for the requested cloud."""

    cloud = resolve_cloud(cloud_name)
    return {"cloud": cloud.name, "zones": private_dns_zone_names(cloud)}
