"""DNS suffixes for the Azure clouds that private DNS zone names depend on."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict, Optional

from core.naming_config import ConfigurationError

_DEFAULT_CLOUD_ENV = "NAMING_DEFAULT_CLOUD"


@dataclass(frozen=True)
class CloudSuffixes:
    """Suffixes exposed by ``environment().suffixes`` for a given cloud."""

    name: str
    storage_suffix: str
    sql_server_hostname: str


AZURE_PUBLIC_CLOUD = CloudSuffixes(
    name="AzureCloud",
    storage_suffix="core.windows.net",
    sql_server_hostname=".database.windows.net",
)
AZURE_US_GOVERNMENT = CloudSuffixes(
    name="AzureUSGovernment",
    storage_suffix="core.usgovcloudapi.net",
    sql_server_hostname=".database.usgovcloudapi.net",
)
AZURE_CHINA_CLOUD = CloudSuffixes(
    name="AzureChinaCloud",
    storage_suffix="core.chinacloudapi.cn",
    sql_server_hostname=".database.chinacloudapi.cn",
)

KNOWN_CLOUDS: Dict[str, CloudSuffixes] = {
    cloud.name.lower(): cloud for cloud in (AZURE_PUBLIC_CLOUD, AZURE_US_GOVERNMENT, AZURE_CHINA_CLOUD)
}


def resolve_cloud(name: Optional[str] = None) -> CloudSuffixes:
    """Return the suffixes for ``name``, falling back to the configured default."""

    if not name:
        name = os.environ.get(_DEFAULT_CLOUD_ENV) or AZURE_PUBLIC_CLOUD.name
    cloud = KNOWN_CLOUDS.get(str(name).strip().lower())
    if cloud is None:
        known = sorted(cloud.name for cloud in KNOWN_CLOUDS.values())
        raise ConfigurationError(f"Unknown cloud '{name}'. Known clouds: {known}")
    return cloud
