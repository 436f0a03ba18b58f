import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.cloud import AZURE_PUBLIC_CLOUD, AZURE_US_GOVERNMENT, resolve_cloud
from core.naming_config import ConfigurationError


def test_resolve_cloud_is_case_insensitive():
    assert resolve_cloud("azureusgovernment") is AZURE_US_GOVERNMENT
    assert resolve_cloud(" AzureCloud ") is AZURE_PUBLIC_CLOUD


def test_resolve_cloud_defaults_to_public(monkeypatch):
    monkeypatch.delenv("NAMING_DEFAULT_CLOUD", raising=False)
    assert resolve_cloud() is AZURE_PUBLIC_CLOUD


def test_resolve_cloud_reads_default_from_environment(monkeypatch):
    monkeypatch.setenv("NAMING_DEFAULT_CLOUD", "AzureUSGovernment")
    assert resolve_cloud(None) is AZURE_US_GOVERNMENT


def test_unknown_cloud_raises():
    with pytest.raises(ConfigurationError) as exc:
        resolve_cloud("AzureStack")
    assert "Known clouds" in str(exc.value)


def test_sql_hostname_keeps_leading_dot():
    assert AZURE_PUBLIC_CLOUD.sql_server_hostname.startswith(".")
    assert not AZURE_PUBLIC_CLOUD.storage_suffix.startswith(".")
