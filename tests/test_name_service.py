import dataclasses
import logging
import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core import name_service
from core.naming_config import ConfigurationError


def _payload(**overrides):
    payload = {
        "regionAbbreviation": "cus",
        "environment": "dev",
        "workloadName": "webapp",
        "uniqueSuffix": "test1234",
        "orgPrefix": "test",
        "instance": 1,
    }
    payload.update(overrides)
    return payload


def test_generate_names_returns_full_result(caplog):
    with caplog.at_level(logging.INFO, logger="core.name_service"):
        result = name_service.generate_names(_payload())

    body = result.to_dict()
    assert body["regionAbbreviation"] == "cus"
    assert body["regionFullName"] == "centralus"
    assert body["instanceFormatted"] == "001"
    assert body["cloud"] == "AzureCloud"
    assert body["names"]["keyVault"] == "test-kv-webapp-test1234-"
    assert body["names"]["storageAccount"] == "teststwebapptest1234devc"
    assert "Generated" in caplog.text


def test_result_converts_with_dataclasses_asdict():
    result = name_service.generate_names(_payload(resourceTypes=["keyVault"]))

    converted = dataclasses.asdict(result)

    assert converted["config"]["workload_name"] == "webapp"
    assert converted["cloud"]["name"] == "AzureCloud"
    assert dict(converted["names"]) == {"keyVault": "test-kv-webapp-test1234-"}


def test_generate_names_accepts_snake_case_payload():
    result = name_service.generate_names(
        {"region_abbreviation": "EUS", "environment": "PROD", "workload_name": "jobs", "instance": "12"}
    )

    assert result.config.region_abbreviation == "eus"
    assert result.config.instance == 12
    assert result.names["virtualMachine"] == "vm-jobs-prod-eus-012"


@pytest.mark.parametrize(
    "payload,missing",
    [
        ({"environment": "dev", "workloadName": "webapp"}, "region_abbreviation"),
        ({"regionAbbreviation": "cus", "workloadName": "webapp"}, "environment"),
        ({"regionAbbreviation": "cus", "environment": "dev"}, "workload_name"),
    ],
)
def test_generate_names_missing_fields(payload, missing):
    with pytest.raises(ConfigurationError) as exc:
        name_service.generate_names(payload)
    assert missing in str(exc.value)


def test_generate_names_rejects_non_object():
    with pytest.raises(name_service.InvalidRequestError):
        name_service.generate_names(["not", "an", "object"])


def test_resource_types_filter_from_comma_string():
    result = name_service.generate_names(_payload(resourceTypes="keyVault, storageAccount"))

    assert list(result.names) == ["keyVault", "storageAccount"]


def test_category_filter():
    result = name_service.generate_names(_payload(category="resourceGroup"))

    assert result.names
    assert all(key.startswith("resourceGroup") for key in result.names)


def test_category_and_resource_types_intersect():
    result = name_service.generate_names(
        _payload(category="security", resourceTypes=["keyVault", "storageAccount"])
    )

    assert list(result.names) == ["keyVault"]


def test_unknown_resource_type_rejected_alongside_category():
    with pytest.raises(name_service.InvalidRequestError) as exc:
        name_service.generate_names(
            _payload(category="security", resourceTypes=["keyVault", "noSuchType"])
        )
    assert "noSuchType" in str(exc.value)


def test_unknown_resource_type_rejected_without_category():
    with pytest.raises(name_service.InvalidRequestError):
        name_service.generate_names(_payload(resourceTypes=["keyVault", "noSuchType"]))


def test_unknown_category_rejected():
    with pytest.raises(name_service.InvalidRequestError):
        name_service.generate_names(_payload(category="quantum"))


def test_invalid_resource_types_value_rejected():
    with pytest.raises(name_service.InvalidRequestError):
        name_service.generate_names(_payload(resourceTypes=42))


def test_cloud_selection():
    result = name_service.generate_names(_payload(cloud="azurechinacloud"))

    assert result.cloud.name == "AzureChinaCloud"
    assert result.names["privateDnsZoneBlob"] == "privatelink.blob.core.chinacloudapi.cn"


def test_unknown_cloud_rejected():
    with pytest.raises(ConfigurationError):
        name_service.generate_names(_payload(cloud="MarsCloud"))


def test_list_private_dns_zones_defaults_to_public_cloud(monkeypatch):
    monkeypatch.delenv("NAMING_DEFAULT_CLOUD", raising=False)

    payload = name_service.list_private_dns_zones()

    assert payload["cloud"] == "AzureCloud"
    assert payload["zones"]["privateDnsZoneKeyVault"] == "privatelink.vaultcore.azure.net"
    assert payload["zones"]["privateDnsZoneSql"] == "privatelink.database.windows.net"
