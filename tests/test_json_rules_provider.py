import json
import logging
import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from providers.json_rules import JsonRuleProvider, load_provider_from_json


def _write_rules(tmp_path, filename, payload):
    rules_file = tmp_path / filename
    rules_file.write_text(json.dumps(payload), encoding="utf-8")
    return rules_file


def _base_rule_payload():
    return {
        "metadata": {"name": "base", "priority": 0},
        "default": {"category": "general", "max_length": None},
        "resources": {
            "storageAccount": {
                "abbreviation": "st",
                "category": "data",
                "name_template": "{base_prefix}{abbreviation}{base_name}{environment}{region}",
                "max_length": 24,
                "strip_hyphens": True,
                "lowercase": True,
                "charset": "lower_alnum",
            },
            "virtualNetwork": {
                "abbreviation": "vnet",
                "name_template": "{base_prefix}{abbreviation}-{workload}-{environment}-{region}",
            },
        },
    }


def test_provider_loads_rules_in_file_order(tmp_path):
    _write_rules(tmp_path, "base.json", _base_rule_payload())

    provider = JsonRuleProvider(rules_path=tmp_path)

    assert provider.list_resource_types() == ("storageAccount", "virtualNetwork")
    storage_rule = provider.get_rule("storageaccount")
    assert storage_rule.key == "storageAccount"
    assert storage_rule.max_length == 24
    assert storage_rule.strip_hyphens is True
    assert storage_rule.charset == "lower_alnum"

    vnet_rule = provider.get_rule("virtualNetwork")
    assert vnet_rule.category == "general"
    assert vnet_rule.max_length is None
    assert vnet_rule.lowercase is False


def test_provider_merges_layers_by_priority(tmp_path):
    _write_rules(tmp_path, "base.json", _base_rule_payload())
    overlay = {
        "metadata": {"name": "overlay", "priority": 10},
        "resources": {
            "storageAccount": {"abbreviation": "sa"},
            "keyVault": {
                "abbreviation": "kv",
                "name_template": "{abbreviation}-{base_name}",
                "max_length": 24,
                "charset": "alnum_hyphen",
            },
        },
    }
    _write_rules(tmp_path, "overlay.json", overlay)

    provider = JsonRuleProvider(rules_path=tmp_path)

    storage_rule = provider.get_rule("storageAccount")
    assert storage_rule.abbreviation == "sa"
    assert storage_rule.max_length == 24  # inherited from the base layer
    assert provider.list_resource_types() == ("storageAccount", "virtualNetwork", "keyVault")
    assert set(provider.export_rules()) == {"storageAccount", "virtualNetwork", "keyVault"}


def test_provider_skips_disabled_layers(tmp_path):
    _write_rules(tmp_path, "base.json", _base_rule_payload())
    disabled = {
        "metadata": {"name": "disabled", "priority": 999, "enabled": False},
        "resources": {"storageAccount": {"max_length": 10}},
    }
    _write_rules(tmp_path, "disabled.json", disabled)

    provider = JsonRuleProvider(rules_path=tmp_path)
    assert provider.get_rule("storageAccount").max_length == 24


def test_overlay_can_remove_a_rule(tmp_path):
    _write_rules(tmp_path, "base.json", _base_rule_payload())
    _write_rules(
        tmp_path,
        "trim.json",
        {"metadata": {"priority": 5}, "resources": {"virtualNetwork": {"enabled": False}}},
    )

    provider = JsonRuleProvider(rules_path=tmp_path)

    assert provider.list_resource_types() == ("storageAccount",)
    with pytest.raises(KeyError):
        provider.get_rule("virtualNetwork")


def test_single_file_path(tmp_path):
    rules_file = _write_rules(tmp_path, "only.json", _base_rule_payload())

    provider = load_provider_from_json(rules_file)

    assert "virtualNetwork" in provider.list_resource_types()


def test_reload_picks_up_changes(tmp_path):
    rules_file = _write_rules(tmp_path, "base.json", _base_rule_payload())
    provider = JsonRuleProvider(rules_path=rules_file)

    payload = _base_rule_payload()
    payload["resources"]["storageAccount"]["abbreviation"] = "sto"
    rules_file.write_text(json.dumps(payload), encoding="utf-8")
    provider.reload()

    assert provider.get_rule("storageAccount").abbreviation == "sto"


def test_missing_path_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        JsonRuleProvider(rules_path=tmp_path / "missing")


def test_empty_directory_raises(tmp_path):
    with pytest.raises(ValueError):
        JsonRuleProvider(rules_path=tmp_path)


@pytest.mark.parametrize(
    "definition,message",
    [
        ({"abbreviation": "x"}, "name_template"),
        ({"name_template": "{workload}-{colour}"}, "colour"),
        ({"name_template": "{workload}", "charset": "emoji"}, "charset"),
        ({"name_template": "{workload}", "max_length": 0}, "max_length"),
    ],
)
def test_invalid_rule_definitions_rejected(tmp_path, definition, message):
    _write_rules(tmp_path, "bad.json", {"resources": {"broken": definition}})

    with pytest.raises(ValueError) as exc:
        JsonRuleProvider(rules_path=tmp_path)
    assert message in str(exc.value)
    assert "broken" in str(exc.value)


def test_non_object_top_level_rejected(tmp_path):
    (tmp_path / "list.json").write_text("[]", encoding="utf-8")

    with pytest.raises(ValueError):
        JsonRuleProvider(rules_path=tmp_path)


def test_bundled_rules_load():
    provider = JsonRuleProvider(rules_path=ROOT / "rules")
    keys = provider.list_resource_types()

    assert len(keys) >= 50
    assert provider.get_rule("keyVault").max_length == 24
    assert provider.get_rule("virtualMachineWindows").max_length == 15
    assert provider.get_rule("containerRegistry").charset == "alnum"
    assert provider.get_rule("privateDnsZoneKeyVault").is_fixed
    assert not provider.get_rule("keyVault").is_fixed


def test_reload_logs_layer_names(tmp_path, caplog):
    _write_rules(tmp_path, "base.json", _base_rule_payload())
    _write_rules(tmp_path, "site.json", {"metadata": {"priority": 5}, "resources": {}})

    with caplog.at_level(logging.DEBUG, logger="providers.json_rules"):
        JsonRuleProvider(rules_path=tmp_path)

    assert "base, site" in caplog.text
