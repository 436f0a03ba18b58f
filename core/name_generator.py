# File: core/name_generator.py
# Summary: Assemble compliant Azure resource names from naming rules and a NamingConfig.

from __future__ import annotations

from collections.abc import Mapping
from typing import Dict, Iterable, Iterator, Optional

from core.cloud import AZURE_PUBLIC_CLOUD, CloudSuffixes
from core.naming_config import ConfigurationError, NamingConfig
from core.naming_rules import NamingRule, NamingRuleProvider, _normalise_context, get_rule_provider
from core.validation import validate_name


class NameSet(Mapping):
    """Immutable mapping of resource-type keys to generated names."""

    __slots__ = ("_names",)

    def __init__(self, names: Mapping[str, str]) -> None:
        object.__setattr__(self, "_names", dict(names))

    def __getitem__(self, key: str) -> str:
        return self._names[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __getattr__(self, attr: str) -> str:
        if attr.startswith("_"):
            raise AttributeError(attr)
        names = object.__getattribute__(self, "_names")
        if attr in names:
            return names[attr]
        head, *rest = attr.split("_")
        camel = head + "".join(part[:1].upper() + part[1:] for part in rest)
        if camel in names:
            return names[camel]
        raise AttributeError(f"NameSet has no resource type '{attr}'")

    def __setattr__(self, attr: str, value: object) -> None:
        raise AttributeError("NameSet is immutable")

    def __reduce__(self):
        return (NameSet, (self._names,))

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"NameSet({self._names!r})"

    def to_dict(self) -> Dict[str, str]:
        return dict(self._names)


def _template_context(config: NamingConfig, rule: NamingRule, cloud: CloudSuffixes) -> Dict[str, str]:
    return _normalise_context(
        {
            "base_prefix": config.base_prefix,
            "abbreviation": rule.abbreviation,
            "region": config.region_abbreviation,
            "region_full": config.region_full_name,
            "environment": config.environment,
            "workload": config.workload_name,
            "base_name": config.base_name,
            "unique_suffix": config.unique_suffix,
            "org_prefix": config.org_prefix,
            "instance": config.instance_formatted,
            "storage_suffix": cloud.storage_suffix,
            "sql_server_hostname": cloud.sql_server_hostname,
        }
    )


def build_name(config: NamingConfig, rule: NamingRule, cloud: CloudSuffixes = AZURE_PUBLIC_CLOUD) -> str:
    """
    Build a single resource name following the provided naming rule.

    Parameters:
    - config: Validated naming inputs shared by every resource
    - rule: The naming rule with the template and its constraints
    - cloud: DNS suffixes used by private DNS zone templates

    Returns:
    - The rendered name, normalised and truncated per the rule
    """
    context = _template_context(config, rule, cloud)
    try:
        name = rule.name_template.format_map(context)
    except KeyError as exc:
        missing = exc.args[0]
        raise ValueError(f"name_template for '{rule.key}' references unknown placeholder '{missing}'") from exc

    if rule.strip_hyphens:
        name = name.replace("-", "")
    if rule.lowercase:
        name = name.lower()
    # Hard cut; no attempt to keep the cut on a segment boundary.
    if rule.max_length is not None:
        name = name[: rule.max_length]

    validate_name(name, rule)
    return name


def generate(
    config: NamingConfig,
    *,
    cloud: CloudSuffixes = AZURE_PUBLIC_CLOUD,
    provider: Optional[NamingRuleProvider] = None,
    resource_types: Optional[Iterable[str]] = None,
) -> NameSet:
    """Generate every resource name defined by the active rules for ``config``."""

    provider = provider or get_rule_provider()
    if resource_types is None:
        keys = list(provider.list_resource_types())
    else:
        keys = []
        for resource_type in resource_types:
            try:
                keys.append(provider.get_rule(resource_type).key)
            except KeyError:
                raise ConfigurationError(f"Unknown resource type '{resource_type}'") from None

    names: Dict[str, str] = {}
    for key in keys:
        rule = provider.get_rule(key)
        names[rule.key] = build_name(config, rule, cloud)
    return NameSet(names)


def private_dns_zone_names(
    cloud: CloudSuffixes = AZURE_PUBLIC_CLOUD,
    *,
    provider: Optional[NamingRuleProvider] = None,
) -> Dict[str, str]:
    """Render the private DNS zone names, which do not depend on any naming input."""

    provider = provider or get_rule_provider()
    zones: Dict[str, str] = {}
    for key in provider.list_resource_types():
        rule = provider.get_rule(key)
        if rule.category != "privateDns" or not rule.is_fixed:
            continue
        zones[rule.key] = rule.name_template.format_map(
            {"storage_suffix": cloud.storage_suffix, "sql_server_hostname": cloud.sql_server_hostname}
        )
    return zones
