# File: core/naming_rules.py
# Summary: Resource naming rules and the pluggable provider that serves them.
"""Loader and registry for resource naming rules."""

from __future__ import annotations

import importlib
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from string import Formatter
from typing import Dict, List, Mapping, Optional, Protocol, Sequence

logger = logging.getLogger(__name__)


def _normalise_context(context: Mapping[str, object]) -> Dict[str, str]:
    normalised: Dict[str, str] = {}
    for key, value in context.items():
        if isinstance(value, str):
            normalised[key] = value
        elif value is None:
            normalised[key] = ""
        else:
            normalised[key] = str(value)
    return normalised


# Placeholders a name template may reference.
TEMPLATE_PLACEHOLDERS = (
    "base_prefix",
    "abbreviation",
    "region",
    "region_full",
    "environment",
    "workload",
    "base_name",
    "unique_suffix",
    "org_prefix",
    "instance",
    "storage_suffix",
    "sql_server_hostname",
)

CHARSETS = ("lower_alnum", "alnum", "alnum_hyphen", "lower_alnum_hyphen")


_TEMPLATE_FORMATTER = Formatter()


def template_placeholders(template: str) -> List[str]:
    """Return the placeholder names referenced by ``template`` in order."""

    return [field["name"] for field in _extract_template_fields(template)]


def _extract_template_fields(template: str) -> List[Dict[str, str]]:
    fields: List[Dict[str, str]] = []
    seen: set[str] = set()
    for _, field_name, _, _ in _TEMPLATE_FORMATTER.parse(template):
        if not field_name or field_name in seen:
            continue
        seen.add(field_name)
        entry: Dict[str, str] = {"name": field_name}
        if field_name in {"storage_suffix", "sql_server_hostname"}:
            entry["type"] = "cloudSuffix"
        elif field_name in {"region", "region_full", "environment", "workload", "instance"}:
            entry["type"] = "coreInput"
        else:
            entry["type"] = "derived"
        fields.append(entry)
    return fields


@dataclass(frozen=True)
class NamingRule:
    """Immutable representation of a naming rule."""

    key: str
    name_template: str
    abbreviation: str = ""
    category: str = "general"
    description: Optional[str] = None
    max_length: Optional[int] = None
    strip_hyphens: bool = False
    lowercase: bool = False
    charset: Optional[str] = None

    @property
    def is_fixed(self) -> bool:
        """True when the template does not depend on any naming input."""

        inputs = {field["name"] for field in _extract_template_fields(self.name_template)}
        return not inputs - {"storage_suffix", "sql_server_hostname"}

    def to_dict(self) -> Dict[str, object]:
        return {
            "key": self.key,
            "abbreviation": self.abbreviation,
            "category": self.category,
            "description": self.description,
            "nameTemplate": self.name_template,
            "maxLength": self.max_length,
            "stripHyphens": self.strip_hyphens,
            "lowercase": self.lowercase,
            "charset": self.charset,
        }


class NamingRuleProvider(Protocol):
    """Contract for pluggable naming rule providers."""

    def get_rule(self, resource_type: str) -> NamingRule:
        """Return the naming rule for the given resource type key."""

    def list_resource_types(self) -> Sequence[str]:
        """Enumerate rule keys in output order."""


class DictionaryRuleProvider:
    """In-memory provider useful for tests and composed providers."""

    def __init__(self, rules: Sequence[NamingRule]) -> None:
        self._order = [rule.key for rule in rules]
        self._rules = {rule.key.lower(): rule for rule in rules}

    def get_rule(self, resource_type: str) -> NamingRule:
        try:
            return self._rules[resource_type.lower()]
        except KeyError:
            raise KeyError(f"Unknown resource type '{resource_type}'") from None

    def list_resource_types(self) -> Sequence[str]:
        return tuple(self._order)


_RULES_PATH_ENV = "NAMING_RULES_PATH"
_LEGACY_RULES_FILE_ENV = "NAMING_RULES_FILE"


def _resolve_rules_path() -> Path:
    override = os.environ.get(_RULES_PATH_ENV) or os.environ.get(_LEGACY_RULES_FILE_ENV)
    if override:
        return Path(override)
    return Path(__file__).resolve().parents[1] / "rules"


def _load_default_provider() -> NamingRuleProvider:
    from providers.json_rules import JsonRuleProvider  # Local import to avoid circular dependency

    return JsonRuleProvider(rules_path=_resolve_rules_path())


def _load_provider_from_env() -> Optional[NamingRuleProvider]:
    provider_path = os.environ.get("NAMING_RULE_PROVIDER")
    if not provider_path:
        return None

    try:
        module_path, _, attr_name = provider_path.rpartition(".")
        if not module_path or not attr_name:
            raise ValueError("NAMING_RULE_PROVIDER must be in 'module.attr' format")

        module = importlib.import_module(module_path)
        factory = getattr(module, attr_name)
        provider = factory() if callable(factory) else factory
        if not hasattr(provider, "get_rule") or not hasattr(provider, "list_resource_types"):
            raise TypeError("Provider must define 'get_rule' and 'list_resource_types'")
        return provider  # type: ignore[return-value]
    except Exception:  # pragma: no cover - defensive logging only
        logger.exception("Failed to load naming rule provider from environment")
        return None


# Loaded on first use so providers.json_rules can import this module first.
_provider: Optional[NamingRuleProvider] = None


def set_rule_provider(provider: NamingRuleProvider) -> None:
    """Override the active naming rule provider at runtime."""

    global _provider
    _provider = provider


def get_rule_provider() -> NamingRuleProvider:
    """Return the currently active naming rule provider."""

    global _provider
    if _provider is None:
        _provider = _load_provider_from_env() or _load_default_provider()
    return _provider


def load_naming_rule(resource_type: str) -> NamingRule:
    """Return the naming rule for the requested resource type."""

    return get_rule_provider().get_rule(resource_type)


def list_resource_types(category: Optional[str] = None) -> Sequence[str]:
    """Return the rule keys exposed by the active provider, in output order."""

    provider = get_rule_provider()
    keys = [str(key) for key in provider.list_resource_types()]
    if category:
        wanted = category.lower()
        keys = [key for key in keys if provider.get_rule(key).category.lower() == wanted]
    return tuple(keys)


def describe_rule(resource_type: str) -> Dict[str, object]:
    """Provide a user-friendly JSON-compatible description of a naming rule."""

    try:
        rule = load_naming_rule(resource_type)
    except KeyError:
        raise KeyError(
            f"Unknown resource type '{resource_type}'. Known types: {sorted(list_resource_types())}"
        ) from None

    description = rule.to_dict()
    description["fixed"] = rule.is_fixed
    description["templateFields"] = _extract_template_fields(rule.name_template)
    return description
