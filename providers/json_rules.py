"""Naming rule provider that loads definitions from JSON files."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Sequence

from core.naming_rules import (
    CHARSETS,
    TEMPLATE_PLACEHOLDERS,
    NamingRule,
    NamingRuleProvider,
    template_placeholders,
)

logger = logging.getLogger(__name__)

_RULE_FIELDS = (
    "name_template",
    "abbreviation",
    "category",
    "description",
    "max_length",
    "strip_hyphens",
    "lowercase",
    "charset",
)


@dataclass(slots=True)
class _RuleLayer:
    path: Path
    priority: int
    enabled: bool
    name: str
    default_config: Mapping[str, Any] | None
    resources_config: Dict[str, Mapping[str, Any]]


class JsonRuleProvider(NamingRuleProvider):
    """Load naming rules from one or more JSON configuration files."""

    def __init__(
        self,
        *,
        rules_path: str | Path,
    ) -> None:
        self._path = Path(rules_path)
        if not self._path.exists():
            raise FileNotFoundError(f"Naming rules path '{self._path}' does not exist.")
        self._order: list[str] = []
        self._rules: Dict[str, NamingRule] = {}
        self.reload()

    def reload(self) -> None:
        """Reload rule definitions from disk."""

        layers = _load_rule_layers(self._path)
        if not layers:
            raise ValueError(f"No enabled rule layers found under '{self._path}'.")

        defaults: Dict[str, Any] = {}
        rules: Dict[str, NamingRule] = {}
        order: list[str] = []

        for layer in layers:
            if layer.default_config:
                defaults.update(layer.default_config)

            for key, config in layer.resources_config.items():
                normalised = key.lower()
                if config.get("enabled", True) is False:
                    if normalised in rules:
                        del rules[normalised]
                        order = [existing for existing in order if existing.lower() != normalised]
                    continue

                base_rule = rules.get(normalised)
                try:
                    rule = _to_rule(key, config, defaults=defaults, fallback_rule=base_rule)
                except ValueError as exc:
                    raise ValueError(f"Invalid rule '{key}' in '{layer.path}': {exc}") from exc
                if base_rule is None:
                    order.append(rule.key)
                rules[normalised] = rule

        self._order = order
        self._rules = rules
        logger.debug(
            "Loaded %d naming rules from layer(s) %s under %s",
            len(order),
            ", ".join(layer.name for layer in layers),
            self._path,
        )

    def get_rule(self, resource_type: str) -> NamingRule:
        key = resource_type.lower()
        if key not in self._rules:
            raise KeyError(f"Unknown resource type '{resource_type}'")
        return self._rules[key]

    def list_resource_types(self) -> Sequence[str]:
        return tuple(self._order)

    def export_rules(self) -> Dict[str, NamingRule]:
        """Return a copy of the loaded rules keyed by their canonical key."""

        return {self._rules[key.lower()].key: self._rules[key.lower()] for key in self._order}


def _to_rule(
    key: str,
    config: Mapping[str, Any],
    *,
    defaults: Mapping[str, Any],
    fallback_rule: NamingRule | None,
) -> NamingRule:
    values: Dict[str, Any] = {}
    for field in _RULE_FIELDS:
        if field in config:
            values[field] = config[field]
        elif fallback_rule is not None:
            values[field] = getattr(fallback_rule, field)
        elif field in defaults:
            values[field] = defaults[field]

    # Keep the casing from the first layer that defined the key.
    canonical_key = fallback_rule.key if fallback_rule is not None else key

    template = values.get("name_template")
    if not template or not isinstance(template, str):
        raise ValueError("Rule definition must provide a 'name_template' string.")
    unknown = [name for name in template_placeholders(template) if name not in TEMPLATE_PLACEHOLDERS]
    if unknown:
        raise ValueError(f"name_template references unknown placeholder(s): {', '.join(unknown)}")

    max_length = values.get("max_length")
    if max_length is not None:
        max_length = int(max_length)
        if max_length <= 0:
            raise ValueError("'max_length' must be a positive integer when provided.")

    charset = values.get("charset")
    if charset is not None and charset not in CHARSETS:
        raise ValueError(f"'charset' must be one of {list(CHARSETS)}")

    description = values.get("description")

    return NamingRule(
        key=canonical_key,
        name_template=template,
        abbreviation=str(values.get("abbreviation") or ""),
        category=str(values.get("category") or "general"),
        description=str(description) if description else None,
        max_length=max_length,
        strip_hyphens=bool(values.get("strip_hyphens", False)),
        lowercase=bool(values.get("lowercase", False)),
        charset=charset,
    )


def _load_rule_layers(path: Path) -> list[_RuleLayer]:
    if path.is_dir():
        candidates = sorted(file for file in path.glob("*.json") if file.is_file())
        layers = [_parse_rule_layer(candidate) for candidate in candidates]
    else:
        layers = [_parse_rule_layer(path)]

    enabled_layers = [layer for layer in layers if layer.enabled]
    enabled_layers.sort(key=lambda layer: (layer.priority, layer.path.name))
    return enabled_layers


def _parse_rule_layer(path: Path) -> _RuleLayer:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, Mapping):
        raise ValueError(f"Rule file '{path}' must contain a JSON object at the top level.")

    metadata = data.get("metadata") or {}
    if not isinstance(metadata, Mapping):
        raise ValueError(f"Rule file '{path}' must contain an object for 'metadata'.")

    priority = int(metadata.get("priority", 0))
    enabled = bool(metadata.get("enabled", True))
    name = str(metadata.get("name") or path.stem)

    default_config = data.get("default")
    if default_config is not None and not isinstance(default_config, Mapping):
        raise ValueError(f"'default' in '{path}' must be an object when provided.")

    resources_config_raw = data.get("resources") or {}
    if not isinstance(resources_config_raw, Mapping):
        raise ValueError(f"'resources' in '{path}' must be an object mapping resource types to definitions.")

    resources_config: Dict[str, Mapping[str, Any]] = {}
    for key, value in resources_config_raw.items():
        if not isinstance(value, Mapping):
            raise ValueError(f"Rule definition for '{key}' in '{path}' must be an object.")
        resources_config[str(key)] = value

    return _RuleLayer(
        path=path,
        priority=priority,
        enabled=enabled,
        name=name,
        default_config=default_config,
        resources_config=resources_config,
    )


def load_provider_from_json(path: str | Path) -> JsonRuleProvider:
    """Convenience helper for environment-driven configuration."""

    return JsonRuleProvider(rules_path=path)
