"""Validated input record for the naming convention."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping

REGION_FULL_NAMES: Dict[str, str] = {
    "eus": "eastus",
    "eus2": "eastus2",
    "wus2": "westus2",
    "cus": "centralus",
}

ENVIRONMENTS = ("dev", "qa", "prod")

WORKLOAD_MIN_LENGTH = 2
WORKLOAD_MAX_LENGTH = 10
UNIQUE_SUFFIX_MAX_LENGTH = 13
ORG_PREFIX_MAX_LENGTH = 5
INSTANCE_MIN = 1
INSTANCE_MAX = 999


class ConfigurationError(ValueError):
    """Raised when naming inputs violate their documented constraints."""


# camelCase payload keys mapped onto dataclass fields
_FIELD_ALIASES = {
    "regionAbbreviation": "region_abbreviation",
    "region": "region_abbreviation",
    "workloadName": "workload_name",
    "workload": "workload_name",
    "uniqueSuffix": "unique_suffix",
    "suffix": "unique_suffix",
    "orgPrefix": "org_prefix",
    "prefix": "org_prefix",
}

_FIELDS = (
    "region_abbreviation",
    "environment",
    "workload_name",
    "unique_suffix",
    "org_prefix",
    "instance",
)


def _require_str(field: str, value: object) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field} must be a string, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class NamingConfig:
    """Inputs shared by every generated resource name."""

    region_abbreviation: str
    environment: str
    workload_name: str
    unique_suffix: str = ""
    org_prefix: str = ""
    instance: int = 1

    def __post_init__(self) -> None:
        region = _require_str("region_abbreviation", self.region_abbreviation)
        if region not in REGION_FULL_NAMES:
            raise ConfigurationError(
                f"region_abbreviation must be one of {sorted(REGION_FULL_NAMES)}, got '{region}'"
            )

        environment = _require_str("environment", self.environment)
        if environment not in ENVIRONMENTS:
            raise ConfigurationError(
                f"environment must be one of {list(ENVIRONMENTS)}, got '{environment}'"
            )

        workload = _require_str("workload_name", self.workload_name)
        if not WORKLOAD_MIN_LENGTH <= len(workload) <= WORKLOAD_MAX_LENGTH:
            raise ConfigurationError(
                f"workload_name must be {WORKLOAD_MIN_LENGTH}-{WORKLOAD_MAX_LENGTH} characters, "
                f"got {len(workload)} ('{workload}')"
            )

        suffix = _require_str("unique_suffix", self.unique_suffix)
        if len(suffix) > UNIQUE_SUFFIX_MAX_LENGTH:
            raise ConfigurationError(
                f"unique_suffix must be at most {UNIQUE_SUFFIX_MAX_LENGTH} characters, got {len(suffix)}"
            )

        prefix = _require_str("org_prefix", self.org_prefix)
        if len(prefix) > ORG_PREFIX_MAX_LENGTH:
            raise ConfigurationError(
                f"org_prefix must be at most {ORG_PREFIX_MAX_LENGTH} characters, got {len(prefix)}"
            )

        # bool is an int subclass; True would otherwise format as "001"
        if isinstance(self.instance, bool) or not isinstance(self.instance, int):
            raise ConfigurationError(f"instance must be an integer, got {self.instance!r}")
        if not INSTANCE_MIN <= self.instance <= INSTANCE_MAX:
            raise ConfigurationError(
                f"instance must be between {INSTANCE_MIN} and {INSTANCE_MAX}, got {self.instance}"
            )

    @property
    def base_prefix(self) -> str:
        return f"{self.org_prefix}-" if self.org_prefix else ""

    @property
    def base_name(self) -> str:
        if self.unique_suffix:
            return f"{self.workload_name}-{self.unique_suffix}"
        return self.workload_name

    @property
    def instance_formatted(self) -> str:
        return f"{self.instance:03d}"

    @property
    def region_full_name(self) -> str:
        return REGION_FULL_NAMES[self.region_abbreviation]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "regionAbbreviation": self.region_abbreviation,
            "environment": self.environment,
            "workloadName": self.workload_name,
            "uniqueSuffix": self.unique_suffix,
            "orgPrefix": self.org_prefix,
            "instance": self.instance,
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "NamingConfig":
        """Build a config from a JSON-style mapping.

        Accepts camelCase or snake_case keys, ignores unrelated keys, lowercases
        the enum fields and converts digit strings for ``instance``.
        """

        if not isinstance(payload, Mapping):
            raise ConfigurationError("Naming payload must be a JSON object.")

        values: Dict[str, Any] = {}
        for key, value in payload.items():
            field = _FIELD_ALIASES.get(key, key)
            if field in _FIELDS and value is not None and field not in values:
                values[field] = value

        missing = [field for field in ("region_abbreviation", "environment", "workload_name") if not values.get(field)]
        if missing:
            raise ConfigurationError(f"Missing required field(s): {', '.join(missing)}")

        for field in ("region_abbreviation", "environment"):
            if isinstance(values[field], str):
                values[field] = values[field].strip().lower()
        for field in ("workload_name", "unique_suffix", "org_prefix"):
            if isinstance(values.get(field), str):
                values[field] = values[field].strip()

        instance = values.get("instance")
        if isinstance(instance, str):
            stripped = instance.strip()
            if not (stripped.isascii() and stripped.isdigit()):
                raise ConfigurationError(f"instance must be an integer, got '{instance}'")
            values["instance"] = int(stripped)

        return cls(**values)
