"""Validation helpers for generated resource names."""

from __future__ import annotations

import re
from typing import Dict, Optional

from core.naming_config import ConfigurationError
from core.naming_rules import NamingRule


class NameValidationError(ConfigurationError):
    """Raised when a generated name violates its resource type's constraints."""


CHARSET_PATTERNS: Dict[str, "re.Pattern[str]"] = {
    "lower_alnum": re.compile(r"[a-z0-9]+"),
    "alnum": re.compile(r"[A-Za-z0-9]+"),
    "alnum_hyphen": re.compile(r"[A-Za-z0-9-]+"),
    "lower_alnum_hyphen": re.compile(r"[a-z0-9-]+"),
}

_CHARSET_DESCRIPTIONS = {
    "lower_alnum": "lowercase letters (a-z) and numbers (0-9)",
    "alnum": "letters (a-z, A-Z) and numbers (0-9)",
    "alnum_hyphen": "letters (a-z, A-Z), numbers (0-9), and hyphens (-)",
    "lower_alnum_hyphen": "lowercase letters (a-z), numbers (0-9), and hyphens (-)",
}


def _charset_char_pattern(charset: str) -> "re.Pattern[str]":
    return re.compile(CHARSET_PATTERNS[charset].pattern[:-1])


def validate_name(name: str, rule: NamingRule) -> None:
    """Raise :class:`NameValidationError` when the generated name violates policy."""

    if not name:
        raise NameValidationError(f"Generated name for '{rule.key}' is empty.")

    max_length: Optional[int] = rule.max_length
    if max_length is not None and len(name) > max_length:
        excess = len(name) - max_length
        raise NameValidationError(
            f"Name '{name}' for '{rule.key}' exceeds character limit. "
            f"Length: {len(name)} characters, Limit: {max_length} characters, "
            f"Over by: {excess} character{'s' if excess != 1 else ''}."
        )

    if rule.charset is None:
        return

    if not CHARSET_PATTERNS[rule.charset].fullmatch(name):
        char_pattern = _charset_char_pattern(rule.charset)
        invalid_chars = sorted(set(c for c in name if not char_pattern.fullmatch(c)))
        raise NameValidationError(
            f"Name '{name}' for '{rule.key}' contains invalid characters: {', '.join(repr(c) for c in invalid_chars)}. "
            f"Only {_CHARSET_DESCRIPTIONS[rule.charset]} are allowed."
        )
