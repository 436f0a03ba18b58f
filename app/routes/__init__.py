"""Route modules registered with the shared FunctionApp."""

from . import dns, docs, names, rules  # noqa: F401

__all__ = ["dns", "docs", "names", "rules"]
