"""Shared constants for Azure Naming Function routes."""

API_TITLE = "Azure Resource Naming API"
API_VERSION = "1.0.0"
LIST_EXPAND_VALUES = {"details", "full"}
