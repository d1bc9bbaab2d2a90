"""Configuration module with YAML and environment variable support."""

from .settings import AuthMode, Settings, StoreBackend, get_settings


__all__ = [
    "AuthMode",
    "Settings",
    "StoreBackend",
    "get_settings",
]
