"""Configuration management module."""

from .provider import AppSettingsProvider
from .settings import (
    AppSettings,
    FormatterSettings,
    MergerSettings,
    get_settings,
)

__all__ = [
    "AppSettings",
    "AppSettingsProvider",
    "FormatterSettings",
    "MergerSettings",
    "get_settings",
]
