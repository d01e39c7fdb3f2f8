"""Settings provider backed by the application settings."""

from ..utils.errors import MissingConfigurationError
from .settings import AppSettings, get_settings


class AppSettingsProvider:
    """Serves display fallbacks from ``AppSettings``."""

    def __init__(self, settings: AppSettings | None = None):
        self.settings = settings or get_settings()

    def default_icon(self) -> str | None:
        icon = self.settings.formatter.default_icon
        if not icon:
            if self.settings.formatter.require_default_icon:
                raise MissingConfigurationError("formatter.default_icon")
            return None
        return icon
