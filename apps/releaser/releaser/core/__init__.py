"""Process-wide settings, credential and logging setup."""

from releaser.core.config import Credential, Settings, get_settings
from releaser.core.logging import bind_platform, configure_structlog

__all__ = [
    "Credential",
    "Settings",
    "get_settings",
    "bind_platform",
    "configure_structlog",
]
