"""
Settings package for gd_codec.

Configuration is stored with Qt's QSettings for cross-platform storage,
or in an INI file passed explicitly.

Usage:
    from gd_codec.settings import AppSettings

    settings = AppSettings()
    objects = ObjectList.decode(blob, **settings.codec.object_list_options())
"""

from .core import AppSettings
from .types import ConfigVersion, ConfigError, ValidationResult
from .codec import CodecSettings
from .logging import LoggingSettings

__all__ = [
    "AppSettings",
    "ConfigVersion",
    "ConfigError",
    "ValidationResult",
    "CodecSettings",
    "LoggingSettings",
]
