"""
Codec behaviour settings for gd_codec.
"""

from typing import TYPE_CHECKING, Any, Dict

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings


class CodecSettings:
    """Manages decoding options."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_bool(self, key: str, default: bool = False) -> bool:
        """Type-safe boolean retrieval from settings."""
        value = self.settings.value(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value) if value is not None else default

    @property
    def strict_objects(self) -> bool:
        """Whether a malformed object record aborts object list decoding."""
        return self._get_bool("objects/strict", False)

    @strict_objects.setter
    def strict_objects(self, value: bool) -> None:
        self.settings.setValue("objects/strict", value)
        self.settings.sync()

    @property
    def skip_whitespace(self) -> bool:
        """Whether whitespace-only text between GMD elements is ignored."""
        return self._get_bool("gmd/skip_whitespace", True)

    @skip_whitespace.setter
    def skip_whitespace(self, value: bool) -> None:
        self.settings.setValue("gmd/skip_whitespace", value)
        self.settings.sync()

    def object_list_options(self) -> Dict[str, Any]:
        """Keyword arguments for ObjectList.decode."""
        return {"strict": self.strict_objects}

    def gmd_options(self) -> Dict[str, Any]:
        """Keyword arguments for gmd_from_bytes."""
        return {"skip_whitespace": self.skip_whitespace}
