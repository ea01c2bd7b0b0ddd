"""Logging setup and JSON export helpers."""

from .logging_config import setup_logging
from .export import gmd_to_json, object_list_to_json

__all__ = ["setup_logging", "gmd_to_json", "object_list_to_json"]
