"""Config package exporting loader helpers."""

from .loader import DEFAULT_API_ORIGIN, ImageSettings, Settings, load_settings

__all__ = ["ImageSettings", "Settings", "load_settings", "DEFAULT_API_ORIGIN"]
