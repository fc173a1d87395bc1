"""Client configuration loader with YAML profile support."""

from __future__ import annotations

import copy
import os
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

try:  # PyYAML is declared as a dependency but we fall back gracefully if missing.
    import yaml
except ImportError:  # pragma: no cover - exercised only when dependency missing.
    yaml = None  # type: ignore[assignment]

DEFAULT_ENVIRONMENT = "dev"
DEFAULT_API_ORIGIN = "https://api.pastee-app.com"
DEFAULT_IMAGE_SETTINGS: dict[str, Any] = {
    "max_local_path_length": 260,
    "fetch_timeout_seconds": 10.0,
    "preview_chars": 50,
}
DEFAULT_PROFILE_DICT: dict[str, Any] = {
    "environment": DEFAULT_ENVIRONMENT,
    "api": {"origin": DEFAULT_API_ORIGIN},
    "images": dict(DEFAULT_IMAGE_SETTINGS),
    "logging": {"level": "INFO"},
}
CONFIG_PROFILE_ENV = "CLIPSYNC_CONFIG_PROFILE"
CONFIG_DIR_ENV = "CLIPSYNC_CONFIG_DIR"
API_ORIGIN_ENV = "CLIPSYNC_API_ORIGIN"
DEFAULT_PROFILE = "dev"
DEFAULT_CONFIG_ROOT = Path(__file__).resolve().parents[3] / "config" / "profiles"
CONFIG_EXTENSIONS = (".yaml", ".yml")


@dataclass(frozen=True)
class ImageSettings:
    max_local_path_length: int = 260
    fetch_timeout_seconds: float = 10.0
    preview_chars: int = 50


@dataclass
class Settings:
    environment: str = DEFAULT_ENVIRONMENT
    api_origin: str = DEFAULT_API_ORIGIN
    images: ImageSettings = field(default_factory=ImageSettings)
    logging: dict[str, Any] = field(default_factory=dict)
    raw: dict[str, Any] = field(default_factory=dict)


def load_settings(
    profile: str | None = None, config_dir: str | Path | None = None
) -> Settings:
    """Load client settings from the requested profile or fall back to defaults."""

    profile_name = profile or os.getenv(CONFIG_PROFILE_ENV, DEFAULT_PROFILE)
    config_root = Path(
        config_dir or os.getenv(CONFIG_DIR_ENV, DEFAULT_CONFIG_ROOT)
    ).expanduser()
    config_data = _load_profile_dict(profile_name, config_root)
    if not config_data:
        config_data = copy.deepcopy(DEFAULT_PROFILE_DICT)

    api_cfg = config_data.get("api") or {}
    api_origin = os.getenv(API_ORIGIN_ENV) or str(
        api_cfg.get("origin", DEFAULT_API_ORIGIN)
    )

    return Settings(
        environment=str(config_data.get("environment", DEFAULT_ENVIRONMENT)),
        api_origin=api_origin.rstrip("/"),
        images=_build_image_settings(config_data.get("images")),
        logging=dict(config_data.get("logging") or {}),
        raw=config_data,
    )


def _load_profile_dict(profile_name: str, config_root: Path) -> dict[str, Any]:
    """Load the YAML profile if available, otherwise return an empty dict."""

    if not config_root.exists():
        return {}

    for extension in CONFIG_EXTENSIONS:
        candidate = config_root / f"{profile_name}{extension}"
        if not candidate.exists():
            continue
        if yaml is None:
            warnings.warn(
                "PyYAML is not installed; falling back to built-in defaults for settings.",
                RuntimeWarning,
            )
            return {}
        try:
            with candidate.open("r", encoding="utf-8") as handle:
                loaded = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:  # type: ignore[attr-defined]
            raise RuntimeError(
                f"Failed to parse config profile {candidate}: {exc}"
            ) from exc
        if not isinstance(loaded, dict):
            raise RuntimeError(
                f"Config profile {candidate} must be a mapping at the root"
            )
        return loaded

    return {}


def _build_image_settings(images_cfg: dict[str, Any] | None) -> ImageSettings:
    images_cfg = images_cfg or {}
    return ImageSettings(
        max_local_path_length=int(
            images_cfg.get(
                "max_local_path_length",
                DEFAULT_IMAGE_SETTINGS["max_local_path_length"],
            )
        ),
        fetch_timeout_seconds=float(
            images_cfg.get(
                "fetch_timeout_seconds",
                DEFAULT_IMAGE_SETTINGS["fetch_timeout_seconds"],
            )
        ),
        preview_chars=int(
            images_cfg.get("preview_chars", DEFAULT_IMAGE_SETTINGS["preview_chars"])
        ),
    )
