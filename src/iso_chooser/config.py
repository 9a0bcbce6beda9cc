"""
Configuration management for iso-chooser-menu.
"""

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Self, cast

from .constants import (
    CONFIG_ENV_VAR,
    CONFIG_FILE_NAME,
    DEFAULT_CAPTION,
    DEFAULT_MIRROR_URL,
    SYSTEM_CONFIG_PATH,
)
from .styles import COLOR_MODES

# Set up logging
logger = logging.getLogger(__name__)


@dataclass(slots=True, kw_only=True)
class SettingsConfig:
    """Global settings configuration."""

    architecture: Optional[str] = None
    mirror_url: str = DEFAULT_MIRROR_URL
    caption: str = DEFAULT_CAPTION
    color_mode: str = "auto"
    debug_mode: bool = False
    syslog: bool = True

    def __post_init__(self):
        """Validate settings configuration."""
        if self.architecture is not None and not self.architecture.strip():
            raise ValueError("architecture must not be empty")
        if not self.caption.strip():
            raise ValueError("caption must not be empty")
        if "://" not in self.mirror_url:
            raise ValueError(
                f"mirror_url must be an absolute URL, got '{self.mirror_url}'"
            )
        if self.color_mode not in COLOR_MODES:
            raise ValueError(
                f"color_mode must be one of {sorted(COLOR_MODES)}, "
                f"got '{self.color_mode}'"
            )


@dataclass(slots=True, kw_only=True)
class ChooserConfig:
    """Main configuration class."""

    settings: SettingsConfig = field(default_factory=lambda: SettingsConfig())

    @classmethod
    def get_default(cls) -> Self:
        """Get default configuration."""
        return cls()


class ConfigManager:
    """Manages configuration loading."""

    def __init__(self):
        self._config: Optional[ChooserConfig] = None
        self._config_path: Optional[Path] = None

    def candidate_paths(self) -> List[Path]:
        """Configuration files to try, most specific first."""
        explicit = os.environ.get(CONFIG_ENV_VAR)
        if explicit:
            return [Path(explicit)]

        xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
        if xdg_config_home:
            user_file = Path(xdg_config_home) / CONFIG_FILE_NAME
        else:
            user_file = Path.home() / ".config" / CONFIG_FILE_NAME
        return [user_file, Path(SYSTEM_CONFIG_PATH)]

    def get_config_path(self) -> Optional[Path]:
        """Get the first existing configuration file, if any."""
        if self._config_path is None:
            self._config_path = next(
                (path for path in self.candidate_paths() if path.is_file()), None
            )
        return self._config_path

    def load_config(self) -> ChooserConfig:
        """Load configuration from file, falling back to defaults."""
        if self._config is not None:
            return self._config

        config_path = self.get_config_path()
        if config_path is None:
            self._config = ChooserConfig.get_default()
            return self._config

        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
            self._config = self._parse_config(data)
        except tomllib.TOMLDecodeError as e:
            logger.error(f"Error parsing TOML config file {config_path}: {e}")
            logger.info("Using default configuration instead.")
            self._config = ChooserConfig.get_default()
        except (OSError, ValueError) as e:
            logger.error(f"Error reading config file {config_path}: {e}")
            logger.info("Using default configuration instead.")
            self._config = ChooserConfig.get_default()
        return self._config

    def _parse_config(self, data: Dict[str, Any]) -> ChooserConfig:
        """Parse configuration data from TOML."""
        config = ChooserConfig()
        if not isinstance(data.get("settings"), dict):
            return config

        settings_data = cast(Dict[str, Any], data["settings"])
        defaults = config.settings

        architecture_raw = settings_data.get("architecture")
        architecture: Optional[str] = (
            architecture_raw if isinstance(architecture_raw, str) else None
        )

        mirror_url_raw = settings_data.get("mirror_url", defaults.mirror_url)
        mirror_url: str = (
            mirror_url_raw if isinstance(mirror_url_raw, str) else defaults.mirror_url
        )

        caption_raw = settings_data.get("caption", defaults.caption)
        caption: str = caption_raw if isinstance(caption_raw, str) else defaults.caption

        color_mode_raw = settings_data.get("color_mode", defaults.color_mode)
        color_mode: str = (
            color_mode_raw if isinstance(color_mode_raw, str) else defaults.color_mode
        )

        debug_mode_raw = settings_data.get("debug_mode", False)
        debug_mode: bool = debug_mode_raw if isinstance(debug_mode_raw, bool) else False

        syslog_raw = settings_data.get("syslog", True)
        syslog: bool = syslog_raw if isinstance(syslog_raw, bool) else True

        config.settings = SettingsConfig(
            architecture=architecture,
            mirror_url=mirror_url,
            caption=caption,
            color_mode=color_mode,
            debug_mode=debug_mode,
            syslog=syslog,
        )
        return config


# Global config manager instance
_config_manager = ConfigManager()


def get_config() -> ChooserConfig:
    """Get the current configuration."""
    return _config_manager.load_config()
