"""Configuration management module.

This module handles the optional per-user configuration file in TOML format.
The only recognized setting is the rofi executable override:

    [config]
    rofi = "/usr/local/bin/rofi"

Security:
- Written config files get 0600 permissions (owner read/write only)
- Loading never changes permissions, it only warns about loose ones
- Atomic writes through a temporary file
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli
import tomlkit

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when configuration operations fail."""

    pass


@dataclass
class RofiMenuConfig:
    """rofi-menu configuration data."""

    rofi_path: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the nested TOML layout, excluding unset values."""
        if not self.rofi_path:
            return {}
        return {"config": {"rofi": self.rofi_path}}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RofiMenuConfig":
        """Create from a parsed TOML document.

        Raises:
            ConfigError: If config.rofi is present but not a string
        """
        section = data.get("config", {})
        if not isinstance(section, dict):
            raise ConfigError("'config' must be a table")

        rofi_path = section.get("rofi")
        if rofi_path is not None and not isinstance(rofi_path, str):
            raise ConfigError(f"'config.rofi' must be a string, got {type(rofi_path).__name__}")

        return cls(rofi_path=rofi_path or None)


class ConfigManager:
    """Manage the rofi-menu configuration file.

    Configuration is stored at ~/.rofi_menu/config.toml.
    """

    DEFAULT_CONFIG_DIR = Path.home() / ".rofi_menu"
    DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"

    @classmethod
    def get_config_path(cls, custom_path: str | None = None) -> Path:
        """Get configuration file path.

        Args:
            custom_path: Custom config file path (optional)

        Returns:
            Path to config file
        """
        if custom_path:
            return Path(custom_path).expanduser().resolve()
        return cls.DEFAULT_CONFIG_FILE

    @classmethod
    def load_config(cls, custom_path: str | None = None) -> RofiMenuConfig:
        """Load configuration from file.

        A missing or unreadable file yields the default configuration.

        Args:
            custom_path: Custom config file path (optional)

        Returns:
            RofiMenuConfig object

        Raises:
            ConfigError: If the file exists but is not valid TOML
        """
        config_path = cls.get_config_path(custom_path)

        if not config_path.is_file():
            logger.debug(f"Config file not found at {config_path}, using defaults")
            return RofiMenuConfig()

        try:
            with open(config_path, "rb") as f:
                data = tomli.load(f)
        except OSError as e:
            logger.debug(f"Config file not readable, using defaults: {e}")
            return RofiMenuConfig()
        except (tomli.TOMLDecodeError, UnicodeDecodeError) as e:
            raise ConfigError(f"Malformed config file {config_path}: {e}") from e

        cls._check_permissions(config_path)

        logger.debug(f"Loaded config from: {config_path}")
        return RofiMenuConfig.from_dict(data)

    @classmethod
    def save_config(cls, config: RofiMenuConfig, custom_path: str | None = None) -> Path:
        """Save configuration to file.

        Existing keys and comments in the file are preserved.

        Args:
            config: Configuration to save
            custom_path: Custom config file path (optional)

        Returns:
            Path the configuration was written to

        Raises:
            ConfigError: If saving fails
        """
        config_path = cls.get_config_path(custom_path)
        temp_path = config_path.with_suffix(".tmp")

        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)

            if config_path.exists():
                with open(config_path) as f:
                    doc = tomlkit.load(f)
            else:
                doc = tomlkit.document()

            for key, value in config.to_dict().items():
                if key in doc and isinstance(value, dict):
                    for sub_key, sub_value in value.items():
                        doc[key][sub_key] = sub_value
                else:
                    doc[key] = value

            with open(temp_path, "w") as f:
                tomlkit.dump(doc, f)

            os.chmod(temp_path, 0o600)
            temp_path.replace(config_path)

            logger.debug(f"Saved config to: {config_path}")
            return config_path

        except Exception as e:
            if temp_path.exists():
                temp_path.unlink()
            raise ConfigError(f"Failed to save config: {e}") from e

    @classmethod
    def set_rofi_path(cls, rofi_path: str, custom_path: str | None = None) -> Path:
        """Store the rofi executable override.

        Raises:
            ConfigError: If the path is empty or saving fails
        """
        if not rofi_path.strip():
            raise ConfigError("rofi path cannot be empty")
        return cls.save_config(RofiMenuConfig(rofi_path=rofi_path), custom_path)

    @classmethod
    def _check_permissions(cls, config_path: Path) -> None:
        mode = config_path.stat().st_mode & 0o777
        if mode & 0o077:
            logger.warning(
                f"Config file {config_path} is accessible by other users ({oct(mode)}). "
                f"Consider: chmod 600 {config_path}"
            )


__all__ = ["ConfigError", "ConfigManager", "RofiMenuConfig"]
