"""Selector executable lookup.

Resolution order:
1. ``config.rofi`` from the configuration file, when set
2. ``rofi`` on the process PATH

Security: Uses shutil.which (no subprocess)
"""

import logging
import shutil

from rofi_menu.config_manager import ConfigError, ConfigManager

logger = logging.getLogger(__name__)


class ExecutableNotFoundError(Exception):
    """Raised when no selector executable can be located."""

    pass


class ExecutableLocator:
    """Locate the rofi executable."""

    EXECUTABLE_NAME = "rofi"

    @classmethod
    def from_config(cls, config_path: str | None = None) -> str | None:
        """Return the configured executable override, if any.

        Raises:
            ConfigError: If the configuration file is malformed
        """
        config = ConfigManager.load_config(config_path)
        if config.rofi_path:
            logger.debug(f"Using {cls.EXECUTABLE_NAME} from config: {config.rofi_path}")
        return config.rofi_path

    @classmethod
    def from_path(cls) -> str | None:
        """Search PATH for the executable."""
        result = shutil.which(cls.EXECUTABLE_NAME)
        if result:
            logger.debug(f"Found {cls.EXECUTABLE_NAME} at {result}")
        else:
            logger.debug(f"{cls.EXECUTABLE_NAME} not found on PATH")
        return result

    @classmethod
    def locate(cls, config_path: str | None = None) -> str:
        """Resolve the executable path.

        Args:
            config_path: Custom config file path (optional)

        Returns:
            Path of the executable

        Raises:
            ConfigError: If the configuration file is malformed
            ExecutableNotFoundError: If neither config nor PATH provides it
        """
        path = cls.from_config(config_path) or cls.from_path()
        if not path:
            config_file = ConfigManager.get_config_path(config_path)
            raise ExecutableNotFoundError(
                f"Could not find '{cls.EXECUTABLE_NAME}'. Install it or set "
                f"'config.rofi' in {config_file}"
            )
        return path


__all__ = ["ConfigError", "ExecutableLocator", "ExecutableNotFoundError"]
