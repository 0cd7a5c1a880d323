"""
Shared test fixtures and configuration for rofi-menu tests.

This module provides common fixtures used across all test types:
- Isolated configuration directory (never touches ~/.rofi_menu)
- A fake rofi executable driven by environment variables
"""

import stat
from pathlib import Path

import pytest

from rofi_menu.config_manager import ConfigManager

# ============================================================================
# CONFIG FIXTURES
# ============================================================================


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the default config location into a temporary directory.

    Tests must never read or modify the real ~/.rofi_menu/config.toml.
    """
    config_dir = tmp_path / ".rofi_menu"
    monkeypatch.setattr(ConfigManager, "DEFAULT_CONFIG_DIR", config_dir)
    monkeypatch.setattr(ConfigManager, "DEFAULT_CONFIG_FILE", config_dir / "config.toml")
    return config_dir / "config.toml"


@pytest.fixture
def write_config(isolated_config):
    """Write TOML text to the isolated default config file."""

    def _write(text: str) -> Path:
        isolated_config.parent.mkdir(parents=True, exist_ok=True)
        isolated_config.write_text(text)
        isolated_config.chmod(0o600)
        return isolated_config

    return _write


# ============================================================================
# FAKE SELECTOR
# ============================================================================

FAKE_ROFI_SCRIPT = """#!/bin/sh
here="$(dirname "$0")"
cat > "$here/stdin.txt"
printf '%s\\n' "$@" > "$here/args.txt"
printf '%s' "${FAKE_ROFI_OUTPUT-picked
}"
exit "${FAKE_ROFI_EXIT:-0}"
"""


@pytest.fixture
def fake_rofi(tmp_path):
    """Create a shell script standing in for rofi.

    The script records its stdin to stdin.txt and its arguments (one per
    line) to args.txt, prints $FAKE_ROFI_OUTPUT (default "picked\\n") and
    exits with $FAKE_ROFI_EXIT (default 0).
    """
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    script = bin_dir / "rofi"
    script.write_text(FAKE_ROFI_SCRIPT)
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script
