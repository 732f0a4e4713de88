"""Global constants for the plugin control-plane API."""

import os
from pathlib import Path

# Listening address
CONFIG_API_HOST = os.getenv("CONFIG_API_HOST", "127.0.0.1")
CONFIG_API_PORT = int(os.getenv("CONFIG_API_PORT", "7070"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Graceful shutdown deadline (seconds), not configurable
SHUTDOWN_TIMEOUT = 10

# Directory paths
PROJECT_ROOT = Path(__file__).resolve().parent.parent
PLUGINS_DIR = PROJECT_ROOT / "plugins"
BUNDLED_PLUGINS_DIR = PLUGINS_DIR / "bundled"      # shipped plugin type manifests
INSTALLED_PLUGINS_DIR = PLUGINS_DIR / "installed"  # operator-provided manifests


def extra_plugin_paths() -> list[Path]:
    """Parse extra manifest directories from the PLUGIN_PATHS env var."""
    raw = os.getenv("PLUGIN_PATHS", "")
    return [Path(p.strip()) for p in raw.split(":") if p.strip()]
