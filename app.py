"""Standalone plugin control-plane service."""

import logging
import os
import signal
import threading

from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv()

# Configure logging BEFORE importing any modules that use logger
log_level = os.getenv("LOG_LEVEL", "INFO")
logging.basicConfig(
    level=getattr(logging, log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Import after logging is configured
from configapi.constants import (
    BUNDLED_PLUGINS_DIR,
    CONFIG_API_HOST,
    CONFIG_API_PORT,
    INSTALLED_PLUGINS_DIR,
    extra_plugin_paths,
)
from configapi.plugins.discovery import PluginDiscovery
from configapi.plugins.registry import PluginRegistry
from configapi.service import ConfigAPIService


def build_service() -> ConfigAPIService:
    """Discover plugin types and wire the registry into a service."""
    search_paths = [
        (BUNDLED_PLUGINS_DIR, "bundled"),
        (INSTALLED_PLUGINS_DIR, "installed"),
    ]
    search_paths.extend((p, "external") for p in extra_plugin_paths())

    registry = PluginRegistry(PluginDiscovery(search_paths).discover_all())
    return ConfigAPIService(
        registry,
        host=CONFIG_API_HOST,
        port=CONFIG_API_PORT,
        log=logging.getLogger("configapi"),
    )


def main():
    service = build_service()
    done = threading.Event()

    def _on_signal(signum, frame):
        logger.info(f"Received signal {signal.Signals(signum).name}, shutting down")
        done.set()

    signal.signal(signal.SIGINT, _on_signal)
    signal.signal(signal.SIGTERM, _on_signal)

    service.start()
    done.wait()
    service.stop()


if __name__ == "__main__":
    main()
