"""Builds the plugin type catalog from plugin.json manifests on disk."""

import json
import logging
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from pydantic import ValidationError

from configapi.plugins.manifest import PluginTypeInfo

logger = logging.getLogger(__name__)


class PluginDiscovery:
    """Collects plugin types from ``<dir>/<plugin>/plugin.json`` manifests.

    ``search_paths`` holds ``(directory, source)`` pairs. Earlier directories
    take precedence: a type name already seen is not replaced later.
    """

    MANIFEST_FILE = "plugin.json"

    def __init__(self, search_paths: List[Tuple[Path, str]]):
        self.search_paths = search_paths

    def discover_all(self) -> List[PluginTypeInfo]:
        catalog = {}
        for directory, source in self.search_paths:
            if not directory.is_dir():
                logger.debug(f"Skipping manifest directory {directory}: not found")
                continue

            for info in self._manifests_in(directory, source):
                if info.name in catalog:
                    logger.warning(f"Plugin type '{info.name}' from {directory} shadowed by an earlier definition")
                    continue
                catalog[info.name] = info

        logger.info(f"Plugin catalog holds {len(catalog)} type(s)")
        return list(catalog.values())

    def _manifests_in(self, directory: Path, source: str) -> Iterator[PluginTypeInfo]:
        for manifest_file in sorted(directory.glob(f"*/{self.MANIFEST_FILE}")):
            info = self._read_manifest(manifest_file, source)
            if info is not None:
                yield info

    def _read_manifest(self, manifest_file: Path, source: str) -> Optional[PluginTypeInfo]:
        """Parse one manifest; a broken one is logged and skipped."""
        try:
            data = json.loads(manifest_file.read_text(encoding="utf-8"))
            info = PluginTypeInfo(**data)
        except ValidationError as e:
            logger.error(f"Rejected plugin manifest {manifest_file}: {e}")
            return None
        except Exception as e:
            logger.error(f"Unreadable plugin manifest {manifest_file}: {e}")
            return None

        logger.debug(f"Plugin type {info.name} ({source}) loaded from {manifest_file}")
        return info
