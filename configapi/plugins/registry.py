"""In-memory plugin supervisor - tracks plugin types and running instances."""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from configapi.errors import bad_request, not_found
from configapi.identifiers import new_plugin_id
from configapi.models.requests import PluginConfigCreate
from configapi.plugins.manifest import PluginTypeInfo
from configapi.plugins.supervisor import PluginStatus

logger = logging.getLogger(__name__)


@dataclass
class RunningPluginInfo:
    """A plugin instance created through the API."""

    id: str
    name: str
    kind: str
    config: Dict[str, Any] = field(default_factory=dict)
    tag: str = ""
    status: PluginStatus = PluginStatus.CREATED
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        """Serialize the instance for API responses."""
        return {
            "id": self.id,
            "name": self.name,
            "kind": self.kind,
            "config": self.config,
            "tag": self.tag,
            "status": self.status.value,
            "created_at": self.created_at.isoformat(),
        }


class PluginRegistry:
    """Central registry for plugin types and the instances created from them.

    Implements :class:`~configapi.plugins.supervisor.PluginSupervisor`. All
    methods may be called concurrently from request worker threads.
    """

    def __init__(self, plugin_types: Optional[Iterable[PluginTypeInfo]] = None):
        self._types: Dict[str, PluginTypeInfo] = {}
        self._running: Dict[str, RunningPluginInfo] = {}
        self._lock = threading.Lock()
        for info in plugin_types or ():
            self.register_type(info)

    def register_type(self, info: PluginTypeInfo) -> None:
        """Register a plugin type."""
        with self._lock:
            if info.name in self._types:
                logger.warning(f"Plugin type '{info.name}' already registered, overwriting")
            self._types[info.name] = info
        logger.info(f"Registered plugin type: {info.name} ({info.kind})")

    def create_plugin(self, config: PluginConfigCreate, tag: str) -> str:
        if not config.type:
            raise bad_request("plugin type is required")

        with self._lock:
            info = self._types.get(config.type)
            if info is None:
                raise bad_request(f"unknown plugin type '{config.type}'")

            missing = [name for name in info.required_fields() if name not in config.config]
            if missing:
                raise bad_request(f"plugin '{config.type}' missing required settings: {', '.join(missing)}")

            plugin_id = new_plugin_id()
            instance = RunningPluginInfo(
                id=plugin_id,
                name=info.name,
                kind=info.kind,
                config=info.apply_defaults(config.config),
                tag=tag,
            )
            self._running[plugin_id] = instance
            instance.status = PluginStatus.RUNNING

        logger.info(f"Created plugin {info.name} with id {plugin_id}")
        return plugin_id

    def delete_plugin(self, plugin_id: str) -> None:
        with self._lock:
            instance = self._running.pop(plugin_id, None)
            if instance is None:
                raise not_found(f"plugin {plugin_id} is not running")
            instance.status = PluginStatus.DEAD
        logger.info(f"Deleted plugin {instance.name} with id {plugin_id}")

    def get_plugin_status(self, plugin_id: str) -> PluginStatus:
        with self._lock:
            instance = self._running.get(plugin_id)
        if instance is None:
            return PluginStatus.UNKNOWN
        return instance.status

    def list_plugin_types(self) -> List[dict]:
        with self._lock:
            types = list(self._types.values())
        return [info.model_dump() for info in sorted(types, key=lambda t: t.name)]

    def list_running_plugins(self) -> List[dict]:
        with self._lock:
            running = list(self._running.values())
        return [p.to_dict() for p in running]

    def get(self, plugin_id: str) -> Optional[RunningPluginInfo]:
        """Get a running plugin by ID."""
        with self._lock:
            return self._running.get(plugin_id)

    def count(self) -> int:
        """Get total number of running plugins."""
        with self._lock:
            return len(self._running)
