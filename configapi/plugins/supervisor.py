"""Contract between the HTTP layer and the plugin supervisor."""
from __future__ import annotations

from enum import Enum
from typing import Any, Protocol, runtime_checkable

from configapi.models.requests import PluginConfigCreate


class PluginStatus(str, Enum):
    """Lifecycle status of a plugin instance, rendered by name."""

    UNKNOWN = "Unknown"
    CREATED = "Created"
    STARTING = "Starting"
    RUNNING = "Running"
    STOPPING = "Stopping"
    DEAD = "Dead"

    def __str__(self) -> str:
        return self.value


@runtime_checkable
class PluginSupervisor(Protocol):
    """Owner of the running plugin instances.

    Failures are raised as :class:`~configapi.errors.ClassifiedError`; any
    other exception is treated as an internal error by the API.
    """

    def create_plugin(self, config: PluginConfigCreate, tag: str) -> str: ...

    def delete_plugin(self, plugin_id: str) -> None: ...

    def get_plugin_status(self, plugin_id: str) -> PluginStatus: ...

    def list_plugin_types(self) -> Any: ...

    def list_running_plugins(self) -> Any: ...
