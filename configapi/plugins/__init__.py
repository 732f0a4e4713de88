"""Plugin supervisor side of the control plane.

Imports are lazy so the HTTP layer can depend on the contract alone.
"""

__all__ = [
    "PluginSupervisor",
    "PluginStatus",
    "PluginTypeInfo",
    "FieldConfig",
    "PluginDiscovery",
    "PluginRegistry",
    "RunningPluginInfo",
]


def __getattr__(name):
    if name in ("PluginSupervisor", "PluginStatus"):
        from configapi.plugins import supervisor
        return getattr(supervisor, name)
    if name in ("PluginTypeInfo", "FieldConfig"):
        from configapi.plugins import manifest
        return getattr(manifest, name)
    if name == "PluginDiscovery":
        from configapi.plugins.discovery import PluginDiscovery
        return PluginDiscovery
    if name in ("PluginRegistry", "RunningPluginInfo"):
        from configapi.plugins import registry
        return getattr(registry, name)
    raise AttributeError(f"module 'configapi.plugins' has no attribute {name!r}")
