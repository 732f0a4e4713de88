"""Control-plane HTTP API for the plugins running inside a host process."""

__version__ = "0.1.0"

__all__ = [
    "ConfigAPIService",
    "ServiceState",
    "ClassifiedError",
    "ErrorKind",
]


def __getattr__(name):
    if name in ("ConfigAPIService", "ServiceState"):
        from configapi import service
        return getattr(service, name)
    if name in ("ClassifiedError", "ErrorKind"):
        from configapi import errors
        return getattr(errors, name)
    raise AttributeError(f"module 'configapi' has no attribute {name!r}")
