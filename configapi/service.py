"""Control-plane HTTP service - owns the listening server and its lifecycle."""
from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Optional

import uvicorn
from fastapi import FastAPI

from configapi import __version__
from configapi.constants import CONFIG_API_HOST, CONFIG_API_PORT, SHUTDOWN_TIMEOUT
from configapi.plugins.supervisor import PluginSupervisor
from configapi.routers.plugins import create_router

# Slack for uvicorn to notice should_exit and finish draining
SHUTDOWN_GRACE = 1.0


class ServiceState(str, Enum):
    """Listening server states."""

    CREATED = "created"
    RUNNING = "running"
    STOPPED = "stopped"


class ConfigAPIService:
    """HTTP facade over a :class:`PluginSupervisor`.

    The service is started and stopped independently of the requests it
    serves::

        service = ConfigAPIService(registry, port=7070)
        service.start()   # returns immediately
        ...
        service.stop()    # waits for in-flight requests, at most 10 seconds

    Starting twice or stopping a service that is not running is a caller
    error; it is logged and otherwise ignored.
    """

    def __init__(
        self,
        supervisor: PluginSupervisor,
        host: str = CONFIG_API_HOST,
        port: int = CONFIG_API_PORT,
        log: Optional[logging.Logger] = None,
        shutdown_timeout: float = SHUTDOWN_TIMEOUT,
    ):
        self.supervisor = supervisor
        self.host = host
        self.port = port
        self.log = log or logging.getLogger("configapi")
        self.shutdown_timeout = shutdown_timeout
        self.state = ServiceState.CREATED

        self.app = FastAPI(
            title="Plugin Config API",
            description="Inspect and manage the plugins running in this process",
            version=__version__,
            docs_url=None,
            redoc_url=None,
            openapi_url=None,
        )
        self.app.include_router(create_router(supervisor, self.log))

        config = uvicorn.Config(
            self.app,
            host=host,
            port=port,
            lifespan="off",
            log_config=None,
            timeout_graceful_shutdown=shutdown_timeout,
        )
        self._server = uvicorn.Server(config)
        self._thread: Optional[threading.Thread] = None

    @property
    def serving(self) -> bool:
        """True once the socket is bound and accepting connections."""
        return self.state is ServiceState.RUNNING and self._server.started

    def start(self) -> None:
        """Start serving in the background and return immediately."""
        if self.state is not ServiceState.CREATED:
            self.log.error(f"[configapi] cannot start: service is {self.state.value}")
            return

        self._thread = threading.Thread(target=self._server.run, name="configapi-server", daemon=True)
        self._thread.start()
        self.state = ServiceState.RUNNING
        self.log.info(f"[configapi] listening on http://{self.host}:{self.port}")

    def stop(self) -> None:
        """Stop accepting connections and wait for in-flight requests.

        In-flight requests get ``shutdown_timeout`` seconds. The call returns
        shortly after that even if the server has not finished.
        """
        if self.state is not ServiceState.RUNNING:
            self.log.error(f"[configapi] cannot stop: service is {self.state.value}")
            return

        self.state = ServiceState.STOPPED
        self._server.should_exit = True
        self._thread.join(timeout=self.shutdown_timeout + SHUTDOWN_GRACE)
        if self._thread.is_alive():
            self.log.warning(
                f"[configapi] error on shutdown: server still running after {self.shutdown_timeout}s"
            )
            return
        self.log.info("[configapi] stopped")
