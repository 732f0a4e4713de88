"""Shared fixtures for the control-plane tests."""

import logging
import socket
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from configapi.plugins.supervisor import PluginSupervisor
from configapi.service import ConfigAPIService


@pytest.fixture
def supervisor():
    """Supervisor double; every operation is a MagicMock."""
    return MagicMock(spec=PluginSupervisor)


@pytest.fixture
def log():
    """Logging sink injected into the service."""
    return MagicMock(spec=logging.Logger)


@pytest.fixture
def client(supervisor, log):
    service = ConfigAPIService(supervisor, log=log)
    return TestClient(service.app)


@pytest.fixture
def free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]
