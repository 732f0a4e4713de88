"""Tests for the plugin control-plane endpoints."""

import asyncio
import logging
from unittest.mock import MagicMock

import pytest

from configapi.errors import bad_request, not_found
from configapi.models.requests import PluginConfigCreate
from configapi.plugins.supervisor import PluginStatus
from configapi.responses import TextResponse


class TestStatusEndpoint:
    """GET /status"""

    def test_returns_ok(self, client):
        resp = client.get("/status")
        assert resp.status_code == 200
        assert resp.text == "ok"
        assert resp.headers["content-type"].startswith("text/plain")

    def test_repeated_calls_have_no_side_effects(self, client, supervisor, log):
        for _ in range(3):
            assert client.get("/status").text == "ok"
        assert supervisor.method_calls == []
        log.error.assert_not_called()


class TestCreatePlugin:
    """POST /plugins/create"""

    def test_returns_new_identifier(self, client, supervisor):
        supervisor.create_plugin.return_value = "a1b2c3"

        resp = client.post("/plugins/create", content=b'{"type":"cpu"}')

        assert resp.status_code == 200
        assert resp.text == '{"id": "a1b2c3"}'
        assert resp.headers["content-type"] == "application/json"
        cfg, tag = supervisor.create_plugin.call_args.args
        assert isinstance(cfg, PluginConfigCreate)
        assert cfg.type == "cpu"
        assert cfg.config == {}
        assert tag == ""

    def test_passes_settings_through(self, client, supervisor):
        supervisor.create_plugin.return_value = "ff"

        client.post("/plugins/create", json={"type": "file", "config": {"files": ["stdout"]}})

        cfg, _ = supervisor.create_plugin.call_args.args
        assert cfg.config == {"files": ["stdout"]}

    @pytest.mark.parametrize(
        "body",
        [b"", b"{", b"not json", b'{"type": 5}', b"[1, 2]", b'{"type": "cpu", "config": "x"}'],
    )
    def test_malformed_body_is_bad_request(self, client, supervisor, log, body):
        resp = client.post("/plugins/create", content=body)

        assert resp.status_code == 400
        assert resp.content == b""
        supervisor.create_plugin.assert_not_called()
        log.error.assert_called_once()

    @pytest.mark.parametrize(
        "error, status",
        [
            (bad_request("unknown plugin type 'nope'"), 400),
            (not_found("gone"), 404),
            (RuntimeError("supervisor crashed"), 500),
        ],
    )
    def test_supervisor_errors_are_classified(self, client, supervisor, log, error, status):
        supervisor.create_plugin.side_effect = error

        resp = client.post("/plugins/create", json={"type": "nope"})

        assert resp.status_code == status
        assert resp.content == b""
        log.error.assert_called_once()

    def test_get_is_not_allowed(self, client):
        assert client.get("/plugins/create").status_code == 405


class TestPluginStatus:
    """GET /plugins/{id}/status"""

    def test_reports_status_name(self, client, supervisor):
        supervisor.get_plugin_status.return_value = PluginStatus.RUNNING

        resp = client.get("/plugins/deadbeef/status")

        assert resp.status_code == 200
        assert resp.text == '{"status": "Running"}'
        supervisor.get_plugin_status.assert_called_once_with("deadbeef")

    def test_unknown_plugin_is_not_found(self, client, supervisor, log):
        supervisor.get_plugin_status.return_value = PluginStatus.UNKNOWN

        resp = client.get("/plugins/0123/status")

        assert resp.status_code == 404
        assert resp.content == b""
        log.error.assert_called_once()

    @pytest.mark.parametrize("plugin_id", ["DEADBEEF", "xyz", "a1-b2", "dead_beef"])
    def test_non_hex_identifier_does_not_route(self, client, supervisor, log, plugin_id):
        resp = client.get(f"/plugins/{plugin_id}/status")

        assert resp.status_code == 404
        supervisor.get_plugin_status.assert_not_called()
        log.error.assert_not_called()

    def test_empty_identifier_does_not_route(self, client, supervisor):
        assert client.get("/plugins//status").status_code == 404
        supervisor.get_plugin_status.assert_not_called()


class TestListEndpoints:
    """GET /plugins/list and GET /plugins/running"""

    def test_list_passes_types_through(self, client, supervisor):
        types = [{"name": "cpu", "kind": "input", "config": {"percpu": {"type": "bool"}}}]
        supervisor.list_plugin_types.return_value = types

        resp = client.get("/plugins/list")

        assert resp.status_code == 200
        assert resp.headers["content-type"] == "application/json"
        assert resp.json() == types

    def test_running_passes_instances_through(self, client, supervisor):
        running = [{"id": "ab12", "name": "cpu", "status": "Running"}]
        supervisor.list_running_plugins.return_value = running

        resp = client.get("/plugins/running")

        assert resp.status_code == 200
        assert resp.json() == running

    def test_empty_running_list(self, client, supervisor):
        supervisor.list_running_plugins.return_value = []
        assert client.get("/plugins/running").json() == []

    @pytest.mark.parametrize("path, operation", [
        ("/plugins/list", "list_plugin_types"),
        ("/plugins/running", "list_running_plugins"),
    ])
    @pytest.mark.parametrize("value", [
        {"plugin": object()},
        [{"load": float("nan")}],
        [{"load": float("inf")}],
    ])
    def test_unserializable_value_is_internal_error(self, client, supervisor, log, path, operation, value):
        getattr(supervisor, operation).return_value = value

        resp = client.get(path)

        assert resp.status_code == 500
        assert resp.content == b""
        log.error.assert_called_once()


class TestDeletePlugin:
    """DELETE /plugins/{id}"""

    def test_deletes_plugin(self, client, supervisor, log):
        resp = client.delete("/plugins/deadbeef")

        assert resp.status_code == 200
        supervisor.delete_plugin.assert_called_once_with("deadbeef")
        log.error.assert_not_called()

    def test_failed_delete_still_answers_ok(self, client, supervisor, log):
        supervisor.delete_plugin.side_effect = not_found("plugin 00 is not running")

        resp = client.delete("/plugins/00")

        assert resp.status_code == 200
        log.error.assert_called_once()

    def test_non_hex_identifier_does_not_route(self, client, supervisor):
        assert client.delete("/plugins/NOPE").status_code == 404
        supervisor.delete_plugin.assert_not_called()


class TestUpdatePlugin:
    """PUT /plugins/{id}"""

    @pytest.mark.parametrize("plugin_id", ["deadbeef", "0"])
    def test_always_not_implemented(self, client, supervisor, plugin_id):
        resp = client.put(f"/plugins/{plugin_id}", json={"type": "cpu"})

        assert resp.status_code == 501
        assert supervisor.method_calls == []

    def test_post_to_plugin_is_not_allowed(self, client):
        assert client.post("/plugins/deadbeef").status_code == 405


class TestWriteFailures:
    """Broken connections while writing are only logged."""

    def test_write_error_is_logged_as_warning(self):
        log = MagicMock(spec=logging.Logger)
        response = TextResponse("ok", log=log)

        async def receive():
            return {"type": "http.disconnect"}

        async def send(message):
            raise BrokenPipeError("broken pipe")

        asyncio.run(response({"type": "http"}, receive, send))

        log.warning.assert_called_once()
        assert "broken pipe" in log.warning.call_args.args[0]
        log.error.assert_not_called()
