"""Plugin control-plane REST endpoints."""

import logging
from typing import Any, Callable

from fastapi import APIRouter, Request, Response
from fastapi.concurrency import run_in_threadpool

from configapi import identifiers
from configapi.errors import ClassifiedError, bad_request, not_found, render_error
from configapi.models.requests import PluginConfigCreate, PluginCreated, PluginStatusReply
from configapi.plugins.supervisor import PluginStatus, PluginSupervisor
from configapi.responses import JSONBytesResponse, TextResponse, encode_json


def create_router(supervisor: PluginSupervisor, log: logging.Logger) -> APIRouter:
    """Build the route table for ``supervisor``.

    Built once per service. Plugin ids in paths use the ``hex`` convertor, so
    any other shape never reaches a handler and gets the router's own 404.
    """
    router = APIRouter(tags=["plugins"])

    def json_reply(produce: Callable[[], Any]) -> Response:
        try:
            body = encode_json(produce())
        except Exception as e:
            return render_error(e, log)
        return JSONBytesResponse(body, log=log)

    @router.get("/status")
    def status():
        """Liveness probe."""
        return TextResponse("ok", log=log)

    @router.post("/plugins/create")
    async def create_plugin(request: Request):
        """Create a plugin instance from the JSON body."""
        raw = await request.body()
        try:
            cfg = PluginConfigCreate.model_validate_json(raw)
        except ValueError as e:
            return render_error(bad_request("decode failed", e), log)

        try:
            plugin_id = await run_in_threadpool(supervisor.create_plugin, cfg, "")
        except Exception as e:
            return render_error(e, log)

        log.info(f"Created plugin {cfg.type} as {plugin_id}")
        return json_reply(lambda: PluginCreated(id=plugin_id).model_dump())

    @router.get("/plugins/{plugin_id:hex}/status")
    def plugin_status(plugin_id: str):
        """Report the status of one plugin instance."""
        try:
            identifiers.validate_plugin_id(plugin_id)
        except ClassifiedError as e:
            return render_error(e, log)

        try:
            state = supervisor.get_plugin_status(plugin_id)
        except Exception as e:
            return render_error(e, log)

        if state is PluginStatus.UNKNOWN:
            return render_error(not_found(f"plugin {plugin_id} is not running"), log)
        return json_reply(lambda: PluginStatusReply(status=str(state)).model_dump())

    @router.get("/plugins/list")
    def list_plugins():
        """List the plugin types that can be created."""
        return json_reply(supervisor.list_plugin_types)

    @router.get("/plugins/running")
    def running_plugins():
        """List the running plugin instances."""
        return json_reply(supervisor.list_running_plugins)

    @router.delete("/plugins/{plugin_id:hex}")
    def delete_plugin(plugin_id: str):
        """Stop and remove a plugin instance.

        A failed delete is logged and the reply is still 200.
        """
        try:
            identifiers.validate_plugin_id(plugin_id)
        except ClassifiedError as e:
            return render_error(e, log)

        try:
            supervisor.delete_plugin(plugin_id)
        except Exception as e:
            render_error(e, log)
        else:
            log.info(f"Deleted plugin {plugin_id}")
        return Response(status_code=200)

    @router.put("/plugins/{plugin_id:hex}")
    def update_plugin(plugin_id: str):
        """Reserved for in-place updates."""
        return Response(status_code=501)

    return router
