"""Response classes that report failed writes instead of raising.

Once the status line is on the wire nothing can be sent to the client, so a
broken connection while writing is only logged.
"""

import json
import logging
from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import PlainTextResponse, Response

from configapi.errors import internal


class _LoggedWrite:
    log: logging.Logger

    async def __call__(self, scope, receive, send) -> None:
        try:
            await super().__call__(scope, receive, send)
        except OSError as e:
            self.log.warning(f"error writing to connection: {e}")


class TextResponse(_LoggedWrite, PlainTextResponse):
    def __init__(self, content: str, log: logging.Logger, **kwargs):
        super().__init__(content, **kwargs)
        self.log = log


class JSONBytesResponse(_LoggedWrite, Response):
    """``application/json`` response around an already encoded body."""

    media_type = "application/json"

    def __init__(self, content: bytes, log: logging.Logger, **kwargs):
        super().__init__(content, **kwargs)
        self.log = log


def encode_json(value: Any) -> bytes:
    """Serialize ``value`` to JSON, raising an internal error on failure."""
    try:
        return json.dumps(jsonable_encoder(value), ensure_ascii=False, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise internal("marshal failed", e)
