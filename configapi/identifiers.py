"""Plugin identifier addressing.

Identifiers are lowercase hex strings produced by the supervisor. The HTTP
layer only checks their shape and passes them through verbatim.
"""

import re
import uuid

from starlette.convertors import Convertor, register_url_convertor

from configapi.errors import bad_request

PLUGIN_ID_PATTERN = "[0-9a-f]+"

_PLUGIN_ID_RE = re.compile(f"^{PLUGIN_ID_PATTERN}$")


class PluginIDConvertor(Convertor):
    """Path convertor that only matches lowercase hex segments.

    Registered as ``hex`` so routes can be declared as ``/plugins/{plugin_id:hex}``;
    any other segment shape makes the route not match at all.
    """

    regex = PLUGIN_ID_PATTERN

    def convert(self, value: str) -> str:
        return value

    def to_string(self, value: str) -> str:
        return str(value)


register_url_convertor("hex", PluginIDConvertor())


def is_valid_plugin_id(value) -> bool:
    """Check whether ``value`` is a non-empty lowercase hex string."""
    return isinstance(value, str) and bool(_PLUGIN_ID_RE.match(value))


def validate_plugin_id(value) -> str:
    """Return ``value`` unchanged, or raise a BadRequest error."""
    if not value:
        raise bad_request("missing plugin id")
    if not is_valid_plugin_id(value):
        raise bad_request(f"malformed plugin id {value!r}")
    return value


def new_plugin_id() -> str:
    """Generate a fresh identifier (supervisor side only)."""
    return uuid.uuid4().hex
