"""Request and response models for the plugin endpoints."""

from typing import Any, Dict

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class PluginConfigCreate(BaseModel):
    """Body of ``POST /plugins/create``.

    Only the shape is checked here. Whether ``type`` names a known plugin and
    whether ``config`` is acceptable is decided by the supervisor.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: str = Field(
        default="",
        validation_alias=AliasChoices("type", "name"),
        description="Plugin type to instantiate, e.g. 'cpu'",
    )
    config: Dict[str, Any] = Field(default_factory=dict, description="Plugin settings")


class PluginCreated(BaseModel):
    """Reply of ``POST /plugins/create``."""

    id: str


class PluginStatusReply(BaseModel):
    """Reply of ``GET /plugins/{id}/status``."""

    status: str
