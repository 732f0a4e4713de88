"""Plugin type manifest - describes a plugin type and its settings."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class FieldConfig(BaseModel):
    """One configurable setting of a plugin type."""

    type: str = Field(default="string", description="Value type: string | int | float | bool | duration | list | map")
    default: Optional[Any] = Field(default=None, description="Value used when the setting is omitted")
    required: bool = Field(default=False, description="Whether creation must provide this setting")
    comment: str = Field(default="", description="Human-readable help text")


class PluginTypeInfo(BaseModel):
    """Plugin type manifest loaded from plugin.json."""

    name: str = Field(..., description="Plugin type name, e.g. 'cpu'")
    kind: str = Field(..., pattern="^(input|output|processor|aggregator)$", description="Plugin kind")
    description: str = Field(default="", description="Plugin description")
    config: Dict[str, FieldConfig] = Field(default_factory=dict, description="Settings by name")

    def required_fields(self) -> list[str]:
        return [name for name, field in self.config.items() if field.required]

    def apply_defaults(self, settings: Dict[str, Any]) -> Dict[str, Any]:
        """Return ``settings`` with defaults filled in for omitted fields."""
        merged = {
            name: field.default
            for name, field in self.config.items()
            if field.default is not None
        }
        merged.update(settings)
        return merged
