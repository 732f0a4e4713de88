"""Request and response models."""

from .requests import PluginConfigCreate, PluginCreated, PluginStatusReply

__all__ = ["PluginConfigCreate", "PluginCreated", "PluginStatusReply"]
