"""Pydantic models for sources, registry actions, and settings."""

from newsbrief.models.actions import (
    AddSource,
    RemoveSource,
    SetActiveSource,
    SourceAction,
    ToggleSource,
    parse_action,
)
from newsbrief.models.config import ModelProvider, Settings, load_settings, save_settings
from newsbrief.models.sources import Source, SourcesFile

__all__ = [
    "Source",
    "SourcesFile",
    "SourceAction",
    "AddSource",
    "RemoveSource",
    "ToggleSource",
    "SetActiveSource",
    "parse_action",
    "ModelProvider",
    "Settings",
    "load_settings",
    "save_settings",
]
