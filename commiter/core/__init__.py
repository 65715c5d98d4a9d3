"""Core functionality for the commiter tool."""

from .config import Settings, SettingsStore, get_config_dir, load_settings, save_settings
from .types import (
    Scope, ActionKind, ChangeSet, GenerationRequest, Generation,
    CommiterError, NothingPendingError, GenerationError, TransportError,
    ServiceError, EmptyResponseError, InvalidResponseError, ToolFailureError,
    ConfigError, MissingCredentialError
)

__all__ = [
    "Settings", "SettingsStore", "get_config_dir", "load_settings", "save_settings",
    "Scope", "ActionKind", "ChangeSet", "GenerationRequest", "Generation",
    "CommiterError", "NothingPendingError", "GenerationError", "TransportError",
    "ServiceError", "EmptyResponseError", "InvalidResponseError", "ToolFailureError",
    "ConfigError", "MissingCredentialError"
]
