"""
Commiter

Generates commit and stash messages for pending git changes with a remote
language model, and lets you review them before anything is recorded.
"""

__version__ = "1.0.0"

from .core.config import Settings, SettingsStore, load_settings, save_settings
from .core.types import ActionKind, ChangeSet, Generation, Scope
from .git.operations import GitOperations
from .ai.interface import CompletionClient
from .ai.openrouter import OpenRouterClient
from .ai.mock import MockCompletionClient
from .tool import ActionExecutor, CommiterTool
from .session import Session, SessionState

__all__ = [
    "Settings",
    "SettingsStore",
    "load_settings",
    "save_settings",
    "ActionKind",
    "ChangeSet",
    "Generation",
    "Scope",
    "GitOperations",
    "CompletionClient",
    "OpenRouterClient",
    "MockCompletionClient",
    "ActionExecutor",
    "CommiterTool",
    "Session",
    "SessionState"
]
