"""Completion clients for generating messages."""

from .interface import CompletionClient
from .openrouter import OpenRouterClient
from .mock import MockCompletionClient

__all__ = ["CompletionClient", "OpenRouterClient", "MockCompletionClient"]
