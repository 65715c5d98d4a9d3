"""Git integration for the commiter tool."""

from .operations import GitOperations

__all__ = ["GitOperations"]
