"""Type definitions for the commiter tool."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Scope(Enum):
    """Which pending changes to diff."""
    STAGED_ONLY = "staged"
    FULL_WORKING_TREE = "working-tree"


class ActionKind(Enum):
    """Terminal action a session can perform."""
    BIG_COMMIT = "Big Commit"
    SHORT_COMMIT = "Short Concise Commit"
    STASH = "Stash with Message"

    @property
    def scope(self) -> Scope:
        """Diff scope this action works on."""
        if self is ActionKind.STASH:
            return Scope.FULL_WORKING_TREE
        return Scope.STAGED_ONLY

    @property
    def is_commit(self) -> bool:
        return self is not ActionKind.STASH


@dataclass(frozen=True)
class ChangeSet:
    """Raw diff text of pending changes."""
    scope: Scope
    text: str

    @property
    def line_count(self) -> int:
        return self.text.count('\n')


@dataclass(frozen=True)
class GenerationRequest:
    """A single completion request, derived and never stored."""
    template: str
    change_text: str
    model_id: str

    @property
    def content(self) -> str:
        """User message content: the template immediately followed by the diff."""
        return self.template + self.change_text

    def to_payload(self) -> dict:
        """Request body for a chat completions endpoint."""
        return {
            "model": self.model_id,
            "messages": [{"role": "user", "content": self.content}],
        }


class CommiterError(Exception):
    """Base exception for commiter operations."""
    pass


class NothingPendingError(CommiterError):
    """Raised when there are no changes to process."""

    def __init__(self, scope: Scope):
        self.scope = scope
        if scope is Scope.STAGED_ONLY:
            message = "No staged changes"
        else:
            message = "No changes to stash"
        super().__init__(message)


class GenerationError(CommiterError):
    """Base class for completion service failures."""
    pass


class TransportError(GenerationError):
    """Raised when the completion service cannot be reached."""
    pass


class ServiceError(GenerationError):
    """Raised when the completion service answers with a non-success status."""

    def __init__(self, body: str, status_code: Optional[int] = None):
        self.body = body
        self.status_code = status_code
        super().__init__(f"API error: {body}")


class EmptyResponseError(GenerationError):
    """Raised when the completion service returns no choices."""

    def __init__(self, message: str = "No response from API"):
        super().__init__(message)


class InvalidResponseError(GenerationError):
    """Raised when the response body cannot be parsed."""
    pass


class ToolFailureError(CommiterError):
    """Raised when a git invocation exits non-zero."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class ConfigError(CommiterError):
    """Raised when the settings directory cannot be resolved or written."""
    pass


class MissingCredentialError(ConfigError):
    """Raised when no API key has been stored."""
    pass


@dataclass
class Generation:
    """Outcome of one generation attempt: a message or the failure that replaced it."""
    action: ActionKind
    message: str
    error: Optional[CommiterError] = None

    @classmethod
    def failed(cls, action: ActionKind, error: CommiterError) -> 'Generation':
        return cls(action=action, message=str(error), error=error)

    @property
    def ok(self) -> bool:
        return self.error is None
