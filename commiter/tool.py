"""Generate-then-act pipeline shared by the session and the shortcut commands."""

import logging
from typing import Optional, Tuple

import pyperclip

from .core.config import Settings
from .core.types import ActionKind, ChangeSet
from .git.operations import GitOperations
from .ai.interface import CompletionClient

logger = logging.getLogger(__name__)


class ActionExecutor:
    """Performs the single terminal action of a run: commit or stash."""

    def __init__(self, git_ops: GitOperations, use_clipboard: bool = True):
        self.git_ops = git_ops
        self.use_clipboard = use_clipboard

    def _copy_to_clipboard(self, message: str) -> bool:
        """Best-effort clipboard copy. Never raises."""
        if not self.use_clipboard:
            return False
        try:
            pyperclip.copy(message)
            logger.debug("Copied message to clipboard")
            return True
        except pyperclip.PyperclipException as e:
            logger.warning("Error copying to clipboard: %s", e)
            return False

    def commit(self, message: str, style: ActionKind = ActionKind.BIG_COMMIT) -> str:
        """Copy the message to the clipboard, then commit with the trimmed message."""
        logger.debug("Performing %s", style.value)
        self._copy_to_clipboard(message)
        self.git_ops.commit(message)
        return "Committed successfully."

    def stash(self, message: str) -> str:
        """Stash the working tree with the message as its label."""
        self.git_ops.stash(message)
        return f"Stashed with message: {message}"

    def perform(self, action: ActionKind, message: str) -> str:
        if action is ActionKind.STASH:
            return self.stash(message)
        return self.commit(message, style=action)


class CommiterTool:
    """Ties change capture, message generation and the final action together."""

    def __init__(self,
                 git_ops: GitOperations,
                 ai_client: CompletionClient,
                 settings: Settings,
                 executor: Optional[ActionExecutor] = None):
        self.git_ops = git_ops
        self.ai_client = ai_client
        self.settings = settings
        self.executor = executor or ActionExecutor(git_ops)

    def template_for(self, action: ActionKind) -> str:
        """Prompt template used for an action. Stash reuses the simple template."""
        if action is ActionKind.BIG_COMMIT:
            return self.settings.detailed_prompt_template
        return self.settings.simple_prompt_template

    def capture(self, action: ActionKind) -> ChangeSet:
        """Capture the changes the action will operate on."""
        return self.git_ops.capture(action.scope)

    def generate(self, action: ActionKind, change_set: ChangeSet) -> str:
        """Generate a message for the action from an already captured change set."""
        logger.info("Generating message for %s", action.value)
        message = self.ai_client.generate(self.template_for(action), change_set.text)
        if action is ActionKind.STASH:
            message = message.strip()
        return message

    def perform(self, action: ActionKind, message: str) -> str:
        return self.executor.perform(action, message)

    def run_once(self, action: ActionKind) -> Tuple[str, str]:
        """One generate-then-act cycle without review.

        Returns:
            The generated message and the action's result text
        """
        change_set = self.capture(action)
        message = self.generate(action, change_set)
        result = self.perform(action, message)
        return message, result
