"""Interactive select, review and confirm workflow."""

import logging
from enum import Enum
from typing import Optional

from .core.types import ActionKind, ChangeSet, CommiterError, Generation
from .tool import CommiterTool

logger = logging.getLogger(__name__)


class SessionState(Enum):
    SELECTING = "selecting"
    REVIEWING = "reviewing"
    DONE = "done"
    TERMINATED = "terminated"


QUIT_KEYS = ("q", "ctrl+c")

SELECT_KEYS = {
    "b": ActionKind.BIG_COMMIT,
    "s": ActionKind.SHORT_COMMIT,
    "t": ActionKind.STASH,
}

CONFIRM_KEY = "c"
REDO_KEY = "r"
BACK_KEY = "b"

MENU = """Commiter - Choose an action:

b - Big Commit (detailed message)
s - Short Concise Commit
t - Stash with Message
q - Quit
"""


class Session:
    """State machine driven by one key press at a time.

    Nothing irreversible happens outside ``confirm``, and ``confirm`` only acts
    when the current message came from a successful generation. The change set
    captured when an action is selected is reused by every redo of that
    selection.
    """

    def __init__(self, tool: CommiterTool):
        self.tool = tool
        self.state = SessionState.SELECTING
        self.action: Optional[ActionKind] = None
        self.change_set: Optional[ChangeSet] = None
        self.generation: Optional[Generation] = None
        self.result: Optional[str] = None
        self.action_error: Optional[CommiterError] = None
        self.closed = False

    @property
    def finished(self) -> bool:
        return self.state is SessionState.TERMINATED or self.closed

    @property
    def can_confirm(self) -> bool:
        return (self.state is SessionState.REVIEWING
                and self.generation is not None
                and self.generation.ok)

    @property
    def message(self) -> Optional[str]:
        return self.generation.message if self.generation else None

    def handle_key(self, key: str) -> SessionState:
        """Apply one key press and return the resulting state."""
        if self.state is SessionState.DONE:
            self.closed = True
        elif self.state is SessionState.SELECTING:
            if key in QUIT_KEYS:
                self.quit()
            elif key in SELECT_KEYS:
                self.select(SELECT_KEYS[key])
        elif self.state is SessionState.REVIEWING:
            if key == CONFIRM_KEY:
                self.confirm()
            elif key == REDO_KEY:
                self.redo()
            elif key == BACK_KEY:
                self.back()
            elif key in QUIT_KEYS:
                self.quit()
        return self.state

    def select(self, action: ActionKind) -> None:
        """Capture changes for the action, generate a message and start reviewing."""
        if self.state is not SessionState.SELECTING:
            raise RuntimeError(f"Cannot select an action while {self.state.value}")

        logger.debug("Selected %s", action.value)
        self.action = action
        self.change_set = None
        self.generation = None

        try:
            self.change_set = self.tool.capture(action)
        except CommiterError as e:
            logger.info("Could not capture changes: %s", e)
            self.generation = Generation.failed(action, e)
        else:
            self.generation = self._generate()

        self.state = SessionState.REVIEWING

    def redo(self) -> None:
        """Replace the current message with a fresh generation for the same changes."""
        if self.state is not SessionState.REVIEWING:
            return

        if self.change_set is None:
            # Capture failed last time: capture again, generate on the next redo.
            try:
                self.change_set = self.tool.capture(self.action)
            except CommiterError as e:
                self.generation = Generation.failed(self.action, e)
            else:
                self.generation = None
            return

        self.generation = self._generate()

    def back(self) -> None:
        """Discard the chosen action and message."""
        if self.state is not SessionState.REVIEWING:
            return

        self.action = None
        self.change_set = None
        self.generation = None
        self.state = SessionState.SELECTING

    def confirm(self) -> None:
        """Perform the action with the current message."""
        if not self.can_confirm:
            logger.debug("Confirm ignored: no successfully generated message")
            return

        try:
            self.result = self.tool.perform(self.action, self.generation.message)
        except CommiterError as e:
            logger.error("Action failed: %s", e)
            self.action_error = e
            self.result = f"Error: {e}"
        self.state = SessionState.DONE

    def quit(self) -> None:
        self.state = SessionState.TERMINATED

    def _generate(self) -> Generation:
        try:
            message = self.tool.generate(self.action, self.change_set)
        except CommiterError as e:
            logger.info("Generation failed: %s", e)
            return Generation.failed(self.action, e)
        return Generation(action=self.action, message=message)

    def render(self) -> str:
        """Text to show for the current state."""
        if self.state is SessionState.TERMINATED:
            return ""
        if self.state is SessionState.DONE:
            return f"{self.result}\n\nPress any key to exit"
        if self.state is SessionState.REVIEWING:
            if self.generation is None:
                return "Changes captured.\n\nr - Generate | b - Back | q - Quit"
            if self.can_confirm:
                return f"{self.generation.message}\n\nc - Confirm | r - Redo | b - Back"
            return f"{self.generation.message}\n\nr - Redo | b - Back | q - Quit"
        return MENU
