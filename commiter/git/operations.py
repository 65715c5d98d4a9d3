"""Git operations for the commiter tool."""

import subprocess
import logging
from typing import List
from ..core.types import ChangeSet, NothingPendingError, Scope, ToolFailureError

logger = logging.getLogger(__name__)

DIFF_COMMANDS = {
    Scope.STAGED_ONLY: ["diff", "--staged"],
    Scope.FULL_WORKING_TREE: ["diff"],
}


class GitOperations:
    """Handles all git invocations: diff capture, commit and stash."""

    def __init__(self, git_binary: str = "git"):
        self.git_binary = git_binary

    def _run_git_command(self, cmd: List[str], check: bool = True) -> subprocess.CompletedProcess:
        """Run a git command and return the result."""
        full_cmd = [self.git_binary] + cmd
        logger.debug("Running git command: %s", " ".join(full_cmd))

        try:
            result = subprocess.run(
                full_cmd,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                check=check
            )
            return result
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or e.stdout or "").strip() or f"exit status {e.returncode}"
            logger.error("Git command failed: %s\nStderr: %s", " ".join(full_cmd), e.stderr)
            raise ToolFailureError(f"git {cmd[0]} failed: {detail}")
        except OSError as e:
            logger.error("Could not run %s: %s", self.git_binary, e)
            raise ToolFailureError(f"could not run {self.git_binary}: {e}")

    def capture(self, scope: Scope) -> ChangeSet:
        """Capture the pending changes for a scope.

        Raises:
            NothingPendingError: If the diff is empty
            ToolFailureError: If git exits non-zero
        """
        result = self._run_git_command(DIFF_COMMANDS[scope])
        if not result.stdout:
            logger.info("No pending changes for scope %s", scope.value)
            raise NothingPendingError(scope)

        change_set = ChangeSet(scope=scope, text=result.stdout)
        logger.debug("Captured %d diff lines for scope %s", change_set.line_count, scope.value)
        return change_set

    def commit(self, message: str) -> None:
        """Record a commit of the staged changes using the trimmed message."""
        logger.info("Committing staged changes")
        self._run_git_command(["commit", "-m", message.strip()])

    def stash(self, message: str) -> None:
        """Push a stash entry labelled with the message verbatim."""
        logger.info("Stashing working tree changes")
        self._run_git_command(["stash", "push", "-m", message])
