"""Mock completion client for testing."""

import logging
import re
from typing import List
from .interface import CompletionClient
from ..core.types import GenerationRequest

logger = logging.getLogger(__name__)

FILE_HEADER = re.compile(r'^diff --git a/(\S+) b/', re.MULTILINE)


class MockCompletionClient(CompletionClient):
    """Offline client that derives a plausible message from the diff itself."""

    def __init__(self, model_id: str = "mock"):
        super().__init__(model_id)
        self.requests: List[GenerationRequest] = []

    def complete(self, request: GenerationRequest) -> str:
        self.requests.append(request)
        logger.debug("Generating mock message (request %d)", len(self.requests))

        files = FILE_HEADER.findall(request.change_text)
        added = sum(1 for line in request.change_text.splitlines()
                    if line.startswith('+') and not line.startswith('+++'))
        removed = sum(1 for line in request.change_text.splitlines()
                      if line.startswith('-') and not line.startswith('---'))

        if len(files) == 1:
            subject = f"chore: update {files[0]}"
        elif files:
            subject = f"chore: update {len(files)} files"
        else:
            subject = "chore: update code"

        if "- desc option" not in request.template:
            return subject

        body = [f"- {added} lines added, {removed} lines removed"]
        for name in files[:2]:
            body.append(f"- touch {name}")
        return subject + "\n" + "\n".join(body)
