"""Abstract interface for completion clients."""

from abc import ABC, abstractmethod
from ..core.types import GenerationRequest


class CompletionClient(ABC):
    """Abstract interface for services that turn a prompt into a message."""

    def __init__(self, model_id: str):
        self.model_id = model_id

    def build_request(self, template: str, change_text: str) -> GenerationRequest:
        """Build the request for a template and a diff."""
        return GenerationRequest(template=template, change_text=change_text, model_id=self.model_id)

    def generate(self, template: str, change_text: str) -> str:
        """Generate a message for the given template and diff text."""
        return self.complete(self.build_request(template, change_text))

    @abstractmethod
    def complete(self, request: GenerationRequest) -> str:
        """Perform one completion.

        Args:
            request: Model id plus the template and diff to send

        Returns:
            The first generated message, verbatim

        Raises:
            GenerationError: If the service cannot produce a message
        """
        pass
