"""OpenRouter chat completions client."""

import logging
from typing import Optional

import requests

from .interface import CompletionClient
from ..core.types import (
    GenerationRequest, TransportError, ServiceError,
    EmptyResponseError, InvalidResponseError
)

logger = logging.getLogger(__name__)


class OpenRouterClient(CompletionClient):
    """Completion client for the OpenRouter chat completions API.

    One blocking POST per request. No retries, no streaming, and no timeout
    beyond what the transport provides.
    """

    ENDPOINT = "https://openrouter.ai/api/v1/chat/completions"

    def __init__(self, api_key: str, model_id: str,
                 endpoint: Optional[str] = None,
                 session: Optional[requests.Session] = None):
        if not api_key:
            raise ValueError("api_key must be set")

        super().__init__(model_id)
        self.api_key = api_key
        self.endpoint = endpoint or self.ENDPOINT
        self.session = session or requests.Session()

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def complete(self, request: GenerationRequest) -> str:
        """Send the request and return the first choice's message content."""
        logger.debug("Requesting completion from %s (model=%s, %d chars)",
                     self.endpoint, request.model_id, len(request.content))

        try:
            response = self.session.post(
                self.endpoint,
                headers=self._headers(),
                json=request.to_payload()
            )
        except requests.RequestException as e:
            logger.error("Error making request: %s", e)
            raise TransportError(f"Error making request: {e}") from e

        if not 200 <= response.status_code < 300:
            logger.error("Completion service returned %d", response.status_code)
            raise ServiceError(response.text, status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise InvalidResponseError(f"Error reading response: {e}") from e

        if not isinstance(data, dict):
            raise InvalidResponseError("Error reading response: expected a JSON object")

        choices = data.get("choices") or []
        if not choices:
            logger.warning("Completion service returned no choices")
            raise EmptyResponseError()

        try:
            content = choices[0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise InvalidResponseError(f"Error reading response: missing {e}") from e

        if not isinstance(content, str) or not content.strip():
            raise EmptyResponseError()

        logger.debug("Generated message (%d chars)", len(content))
        return content
