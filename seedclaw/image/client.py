"""Seedream image-generation HTTP client.

Processing flow:
    1. Require the Volcano Engine API key from `Settings`.
    2. Build the JSON payload from a `GenerationRequest`.
    3. Submit one POST to the generation endpoint with bearer auth.
    4. Return the parsed `GenerationResult` or raise on non-success status.

Retry behavior:
    No retry loop is implemented. Each call is attempted once, bounded by
    `Settings.request_timeout`.

Error handling strategy:
    - Missing API key -> `ConfigurationError` (no network call is made).
    - Non-success HTTP response -> `GenerationError` with status and body.
    - Transport failures -> `GenerationError` chained to the request exception.

Security considerations:
    Exceptions include upstream response bodies. The API key is never logged.
"""

import logging

import requests

from seedclaw.config import Settings
from seedclaw.errors import ConfigurationError, GenerationError
from seedclaw.image.models import GenerationRequest, GenerationResult

logger = logging.getLogger(__name__)


class SeedreamClient:
    """Client for the Volcano Engine Seedream generation endpoint."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def _headers(self) -> dict:
        if not self.settings.api_key:
            raise ConfigurationError(
                "VOLCENGINE_API_KEY environment variable not set. "
                "Get your key from https://console.volcengine.com/"
            )
        return {
            "Authorization": f"Bearer {self.settings.api_key}",
            "Content-Type": "application/json",
        }

    def generate(self, request: GenerationRequest) -> GenerationResult:
        """Send one generation request.

        Args:
            request: Prompt, reference images and generation options.

        Returns:
            Parsed result. The image list is not checked for emptiness here.

        Raises:
            ConfigurationError: If no API key is configured.
            GenerationError: On non-success status, transport failure or a
                response body that is not the expected JSON shape.
        """
        headers = self._headers()
        payload = request.to_payload(self.settings.model)
        logger.debug("Seedream payload: %s", payload)

        try:
            response = requests.post(
                self.settings.api_url,
                json=payload,
                headers=headers,
                timeout=self.settings.request_timeout,
            )
        except requests.exceptions.RequestException as err:
            raise GenerationError(f"Image generation request failed: {err}") from err

        if not response.ok:
            raise GenerationError(
                f"Image generation failed: {response.status_code} {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            body = response.json()
        except ValueError as err:
            raise GenerationError(
                f"Image generation returned invalid JSON: {response.text}",
                status_code=response.status_code,
                body=response.text,
            ) from err

        return GenerationResult.from_json(body)
