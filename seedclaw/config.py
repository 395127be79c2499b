"""Runtime configuration for the image and messaging layers.

Architectural role:
    Centralizes endpoint, model, and credential lookup so that `image.client`
    and `messaging.dispatcher` receive one explicit `Settings` object instead of
    reading the process environment themselves.

Relevant environment variables:
    - `VOLCENGINE_API_KEY`: Seedream credential (required at generation time).
    - `REFERENCE_IMAGE_URL`: fallback reference image for the CLI.
    - `OPENCLAW_GATEWAY_URL`: gateway base URL (default `http://localhost:18789`).
    - `OPENCLAW_GATEWAY_TOKEN`: optional gateway bearer token.
    - `OPENCLAW_CLI`: messaging CLI executable (default `openclaw`).
    - `SEEDREAM_MODEL`, `SEEDREAM_API_URL`: model/endpoint overrides.
    - `SEEDCLAW_TIMEOUT_SECONDS`: per-request HTTP timeout (default 120).

Determinism:
    `Settings.from_env` is deterministic for a fixed mapping. Nothing is cached
    at import time.
"""

import math
import os
from dataclasses import dataclass
from typing import Mapping

SEEDREAM_API_URL = "https://ark.cn-beijing.volces.com/api/v3/images/generations"
SEEDREAM_MODEL = "doubao-seedream-4-5-251128"

DEFAULT_GATEWAY_URL = "http://localhost:18789"
DEFAULT_OPENCLAW_CLI = "openclaw"
DEFAULT_TIMEOUT_SECONDS = 120.0


def _clean(value: str | None) -> str | None:
    """Strip whitespace and map blank values to `None`."""
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class Settings:
    """Immutable configuration passed to every component at construction.

    Attributes:
        api_key: Volcano Engine API key, or `None` when not configured.
        reference_image_url: Default reference image used by the CLI.
        gateway_url: OpenClaw gateway base URL.
        gateway_token: Optional bearer token for the gateway.
        openclaw_cli: Executable invoked on the CLI dispatch path.
        model: Seedream model identifier sent in every payload.
        api_url: Seedream generation endpoint.
        request_timeout: Seconds before an outbound HTTP call is abandoned.
    """

    api_key: str | None = None
    reference_image_url: str | None = None
    gateway_url: str = DEFAULT_GATEWAY_URL
    gateway_token: str | None = None
    openclaw_cli: str = DEFAULT_OPENCLAW_CLI
    model: str = SEEDREAM_MODEL
    api_url: str = SEEDREAM_API_URL
    request_timeout: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from an environment mapping.

        Args:
            environ: Mapping to read; defaults to `os.environ`.

        Returns:
            Populated `Settings`. Unset or blank variables fall back to defaults.

        Raises:
            ValueError: If `SEEDCLAW_TIMEOUT_SECONDS` is not a positive, finite
                number.
        """
        env = os.environ if environ is None else environ

        timeout = _clean(env.get("SEEDCLAW_TIMEOUT_SECONDS"))
        request_timeout = float(timeout) if timeout else DEFAULT_TIMEOUT_SECONDS
        if not math.isfinite(request_timeout) or request_timeout <= 0:
            raise ValueError(
                f"SEEDCLAW_TIMEOUT_SECONDS must be a positive number, got {timeout!r}"
            )

        return cls(
            api_key=_clean(env.get("VOLCENGINE_API_KEY")),
            reference_image_url=_clean(env.get("REFERENCE_IMAGE_URL")),
            gateway_url=_clean(env.get("OPENCLAW_GATEWAY_URL")) or DEFAULT_GATEWAY_URL,
            gateway_token=_clean(env.get("OPENCLAW_GATEWAY_TOKEN")),
            openclaw_cli=_clean(env.get("OPENCLAW_CLI")) or DEFAULT_OPENCLAW_CLI,
            model=_clean(env.get("SEEDREAM_MODEL")) or SEEDREAM_MODEL,
            api_url=_clean(env.get("SEEDREAM_API_URL")) or SEEDREAM_API_URL,
            request_timeout=request_timeout,
        )
