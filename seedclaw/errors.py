"""Error kinds raised by seedclaw components.

Error handling strategy:
    Components raise these and never recover locally. Only the CLI adapter
    catches them, at the top level, to print one diagnostic line and exit 1.
"""


class SeedclawError(Exception):
    """Base class for all expected seedclaw failures."""


class ConfigurationError(SeedclawError):
    """Required configuration (credential, reference image) is missing."""


class GenerationError(SeedclawError):
    """The image generation API rejected the request or could not be reached.

    Attributes:
        status_code: HTTP status returned by the API, or `None` for transport
            failures and malformed responses.
        body: Raw response text (empty when no response was received).
    """

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class EmptyResultError(SeedclawError):
    """Generation succeeded but the response carried no images."""


class DispatchError(SeedclawError):
    """The message could not be delivered via the OpenClaw CLI or gateway."""
