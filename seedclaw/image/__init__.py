"""Seedream image generation package.

Module split:
    - `models`: request payload builder and typed response.
    - `client`: HTTP transport against the generation endpoint.
"""

from seedclaw.image.client import SeedreamClient
from seedclaw.image.models import GeneratedImage, GenerationRequest, GenerationResult

__all__ = ["SeedreamClient", "GeneratedImage", "GenerationRequest", "GenerationResult"]
