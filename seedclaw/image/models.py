"""Request and response contracts for the Seedream generation API.

Payload rules:
    - `size`, `sequential_image_generation`, `response_format`, `stream` and
      `watermark` are always sent, filled from defaults when unset.
    - `images` and `max_images` are sent only when present (omitted, never null).
    - `watermark` defaults to `True`; callers that want a clean image must pass
      `watermark=False` explicitly (the orchestrator always does).

Response parsing:
    Only the `data` array is required. Emptiness is not checked on parse;
    `GenerationResult.first_image` is the fallible accessor.
"""

from dataclasses import dataclass, field
from typing import Any

from seedclaw.errors import EmptyResultError, GenerationError

DEFAULT_SIZE = "1024x1024"
DEFAULT_SEQUENTIAL_GENERATION = "disabled"
DEFAULT_RESPONSE_FORMAT = "url"


@dataclass(frozen=True)
class GenerationRequest:
    """One text-to-image request.

    Attributes:
        prompt: Image description. Must be non-empty.
        reference_images: Ordered reference image URLs.
        size: Output size such as `1024x1024`, `2K` or `4K`.
        sequential_generation: Seedream sequential-generation mode.
        response_format: `url` or `b64_json`.
        stream: Whether the API should stream partial results.
        max_images: Upper bound for sequential generation, or `None`.
        watermark: Whether the provider adds its watermark.
    """

    prompt: str
    reference_images: tuple[str, ...] = ()
    size: str = DEFAULT_SIZE
    sequential_generation: str = DEFAULT_SEQUENTIAL_GENERATION
    response_format: str = DEFAULT_RESPONSE_FORMAT
    stream: bool = False
    max_images: int | None = None
    watermark: bool = True

    def __post_init__(self) -> None:
        if not self.prompt or not self.prompt.strip():
            raise ValueError("prompt must be a non-empty string")
        # Lists are accepted for convenience but stored as a tuple.
        object.__setattr__(self, "reference_images", tuple(self.reference_images))

    def to_payload(self, model: str) -> dict:
        """Build the JSON body for the generation endpoint.

        Args:
            model: Seedream model identifier.

        Returns:
            Dict ready for `requests.post(..., json=...)`.
        """
        payload: dict[str, Any] = {
            "model": model,
            "prompt": self.prompt,
        }

        if self.reference_images:
            payload["images"] = list(self.reference_images)

        payload["size"] = self.size or DEFAULT_SIZE

        if self.max_images is not None:
            payload["max_images"] = self.max_images

        payload["sequential_image_generation"] = (
            self.sequential_generation or DEFAULT_SEQUENTIAL_GENERATION
        )
        payload["response_format"] = self.response_format or DEFAULT_RESPONSE_FORMAT
        payload["stream"] = self.stream
        payload["watermark"] = self.watermark

        return payload


@dataclass(frozen=True)
class GeneratedImage:
    """Single generated image reference."""

    url: str
    size: str | None = None


@dataclass(frozen=True)
class GenerationResult:
    """Parsed generation response.

    Attributes:
        images: Generated images in provider order. May be empty.
        model: Model echoed by the provider, when present.
        created: Provider creation timestamp, when present.
    """

    images: list[GeneratedImage] = field(default_factory=list)
    model: str | None = None
    created: int | None = None

    @classmethod
    def from_json(cls, body: Any) -> "GenerationResult":
        """Parse a decoded JSON body into a result.

        Raises:
            GenerationError: If `data` is missing or an entry has no `url`.
        """
        if not isinstance(body, dict) or not isinstance(body.get("data"), list):
            raise GenerationError(
                f"Image generation returned an unexpected body: {body!r}"
            )

        images = []
        for entry in body["data"]:
            if not isinstance(entry, dict) or not entry.get("url"):
                raise GenerationError(
                    f"Image generation returned an entry without url: {entry!r}"
                )
            images.append(GeneratedImage(url=entry["url"], size=entry.get("size")))

        return cls(images=images, model=body.get("model"), created=body.get("created"))

    def first_image(self) -> GeneratedImage:
        """Return the first generated image.

        Raises:
            EmptyResultError: If the provider returned no images.
        """
        if not self.images:
            raise EmptyResultError("Image generation returned no images")
        return self.images[0]
