"""Generate-then-send orchestration.

Control-flow model:
    1. Generate an image from the prompt (watermark always disabled).
    2. Take the first generated image URL.
    3. Send caption + image URL to the target channel.
    4. Return a `Result` summary.

Error handling strategy:
    Errors from either step propagate unchanged and abort the remaining steps.
    There is no partial-success state.

Side effects:
    One outbound generation call and one outbound dispatch (HTTP or process).
"""

import logging
from dataclasses import dataclass
from typing import Protocol

from seedclaw.image.models import DEFAULT_SIZE, GenerationRequest, GenerationResult
from seedclaw.messaging.dispatcher import DispatchMessage

logger = logging.getLogger(__name__)

DEFAULT_CAPTION = "Generated with Jiemeng AI (Seedream)"


class ImageGenerator(Protocol):
    """Minimal interface required for the generation step."""

    def generate(self, request: GenerationRequest) -> GenerationResult:
        ...


class MessageDispatcher(Protocol):
    """Minimal interface required for the dispatch step."""

    def send(self, message: DispatchMessage, use_cli: bool = True) -> None:
        ...


@dataclass(frozen=True)
class GenerateAndSendOptions:
    """Inputs for one generate-and-send run.

    Attributes:
        prompt: Image description.
        channel: Target channel, e.g. `#general` or `@user`.
        caption: Message text sent with the image.
        reference_image: Reference image URL, if any.
        size: Requested image size.
        use_cli: Dispatch through the OpenClaw CLI instead of the gateway.
    """

    prompt: str
    channel: str
    caption: str = DEFAULT_CAPTION
    reference_image: str | None = None
    size: str = DEFAULT_SIZE
    use_cli: bool = True


@dataclass(frozen=True)
class Result:
    """Summary of a successful run."""

    success: bool
    image_url: str
    channel: str
    prompt: str

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "imageUrl": self.image_url,
            "channel": self.channel,
            "prompt": self.prompt,
        }


def generate_and_send(
    options: GenerateAndSendOptions,
    generator: ImageGenerator,
    dispatcher: MessageDispatcher,
) -> Result:
    """Generate an image and deliver it to a channel.

    Args:
        options: Prompt, channel, caption and generation options.
        generator: Image generation backend.
        dispatcher: Messaging backend.

    Returns:
        `Result` describing the delivered image.

    Raises:
        ConfigurationError, GenerationError, EmptyResultError, DispatchError:
            Propagated from the components; dispatch is never attempted when
            generation fails.
    """
    logger.info("Generating image with Jiemeng AI (Seedream)...")
    logger.info("Prompt: %s", options.prompt)
    logger.info("Size: %s", options.size)
    if options.reference_image:
        logger.info("Reference image: %s", options.reference_image)

    # Watermark is always disabled here even though the payload default is on.
    request = GenerationRequest(
        prompt=options.prompt,
        reference_images=(options.reference_image,) if options.reference_image else (),
        size=options.size,
        watermark=False,
    )
    result = generator.generate(request)

    image_url = result.first_image().url
    logger.info("Image generated: %s", image_url)

    logger.info("Sending to channel: %s", options.channel)
    dispatcher.send(
        DispatchMessage(
            channel=options.channel,
            message=options.caption,
            media=image_url,
        ),
        use_cli=options.use_cli,
    )
    logger.info("Done! Image sent to %s", options.channel)

    return Result(
        success=True,
        image_url=image_url,
        channel=options.channel,
        prompt=options.prompt,
    )
