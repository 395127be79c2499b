"""
Command-line adapter for the generate-and-send workflow.

Interface responsibilities:
- Parse `<prompt> <channel> [caption] [size] [reference_image]`.
- Resolve the reference image from argv or `REFERENCE_IMAGE_URL`.
- Build components from one `Settings` object and delegate to
  `seedclaw.core.engine.generate_and_send`.

Exit codes:
- 0 on success (JSON summary printed to stdout).
- 1 on usage errors, invalid or missing configuration, and every
  `SeedclawError` raised while generating or dispatching.
- Any other exception is a programming error and surfaces as a traceback.

Output:
- Progress logs and diagnostics go to stderr; stdout carries only the JSON
  summary so it can be piped.
"""

import argparse
import json
import logging
import sys

from dotenv import load_dotenv

from seedclaw.config import Settings
from seedclaw.core.engine import (
    DEFAULT_CAPTION,
    GenerateAndSendOptions,
    generate_and_send,
)
from seedclaw.errors import SeedclawError
from seedclaw.image.client import SeedreamClient
from seedclaw.image.models import DEFAULT_SIZE
from seedclaw.messaging.dispatcher import OpenClawDispatcher

logger = logging.getLogger(__name__)

EPILOG = """\
Environment variables (required):
  VOLCENGINE_API_KEY      Your Volcano Engine API key
  REFERENCE_IMAGE_URL     Reference image for consistent appearance
                          (unless given as 5th argument)

Optional environment:
  OPENCLAW_GATEWAY_URL    OpenClaw gateway URL (default: http://localhost:18789)
  OPENCLAW_GATEWAY_TOKEN  Gateway auth token
  OPENCLAW_CLI            OpenClaw executable (default: openclaw)

Examples:
  VOLCENGINE_API_KEY=your_key REFERENCE_IMAGE_URL=https://example.com/you.png \\
    with-him "wearing a suit" "#general"
  VOLCENGINE_API_KEY=your_key \\
    with-him "wearing a suit" "#general" "Executive look" "1024x1024" "https://example.com/you.png"
"""

MISSING_REFERENCE_MESSAGE = (
    "[ERROR] REFERENCE_IMAGE_URL environment variable or reference_image argument is required\n"
    "Please provide a reference image URL via:\n"
    "  1. REFERENCE_IMAGE_URL environment variable, or\n"
    "  2. Command line argument (5th argument)"
)


class UsageParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors with exit code 1."""

    def error(self, message):
        self.print_help(sys.stderr)
        self.exit(1, f"\n{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = UsageParser(
        prog="with-him",
        description="Generate an image with Jiemeng AI (Seedream) and send it via OpenClaw.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("prompt", help="Image description")
    parser.add_argument("channel", help="Target channel, e.g. #general, @user")
    parser.add_argument("caption", nargs="?", default=None,
                        help=f"Message caption (default: '{DEFAULT_CAPTION}')")
    parser.add_argument("size", nargs="?", default=None,
                        help=f"Image size (default: {DEFAULT_SIZE}) e.g. 2048x2048, 1K, 2K, 4K")
    parser.add_argument("reference_image", nargs="?", default=None,
                        help="Reference image URL (overrides REFERENCE_IMAGE_URL)")
    parser.add_argument("--gateway", action="store_true",
                        help="Send through the OpenClaw HTTP gateway instead of the CLI")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv=None, environ=None) -> int:
    """
    Run one generate-and-send invocation.

    Args:
        argv: Arguments without the program name; defaults to `sys.argv[1:]`.
        environ: Environment mapping; defaults to `os.environ` after loading
            a local `.env` file.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.prompt.strip() or not args.channel.strip():
        parser.error("prompt and channel must not be empty")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
        stream=sys.stderr,
    )

    if environ is None:
        load_dotenv()

    try:
        settings = Settings.from_env(environ)
    except ValueError as e:
        print(f"[ERROR] Invalid configuration: {e}", file=sys.stderr)
        return 1

    reference_image = args.reference_image or settings.reference_image_url
    if not reference_image:
        print(MISSING_REFERENCE_MESSAGE, file=sys.stderr)
        return 1

    options = GenerateAndSendOptions(
        prompt=args.prompt,
        channel=args.channel,
        caption=args.caption or DEFAULT_CAPTION,
        reference_image=reference_image,
        size=args.size or DEFAULT_SIZE,
        use_cli=not args.gateway,
    )

    try:
        result = generate_and_send(
            options,
            generator=SeedreamClient(settings),
            dispatcher=OpenClawDispatcher(settings),
        )
    except SeedclawError as e:
        logger.debug("generate-and-send failed", exc_info=True)
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    print(json.dumps(result.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
