"""OpenClaw message dispatcher.

Delivery paths:
    - CLI: runs `openclaw message send ...` with an argument list. No shell is
      involved, so channel/message/media values are passed verbatim.
    - Gateway: POSTs the message JSON to `<gateway_url>/message`, adding a
      bearer token header only when one is configured.

Error handling strategy:
    Non-zero exit, spawn failure, non-success HTTP status and transport errors
    all raise `DispatchError`. No delivery confirmation is polled.
"""

import logging
import subprocess
from dataclasses import dataclass

import requests

from seedclaw.config import Settings
from seedclaw.errors import DispatchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DispatchMessage:
    """Send-message request understood by OpenClaw."""

    channel: str
    message: str
    media: str | None = None
    action: str = "send"

    def to_json(self) -> dict:
        body = {
            "action": self.action,
            "channel": self.channel,
            "message": self.message,
        }
        if self.media is not None:
            body["media"] = self.media
        return body


class OpenClawDispatcher:
    """Deliver messages through the OpenClaw CLI or HTTP gateway."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def send(self, message: DispatchMessage, use_cli: bool = True) -> None:
        """Deliver one message.

        Args:
            message: Channel, caption and optional media URL.
            use_cli: Use the local CLI when true, the HTTP gateway otherwise.

        Raises:
            DispatchError: If delivery fails on the selected path.
        """
        if use_cli:
            self._send_via_cli(message)
        else:
            self._send_via_gateway(message)

    def build_command(self, message: DispatchMessage) -> list[str]:
        """Return the argument list used on the CLI path."""
        command = [
            self.settings.openclaw_cli,
            "message",
            "send",
            "--action",
            message.action,
            "--channel",
            message.channel,
            "--message",
            message.message,
        ]
        if message.media is not None:
            command += ["--media", message.media]
        return command

    def _send_via_cli(self, message: DispatchMessage) -> None:
        command = self.build_command(message)
        logger.debug("Running %s", command[0])

        try:
            subprocess.run(
                command, check=True, capture_output=True, text=True, errors="replace"
            )
        except subprocess.CalledProcessError as err:
            detail = (err.stderr or err.stdout or "").strip()
            raise DispatchError(
                f"OpenClaw send failed: exit code {err.returncode} {detail}".rstrip()
            ) from err
        except OSError as err:
            raise DispatchError(
                f"OpenClaw send failed: could not run {command[0]}: {err}"
            ) from err

    def _send_via_gateway(self, message: DispatchMessage) -> None:
        url = f"{self.settings.gateway_url.rstrip('/')}/message"
        headers = {"Content-Type": "application/json"}

        if self.settings.gateway_token:
            headers["Authorization"] = f"Bearer {self.settings.gateway_token}"

        try:
            response = requests.post(
                url,
                json=message.to_json(),
                headers=headers,
                timeout=self.settings.request_timeout,
            )
        except requests.exceptions.RequestException as err:
            raise DispatchError(f"OpenClaw send failed: {err}") from err

        if not response.ok:
            raise DispatchError(f"OpenClaw send failed: {response.text}")
