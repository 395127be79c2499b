"""OpenClaw messaging package."""

from seedclaw.messaging.dispatcher import DispatchMessage, OpenClawDispatcher

__all__ = ["DispatchMessage", "OpenClawDispatcher"]
