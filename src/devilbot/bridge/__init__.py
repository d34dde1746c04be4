"""Bridge between chat events and the bot session."""

from __future__ import annotations

from .commands import CommandDispatcher
from .config import CommandBridgeConfig

__all__ = ["CommandBridgeConfig", "CommandDispatcher"]
