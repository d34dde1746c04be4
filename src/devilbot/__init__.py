"""Chat command handling for the Devil AFK bot."""

from __future__ import annotations

__version__ = "0.1.0"
