"""Message and value types shared by the command bridge."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Channel = Literal["whisper", "chat"]


@dataclass(frozen=True, slots=True)
class Position:
    x: float
    y: float
    z: float


@dataclass(frozen=True, slots=True)
class InventoryItem:
    name: str
    count: int


@dataclass(frozen=True, slots=True)
class IncomingMessage:
    """A single chat line addressed to the bot.

    Created per message and discarded once dispatched.
    """

    sender: str
    text: str
    channel: Channel = "whisper"

    @property
    def is_private(self) -> bool:
        return self.channel == "whisper"
