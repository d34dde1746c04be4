"""Protocols for the collaborators the command bridge drives.

The bot session, the anti-AFK loop and the bed-sleeping routine live outside
this package. Commands only talk to them through these surfaces.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .types import InventoryItem, Position


class Entity(Protocol):
    position: Position


class BotSession(Protocol):
    username: str
    entity: Entity | None
    health: float
    food: float
    time_of_day: int | None
    is_day: bool
    is_raining: bool
    is_sleeping: bool

    def player_position(self, username: str) -> Position | None: ...

    def inventory_items(self) -> Sequence[InventoryItem]: ...

    async def whisper(self, username: str, text: str) -> None: ...

    async def chat(self, text: str) -> None: ...

    async def set_goal_near(
        self, x: float, y: float, z: float, radius: float
    ) -> None: ...

    async def set_control_state(self, control: str, state: bool) -> None: ...

    async def look(self, yaw: float, pitch: float, force: bool) -> None: ...


class AntiIdle(Protocol):
    async def stop(self) -> None: ...

    async def start(self, session: BotSession) -> None: ...


class Sleeper(Protocol):
    async def attempt_sleep(self, session: BotSession) -> None: ...
