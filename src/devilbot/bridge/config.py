"""Runtime wiring handed to every command handler."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..config import CommandSettings
from ..session import AntiIdle, BotSession, Sleeper
from .controls import JumpControl


@dataclass(slots=True)
class CommandBridgeConfig:
    session: BotSession
    anti_idle: AntiIdle
    sleeper: Sleeper
    settings: CommandSettings = field(default_factory=CommandSettings)
    jump: JumpControl = field(init=False)

    def __post_init__(self) -> None:
        if self.session is None:
            raise ValueError("command bridge requires a bot session")
        self.jump = JumpControl(
            self.session, release_after=self.settings.jump_release_seconds
        )
