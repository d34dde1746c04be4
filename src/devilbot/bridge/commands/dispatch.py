"""Authorization and dispatch of incoming chat commands."""

from __future__ import annotations

from collections.abc import Collection
from types import TracebackType

import anyio
from anyio.abc import TaskGroup

from ...config import CommandSettings
from ...logging import get_logger
from ...session import AntiIdle, BotSession, Sleeper
from ...types import Channel, IncomingMessage
from ..config import CommandBridgeConfig
from .builtin import BUILTIN_COMMAND_IDS, handle_builtin_command
from .parse import parse_command

logger = get_logger("devilbot.dispatch")

UNKNOWN_COMMAND_TEXT = "Unknown command. Type 'help' for a list of commands."


def is_authorized(sender: str, allowed_users: Collection[str]) -> bool:
    """An empty allow list admits every sender."""
    if not allowed_users or sender in allowed_users:
        return True
    # Denials stay silent in chat; only the log records them.
    logger.warning("commands.unauthorized", sender=sender)
    return False


async def dispatch_command(cfg: CommandBridgeConfig, msg: IncomingMessage) -> bool:
    """Authorize, parse and run one chat line.

    Returns True when a registered command ran to completion. Handler
    failures are logged here and never propagate to the caller.
    """
    if not is_authorized(msg.sender, cfg.settings.allowed_users):
        return False

    command_id, args = parse_command(msg.text)
    try:
        if command_id not in BUILTIN_COMMAND_IDS:
            if msg.is_private:
                await cfg.session.whisper(msg.sender, UNKNOWN_COMMAND_TEXT)
            return False
        logger.info(
            "commands.executed",
            sender=msg.sender,
            command=command_id,
            channel=msg.channel,
        )
        await handle_builtin_command(cfg, msg, command_id=command_id, args=args)
    except Exception:
        logger.exception(
            "commands.handler_failed", sender=msg.sender, command=command_id
        )
        return False
    return True


class CommandDispatcher:
    """Entry point the bot's chat listeners call into.

    The session and its subsystems are injected once here and shared by every
    command invocation. Timed control releases run in a task group: pass one
    in, or use the dispatcher as an async context manager to own one.

        async with CommandDispatcher(session, anti_idle=..., sleeper=...) as d:
            await d.on_whisper(username, text)
    """

    def __init__(
        self,
        session: BotSession,
        *,
        anti_idle: AntiIdle,
        sleeper: Sleeper,
        settings: CommandSettings | None = None,
        task_group: TaskGroup | None = None,
    ) -> None:
        self._cfg = CommandBridgeConfig(
            session=session,
            anti_idle=anti_idle,
            sleeper=sleeper,
            settings=settings if settings is not None else CommandSettings(),
        )
        self._owned_task_group: TaskGroup | None = None
        if task_group is not None:
            self.attach_task_group(task_group)
        logger.info(
            "commands.dispatcher_initialized",
            restricted=bool(self._cfg.settings.allowed_users),
        )

    @property
    def config(self) -> CommandBridgeConfig:
        return self._cfg

    def attach_task_group(self, task_group: TaskGroup | None) -> None:
        """Run delayed control releases in *task_group*."""
        self._cfg.jump.attach(task_group)

    async def __aenter__(self) -> CommandDispatcher:
        task_group = anyio.create_task_group()
        await task_group.__aenter__()
        self._owned_task_group = task_group
        self.attach_task_group(task_group)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool | None:
        task_group = self._owned_task_group
        self._owned_task_group = None
        self.attach_task_group(None)
        if task_group is None:
            return None
        return await task_group.__aexit__(exc_type, exc_val, exc_tb)

    def _is_self(self, sender: str) -> bool:
        return sender == getattr(self._cfg.session, "username", None)

    async def dispatch(
        self, sender: str, text: str, channel: Channel = "whisper"
    ) -> bool:
        msg = IncomingMessage(sender=sender, text=text, channel=channel)
        return await dispatch_command(self._cfg, msg)

    async def on_whisper(self, sender: str, text: str) -> bool:
        if self._is_self(sender):
            return False
        return await self.dispatch(sender, text, "whisper")

    async def on_chat(self, sender: str, text: str) -> bool:
        if self._is_self(sender):
            return False
        return await self.dispatch(sender, text, "chat")
