"""Built-in chat commands."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ...logging import get_logger
from ...types import IncomingMessage
from .parse import join_args, parse_number

if TYPE_CHECKING:
    from ..config import CommandBridgeConfig

logger = get_logger("devilbot.commands")

# (cfg, msg, args) -> None
CommandHandler = Callable[..., Awaitable[None]]

HELP_HEADER = "Devil Bot Commands:"
NOT_SPAWNED_TEXT = "Bot is connecting or not fully spawned yet."
CANNOT_SEE_TEXT = "I cannot see you! Get closer."
COMING_TEXT = "Coming to you!"
SAY_EMPTY_TEXT = "Please provide a message for me to say."
SAY_COMMAND_TEXT = "I cannot execute commands."
LOOK_USAGE = "Please provide valid yaw and pitch values (numbers)."
RESTARTED_TEXT = "Anti-AFK system restarted."
INVENTORY_EMPTY_TEXT = "My inventory is empty."
ALREADY_SLEEPING_TEXT = "I am already sleeping in a bed."
SLEEP_SEARCH_TEXT = "Looking for a bed to sleep in..."
NOT_NIGHT_TEXT = "It's not night time yet, but I'll try to find a bed anyway."

# Minecraft ticks; beds are usable from dusk until just before sunrise.
NIGHT_START_TICK = 13000
NIGHT_END_TICK = 23000


@dataclass(frozen=True, slots=True)
class Command:
    keyword: str
    usage: str
    help: str
    handler: CommandHandler

    async def execute(
        self, cfg: CommandBridgeConfig, msg: IncomingMessage, args: tuple[str, ...]
    ) -> None:
        await self.handler(cfg, msg, args)


async def _reply(cfg: CommandBridgeConfig, msg: IncomingMessage, text: str) -> None:
    await cfg.session.whisper(msg.sender, text)


def _format_number(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return repr(value)


def is_night_time(time_of_day: int | None) -> bool:
    """Return False only when the tick is known to be outside the night window.

    Both boundaries count as night: 13000 and 23000 are silent.
    """
    if time_of_day is None:
        return True
    return not (time_of_day < NIGHT_START_TICK or time_of_day > NIGHT_END_TICK)


def help_text() -> str:
    lines = [HELP_HEADER]
    lines.extend(f"- {command.usage}: {command.help}" for command in BUILTIN_COMMANDS)
    return "\n".join(lines)


def status_text(cfg: CommandBridgeConfig) -> str | None:
    session = cfg.session
    entity = session.entity
    if entity is None:
        return None
    pos = entity.position
    time_of_day = session.time_of_day
    parts = [
        f"Health: {session.health:.1f}/{session.food:.1f}",
        f"Position: {pos.x:.1f}, {pos.y:.1f}, {pos.z:.1f}",
        f"Time: {time_of_day if time_of_day is not None else 'unknown'} "
        f"({'day' if session.is_day else 'night'})",
        f"Weather: {'raining' if session.is_raining else 'clear'}",
    ]
    return " | ".join(parts)


async def _handle_help_command(
    cfg: CommandBridgeConfig, msg: IncomingMessage, args: tuple[str, ...]
) -> None:
    await _reply(cfg, msg, help_text())
    logger.info("commands.help.sent", sender=msg.sender)


async def _handle_status_command(
    cfg: CommandBridgeConfig, msg: IncomingMessage, args: tuple[str, ...]
) -> None:
    status = status_text(cfg)
    if status is None:
        await _reply(cfg, msg, NOT_SPAWNED_TEXT)
        return
    await _reply(cfg, msg, f"Status: {status}")
    logger.info("commands.status.sent", sender=msg.sender, status=status)


async def _handle_come_command(
    cfg: CommandBridgeConfig, msg: IncomingMessage, args: tuple[str, ...]
) -> None:
    target = cfg.session.player_position(msg.sender)
    if target is None:
        await _reply(cfg, msg, CANNOT_SEE_TEXT)
        return
    await _reply(cfg, msg, COMING_TEXT)
    await cfg.session.set_goal_near(
        target.x, target.y, target.z, cfg.settings.come_radius
    )
    logger.info(
        "commands.come.moving",
        sender=msg.sender,
        x=target.x,
        y=target.y,
        z=target.z,
    )


async def _handle_jump_command(
    cfg: CommandBridgeConfig, msg: IncomingMessage, args: tuple[str, ...]
) -> None:
    await cfg.jump.press()
    logger.info("commands.jump.pressed", sender=msg.sender)


async def _handle_say_command(
    cfg: CommandBridgeConfig, msg: IncomingMessage, args: tuple[str, ...]
) -> None:
    message = join_args(args)
    if not message:
        await _reply(cfg, msg, SAY_EMPTY_TEXT)
        return
    # Relaying "/..." would run server commands with the bot's permissions.
    if message.startswith("/"):
        await _reply(cfg, msg, SAY_COMMAND_TEXT)
        logger.warning("commands.say.rejected_command", sender=msg.sender)
        return
    await cfg.session.chat(message)
    logger.info("commands.say.sent", sender=msg.sender, message=message)


async def _handle_look_command(
    cfg: CommandBridgeConfig, msg: IncomingMessage, args: tuple[str, ...]
) -> None:
    yaw = parse_number(args[0] if len(args) > 0 else None)
    pitch = parse_number(args[1] if len(args) > 1 else None)
    if yaw is None or pitch is None:
        await _reply(cfg, msg, LOOK_USAGE)
        return
    await cfg.session.look(yaw, pitch, False)
    await _reply(
        cfg,
        msg,
        f"Looking at yaw: {_format_number(yaw)}, pitch: {_format_number(pitch)}",
    )
    logger.info("commands.look.changed", sender=msg.sender, yaw=yaw, pitch=pitch)


async def _handle_restart_command(
    cfg: CommandBridgeConfig, msg: IncomingMessage, args: tuple[str, ...]
) -> None:
    await cfg.anti_idle.stop()
    await cfg.anti_idle.start(cfg.session)
    await _reply(cfg, msg, RESTARTED_TEXT)
    logger.info("commands.restart.anti_idle_restarted", sender=msg.sender)


async def _handle_inventory_command(
    cfg: CommandBridgeConfig, msg: IncomingMessage, args: tuple[str, ...]
) -> None:
    items = cfg.session.inventory_items()
    if not items:
        await _reply(cfg, msg, INVENTORY_EMPTY_TEXT)
        return
    listing = ", ".join(f"{item.name} x{item.count}" for item in items)
    await _reply(cfg, msg, f"Inventory: {listing}")
    logger.info("commands.inventory.sent", sender=msg.sender, items=len(items))


async def _handle_sleep_command(
    cfg: CommandBridgeConfig, msg: IncomingMessage, args: tuple[str, ...]
) -> None:
    session = cfg.session
    if session.is_sleeping:
        await _reply(cfg, msg, ALREADY_SLEEPING_TEXT)
        return
    await _reply(cfg, msg, SLEEP_SEARCH_TEXT)
    if not is_night_time(session.time_of_day):
        await _reply(cfg, msg, NOT_NIGHT_TEXT)
    await cfg.sleeper.attempt_sleep(session)
    logger.info(
        "commands.sleep.requested",
        sender=msg.sender,
        time_of_day=session.time_of_day,
    )


BUILTIN_COMMANDS: tuple[Command, ...] = (
    Command("help", "help", "Show this help message", _handle_help_command),
    Command("status", "status", "Check bot status", _handle_status_command),
    Command("come", "come", "Make the bot come to you", _handle_come_command),
    Command("jump", "jump", "Make the bot jump", _handle_jump_command),
    Command(
        "say", "say <message>", "Make the bot say something", _handle_say_command
    ),
    Command(
        "look",
        "look <yaw> <pitch>",
        "Make the bot look in a direction",
        _handle_look_command,
    ),
    Command(
        "restart", "restart", "Restart the anti-AFK system", _handle_restart_command
    ),
    Command(
        "inventory", "inventory", "Show bot inventory", _handle_inventory_command
    ),
    Command(
        "sleep",
        "sleep",
        "Make the bot find and sleep in a nearby bed",
        _handle_sleep_command,
    ),
)
BUILTIN_COMMAND_IDS = frozenset(command.keyword for command in BUILTIN_COMMANDS)
_COMMANDS_BY_ID = {command.keyword: command for command in BUILTIN_COMMANDS}


def get_command(command_id: str) -> Command | None:
    return _COMMANDS_BY_ID.get(command_id)


async def handle_builtin_command(
    cfg: CommandBridgeConfig,
    msg: IncomingMessage,
    *,
    command_id: str,
    args: tuple[str, ...],
) -> bool:
    """Run a built-in command, returning False when the id is not registered."""
    command = get_command(command_id)
    if command is None:
        return False
    await command.execute(cfg, msg, args)
    return True
