"""Chat command handling for the bot.

This package provides command parsing, authorization, and dispatch.
"""

from __future__ import annotations

from .builtin import (
    BUILTIN_COMMAND_IDS,
    BUILTIN_COMMANDS,
    Command,
    get_command,
    handle_builtin_command,
)
from .dispatch import (
    UNKNOWN_COMMAND_TEXT,
    CommandDispatcher,
    dispatch_command,
    is_authorized,
)
from .parse import join_args, parse_command, parse_number

__all__ = [
    "BUILTIN_COMMAND_IDS",
    "BUILTIN_COMMANDS",
    "Command",
    "CommandDispatcher",
    "UNKNOWN_COMMAND_TEXT",
    "dispatch_command",
    "get_command",
    "handle_builtin_command",
    "is_authorized",
    "join_args",
    "parse_command",
    "parse_number",
]
