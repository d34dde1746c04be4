"""Tests for built-in chat commands."""

from __future__ import annotations

import anyio
import pytest

from bot_fixtures import build_cfg, make_message
from devilbot.bridge.commands.builtin import (
    ALREADY_SLEEPING_TEXT,
    BUILTIN_COMMAND_IDS,
    BUILTIN_COMMANDS,
    CANNOT_SEE_TEXT,
    INVENTORY_EMPTY_TEXT,
    LOOK_USAGE,
    NOT_NIGHT_TEXT,
    NOT_SPAWNED_TEXT,
    SAY_EMPTY_TEXT,
    SLEEP_SEARCH_TEXT,
    handle_builtin_command,
    help_text,
    is_night_time,
)
from devilbot.types import InventoryItem, Position


async def _run(cfg, text: str, *, sender: str = "Steve") -> bool:
    msg = make_message(text=text, sender=sender)
    command_id, _, rest = text.partition(" ")
    return await handle_builtin_command(
        cfg, msg, command_id=command_id, args=tuple(rest.split())
    )


# --- registry tests ---


def test_registry_lists_every_command_in_help_order() -> None:
    assert [command.keyword for command in BUILTIN_COMMANDS] == [
        "help",
        "status",
        "come",
        "jump",
        "say",
        "look",
        "restart",
        "inventory",
        "sleep",
    ]
    assert BUILTIN_COMMAND_IDS == frozenset(c.keyword for c in BUILTIN_COMMANDS)


@pytest.mark.anyio
async def test_unregistered_command_is_not_handled() -> None:
    cfg, session = build_cfg()

    assert await _run(cfg, "dance") is False
    assert session.outputs == 0


# --- help ---


def test_help_text_itemizes_commands() -> None:
    lines = help_text().splitlines()
    assert lines[0] == "Devil Bot Commands:"
    assert "- say <message>: Make the bot say something" in lines
    assert "- look <yaw> <pitch>: Make the bot look in a direction" in lines
    assert len(lines) == len(BUILTIN_COMMANDS) + 1


@pytest.mark.anyio
async def test_help_is_idempotent() -> None:
    cfg, session = build_cfg()

    await _run(cfg, "help")
    await _run(cfg, "help")

    assert len(session.whispers) == 2
    assert session.whispers[0] == session.whispers[1]
    assert session.whispers[0][1] == help_text()


# --- status ---


@pytest.mark.anyio
async def test_status_reports_session_state() -> None:
    cfg, session = build_cfg()
    session.time_of_day = 18000
    session.is_day = False
    session.is_raining = True

    await _run(cfg, "status")

    assert session.whispers == [
        (
            "Steve",
            "Status: Health: 20.0/17.5 | Position: 10.0, 64.0, -3.5 | "
            "Time: 18000 (night) | Weather: raining",
        )
    ]


@pytest.mark.anyio
async def test_status_with_unknown_time_of_day() -> None:
    cfg, session = build_cfg()
    session.time_of_day = None

    await _run(cfg, "status")

    assert session.whispers == [
        (
            "Steve",
            "Status: Health: 20.0/17.5 | Position: 10.0, 64.0, -3.5 | "
            "Time: unknown (day) | Weather: clear",
        )
    ]


@pytest.mark.anyio
async def test_status_before_spawn() -> None:
    cfg, session = build_cfg()
    session.entity = None

    await _run(cfg, "status")

    assert session.whispers == [("Steve", NOT_SPAWNED_TEXT)]


# --- come ---


@pytest.mark.anyio
async def test_come_moves_near_sender() -> None:
    cfg, session = build_cfg()
    session.players["Steve"] = Position(1.5, 70.0, -8.25)

    await _run(cfg, "come")

    assert session.goals == [(1.5, 70.0, -8.25, 2.0)]
    assert session.whispers == [("Steve", "Coming to you!")]


@pytest.mark.anyio
async def test_come_without_visible_sender() -> None:
    cfg, session = build_cfg()
    session.players["Alex"] = Position(0.0, 0.0, 0.0)

    await _run(cfg, "come")

    assert session.goals == []
    assert session.whispers == [("Steve", CANNOT_SEE_TEXT)]


# --- jump ---


@pytest.mark.anyio
async def test_jump_presses_then_releases() -> None:
    cfg, session = build_cfg(jump_release_seconds=0.01)

    async with anyio.create_task_group() as tg:
        cfg.jump.attach(tg)
        await _run(cfg, "jump")
        assert session.controls == [("jump", True)]

    assert session.controls == [("jump", True), ("jump", False)]
    assert session.whispers == []


# --- say ---


@pytest.mark.anyio
async def test_say_relays_joined_text() -> None:
    cfg, session = build_cfg()

    await _run(cfg, "say good   morning all")

    assert session.chats == ["good morning all"]
    assert session.whispers == []


@pytest.mark.anyio
async def test_say_without_text_prompts() -> None:
    cfg, session = build_cfg()

    await _run(cfg, "say")

    assert session.chats == []
    assert session.whispers == [("Steve", SAY_EMPTY_TEXT)]


# --- look ---


@pytest.mark.anyio
@pytest.mark.parametrize("text", ["look", "look 90", "look 90 up", "look nan 1"])
async def test_look_validation(text: str) -> None:
    cfg, session = build_cfg()

    await _run(cfg, text)

    assert session.looks == []
    assert session.whispers == [("Steve", LOOK_USAGE)]


@pytest.mark.anyio
async def test_look_confirms_values() -> None:
    cfg, session = build_cfg()

    await _run(cfg, "look 1.5 -0.25")

    assert session.looks == [(1.5, -0.25, False)]
    assert session.whispers == [("Steve", "Looking at yaw: 1.5, pitch: -0.25")]


# --- restart ---


@pytest.mark.anyio
async def test_restart_stops_then_starts_anti_idle() -> None:
    cfg, session = build_cfg()

    await _run(cfg, "restart")

    cfg.anti_idle.stop.assert_awaited_once_with()
    cfg.anti_idle.start.assert_awaited_once_with(session)
    assert session.whispers == [("Steve", "Anti-AFK system restarted.")]


# --- inventory ---


@pytest.mark.anyio
async def test_inventory_lists_items() -> None:
    cfg, session = build_cfg()
    session.items = [InventoryItem("dirt", 64), InventoryItem("torch", 3)]

    await _run(cfg, "inventory")
    await _run(cfg, "inventory")

    assert session.whispers == [("Steve", "Inventory: dirt x64, torch x3")] * 2


@pytest.mark.anyio
async def test_inventory_empty() -> None:
    cfg, session = build_cfg()

    await _run(cfg, "inventory")

    assert session.whispers == [("Steve", INVENTORY_EMPTY_TEXT)]


# --- sleep ---


@pytest.mark.anyio
async def test_sleep_when_already_sleeping() -> None:
    cfg, session = build_cfg()
    session.is_sleeping = True

    await _run(cfg, "sleep")

    assert session.whispers == [("Steve", ALREADY_SLEEPING_TEXT)]
    cfg.sleeper.attempt_sleep.assert_not_awaited()


@pytest.mark.anyio
async def test_sleep_at_night_does_not_warn() -> None:
    cfg, session = build_cfg()
    session.time_of_day = 18000

    await _run(cfg, "sleep")

    assert session.whispers == [("Steve", SLEEP_SEARCH_TEXT)]
    cfg.sleeper.attempt_sleep.assert_awaited_once_with(session)


@pytest.mark.anyio
async def test_sleep_during_day_warns_and_still_tries() -> None:
    cfg, session = build_cfg()
    session.time_of_day = 6000

    await _run(cfg, "sleep")

    assert session.whispers == [
        ("Steve", SLEEP_SEARCH_TEXT),
        ("Steve", NOT_NIGHT_TEXT),
    ]
    cfg.sleeper.attempt_sleep.assert_awaited_once_with(session)


@pytest.mark.parametrize(
    ("tick", "night"),
    [
        (0, False),
        (12999, False),
        (13000, True),
        (18000, True),
        (23000, True),
        (23001, False),
        (None, True),
    ],
)
def test_night_window_boundaries(tick: int | None, night: bool) -> None:
    assert is_night_time(tick) is night
