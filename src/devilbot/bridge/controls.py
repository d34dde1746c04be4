"""Timed control-state helpers."""

from __future__ import annotations

import anyio
from anyio.abc import TaskGroup

from ..logging import get_logger
from ..session import BotSession

logger = get_logger("devilbot.controls")

JUMP_CONTROL = "jump"


class JumpControl:
    """Press the jump control and release it after a delay.

    The release runs in the attached task group, so a press returns as soon
    as the control is down. Each press owns a cancel scope for its pending
    release. A new press cancels the previous release, so the control is
    released one delay after the latest press rather than racing an earlier
    timer.
    """

    def __init__(
        self,
        session: BotSession,
        *,
        release_after: float,
        task_group: TaskGroup | None = None,
    ) -> None:
        self._session = session
        self._release_after = release_after
        self._task_group = task_group
        self._pending: anyio.CancelScope | None = None

    @property
    def release_after(self) -> float:
        return self._release_after

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def attach(self, task_group: TaskGroup | None) -> None:
        self._task_group = task_group

    async def press(self) -> None:
        task_group = self._task_group
        if task_group is None:
            raise RuntimeError("jump release needs an attached task group")
        if self._pending is not None:
            self._pending.cancel()
            logger.debug("devilbot.controls.jump_release_superseded")
        scope = anyio.CancelScope()
        self._pending = scope
        await self._session.set_control_state(JUMP_CONTROL, True)
        task_group.start_soon(self._release, scope)

    async def _release(self, scope: anyio.CancelScope) -> None:
        try:
            with scope:
                await anyio.sleep(self._release_after)
                await self._session.set_control_state(JUMP_CONTROL, False)
        except Exception:
            logger.exception("devilbot.controls.jump_release_failed")
        finally:
            if self._pending is scope:
                self._pending = None
