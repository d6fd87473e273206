"""Interval timer that re-derives a competition's phase while a view is open."""

from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional, Union

from cookoff.domain.competitions.models import CompetitionPhase, CompetitionWindow, PhaseStatus
from cookoff.domain.competitions.phases import derive_phase
from cookoff.obs import metrics as obs_metrics
from cookoff.settings import settings

logger = logging.getLogger(__name__)

TickCallback = Callable[[PhaseStatus], Union[None, Awaitable[None]]]
TransitionCallback = Callable[[PhaseStatus, PhaseStatus], Union[None, Awaitable[None]]]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


async def _invoke(callback, *args) -> None:
    result = callback(*args)
    if asyncio.iscoroutine(result):
        await result


class PhaseWatcher:
    """Polls ``derive_phase`` on a fixed interval until stopped or completed.

    ``on_transition`` fires when the phase changes between ticks; callers use
    it to move a participant from the submission view to voting, and from
    voting to results. The watcher never navigates on its own.
    """

    def __init__(
        self,
        window: CompetitionWindow,
        *,
        on_tick: Optional[TickCallback] = None,
        on_transition: Optional[TransitionCallback] = None,
        interval_seconds: Optional[float] = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.window = window
        self.on_tick = on_tick
        self.on_transition = on_transition
        interval = settings.phase_tick_interval_seconds if interval_seconds is None else interval_seconds
        self.interval_seconds = max(0.01, float(interval))
        self._clock = clock
        self._last: Optional[PhaseStatus] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def last_status(self) -> Optional[PhaseStatus]:
        return self._last

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def tick(self, now: Optional[datetime] = None) -> PhaseStatus:
        """Derive the phase once and fire callbacks."""

        status = derive_phase(self.window, now or self._clock())
        previous = self._last
        self._last = status
        if self.on_tick is not None:
            await _invoke(self.on_tick, status)
        if previous is not None and previous.phase != status.phase:
            obs_metrics.phase_transition(previous.phase.value, status.phase.value)
            logger.info(
                "competition.phase_transition",
                extra={"from_phase": previous.phase.value, "to_phase": status.phase.value},
            )
            if self.on_transition is not None:
                await _invoke(self.on_transition, previous, status)
        return status

    async def run_forever(self) -> None:
        obs_metrics.PHASE_WATCHERS_ACTIVE.inc()
        try:
            while True:
                status = await self.tick()
                if status.phase is CompetitionPhase.COMPLETED:
                    return
                await asyncio.sleep(self.interval_seconds)
        finally:
            obs_metrics.PHASE_WATCHERS_ACTIVE.dec()

    def start(self) -> asyncio.Task:
        if not self.running:
            self._task = asyncio.create_task(self.run_forever(), name="competition-phase-watcher")
        assert self._task is not None
        return self._task

    async def stop(self) -> None:
        """Cancel the timer; safe to call more than once."""

        task = self._task
        self._task = None
        if task is None:
            return
        task.cancel()
        with suppress(asyncio.CancelledError):
            await task


__all__ = ["PhaseWatcher"]
