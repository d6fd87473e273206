import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from cookoff.domain.competitions.models import CompetitionPhase, CompetitionWindow
from cookoff.domain.competitions.watcher import PhaseWatcher

T = datetime(2025, 10, 27, 8, 0, tzinfo=timezone.utc)
WINDOW = CompetitionWindow.create(
	registration_start=T,
	competition_start=T + timedelta(hours=1),
	competition_end=T + timedelta(hours=2),
	voting_end=T + timedelta(hours=3),
)


@pytest.mark.asyncio
async def test_tick_fires_transition_on_phase_change():
	transitions = []
	ticks = []

	async def on_transition(previous, current):
		transitions.append((previous.phase, current.phase))

	watcher = PhaseWatcher(WINDOW, on_tick=ticks.append, on_transition=on_transition)

	await watcher.tick(T + timedelta(minutes=59))
	await watcher.tick(T + timedelta(minutes=59, seconds=30))
	await watcher.tick(T + timedelta(hours=1))
	await watcher.tick(T + timedelta(hours=2, seconds=1))

	assert len(ticks) == 4
	assert transitions == [
		(CompetitionPhase.REGISTRATION, CompetitionPhase.COMPETING),
		(CompetitionPhase.COMPETING, CompetitionPhase.VOTING),
	]
	assert watcher.last_status.phase is CompetitionPhase.VOTING


@pytest.mark.asyncio
async def test_run_forever_stops_once_completed():
	instants = iter(
		[
			T + timedelta(minutes=30),
			T + timedelta(hours=1, minutes=30),
			T + timedelta(hours=2, minutes=30),
			T + timedelta(hours=3),
		]
	)
	seen = []
	watcher = PhaseWatcher(
		WINDOW,
		on_tick=lambda status: seen.append(status.phase),
		interval_seconds=0.01,
		clock=lambda: next(instants),
	)

	await asyncio.wait_for(watcher.run_forever(), timeout=2)

	assert seen == [
		CompetitionPhase.REGISTRATION,
		CompetitionPhase.COMPETING,
		CompetitionPhase.VOTING,
		CompetitionPhase.COMPLETED,
	]


@pytest.mark.asyncio
async def test_stop_cancels_running_watcher():
	watcher = PhaseWatcher(WINDOW, interval_seconds=0.01, clock=lambda: T)

	watcher.start()
	await asyncio.sleep(0.05)
	assert watcher.running is True
	assert watcher.last_status.phase is CompetitionPhase.REGISTRATION

	await watcher.stop()
	assert watcher.running is False
	await watcher.stop()


@pytest.mark.asyncio
async def test_completed_transition_is_delivered_before_run_forever_returns():
	instants = iter(
		[
			T + timedelta(hours=2, minutes=59),
			T + timedelta(hours=3),
		]
	)
	transitions = []

	async def on_transition(previous, current):
		transitions.append((previous.phase, current.phase))

	watcher = PhaseWatcher(
		WINDOW,
		on_transition=on_transition,
		interval_seconds=0.01,
		clock=lambda: next(instants),
	)

	await asyncio.wait_for(watcher.run_forever(), timeout=2)

	assert transitions == [(CompetitionPhase.VOTING, CompetitionPhase.COMPLETED)]
	assert watcher.last_status.phase is CompetitionPhase.COMPLETED
	assert watcher.last_status.next_phase_at is None
