"""Competition phase derivation and countdown formatting."""

from __future__ import annotations

import math
from datetime import datetime

from cookoff.domain.competitions.models import CompetitionPhase, CompetitionWindow, PhaseStatus
from cookoff.domain.trending.models import as_utc
from cookoff.obs import metrics as obs_metrics


def _seconds_until(target: datetime, now: datetime) -> int:
	return max(int(math.floor((target - now).total_seconds())), 0)


def derive_phase(window: CompetitionWindow, now: datetime) -> PhaseStatus:
	"""Return the phase active at ``now`` and the whole seconds until it ends."""

	now = as_utc(now)
	if now < window.competition_start:
		status = PhaseStatus(
			phase=CompetitionPhase.REGISTRATION,
			seconds_remaining=_seconds_until(window.competition_start, now),
			next_phase_at=window.competition_start,
		)
	elif now < window.competition_end:
		status = PhaseStatus(
			phase=CompetitionPhase.COMPETING,
			seconds_remaining=_seconds_until(window.competition_end, now),
			next_phase_at=window.competition_end,
		)
	elif now < window.voting_end:
		status = PhaseStatus(
			phase=CompetitionPhase.VOTING,
			seconds_remaining=_seconds_until(window.voting_end, now),
			next_phase_at=window.voting_end,
		)
	else:
		status = PhaseStatus(phase=CompetitionPhase.COMPLETED, seconds_remaining=0, next_phase_at=None)
	obs_metrics.phase_derived(status.phase.value)
	return status


def format_remaining(seconds: int) -> str:
	"""Render a countdown the way timer displays show it."""

	seconds = int(seconds)
	if seconds <= 0:
		return "Time's up!"
	if seconds < 60:
		return f"{seconds}s"
	if seconds < 3600:
		return f"{seconds // 60}m {seconds % 60}s"
	if seconds < 86400:
		return f"{seconds // 3600}h {(seconds % 3600) // 60}m"
	return f"{seconds // 86400}d {(seconds % 86400) // 3600}h"


__all__ = ["derive_phase", "format_remaining"]
