"""Domain models for timed cook-off competitions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional

from cookoff.domain.exceptions import InvalidCompetitionWindow
from cookoff.domain.trending.models import as_utc


class CompetitionPhase(str, Enum):
	"""Mutually exclusive, time-bounded competition states."""

	REGISTRATION = "registration"
	COMPETING = "competing"
	VOTING = "voting"
	COMPLETED = "completed"


class CompetitionSlot(str, Enum):
	"""Daily competition slots."""

	MORNING = "morning"
	NOON = "noon"
	NIGHT = "night"


@dataclass(frozen=True, slots=True)
class CompetitionWindow:
	"""Ordered boundary timestamps of a single competition.

	``registration_start`` and ``voting_start`` are carried for callers but are
	not phase boundaries: registration ends at ``competition_start`` and voting
	starts at ``competition_end``.
	"""

	registration_start: datetime
	competition_start: datetime
	competition_end: datetime
	voting_start: datetime
	voting_end: datetime

	@classmethod
	def create(
		cls,
		*,
		registration_start: datetime,
		competition_start: datetime,
		competition_end: datetime,
		voting_end: datetime,
		voting_start: Optional[datetime] = None,
	) -> "CompetitionWindow":
		"""Build a validated window; ``voting_start`` defaults to ``competition_end``."""

		window = cls(
			registration_start=as_utc(registration_start),
			competition_start=as_utc(competition_start),
			competition_end=as_utc(competition_end),
			voting_start=as_utc(voting_start if voting_start is not None else competition_end),
			voting_end=as_utc(voting_end),
		)
		window.validate()
		return window

	@classmethod
	def from_row(cls, row: Mapping[str, Any]) -> "CompetitionWindow":
		"""Map a competitions row (comp_start/join_end/submit_end/vote_end) to a window."""

		return cls.create(
			registration_start=row["comp_start_time"],
			competition_start=row["join_end_time"],
			competition_end=row["submit_end_time"],
			voting_end=row["vote_end_time"],
		)

	def boundaries(self) -> tuple[datetime, ...]:
		return (
			self.registration_start,
			self.competition_start,
			self.competition_end,
			self.voting_start,
			self.voting_end,
		)

	def validate(self) -> None:
		points = self.boundaries()
		for earlier, later in zip(points, points[1:]):
			if later < earlier:
				raise InvalidCompetitionWindow("window_not_chronological")


@dataclass(frozen=True, slots=True)
class PhaseStatus:
	"""Phase active at a given instant plus time to the next boundary."""

	phase: CompetitionPhase
	seconds_remaining: int
	next_phase_at: Optional[datetime]


@dataclass(slots=True)
class Competition:
	id: str
	slot: CompetitionSlot
	name: str
	window: CompetitionWindow


@dataclass(frozen=True, slots=True)
class CompetitionTag:
	tag: str
	color: str
	bg_color: str
	border_color: str


__all__ = [
	"Competition",
	"CompetitionPhase",
	"CompetitionSlot",
	"CompetitionTag",
	"CompetitionWindow",
	"PhaseStatus",
]
