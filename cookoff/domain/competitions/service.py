"""Competition status lookups with automatic weekly rollover."""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from cookoff.domain.competitions.models import Competition, CompetitionSlot, PhaseStatus
from cookoff.domain.competitions.phases import derive_phase
from cookoff.domain.competitions.repo import CompetitionRepository
from cookoff.domain.competitions.schedule import (
	generate_competition_name,
	next_competition_window,
	results_visible_until,
)
from cookoff.domain.trending.models import as_utc

_LOG = logging.getLogger(__name__)


@dataclass(slots=True)
class CompetitionStatus:
	competition: Competition
	status: PhaseStatus


def _needs_next(competition: Optional[Competition], now: datetime) -> bool:
	return competition is None or now >= results_visible_until(competition.window)


class CompetitionService:
	"""Resolves the live competition for a slot, creating the next one when due."""

	def __init__(
		self,
		repository: Optional[CompetitionRepository] = None,
		*,
		rng: Optional[random.Random] = None,
	) -> None:
		self.repo = repository or CompetitionRepository()
		self._rng = rng
		# Serialises scheduling so concurrent lookups create at most one competition per slot
		self._locks: dict[CompetitionSlot, asyncio.Lock] = {slot: asyncio.Lock() for slot in CompetitionSlot}

	async def schedule_next(self, slot: CompetitionSlot, *, now: datetime) -> Competition:
		window = next_competition_window(slot, now)
		name = generate_competition_name(slot, self._rng)
		competition = await self.repo.create(slot, name=name, window=window)
		_LOG.info(
			"competition.created",
			extra={"slot": slot.value, "competition_id": competition.id, "starts_at": window.registration_start.isoformat()},
		)
		return competition

	async def get_status(self, slot: CompetitionSlot, *, now: Optional[datetime] = None) -> CompetitionStatus:
		"""Status of the current competition in ``slot``.

		A new competition is scheduled when the slot has none yet or when the
		latest one's results window has passed.
		"""

		current_time = as_utc(now) if now else datetime.now(timezone.utc)
		competition = await self.repo.get_latest(slot)
		if _needs_next(competition, current_time):
			async with self._locks[slot]:
				competition = await self.repo.get_latest(slot)
				if _needs_next(competition, current_time):
					competition = await self.schedule_next(slot, now=current_time)
		assert competition is not None
		return CompetitionStatus(competition=competition, status=derive_phase(competition.window, current_time))

	async def get_all_statuses(self, *, now: Optional[datetime] = None) -> dict[CompetitionSlot, CompetitionStatus]:
		current_time = as_utc(now) if now else datetime.now(timezone.utc)
		return {slot: await self.get_status(slot, now=current_time) for slot in CompetitionSlot}


__all__ = ["CompetitionService", "CompetitionStatus"]
