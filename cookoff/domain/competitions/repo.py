"""Postgres access for competition rows."""

from __future__ import annotations

from typing import Any, Mapping, Optional

import asyncpg

from cookoff.domain.competitions.models import Competition, CompetitionSlot, CompetitionWindow
from cookoff.domain.competitions.schedule import results_visible_until
from cookoff.infra import postgres

# A slot has at most one competition per start time; `create` relies on it for ON CONFLICT.
_UNIQUE_START_INDEX = """
CREATE UNIQUE INDEX IF NOT EXISTS competitions_type_start_uniq
ON competitions (type, comp_start_time)
"""

_SELECT_COLUMNS = "id, type, name, comp_start_time, join_end_time, submit_end_time, vote_end_time"


def _to_competition(row: Mapping[str, Any]) -> Competition:
	return Competition(
		id=str(row["id"]),
		slot=CompetitionSlot(row["type"]),
		name=row["name"],
		window=CompetitionWindow.from_row(row),
	)


class CompetitionRepository:
	"""Loads and creates competitions; one live row per slot."""

	def __init__(self, pool: Optional[asyncpg.pool.Pool] = None) -> None:
		self._pool = pool
		self._index_ready = False

	async def _get_pool(self) -> asyncpg.pool.Pool:
		if self._pool is None:
			self._pool = await postgres.get_pool()
		if not self._index_ready:
			async with self._pool.acquire() as conn:
				await conn.execute(_UNIQUE_START_INDEX)
			self._index_ready = True
		return self._pool

	async def get_latest(self, slot: CompetitionSlot) -> Optional[Competition]:
		pool = await self._get_pool()
		async with pool.acquire() as conn:
			row = await conn.fetchrow(
				f"""
				SELECT {_SELECT_COLUMNS}
				FROM competitions
				WHERE type = $1
				ORDER BY comp_start_time DESC
				LIMIT 1
				""",
				slot.value,
			)
		if row is None:
			return None
		return _to_competition(row)

	async def create(self, slot: CompetitionSlot, *, name: str, window: CompetitionWindow) -> Competition:
		"""Insert the competition, or return the row already scheduled for that start."""

		pool = await self._get_pool()
		async with pool.acquire() as conn:
			competition_id = await conn.fetchval(
				"""
				INSERT INTO competitions
					(type, name, comp_start_time, join_end_time, submit_end_time, vote_end_time, comp_end_time)
				VALUES ($1, $2, $3, $4, $5, $6, $7)
				ON CONFLICT (type, comp_start_time) DO NOTHING
				RETURNING id
				""",
				slot.value,
				name,
				window.registration_start,
				window.competition_start,
				window.competition_end,
				window.voting_end,
				results_visible_until(window),
			)
			if competition_id is not None:
				return Competition(id=str(competition_id), slot=slot, name=name, window=window)
			row = await conn.fetchrow(
				f"""
				SELECT {_SELECT_COLUMNS}
				FROM competitions
				WHERE type = $1 AND comp_start_time = $2
				""",
				slot.value,
				window.registration_start,
			)
		assert row is not None
		return _to_competition(row)


__all__ = ["CompetitionRepository"]
