"""Postgres access for trending score refreshes."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

import asyncpg

from cookoff.domain.trending.models import ContentItem
from cookoff.infra import postgres


class TrendingRepository:
	"""Reads recent posts with comment counts and persists refreshed scores."""

	def __init__(self, pool: Optional[asyncpg.pool.Pool] = None) -> None:
		self._pool = pool

	async def _get_pool(self) -> asyncpg.pool.Pool:
		if self._pool is None:
			self._pool = await postgres.get_pool()
		return self._pool

	async def list_recent_items(self, *, since: datetime) -> list[ContentItem]:
		pool = await self._get_pool()
		async with pool.acquire() as conn:
			rows = await conn.fetch(
				"""
				SELECT p.id, p.created_at, p.likes_count,
					(SELECT COUNT(*) FROM comments c WHERE c.post_id = p.id) AS comments_count
				FROM posts p
				WHERE p.created_at >= $1
				ORDER BY p.created_at DESC
				""",
				since,
			)
		return [ContentItem.from_row(row) for row in rows]

	async def update_trending_score(self, item_id: str, score: float) -> None:
		pool = await self._get_pool()
		async with pool.acquire() as conn:
			await conn.execute(
				"UPDATE posts SET trending_score = $2 WHERE id = $1",
				item_id,
				round(score, 4),
			)


__all__ = ["TrendingRepository"]
