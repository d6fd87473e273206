"""Periodic trending score refresh for recent posts."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from cookoff.domain.trending import cache as trending_cache
from cookoff.domain.trending import scoring
from cookoff.domain.trending.repo import TrendingRepository
from cookoff.obs import metrics as obs_metrics
from cookoff.settings import settings

_LOG = logging.getLogger(__name__)

_JOB_NAME = "trending-refresh"


@dataclass(slots=True)
class RefreshResult:
	total: int
	updated: int
	failed: int


class TrendingRefresher:
	"""Recomputes `trending_score` for recent posts with the shared feed scorer."""

	def __init__(
		self,
		*,
		repository: Optional[TrendingRepository] = None,
		interval_seconds: Optional[int] = None,
		window_hours: Optional[int] = None,
		cache_max_items: Optional[int] = None,
	) -> None:
		self.repo = repository or TrendingRepository()
		self.interval_seconds = interval_seconds or settings.trending_refresh_interval_seconds
		self.window_hours = window_hours or settings.trending_refresh_window_hours
		self.cache_max_items = cache_max_items or settings.trending_cache_max_items
		self._running = False

	async def run_forever(self) -> None:
		self._running = True
		while self._running:
			try:
				await self.run_once()
			except Exception:  # pragma: no cover - keep the loop alive
				_LOG.exception("trending_refresher.run_once_failed")
			await asyncio.sleep(self.interval_seconds)

	def stop(self) -> None:
		self._running = False

	async def run_once(self, *, now: Optional[datetime] = None) -> RefreshResult:
		start = time.perf_counter()
		current_time = now or datetime.now(timezone.utc)
		items = await self.repo.list_recent_items(since=current_time - timedelta(hours=self.window_hours))
		ranked = scoring.rank_scored(items, current_time, skip_invalid=True)

		updated = 0
		failed = 0
		for entry in ranked:
			try:
				await self.repo.update_trending_score(entry.item.item_id, entry.score)
				updated += 1
			except Exception:
				failed += 1
				obs_metrics.TRENDING_REFRESH_WRITE_FAILURES.inc()
				_LOG.exception("trending_refresher.update_failed", extra={"item_id": entry.item.item_id})

		try:
			await trending_cache.replace_ranking(
				[(entry.item.item_id, entry.score) for entry in ranked],
				max_length=self.cache_max_items,
			)
		except Exception:
			obs_metrics.TRENDING_CACHE_FAILURES.inc()
			_LOG.exception("trending_refresher.cache_write_failed")

		duration = time.perf_counter() - start
		obs_metrics.TRENDING_REFRESH_DURATION.observe(duration)
		obs_metrics.job_run(_JOB_NAME, "ok" if failed == 0 else "partial")
		_LOG.info(
			"trending_refresher.recompute",
			extra={"count": len(items), "updated": updated, "failed": failed, "duration": duration},
		)
		return RefreshResult(total=len(items), updated=updated, failed=failed)


__all__ = ["RefreshResult", "TrendingRefresher"]
