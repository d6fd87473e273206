"""Trending score for the food feed.

Blends weighted engagement, the balance between likes and comments, engagement
velocity and freshness into a single ordering key. Scores only mean something
relative to other items ranked against the same ``now``; they are recomputed on
every fetch and by the periodic refresh job, which shares this module.
"""

from __future__ import annotations

import logging
from datetime import datetime
from time import perf_counter
from typing import Iterable, Optional

from cookoff.domain.exceptions import InvalidContentItem
from cookoff.domain.trending.models import ContentItem, ScoreBreakdown, ScoredItem, as_utc
from cookoff.obs import metrics as obs_metrics
from cookoff.settings import settings

_LOG = logging.getLogger(__name__)

LIKE_WEIGHT = 3.0
COMMENT_WEIGHT = 8.0

STALE_AFTER_HOURS = 48.0
STALE_SCORE = 0.0001

DECAY_BASE = 1.8
DECAY_PERIOD_HOURS = 12.0

QUALITY_BOTH = 2.5
QUALITY_COMMENTS_ONLY = 2.0
QUALITY_LIKES_ONLY = 1.0
QUALITY_NONE = 0.5

DISTRIBUTION_WEIGHT = 1.5
VELOCITY_WEIGHT = 3.0
VELOCITY_BONUS_CAP = 100.0
RECENCY_WEIGHT = 800.0


def age_hours(item: ContentItem, now: datetime, *, clock_skew_seconds: Optional[int] = None) -> float:
	"""Hours since the item was created, clamped at zero.

	Items dated slightly in the future (client clock drift) count as brand new;
	anything beyond the skew tolerance is rejected.
	"""

	tolerance = settings.trending_clock_skew_seconds if clock_skew_seconds is None else clock_skew_seconds
	delta_seconds = (as_utc(now) - as_utc(item.created_at)).total_seconds()
	if delta_seconds < -tolerance:
		raise InvalidContentItem(f"created_at_in_future:{item.item_id}")
	return max(delta_seconds, 0.0) / 3600.0


def _validate(item: ContentItem) -> None:
	if item.likes < 0 or item.comments < 0:
		raise InvalidContentItem(f"negative_counter:{item.item_id}")


def quality_multiplier(likes: int, comments: int) -> float:
	if likes > 0 and comments > 0:
		return QUALITY_BOTH
	if comments > 0:
		return QUALITY_COMMENTS_ONLY
	if likes > 0:
		return QUALITY_LIKES_ONLY
	return QUALITY_NONE


def distribution_bonus(likes: int, comments: int) -> float:
	total = likes + comments
	if total <= 0:
		return 1.0
	like_ratio = likes / total
	comment_ratio = comments / total
	return 1.0 + min(like_ratio, comment_ratio) * DISTRIBUTION_WEIGHT


def score_breakdown(item: ContentItem, now: datetime, *, clock_skew_seconds: Optional[int] = None) -> ScoreBreakdown:
	"""Compute every scoring component for a single item."""

	_validate(item)
	age = age_hours(item, now, clock_skew_seconds=clock_skew_seconds)
	base = item.likes * LIKE_WEIGHT + item.comments * COMMENT_WEIGHT

	if age > STALE_AFTER_HOURS:
		return ScoreBreakdown(
			age_hours=age,
			base_engagement=base,
			velocity=0.0,
			decay_divisor=0.0,
			quality_multiplier=0.0,
			distribution_bonus=0.0,
			core=0.0,
			velocity_bonus=0.0,
			recency_bonus=0.0,
			total=STALE_SCORE,
			stale=True,
		)

	velocity = base / max(age, 1.0)
	decay = DECAY_BASE ** (age / DECAY_PERIOD_HOURS)
	quality = quality_multiplier(item.likes, item.comments)
	balance = distribution_bonus(item.likes, item.comments)
	core = base * quality * balance / decay
	velocity_bonus = min(velocity * VELOCITY_WEIGHT, VELOCITY_BONUS_CAP)
	recency_bonus = RECENCY_WEIGHT / (1.0 + age)
	return ScoreBreakdown(
		age_hours=age,
		base_engagement=base,
		velocity=velocity,
		decay_divisor=decay,
		quality_multiplier=quality,
		distribution_bonus=balance,
		core=core,
		velocity_bonus=velocity_bonus,
		recency_bonus=recency_bonus,
		total=core + velocity_bonus + recency_bonus,
	)


def score_item(item: ContentItem, now: datetime, *, clock_skew_seconds: Optional[int] = None) -> float:
	return score_breakdown(item, now, clock_skew_seconds=clock_skew_seconds).total


def rank_scored(
	items: Iterable[ContentItem],
	now: datetime,
	*,
	clock_skew_seconds: Optional[int] = None,
	skip_invalid: bool = False,
) -> list[ScoredItem]:
	"""Score and order items, dropping any with a non-positive score.

	Ties fall back to newer ``created_at`` then ``item_id`` so a re-rank at the
	same ``now`` is stable. Invalid items raise ``InvalidContentItem`` unless
	``skip_invalid`` is set, in which case they are logged and left out.
	"""

	start = perf_counter()
	scored: list[ScoredItem] = []
	stale = 0
	for item in items:
		try:
			breakdown = score_breakdown(item, now, clock_skew_seconds=clock_skew_seconds)
		except InvalidContentItem as exc:
			if not skip_invalid:
				raise
			_LOG.warning("trending.invalid_item", extra={"item_id": item.item_id, "reason": exc.detail})
			continue
		if breakdown.stale:
			stale += 1
		scored.append(ScoredItem(item=item, score=breakdown.total, breakdown=breakdown))

	scored.sort(
		key=lambda entry: (entry.score, as_utc(entry.item.created_at).timestamp(), entry.item.item_id),
		reverse=True,
	)
	ranked = [entry for entry in scored if entry.score > 0]

	elapsed_ms = (perf_counter() - start) * 1000.0
	dropped = len(scored) - len(ranked)
	obs_metrics.TRENDING_RANK_CANDIDATES.inc(len(scored))
	if dropped:
		obs_metrics.TRENDING_RANK_DROPPED.inc(dropped)
	if stale:
		obs_metrics.TRENDING_STALE_ITEMS.inc(stale)
	obs_metrics.TRENDING_RANK_DURATION.observe(elapsed_ms)
	_LOG.debug(
		"trending.rank",
		extra={"candidates": len(scored), "dropped": dropped, "stale": stale, "duration_ms": round(elapsed_ms, 3)},
	)
	return ranked


def rank(items: Iterable[ContentItem], now: datetime, *, clock_skew_seconds: Optional[int] = None) -> list[ContentItem]:
	"""Return the items reordered by descending trending score."""

	return [entry.item for entry in rank_scored(items, now, clock_skew_seconds=clock_skew_seconds)]


__all__ = [
	"age_hours",
	"distribution_bonus",
	"quality_multiplier",
	"rank",
	"rank_scored",
	"score_breakdown",
	"score_item",
]
