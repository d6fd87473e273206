"""Domain models for the trending feed."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping


def as_utc(value: datetime) -> datetime:
	"""Return an aware datetime; naive values are interpreted as UTC."""

	if value.tzinfo is None:
		return value.replace(tzinfo=timezone.utc)
	return value


@dataclass(frozen=True, slots=True)
class ContentItem:
	"""A rankable feed entry with engagement counters."""

	item_id: str
	created_at: datetime
	likes: int = 0
	comments: int = 0

	@classmethod
	def from_row(cls, row: Mapping[str, Any]) -> "ContentItem":
		"""Build an item from a posts row (`id`, `created_at`, `likes_count`, `comments_count`)."""

		created = row["created_at"]
		if isinstance(created, str):
			created = datetime.fromisoformat(created.replace("Z", "+00:00"))
		return cls(
			item_id=str(row["id"]),
			created_at=as_utc(created),
			likes=int(row.get("likes_count") or 0),
			comments=int(row.get("comments_count") or 0),
		)


@dataclass(slots=True)
class ScoreBreakdown:
	"""Individual scoring components for a single item."""

	age_hours: float
	base_engagement: float
	velocity: float
	decay_divisor: float
	quality_multiplier: float
	distribution_bonus: float
	core: float
	velocity_bonus: float
	recency_bonus: float
	total: float
	stale: bool = False


@dataclass(slots=True)
class ScoredItem:
	"""Item paired with its trending score for one ranking pass."""

	item: ContentItem
	score: float
	breakdown: ScoreBreakdown


__all__ = ["ContentItem", "ScoreBreakdown", "ScoredItem", "as_utc"]
