"""Pydantic schemas for the trending feed API."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from cookoff.domain.trending.models import ContentItem, ScoredItem, as_utc


class ContentItemSchema(BaseModel):
	id: str = Field(..., min_length=1)
	created_at: datetime
	likes_count: int = Field(default=0, ge=0)
	comments_count: int = Field(default=0, ge=0)

	def to_domain(self) -> ContentItem:
		return ContentItem(
			item_id=self.id,
			created_at=as_utc(self.created_at),
			likes=self.likes_count,
			comments=self.comments_count,
		)


class ScoreBreakdownSchema(BaseModel):
	age_hours: float
	base_engagement: float
	velocity: float
	decay_divisor: float
	quality_multiplier: float
	distribution_bonus: float
	core: float
	velocity_bonus: float
	recency_bonus: float
	stale: bool


class RankedItemSchema(BaseModel):
	id: str
	score: float
	created_at: datetime
	likes_count: int
	comments_count: int
	breakdown: Optional[ScoreBreakdownSchema] = None

	@classmethod
	def from_scored(cls, entry: ScoredItem, *, include_breakdown: bool = False) -> "RankedItemSchema":
		breakdown = None
		if include_breakdown:
			b = entry.breakdown
			breakdown = ScoreBreakdownSchema(
				age_hours=b.age_hours,
				base_engagement=b.base_engagement,
				velocity=b.velocity,
				decay_divisor=b.decay_divisor,
				quality_multiplier=b.quality_multiplier,
				distribution_bonus=b.distribution_bonus,
				core=b.core,
				velocity_bonus=b.velocity_bonus,
				recency_bonus=b.recency_bonus,
				stale=b.stale,
			)
		return cls(
			id=entry.item.item_id,
			score=entry.score,
			created_at=entry.item.created_at,
			likes_count=entry.item.likes,
			comments_count=entry.item.comments,
			breakdown=breakdown,
		)


class TrendingRequest(BaseModel):
	items: list[ContentItemSchema] = Field(default_factory=list)
	now: Optional[datetime] = None
	limit: Optional[int] = Field(default=None, ge=1, le=1000)
	include_breakdown: bool = False


class TrendingResponse(BaseModel):
	now: datetime
	items: list[RankedItemSchema]


class CachedTrendingRow(BaseModel):
	id: str
	score: float


class CachedTrendingResponse(BaseModel):
	items: list[CachedTrendingRow]
