"""FastAPI routes for the trending feed."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, Query

from cookoff.api.errors import to_http_error
from cookoff.domain.exceptions import CookoffError
from cookoff.domain.trending import cache as trending_cache
from cookoff.domain.trending import scoring
from cookoff.domain.trending.models import as_utc
from cookoff.domain.trending.schemas import (
	CachedTrendingResponse,
	CachedTrendingRow,
	RankedItemSchema,
	TrendingRequest,
	TrendingResponse,
)

router = APIRouter(prefix="/feed", tags=["feed"])


@router.post("/trending", response_model=TrendingResponse)
async def rank_trending_endpoint(payload: TrendingRequest) -> TrendingResponse:
	now = as_utc(payload.now) if payload.now else datetime.now(timezone.utc)
	try:
		ranked = scoring.rank_scored([item.to_domain() for item in payload.items], now)
	except CookoffError as exc:
		raise to_http_error(exc) from exc
	if payload.limit is not None:
		ranked = ranked[: payload.limit]
	return TrendingResponse(
		now=now,
		items=[RankedItemSchema.from_scored(entry, include_breakdown=payload.include_breakdown) for entry in ranked],
	)


@router.get("/trending/cached", response_model=CachedTrendingResponse)
async def cached_trending_endpoint(
	limit: int = Query(default=50, ge=1, le=500),
	offset: int = Query(default=0, ge=0),
) -> CachedTrendingResponse:
	try:
		rows = await trending_cache.fetch_ranking(limit=limit, offset=offset)
	except Exception as exc:
		raise HTTPException(status_code=503, detail="trending_cache_unavailable") from exc
	return CachedTrendingResponse(items=[CachedTrendingRow(id=item_id, score=score) for item_id, score in rows])
