"""FastAPI routes for cook-off competitions."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Query

from cookoff.api.errors import to_http_error
from cookoff.domain.competitions import schedule
from cookoff.domain.competitions.models import CompetitionSlot
from cookoff.domain.competitions.phases import derive_phase
from cookoff.domain.competitions.results import tally_votes
from cookoff.domain.competitions.schemas import (
	CompetitionStatusResponse,
	CompetitionTagSchema,
	CompetitionWindowSchema,
	PhaseRequest,
	PhaseResponse,
	RankedSubmissionSchema,
	ResultsRequest,
	ResultsResponse,
)
from cookoff.domain.competitions.service import CompetitionService
from cookoff.domain.competitions.tags import competition_tag
from cookoff.domain.exceptions import CookoffError
from cookoff.domain.trending.models import as_utc

router = APIRouter(prefix="/competitions", tags=["competitions"])

_service = CompetitionService()


def _now(value: Optional[datetime]) -> datetime:
	return as_utc(value) if value else datetime.now(timezone.utc)


@router.post("/phase", response_model=PhaseResponse)
async def phase_endpoint(payload: PhaseRequest) -> PhaseResponse:
	try:
		window = payload.window.to_domain()
	except CookoffError as exc:
		raise to_http_error(exc) from exc
	return PhaseResponse.from_status(derive_phase(window, _now(payload.now)))


@router.post("/results", response_model=ResultsResponse)
async def results_endpoint(payload: ResultsRequest) -> ResultsResponse:
	ranked = tally_votes([item.to_domain() for item in payload.submissions], payload.votes)
	return ResultsResponse(items=[RankedSubmissionSchema.from_domain(row) for row in ranked])


# Note: /tags must be defined BEFORE /{slot}/... routes to keep path matching explicit
@router.get("/tags", response_model=CompetitionTagSchema)
async def tag_endpoint(wins: Optional[int] = Query(default=None, ge=0)) -> CompetitionTagSchema:
	return CompetitionTagSchema.from_domain(competition_tag(wins))


@router.get("/{slot}/next-window", response_model=CompetitionWindowSchema)
async def next_window_endpoint(slot: CompetitionSlot, now: Optional[datetime] = Query(default=None)) -> CompetitionWindowSchema:
	return CompetitionWindowSchema.from_domain(schedule.next_competition_window(slot, _now(now)))


@router.get("/{slot}/status", response_model=CompetitionStatusResponse)
async def status_endpoint(slot: CompetitionSlot, now: Optional[datetime] = Query(default=None)) -> CompetitionStatusResponse:
	try:
		result = await _service.get_status(slot, now=_now(now))
	except CookoffError as exc:
		raise to_http_error(exc) from exc
	competition = result.competition
	return CompetitionStatusResponse(
		id=competition.id,
		slot=competition.slot,
		name=competition.name,
		window=CompetitionWindowSchema.from_domain(competition.window),
		status=PhaseResponse.from_status(result.status),
	)
