"""Pydantic schemas for competition APIs."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from cookoff.domain.competitions.models import (
	CompetitionPhase,
	CompetitionSlot,
	CompetitionTag,
	CompetitionWindow,
	PhaseStatus,
)
from cookoff.domain.competitions.phases import format_remaining
from cookoff.domain.competitions.results import RankedSubmission, Submission


class CompetitionWindowSchema(BaseModel):
	registration_start: datetime
	competition_start: datetime
	competition_end: datetime
	voting_start: Optional[datetime] = None
	voting_end: datetime

	def to_domain(self) -> CompetitionWindow:
		return CompetitionWindow.create(
			registration_start=self.registration_start,
			competition_start=self.competition_start,
			competition_end=self.competition_end,
			voting_start=self.voting_start,
			voting_end=self.voting_end,
		)

	@classmethod
	def from_domain(cls, window: CompetitionWindow) -> "CompetitionWindowSchema":
		return cls(
			registration_start=window.registration_start,
			competition_start=window.competition_start,
			competition_end=window.competition_end,
			voting_start=window.voting_start,
			voting_end=window.voting_end,
		)


class PhaseRequest(BaseModel):
	window: CompetitionWindowSchema
	now: Optional[datetime] = None


class PhaseResponse(BaseModel):
	phase: CompetitionPhase
	seconds_remaining: int = Field(..., ge=0)
	formatted_remaining: str
	next_phase_at: Optional[datetime] = None

	@classmethod
	def from_status(cls, status: PhaseStatus) -> "PhaseResponse":
		return cls(
			phase=status.phase,
			seconds_remaining=status.seconds_remaining,
			formatted_remaining=format_remaining(status.seconds_remaining),
			next_phase_at=status.next_phase_at,
		)


class CompetitionStatusResponse(BaseModel):
	id: str
	slot: CompetitionSlot
	name: str
	window: CompetitionWindowSchema
	status: PhaseResponse


class SubmissionSchema(BaseModel):
	id: str = Field(..., min_length=1)
	user_id: str
	image_url: Optional[str] = None
	username: Optional[str] = None

	def to_domain(self) -> Submission:
		return Submission(id=self.id, user_id=self.user_id, image_url=self.image_url, username=self.username)


class ResultsRequest(BaseModel):
	submissions: list[SubmissionSchema] = Field(default_factory=list)
	votes: list[str] = Field(default_factory=list, description="Submission id of each cast vote")


class RankedSubmissionSchema(BaseModel):
	rank: int = Field(..., ge=1)
	id: str
	user_id: str
	username: Optional[str] = None
	image_url: Optional[str] = None
	vote_count: int = Field(..., ge=0)

	@classmethod
	def from_domain(cls, row: RankedSubmission) -> "RankedSubmissionSchema":
		return cls(
			rank=row.rank,
			id=row.submission.id,
			user_id=row.submission.user_id,
			username=row.submission.username,
			image_url=row.submission.image_url,
			vote_count=row.vote_count,
		)


class ResultsResponse(BaseModel):
	items: list[RankedSubmissionSchema]


class CompetitionTagSchema(BaseModel):
	tag: str
	color: str
	bg_color: str
	border_color: str

	@classmethod
	def from_domain(cls, tag: CompetitionTag) -> "CompetitionTagSchema":
		return cls(tag=tag.tag, color=tag.color, bg_color=tag.bg_color, border_color=tag.border_color)
