"""Vote tallying for finished competitions."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Optional


@dataclass(slots=True)
class Submission:
	id: str
	user_id: str
	image_url: Optional[str] = None
	username: Optional[str] = None


@dataclass(slots=True)
class RankedSubmission:
	rank: int
	submission: Submission
	vote_count: int


def tally_votes(submissions: Iterable[Submission], votes: Iterable[str]) -> list[RankedSubmission]:
	"""Rank submissions by votes received.

	``votes`` holds the submission id of each cast vote. Ties share a rank and
	the following rank is skipped (1, 2, 2, 4). Votes for unknown submissions
	are ignored.
	"""

	entries = list(submissions)
	known = {entry.id for entry in entries}
	counts = Counter(vote for vote in votes if vote in known)
	ordered = sorted(entries, key=lambda entry: counts.get(entry.id, 0), reverse=True)

	ranked: list[RankedSubmission] = []
	previous_votes: Optional[int] = None
	current_rank = 0
	for position, entry in enumerate(ordered, start=1):
		vote_count = counts.get(entry.id, 0)
		if vote_count != previous_votes:
			current_rank = position
			previous_votes = vote_count
		ranked.append(RankedSubmission(rank=current_rank, submission=entry, vote_count=vote_count))
	return ranked


def winners(ranked: Iterable[RankedSubmission]) -> list[RankedSubmission]:
	"""Rows sharing first place, empty when nobody received a vote."""

	return [row for row in ranked if row.rank == 1 and row.vote_count > 0]


__all__ = ["RankedSubmission", "Submission", "tally_votes", "winners"]
