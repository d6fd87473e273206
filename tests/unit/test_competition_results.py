from cookoff.domain.competitions.results import Submission, tally_votes, winners
from cookoff.domain.competitions.tags import FRESHMAN, competition_tag
from cookoff.domain.competitions.models import CompetitionTag


def _subs(*ids: str) -> list[Submission]:
	return [Submission(id=sub_id, user_id=f"user-{sub_id}") for sub_id in ids]


def test_tally_votes_uses_competition_ranking():
	votes = ["a"] * 5 + ["b"] * 3 + ["c"] * 3 + ["d"]
	ranked = tally_votes(_subs("d", "c", "b", "a"), votes)

	assert [row.submission.id for row in ranked] == ["a", "c", "b", "d"]
	assert [row.rank for row in ranked] == [1, 2, 2, 4]
	assert [row.vote_count for row in ranked] == [5, 3, 3, 1]


def test_tally_votes_ignores_unknown_submissions():
	ranked = tally_votes(_subs("a", "b"), ["a", "ghost", "ghost", "ghost"])
	assert ranked[0].submission.id == "a"
	assert ranked[0].vote_count == 1
	assert ranked[1].vote_count == 0
	assert ranked[1].rank == 2


def test_winners_share_first_place():
	ranked = tally_votes(_subs("a", "b", "c"), ["a", "b", "a", "b", "c"])
	assert {row.submission.id for row in winners(ranked)} == {"a", "b"}


def test_no_winner_without_votes():
	ranked = tally_votes(_subs("a", "b"), [])
	assert [row.rank for row in ranked] == [1, 1]
	assert winners(ranked) == []


def test_competition_tag_tiers():
	assert competition_tag(None) is FRESHMAN
	assert competition_tag(0) is FRESHMAN
	assert competition_tag(1).tag == "🍳 Kitchen Newbie"
	assert competition_tag(4).tag == "🌱 Promising Cook"
	assert competition_tag(5).tag == "⭐ Rising Star"
	assert competition_tag(19).tag == "🔥 Food Champion"
	assert competition_tag(20).tag == "🌟 Master Chef"
	assert competition_tag(120).tag == "👑 Culinary Legend"


def test_custom_tag_overrides_only_when_complete():
	custom = CompetitionTag(tag="Head Chef", color="#fff", bg_color="#000", border_color="#fff")
	partial = CompetitionTag(tag="Head Chef", color="", bg_color="#000", border_color="#fff")

	assert competition_tag(3, custom) is custom
	assert competition_tag(3, partial).tag == "🌱 Promising Cook"
