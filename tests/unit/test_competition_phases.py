from datetime import datetime, timedelta, timezone

import pytest

from cookoff.domain.competitions.models import CompetitionPhase, CompetitionWindow
from cookoff.domain.competitions.phases import derive_phase, format_remaining
from cookoff.domain.exceptions import InvalidCompetitionWindow

T = datetime(2025, 10, 27, 8, 0, tzinfo=timezone.utc)


def _window() -> CompetitionWindow:
	return CompetitionWindow.create(
		registration_start=T,
		competition_start=T + timedelta(seconds=3600),
		competition_end=T + timedelta(seconds=7200),
		voting_end=T + timedelta(seconds=90000),
	)


def test_registration_before_competition_start():
	status = derive_phase(_window(), T)
	assert status.phase is CompetitionPhase.REGISTRATION
	assert status.seconds_remaining == 3600
	assert status.next_phase_at == T + timedelta(seconds=3600)


def test_competing_exactly_at_competition_start():
	status = derive_phase(_window(), T + timedelta(seconds=3600))
	assert status.phase is CompetitionPhase.COMPETING
	assert status.seconds_remaining == 3600


def test_boundary_continuity_at_competition_start():
	window = _window()
	before = derive_phase(window, window.competition_start - timedelta(seconds=1))
	at = derive_phase(window, window.competition_start)
	assert before.phase is CompetitionPhase.REGISTRATION
	assert before.seconds_remaining == 1
	assert at.phase is CompetitionPhase.COMPETING


def test_voting_exactly_at_competition_end():
	status = derive_phase(_window(), T + timedelta(seconds=7200))
	assert status.phase is CompetitionPhase.VOTING
	assert status.seconds_remaining == 90000 - 7200
	assert status.next_phase_at == T + timedelta(seconds=90000)


def test_completed_at_and_after_voting_end():
	for offset in (90000, 90001):
		status = derive_phase(_window(), T + timedelta(seconds=offset))
		assert status.phase is CompetitionPhase.COMPLETED
		assert status.seconds_remaining == 0
		assert status.next_phase_at is None


def test_seconds_remaining_is_floored():
	status = derive_phase(_window(), T + timedelta(milliseconds=500))
	assert status.seconds_remaining == 3599


def test_registration_applies_before_registration_start():
	status = derive_phase(_window(), T - timedelta(days=2))
	assert status.phase is CompetitionPhase.REGISTRATION
	assert status.seconds_remaining == 2 * 86400 + 3600


def test_derivation_is_deterministic_for_same_input():
	now = T + timedelta(seconds=4321)
	assert derive_phase(_window(), now) == derive_phase(_window(), now)


def test_phase_sequence_never_goes_backwards():
	order = list(CompetitionPhase)
	previous = 0
	for offset in range(0, 95000, 500):
		index = order.index(derive_phase(_window(), T + timedelta(seconds=offset)).phase)
		assert index >= previous
		previous = index


def test_naive_now_is_treated_as_utc():
	status = derive_phase(_window(), (T + timedelta(seconds=3600)).replace(tzinfo=None))
	assert status.phase is CompetitionPhase.COMPETING


def test_window_out_of_order_is_rejected():
	with pytest.raises(InvalidCompetitionWindow) as excinfo:
		CompetitionWindow.create(
			registration_start=T,
			competition_start=T + timedelta(hours=2),
			competition_end=T + timedelta(hours=1),
			voting_end=T + timedelta(hours=3),
		)
	assert excinfo.value.detail == "window_not_chronological"


def test_zero_length_phases_are_skipped():
	window = CompetitionWindow.create(
		registration_start=T,
		competition_start=T,
		competition_end=T,
		voting_end=T + timedelta(hours=1),
	)
	assert derive_phase(window, T).phase is CompetitionPhase.VOTING


def test_voting_start_defaults_to_competition_end():
	window = _window()
	assert window.voting_start == window.competition_end


def test_window_from_row_maps_competition_columns():
	row = {
		"comp_start_time": T,
		"join_end_time": T + timedelta(hours=1),
		"submit_end_time": T + timedelta(hours=2),
		"vote_end_time": T + timedelta(hours=3),
	}
	window = CompetitionWindow.from_row(row)
	assert window.competition_start == T + timedelta(hours=1)
	assert window.voting_start == T + timedelta(hours=2)
	assert window.voting_end == T + timedelta(hours=3)


@pytest.mark.parametrize(
	("seconds", "expected"),
	[
		(45, "45s"),
		(125, "2m 5s"),
		(7325, "2h 2m"),
		(90000, "1d 1h"),
		(0, "Time's up!"),
		(-5, "Time's up!"),
		(59, "59s"),
		(60, "1m 0s"),
		(3599, "59m 59s"),
		(3600, "1h 0m"),
		(86399, "23h 59m"),
		(86400, "1d 0h"),
	],
)
def test_format_remaining(seconds, expected):
	assert format_remaining(seconds) == expected
