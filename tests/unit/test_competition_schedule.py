import random
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from cookoff.domain.competitions import schedule
from cookoff.domain.competitions.models import CompetitionSlot

FRIDAY = datetime(2025, 10, 24, 12, 0, tzinfo=timezone.utc)
MONDAY = datetime(2025, 10, 27, tzinfo=timezone.utc)


def test_next_slot_start_rolls_forward_to_monday():
	start = schedule.next_slot_start(CompetitionSlot.MORNING, FRIDAY)
	assert start == MONDAY.replace(hour=8)
	assert start.weekday() == 0


def test_next_slot_start_same_day_before_start():
	now = MONDAY.replace(hour=7)
	assert schedule.next_slot_start(CompetitionSlot.NOON, now) == MONDAY.replace(hour=16)
	assert schedule.next_slot_start(CompetitionSlot.NIGHT, now) == MONDAY.replace(hour=22)


def test_next_slot_start_skips_a_week_once_started():
	now = MONDAY.replace(hour=8)
	assert schedule.next_slot_start(CompetitionSlot.MORNING, now) == MONDAY.replace(hour=8) + timedelta(days=7)


def test_next_slot_start_honours_timezone():
	toronto = ZoneInfo("America/Toronto")
	start = schedule.next_slot_start(CompetitionSlot.MORNING, FRIDAY, tz=toronto)
	# 08:00 EDT
	assert start == MONDAY.replace(hour=12)
	assert start.tzinfo == timezone.utc


def test_next_competition_window_uses_hourly_phases():
	window = schedule.next_competition_window(CompetitionSlot.MORNING, FRIDAY)
	start = MONDAY.replace(hour=8)
	assert window.registration_start == start
	assert window.competition_start == start + timedelta(hours=1)
	assert window.competition_end == start + timedelta(hours=2)
	assert window.voting_start == window.competition_end
	assert window.voting_end == start + timedelta(hours=3)
	assert schedule.results_visible_until(window) == start + timedelta(hours=4)


def test_generate_competition_name_picks_from_slot_list():
	rng = random.Random(42)
	for slot in CompetitionSlot:
		assert schedule.generate_competition_name(slot, rng) in schedule.SLOT_NAMES[slot]
