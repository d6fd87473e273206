"""Weekly scheduling of the morning, noon and night cook-offs."""

from __future__ import annotations

import random
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from cookoff.domain.competitions.models import CompetitionSlot, CompetitionWindow
from cookoff.domain.trending.models import as_utc
from cookoff.settings import settings

# Local start hour of each slot; every slot runs on Mondays.
SLOT_START_HOURS = {
	CompetitionSlot.MORNING: 8,
	CompetitionSlot.NOON: 16,
	CompetitionSlot.NIGHT: 22,
}

REGISTRATION_HOURS = 1
SUBMISSION_HOURS = 1
VOTING_HOURS = 1
# Results stay visible this long after voting closes before the next competition is created
RESULTS_HOURS = 1

SLOT_NAMES = {
	CompetitionSlot.MORNING: (
		"AM Fuel Fest",
		"Morning Munchies Mashup",
		"Brunch Battle Royale",
		"Midday Meal Mania",
		"Daylight Delights",
		"The Sunrise Scramble",
		"Pancake Palooza",
		"Griddle Games",
	),
	CompetitionSlot.NOON: (
		"The Sunset Supper",
		"Evening Eats Throwdown",
		"After Class Cook-Off",
		"The Sunset Sizzle",
		"Twilight Takedown",
		"Dinner Duel",
		"The Kitchen Kollision",
		"Post-Lecture Plates",
	),
	CompetitionSlot.NIGHT: (
		"Late Night Cravez",
		"Late Night Loot",
		"After Hour Eats",
		'The "2 AM" Challenge',
		"The Insomniac's Snack-Off",
		"Midnight Munchies Madness",
		"The Study Grub Games",
		"Nocturnal Nom-Off",
	),
}


def _zone(tz: Optional[tzinfo]) -> tzinfo:
	return tz or ZoneInfo(settings.competition_timezone)


def next_slot_start(slot: CompetitionSlot, now: datetime, *, tz: Optional[tzinfo] = None) -> datetime:
	"""Next Monday start of ``slot`` strictly after ``now``, returned in UTC."""

	zone = _zone(tz)
	local_now = as_utc(now).astimezone(zone)
	days_until_monday = (-local_now.weekday()) % 7
	start_date = local_now.date() + timedelta(days=days_until_monday)
	start = datetime(
		start_date.year,
		start_date.month,
		start_date.day,
		SLOT_START_HOURS[slot],
		tzinfo=zone,
	)
	if start <= local_now:
		start += timedelta(days=7)
	return start.astimezone(timezone.utc)


def next_competition_window(
	slot: CompetitionSlot,
	now: datetime,
	*,
	tz: Optional[tzinfo] = None,
) -> CompetitionWindow:
	"""Window of the next weekly competition for ``slot``."""

	start = next_slot_start(slot, now, tz=tz)
	competition_start = start + timedelta(hours=REGISTRATION_HOURS)
	competition_end = competition_start + timedelta(hours=SUBMISSION_HOURS)
	return CompetitionWindow.create(
		registration_start=start,
		competition_start=competition_start,
		competition_end=competition_end,
		voting_end=competition_end + timedelta(hours=VOTING_HOURS),
	)


def results_visible_until(window: CompetitionWindow) -> datetime:
	return window.voting_end + timedelta(hours=RESULTS_HOURS)


def generate_competition_name(slot: CompetitionSlot, rng: Optional[random.Random] = None) -> str:
	chooser = rng or random
	return chooser.choice(SLOT_NAMES[slot])


__all__ = [
	"SLOT_NAMES",
	"SLOT_START_HOURS",
	"generate_competition_name",
	"next_competition_window",
	"next_slot_start",
	"results_visible_until",
]
