"""Profile badge tiers earned by winning competitions."""

from __future__ import annotations

from typing import Optional

from cookoff.domain.competitions.models import CompetitionTag

FRESHMAN = CompetitionTag(tag="🍕 Foodie Freshman", color="#9ca3af", bg_color="#2e2e2e", border_color="#9ca3af")

# Highest threshold first; the first tier whose threshold is met wins.
WIN_TIERS: tuple[tuple[int, CompetitionTag], ...] = (
	(50, CompetitionTag(tag="👑 Culinary Legend", color="#FFD700", bg_color="#2e2a1f", border_color="#FFD700")),
	(20, CompetitionTag(tag="🌟 Master Chef", color="#FF69B4", bg_color="#2e1f2a", border_color="#FF69B4")),
	(10, CompetitionTag(tag="🔥 Food Champion", color="#FF4500", bg_color="#2e1f1f", border_color="#FF4500")),
	(5, CompetitionTag(tag="⭐ Rising Star", color="#FF8C00", bg_color="#2e251f", border_color="#FF8C00")),
	(2, CompetitionTag(tag="🌱 Promising Cook", color="#32CD32", bg_color="#1f2e1f", border_color="#32CD32")),
	(1, CompetitionTag(tag="🍳 Kitchen Newbie", color="#87CEEB", bg_color="#1f2a2e", border_color="#87CEEB")),
)


def competition_tag(wins: Optional[int], custom: Optional[CompetitionTag] = None) -> CompetitionTag:
	"""Badge for a win count; a fully populated custom tag takes precedence."""

	if custom is not None and all((custom.tag, custom.color, custom.bg_color, custom.border_color)):
		return custom
	if not wins or wins < 0:
		return FRESHMAN
	for threshold, tag in WIN_TIERS:
		if wins >= threshold:
			return tag
	return FRESHMAN


__all__ = ["FRESHMAN", "WIN_TIERS", "competition_tag"]
