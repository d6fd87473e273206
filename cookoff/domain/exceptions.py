"""Custom exceptions for scoring and competition services."""

from __future__ import annotations

from fastapi import status

if hasattr(status, "HTTP_422_UNPROCESSABLE_CONTENT"):
	_HTTP_422 = status.HTTP_422_UNPROCESSABLE_CONTENT
else:  # pragma: no cover - fallback for older Starlette builds
	_HTTP_422 = status.HTTP_422_UNPROCESSABLE_ENTITY


class CookoffError(Exception):
	"""Base class for domain errors."""

	status_code: int = status.HTTP_400_BAD_REQUEST
	detail: str = "cookoff_error"

	def __init__(self, detail: str | None = None) -> None:
		super().__init__(detail or self.detail)
		if detail:
			self.detail = detail


class InvalidContentItem(CookoffError):
	"""Raised for content items with negative counters or far-future timestamps."""

	status_code = _HTTP_422
	detail = "invalid_content_item"


class InvalidCompetitionWindow(CookoffError):
	"""Raised when competition timestamps are not in non-decreasing order."""

	status_code = _HTTP_422
	detail = "invalid_competition_window"
