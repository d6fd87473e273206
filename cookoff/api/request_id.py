"""Request ID helper for endpoints and error handlers.

The observability middleware binds a request id into the logging context and
onto ``request.state``. Error paths read it back from there.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Request

from cookoff.obs import logging as obs_logging

REQUEST_ID_ATTR = "request_id"


def get_request_id(request: Optional[Request] = None, default: str = "unknown") -> str:
    """Return the current request id if bound, else a default."""
    if request is not None:
        rid = getattr(request.state, REQUEST_ID_ATTR, None)
        if rid:
            return rid
    return obs_logging.current_request_id() or default
