"""FastAPI application entrypoint."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from cookoff.api import competitions, feed, ops
from cookoff.api.errors import install_error_handlers
from cookoff.api.middleware_request_id import RequestIdMiddleware
from cookoff.infra import postgres
from cookoff.infra.scheduler import JobScheduler
from cookoff.obs import init as obs_init
from cookoff.settings import settings
from cookoff.workers.trending_refresher import TrendingRefresher


@asynccontextmanager
async def lifespan(app: FastAPI):
	scheduler: JobScheduler | None = None
	if settings.trending_refresh_enabled:
		await postgres.init_pool()
		refresher = TrendingRefresher()
		scheduler = JobScheduler()
		scheduler.start()
		scheduler.schedule_every(
			"trending-refresh",
			refresher.run_once,
			seconds=refresher.interval_seconds,
		)
		app.state.trending_refresher = refresher
		app.state.scheduler = scheduler
	try:
		yield
	finally:
		if scheduler is not None:
			scheduler.shutdown()
		await postgres.close_pool()


app = FastAPI(title="Cookoff Core", lifespan=lifespan)
install_error_handlers(app)
obs_init(app)

# Ensure every request carries an X-Request-Id and make it available on request.state
app.add_middleware(RequestIdMiddleware)

app.include_router(feed.router, tags=["feed"])
app.include_router(competitions.router, tags=["competitions"])
app.include_router(ops.router, tags=["ops"])
