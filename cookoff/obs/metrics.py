"""Central registry for Prometheus metrics used across the backend."""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

REQUEST_COUNTER = Counter(
	"cookoff_http_requests_total",
	"Total HTTP requests processed",
	["route", "method", "status"],
)

REQUEST_LATENCY = Histogram(
	"cookoff_http_request_duration_seconds",
	"HTTP request latency in seconds",
	["route", "method"],
	buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0),
)

TRENDING_RANK_CANDIDATES = Counter(
	"cookoff_trending_rank_candidates_total",
	"Content items considered by the trending ranker",
)

TRENDING_RANK_DROPPED = Counter(
	"cookoff_trending_rank_dropped_total",
	"Content items excluded from a ranked view for a non-positive score",
)

TRENDING_RANK_DURATION = Histogram(
	"cookoff_trending_rank_duration_ms",
	"Trending rank duration",
	buckets=[1, 2, 5, 10, 20, 40, 80, 160],
)

TRENDING_STALE_ITEMS = Counter(
	"cookoff_trending_stale_items_total",
	"Content items pinned to the staleness floor",
)

TRENDING_REFRESH_DURATION = Histogram(
	"cookoff_trending_refresh_duration_seconds",
	"Duration of trending score refresh jobs",
	buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0),
)

TRENDING_REFRESH_WRITE_FAILURES = Counter(
	"cookoff_trending_refresh_write_failures_total",
	"Trending score rows that failed to persist",
)

TRENDING_CACHE_FAILURES = Counter(
	"cookoff_trending_cache_failures_total",
	"Redis trending cache write failures",
)

PHASE_DERIVATIONS = Counter(
	"cookoff_competition_phase_derivations_total",
	"Competition phase derivations",
	["phase"],
)

PHASE_TRANSITIONS = Counter(
	"cookoff_competition_phase_transitions_total",
	"Competition phase transitions observed by watchers",
	["from_phase", "to_phase"],
)

PHASE_WATCHERS_ACTIVE = Gauge(
	"cookoff_competition_phase_watchers_active",
	"Running competition phase watchers",
)

BACKGROUND_RUNS = Counter(
	"cookoff_jobs_runs_total",
	"Background job executions",
	["name", "result"],
)

REDIS_UP = Gauge("cookoff_redis_up", "Redis availability (1=up,0=down)")
POSTGRES_UP = Gauge("cookoff_postgres_up", "Postgres availability (1=up,0=down)")


def observe_request(route: str, method: str, status: int, elapsed_seconds: float) -> None:
	REQUEST_COUNTER.labels(route=route, method=method, status=str(status)).inc()
	REQUEST_LATENCY.labels(route=route, method=method).observe(elapsed_seconds)


def phase_derived(phase: str) -> None:
	PHASE_DERIVATIONS.labels(phase=phase).inc()


def phase_transition(from_phase: str, to_phase: str) -> None:
	PHASE_TRANSITIONS.labels(from_phase=from_phase, to_phase=to_phase).inc()


def job_run(name: str, result: str) -> None:
	BACKGROUND_RUNS.labels(name=name, result=result).inc()


def mark_redis(up: bool) -> None:
	REDIS_UP.set(1 if up else 0)


def mark_postgres(up: bool) -> None:
	POSTGRES_UP.set(1 if up else 0)
