import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from fakeredis.aioredis import FakeRedis

from cookoff.infra import postgres
from cookoff.main import app
from cookoff.settings import settings


@pytest_asyncio.fixture(autouse=True)
async def fake_redis():
	from cookoff.infra.redis import redis_client, set_redis_client
	original = redis_client._client
	client = FakeRedis(decode_responses=True)
	set_redis_client(client)
	try:
		yield client
	finally:
		set_redis_client(original)
		await client.flushall()


@pytest.fixture(autouse=True)
def patch_postgres(monkeypatch):
	async def _noop():
		return None

	monkeypatch.setattr(postgres, "init_pool", _noop)
	monkeypatch.setattr(postgres, "close_pool", _noop)


@pytest.fixture(autouse=True)
def force_test_settings():
	"""Keep scoring and ops knobs at known values regardless of the local .env."""
	original_skew = settings.trending_clock_skew_seconds
	original_public = settings.obs_metrics_public
	original_token = settings.obs_admin_token
	original_tz = settings.competition_timezone
	settings.trending_clock_skew_seconds = 300
	settings.obs_metrics_public = False
	settings.obs_admin_token = None
	settings.competition_timezone = "UTC"
	try:
		yield
	finally:
		settings.trending_clock_skew_seconds = original_skew
		settings.obs_metrics_public = original_public
		settings.obs_admin_token = original_token
		settings.competition_timezone = original_tz


@pytest_asyncio.fixture
async def api_client():
	transport = ASGITransport(app=app)
	async with AsyncClient(transport=transport, base_url="http://testserver") as client:
		yield client
