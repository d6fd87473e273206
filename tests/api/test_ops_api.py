import pytest

from cookoff.api import ops as ops_api
from cookoff.settings import settings
from cookoff.workers.trending_refresher import RefreshResult


@pytest.mark.asyncio
async def test_liveness(api_client):
	response = await api_client.get("/health/live")
	assert response.status_code == 200
	assert response.json() == {"status": "ok"}
	assert response.headers.get("X-Request-Id")


@pytest.mark.asyncio
async def test_readiness_reports_degraded_without_postgres(api_client):
	response = await api_client.get("/health/ready")
	assert response.status_code == 503
	body = response.json()
	assert body["status"] == "degraded"
	assert body["checks"]["redis"]["ok"] is True
	assert body["checks"]["postgres"]["ok"] is False


@pytest.mark.asyncio
async def test_metrics_requires_token_unless_public(api_client):
	response = await api_client.get("/metrics")
	assert response.status_code == 403

	settings.obs_admin_token = "s3cret"
	response = await api_client.get("/metrics", headers={"Authorization": "Bearer s3cret"})
	assert response.status_code == 200
	assert "cookoff_" in response.text

	settings.obs_metrics_public = True
	response = await api_client.get("/metrics")
	assert response.status_code == 200


@pytest.mark.asyncio
async def test_manual_trending_refresh(api_client, monkeypatch):
	async def fake_run_once(*, now=None):
		return RefreshResult(total=4, updated=3, failed=1)

	monkeypatch.setattr(ops_api._refresher, "run_once", fake_run_once)
	settings.obs_admin_token = "s3cret"

	response = await api_client.post("/ops/trending/refresh", headers={"X-Admin-Token": "wrong"})
	assert response.status_code == 403

	response = await api_client.post("/ops/trending/refresh", headers={"X-Admin-Token": "s3cret"})
	assert response.status_code == 200
	assert response.json() == {"total": 4, "updated": 3, "failed": 1}
