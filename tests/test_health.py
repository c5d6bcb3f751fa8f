"""Tests for health and project info endpoints."""

from unittest.mock import MagicMock, patch

from httpx import ASGITransport, AsyncClient

from mdtree import __version__
from mdtree.main import app


async def test_health_returns_ok(tmp_path):
    """Test that /health returns status ok when the data directory exists."""
    mock_s = MagicMock()
    mock_s.data_path = tmp_path
    with patch("mdtree.main.get_settings", return_value=mock_s):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] in ("ok", "warning")
    assert data["data_path"] == "ok"
    assert "free_disk_gb" in data


async def test_health_reports_missing_data_path(tmp_path):
    mock_s = MagicMock()
    mock_s.data_path = tmp_path / "nope"
    with patch("mdtree.main.get_settings", return_value=mock_s):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/api/health")

    assert response.json()["data_path"] == "missing"


async def test_health_warns_on_low_disk(tmp_path):
    mock_s = MagicMock()
    mock_s.data_path = tmp_path
    with (
        patch("mdtree.main.get_settings", return_value=mock_s),
        patch("mdtree.main.shutil.disk_usage", return_value=(100, 99, 10 * 1024**2)),
    ):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/health")

    data = response.json()
    assert data["status"] == "warning"
    assert data["disk"] == "low"


async def test_root_returns_project_info():
    """Test that / returns project information."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/")

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "mdtree"
    assert data["version"] == __version__
    assert "description" in data
