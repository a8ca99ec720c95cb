"""
Tests for Site Content API endpoints.
"""
import pytest

from backend.services.site_content import SECTIONS


class TestSiteContent:
    """Tests for GET /api/site."""

    @pytest.mark.asyncio
    async def test_returns_all_sections(self, client):
        response = await client.get("/api/site")

        assert response.status_code == 200
        data = response.json()
        assert set(data) == set(SECTIONS)

    @pytest.mark.asyncio
    async def test_nav_links_in_page_order(self, client):
        response = await client.get("/api/site")

        hrefs = [link["href"] for link in response.json()["nav_links"]]
        assert hrefs == ["#home", "#about", "#technology", "#gallery", "#contact"]

    @pytest.mark.asyncio
    async def test_timeline_in_chronological_order(self, client):
        response = await client.get("/api/site")

        years = [int(entry["year"]) for entry in response.json()["timeline"]]
        assert years == sorted(years)
        assert years[0] == 2009

    @pytest.mark.asyncio
    async def test_clearance_levels_match_form_options(self, client):
        response = await client.get("/api/site")

        values = [option["value"] for option in response.json()["clearance_levels"]]
        assert values == ["general", "restricted", "confidential", "secret", "top-secret"]


class TestSiteSection:
    """Tests for GET /api/site/{section}."""

    @pytest.mark.asyncio
    async def test_single_section(self, client):
        response = await client.get("/api/site/capabilities")

        assert response.status_code == 200
        assert len(response.json()) == 6

    @pytest.mark.asyncio
    async def test_unknown_section_404(self, client):
        response = await client.get("/api/site/pricing")

        assert response.status_code == 404
        data = response.json()
        assert data["error"] is True
        assert data["message"] == "Section not found: pricing"


class TestRoot:
    """Tests for the API root."""

    @pytest.mark.asyncio
    async def test_root(self, client):
        response = await client.get("/")

        assert response.status_code == 200
        assert "version" in response.json()
