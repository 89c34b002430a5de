"""Tests for the scoring API."""

import pytest
from fastapi.testclient import TestClient

from leadgen.config import Settings
from leadgen.geo import StaticGeocoder
from leadgen.web.app import create_app

HOSPITAL = {
    "business_name": "Good Samaritan Hospital",
    "address": "401 15th Ave SE, Puyallup, WA",
    "last_test_date": "2000-01-01",
    "distance_miles": 3,
    "estimated_value": 5000,
    "contact_email": "facilities@goodsam.org",
    "contact_phone": "(253) 555-0101",
}

HOLDING_COMPANY = {
    "business_name": "Acme Holdings",
    "distance_miles": 25,
    "estimated_value": 500,
}


@pytest.fixture
def client():
    """Create test client."""
    app = create_app(settings=Settings(geocoder_url=""), geocoder=StaticGeocoder())
    return TestClient(app)


class TestBatchScoring:
    """Test POST /api/v1/score."""

    def test_scores_and_sorts(self, client):
        response = client.post("/api/v1/score", json={
            "prospects": [HOLDING_COMPANY, HOSPITAL],
            "options": {"min_score": 0},
        })

        assert response.status_code == 200
        data = response.json()
        assert [p["score"] for p in data["prospects"]] == [99, 30]
        assert data["metrics"]["hot_leads"] == 1
        assert data["metrics"]["cold_leads"] == 1
        assert data["metrics"]["average_score"] == 64.5

    def test_default_min_score(self, client):
        """Without options only warm and hot prospects qualify."""
        response = client.post("/api/v1/score", json={"prospects": [HOLDING_COMPANY, HOSPITAL]})

        data = response.json()
        assert [p["business_name"] for p in data["prospects"]] == ["Good Samaritan Hospital"]
        assert data["metrics"]["qualified_prospects"] == 1
        assert data["metrics"]["cold_leads"] == 0

    def test_options(self, client):
        response = client.post("/api/v1/score", json={
            "prospects": [HOLDING_COMPANY, HOSPITAL],
            "options": {"min_score": 0, "max_results": 1},
        })

        assert [p["business_name"] for p in response.json()["prospects"]] == ["Good Samaritan Hospital"]

    def test_temperature_option(self, client):
        response = client.post("/api/v1/score", json={
            "prospects": [HOLDING_COMPANY, HOSPITAL],
            "options": {"temperature": "cold", "min_score": 0},
        })

        assert [p["temperature"] for p in response.json()["prospects"]] == ["cold"]

    def test_within_radius_option(self, client):
        response = client.post("/api/v1/score", json={
            "prospects": [HOLDING_COMPANY, HOSPITAL],
            "options": {"within_radius": True},
        })

        assert response.json()["metrics"]["outside_radius"] == 1

    def test_geocodes_addresses(self, client):
        response = client.post("/api/v1/score", json={
            "prospects": [{"business_name": "Tacoma Plaza", "address": "Tacoma, WA"}],
        })

        [lead] = response.json()["prospects"]
        assert lead["coordinates"] == {"lat": 47.2529, "lng": -122.4598}
        assert lead["distance_miles"] == pytest.approx(9.12, abs=0.05)

    def test_empty_list(self, client):
        response = client.post("/api/v1/score", json={"prospects": []})

        assert response.status_code == 400
        assert "detail" in response.json()

    def test_missing_prospects(self, client):
        assert client.post("/api/v1/score", json={}).status_code == 400

    def test_invalid_record(self, client):
        response = client.post("/api/v1/score", json={"prospects": [{"address": "Tacoma"}]})
        assert response.status_code == 400

    def test_invalid_sort(self, client):
        response = client.post("/api/v1/score", json={
            "prospects": [HOSPITAL],
            "options": {"sort_by": "name"},
        })
        assert response.status_code == 400


class TestSingleScoring:
    """Test GET /api/v1/score."""

    def test_scores_query(self, client):
        response = client.get("/api/v1/score", params={
            "business": "Tacoma General Hospital",
            "address": "315 MLK Jr Way, Tacoma, WA",
            "lat": 47.2529,
            "lng": -122.4598,
        })

        assert response.status_code == 200
        data = response.json()
        # 25 + 23.75 + 16 + 8 + 1
        assert data["lead"]["score"] == 74
        assert data["lead"]["business_type"] == "medical"
        assert data["lead"]["source"] == "manual_input"
        assert data["analysis"]["temperature"] == "warm"
        assert data["analysis"]["action_plan"]["contact_method"] == "phone"
        assert data["analysis"]["breakdown"]["total"] == 74

    def test_type_hint(self, client):
        response = client.get("/api/v1/score", params={
            "business": "Acme Holdings",
            "address": "Puyallup, WA",
            "lat": 47.1853,
            "lng": -122.2928,
            "type": "restaurant",
        })

        assert response.json()["lead"]["business_type"] == "restaurant"

    def test_missing_parameters(self, client):
        response = client.get("/api/v1/score", params={"business": "Tacoma General Hospital"})

        assert response.status_code == 400
        assert "Missing required parameters" in response.json()["detail"]


class TestGeoEndpoints:
    """Test distance and route endpoints."""

    def test_distance(self, client):
        response = client.get("/api/v1/distance", params={
            "lat1": 47.1853, "lng1": -122.2928, "lat2": 47.2529, "lng2": -122.4598,
        })

        assert response.status_code == 200
        assert response.json()["miles"] == pytest.approx(9.12, abs=0.01)

    def test_distance_out_of_range(self, client):
        response = client.get("/api/v1/distance", params={"lat1": 91, "lng1": 0, "lat2": 0, "lng2": 0})
        assert response.status_code == 400

    def test_route(self, client):
        response = client.post("/api/v1/route", json={"prospects": [
            {"business_name": "Tacoma Plaza", "address": "Tacoma, WA"},
            {"business_name": "Sumner Store", "coordinates": {"lat": 47.2029, "lng": -122.2351}},
            {"business_name": "Boise Cafe", "address": "Boise, ID"},
        ]})

        assert response.status_code == 200
        data = response.json()
        assert data["start"] == {"lat": 47.1853, "lng": -122.2928}
        assert [s["business_name"] for s in data["stops"]] == ["Sumner Store", "Tacoma Plaza"]
        assert [s["business_name"] for s in data["unrouted"]] == ["Boise Cafe"]

    def test_route_custom_start(self, client):
        response = client.post("/api/v1/route", json={
            "start": {"lat": 47.2529, "lng": -122.4598},
            "prospects": [{"business_name": "Tacoma Plaza", "address": "Tacoma, WA"}],
        })

        assert response.json()["total_miles"] == 0

    def test_route_empty(self, client):
        assert client.post("/api/v1/route", json={"prospects": []}).status_code == 400


class TestConfigEndpoints:
    """Test config and health endpoints."""

    def test_config(self, client):
        response = client.get("/api/v1/config")

        assert response.status_code == 200
        data = response.json()
        assert data["service_area"]["radius_miles"] == 20.0
        assert data["service_area"]["center"] == {"lat": 47.1853, "lng": -122.2928}
        assert data["business_types"]["medical"]["priority"] == 95
        assert data["scoring_factors"]["compliance_status"] == "40%"
        assert data["temperature_ranges"] == {"hot": "85-100", "warm": "60-84", "cold": "30-59"}

    def test_health(self, client):
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["geocoder"] == "StaticGeocoder"
