import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from app.main import app
from app.core.database import get_db
from app.db.seed import create_hotel, create_room


@pytest.fixture
def client(override_get_db):
    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


class TestHotelsAPI:
    """Test cases for the hotels API endpoint"""

    @pytest.mark.parametrize("strategy", ["unoptimized", "one_request"])
    def test_list_hotels(self, client, paris_hotels, strategy):
        response = client.get("/api/v1/hotels/", params={"strategy": strategy})

        assert response.status_code == 200
        result = response.json()
        assert [hotel["name"] for hotel in result] == ["Le Marais", "Montmartre", "Versailles"]

        required_fields = ["id", "name", "address", "geo_lat", "geo_lng", "rating", "rating_count", "cheapest_room"]
        for field in required_fields:
            assert field in result[0]

    def test_filters_from_query_params(self, client, paris_hotels):
        params = {
            "price_max": 1000,
            "rooms": 2,
            "lat": 48.8566,
            "lng": 2.3522,
            "distance": 10,
        }

        response = client.get("/api/v1/hotels/", params=params)

        assert response.status_code == 200
        result = response.json()
        assert len(result) == 1
        assert result[0]["name"] == "Le Marais"
        assert result[0]["cheapest_room"]["price"] == 950
        assert result[0]["distance"] < 10

    def test_repeated_types(self, client, paris_hotels):
        response = client.get("/api/v1/hotels/?types=Suite&types=Chambre%20simple")

        assert response.status_code == 200
        assert [hotel["name"] for hotel in response.json()] == ["Le Marais", "Montmartre"]

    def test_no_match_is_an_empty_list(self, client, paris_hotels):
        response = client.get("/api/v1/hotels/", params={"price_max": 10})

        assert response.status_code == 200
        assert response.json() == []

    def test_inverted_range(self, client):
        response = client.get("/api/v1/hotels/", params={"price_min": 500, "price_max": 100})
        assert response.status_code == 422

    def test_invalid_latitude(self, client):
        response = client.get("/api/v1/hotels/", params={"lat": 120, "lng": 2, "distance": 5})
        assert response.status_code == 422

    def test_unknown_strategy(self, client):
        response = client.get("/api/v1/hotels/", params={"strategy": "fastest"})
        assert response.status_code == 422

    def test_inconsistent_data_is_500(self, client, test_db_session, paris_hotels):
        broken = create_hotel(test_db_session, "Broken", address_zip=None)
        create_room(test_db_session, broken, price=100)
        test_db_session.commit()

        response = client.get("/api/v1/hotels/")
        assert response.status_code == 500

    def test_unreachable_database_is_503(self, client):
        class DownSession:
            def execute(self, *args, **kwargs):
                raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        app.dependency_overrides[get_db] = lambda: DownSession()

        response = client.get("/api/v1/hotels/")
        assert response.status_code == 503


class TestHealth:
    """Test cases for the health endpoint"""

    def test_healthy(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_unhealthy(self, client):
        class DownSession:
            def execute(self, *args, **kwargs):
                raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        app.dependency_overrides[get_db] = lambda: DownSession()

        response = client.get("/health")
        assert response.json()["status"] == "unhealthy"
