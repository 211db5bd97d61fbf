"""Integration tests for the JSON API over a real encrypted store."""

import pytest
from fastapi.testclient import TestClient

from choretally.main import app


@pytest.fixture
def client(document_store) -> TestClient:
    """Test client without lifespan; the store comes from the document_store fixture."""
    return TestClient(app)


@pytest.fixture
def smiths(client: TestClient) -> dict:
    """Household 1 with Smiths (user 1), Bob (user 2) and Laundry (category 1, weight 2)."""
    created = client.post("/api/create-household", json={"name": "Smiths"}).json()
    client.post("/api/join-household", json={"code": created["share_code"], "name": "Bob"})
    client.post("/api/categories", json={"household_id": 1, "name": "Laundry", "weight": 2})
    return created


@pytest.mark.integration
class TestHouseholdEndpoints:
    """Tests for household creation, joining and members."""

    def test_create_household(self, client: TestClient) -> None:
        """Test the creator response carries ids and share code."""
        response = client.post("/api/create-household", json={"name": "Smiths"})

        assert response.status_code == 200
        data = response.json()
        assert data["household_id"] == 1
        assert data["user_id"] == 1
        assert len(data["share_code"]) == 6

    def test_create_household_missing_name(self, client: TestClient) -> None:
        """Test a missing name is 400."""
        response = client.post("/api/create-household", json={})

        assert response.status_code == 400
        assert response.json()["code"] == "ERR_VALIDATION"

    def test_invalid_json_body(self, client: TestClient) -> None:
        """Test a non-JSON body is 400 Invalid JSON."""
        response = client.post(
            "/api/create-household",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid JSON"

    def test_join_household_and_list_users(self, client: TestClient, smiths: dict) -> None:
        """Test the joined user is listed with the share code."""
        response = client.get("/api/users", params={"household_id": 1})

        assert response.status_code == 200
        data = response.json()
        assert [u["name"] for u in data["users"]] == ["Smiths", "Bob"]
        assert data["share_code"] == smiths["share_code"]

    def test_join_household_invalid_code(self, client: TestClient, smiths: dict) -> None:
        """Test an unknown code is 404."""
        response = client.post("/api/join-household", json={"code": "ZZZZZZ", "name": "Eve"})

        assert response.status_code == 404
        assert response.json()["error"] == "Invalid code"

    def test_users_unknown_household(self, client: TestClient) -> None:
        """Test an unknown or missing household id is 404."""
        assert client.get("/api/users", params={"household_id": 5}).status_code == 404
        assert client.get("/api/users").status_code == 404

    def test_users_non_numeric_household(self, client: TestClient) -> None:
        """Test a non-numeric household id is treated as unknown and is 404."""
        response = client.get("/api/users", params={"household_id": "abc"})

        assert response.status_code == 404
        assert response.json() == {"error": "Household not found", "code": "ERR_NOT_FOUND"}

    @pytest.mark.parametrize("path", ["/api/categories", "/api/master-scale", "/api/history"])
    def test_reads_non_numeric_household(self, client: TestClient, smiths: dict, path: str) -> None:
        """Test every household read answers 404 for a non-numeric id."""
        assert client.get(path, params={"household_id": "1x"}).status_code == 404

    def test_update_user(self, client: TestClient, smiths: dict) -> None:
        """Test renaming returns the updated user."""
        response = client.post("/api/update-user", json={"user_id": 2, "name": "Robert"})

        assert response.status_code == 200
        assert response.json() == {"success": True, "user": {"id": 2, "name": "Robert"}}

    def test_update_unknown_user(self, client: TestClient, smiths: dict) -> None:
        """Test renaming an unknown user is 404."""
        response = client.post("/api/update-user", json={"user_id": 9, "name": "Ghost"})

        assert response.status_code == 404


@pytest.mark.integration
class TestCategoryAndTaskEndpoints:
    """Tests for categories, tasks, master scale and history."""

    def test_categories_listing(self, client: TestClient, smiths: dict) -> None:
        """Test categories include weight and per-user counts."""
        response = client.get("/api/categories", params={"household_id": 1})

        assert response.status_code == 200
        assert response.json() == [{"id": 1, "name": "Laundry", "weight": 2, "task_counts": {"1": 0, "2": 0}}]

    def test_create_category_duplicate(self, client: TestClient, smiths: dict) -> None:
        """Test a duplicate name ignoring case is 409."""
        response = client.post("/api/categories", json={"household_id": 1, "name": "laundry"})

        assert response.status_code == 409
        assert response.json()["error"] == "Category already exists"

    def test_create_category_default_weight(self, client: TestClient, smiths: dict) -> None:
        """Test the weight defaults to 1."""
        response = client.post("/api/categories", json={"household_id": 1, "name": "Dishes"})

        assert response.status_code == 200
        assert response.json() == {"id": 2, "name": "Dishes", "weight": 1}

    def test_log_task_and_master_scale(self, client: TestClient, smiths: dict) -> None:
        """Test a logged task moves the weighted totals."""
        response = client.post("/api/task", json={"user_id": 2, "category_id": 1})

        assert response.status_code == 200
        assert response.json() == {"success": True, "task_id": 1}
        scale = client.get("/api/master-scale", params={"household_id": 1}).json()
        assert scale == {"overall_counts": {"1": 0, "2": 2}}

    def test_log_task_invalid(self, client: TestClient, smiths: dict) -> None:
        """Test unknown ids are 404 and missing ids are 400."""
        assert client.post("/api/task", json={"user_id": 2, "category_id": 7}).status_code == 404
        assert client.post("/api/task", json={"user_id": 2}).status_code == 400

    def test_history(self, client: TestClient, smiths: dict) -> None:
        """Test history lists the newest task first with resolved names."""
        client.post("/api/task", json={"user_id": 1, "category_id": 1})
        client.post("/api/task", json={"user_id": 2, "category_id": 1})

        history = client.get("/api/history", params={"household_id": 1}).json()

        assert [(e["task_id"], e["user"], e["category"]) for e in history] == [
            (2, "Bob", "Laundry"),
            (1, "Smiths", "Laundry"),
        ]
        assert all(e["time"] for e in history)


@pytest.mark.integration
class TestAppEndpoints:
    """Tests for health, CORS and storage failures."""

    def test_health(self, client: TestClient) -> None:
        """Test health endpoint returns healthy status."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_cors_preflight(self, client: TestClient) -> None:
        """Test preflight requests are answered for the API."""
        response = client.options(
            "/api/task",
            headers={
                "Origin": "http://example.test",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"

    def test_corrupt_store_is_500(self, client: TestClient, document_store) -> None:
        """Test a corrupt data file surfaces as a server error without details."""
        document_store.path.parent.mkdir(parents=True, exist_ok=True)
        document_store.path.write_text("garbage", encoding="utf-8")

        response = client.get("/api/users", params={"household_id": 1})

        assert response.status_code == 500
        assert response.json() == {"error": "The data store is unavailable.", "code": "ERR_DOCUMENT_FORMAT"}
        assert document_store.path.read_text(encoding="utf-8") == "garbage"
