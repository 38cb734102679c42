"""Tests for the methods API."""
from fastapi.testclient import TestClient


def test_method_crud(auth_client: TestClient) -> None:
    """Test create, read, update and delete of a method."""
    created = auth_client.post("/api/methods", json={"name": "Drop Set", "description": "Reduce load, keep going"})
    assert created.status_code == 201
    method_id = created.json()["data"]["id"]

    assert auth_client.get(f"/api/methods/{method_id}").json()["data"]["name"] == "Drop Set"

    patched = auth_client.patch(f"/api/methods/{method_id}", json={"name": "Drop-set"})
    assert patched.json()["data"]["name"] == "Drop-set"
    assert patched.json()["data"]["description"] == "Reduce load, keep going"

    replaced = auth_client.put(f"/api/methods/{method_id}", json={"name": "Triple drop"})
    assert replaced.json()["data"]["description"] == ""

    assert auth_client.delete(f"/api/methods/{method_id}").status_code == 200
    response = auth_client.get(f"/api/methods/{method_id}")
    assert response.status_code == 404
    assert response.json()["error"] == f"Method '{method_id}' not found"


def test_list_and_search_methods(auth_client: TestClient) -> None:
    """Test methods are listed by name and searchable."""
    for name, description in (("Rest-Pause", "Short breaks"), ("Pyramid", "Increase the load"), ("Bi-set", "Two exercises")):
        auth_client.post("/api/methods", json={"name": name, "description": description})

    names = [m["name"] for m in auth_client.get("/api/methods").json()["data"]]
    assert names == ["Bi-set", "Pyramid", "Rest-Pause"]

    found = auth_client.get("/api/methods", params={"q": "LOAD"}).json()["data"]
    assert [m["name"] for m in found] == ["Pyramid"]


def test_delete_method_used_by_sheet(auth_client: TestClient) -> None:
    """Test a method referenced by a training sheet cannot be deleted."""
    exercise_id = auth_client.post("/api/exercises", json={"name": "Curl"}).json()["data"]["id"]
    method_id = auth_client.post("/api/methods", json={"name": "Drop Set"}).json()["data"]["id"]
    auth_client.post(
        "/api/training-sheets",
        json={
            "name": "Arms",
            "days": [{"day_number": 1, "entries": [{"exercise_id": exercise_id, "method_id": method_id}]}],
        },
    )

    assert auth_client.delete(f"/api/methods/{method_id}").status_code == 409


def test_missing_method(auth_client: TestClient) -> None:
    assert auth_client.delete("/api/methods/404").status_code == 404
    assert auth_client.patch("/api/methods/404", json={"name": "x"}).status_code == 404
