"""Tests for training sheets and weekly schedules."""
from typing import Any, Dict, List

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def catalogue(auth_client: TestClient) -> Dict[str, List[int]]:
    """Three exercises and two methods."""
    exercises = [
        auth_client.post("/api/exercises", json={"name": name}).json()["data"]["id"]
        for name in ("Bench Press", "Squat", "Row")
    ]
    methods = [
        auth_client.post("/api/methods", json={"name": name}).json()["data"]["id"]
        for name in ("Drop Set", "Pyramid")
    ]
    return {"exercises": exercises, "methods": methods}


def sheet_payload(catalogue: Dict[str, List[int]], name: str = "Upper/Lower") -> Dict[str, Any]:
    bench, squat, row = catalogue["exercises"]
    drop_set, pyramid = catalogue["methods"]
    return {
        "name": name,
        "public_name": f"{name} (public)",
        "description": "Four days a week",
        "days": [
            {
                "day_number": 2,
                "name": "Lower",
                "entries": [{"exercise_id": squat, "method_id": pyramid, "series": 5, "repetitions": "5"}],
            },
            {
                "day_number": 1,
                "name": "Upper",
                "entries": [
                    {"exercise_id": bench, "method_id": drop_set, "series": 4, "repetitions": "8-12", "rest_seconds": 90},
                    {"exercise_id": row, "series": 3, "repetitions": "10"},
                ],
            },
        ],
    }


def create_sheet(client: TestClient, catalogue: Dict[str, List[int]], name: str = "Upper/Lower") -> Dict[str, Any]:
    response = client.post("/api/training-sheets", json=sheet_payload(catalogue, name))
    assert response.status_code == 201, response.text
    return response.json()["data"]


def test_create_sheet_returns_details(auth_client: TestClient, catalogue: Dict[str, List[int]]) -> None:
    """Test the created sheet comes back with ordered days and resolved entries."""
    sheet = create_sheet(auth_client, catalogue)

    assert sheet["name"] == "Upper/Lower"
    assert [day["day_number"] for day in sheet["days"]] == [1, 2]

    upper = sheet["days"][0]
    assert [entry["order"] for entry in upper["entries"]] == [0, 1]
    assert upper["entries"][0]["exercise"]["name"] == "Bench Press"
    assert upper["entries"][0]["method"]["name"] == "Drop Set"
    assert upper["entries"][0]["rest_seconds"] == 90
    assert upper["entries"][1]["method"] is None


def test_get_sheet_details(auth_client: TestClient, catalogue: Dict[str, List[int]]) -> None:
    sheet = create_sheet(auth_client, catalogue)

    response = auth_client.get(f"/api/training-sheets/{sheet['id']}")

    assert response.status_code == 200
    assert response.json()["data"]["days"][1]["entries"][0]["exercise"]["name"] == "Squat"


def test_list_sheets_newest_first(auth_client: TestClient, catalogue: Dict[str, List[int]]) -> None:
    """Test the selection list only carries id, name and public name."""
    first = create_sheet(auth_client, catalogue, "A")
    second = create_sheet(auth_client, catalogue, "B")

    summaries = auth_client.get("/api/training-sheets").json()["data"]

    assert [s["id"] for s in summaries] == [second["id"], first["id"]]
    assert summaries[0] == {"id": second["id"], "name": "B", "public_name": "B (public)"}


def test_create_sheet_with_unknown_exercise(auth_client: TestClient, catalogue: Dict[str, List[int]]) -> None:
    payload = {"name": "Broken", "days": [{"day_number": 1, "entries": [{"exercise_id": 999}]}]}

    response = auth_client.post("/api/training-sheets", json=payload)

    assert response.status_code == 422
    assert response.json()["meta"] == {"field": "exercise_id"}


def test_create_sheet_with_unknown_method(auth_client: TestClient, catalogue: Dict[str, List[int]]) -> None:
    exercise_id = catalogue["exercises"][0]
    payload = {"name": "Broken", "days": [{"day_number": 1, "entries": [{"exercise_id": exercise_id, "method_id": 999}]}]}
    assert auth_client.post("/api/training-sheets", json=payload).status_code == 422


def test_create_sheet_with_duplicate_days(auth_client: TestClient) -> None:
    payload = {"name": "Twice", "days": [{"day_number": 1}, {"day_number": 1}]}
    response = auth_client.post("/api/training-sheets", json=payload)
    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_replace_sheet(auth_client: TestClient, catalogue: Dict[str, List[int]]) -> None:
    """Test PUT rewrites the sheet and its days as a whole."""
    sheet = create_sheet(auth_client, catalogue)
    squat = catalogue["exercises"][1]

    response = auth_client.put(
        f"/api/training-sheets/{sheet['id']}",
        json={"name": "Full body", "days": [{"day_number": 1, "entries": [{"exercise_id": squat, "order": 3}]}]},
    )

    data = response.json()["data"]
    assert data["name"] == "Full body"
    assert data["public_name"] is None
    assert len(data["days"]) == 1
    assert data["days"][0]["entries"][0]["order"] == 3
    assert data["days"][0]["entries"][0]["exercise"]["name"] == "Squat"


def test_missing_sheet(auth_client: TestClient) -> None:
    assert auth_client.get("/api/training-sheets/999").status_code == 404
    assert auth_client.put("/api/training-sheets/999", json={"name": "x"}).status_code == 404
    assert auth_client.delete("/api/training-sheets/999").status_code == 404


def test_save_schedule(auth_client: TestClient, catalogue: Dict[str, List[int]]) -> None:
    """Test a week plan is stored with days sorted 1-7."""
    sheet = create_sheet(auth_client, catalogue)

    response = auth_client.post(
        "/api/schedules",
        json={
            "name": "Week 1",
            "week_days": [
                {"day": 3, "training_sheet_id": sheet["id"], "custom_name": "Legs"},
                {"day": 1, "training_sheet_id": sheet["id"]},
                {"day": 7},
            ],
        },
    )

    assert response.status_code == 201
    schedule = response.json()["data"]
    assert [d["day"] for d in schedule["week_days"]] == [1, 3, 7]
    assert schedule["week_days"][1]["custom_name"] == "Legs"
    assert schedule["week_days"][2]["training_sheet_id"] is None

    listed = auth_client.get("/api/schedules").json()["data"]
    assert [s["id"] for s in listed] == [schedule["id"]]


@pytest.mark.parametrize(
    "week_days",
    [
        [{"day": 0}],
        [{"day": 8}],
        [{"day": 1}, {"day": 1}],
        [{"day": d} for d in range(1, 8)] + [{"day": 1}],
    ],
)
def test_invalid_week_days(auth_client: TestClient, week_days: List[Dict[str, int]]) -> None:
    """Test day range, uniqueness and the 7-day limit."""
    response = auth_client.post("/api/schedules", json={"name": "Bad", "week_days": week_days})
    assert response.status_code == 422


def test_schedule_with_unknown_sheet(auth_client: TestClient) -> None:
    response = auth_client.post(
        "/api/schedules", json={"name": "Bad", "week_days": [{"day": 1, "training_sheet_id": 999}]}
    )
    assert response.status_code == 422
    assert response.json()["meta"] == {"field": "training_sheet_id"}


def test_replace_and_delete_schedule(auth_client: TestClient) -> None:
    created = auth_client.post("/api/schedules", json={"name": "Week", "week_days": [{"day": 1}]}).json()["data"]

    replaced = auth_client.put(
        f"/api/schedules/{created['id']}", json={"name": "Week (deload)", "week_days": [{"day": 2}, {"day": 1}]}
    ).json()["data"]
    assert replaced["name"] == "Week (deload)"
    assert [d["day"] for d in replaced["week_days"]] == [1, 2]

    assert auth_client.delete(f"/api/schedules/{created['id']}").status_code == 200
    assert auth_client.get(f"/api/schedules/{created['id']}").status_code == 404


def test_deleting_sheet_turns_schedule_days_into_rest(auth_client: TestClient, catalogue: Dict[str, List[int]]) -> None:
    """Test schedule days lose their sheet when it is deleted."""
    sheet = create_sheet(auth_client, catalogue)
    schedule = auth_client.post(
        "/api/schedules", json={"name": "Week", "week_days": [{"day": 1, "training_sheet_id": sheet["id"]}]}
    ).json()["data"]

    assert auth_client.delete(f"/api/training-sheets/{sheet['id']}").status_code == 200

    week_day = auth_client.get(f"/api/schedules/{schedule['id']}").json()["data"]["week_days"][0]
    assert week_day["day"] == 1
    assert week_day["training_sheet_id"] is None
