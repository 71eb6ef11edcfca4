import pytest
from fastapi.testclient import TestClient

from app.crud.history import history_crud


def create_entry(client: TestClient, payload: dict) -> dict:
    response = client.post("/history", json=payload)
    assert response.status_code == 201
    return response.json()["data"]


class TestCreateHistoryEntry:
    def test_create_success(self, client: TestClient, entry_payload):
        response = client.post("/history", json=entry_payload)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "History entry created successfully"
        assert body["data"]["id"] is not None
        assert body["data"]["volunteerId"] == 1
        assert body["data"]["eventId"] == 2
        assert body["data"]["eventName"] == "Food Drive"
        assert body["data"]["eventDate"] == "2024-01-01"
        assert body["data"]["eventLocation"] == "Hall"
        assert body["data"]["status"] == "scheduled"
        assert body["data"]["hoursWorked"] is None
        assert body["data"]["skillsUsed"] == []

    def test_create_with_status(self, client: TestClient, entry_payload):
        entry_payload["status"] = "cancelled"
        data = create_entry(client, entry_payload)
        assert data["status"] == "cancelled"

    def test_ids_are_unique(self, client: TestClient, entry_payload):
        first = create_entry(client, entry_payload)
        second = create_entry(client, entry_payload)
        assert first["id"] != second["id"]

    def test_zero_volunteer_id_accepted(self, client: TestClient, entry_payload):
        entry_payload["volunteerId"] = 0
        data = create_entry(client, entry_payload)
        assert data["volunteerId"] == 0

    @pytest.mark.parametrize(
        "field", ["volunteerId", "eventId", "eventName", "eventDate", "eventLocation"]
    )
    def test_missing_required_field(self, client: TestClient, entry_payload, field):
        del entry_payload[field]

        response = client.post("/history", json=entry_payload)

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert field in body["message"]

        # Nothing was stored
        assert client.get("/history").json()["data"] == []

    def test_missing_body(self, client: TestClient):
        response = client.post("/history")
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_create_completed_rejected(self, client: TestClient, entry_payload):
        entry_payload["status"] = "completed"
        response = client.post("/history", json=entry_payload)
        assert response.status_code == 400


class TestGetHistory:
    def test_get_by_id(self, client: TestClient, entry_payload):
        created = create_entry(client, entry_payload)

        response = client.get(f"/history/{created['id']}")

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert response.json()["data"]["eventName"] == "Food Drive"

    def test_get_unknown(self, client: TestClient):
        response = client.get("/history/999")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "History entry not found"}

    def test_get_non_numeric_id(self, client: TestClient):
        response = client.get("/history/abc")
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_volunteer_history(self, client: TestClient, entry_payload):
        create_entry(client, entry_payload)
        create_entry(client, {**entry_payload, "eventId": 3, "eventDate": "2024-05-01"})
        create_entry(client, {**entry_payload, "volunteerId": 2})

        response = client.get("/volunteers/1/history")

        assert response.status_code == 200
        data = response.json()["data"]
        assert [e["eventId"] for e in data] == [3, 2]

    def test_volunteer_history_empty(self, client: TestClient):
        response = client.get("/volunteers/7/history")
        assert response.status_code == 200
        assert response.json()["data"] == []

    def test_all_history(self, client: TestClient, entry_payload):
        create_entry(client, entry_payload)
        create_entry(client, {**entry_payload, "volunteerId": 2})

        response = client.get("/history")

        assert response.status_code == 200
        assert len(response.json()["data"]) == 2


class TestUpdateHistoryEntry:
    def test_partial_update(self, client: TestClient, entry_payload):
        created = create_entry(client, entry_payload)

        response = client.put(f"/history/{created['id']}", json={"eventName": "Winter Drive"})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "History entry updated successfully"
        assert body["data"]["eventName"] == "Winter Drive"
        assert body["data"]["eventLocation"] == "Hall"
        assert body["data"]["eventDate"] == "2024-01-01"
        assert body["data"]["volunteerId"] == 1

    def test_update_unknown(self, client: TestClient):
        response = client.put("/history/999", json={"eventName": "Nope"})
        assert response.status_code == 404
        assert response.json()["message"] == "History entry not found"

    def test_update_to_completed_rejected(self, client: TestClient, entry_payload):
        created = create_entry(client, entry_payload)

        response = client.put(f"/history/{created['id']}", json={"status": "completed"})

        assert response.status_code == 400
        assert "completed" in response.json()["message"]

    def test_null_required_field_rejected(self, client: TestClient, entry_payload):
        created = create_entry(client, entry_payload)

        response = client.put(f"/history/{created['id']}", json={"eventName": None})

        assert response.status_code == 400
        assert client.get(f"/history/{created['id']}").json()["data"]["eventName"] == "Food Drive"

    def test_hours_on_scheduled_rejected(self, client: TestClient, entry_payload):
        created = create_entry(client, entry_payload)
        response = client.put(f"/history/{created['id']}", json={"hoursWorked": 4})
        assert response.status_code == 400

    def test_null_skills_rejected(self, client: TestClient, entry_payload):
        created = create_entry(client, entry_payload)

        response = client.put(f"/history/{created['id']}", json={"skillsUsed": None})

        assert response.status_code == 400
        assert "skillsUsed" in response.json()["message"]
        follow_up = client.get(f"/history/{created['id']}")
        assert follow_up.status_code == 200
        assert follow_up.json()["data"]["skillsUsed"] == []
        assert client.get("/history").status_code == 200

    def test_null_status_rejected(self, client: TestClient, entry_payload):
        created = create_entry(client, entry_payload)

        response = client.put(f"/history/{created['id']}", json={"status": None})

        assert response.status_code == 400
        assert client.get(f"/history/{created['id']}").json()["data"]["status"] == "scheduled"

    def test_rating_on_scheduled_rejected(self, client: TestClient, entry_payload):
        created = create_entry(client, entry_payload)

        response = client.put(f"/history/{created['id']}", json={"rating": 5})

        assert response.status_code == 400
        assert response.json()["message"] == "rating can only be set on completed entries"
        stats = client.get(f"/volunteers/{created['volunteerId']}/stats").json()["data"]["stats"]
        assert stats["averageRating"] == 0.0

    def test_rating_on_completed_allowed(self, client: TestClient, entry_payload):
        created = create_entry(client, entry_payload)
        client.post(f"/history/{created['id']}/complete", json={"hoursWorked": 2})

        response = client.put(f"/history/{created['id']}", json={"rating": 3})

        assert response.status_code == 200
        assert response.json()["data"]["rating"] == 3


class TestCompleteEvent:
    def test_complete(self, client: TestClient, entry_payload):
        created = create_entry(client, entry_payload)

        response = client.post(
            f"/history/{created['id']}/complete",
            json={"hoursWorked": 5, "skillsUsed": ["Cooking"], "feedback": "Great", "rating": 5}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Event completed successfully"
        assert body["data"]["hoursWorked"] == 5
        assert body["data"]["status"] == "completed"
        assert body["data"]["eventName"] == "Food Drive"
        assert body["data"]["skillsUsed"] == ["Cooking"]
        assert body["data"]["rating"] == 5
        assert body["data"]["completedAt"] is not None

    def test_complete_with_numeric_string(self, client: TestClient, entry_payload):
        created = create_entry(client, entry_payload)
        response = client.post(f"/history/{created['id']}/complete", json={"hoursWorked": "5"})
        assert response.status_code == 200
        assert response.json()["data"]["hoursWorked"] == 5

    def test_complete_zero_hours(self, client: TestClient, entry_payload):
        created = create_entry(client, entry_payload)
        response = client.post(f"/history/{created['id']}/complete", json={"hoursWorked": 0})
        assert response.status_code == 200
        assert response.json()["data"]["hoursWorked"] == 0

    def test_complete_without_hours(self, client: TestClient, entry_payload):
        created = create_entry(client, entry_payload)

        response = client.post(f"/history/{created['id']}/complete", json={"feedback": "Fun"})

        assert response.status_code == 400
        assert "hoursWorked" in response.json()["message"]
        assert client.get(f"/history/{created['id']}").json()["data"]["status"] == "scheduled"

    def test_complete_unknown(self, client: TestClient):
        response = client.post("/history/999/complete", json={"hoursWorked": 5})
        assert response.status_code == 404

    def test_complete_cancelled_rejected(self, client: TestClient, entry_payload):
        created = create_entry(client, {**entry_payload, "status": "cancelled"})
        response = client.post(f"/history/{created['id']}/complete", json={"hoursWorked": 5})
        assert response.status_code == 400


class TestDeleteHistoryEntry:
    def test_delete(self, client: TestClient, entry_payload):
        created = create_entry(client, entry_payload)

        response = client.delete(f"/history/{created['id']}")

        assert response.status_code == 200
        assert response.json()["message"] == "History entry deleted successfully"
        assert response.json()["data"]["id"] == created["id"]
        assert client.get(f"/history/{created['id']}").status_code == 404

    def test_delete_unknown(self, client: TestClient):
        response = client.delete("/history/999")
        assert response.status_code == 404
        assert response.json()["success"] is False


class TestStatsEndpoints:
    def test_stats_without_entries(self, client: TestClient):
        response = client.get("/volunteers/12/stats")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["volunteer"] is None
        assert data["stats"]["totalEntries"] == 0
        assert data["stats"]["completedEntries"] == 0
        assert data["stats"]["totalHours"] == 0
        assert data["stats"]["averageRating"] == 0.0

    def test_top_volunteers(self, client: TestClient, make_entry):
        make_entry(volunteer_id=1, hours=4)
        make_entry(volunteer_id=2, hours=9)
        make_entry(volunteer_id=3, hours=6)

        response = client.get("/top-volunteers?limit=2")

        assert response.status_code == 200
        data = response.json()["data"]
        assert len(data) == 2
        assert [row["volunteerId"] for row in data] == [2, 3]
        assert data[0]["totalHours"] >= data[1]["totalHours"]
        assert data[0]["rank"] == 1
        assert data[0]["volunteerName"] == "Unknown"
        assert data[0]["volunteerSkills"] == []

    def test_top_volunteers_invalid_limit(self, client: TestClient):
        assert client.get("/top-volunteers?limit=0").status_code == 400
        assert client.get("/top-volunteers?limit=abc").status_code == 400

    def test_event_history(self, client: TestClient, make_entry):
        make_entry(volunteer_id=1, event_id=8)
        make_entry(volunteer_id=2, event_id=8)
        make_entry(volunteer_id=3, event_id=9)

        response = client.get("/events/8/history")

        assert response.status_code == 200
        data = response.json()["data"]
        assert [e["volunteerId"] for e in data] == [1, 2]
        assert all(e["volunteerName"] == "Unknown" for e in data)


class TestErrorEnvelope:
    def test_unexpected_error_is_500(self, client: TestClient, monkeypatch):
        def broken_store(db):
            raise RuntimeError("database is on fire")

        monkeypatch.setattr(history_crud, "get_all_history", broken_store)

        response = client.get("/history")

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "message": "Failed to get all history",
            "error": "database is on fire"
        }

    def test_unknown_route(self, client: TestClient):
        response = client.get("/does-not-exist")
        assert response.status_code == 404
        assert response.json()["success"] is False
