"""
Tests for the task board endpoints.
"""


class TestTasksAPI:
    """Test cases for /tasks."""

    def test_create_task(self, client):
        description = "Photograph new arrivals\nHoodies first, then tees"
        response = client.post("/api/v1/tasks", json={"description": description})

        assert response.status_code == 201
        task = response.json()
        assert task["title"] == "Photograph new arrivals"
        assert task["status"] == "backlog"
        assert task["priority"] == "medium"

    def test_title_is_truncated(self, client):
        task = client.post("/api/v1/tasks", json={"description": "x" * 120}).json()
        assert len(task["title"]) == 80

    def test_create_requires_description(self, client):
        response = client.post("/api/v1/tasks", json={"description": "   "})
        assert response.status_code == 400
        assert response.json()["detail"] == "Task description is required"

    def test_update_task(self, client):
        task = client.post("/api/v1/tasks", json={"description": "List items", "priority": "low"}).json()

        response = client.patch("/api/v1/tasks", json={
            "id": task["id"],
            "status": "in_progress",
            "description": "List items on Depop",
            "due_date": "2024-06-01T00:00:00Z",
        })

        assert response.status_code == 200
        updated = response.json()
        assert updated["status"] == "in_progress"
        assert updated["priority"] == "low"
        assert updated["title"] == "List items on Depop"
        assert updated["due_date"].startswith("2024-06-01")

        cleared = client.patch("/api/v1/tasks", json={"id": task["id"], "due_date": None}).json()
        assert cleared["due_date"] is None

    def test_update_errors(self, client):
        task = client.post("/api/v1/tasks", json={"description": "List items"}).json()

        assert client.patch("/api/v1/tasks", json={"status": "completed"}).status_code == 400
        response = client.patch("/api/v1/tasks", json={"id": task["id"]})
        assert response.status_code == 400
        assert response.json()["detail"] == "No fields provided to update"
        assert client.patch("/api/v1/tasks", json={"id": task["id"], "status": "done"}).status_code == 400
        assert client.patch("/api/v1/tasks", json={"id": "missing", "status": "completed"}).status_code == 404

    def test_delete_task(self, client):
        task = client.post("/api/v1/tasks", json={"description": "List items"}).json()

        assert client.delete("/api/v1/tasks").status_code == 400
        assert client.delete("/api/v1/tasks", params={"id": task["id"]}).status_code == 200
        assert client.delete("/api/v1/tasks", params={"id": task["id"]}).status_code == 404
        assert client.get("/api/v1/tasks").json() == []
