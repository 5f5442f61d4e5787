"""
Test cases for journal and mood routes
"""
import pytest

from tests.helpers import OTHER, auth_headers

JOURNAL = "/api/v1/journal"
MOOD = "/api/v1/mood"


def create_entry(client, **fields):
    payload = {"content": "Wrote three pages today"}
    payload.update(fields)
    response = client.post(JOURNAL, headers=auth_headers(), json=payload)
    assert response.status_code == 201
    return response.json()


class TestJournal:
    """Test cases for journal CRUD"""

    def test_create_defaults(self, client):
        entry = create_entry(client)

        assert entry["title"] == "Untitled Entry"
        assert entry["tags"] == []
        assert entry["mood"] is None
        assert "createdAt" in entry

    def test_create_with_mood_and_tags(self, client):
        entry = create_entry(client, title="Gratitude", mood="happy", tags=["family", "sun"])

        assert entry["title"] == "Gratitude"
        assert entry["mood"] == "happy"
        assert entry["tags"] == ["family", "sun"]

    def test_create_requires_content(self, client):
        response = client.post(JOURNAL, headers=auth_headers(), json={"title": "Empty", "content": "  "})

        assert response.status_code == 400

    def test_tags_are_short_labels(self, client):
        response = client.post(JOURNAL, headers=auth_headers(), json={"content": "x", "tags": ["t" * 51]})

        assert response.status_code == 422

    def test_pagination(self, client):
        for n in range(5):
            create_entry(client, title=f"Entry {n}")

        response = client.get(JOURNAL, headers=auth_headers(), params={"page": 2, "limit": 2})

        body = response.json()
        assert response.status_code == 200
        assert body["pagination"] == {"page": 2, "limit": 2, "total": 5, "pages": 3}
        assert [e["title"] for e in body["entries"]] == ["Entry 2", "Entry 1"]

    def test_update_only_given_fields(self, client):
        entry = create_entry(client, title="Before", tags=["a"])

        response = client.put(f"{JOURNAL}/{entry['id']}", headers=auth_headers(), json={"title": "After"})

        body = response.json()
        assert response.status_code == 200
        assert body["title"] == "After"
        assert body["content"] == entry["content"]
        assert body["tags"] == ["a"]

    @pytest.mark.parametrize("field", ["title", "content", "tags"])
    def test_required_field_cannot_be_nulled(self, client, field):
        entry = create_entry(client, title="Keep", tags=["a"])

        response = client.put(f"{JOURNAL}/{entry['id']}", headers=auth_headers(), json={field: None})

        assert response.status_code == 400
        assert response.json() == {"message": f"{field.capitalize()} cannot be null"}
        stored = client.get(f"{JOURNAL}/{entry['id']}", headers=auth_headers()).json()
        assert stored[field] == entry[field]

    def test_mood_can_be_cleared(self, client):
        entry = create_entry(client, mood="calm")

        response = client.put(f"{JOURNAL}/{entry['id']}", headers=auth_headers(), json={"mood": None})

        assert response.status_code == 200
        assert response.json()["mood"] is None

    def test_ownership(self, client):
        entry = create_entry(client)

        assert client.get(f"{JOURNAL}/{entry['id']}", headers=auth_headers(OTHER)).status_code == 401
        assert client.get(f"{JOURNAL}/missing", headers=auth_headers()).status_code == 404
        assert client.get(JOURNAL, headers=auth_headers(OTHER)).json()["pagination"]["total"] == 0

    def test_delete(self, client):
        entry = create_entry(client)

        response = client.delete(f"{JOURNAL}/{entry['id']}", headers=auth_headers())

        assert response.json() == {"message": "Entry deleted successfully"}
        assert client.get(f"{JOURNAL}/{entry['id']}", headers=auth_headers()).status_code == 404


class TestMood:
    """Test cases for mood logging"""

    def test_log_and_history(self, client):
        first = client.post(MOOD, headers=auth_headers(), json={"emotion": "anxious", "intensity": 7})
        second = client.post(
            MOOD, headers=auth_headers(), json={"emotion": "happy", "intensity": 3, "note": "walked outside"}
        )

        history = client.get(f"{MOOD}/history", headers=auth_headers()).json()

        assert first.status_code == 201
        assert second.json()["note"] == "walked outside"
        assert [m["emotion"] for m in history] == ["happy", "anxious"]

    def test_intensity_out_of_range(self, client):
        response = client.post(MOOD, headers=auth_headers(), json={"emotion": "sad", "intensity": 11})

        assert response.status_code == 422

    def test_unknown_emotion(self, client):
        response = client.post(MOOD, headers=auth_headers(), json={"emotion": "bored", "intensity": 5})

        assert response.status_code == 422

    def test_history_is_private(self, client):
        client.post(MOOD, headers=auth_headers(), json={"emotion": "neutral", "intensity": 5})

        assert client.get(f"{MOOD}/history", headers=auth_headers(OTHER)).json() == []
