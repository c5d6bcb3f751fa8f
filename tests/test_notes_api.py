"""Tests for the note endpoints."""

from conftest import FIXED_NOW_ISO


def _save(client, title, markdown, **extra):
    return client.post("/api/notes", json={"title": title, "markdown": markdown, **extra})


class TestSaveNote:
    """Tests for POST /api/notes."""

    def test_create(self, client, note_store):
        res = _save(client, "Project", "# Project\n\nLinks to [[Roadmap]] #work", tags=["manual"])

        assert res.status_code == 200
        data = res.json()
        note = data["note"]
        assert note["id"] > 0
        assert note["title"] == "Project"
        assert note["tags"] == "work,manual"
        assert note["wikilinks"] == "Roadmap"
        assert note["word_count"] == 5
        assert note["reading_time"] == 1
        assert note["created_at"] == FIXED_NOW_ISO
        assert data["metadata"]["wikilinks"] == ["Roadmap"]
        assert data["stats"]["elements"] == 2
        assert note_store.count() == 1

    def test_create_without_tags(self, client):
        res = _save(client, "Plain", "just text")
        assert res.json()["note"]["tags"] is None

    def test_frontmatter_dates_are_stored(self, client):
        markdown = "---\ncreated: 2024-01-01\nmodified: 2024-01-02\n---\nBody"
        note = _save(client, "Dated", markdown).json()["note"]
        assert note["created_at"] == "2024-01-01T00:00:00.000Z"
        assert note["updated_at"] == "2024-01-02T00:00:00.000Z"

    def test_update(self, client, note_store):
        created = _save(client, "Draft", "first version").json()["note"]

        res = _save(client, "Final", "second version", id=created["id"])
        assert res.status_code == 200
        assert res.json()["note"]["id"] == created["id"]
        assert note_store.get(created["id"]).title == "Final"
        assert note_store.count() == 1

    def test_update_missing(self, client):
        res = _save(client, "Ghost", "text", id=404)
        assert res.status_code == 404

    def test_empty_title(self, client):
        res = _save(client, "", "text")
        assert res.status_code == 400


class TestReadNotes:
    """Tests for GET /api/notes and GET /api/notes/{id}."""

    def test_list(self, client):
        _save(client, "A", "---\nmodified: 2024-01-01\n---\na")
        _save(client, "B", "---\nmodified: 2024-05-01\n---\nb")

        res = client.get("/api/notes")
        assert res.status_code == 200
        assert [n["title"] for n in res.json()["notes"]] == ["B", "A"]

    def test_get_with_backlinks(self, client):
        target = _save(client, "Target", "# Target").json()["note"]
        source = _save(client, "Source", "See [[Target]]").json()["note"]
        _save(client, "Other", "See [[Elsewhere]]")

        res = client.get(f"/api/notes/{target['id']}")
        assert res.status_code == 200
        data = res.json()
        assert data["note"]["title"] == "Target"
        assert [b["id"] for b in data["backlinks"]] == [source["id"]]

    def test_self_link_not_a_backlink(self, client):
        note = _save(client, "Loop", "Points at [[Loop]]").json()["note"]
        res = client.get(f"/api/notes/{note['id']}")
        assert res.json()["backlinks"] == []

    def test_get_missing(self, client):
        res = client.get("/api/notes/12345")
        assert res.status_code == 404


class TestDeleteNote:
    """Tests for DELETE /api/notes/{id}."""

    def test_delete(self, client, note_store):
        note = _save(client, "Temp", "bye").json()["note"]

        res = client.delete(f"/api/notes/{note['id']}")
        assert res.status_code == 200
        assert res.json() == {"success": True}
        assert note_store.count() == 0

    def test_delete_missing(self, client):
        res = client.delete("/api/notes/777")
        assert res.status_code == 404
