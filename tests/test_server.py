"""Tests for the HTTP API."""

import json

import pytest

from conftest import append, level_line, zone_line
from config import Config
from server import create_app


@pytest.fixture
def notes_dir(tmp_path):
    path = tmp_path / "notes"
    path.mkdir()
    (path / "b-act2.md").write_text("# Act 2\n")
    (path / "a-act1.md").write_text("# Act 1\n")
    return path


@pytest.fixture
def client(registry, notes_dir):
    cfg = Config(NOTES_DIR=str(notes_dir), EVENT_INTERVAL=0, EVENT_LIMIT=2)
    app = create_app(registry, cfg)
    app.testing = True
    return app.test_client()


def post(client, url, body):
    # The overlay page posts JSON without a content type
    return client.post(url, data=json.dumps(body))


class TestGetData:
    def test_returns_every_profile(self, client):
        res = client.get("/data")
        assert res.status_code == 200
        assert set(res.get_json()) == {"stand_alone", "steam"}
        assert res.headers["Cache-Control"] == "no-store"

    def test_does_not_rescan(self, client, log_file):
        append(log_file, zone_line("The Coast"))
        assert client.get("/data").get_json()["stand_alone"]["zone"] == "Loading"


class TestPostData:
    def test_update_then_state(self, client, log_file):
        append(log_file, zone_line("The Coast") + level_line(10))

        res = post(client, "/data", {"poe_client": "stand_alone"})

        assert res.status_code == 200
        data = res.get_json()["stand_alone"]
        assert data["zone"] == "The Coast"
        assert data["level"] == 10
        assert "<h2>Act 1</h2>" in data["htmlNote"]
        assert data["updatedAt"]

    def test_repeated_update_is_idempotent(self, client, log_file):
        append(log_file, zone_line("The Coast"))
        first = post(client, "/data", {"poe_client": "stand_alone"}).get_json()
        second = post(client, "/data", {"poe_client": "stand_alone"}).get_json()
        assert first == second

    def test_unknown_client(self, client):
        res = post(client, "/data", {"poe_client": "epic"})
        assert res.status_code == 404
        assert "epic" in res.get_json()["error"]

    def test_log_not_available(self, client):
        res = post(client, "/data", {"poe_client": "steam"})
        assert res.status_code == 503
        assert "error" in res.get_json()

    @pytest.mark.parametrize("body", ["not json", "[]", '{"poe_client": 3}', "{}"])
    def test_bad_body(self, client, body):
        assert client.post("/data", data=body).status_code == 400


class TestReset:
    def test_reset(self, client, log_file):
        append(log_file, zone_line("The Ledge") + level_line(15))
        post(client, "/data", {"poe_client": "stand_alone"})

        res = post(client, "/reset", {"poe_client": "stand_alone"})

        assert res.status_code == 200
        data = res.get_json()["stand_alone"]
        assert (data["zone"], data["level"]) == ("The Twilight Strand", 1)

    def test_unknown_client(self, client):
        assert post(client, "/reset", {"poe_client": "epic"}).status_code == 404

    def test_bad_body(self, client):
        assert client.post("/reset", data="nope").status_code == 400


class TestNoteList:
    def test_sorted_paths(self, client):
        res = client.get("/note")
        assert res.status_code == 200
        assert res.get_json() == ["/notes/a-act1.md", "/notes/b-act2.md"]

    def test_missing_directory(self, registry, tmp_path):
        app = create_app(registry, Config(NOTES_DIR=str(tmp_path / "gone")))
        res = app.test_client().get("/note")
        assert res.status_code == 500
        assert "error" in res.get_json()


class TestEvents:
    def test_stream_sends_state(self, client):
        res = client.get("/events")
        assert res.mimetype == "text/event-stream"
        assert res.headers["Access-Control-Allow-Origin"] == "*"

        events = [chunk for chunk in res.get_data(as_text=True).split("\n\n") if chunk]
        assert len(events) == 2
        payload = json.loads(events[0][len("data: "):])
        assert payload["stand_alone"]["zone"] == "Loading"


class TestStatic:
    def test_index_page(self, client):
        res = client.get("/")
        assert res.status_code == 200
        assert b"zone_display" in res.data

    def test_script(self, client):
        assert client.get("/main.js").status_code == 200

    def test_static_dir_from_config(self, registry, tmp_path):
        static = tmp_path / "static"
        static.mkdir()
        (static / "index.html").write_text("<p>custom overlay</p>")
        app = create_app(registry, Config(STATIC_DIR=str(static)))

        res = app.test_client().get("/")

        assert res.status_code == 200
        assert b"custom overlay" in res.data
