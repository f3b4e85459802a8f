"""Tests for the web API."""

import time
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from code_snippets.web import create_app
from code_snippets.web.state import state

FIXTURES = Path(__file__).parent / "fixtures"
PROJECT = FIXTURES / "project"


@pytest.fixture
def client():
    app = create_app()
    return TestClient(app)


def _wait_for_scan(client, scan_id, timeout=10.0):
    deadline = time.monotonic() + timeout
    while True:
        data = client.get(f"/api/scan/{scan_id}").json()
        if data["status"] not in ("pending", "running") or time.monotonic() > deadline:
            return data
        time.sleep(0.05)


def test_languages(client):
    res = client.get("/api/languages")
    assert res.status_code == 200
    data = res.json()
    assert data["default"] == "java"
    by_key = {lang["key"]: lang for lang in data["languages"]}
    assert ".py" in by_key["python"]["extensions"]
    assert by_key["python"]["extracts_functions"] is True
    assert by_key["css"]["extracts_functions"] is False
    assert "keyword" in by_key["java"]["tags"]


def test_highlight(client):
    res = client.post("/api/highlight", json={"text": "int x = 1;", "language": "java"})
    assert res.status_code == 200
    data = res.json()
    assert data["language"] == "java"
    assert data["spans"][0] == {"start": 0, "end": 3, "tag": "keyword"}
    assert data["runs"][-1] == {"start": 9, "end": 10, "tag": "default"}
    assert data["html"].startswith('<span class="tok-keyword">int</span>')


def test_highlight_unknown_language_falls_back(client):
    res = client.post("/api/highlight", json={"text": "return", "language": "klingon"})
    assert res.json()["language"] == "java"
    assert res.json()["spans"] == [{"start": 0, "end": 6, "tag": "keyword"}]


def test_highlight_requires_text(client):
    res = client.post("/api/highlight", json={"language": "java"})
    assert res.status_code == 422


def test_functions(client):
    res = client.post("/api/functions", json={
        "content": "def foo():\n    return 1\ndef bar():\n    return 2\n",
        "file_name": "mod.py",
        "project_name": "demo",
    })
    assert res.status_code == 200
    data = res.json()
    assert data["language"] == "python"
    assert data["count"] == 2
    assert data["functions"][0]["code"] == "def foo():\n    return 1\n"
    assert data["functions"][1]["gist_filename"] == "bar.py"


def test_functions_unknown_language(client):
    res = client.post("/api/functions", json={"content": "void f() {}", "file_name": "notes.txt"})
    assert res.status_code == 200
    assert res.json()["count"] == 0


def test_scan_fixture_project(client):
    res = client.post("/api/scan", json={"path": str(PROJECT)})
    assert res.status_code == 200
    scan_id = res.json()["scan_id"]
    assert res.json()["project_name"] == "project"
    # The API polls snapshots and never consumes a per-file event stream
    assert not state.get_scan(scan_id).streaming

    data = _wait_for_scan(client, scan_id)
    assert data["status"] == "done"
    assert data["count"] == 15
    assert data["files_done"] == 6
    assert data["skipped"] == []
    assert data["functions"][0]["function_name"] == "Calculator"

    listed = client.get("/api/scans").json()["scans"]
    assert scan_id in [s["scan_id"] for s in listed]


def test_scan_nonexistent_path(client, tmp_path):
    res = client.post("/api/scan", json={"path": str(tmp_path / "missing")})
    assert res.status_code == 404


def test_scan_file_path_rejected(client):
    res = client.post("/api/scan", json={"path": str(PROJECT / "sample.py")})
    assert res.status_code == 400


def test_scan_not_found(client):
    assert client.get("/api/scan/nope").status_code == 404
    assert client.delete("/api/scan/nope").status_code == 404


def test_delete_scan(client, tmp_path):
    (tmp_path / "a.py").write_text("def a():\n    pass\n")
    scan_id = client.post("/api/scan", json={"path": str(tmp_path)}).json()["scan_id"]
    res = client.delete(f"/api/scan/{scan_id}")
    assert res.status_code == 200
    assert res.json() == {"deleted": scan_id}
    assert client.get(f"/api/scan/{scan_id}").status_code == 404
