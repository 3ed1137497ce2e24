import sys
import os
import json
import threading
import http.client

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from section_notes.core.models import Note, Section, default_document, document_to_json
from section_notes.store.client import NotesStoreClient
from section_notes.store.server import create_server


@pytest.fixture
def server(tmp_path):
    srv = create_server("127.0.0.1", 0, data_dir=tmp_path)
    thread = threading.Thread(target=srv.serve_forever, daemon=True)
    thread.start()
    yield srv
    srv.shutdown()
    srv.server_close()
    thread.join(timeout=5)


def request(srv, method, path="/api/notes", body=None, headers=None):
    host, port = srv.server_address[:2]
    conn = http.client.HTTPConnection(host, port, timeout=5)
    try:
        conn.request(method, path, body=body, headers=headers or {})
        resp = conn.getresponse()
        return resp.status, dict(resp.getheaders()), resp.read()
    finally:
        conn.close()


def test_get_on_empty_store_returns_default(server):
    status, headers, body = request(server, "GET")

    assert status == 200
    assert headers["Access-Control-Allow-Origin"] == "*"
    assert json.loads(body) == document_to_json(default_document())


def test_post_replaces_document(server):
    doc = [{"id": "a", "title": "A", "notes": [{"id": "1", "text": "x", "completed": False}]}]

    status, _, body = request(
        server, "POST", body=json.dumps(doc), headers={"Content-Type": "application/json"}
    )
    assert status == 200
    assert json.loads(body) == {"success": True}

    status, _, body = request(server, "GET")
    assert json.loads(body) == doc


def test_options_preflight(server):
    status, headers, body = request(server, "OPTIONS")

    assert status == 204
    assert body == b""
    assert headers["Access-Control-Allow-Origin"] == "*"
    assert "POST" in headers["Access-Control-Allow-Methods"]
    assert headers["Access-Control-Allow-Headers"] == "Content-Type"


@pytest.mark.parametrize("method", ["PUT", "DELETE", "PATCH", "TRACE", "PURGE"])
def test_other_methods_are_rejected(server, method):
    status, _, body = request(server, method)
    assert status == 405
    assert body == b"Method not allowed"


def test_unknown_path_is_404(server):
    status, _, body = request(server, "GET", path="/api/other")
    assert status == 404
    assert json.loads(body) == {"error": "not found"}


def test_invalid_json_is_500(server):
    status, _, body = request(server, "POST", body="{not json")
    assert status == 500
    assert "error" in json.loads(body)


def test_client_round_trip(server):
    host, port = server.server_address[:2]
    doc = [
        Section(id="important", title="Important Notes", notes=[Note(id="2", text="**b**", completed=True)]),
        Section(id="17", title="New", notes=[]),
    ]
    with NotesStoreClient(f"http://{host}:{port}/api/notes") as client:
        assert client.save(doc) is True
        assert client.load() == doc
