from __future__ import annotations

import argparse
import json
import logging
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Any

from section_notes.core.models import default_document, document_to_json
from section_notes.settings import API_PATH, APP_NAME, DATA_DIR, DOCUMENT_KEY, SERVER_LOG_PATH, STORE_NAME
from section_notes.store.blob import JsonBlobStore

log = logging.getLogger(APP_NAME)

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}
PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def create_server(
    host: str = "127.0.0.1",
    port: int = 8888,
    *,
    data_dir: Path | None = None,
    store: JsonBlobStore | None = None,
) -> ThreadingHTTPServer:
    """
    Pass-through HTTP front for the notes blob:
      GET     -> stored document (or the default one)
      POST    -> replace the stored document wholesale
      OPTIONS -> CORS preflight
    """
    blobs = store or JsonBlobStore(data_dir or DATA_DIR, STORE_NAME)

    class NotesHandler(BaseHTTPRequestHandler):
        def do_GET(self) -> None:  # noqa: N802
            if not self._route_ok():
                return
            try:
                data = blobs.get_json(DOCUMENT_KEY)
                if data is None:
                    data = document_to_json(default_document())
            except Exception as exc:
                self._fail(exc)
                return
            self._write_json(200, data)

        def do_POST(self) -> None:  # noqa: N802
            if not self._route_ok():
                return
            try:
                body = self._read_json_body()
                blobs.set_json(DOCUMENT_KEY, body)
            except Exception as exc:
                self._fail(exc)
                return
            self._write_json(200, {"success": True})

        def do_OPTIONS(self) -> None:  # noqa: N802
            if not self._route_ok():
                return
            self.send_response(204)
            for name, value in PREFLIGHT_HEADERS.items():
                self.send_header(name, value)
            self.send_header("Content-Length", "0")
            self.end_headers()

        def _method_not_allowed(self) -> None:
            if not self._route_ok():
                return
            encoded = b"Method not allowed"
            self.send_response(405)
            self.send_header("Content-Type", "text/plain; charset=utf-8")
            self.send_header("Content-Length", str(len(encoded)))
            self.end_headers()
            if self.command != "HEAD":
                self.wfile.write(encoded)

        do_PUT = _method_not_allowed
        do_PATCH = _method_not_allowed
        do_DELETE = _method_not_allowed
        do_HEAD = _method_not_allowed

        def __getattr__(self, name: str):
            # any other verb (TRACE, CONNECT, custom) gets 405 instead of 501
            if name.startswith("do_"):
                return self._method_not_allowed
            raise AttributeError(name)

        def log_message(self, format: str, *args) -> None:  # noqa: A003
            log.debug("http %s - %s", self.address_string(), format % args)

        def _route_ok(self) -> bool:
            path = self.path.split("?", 1)[0].rstrip("/")
            if path == API_PATH:
                return True
            self._write_json(404, {"error": "not found"})
            return False

        def _read_json_body(self) -> Any:
            content_len = int(self.headers.get("Content-Length", "0"))
            raw = self.rfile.read(content_len)
            return json.loads(raw.decode("utf-8"))

        def _fail(self, exc: Exception) -> None:
            log.error("Error in notes handler: %s", exc, exc_info=True)
            self._write_json(500, {"error": str(exc)})

        def _write_json(self, status_code: int, payload: Any) -> None:
            encoded = json.dumps(payload).encode("utf-8")
            self.send_response(status_code)
            self.send_header("Content-Type", "application/json")
            for name, value in CORS_HEADERS.items():
                self.send_header(name, value)
            self.send_header("Content-Length", str(len(encoded)))
            self.end_headers()
            if self.command != "HEAD":
                self.wfile.write(encoded)

    return ThreadingHTTPServer((host, port), NotesHandler)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Notes blob store (GET/POST /api/notes)")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=8888)
    p.add_argument(
        "--data-dir",
        type=Path,
        default=DATA_DIR,
        help="Folder holding the JSON blobs",
    )
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    from section_notes.logging_setup import install_global_exception_hooks, setup_logging

    args = parse_args(argv)
    slog = setup_logging(SERVER_LOG_PATH)
    install_global_exception_hooks(slog)

    server = create_server(host=args.host, port=args.port, data_dir=args.data_dir)
    host, port = server.server_address[:2]
    slog.info("Notes store listening on http://%s:%s%s data_dir=%s", host, port, API_PATH, args.data_dir)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        slog.info("Notes store stopped")
    finally:
        server.server_close()
    return 0
