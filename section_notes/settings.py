from __future__ import annotations

import os
from pathlib import Path

APP_NAME = "section-notes"

APP_HOME = Path(os.getenv("SECTION_NOTES_HOME", str(Path.home() / f".{APP_NAME}")))
LOG_DIR = APP_HOME / "logs"
LOG_PATH = LOG_DIR / f"{APP_NAME}.log"
SERVER_LOG_PATH = LOG_DIR / f"{APP_NAME}-server.log"
CONSOLE_LOG_LEVEL = os.getenv("SECTION_NOTES_LOG_LEVEL", "INFO").upper()

# --- store ---
DEFAULT_API_URL = "http://127.0.0.1:8888/api/notes"
API_URL = os.getenv("SECTION_NOTES_API_URL", "")
API_PATH = "/api/notes"
REQUEST_TIMEOUT_S = float(os.getenv("SECTION_NOTES_TIMEOUT", "10"))
DATA_DIR = Path(os.getenv("SECTION_NOTES_DATA_DIR", str(APP_HOME / "blobs")))
STORE_NAME = "notes"
DOCUMENT_KEY = "sections"

# --- ui ---
DELETE_CONFIRM_WINDOW_S = 3.0
SPEECH_LANG = os.getenv("SECTION_NOTES_SPEECH_LANG", "en-IN")


def resolve_api_url(cli_value: str | None, saved_value: str | None) -> str:
    """CLI flag, then environment, then saved setting, then the default."""
    for candidate in (cli_value, API_URL, saved_value):
        if candidate and candidate.strip():
            return candidate.strip()
    return DEFAULT_API_URL
