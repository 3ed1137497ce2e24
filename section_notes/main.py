from __future__ import annotations

import argparse

from PySide6.QtCore import QSettings
from PySide6.QtWidgets import QApplication

from section_notes.logging_setup import SESSION_ID, install_global_exception_hooks, setup_logging
from section_notes.settings import APP_NAME, resolve_api_url
from section_notes.store.client import NotesStoreClient
from section_notes.ui.app_settings import SettingsKeys, get_str
from section_notes.ui.main_window import NotesWindow
from section_notes.ui.qt_utils import safe_set_setting


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Sectioned notes synced to a JSON store")
    p.add_argument(
        "--api-url",
        default=None,
        help="Notes endpoint, e.g. http://127.0.0.1:8888/api/notes",
    )
    p.add_argument(
        "--no-voice",
        action="store_true",
        help="Disable voice dictation",
    )
    return p.parse_args(argv)


def build_engine(enabled: bool):
    if not enabled:
        return None
    from section_notes.speech.engine import SpeechRecognitionEngine

    return SpeechRecognitionEngine()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    log = setup_logging()
    install_global_exception_hooks(log)

    app = QApplication([])
    settings = QSettings(APP_NAME, APP_NAME)
    api_url = resolve_api_url(args.api_url, get_str(settings, SettingsKeys.API_URL, ""))
    safe_set_setting(settings, SettingsKeys.API_URL, api_url)

    client = NotesStoreClient(api_url)
    try:
        win = NotesWindow(client=client, settings=settings, engine=build_engine(not args.no_voice))
        win.show()
        win.start()
        log.info("Application started, SID=%s api=%s", SESSION_ID, api_url)
        return app.exec()
    finally:
        client.close()


if __name__ == "__main__":
    raise SystemExit(main())
