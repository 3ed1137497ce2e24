import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import section_notes.settings as settings


def test_default_when_nothing_given(monkeypatch):
    monkeypatch.setattr(settings, "API_URL", "")
    assert settings.resolve_api_url(None, None) == settings.DEFAULT_API_URL


def test_cli_beats_env_and_saved(monkeypatch):
    monkeypatch.setattr(settings, "API_URL", "http://env/api/notes")
    assert settings.resolve_api_url("http://cli/api/notes", "http://saved/api/notes") == "http://cli/api/notes"


def test_env_beats_saved(monkeypatch):
    monkeypatch.setattr(settings, "API_URL", "http://env/api/notes")
    assert settings.resolve_api_url(None, "http://saved/api/notes") == "http://env/api/notes"


def test_saved_used_last(monkeypatch):
    monkeypatch.setattr(settings, "API_URL", "")
    assert settings.resolve_api_url("  ", " http://saved/api/notes ") == "http://saved/api/notes"
