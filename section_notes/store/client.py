from __future__ import annotations

import logging
from typing import Callable

import httpx

from section_notes.core.models import (
    Document,
    DocumentFormatError,
    default_document,
    document_from_json,
    document_to_json,
)
from section_notes.settings import APP_NAME, REQUEST_TIMEOUT_S

log = logging.getLogger(APP_NAME)

LOAD_FAILED_MSG = "Failed to load notes from server. Using default sections."
SAVE_FAILED_MSG = "Failed to save notes to server. Your changes may be lost."


class StoreError(Exception):
    """Base class for everything the store client can fail with."""


class StoreTransportError(StoreError):
    """Network, DNS, timeout or non-2xx response."""


def _ignore(_message: str) -> None:
    return None


class NotesStoreClient:
    """
    Whole-document client for the notes endpoint.

    fetch()/push() raise StoreError; load()/save() are the forgiving
    contract used by the app: they log, tell the user via `notify`, and
    never raise.
    """

    def __init__(
        self,
        api_url: str,
        *,
        notify: Callable[[str], None] | None = None,
        timeout: float = REQUEST_TIMEOUT_S,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_url = api_url
        self.notify = notify or _ignore
        self._http = httpx.Client(timeout=timeout, transport=transport)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "NotesStoreClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def fetch(self) -> Document:
        try:
            response = self._http.get(self.api_url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise StoreTransportError(f"GET {self.api_url} failed: {e}") from e

        try:
            raw = response.json()
        except ValueError as e:
            raise DocumentFormatError(f"response is not JSON: {e}") from e
        return document_from_json(raw)

    def push(self, doc: Document) -> None:
        try:
            response = self._http.post(self.api_url, json=document_to_json(doc))
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise StoreTransportError(f"POST {self.api_url} failed: {e}") from e

    def load(self) -> Document:
        try:
            doc = self.fetch()
        except (StoreError, ValueError):
            # ValueError covers DocumentFormatError and malformed JSON numbers
            log.exception("Error loading sections from %s", self.api_url)
            self.notify(LOAD_FAILED_MSG)
            return default_document()
        log.info("Loaded sections=%d from %s", len(doc), self.api_url)
        return doc

    def save(self, doc: Document) -> bool:
        try:
            self.push(doc)
        except StoreError:
            log.exception("Error saving sections to %s", self.api_url)
            self.notify(SAVE_FAILED_MSG)
            return False
        log.debug("Saved sections=%d to %s", len(doc), self.api_url)
        return True
