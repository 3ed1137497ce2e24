from __future__ import annotations

import logging
from typing import Callable, TypeAlias

from section_notes.core.models import Document
from section_notes.settings import APP_NAME

log = logging.getLogger(APP_NAME)

SaveDone: TypeAlias = Callable[[bool], None]
SaveRunner: TypeAlias = Callable[[Document, SaveDone], None]


class SaveScheduler:
    """
    Serializes whole-document saves.

    At most one save is in flight. Snapshots submitted meanwhile collapse
    into a single pending one (the newest), sent once the current save
    reports back. Saves hit the server in the order they were issued and
    the last snapshot always lands last.

    `run(doc, done)` performs the save and must call `done(ok)` on the
    thread that calls submit().
    """

    def __init__(self, run: SaveRunner) -> None:
        self._run = run
        self._in_flight = False
        self._pending: Document | None = None
        self.completed = 0
        self.failed = 0

    @property
    def busy(self) -> bool:
        return self._in_flight

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def submit(self, doc: Document) -> None:
        if self._in_flight:
            if self._pending is not None:
                log.debug("Save coalesced: newer snapshot replaces pending one")
            self._pending = doc
            return
        self._start(doc)

    def _start(self, doc: Document) -> None:
        self._in_flight = True
        try:
            self._run(doc, self._on_done)
        except Exception:
            log.exception("Save runner failed to start")
            self._on_done(False)

    def _on_done(self, ok: bool) -> None:
        self._in_flight = False
        if ok:
            self.completed += 1
        else:
            self.failed += 1

        if self._pending is not None:
            doc, self._pending = self._pending, None
            self._start(doc)
