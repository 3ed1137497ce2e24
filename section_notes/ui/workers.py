from __future__ import annotations

import logging

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal, Slot

from section_notes.core.models import Document, default_document
from section_notes.settings import APP_NAME
from section_notes.store.client import LOAD_FAILED_MSG, NotesStoreClient
from section_notes.store.scheduler import SaveDone

log = logging.getLogger(APP_NAME)


class _LoadSignals(QObject):
    finished = Signal(object)


class _LoadWorker(QRunnable):
    """Fetch the document off the GUI thread. Always emits a document, the defaults if loading blew up."""

    def __init__(self, client: NotesStoreClient):
        super().__init__()
        self.client = client
        self.signals = _LoadSignals()

    def run(self):
        try:
            doc = self.client.load()
        except Exception:
            log.exception("Load worker crashed")
            self.client.notify(LOAD_FAILED_MSG)
            doc = default_document()
        self.signals.finished.emit(doc)


class _SaveSignals(QObject):
    finished = Signal(int, bool)


class _SaveWorker(QRunnable):
    def __init__(self, req_id: int, client: NotesStoreClient, doc: Document):
        super().__init__()
        self.req_id = req_id
        self.client = client
        self.doc = doc
        self.signals = _SaveSignals()

    def run(self):
        try:
            ok = self.client.save(self.doc)
        except Exception:
            log.exception("Save worker crashed (req_id=%d)", self.req_id)
            ok = False
        self.signals.finished.emit(self.req_id, ok)


class QtSaveRunner(QObject):
    """
    SaveScheduler runner: each save runs in the thread pool, its completion
    is delivered back on the GUI thread (slot of this object).
    """

    def __init__(self, *, client: NotesStoreClient, pool: QThreadPool | None = None, parent: QObject | None = None):
        super().__init__(parent)
        self._client = client
        self._pool = pool or QThreadPool.globalInstance()
        self._req_id = 0
        self._done: dict[int, SaveDone] = {}

    @property
    def pool(self) -> QThreadPool:
        return self._pool

    def __call__(self, doc: Document, done: SaveDone) -> None:
        self._req_id += 1
        req_id = self._req_id
        self._done[req_id] = done

        worker = _SaveWorker(req_id, self._client, doc)
        worker.signals.finished.connect(self._on_worker_finished)
        self._pool.start(worker)

    @Slot(int, bool)
    def _on_worker_finished(self, req_id: int, ok: bool) -> None:
        done = self._done.pop(req_id, None)
        if done is not None:
            done(ok)


def start_load(client: NotesStoreClient, on_loaded, pool: QThreadPool | None = None) -> None:
    worker = _LoadWorker(client)
    worker.signals.finished.connect(on_loaded)
    (pool or QThreadPool.globalInstance()).start(worker)
