from __future__ import annotations

import logging

from PySide6.QtCore import Qt, QSettings, QThreadPool, Slot
from PySide6.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QScrollArea,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from section_notes.controller import NotesController
from section_notes.core.delete_confirm import DeleteConfirmTracker
from section_notes.core.dictation import DictationController, SpeechEngine
from section_notes.core.models import Note, Section
from section_notes.core.reconcile import SectionReconciler
from section_notes.core.state import NotesState
from section_notes.services.note_renderer import NoteTextRenderer
from section_notes.settings import APP_NAME
from section_notes.store.client import NotesStoreClient
from section_notes.store.scheduler import SaveScheduler
from section_notes.ui.dialogs import QtPrompts, UiNotifier
from section_notes.ui.section_widget import SectionWidget
from section_notes.ui.ui_state import UiStateStore
from section_notes.ui.workers import QtSaveRunner, start_load

log = logging.getLogger(APP_NAME)

FLUSH_WAIT_MS = 3000

STYLE_SHEET = """
    QFrame#noteSection { border: 1px solid #d0d0d0; border-radius: 8px; background: #ffffff; }
    QLabel#sectionTitle { font-size: 16px; font-weight: 600; }
    QLabel[completed="true"] { color: #8a8a8a; }
    QPushButton[recording="true"] { background: #e53935; color: white; border-radius: 4px; }
    QPushButton[confirmDelete="true"] { background: #e53935; color: white; border-radius: 4px; }
    QLabel#loading { font-size: 15px; color: #666666; }
"""


class NotesWindow(QMainWindow):
    """
    Main window: header with "Add section", a scrollable column of section
    cards, and a loading page shown until the first load returns.

    Implements SectionsView for the reconciler; all mutations go through
    self.controller.
    """

    def __init__(
        self,
        *,
        client: NotesStoreClient,
        settings: QSettings,
        engine: SpeechEngine | None = None,
        pool: QThreadPool | None = None,
    ):
        super().__init__()
        log.info("Main window initialised (api=%s)", client.api_url)
        self.setWindowTitle("Notes")
        self.setStyleSheet(STYLE_SHEET)

        self._client = client
        self._pool = pool or QThreadPool.globalInstance()
        self._settings = settings
        self._ui_state = UiStateStore(owner=self, settings=settings, debounce_ms=400)
        self._renderer = NoteTextRenderer()

        self.prompts = QtPrompts(self)
        self.notifier = UiNotifier(self.prompts, self)
        client.notify = self.notifier
        self._save_runner = QtSaveRunner(client=client, pool=self._pool, parent=self)

        self.dictation = DictationController(engine, notify=self.prompts.notify)
        if engine is not None and hasattr(engine, "bind"):
            engine.bind(
                on_result=self.dictation.on_result,
                on_end=self.dictation.on_end,
                on_error=self.dictation.on_error,
            )

        self.controller = NotesController(
            state=NotesState(),
            reconciler=SectionReconciler(self),
            saver=SaveScheduler(self._save_runner),
            prompts=self.prompts,
            confirm_tracker=DeleteConfirmTracker(),
            dictation=self.dictation,
        )

        # UI
        self.add_section_btn = QPushButton("+ Add section")
        self.add_section_btn.clicked.connect(lambda: self.controller.add_section())
        self.add_section_btn.setEnabled(False)

        header = QHBoxLayout()
        title = QLabel("Notes")
        title.setObjectName("sectionTitle")
        header.addWidget(title, 1)
        header.addWidget(self.add_section_btn)

        self.sections_container = QWidget()
        self.sections_layout = QVBoxLayout(self.sections_container)
        self.sections_layout.setAlignment(Qt.AlignTop)
        self.sections_layout.setSpacing(12)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(self.sections_container)

        self.loading_label = QLabel("Loading notes...")
        self.loading_label.setObjectName("loading")
        self.loading_label.setAlignment(Qt.AlignCenter)

        self.pages = QStackedWidget()
        self.pages.addWidget(self.loading_label)
        self.pages.addWidget(scroll)

        root = QWidget()
        root_layout = QVBoxLayout(root)
        root_layout.addLayout(header)
        root_layout.addWidget(self.pages, 1)
        self.setCentralWidget(root)

        self._ui_state.restore()

    # --- startup ---

    def start(self) -> None:
        """Show the loading page and fetch the document in the background."""
        self.pages.setCurrentIndex(0)
        start_load(self._client, self._on_loaded, pool=self._pool)

    @Slot(object)
    def _on_loaded(self, doc: list) -> None:
        self.pages.setCurrentIndex(1)
        self.add_section_btn.setEnabled(True)
        self.controller.show_document(doc)

    # --- SectionsView ---

    def create_section(self, section: Section, index: int) -> SectionWidget:
        widget = SectionWidget(section, controller=self.controller, renderer=self._renderer)
        self.sections_layout.insertWidget(index, widget)
        return widget

    def remove_section(self, handle: SectionWidget) -> None:
        self.sections_layout.removeWidget(handle)
        handle.setParent(None)
        handle.deleteLater()

    def rebuild_notes(self, handle: SectionWidget, section_id: str, notes: list[Note]) -> None:
        handle.rebuild_notes(notes)

    # --- shutdown ---

    def _flush_saves(self) -> None:
        """Let in-flight and pending saves finish before the window goes away."""
        saver = self.controller.saver
        for _ in range(3):
            if not (saver.busy or saver.has_pending):
                return
            self._pool.waitForDone(FLUSH_WAIT_MS)
            # deliver queued completions so a pending snapshot gets started
            QApplication.processEvents()
        if saver.busy or saver.has_pending:
            log.warning("Closing with unsaved changes still queued")

    def closeEvent(self, event):  # type: ignore[override]
        try:
            self.dictation.stop(submit=False)
            self._flush_saves()
        except Exception:
            log.exception("Failed to flush saves on close")
        try:
            self._ui_state.save()
        except Exception:
            log.exception("Failed to save UI state on close")
        super().closeEvent(event)

    def resizeEvent(self, event):  # type: ignore[override]
        self._ui_state.schedule_save()
        super().resizeEvent(event)

    def moveEvent(self, event):  # type: ignore[override]
        self._ui_state.schedule_save()
        super().moveEvent(event)
