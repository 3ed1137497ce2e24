from __future__ import annotations

from typing import Callable

from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import QCheckBox, QHBoxLayout, QLabel, QPushButton, QWidget

from section_notes.core.models import Note
from section_notes.settings import DELETE_CONFIRM_WINDOW_S
from section_notes.ui.qt_utils import blocked_signals, set_style_flag

TRASH_ICON = "\U0001F5D1"
CONFIRM_ICON = "✓"


class NoteRow(QWidget):
    """
    One note: checkbox, rendered text, two-step delete button.

    The armed/disarmed truth lives in the controller's tracker; the timer
    here only repaints the button once the window has passed.
    """

    def __init__(
        self,
        note: Note,
        *,
        html: str,
        on_toggle: Callable[[], None],
        on_delete: Callable[[], None],
        is_armed: Callable[[], bool],
        parent: QWidget | None = None,
    ):
        super().__init__(parent)
        self.note_id = note.id
        self._on_toggle = on_toggle
        self._on_delete = on_delete
        self._is_armed = is_armed

        self.checkbox = QCheckBox()
        with blocked_signals(self.checkbox):
            self.checkbox.setChecked(note.completed)
        self.checkbox.toggled.connect(lambda _checked: self._on_toggle())

        self.text_label = QLabel(f"<s>{html}</s>" if note.completed else html)
        self.text_label.setTextFormat(Qt.RichText)
        self.text_label.setOpenExternalLinks(True)
        self.text_label.setWordWrap(True)
        self.text_label.setProperty("completed", note.completed)

        self.delete_btn = QPushButton()
        self.delete_btn.setFlat(True)
        self.delete_btn.setCursor(Qt.PointingHandCursor)
        self.delete_btn.clicked.connect(self._on_delete_clicked)

        self._disarm_timer = QTimer(self)
        self._disarm_timer.setSingleShot(True)
        self._disarm_timer.setInterval(int(DELETE_CONFIRM_WINDOW_S * 1000) + 50)
        self._disarm_timer.timeout.connect(self.refresh_armed)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(4, 2, 4, 2)
        layout.addWidget(self.checkbox)
        layout.addWidget(self.text_label, 1)
        layout.addWidget(self.delete_btn)

        self.refresh_armed()

    def _on_delete_clicked(self) -> None:
        # may rebuild the list and schedule this row for deletion
        self._on_delete()
        if self.isVisible():
            self.refresh_armed()

    def refresh_armed(self) -> None:
        armed = self._is_armed()
        self.delete_btn.setText(CONFIRM_ICON if armed else TRASH_ICON)
        self.delete_btn.setToolTip("Click again to delete" if armed else "Delete note")
        set_style_flag(self.delete_btn, "confirmDelete", armed)
        if armed:
            self._disarm_timer.start()
        else:
            self._disarm_timer.stop()
