from __future__ import annotations

from typing import TYPE_CHECKING

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from section_notes.core.models import Note, Section
from section_notes.services.note_renderer import NoteTextRenderer
from section_notes.ui.note_row import NoteRow
from section_notes.ui.qt_utils import clear_layout, set_style_flag

if TYPE_CHECKING:
    from section_notes.controller import NotesController

INPUT_PLACEHOLDER = "Add a new note..."
LISTENING_PLACEHOLDER = "Listening... (Press mic to stop)"
MIC_ICON = "\U0001F3A4"


class SectionWidget(QFrame):
    """
    One section card: header (title, clear checked, delete), input row
    (text, mic, add) and the note list.

    Only the note list is ever rebuilt; header and input survive re-renders,
    so typing focus and a running dictation are left alone.
    Also acts as the dictation target for its input.
    """

    def __init__(
        self,
        section: Section,
        *,
        controller: "NotesController",
        renderer: NoteTextRenderer,
        parent: QWidget | None = None,
    ):
        super().__init__(parent)
        self.section_id = section.id
        self._controller = controller
        self._renderer = renderer
        self.setObjectName("noteSection")
        self.setFrameShape(QFrame.StyledPanel)

        # header
        self.title_label = QLabel(section.title)
        self.title_label.setTextFormat(Qt.PlainText)
        self.title_label.setObjectName("sectionTitle")
        self.clear_checked_btn = QPushButton("Clear checked")
        self.clear_checked_btn.clicked.connect(lambda: self._controller.clear_checked(self.section_id))
        self.delete_section_btn = QPushButton("Delete section")
        self.delete_section_btn.clicked.connect(lambda: self._controller.delete_section(self.section_id))

        header = QHBoxLayout()
        header.addWidget(self.title_label, 1)
        header.addWidget(self.clear_checked_btn)
        header.addWidget(self.delete_section_btn)

        # input row
        self.input = QLineEdit()
        self.input.setPlaceholderText(INPUT_PLACEHOLDER)
        self.input.returnPressed.connect(self.submit)
        self.voice_btn = QPushButton(MIC_ICON)
        self.voice_btn.setToolTip("Dictate a note")
        self.voice_btn.clicked.connect(self._toggle_dictation)
        self.add_btn = QPushButton("Add")
        self.add_btn.clicked.connect(self.submit)

        input_row = QHBoxLayout()
        input_row.addWidget(self.input, 1)
        input_row.addWidget(self.voice_btn)
        input_row.addWidget(self.add_btn)

        # notes
        self.notes_list = QWidget()
        self.notes_layout = QVBoxLayout(self.notes_list)
        self.notes_layout.setContentsMargins(0, 0, 0, 0)
        self.notes_layout.setSpacing(0)
        self.notes_layout.setAlignment(Qt.AlignTop)

        layout = QVBoxLayout(self)
        layout.addLayout(header)
        layout.addLayout(input_row)
        layout.addWidget(self.notes_list)

    def rebuild_notes(self, notes: list[Note]) -> None:
        """Drop every row and build fresh ones (already sorted by the reconciler)."""
        clear_layout(self.notes_layout)
        for note in notes:
            self.notes_layout.addWidget(self._make_row(note))

    def _make_row(self, note: Note) -> NoteRow:
        section_id, note_id = self.section_id, note.id
        return NoteRow(
            note,
            html=self._renderer.render(note.text),
            on_toggle=lambda: self._controller.toggle_note(section_id, note_id),
            on_delete=lambda: self._controller.delete_note(section_id, note_id),
            is_armed=lambda: self._controller.is_delete_armed(section_id, note_id),
        )

    def _toggle_dictation(self) -> None:
        if self._controller.dictation is not None:
            self._controller.dictation.toggle(self)

    # --- dictation target ---

    def text(self) -> str:
        return self.input.text()

    def set_text(self, text: str) -> None:
        self.input.setText(text)
        self.input.end(False)

    def set_listening(self, listening: bool) -> None:
        self.input.setPlaceholderText(LISTENING_PLACEHOLDER if listening else INPUT_PLACEHOLDER)
        set_style_flag(self.voice_btn, "recording", listening)

    def submit(self) -> None:
        text = self.input.text().strip()
        if not text:
            return
        self._controller.add_note(self.section_id, text)
        self.input.clear()
        self.input.setFocus()
