import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from PySide6.QtCore import Qt

from section_notes.core.models import Note, Section
from section_notes.services.note_renderer import NoteTextRenderer
from section_notes.store.client import LOAD_FAILED_MSG
from section_notes.ui.section_widget import SectionWidget
from section_notes.ui.workers import _LoadWorker


class StubController:
    dictation = None

    def __init__(self):
        self.added = []

    def add_note(self, section_id, text):
        self.added.append((section_id, text))

    def is_delete_armed(self, section_id, note_id):
        return False


class ExplodingClient:
    def __init__(self):
        self.notices = []

    def notify(self, message):
        self.notices.append(message)

    def load(self):
        raise OverflowError("cannot convert float infinity to integer")


def test_section_title_is_plain_text(qapp):
    widget = SectionWidget(Section(id="s", title="<b>x</b>"), controller=StubController(), renderer=NoteTextRenderer())

    assert widget.title_label.textFormat() == Qt.PlainText
    assert widget.title_label.text() == "<b>x</b>"


def test_submit_strips_and_clears(qapp):
    controller = StubController()
    widget = SectionWidget(Section(id="s", title="S"), controller=controller, renderer=NoteTextRenderer())

    widget.set_text("  buy milk  ")
    widget.submit()
    widget.set_text("   ")
    widget.submit()

    assert controller.added == [("s", "buy milk")]
    assert widget.text() == ""


def test_rebuild_notes_keeps_one_row_per_note(qapp):
    widget = SectionWidget(Section(id="s", title="S"), controller=StubController(), renderer=NoteTextRenderer())
    widget.rebuild_notes([Note(id="2", text="b"), Note(id="1", text="a", completed=True)])
    widget.rebuild_notes([Note(id="3", text="c")])

    assert widget.notes_layout.count() == 1


def test_load_worker_always_emits_a_document(qapp):
    client = ExplodingClient()
    worker = _LoadWorker(client)
    received = []
    worker.signals.finished.connect(received.append)

    worker.run()

    assert [s.id for s in received[0]] == ["important", "timepass"]
    assert client.notices == [LOAD_FAILED_MSG]
