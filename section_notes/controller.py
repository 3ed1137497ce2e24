from __future__ import annotations

import logging
from typing import Protocol

from section_notes.core.delete_confirm import DeleteConfirmTracker
from section_notes.core.dictation import DictationController
from section_notes.core.models import Document, Note, Section
from section_notes.core.reconcile import SectionReconciler
from section_notes.core.state import NotesState
from section_notes.settings import APP_NAME
from section_notes.store.scheduler import SaveScheduler

log = logging.getLogger(APP_NAME)

NOTHING_TO_CLEAR_MSG = "No checked notes to delete."
SECTION_TITLE_PROMPT = "Enter section title:"


class Prompts(Protocol):
    """Blocking user interaction: confirmations, notices, a text prompt."""

    def confirm(self, message: str) -> bool: ...

    def notify(self, message: str) -> None: ...

    def ask_text(self, message: str) -> str | None: ...


class NotesController:
    """
    Owns the Document and runs every mutation:
        mutate state -> persist whole document -> re-render the smallest subtree.

    Section-membership changes go through reconciler.render_all, note-level
    ones through reconciler.render_notes so inputs keep focus and dictation
    keeps running.
    """

    def __init__(
        self,
        *,
        state: NotesState,
        reconciler: SectionReconciler,
        saver: SaveScheduler,
        prompts: Prompts,
        confirm_tracker: DeleteConfirmTracker,
        dictation: DictationController | None = None,
    ) -> None:
        self.state = state
        self.reconciler = reconciler
        self.saver = saver
        self.prompts = prompts
        self.confirm_tracker = confirm_tracker
        self.dictation = dictation

    @property
    def sections(self) -> Document:
        return self.state.sections

    def show_document(self, doc: Document) -> None:
        """Initial load: adopt the document and build the whole tree."""
        self.state.replace(doc)
        self.reconciler.render_all(self.state.sections)
        log.info("Document shown: sections=%d", len(doc))

    def persist(self) -> None:
        self.saver.submit(self.state.snapshot())

    # --- sections ---

    def add_section(self, title: str | None = None) -> Section | None:
        if title is None:
            title = self.prompts.ask_text(SECTION_TITLE_PROMPT)
        title = (title or "").strip()
        if not title:
            return None

        section = self.state.add_section(title)
        log.info("Section added: id=%s title=%r", section.id, section.title)
        self.persist()
        self.reconciler.render_all(self.state.sections)
        return section

    def delete_section(self, section_id: str) -> bool:
        section = self.state.find_section(section_id)
        if section is None:
            return False

        count = len(section.notes)
        if not self.prompts.confirm(f'Delete "{section.title}" and all its {count} note(s)?'):
            return False

        if self.dictation is not None:
            self.dictation.cancel_if_target(self.reconciler.handle_for(section_id))
        for note in section.notes:
            self.confirm_tracker.forget((section_id, note.id))

        self.state.delete_section(section_id)
        log.info("Section deleted: id=%s notes=%d", section_id, count)
        self.persist()
        self.reconciler.render_all(self.state.sections)
        return True

    # --- notes ---

    def add_note(self, section_id: str, text: str) -> Note | None:
        note = self.state.add_note(section_id, text)
        if note is None:
            log.warning("Add note ignored: unknown section=%s", section_id)
            return None
        log.debug("Note added: section=%s id=%s", section_id, note.id)
        self.persist()
        self._render_section(section_id)
        return note

    def toggle_note(self, section_id: str, note_id: str) -> Note | None:
        note = self.state.toggle_note(section_id, note_id)
        if note is None:
            return None
        log.debug("Note toggled: section=%s id=%s completed=%s", section_id, note_id, note.completed)
        self.persist()
        self._render_section(section_id)
        return note

    def delete_note(self, section_id: str, note_id: str) -> bool:
        """
        One activation of a note's delete button.
        Returns True only when this activation confirmed and removed the note.
        """
        key = (section_id, note_id)
        if not self.confirm_tracker.press(key):
            log.debug("Delete armed: section=%s id=%s", section_id, note_id)
            return False

        if self.state.delete_note(section_id, note_id) is None:
            return False
        log.debug("Note deleted: section=%s id=%s", section_id, note_id)
        self.persist()
        self._render_section(section_id)
        return True

    def is_delete_armed(self, section_id: str, note_id: str) -> bool:
        return self.confirm_tracker.is_armed((section_id, note_id))

    def clear_checked(self, section_id: str) -> int:
        section = self.state.find_section(section_id)
        if section is None:
            return 0

        count = section.checked_count
        if count == 0:
            self.prompts.notify(NOTHING_TO_CLEAR_MSG)
            return 0
        if not self.prompts.confirm(f'Delete {count} checked note(s) from "{section.title}"?'):
            return 0

        for note in section.notes:
            if note.completed:
                self.confirm_tracker.forget((section_id, note.id))
        removed = self.state.clear_checked(section_id)
        log.info("Checked notes cleared: section=%s removed=%d", section_id, removed)
        self.persist()
        self._render_section(section_id)
        return removed

    def _render_section(self, section_id: str) -> None:
        section = self.state.find_section(section_id)
        if section is not None:
            self.reconciler.render_notes(section)
