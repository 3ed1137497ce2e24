from __future__ import annotations

import copy
from typing import Callable

from section_notes.core.models import Document, Note, Section, fresh_id, now_ms


class NotesState:
    """
    The single in-memory Document.

    Knows nothing about widgets or the network: every method mutates
    the document in place and reports what it did, the controller decides
    what to persist and re-render.
    """

    def __init__(self, sections: Document | None = None, *, clock: Callable[[], int] = now_ms) -> None:
        self._sections: Document = list(sections or [])
        self._clock = clock

    @property
    def sections(self) -> Document:
        return self._sections

    def replace(self, sections: Document) -> None:
        self._sections = list(sections)

    def snapshot(self) -> Document:
        """Deep copy, safe to hand to another thread."""
        return copy.deepcopy(self._sections)

    def find_section(self, section_id: str) -> Section | None:
        for section in self._sections:
            if section.id == section_id:
                return section
        return None

    # --- sections ---

    def add_section(self, title: str) -> Section:
        section = Section(
            id=fresh_id((s.id for s in self._sections), clock=self._clock),
            title=title,
        )
        self._sections.append(section)
        return section

    def delete_section(self, section_id: str) -> Section | None:
        section = self.find_section(section_id)
        if section is None:
            return None
        self._sections = [s for s in self._sections if s.id != section_id]
        return section

    # --- notes ---

    def add_note(self, section_id: str, text: str) -> Note | None:
        section = self.find_section(section_id)
        if section is None:
            return None
        note = Note(
            id=fresh_id((n.id for n in section.notes), clock=self._clock),
            text=text,
            completed=False,
        )
        section.notes.append(note)
        return note

    def toggle_note(self, section_id: str, note_id: str) -> Note | None:
        section = self.find_section(section_id)
        note = section.find_note(note_id) if section else None
        if note is None:
            return None
        note.completed = not note.completed
        return note

    def delete_note(self, section_id: str, note_id: str) -> Note | None:
        section = self.find_section(section_id)
        note = section.find_note(note_id) if section else None
        if section is None or note is None:
            return None
        section.notes = [n for n in section.notes if n.id != note_id]
        return note

    def clear_checked(self, section_id: str) -> int:
        """Drop completed notes of a section. Returns how many went away."""
        section = self.find_section(section_id)
        if section is None:
            return 0
        before = len(section.notes)
        section.notes = [n for n in section.notes if not n.completed]
        return before - len(section.notes)
