from __future__ import annotations

from typing import Generic, Protocol, TypeVar

from section_notes.core.models import Document, Note, Section, sorted_notes

H = TypeVar("H")


class SectionsView(Protocol[H]):
    """What the reconciler needs from a toolkit: create/remove section handles, refill a note list."""

    def create_section(self, section: Section, index: int) -> H: ...

    def remove_section(self, handle: H) -> None: ...

    def rebuild_notes(self, handle: H, section_id: str, notes: list[Note]) -> None: ...


class SectionReconciler(Generic[H]):
    """
    Keeps the displayed sections in step with the Document.

    Two paths:
      - render_all: section membership changed (load, add/delete section).
        Existing handles stay in place, only their note lists are rebuilt.
      - render_notes: a note-level mutation, one note list is rebuilt.
    Handles are tracked by section id so nothing is looked up by string
    attributes on widgets.
    """

    def __init__(self, view: SectionsView[H]) -> None:
        self._view = view
        self._handles: dict[str, H] = {}

    def handle_for(self, section_id: str) -> H | None:
        return self._handles.get(section_id)

    @property
    def section_ids(self) -> list[str]:
        return list(self._handles)

    def render_all(self, sections: Document) -> None:
        wanted = {s.id for s in sections}
        for section_id in [sid for sid in self._handles if sid not in wanted]:
            self._view.remove_section(self._handles.pop(section_id))

        for index, section in enumerate(sections):
            handle = self._handles.get(section.id)
            if handle is None:
                handle = self._view.create_section(section, index)
                self._handles[section.id] = handle
            self._view.rebuild_notes(handle, section.id, sorted_notes(section.notes))

    def render_notes(self, section: Section) -> None:
        handle = self._handles.get(section.id)
        if handle is None:
            return
        self._view.rebuild_notes(handle, section.id, sorted_notes(section.notes))
