from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, TypeAlias


class DocumentFormatError(ValueError):
    """Raised when a stored value does not have the Document shape."""


@dataclass
class Note:
    id: str
    text: str
    completed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "text": self.text, "completed": self.completed}

    @classmethod
    def from_dict(cls, raw: Any) -> "Note":
        if not isinstance(raw, dict):
            raise DocumentFormatError(f"note must be an object, got {type(raw).__name__}")
        note_id = raw.get("id")
        # old clients stored Date.now() numbers
        if isinstance(note_id, (int, float)) and not isinstance(note_id, bool):
            if isinstance(note_id, float) and not math.isfinite(note_id):
                raise DocumentFormatError(f"note id must be finite: {raw!r}")
            note_id = str(int(note_id))
        text = raw.get("text")
        completed = raw.get("completed", False)
        if not isinstance(note_id, str) or not isinstance(text, str):
            raise DocumentFormatError(f"note needs string id and text: {raw!r}")
        if not isinstance(completed, bool):
            raise DocumentFormatError(f"note.completed must be a boolean: {raw!r}")
        return cls(id=note_id, text=text, completed=completed)


@dataclass
class Section:
    id: str
    title: str
    notes: list[Note] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "notes": [n.to_dict() for n in self.notes],
        }

    @classmethod
    def from_dict(cls, raw: Any) -> "Section":
        if not isinstance(raw, dict):
            raise DocumentFormatError(f"section must be an object, got {type(raw).__name__}")
        section_id = raw.get("id")
        title = raw.get("title")
        notes = raw.get("notes")
        if not isinstance(section_id, str) or not isinstance(title, str):
            raise DocumentFormatError(f"section needs string id and title: {raw!r}")
        if not isinstance(notes, list):
            raise DocumentFormatError(f"section.notes must be an array (section={section_id})")
        return cls(id=section_id, title=title, notes=[Note.from_dict(n) for n in notes])

    def find_note(self, note_id: str) -> Note | None:
        for note in self.notes:
            if note.id == note_id:
                return note
        return None

    @property
    def checked_count(self) -> int:
        return sum(1 for n in self.notes if n.completed)


Document: TypeAlias = list[Section]


def default_document() -> Document:
    """The two sections a fresh (or unreachable) store starts with."""
    return [
        Section(id="important", title="Important Notes"),
        Section(id="timepass", title="Time Pass Notes"),
    ]


def document_to_json(doc: Iterable[Section]) -> list[dict[str, Any]]:
    return [s.to_dict() for s in doc]


def document_from_json(raw: Any) -> Document:
    if not isinstance(raw, list):
        raise DocumentFormatError(f"document must be an array, got {type(raw).__name__}")
    return [Section.from_dict(s) for s in raw]


def now_ms() -> int:
    return int(time.time() * 1000)


def fresh_id(taken: Iterable[str], *, clock: Callable[[], int] = now_ms) -> str:
    """
    Millisecond timestamp id, bumped past anything already in `taken`.
    Ids stay creation-ordered and unique within their scope.
    """
    used = set(taken)
    candidate = clock()
    while str(candidate) in used:
        candidate += 1
    return str(candidate)


def sorted_notes(notes: Iterable[Note]) -> list[Note]:
    """
    Incomplete first, then completed. Within each group ids compare as plain
    strings, descending; same-width timestamp ids come out newest first.
    """
    ordered = sorted(notes, key=lambda n: n.id, reverse=True)
    # stable sort keeps the id order inside each group
    return sorted(ordered, key=lambda n: n.completed)
