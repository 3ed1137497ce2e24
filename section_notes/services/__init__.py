from .note_renderer import NoteTextRenderer

__all__ = ["NoteTextRenderer"]
