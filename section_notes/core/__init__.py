from .models import (
    Document,
    DocumentFormatError,
    Note,
    Section,
    default_document,
    document_from_json,
    document_to_json,
    sorted_notes,
)
from .state import NotesState
from .reconcile import SectionReconciler, SectionsView
from .delete_confirm import ConfirmState, DeleteConfirmTracker
from .dictation import DictationController, DictationSession, DictationState

__all__ = ["Document",
           "DocumentFormatError",
           "Note",
           "Section",
           "default_document",
           "document_from_json",
           "document_to_json",
           "sorted_notes",
           "NotesState",
           "SectionReconciler",
           "SectionsView",
           "ConfirmState",
           "DeleteConfirmTracker",
           "DictationController",
           "DictationSession",
           "DictationState",
           ]
