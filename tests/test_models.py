import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from section_notes.core.models import (
    DocumentFormatError,
    Note,
    Section,
    default_document,
    document_from_json,
    document_to_json,
    fresh_id,
    sorted_notes,
)


def test_default_document():
    doc = default_document()
    assert document_to_json(doc) == [
        {"id": "important", "title": "Important Notes", "notes": []},
        {"id": "timepass", "title": "Time Pass Notes", "notes": []},
    ]


def test_default_document_is_fresh_each_call():
    a = default_document()
    a[0].notes.append(Note(id="1", text="x"))
    assert default_document()[0].notes == []


def test_parse_document():
    raw = [{"id": "s1", "title": "Work", "notes": [{"id": "10", "text": "a", "completed": True}]}]
    doc = document_from_json(raw)
    assert doc == [Section(id="s1", title="Work", notes=[Note(id="10", text="a", completed=True)])]
    assert document_to_json(doc) == raw


def test_parse_numeric_note_id_and_missing_completed():
    doc = document_from_json([{"id": "s", "title": "T", "notes": [{"id": 1700000000000, "text": "a"}]}])
    assert doc[0].notes[0] == Note(id="1700000000000", text="a", completed=False)


@pytest.mark.parametrize(
    "raw",
    [
        {"id": "s"},
        ["nope"],
        [{"id": "s", "title": "T"}],
        [{"id": 1, "title": "T", "notes": []}],
        [{"id": "s", "title": "T", "notes": [{"id": "1", "text": None}]}],
        [{"id": "s", "title": "T", "notes": [{"id": "1", "text": "a", "completed": "yes"}]}],
    ],
)
def test_parse_rejects_bad_shapes(raw):
    with pytest.raises(DocumentFormatError):
        document_from_json(raw)


def test_fresh_id_uses_clock():
    assert fresh_id([], clock=lambda: 1700000000123) == "1700000000123"


def test_fresh_id_bumps_past_taken():
    taken = ["1000", "1001", "1002"]
    assert fresh_id(taken, clock=lambda: 1000) == "1003"


def test_sorted_notes_incomplete_first_newest_first():
    notes = [
        Note(id="100", text="old open"),
        Note(id="300", text="new done", completed=True),
        Note(id="200", text="mid open"),
        Note(id="150", text="old done", completed=True),
    ]
    assert [n.id for n in sorted_notes(notes)] == ["200", "100", "300", "150"]


def test_sorted_notes_invariant():
    notes = [Note(id=str(1000 + i), text=str(i), completed=(i % 3 == 0)) for i in range(12)]
    out = sorted_notes(notes)

    flags = [n.completed for n in out]
    assert flags == sorted(flags)
    for group in (False, True):
        ids = [n.id for n in out if n.completed is group]
        assert ids == sorted(ids, reverse=True)


def test_sorted_notes_compares_ids_as_strings():
    notes = [Note(id="123", text="a"), Note(id="abc", text="b"), Note(id="\u00b2", text="c"), Note(id="5", text="d")]
    assert [n.id for n in sorted_notes(notes)] == ["\u00b2", "abc", "5", "123"]


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_numeric_note_id_is_a_format_error(bad):
    with pytest.raises(DocumentFormatError):
        Note.from_dict({"id": bad, "text": "x"})
