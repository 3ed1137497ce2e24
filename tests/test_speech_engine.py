import sys
import os
import threading

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from section_notes.speech.engine import EngineBusyError, SpeechRecognitionEngine


@pytest.fixture
def engine(qapp):
    eng = SpeechRecognitionEngine()
    eng.heard, eng.errors, eng.ends = [], [], []
    eng.bind(
        on_result=eng.heard.append,
        on_end=lambda: eng.ends.append(True),
        on_error=eng.errors.append,
    )
    return eng


def pretend_listening(eng):
    # what start() leaves behind, without opening a microphone
    eng._generation += 1
    eng._stop_event = threading.Event()
    return eng.generation


def test_current_listener_events_are_delivered(engine):
    gen = pretend_listening(engine)

    engine._heard.emit(gen, "buy milk")
    engine._failed.emit(gen, "network")
    engine._ended.emit(gen)

    assert engine.heard == [[("buy milk", True)]]
    assert engine.errors == ["network"]
    assert engine.ends == [True]


def test_late_phrase_from_stopped_listener_is_dropped(engine):
    old = pretend_listening(engine)
    engine.stop()
    new = pretend_listening(engine)

    engine._heard.emit(old, "words for the old section")
    engine._ended.emit(old)
    engine._heard.emit(new, "fresh")

    assert engine.heard == [[("fresh", True)]]
    assert engine.ends == []


def test_stop_ends_running_and_is_idempotent(engine):
    pretend_listening(engine)
    assert engine.running
    engine.stop()
    gen = engine.generation
    engine.stop()
    assert not engine.running
    assert engine.generation == gen


def test_start_while_running_is_refused(engine):
    pretend_listening(engine)
    with pytest.raises(EngineBusyError):
        engine.start()
