from __future__ import annotations

import logging
import threading
from typing import Callable

import speech_recognition as sr
from PySide6.QtCore import QObject, Signal, Slot

from section_notes.settings import APP_NAME, SPEECH_LANG

log = logging.getLogger(APP_NAME)


class EngineBusyError(RuntimeError):
    """start() while a listening session is already running."""


class SpeechRecognitionEngine(QObject):
    """
    Continuous dictation with speech_recognition: a listener thread keeps
    the microphone open and sends every phrase to Google's recognizer.

    Results reach the GUI thread through the private signals below (queued,
    this object lives on the GUI thread), where the bound callbacks run.
    Every listener carries the generation it was started with; stop() bumps
    the generation, so whatever an old listener still emits (a phrase that
    was mid-recognition, its end) is dropped instead of reaching the next
    session. start() never waits for an old listener to wind down.
    `ended` fires only when the listener dies on its own, never after stop().
    Error codes follow the browser engine: "not-allowed", "audio-capture",
    "network".
    """

    _heard = Signal(int, str)
    _failed = Signal(int, str)
    _ended = Signal(int)

    def __init__(
        self,
        *,
        language: str = SPEECH_LANG,
        phrase_time_limit: float | None = 8.0,
        poll_timeout_s: float = 1.0,
        parent: QObject | None = None,
    ):
        super().__init__(parent)
        self.language = language
        self.phrase_time_limit = phrase_time_limit
        self.poll_timeout_s = poll_timeout_s
        self._generation = 0
        self._stop_event: threading.Event | None = None

        self._on_result: Callable[[list[tuple[str, bool]]], None] | None = None
        self._on_end: Callable[[], None] | None = None
        self._on_error: Callable[[str], None] | None = None

        self._heard.connect(self._deliver_result)
        self._failed.connect(self._deliver_error)
        self._ended.connect(self._deliver_end)

    def bind(
        self,
        *,
        on_result: Callable[[list[tuple[str, bool]]], None],
        on_end: Callable[[], None],
        on_error: Callable[[str], None],
    ) -> None:
        self._on_result = on_result
        self._on_end = on_end
        self._on_error = on_error

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def running(self) -> bool:
        return self._stop_event is not None and not self._stop_event.is_set()

    def start(self) -> None:
        if self.running:
            raise EngineBusyError("speech engine already listening")

        self._generation += 1
        generation = self._generation
        try:
            mic = sr.Microphone()
        except AttributeError:
            # PyAudio backend missing
            log.exception("Microphone backend unavailable")
            self._failed.emit(generation, "audio-capture")
            return

        stop_event = threading.Event()
        self._stop_event = stop_event
        threading.Thread(
            target=self._listen_loop,
            args=(mic, stop_event, generation),
            name=f"speech-listener-{generation}",
            daemon=True,
        ).start()
        log.info("Speech engine started (lang=%s, generation=%d)", self.language, generation)

    def stop(self) -> None:
        if self._stop_event is None or self._stop_event.is_set():
            return
        self._stop_event.set()
        self._generation += 1
        log.info("Speech engine stopped")

    # listener thread
    def _listen_loop(self, mic: sr.Microphone, stop_event: threading.Event, generation: int) -> None:
        recognizer = sr.Recognizer()
        try:
            with mic as source:
                recognizer.adjust_for_ambient_noise(source, duration=0.3)
                while not stop_event.is_set():
                    try:
                        audio = recognizer.listen(
                            source,
                            timeout=self.poll_timeout_s,
                            phrase_time_limit=self.phrase_time_limit,
                        )
                    except sr.WaitTimeoutError:
                        continue
                    if stop_event.is_set():
                        break
                    self._recognize(recognizer, audio, generation)
        except PermissionError:
            log.exception("Microphone permission denied")
            stop_event.set()
            self._failed.emit(generation, "not-allowed")
            return
        except OSError:
            log.exception("Microphone could not be opened")
            stop_event.set()
            self._failed.emit(generation, "audio-capture")
            return
        except Exception:
            log.exception("Speech listener crashed")

        if not stop_event.is_set():
            stop_event.set()
            self._ended.emit(generation)

    def _recognize(self, recognizer: sr.Recognizer, audio: sr.AudioData, generation: int) -> None:
        try:
            text = recognizer.recognize_google(audio, language=self.language)
        except sr.UnknownValueError:
            return
        except sr.RequestError as e:
            log.warning("Speech request failed: %s", e)
            self._failed.emit(generation, "network")
            return
        if text:
            self._heard.emit(generation, text)

    def _is_stale(self, generation: int) -> bool:
        if generation != self._generation:
            log.debug("Dropped event from old listener (generation=%d, current=%d)", generation, self._generation)
            return True
        return False

    @Slot(int, str)
    def _deliver_result(self, generation: int, text: str) -> None:
        if self._is_stale(generation) or self._on_result is None:
            return
        self._on_result([(text, True)])

    @Slot(int, str)
    def _deliver_error(self, generation: int, code: str) -> None:
        if self._is_stale(generation) or self._on_error is None:
            return
        self._on_error(code)

    @Slot(int)
    def _deliver_end(self, generation: int) -> None:
        if self._is_stale(generation) or self._on_end is None:
            return
        self._on_end()
