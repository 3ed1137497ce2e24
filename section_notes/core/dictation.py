from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Protocol

from section_notes.settings import APP_NAME

log = logging.getLogger(APP_NAME)

NOT_SUPPORTED_MSG = "Voice recognition not supported on this system."
PERMISSION_DENIED_MSG = (
    "Microphone access denied. Please allow microphone access in your system settings."
)
NO_MICROPHONE_MSG = "No microphone available for voice input."
PERMISSION_ERRORS = frozenset({"not-allowed", "service-not-allowed"})
CAPTURE_ERRORS = frozenset({"audio-capture"})


class DictationState(Enum):
    IDLE = "idle"
    LISTENING = "listening"


class DictationTarget(Protocol):
    """The input a session writes into (one section's note input)."""

    def text(self) -> str: ...

    def set_text(self, text: str) -> None: ...

    def set_listening(self, listening: bool) -> None: ...

    def submit(self) -> None: ...


class SpeechEngine(Protocol):
    def start(self) -> None: ...

    def stop(self) -> None: ...


@dataclass
class DictationSession:
    target: DictationTarget
    state: DictationState = DictationState.LISTENING


class DictationController:
    """
    Idle/Listening state machine for at most one target at a time.

    The engine reports back through on_result / on_end / on_error; those
    must be called on the same thread as toggle().
    """

    def __init__(
        self,
        engine: SpeechEngine | None,
        *,
        notify: Callable[[str], None],
    ) -> None:
        self._engine = engine
        self._notify = notify
        self.session: DictationSession | None = None

    @property
    def state(self) -> DictationState:
        return self.session.state if self.session else DictationState.IDLE

    def is_listening_to(self, target: DictationTarget) -> bool:
        return self.session is not None and self.session.target is target

    def toggle(self, target: DictationTarget) -> None:
        if self.is_listening_to(target):
            self.stop()
        else:
            self.start(target)

    def start(self, target: DictationTarget) -> None:
        if self._engine is None:
            self._notify(NOT_SUPPORTED_MSG)
            return

        if self.session is not None and self.session.target is not target:
            self.stop()

        self.session = DictationSession(target=target)
        target.set_listening(True)
        try:
            self._engine.start()
        except Exception:
            # already running: the new target simply takes over the stream
            log.debug("Speech engine start ignored", exc_info=True)

    def stop(self, *, submit: bool = True) -> None:
        session = self.session
        if session is None:
            return
        self.session = None

        if self._engine is not None:
            try:
                self._engine.stop()
            except Exception:
                log.debug("Speech engine stop failed", exc_info=True)

        session.target.set_listening(False)
        if submit and session.target.text().strip():
            session.target.submit()

    def cancel_if_target(self, target: DictationTarget | None) -> None:
        """Drop the session without submitting when its target goes away."""
        if target is not None and self.is_listening_to(target):
            self.stop(submit=False)

    # --- engine callbacks ---

    def on_result(self, results: Iterable[tuple[str, bool]]) -> None:
        """`results` are (transcript, is_final) pairs; interim ones are dropped."""
        if self.session is None:
            return
        final = "".join(text for text, is_final in results if is_final).strip()
        if not final:
            return
        target = self.session.target
        current = target.text()
        target.set_text(current + (" " if current else "") + final)

    def on_end(self) -> None:
        if self.session is None or self._engine is None:
            return
        try:
            self._engine.start()
        except Exception:
            log.warning("Speech engine restart failed", exc_info=True)
            self.stop()

    def on_error(self, code: str) -> None:
        log.error("Speech recognition error: %s", code)
        if code in PERMISSION_ERRORS:
            self.stop(submit=False)
            self._notify(PERMISSION_DENIED_MSG)
        elif code in CAPTURE_ERRORS:
            self.stop(submit=False)
            self._notify(NO_MICROPHONE_MSG)
