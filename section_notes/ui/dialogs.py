from __future__ import annotations

from PySide6.QtCore import QObject, Signal, Slot
from PySide6.QtWidgets import QInputDialog, QLineEdit, QMessageBox, QWidget

WINDOW_TITLE = "Notes"


class QtPrompts:
    """Modal confirm / notice / text prompt on top of `parent`."""

    def __init__(self, parent: QWidget):
        self._parent = parent

    def confirm(self, message: str) -> bool:
        answer = QMessageBox.question(
            self._parent,
            WINDOW_TITLE,
            message,
            QMessageBox.Yes | QMessageBox.Cancel,
            QMessageBox.Cancel,
        )
        return answer == QMessageBox.Yes

    def notify(self, message: str) -> None:
        QMessageBox.information(self._parent, WINDOW_TITLE, message)

    def ask_text(self, message: str) -> str | None:
        text, ok = QInputDialog.getText(self._parent, WINDOW_TITLE, message, QLineEdit.Normal, "")
        return text if ok else None


class UiNotifier(QObject):
    """
    Thread-safe notices: emit `message` from any thread, the dialog opens on
    the GUI thread (queued connection to a slot of this object).
    """

    message = Signal(str)

    def __init__(self, prompts: QtPrompts, parent: QObject | None = None):
        super().__init__(parent)
        self._prompts = prompts
        self.message.connect(self._show)

    def __call__(self, text: str) -> None:
        self.message.emit(text)

    @Slot(str)
    def _show(self, text: str) -> None:
        self._prompts.notify(text)
