import logging

from PySide6.QtCore import QTimer, QSettings
from PySide6.QtWidgets import QMainWindow

from section_notes.settings import APP_NAME
from section_notes.ui.app_settings import SettingsKeys


log = logging.getLogger(APP_NAME)


class UiStateStore:
    """
    Saves/restores window geometry and state in QSettings (debounced).
    """
    def __init__(self, *, owner: QMainWindow, settings: QSettings, debounce_ms: int = 400):
        self._owner = owner
        self._settings = settings
        self._restoring = False
        self._timer = QTimer(owner)
        self._timer.setSingleShot(True)
        self._timer.setInterval(int(debounce_ms))
        self._timer.timeout.connect(self.save)

    def schedule_save(self) -> None:
        if self._restoring:
            return
        self._timer.start()

    def restore(self) -> None:
        self._restoring = True
        try:
            geo = self._settings.value(SettingsKeys.UI_GEOMETRY)
            if geo:
                self._owner.restoreGeometry(geo)
            else:
                self._owner.resize(720, 820)

            st = self._settings.value(SettingsKeys.UI_STATE)
            if st:
                self._owner.restoreState(st)
        except Exception:
            log.exception("Failed to restore UI state from QSettings")
        finally:
            self._restoring = False

    def save(self) -> None:
        try:
            self._settings.setValue(SettingsKeys.UI_GEOMETRY, self._owner.saveGeometry())
            self._settings.setValue(SettingsKeys.UI_STATE, self._owner.saveState())
        except Exception:
            log.exception("Failed to save UI state to QSettings")
