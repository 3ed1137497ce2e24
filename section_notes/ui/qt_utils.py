from __future__ import annotations

from contextlib import contextmanager

from PySide6.QtCore import QSettings
from PySide6.QtWidgets import QLayout, QWidget


@contextmanager
def blocked_signals(obj):
    """
    Temporarily silence Qt signals of `obj` and always turn them back on.
    """
    if obj is None:
        yield
        return
    try:
        obj.blockSignals(True)
        yield
    finally:
        try:
            obj.blockSignals(False)
        except RuntimeError:
            # the C++ object may already be gone
            pass


def safe_set_setting(settings: QSettings, key: str, value) -> None:
    """Best-effort QSettings write that never takes the UI down."""
    try:
        settings.setValue(key, value)
    except Exception:
        pass


def set_style_flag(widget: QWidget, name: str, on: bool) -> None:
    """Flip a dynamic property used by the stylesheet and re-apply the style."""
    widget.setProperty(name, bool(on))
    style = widget.style()
    style.unpolish(widget)
    style.polish(widget)
    widget.update()


def clear_layout(layout: QLayout) -> None:
    while layout.count():
        item = layout.takeAt(0)
        w = item.widget()
        if w is not None:
            w.setParent(None)
            w.deleteLater()
