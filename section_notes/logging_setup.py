from __future__ import annotations

import logging
import sys
import uuid
from logging.handlers import RotatingFileHandler
from pathlib import Path

from section_notes.settings import APP_NAME, CONSOLE_LOG_LEVEL, LOG_PATH

SESSION_ID = uuid.uuid4().hex[:8]

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s | sid=%(session)s"


class EnsureSessionFilter(logging.Filter):
    """Ensure record.session exists so Formatter never crashes."""
    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "session"):
            record.session = SESSION_ID
        return True


class SessionAdapter(logging.LoggerAdapter):
    def process(self, msg, kwargs):
        extra = kwargs.setdefault("extra", {})
        extra.setdefault("session", SESSION_ID)
        return msg, kwargs


def setup_logging(log_path: Path = LOG_PATH, *, console_level: str = CONSOLE_LOG_LEVEL) -> SessionAdapter:
    """
    Configure the "section-notes" logger for this process: everything to a
    rotating file, `console_level` and up to stdout.
    The GUI and the store server each pass their own file, they never share one.
    Calling it again keeps the handlers of the first call.
    """
    logger = logging.getLogger(APP_NAME)
    if logger.handlers:
        return SessionAdapter(logger, {})

    log_path = Path(log_path)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    fmt = logging.Formatter(LOG_FORMAT)
    session_filter = EnsureSessionFilter()

    fh = RotatingFileHandler(log_path, maxBytes=2 * 1024 * 1024, backupCount=5, encoding="utf-8")
    fh.setLevel(logging.DEBUG)

    ch = logging.StreamHandler(sys.stdout or sys.stderr)
    level = logging.getLevelName(console_level)
    ch.setLevel(level if isinstance(level, int) else logging.INFO)

    for handler in (fh, ch):
        handler.setFormatter(fmt)
        handler.addFilter(session_filter)
        logger.addHandler(handler)

    logger.info("Logging initialized. log_file=%s", log_path)
    return SessionAdapter(logger, {})


def install_global_exception_hooks(log: logging.LoggerAdapter) -> None:
    """
    Route uncaught Python exceptions and Qt's own messages into `log`.
    """
    def _excepthook(exc_type, exc, tb):
        log.critical("Uncaught exception", exc_info=(exc_type, exc, tb))
        sys.__excepthook__(exc_type, exc, tb)

    sys.excepthook = _excepthook

    from PySide6.QtCore import qInstallMessageHandler

    qInstallMessageHandler(qt_message_logger(log))
    log.info("Qt message handler installed")


def qt_message_logger(log: logging.LoggerAdapter):
    """Build a qInstallMessageHandler callback that logs at the matching level."""
    from PySide6.QtCore import QtMsgType

    levels = {
        QtMsgType.QtDebugMsg: logging.DEBUG,
        QtMsgType.QtInfoMsg: logging.INFO,
        QtMsgType.QtWarningMsg: logging.WARNING,
        QtMsgType.QtCriticalMsg: logging.ERROR,
        QtMsgType.QtFatalMsg: logging.CRITICAL,
    }

    def _qt_message_handler(mode, context, message):
        file = getattr(context, "file", None)
        line = getattr(context, "line", None)
        func = getattr(context, "function", None)
        where = f"{file}:{line} {func}" if file or line or func else "unknown"
        log.log(levels.get(mode, logging.WARNING), "Qt: %s | where=%s", message, where)

    return _qt_message_handler
