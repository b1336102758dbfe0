"""
Leveled logging for verification diagnostics.

Library code logs through the ``msgverify`` logger, which carries a
NullHandler so nothing is printed unless the application configures logging.
"""

import logging
import sys
from typing import Optional

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

LOGGER_NAME = "msgverify"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"

_LEVELS = {
    "NONE": logging.CRITICAL + 10,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "TRACE": TRACE,
}


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if not name:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def parse_level(level) -> int:
    """Accept a logging level number or one of NONE/ERROR/WARNING/INFO/DEBUG/TRACE"""
    if isinstance(level, int):
        return level
    try:
        return _LEVELS[str(level).strip().upper()]
    except KeyError:
        raise ValueError(f"Unknown log level: {level}") from None


def configure_logging(level="INFO", stream=None) -> logging.Logger:
    """Attach a stream handler to the package logger (used by the CLI)"""
    root = logging.getLogger(LOGGER_NAME)
    root.setLevel(parse_level(level))
    for handler in list(root.handlers):
        if getattr(handler, '_msgverify_cli', False):
            root.removeHandler(handler)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._msgverify_cli = True
    root.addHandler(handler)
    return root


def dump_hex(data: bytes) -> str:
    """Space-separated hex bytes, '<empty>' for no data"""
    if not data:
        return "<empty>"
    return " ".join(f"{b:02x}" for b in data)


def mask_sensitive(data: str) -> str:
    """Show only the first and last four characters"""
    if len(data) <= 8:
        return "****"
    return data[:4] + "..." + data[-4:]


class SafeLogger:
    """
    Wraps any sink with error/warning/info/debug (and optionally trace)
    methods. A sink that raises never affects the caller.
    """

    def __init__(self, sink=None):
        self.sink = sink if sink is not None else get_logger("verify")

    def _emit(self, method: str, level: int, msg: str, *args):
        try:
            fn = getattr(self.sink, method, None)
            if fn is not None:
                fn(msg, *args)
            elif hasattr(self.sink, 'log'):
                self.sink.log(level, msg, *args)
        except Exception:
            # Diagnostics are best effort; a broken sink must not change a verdict
            pass

    def enabled_for(self, level: int) -> bool:
        check = getattr(self.sink, 'isEnabledFor', None)
        if check is None:
            return True
        try:
            return bool(check(level))
        except Exception:
            return False

    def error(self, msg, *args):
        self._emit('error', logging.ERROR, msg, *args)

    def warning(self, msg, *args):
        self._emit('warning', logging.WARNING, msg, *args)

    def info(self, msg, *args):
        self._emit('info', logging.INFO, msg, *args)

    def debug(self, msg, *args):
        self._emit('debug', logging.DEBUG, msg, *args)

    def trace(self, msg, *args):
        self._emit('trace', TRACE, msg, *args)


logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())
