from __future__ import annotations

import logging

_ROOT_LOGGER = "hangul_ime"
_HANDLER_NAME = "hangul_ime.stream"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Apply `level` to the package logger, adding one stream handler."""
    log = logging.getLogger(_ROOT_LOGGER)
    log.setLevel(level)
    if not any(h.get_name() == _HANDLER_NAME for h in log.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(_FORMAT))
        log.addHandler(handler)
    return log
