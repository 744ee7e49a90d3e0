from __future__ import annotations

import logging
import os

from .config import DEBUG_ENV_VAR

# -------------------- Logging setup --------------------

_LOG = logging.getLogger("simple_templates")


def setup_logging(debug: bool = False) -> logging.Logger:
    """
    Настраивает логгер пакета для CLI. Библиотека сама обработчики не ставит.

    Повторный вызов не добавляет второй обработчик, но может поднять уровень до DEBUG.
    """
    debug = debug or bool(os.environ.get(DEBUG_ENV_VAR))
    level = logging.DEBUG if debug else logging.WARNING

    if not getattr(setup_logging, "_inited", False):
        setup_logging._inited = True  # type: ignore[attr-defined]
        if not _LOG.handlers:
            h = logging.StreamHandler()
            fmt = logging.Formatter("[%(levelname)s] %(message)s")
            h.setFormatter(fmt)
            _LOG.addHandler(h)
        _LOG.setLevel(level)
    elif debug:
        _LOG.setLevel(logging.DEBUG)

    return _LOG


__all__ = ["setup_logging"]
