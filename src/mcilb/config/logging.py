"""Shared logging helpers for mcilb."""

from __future__ import annotations

import logging

_NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger once with terse, CLI-friendly defaults.

    HTTP client loggers are held at WARNING unless ``level`` is DEBUG, where
    request lines help when tracing a reconciliation. Pass ``force=True`` to
    reconfigure during tests.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(level if level <= logging.DEBUG else logging.WARNING)
