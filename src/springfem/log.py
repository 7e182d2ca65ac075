from __future__ import annotations

import logging

LOGGER_NAME = "springfem"

_formatter = logging.Formatter(
    fmt="%(asctime)s [%(levelname)s] %(name)s.%(funcName)s():%(lineno)d - %(message)s",
    datefmt="%H:%M:%S",
)


def configure_logging(debug: bool = False) -> logging.Logger:
    """
    Configure the package logger.

    With ``debug=True`` a single StreamHandler is attached and the level is
    lowered to DEBUG; otherwise the logger stays at WARNING and emits through
    whatever handlers the application configured.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if debug:
        # FileHandler subclasses StreamHandler and does not count as console output
        if not any(type(h) is logging.StreamHandler for h in logger.handlers):
            handler = logging.StreamHandler()
            handler.setFormatter(_formatter)
            logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.WARNING)
    return logger
