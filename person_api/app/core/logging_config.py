"""
Logging setup for the Person API.

``create_app`` calls ``setup_logging`` with ``LOG_LEVEL`` and ``LOG_FILE``
from the settings.  What the service emits:

* ``person_api.app.services.person_service``: one INFO line per added,
  updated or deleted person, DEBUG with the row count when listing;
* ``person_api.app.core.db``: DEBUG for each stored-procedure call with
  its parameters, INFO once the schema and procedures are installed;
* ``person_api.app.core.errors``: ERROR with traceback for every storage
  failure turned into a 500.
"""

import logging
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger.

    Handlers are attached only if the root logger has none yet, so
    calling ``create_app`` repeatedly (as the tests do) does not
    duplicate output.  The level is applied every time.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to INFO.
    logfile : Optional[str]
        Path of a file to additionally log to.
    """
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if logger.handlers:
        return

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
