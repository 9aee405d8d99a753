"""Logging configuration."""

from __future__ import annotations

import logging

from flask import Flask


def configure_logging(app: Flask) -> None:
    """Configure process-wide logging from LOG_LEVEL.

    Stdlib logging only; every module logs through ``logging.getLogger(__name__)``.
    """

    level_name = str(app.config.get("LOG_LEVEL", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    logging.getLogger("lottery_app").setLevel(level)

    # SQL echo and per-request access lines are too chatty at INFO.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    if not app.debug:
        logging.getLogger("werkzeug").setLevel(logging.WARNING)
