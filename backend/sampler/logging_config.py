"""Centralised logging configuration.

Entry points call ``configure_logging()`` once; other modules simply use
``logging.getLogger(__name__)``.
"""

from __future__ import annotations

import logging
import os


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or os.getenv("LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
