from __future__ import annotations

import logging

from crudapps.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | int | None = None) -> None:
    """Install the shared format on the root logger (no-op if already configured)."""
    logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT)
