import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Install one stream handler on the root logger.

    Level falls back to FINANCE_LOG_LEVEL, then INFO. Calling it again only
    updates the level.
    """
    level = (level or os.getenv("FINANCE_LOG_LEVEL", "INFO")).upper()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level, logging.INFO))
    if not any(getattr(h, "_finance_handler", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._finance_handler = True
        root.addHandler(handler)
