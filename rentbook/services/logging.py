"""Root logger setup for the rentbook API server.

Every module logs through ``logging.getLogger(__name__)``; this module only
decides where those records go. Level and file come from Settings
(LOG_LEVEL / LOG_FILE).
"""

import logging
import sys
from pathlib import Path

from rentbook.config import Settings, get_settings

LOG_FORMAT = "[%(asctime)s] %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_log_level(level_name: str) -> int:
    """Logging constant for a level name; unknown names fall back to INFO."""
    level = logging.getLevelName(level_name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def setup_server_logging(settings: Settings | None = None) -> None:
    """Send all log records to stdout and to the configured log file.

    Calling it again replaces the handlers instead of stacking new ones.
    SQL statements are only logged when database_echo is on.
    """
    settings = settings or get_settings()
    log_path = Path(settings.log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    level = get_log_level(settings.log_level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    for handler in (logging.StreamHandler(sys.stdout), logging.FileHandler(log_path)):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    if not settings.database_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(
        "Logging configured: level=%s, file=%s", logging.getLevelName(level), log_path
    )
