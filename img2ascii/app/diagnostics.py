from __future__ import annotations

import locale
import logging
import os
import sys
from typing import Optional

LOG_LEVEL_ENV_VAR = "IMG2ASCII_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "warning"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
FALLBACK_LOCALE = "C.UTF-8"

logger = logging.getLogger(__name__)


def resolve_log_level(name: Optional[str] = None) -> int:
    name = name or os.environ.get(LOG_LEVEL_ENV_VAR) or DEFAULT_LOG_LEVEL
    level = logging.getLevelName(name.upper())
    if isinstance(level, int):
        return level
    return logging.WARNING


def configure_logging(name: Optional[str] = None) -> None:
    logging.basicConfig(level=resolve_log_level(name), format=LOG_FORMAT, stream=sys.stderr)


def setup_locale() -> Optional[str]:
    """Apply the environment's locale, falling back to C.UTF-8; return the name in effect."""
    for candidate in ("", FALLBACK_LOCALE):
        try:
            return locale.setlocale(locale.LC_ALL, candidate)
        except locale.Error:
            continue
    return None


def emit_startup_warnings() -> None:
    if setup_locale() is None:
        logger.warning("Could not set a locale; terminal output may not render Braille or shading glyphs")
    encoding = getattr(sys.stdout, "encoding", None) or ""
    if encoding.replace("-", "").lower() != "utf8":
        logger.info("Standard output encoding is %s; the output file is written as UTF-8 regardless", encoding or "unknown")
