"""
Logging setup.

Library modules only emit through ``loguru.logger``; applications call
``configure_logging`` once at startup to choose sink, level and format.
"""

from __future__ import annotations

import sys
from typing import Any, Optional

from loguru import logger

from ..config import config


def configure_logging(level: Optional[str] = None, sink: Any = sys.stderr) -> int:
    """
    Replace loguru's default handler with a single configured sink.

    Args:
        level: Minimum level (defaults to config.logging.log_level)
        sink: Any loguru sink (stream, path, callable)

    Returns:
        Handler id, usable with ``logger.remove``
    """
    logger.remove()
    return logger.add(
        sink,
        level=(level or config.logging.log_level).upper(),
        format=config.logging.log_format,
    )
