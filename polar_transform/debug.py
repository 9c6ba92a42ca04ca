"""
Debug logging helpers.

The transforms log through ``logging.getLogger(__name__)`` under the
``polar_transform`` namespace and never configure handlers themselves.
``setup_debug_logging`` attaches a console handler for interactive use.
"""

import logging
import math
from typing import Optional, Sequence

from polar_transform.config import PolarConfig

LOGGER_NAME = "polar_transform"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_handler: Optional[logging.Handler] = None


def setup_debug_logging(level: int = logging.DEBUG) -> logging.Logger:
    """
    Route package log records to stderr at the given level.

    Calling it again only changes the level; a second handler is never added.

    Parameters:
        level: Logging level for the package logger

    Returns:
        The package logger
    """
    global _handler
    logger = logging.getLogger(LOGGER_NAME)
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(_handler)
    _handler.setLevel(level)
    logger.setLevel(level)
    return logger


def disable_debug_logging() -> None:
    """Remove the handler added by setup_debug_logging and reset the level."""
    global _handler
    logger = logging.getLogger(LOGGER_NAME)
    if _handler is not None:
        logger.removeHandler(_handler)
        _handler = None
    logger.setLevel(logging.NOTSET)


def format_angle(angle: float) -> str:
    """Format an angle in radians with its value in degrees, e.g. '1.0472 rad (60.00°)'."""
    if math.isnan(angle):
        return "nan rad"
    return f"{angle:.4f} rad ({math.degrees(angle):.2f}°)"


def format_point(point: Sequence[float], precision: int = 3) -> str:
    """Format a point as '(x0, x1, ...)'."""
    return "(" + ", ".join(f"{float(v):.{precision}f}" for v in point) + ")"


def format_config(config: PolarConfig) -> str:
    center = "origin" if config.center is None else format_point(config.center)
    return (
        f"center={center}, angle_offset={format_angle(config.angle_offset)}, "
        f"constant_arc_increment={config.constant_arc_increment}, "
        f"return_nan={config.return_nan}"
    )
