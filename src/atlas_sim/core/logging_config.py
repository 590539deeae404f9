"""
Logging setup for headless runs and demos.

Modules log through logging.getLogger(__name__) under the 'atlas_sim'
namespace; this only decides where those records go.
"""
import logging
import sys
from typing import Optional, Union

PACKAGE_LOGGER = "atlas_sim"

# Loggers that can emit once per frame at DEBUG
FRAME_LOOP_LOGGERS = (
    "atlas_sim.simulation.driver",
    "atlas_sim.render.scene_graph",
)

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)-7s %(name)s: %(message)s"


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown logging level: {level!r}")
    return resolved


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    frame_level: Union[int, str, None] = None,
) -> logging.Logger:
    """
    Route the package's log records to stdout and, optionally, a file.

    Args:
        level: Package logging level, as an int or a name like "DEBUG".
        log_file: Optional path; the file is overwritten on each run.
        frame_level: Level for the per-frame loop loggers. Defaults to level;
            set it higher to keep a DEBUG run readable over thousands of frames.
    """
    package_level = _resolve_level(level)
    loop_level = package_level if frame_level is None else _resolve_level(frame_level)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(package_level)

    # Calling again replaces handlers instead of stacking them
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    for name in FRAME_LOOP_LOGGERS:
        logging.getLogger(name).setLevel(loop_level)

    logger.info(f"Logging initialized at {logging.getLevelName(package_level)}.")
    return logger
