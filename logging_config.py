"""
Logging Configuration
Sets up the loggers for the sandbox and the simulation core.
"""
import logging
import sys
from typing import Optional, Union

# Top-level modules and packages that log through logging.getLogger(__name__)
LOGGER_NAMES = ("simulation", "render", "main", "pygame_runner", "performance")


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configures the project loggers.

    Args:
        level: Logging level (e.g. logging.DEBUG, "INFO")
        log_file: Optional path to save logs to a file.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level}")

    # Format: Time - Module - Level - Message
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.setLevel(level)

        # Avoid duplicate output when setup runs twice (tests, restarts)
        if logger.hasHandlers():
            logger.handlers.clear()

        for handler in handlers:
            logger.addHandler(handler)
        logger.propagate = False

    logging.getLogger("simulation").info("Logging initialized.")
