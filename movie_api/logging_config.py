"""
Logging setup for the movie API.
The root logger gets a single console handler; calling setup_logging again
is a no-op so repeated create_app calls (tests, reloads) do not duplicate output.
movie_api.logging_config.py
"""
import logging


def setup_logging(level: str = "INFO") -> None:
    logger = logging.getLogger()
    if logger.handlers:
        return

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    logger.addHandler(handler)
