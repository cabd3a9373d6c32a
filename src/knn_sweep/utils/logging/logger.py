"""Loguru sink setup.

Library modules log through ``loguru.logger`` directly. The command line entry point
calls ``setup_logger`` once to replace loguru's default stderr sink with one that
writes through the shared rich console, so log lines do not break progress bars.
"""

from loguru import logger

from knn_sweep.utils.logging.console import console


def setup_logger(verbose: bool = False):
    """Route loguru output to the rich console.

    Args:
        verbose: log debug messages as well as info and above.
    """
    logger.remove()
    logger.add(
        lambda msg: console.print(msg, end="", markup=False, highlight=False),
        level="DEBUG" if verbose else "INFO",
        format="<level>{level: <8}</level> | {message}",
        colorize=False,
    )
