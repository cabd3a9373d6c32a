"""Common logging utilities."""

from knn_sweep.utils.logging.console import console as console
from knn_sweep.utils.logging.logger import setup_logger as setup_logger
from knn_sweep.utils.logging.progress_bar import (
    get_progress_widgets as get_progress_widgets,
)
