# aaarg/utils/logging_config.py

"""
Configures logging for aaarg based on loaded settings.
Uses Rich for console logging.
"""

import logging
from datetime import datetime

from rich.logging import RichHandler

from aaarg.config import AaargConfig
from aaarg.version import __version__

# Map verbosity levels (from CLI flags) to logging levels
VERBOSITY_MAP = {
    0: logging.WARNING,  # Default (normal)
    1: logging.INFO,     # -v (verbose)
    2: logging.DEBUG,    # -vv (debug)
    -1: logging.CRITICAL + 10  # -q (quiet)
}


def setup_logging(config: AaargConfig, verbosity: int = 0):
    """
    Configures the package logger based on the configuration and verbosity level.

    Args:
        config: The loaded AaargConfig object.
        verbosity: -1 for quiet, 0 for normal, 1 for verbose, 2 for debug.
    """
    log_cfg = config.logging
    console_level = VERBOSITY_MAP.get(verbosity, logging.DEBUG if verbosity > 2 else logging.INFO)

    package_logger = logging.getLogger("aaarg")
    package_logger.setLevel(logging.DEBUG)  # Handlers filter individually
    package_logger.handlers.clear()

    if console_level <= logging.CRITICAL:
        console_handler = RichHandler(
            level=console_level,
            show_time=False,
            show_level=True,
            show_path=False,
            rich_tracebacks=True,
            markup=False,
        )
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        package_logger.addHandler(console_handler)

    log_filepath = None
    if log_cfg.log_file_enabled:
        try:
            log_dir = config.paths.log_directory
            log_dir.mkdir(parents=True, exist_ok=True)
            log_filepath = log_dir / log_cfg.log_filename_template.format(timestamp=datetime.now())

            file_handler = logging.FileHandler(log_filepath, encoding='utf-8')
            file_handler.setLevel(log_cfg.log_level_file)
            file_handler.setFormatter(logging.Formatter(log_cfg.log_format))
            package_logger.addHandler(file_handler)
        except OSError as e:
            logging.getLogger("aaarg.error").error(f"Failed to configure file logging: {e}", exc_info=True)
            log_filepath = None

    init_logger = logging.getLogger("aaarg.init")
    init_logger.info(f"aaarg v{__version__} initialized.")
    if log_filepath is not None:
        init_logger.info(f"Logging to file: {log_filepath}")
        init_logger.debug(f"Full configuration loaded: {config.model_dump()}")
