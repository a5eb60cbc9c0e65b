"""Logging configuration for gwt"""
import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def get_log_file() -> Path:
    """Location of the debug log file."""
    return Path.home() / '.gwt' / 'gwt.log'


def get_log_level(verbose: bool = False, debug: bool = False) -> int:
    """WARNING by default, INFO with --verbose, DEBUG with --debug."""
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return logging.WARNING


def _console_handler(level: int, debug: bool) -> logging.Handler:
    # stderr keeps stdout free for command output
    handler = RichHandler(
        console=Console(stderr=True),
        level=level,
        show_time=debug,
        show_path=debug,
        markup=False,
        rich_tracebacks=debug,
    )
    handler.setFormatter(logging.Formatter('[%(name)s] %(message)s'))
    return handler


def _file_handler(log_file: Path) -> logging.Handler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, mode='w')  # Overwrite each run
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    return handler


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """
    Configure logging for the application.

    Console logs go to stderr through rich. In debug mode every record is
    also written to ~/.gwt/gwt.log, replacing the previous run's log.

    Args:
        verbose: If True, show INFO level messages
        debug: If True, show DEBUG level messages and write the log file
    """
    level = get_log_level(verbose=verbose, debug=debug)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if debug:
        root_logger.addHandler(_file_handler(get_log_file()))
    root_logger.addHandler(_console_handler(level, debug))

    # GitPython logs every git invocation at DEBUG
    logging.getLogger('git').setLevel(logging.INFO if debug else logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified module.

    Args:
        name: Name of the module (typically __name__)

    Returns:
        Logger instance named without the ``gwt.`` and ``services.`` prefixes
    """
    for prefix in ('gwt.', 'services.'):
        if name.startswith(prefix):
            name = name[len(prefix):]

    return logging.getLogger(name)
