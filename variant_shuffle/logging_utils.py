"""
Unified logging utilities for variant-shuffle.

All entrypoints should call configure_logging() once at startup.
"""
import logging
import os
import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, List, Optional, Union

# Track whether logging has been configured
_logging_configured = False
_HANDLER_TAG = "_vs_handler"
_CONSOLE_FMT = '%(asctime)s | %(levelname)-5s | %(name)s | %(message)s'
_FILE_FMT = '%(asctime)s | %(levelname)-5s | %(name)s | %(funcName)s:%(lineno)d | %(message)s'


def configure_logging(
    level: str = 'INFO',
    log_file: Optional[str] = None,
    file_level: str = 'DEBUG',
    force: bool = False,
    console: bool = True,
) -> None:
    """
    Configure logging for the entire application.

    Subsequent calls are ignored unless force=True.

    Args:
        level: Console log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional path to log file
        file_level: Log level for file output (default DEBUG)
        force: If True, reconfigure even if already configured
        console: Whether to add a console handler

    Environment variable overrides:
        LOG_LEVEL: Override the level parameter
        LOG_FILE: Override the log_file parameter
    """
    global _logging_configured

    if _logging_configured and not force:
        return

    level = os.getenv('LOG_LEVEL', level).upper()
    if log_file is None:
        log_file = os.getenv('LOG_FILE')

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)  # filter at handler level

    for handler in root.handlers[:]:
        if getattr(handler, _HANDLER_TAG, False):
            root.removeHandler(handler)

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(getattr(logging, level, logging.INFO))
        console_handler.setFormatter(logging.Formatter(_CONSOLE_FMT, datefmt='%H:%M:%S'))
        setattr(console_handler, _HANDLER_TAG, True)
        root.addHandler(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(getattr(logging, file_level, logging.DEBUG))
        file_handler.setFormatter(logging.Formatter(_FILE_FMT, datefmt='%Y-%m-%d %H:%M:%S'))
        setattr(file_handler, _HANDLER_TAG, True)
        root.addHandler(file_handler)

    for noisy in ['urllib3', 'requests']:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    _logging_configured = True
    logging.getLogger(__name__).debug(f"Logging configured: level={level}, file={log_file or 'none'}")


@contextmanager
def stage_timer(stage_name: str, logger: Optional[logging.Logger] = None):
    """
    Time a pipeline stage: start at DEBUG, completion with elapsed time at INFO.

    Usage:
        with stage_timer("Title grouping", logger):
            result = grouper.group(tracks)
    """
    logger = logger or logging.getLogger(__name__)
    logger.debug(f"{stage_name} starting...")
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        if elapsed < 1:
            logger.info(f"{stage_name} completed in {elapsed*1000:.0f}ms")
        else:
            logger.info(f"{stage_name} completed in {elapsed:.1f}s")


def format_count(n: int, singular: str, plural: Optional[str] = None) -> str:
    """Format a count with proper singular/plural form: "1 track", "5 tracks"."""
    if plural is None:
        plural = singular + 's'
    return f"{n:,} {singular if n == 1 else plural}"


def truncate_list(items: List[Any], max_items: int = 3, format_fn=str) -> str:
    """
    Format a list for logging, truncating if needed.

    Returns:
        Formatted string like "a, b, c (+5 more)"
    """
    if not items:
        return "(none)"

    result = ', '.join(format_fn(item) for item in items[:max_items])
    if len(items) > max_items:
        result += f" (+{len(items) - max_items} more)"
    return result


def add_logging_args(parser) -> None:
    """Add the standard --log-level/--debug/--quiet/--log-file arguments."""
    group = parser.add_argument_group('logging')
    group.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default='INFO',
        help='Set logging level (default: INFO)'
    )
    group.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging (shortcut for --log-level DEBUG)'
    )
    group.add_argument(
        '--quiet',
        action='store_true',
        help='Suppress most output (shortcut for --log-level WARNING)'
    )
    group.add_argument(
        '--log-file',
        type=str,
        metavar='PATH',
        help='Write logs to file'
    )


def resolve_log_level(args) -> str:
    """Priority: --debug > --quiet > --log-level."""
    if getattr(args, 'debug', False):
        return 'DEBUG'
    if getattr(args, 'quiet', False):
        return 'WARNING'
    return getattr(args, 'log_level', 'INFO')


class RunSummary:
    """
    Collect metrics during a run and log a summary at the end.

    Usage:
        summary = RunSummary("Shuffle")
        summary.add("tracks_in", 150)
        summary.increment("relaxations")
        summary.log()
    """

    def __init__(self, title: str, logger: Optional[logging.Logger] = None):
        self.title = title
        self.logger = logger or logging.getLogger(__name__)
        self.metrics: dict = {}
        self.start_time = time.perf_counter()

    def add(self, key: str, value: Union[int, float, str]) -> None:
        self.metrics[key] = value

    def increment(self, key: str, amount: int = 1) -> None:
        self.metrics[key] = self.metrics.get(key, 0) + amount

    def log(self, level: int = logging.INFO) -> None:
        elapsed = time.perf_counter() - self.start_time

        self.logger.log(level, "=" * 60)
        self.logger.log(level, f"{self.title.upper()} SUMMARY")
        for key, value in self.metrics.items():
            display_key = key.replace('_', ' ').title()
            if isinstance(value, float):
                self.logger.log(level, f"  {display_key}: {value:.2f}")
            else:
                self.logger.log(level, f"  {display_key}: {value}")
        self.logger.log(level, f"  Total Time: {elapsed:.1f}s")
        self.logger.log(level, "=" * 60)
