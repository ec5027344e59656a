#!/usr/bin/env python
"""Logging setup for the funding rate downloader.

The root logger gets a single colorized console handler (colorlog) or, when
``USE_RICH_LOGGING`` is set, a Rich handler. Modules either call
``get_logger(__name__)`` or use the module-detecting ``logger`` proxy.
"""

import inspect
import logging
import os

from colorlog import ColoredFormatter
from rich.console import Console
from rich.logging import RichHandler

# Default log level from environment or INFO
DEFAULT_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# Global state tracking
_root_configured = False
_module_loggers = {}
_use_rich = os.environ.get("USE_RICH_LOGGING", "").lower() in ("true", "1", "yes")

DEFAULT_LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}

FORMAT = "%(log_color)s%(levelname)-8s%(reset)s %(name)s: %(message)s"
# Rich handles the styling itself
RICH_FORMAT = "%(message)s"

console = Console(stderr=True)


def _caller_module_name(depth=2):
    frame = inspect.currentframe()
    for _ in range(depth):
        frame = frame.f_back
    module = inspect.getmodule(frame)
    return module.__name__ if module else "__main__"


def get_logger(name=None, level=None):
    """
    Retrieve or create a module logger.

    Loggers are cached per name so handler and level configuration happens once.

    Parameters:
        name (str, optional): Logger name, typically __name__. Derived from the
                              calling module when omitted.
        level (str, optional): DEBUG, INFO, WARNING, ERROR or CRITICAL.

    Returns:
        logging.Logger: Configured logger instance.
    """
    if name is None:
        name = _caller_module_name()

    if name in _module_loggers:
        if level:
            _module_loggers[name].setLevel(level.upper())
        return _module_loggers[name]

    module_logger = logging.getLogger(name)
    if not _root_configured and not module_logger.handlers:
        module_logger.setLevel((level or DEFAULT_LEVEL).upper())
    elif level:
        module_logger.setLevel(level.upper())

    _module_loggers[name] = module_logger
    return module_logger


def _setup_root_logger(level=None, use_rich=None):
    """
    Configure the root logger with one console handler.

    Existing handlers installed by this module are replaced so repeated calls
    never duplicate output. Every known logger is moved to the new level.
    """
    global _root_configured, _use_rich

    if use_rich is None:
        use_rich = _use_rich
    else:
        _use_rich = use_rich

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if getattr(handler, "_funding_rate_handler", False):
            root_logger.removeHandler(handler)

    log_level = (level or DEFAULT_LEVEL).upper()
    level_int = getattr(logging, log_level)
    root_logger.setLevel(level_int)

    if use_rich:
        handler = RichHandler(
            console=console,
            rich_tracebacks=True,
            markup=False,
            show_time=False,
            show_path=False,
        )
        formatter = logging.Formatter(RICH_FORMAT)
    else:
        handler = logging.StreamHandler()
        formatter = ColoredFormatter(
            FORMAT,
            log_colors=DEFAULT_LOG_COLORS,
            style="%",
            reset=True,
        )

    handler._funding_rate_handler = True
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    for name in list(logging.root.manager.loggerDict):
        logging.getLogger(name).setLevel(level_int)

    _root_configured = True
    return root_logger


def use_rich_logging(enable=True, level=None):
    """Switch the root handler between Rich and colorlog. Returns ``enable``."""
    _setup_root_logger(level=level, use_rich=enable)
    return enable


class LoggerProxy:
    """
    Logger stand-in that resolves the calling module on every call.

    Logging methods return the proxy so calls can be chained.
    """

    def __getattr__(self, name):
        if name in (
            "debug",
            "info",
            "warning",
            "warn",
            "error",
            "critical",
            "exception",
        ):
            module_logger = get_logger(_caller_module_name())

            def log_wrapper(*args, **kwargs):
                getattr(module_logger, name)(*args, **kwargs)
                return self

            return log_wrapper

        return getattr(get_logger(_caller_module_name()), name)

    def setLevel(self, level, configure_root=True):
        """
        Set the logging level, optionally reconfiguring the root logger.

        The LOG_LEVEL environment variable takes precedence over ``level``.
        """
        level = os.environ.get("LOG_LEVEL") or level
        level_str = level.upper() if isinstance(level, str) else logging.getLevelName(level)

        if configure_root:
            _setup_root_logger(level=level_str)

        get_logger(_caller_module_name()).setLevel(level_str)
        return self

    def use_rich(self, enable=True, level=None):
        use_rich_logging(enable=enable, level=level)
        return self


logger = LoggerProxy()
