# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
The project logger: 'INFO' messages are the tool output and go to standard output as is, other
messages go to standard error with a prefix and optionally colorized.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import sys
import logging
import traceback
from typing import NoReturn, Any, IO, cast
import colorama
from cpuxlibs.helperlibs.Exceptions import Error

# Log levels. 'ERRINFO' is an error level without prefix, used for tracebacks.
INFO = logging.INFO
DEBUG = logging.DEBUG
WARNING = logging.WARNING
ERROR = logging.ERROR
ERRINFO = logging.ERROR + 1
CRITICAL = logging.CRITICAL

# Name of the main logger instance. Other project loggers are supposed to be children of this one.
MAIN_LOGGER_NAME = "main"

# Debug messages are prefixed with the time and source code location.
_DEBUG_PREFIX = "[%(created)f] [%(asctime)s] [%(module)s,%(lineno)d]"

# The prefixed levels and their names.
_LEVEL_NAMES = {WARNING: "warning", ERROR: "error", CRITICAL: "critical error"}

class _LevelFormatter(logging.Formatter):
    """A logging formatter with a separate message format per log level."""

    def __init__(self, prefix: str = "", colors: dict[int, str] | None = None):
        """
        Initialize a class instance.

        Args:
            prefix: The prefix for warning and error messages, usually the tool name.
            colors: The 'colorama' color codes per log level. No colors by default.
        """

        super().__init__("%(levelname)s: %(message)s", "%H:%M:%S")

        colors = colors if colors else {}

        def _paint(level: int, text: str) -> str:
            """Colorize 'text' with the color of 'level'."""

            if level not in colors:
                return text
            return f"{colors[level]}{text}{colorama.Style.RESET_ALL}"

        self._fmts: dict[int, str] = {INFO: "%(message)s", ERRINFO: "%(message)s"}

        for level, name in _LEVEL_NAMES.items():
            if prefix:
                name = f"{prefix}: {name}"
            else:
                name = name.title()
            self._fmts[level] = _paint(level, name) + ": %(message)s"

        parts = [_paint(DEBUG, part.strip("[]")) for part in _DEBUG_PREFIX.split()]
        self._fmts[DEBUG] = " ".join(f"[{part}]" for part in parts) + ": %(message)s"

    def format(self, record: logging.LogRecord) -> str:
        """Format log record 'record' using the format of its level."""

        # pylint: disable=protected-access
        self._style._fmt = self._fmts.get(record.levelno, "%(levelname)s: %(message)s")
        return super().format(record)

class _LevelFilter(logging.Filter):
    """A logging filter which lets through only records of certain levels."""

    def __init__(self, levels: list[int], invert: bool = False):
        """
        Initialize a class instance.

        Args:
            levels: The log levels to let through.
            invert: Let through all the log levels except for 'levels'.
        """

        super().__init__()
        self._levels = levels
        self._invert = invert

    def filter(self, record: logging.LogRecord) -> bool:
        """Return 'True' if 'record' should be logged."""
        return (record.levelno in self._levels) != self._invert

class Logger(logging.Logger):
    """
    The project logger class. On top of the standard logger, it provides:
      * per-level message prefixes and colors.
      * the 'ERRINFO' log level.
      * the 'error_out()' method.
    """

    def __init__(self, name: str | None = None):
        """Refer to 'logging.Logger.__init__()'."""

        self.prefix = ""
        self.colored = False

        super().__init__(name if name else "default")

    def configure(self,
                  prefix: str | None = None,
                  level: int | None = None,
                  colored: bool | None = None,
                  info_stream: IO[str] = sys.stdout,
                  error_stream: IO[str] = sys.stderr) -> Logger:
        """
        Configure the logger.

        Args:
            prefix: The prefix for warning and error messages.
            level: The log level. By default, 'WARNING' if the '-q' command line option is used,
                   'DEBUG' if the '-d' option is used, and 'INFO' otherwise.
            colored: Whether to colorize the messages. By default, the messages are colorized if
                     both streams are terminals or the '--force-color' option is used.
            info_stream: The stream for 'INFO' messages.
            error_stream: The stream for all other messages.

        Returns:
            The logger.
        """

        self.prefix = prefix if prefix else ""

        if not level:
            if "-q" in sys.argv:
                level = WARNING
            elif "-d" in sys.argv:
                level = DEBUG
            else:
                level = INFO
        self.setLevel(level)

        if colored is None:
            colored = "--force-color" in sys.argv or \
                      (info_stream.isatty() and error_stream.isatty())
        self.colored = colored

        colors: dict[int, str] = {}
        if colored:
            colors[DEBUG] = colorama.Fore.GREEN
            colors[WARNING] = colorama.Fore.YELLOW + colorama.Style.BRIGHT
            colors[ERROR] = colors[CRITICAL] = colorama.Fore.RED + colorama.Style.BRIGHT

        formatter = _LevelFormatter(prefix=self.prefix, colors=colors)

        self.handlers = []
        for stream, invert in ((info_stream, False), (error_stream, True)):
            handler = logging.StreamHandler(stream)
            handler.setFormatter(formatter)
            handler.addFilter(_LevelFilter([INFO], invert=invert))
            self.addHandler(handler)

        return self

    def _log_traceback(self, level: int = ERROR):
        """Log the traceback of the exception being handled, or the current stack."""

        if sys.exc_info()[0]:
            tb = traceback.format_exc().rstrip()
        else:
            tb = "\n".join(line.rstrip() for line in traceback.format_stack())

        dim = undim = ""
        if self.colored:
            dim = colorama.Style.RESET_ALL + colorama.Style.DIM
            undim = colorama.Style.RESET_ALL

        self.log(level, "--- Debug trace starts here ---")
        self.log(level, "%sAn error occurred, here is the traceback:\n%s%s", dim, tb, undim)
        self.log(level, "--- Debug trace ends here ---\n")

    def error_out(self, fmt: str | Error, *args: Any, print_tb: bool = False) -> NoReturn:
        """
        Log an error message and exit the program with exit code 1.

        Args:
            fmt: The error message format string or an exception object.
            *args: The arguments for the format string.
            print_tb: Log the traceback too. The traceback is always logged in debug mode.
        """

        errmsg = str(fmt) % args if args else str(fmt)

        if print_tb or self.getEffectiveLevel() == DEBUG:
            self._log_traceback(level=ERRINFO)

        self.error(errmsg)

        raise SystemExit(1)

logging.setLoggerClass(Logger)

def getLogger(name: str | None = None) -> Logger:
    """
    Return logger 'name'. Same as 'logging.getLogger()', but the returned logger is an instance of
    'Logger' (unless it is the root logger).
    """

    return cast(Logger, logging.getLogger(name=name))
