# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
The exception types of the project. All of them are derived from 'Error'. The file I/O errors
carry the path and the OS error number, so that callers can tell a missing control from a failure
to access it.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import re
from pathlib import Path
from typing import Any

class Error(Exception):
    """The base class for all exceptions raised by this project."""

    def __init__(self, msg: str, *args: Any, **kwargs: Any):
        """
        Initialize the exception object.

        Args:
            msg: The exception message, or a format string if 'args' are given.
            *args: The format string arguments.
            **kwargs: Extra information about the error, stored as attributes of the object.
        """

        self.msg = str(msg) % args if args else str(msg)
        super().__init__(self.msg)

        for key, val in kwargs.items():
            setattr(self, key, val)

    def indent(self, indent: int | str, capitalize: bool = True) -> str:
        """
        Return the message with every line prefixed, for embedding into another message.

        Args:
            indent: The prefix string, or count of spaces to use as the prefix.
            capitalize: Capitalize the first letter of the message.

        Returns:
            The prefixed message.
        """

        pfx = " " * indent if isinstance(indent, int) else indent
        msg = pfx + self.msg.replace("\n", f"\n{pfx}")

        if capitalize:
            msg = re.sub(r"^(\s*)(\S)", lambda mobj: mobj.group(1) + mobj.group(2).upper(), msg,
                         count=1)
        return msg

    def __str__(self):
        """Return the exception message."""
        return self.msg

class ErrorIO(Error):
    """
    A file I/O operation failed. The 'path' attribute is the file path and the 'errno' attribute
    is the OS error number, 'None' if either is unknown.
    """

    def __init__(self, msg: str, *args: Any, path: Path | str | None = None,
                 errno: int | None = None, **kwargs: Any):
        """
        Initialize the exception object.

        Args:
            msg: The exception message.
            *args: The format string arguments.
            path: Path of the file the operation failed on.
            errno: The OS error number.
            **kwargs: Extra information about the error.
        """

        self.path = Path(path) if path is not None else None
        self.errno = errno

        super().__init__(msg, *args, **kwargs)

class ErrorNotFound(ErrorIO):
    """A file or a control does not exist."""

class ErrorPermissionDenied(ErrorIO):
    """Access to a file was denied."""

class ErrorBadFormat(ErrorIO):
    """A value has bad format, for example file contents or a value to write."""

class ErrorConnect(Error):
    """Failed to connect to a remote host."""

    def __init__(self, msg: str, *args: Any, host: str | None = None, **kwargs: Any):
        """Same as 'Error.__init__()', but mention host 'host' in the message."""

        if host:
            msg = f"Cannot connect to host '{host}'\n{msg}"

        super().__init__(msg, *args, **kwargs)
