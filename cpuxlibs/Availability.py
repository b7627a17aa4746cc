# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Decide whether a failed pseudo-file operation means "the control is not present on this platform"
or "a real error happened".

The decision is made in one place, 'is_absent()':
  * 'ErrorNotFound' means the control is absent.
  * 'ErrorPermissionDenied' for a path that does not exist means the control is absent. Some
    pseudo-file systems report "permission denied" for nodes that are not implemented on the
    running platform.
  * 'ErrorPermissionDenied' for a path that exists is a real error.
  * All other errors, including malformed contents, are real errors.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import typing
from typing import NamedTuple, Any, Union
from cpuxlibs.helperlibs import Logging
from cpuxlibs.helperlibs.Exceptions import Error, ErrorNotFound, ErrorPermissionDenied

if typing.TYPE_CHECKING:
    from pathlib import Path
    from typing import Callable, TypeVar
    from cpuxlibs.helperlibs.FSManager import FSManagerType

    _T = TypeVar("_T")

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.cpux.{__name__}")

class Present(NamedTuple):
    """
    The control exists and the operation succeeded.

    Attributes:
        value: The value that was read ('None' for write operations).
    """

    value: Any

class Absent(NamedTuple):
    """
    The control does not exist on this platform or for this target.

    Attributes:
        path: Path of the absent pseudo-file, if known.
    """

    path: Path | None = None

class Failed(NamedTuple):
    """
    The operation failed with a real error.

    Attributes:
        error: The exception object describing the failure.
    """

    error: Error

AvailabilityType = Union[Present, Absent, Failed]

def is_absent(fsman: FSManagerType, err: Error, logger: Logging.Logger | None = None) -> bool:
    """
    Check whether an exception raised by a pseudo-file operation means that the control is absent.

    Args:
        fsman: The file-system manager object to use for checking whether the path exists.
        err: The exception to check.
        logger: The logger to log the decision with. Use the module logger if not provided.

    Returns:
        'True' if the exception means that the control is absent, 'False' if it is a real error.
    """

    if isinstance(err, ErrorNotFound):
        return True

    if isinstance(err, ErrorPermissionDenied):
        path = getattr(err, "path", None)
        if path is None:
            return False
        if fsman.exists(path):
            return False
        log = logger if logger else _LOG
        log.debug("permission denied for non-existing path '%s'%s, treating as absent",
                   path, fsman.hostmsg)
        return True

    return False

def probe(fsman: FSManagerType, func: Callable[..., _T], *args: Any,
          logger: Logging.Logger | None = None, **kwargs: Any) -> _T | None:
    """
    Run a pseudo-file operation and return its result, or 'None' if the control is absent.

    Args:
        fsman: The file-system manager object to use for checking whether paths exist.
        func: The operation to run (e.g., a raw getter or setter of a controller).
        *args: The positional arguments to pass to 'func'.
        logger: The logger to log with. Use the module logger if not provided.
        **kwargs: The keyword arguments to pass to 'func'.

    Returns:
        The return value of 'func' or 'None' if the control is absent.

    Raises:
        Error: The exception raised by 'func', if it is not an absence.
    """

    try:
        return func(*args, **kwargs)
    except Error as err:
        if not is_absent(fsman, err, logger=logger):
            raise
        log = logger if logger else _LOG
        log.debug("%s: control is absent:\n%s", getattr(func, "__name__", func), err.indent(2))
        return None

def or_default(fsman: FSManagerType,
               func: Callable[..., _T],
               default: _T,
               *args: Any,
               logger: Logging.Logger | None = None,
               **kwargs: Any) -> _T:
    """
    Same as 'probe()', but return 'default' instead of 'None' if the control is absent.

    Args:
        fsman: The file-system manager object to use for checking whether paths exist.
        func: The operation to run.
        default: The value to return if the control is absent.
        *args: The positional arguments to pass to 'func'.
        logger: The logger to log with. Use the module logger if not provided.
        **kwargs: The keyword arguments to pass to 'func'.

    Returns:
        The return value of 'func' or 'default' if the control is absent.
    """

    try:
        return func(*args, **kwargs)
    except Error as err:
        if not is_absent(fsman, err, logger=logger):
            raise
        log = logger if logger else _LOG
        log.debug("%s: control is absent, using the default value '%s'",
                   getattr(func, "__name__", func), default)
        return default

def probe_write(fsman: FSManagerType, func: Callable[..., Any], *args: Any,
                logger: Logging.Logger | None = None, **kwargs: Any) -> bool:
    """
    Run a pseudo-file write operation, unless the control is absent.

    Args:
        fsman: The file-system manager object to use for checking whether paths exist.
        func: The write operation to run (e.g., a raw setter of a controller).
        *args: The positional arguments to pass to 'func'.
        logger: The logger to log with. Use the module logger if not provided.
        **kwargs: The keyword arguments to pass to 'func'.

    Returns:
        'True' if the value was written, 'False' if the control is absent.
    """

    try:
        func(*args, **kwargs)
    except Error as err:
        if not is_absent(fsman, err, logger=logger):
            raise
        log = logger if logger else _LOG
        log.debug("%s: control is absent, nothing written:\n%s",
                   getattr(func, "__name__", func), err.indent(2))
        return False

    return True

def check(fsman: FSManagerType, func: Callable[..., Any], *args: Any,
          logger: Logging.Logger | None = None, **kwargs: Any) -> AvailabilityType:
    """
    Run a pseudo-file operation and return the outcome as 'Present', 'Absent', or 'Failed'.
    Exceptions derived from 'Error' are not propagated.

    Args:
        fsman: The file-system manager object to use for checking whether paths exist.
        func: The operation to run.
        *args: The positional arguments to pass to 'func'.
        logger: The logger to log with. Use the module logger if not provided.
        **kwargs: The keyword arguments to pass to 'func'.

    Returns:
        'Present(value)' on success, 'Absent(path)' if the control is absent, and 'Failed(error)'
        in case of a real error.
    """

    try:
        return Present(func(*args, **kwargs))
    except Error as err:
        if is_absent(fsman, err, logger=logger):
            return Absent(getattr(err, "path", None))
        return Failed(err)
