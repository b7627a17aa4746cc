# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Provide the typed pseudo-file accessor: read and write sysfs-like pseudo-files as booleans,
unsigned integers, strings, and lists of strings.

Values are encoded as follows.
  * bool: "0" or "1".
  * unsigned integer: decimal text.
  * string: raw text, written verbatim.
  * string list: single-space-separated tokens on one line.

Reading strips exactly one trailing newline, the rest of the contents is taken literally.

File I/O errors are classified exactly once, here:
  * 'ErrorNotFound' - the file does not exist ('ENOENT'), or the device reported one of the errno
    values of the absence policy ('ENXIO' and 'EBUSY' by default). On Linux these mean that the
    control is inapplicable, permanently or transiently.
  * 'ErrorPermissionDenied' - 'EACCES' or 'EPERM'.
  * 'ErrorIO' - any other I/O error.
Malformed contents and bad values to write result in 'ErrorBadFormat'.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import re
import errno
import typing
from pathlib import Path
from cpuxlibs.helperlibs import Logging, ClassHelpers, LocalFSManager
from cpuxlibs.helperlibs.Exceptions import Error, ErrorIO, ErrorNotFound, ErrorPermissionDenied
from cpuxlibs.helperlibs.Exceptions import ErrorBadFormat

if typing.TYPE_CHECKING:
    from typing import Iterable
    from cpuxlibs.helperlibs.FSManager import FSManagerType

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.cpux.{__name__}")

# The errno values, in addition to 'ENOENT', that mean "the control is not present" on Linux.
DEFAULT_ABSENT_ERRNOS = frozenset((errno.ENXIO, errno.EBUSY))

# The errno values that mean "permission denied".
_PERMISSION_ERRNOS = frozenset((errno.EACCES, errno.EPERM))

_U64_MAX = 2**64 - 1
_U64_REGEX = re.compile(r"[0-9]+")

class PseudoFS(ClassHelpers.SimpleCloseContext):
    """
    Read and write typed values from/to pseudo-files. Public methods overview.

    Read a pseudo-file.
      - 'read_bool()', 'read_int()', 'read_str()', 'read_str_list()'.
    Write a pseudo-file.
      - 'write_bool()', 'write_int()', 'write_str()', 'write_str_list()'.
    Check if a path exists.
      - 'exists()'.
    """

    def __init__(self,
                 fsman: FSManagerType | None = None,
                 absent_errnos: Iterable[int] | None = None,
                 logger: Logging.Logger | None = None):
        """
        Initialize a class instance.

        Args:
            fsman: The file-system manager object for the host to access pseudo-files on. Use the
                   local host if not provided.
            absent_errnos: The errno values, in addition to 'ENOENT', that are treated as "the
                           control does not exist". Defaults to 'DEFAULT_ABSENT_ERRNOS'.
            logger: The logger to log the operations with. Use the module logger if not provided.
        """

        self._close_fsman = fsman is None

        if not fsman:
            fsman = LocalFSManager.LocalFSManager()
        self._fsman = fsman

        if absent_errnos is None:
            absent_errnos = DEFAULT_ABSENT_ERRNOS
        self.absent_errnos = frozenset(absent_errnos)

        self._log = logger if logger else _LOG

    def close(self):
        """Uninitialize the class object."""
        ClassHelpers.close(self, close_attrs=("_fsman",))

    @property
    def fsman(self) -> FSManagerType:
        """The file-system manager object used for accessing pseudo-files."""
        return self._fsman

    def _classify(self, err: OSError, path: Path, errmsg: str) -> ErrorIO:
        """
        Turn an 'OSError' raised by the file-system manager into a project exception.

        Args:
            err: The exception to classify.
            path: The path the failed operation was performed on.
            errmsg: The message describing the failed operation.

        Returns:
            An instance of 'ErrorNotFound', 'ErrorPermissionDenied', or 'ErrorIO'.
        """

        msg = f"{errmsg}:\n{Error(str(err)).indent(2)}"

        if isinstance(err, FileNotFoundError) or err.errno == errno.ENOENT or \
           err.errno in self.absent_errnos:
            return ErrorNotFound(msg, path=path, errno=err.errno)
        if isinstance(err, PermissionError) or err.errno in _PERMISSION_ERRNOS:
            return ErrorPermissionDenied(msg, path=path, errno=err.errno)
        return ErrorIO(msg, path=path, errno=err.errno)

    def _read(self, path: Path, what: str) -> str:
        """
        Read a pseudo-file and strip the trailing newline.

        Args:
            path: The path to the pseudo-file to read.
            what: Short description of the value, for messages.

        Returns:
            The pseudo-file contents without the trailing newline.
        """

        try:
            val = self._fsman.read(path)
        except OSError as err:
            errmsg = f"Failed to read {what} from '{path}'{self._fsman.hostmsg}"
            raise self._classify(err, path, errmsg) from err
        except UnicodeDecodeError as err:
            raise ErrorBadFormat(f"Bad {what} in '{path}'{self._fsman.hostmsg}: not a UTF-8 "
                                 f"text:\n{Error(str(err)).indent(2)}", path=path) from err

        if val.endswith("\n"):
            val = val[:-1]
        return val

    def _write(self, path: Path, data: str, what: str):
        """
        Write a string to a pseudo-file.

        Args:
            path: The path to the pseudo-file to write to.
            data: The data to write.
            what: Short description of the value, for messages.
        """

        try:
            self._fsman.write(path, data)
        except OSError as err:
            errmsg = f"Failed to write '{data}' ({what}) to '{path}'{self._fsman.hostmsg}"
            raise self._classify(err, path, errmsg) from err

    def exists(self, path: Path) -> bool:
        """Return 'True' if 'path' exists, otherwise return 'False'."""
        return self._fsman.exists(path)

    def listdir(self, path: Path, what: str = "directory") -> list[str]:
        """
        Return the sorted list of entry names in a pseudo-file system directory.

        Args:
            path: The directory path to list.
            what: Short description of the directory, for messages.

        Raises:
            ErrorNotFound: If the directory does not exist.
            ErrorPermissionDenied: If the permission to list the directory was denied.
            ErrorIO: In case of other I/O errors.
        """

        try:
            entries = self._fsman.listdir(path)
        except OSError as err:
            errmsg = f"Failed to list {what} '{path}'{self._fsman.hostmsg}"
            raise self._classify(err, path, errmsg) from err

        self._log.debug("listdir '%s': %s", path, ", ".join(entries))
        return entries

    def readlink(self, path: Path, what: str = "symbolic link") -> Path:
        """
        Return the path a pseudo-file system symbolic link points to.

        Args:
            path: The symbolic link path.
            what: Short description of the link, for messages.

        Raises:
            ErrorNotFound: If the link does not exist.
            ErrorPermissionDenied: If the permission to read the link was denied.
            ErrorIO: In case of other I/O errors.
        """

        try:
            target = self._fsman.readlink(path)
        except OSError as err:
            errmsg = f"Failed to read {what} '{path}'{self._fsman.hostmsg}"
            raise self._classify(err, path, errmsg) from err

        self._log.debug("readlink '%s': '%s'", path, target)
        return target

    def read_bool(self, path: Path, what: str = "value") -> bool:
        """
        Read a boolean value from a pseudo-file.

        Args:
            path: The path to the pseudo-file to read.
            what: Short description of the value, for messages.

        Returns:
            'True' if the file contains "1", 'False' if it contains "0".

        Raises:
            ErrorNotFound: If the file does not exist.
            ErrorPermissionDenied: If the permission to read the file was denied.
            ErrorBadFormat: If the contents is neither "0" nor "1".
            ErrorIO: In case of other I/O errors.
        """

        val = self._read(path, what)
        self._log.debug("read_bool '%s': '%s'", path, val)

        if val == "1":
            return True
        if val == "0":
            return False

        raise ErrorBadFormat(f"Bad {what} in '{path}'{self._fsman.hostmsg}: expected '0' or '1', "
                             f"got '{val}'", path=path)

    def read_int(self, path: Path, what: str = "value") -> int:
        """
        Read an unsigned 64-bit integer value from a pseudo-file.

        Args:
            path: The path to the pseudo-file to read.
            what: Short description of the value, for messages.

        Returns:
            The integer value.

        Raises:
            ErrorNotFound: If the file does not exist.
            ErrorPermissionDenied: If the permission to read the file was denied.
            ErrorBadFormat: If the contents is not a decimal unsigned 64-bit integer.
            ErrorIO: In case of other I/O errors.
        """

        val = self._read(path, what)
        self._log.debug("read_int '%s': '%s'", path, val)

        if not _U64_REGEX.fullmatch(val) or int(val) > _U64_MAX:
            raise ErrorBadFormat(f"Bad {what} in '{path}'{self._fsman.hostmsg}: expected an "
                                 f"unsigned 64-bit decimal integer, got '{val}'", path=path)

        return int(val)

    def read_str(self, path: Path, what: str = "value") -> str:
        """
        Read a string from a pseudo-file.

        Args:
            path: The path to the pseudo-file to read.
            what: Short description of the value, for messages.

        Returns:
            The pseudo-file contents without the trailing newline.
        """

        val = self._read(path, what)
        self._log.debug("read_str '%s': '%s'", path, val)
        return val

    def read_str_list(self, path: Path, what: str = "value") -> list[str]:
        """
        Read a list of white-space separated strings from a pseudo-file.

        Args:
            path: The path to the pseudo-file to read.
            what: Short description of the value, for messages.

        Returns:
            The list of strings. An empty file results in an empty list.
        """

        val = self._read(path, what)
        self._log.debug("read_str_list '%s': '%s'", path, val)
        return val.split()

    def write_bool(self, path: Path, val: bool, what: str = "value"):
        """
        Write a boolean value to a pseudo-file.

        Args:
            path: The path to the pseudo-file to write to.
            val: The value to write.
            what: Short description of the value, for messages.

        Raises:
            ErrorBadFormat: If 'val' is not a boolean.
            ErrorNotFound: If the file does not exist.
            ErrorPermissionDenied: If the permission to write to the file was denied.
            ErrorIO: In case of other I/O errors.
        """

        if not isinstance(val, bool):
            raise ErrorBadFormat(f"Bad {what} '{val}' for '{path}': should be a boolean",
                                 path=path)

        data = "1" if val else "0"
        self._log.debug("write_bool '%s': '%s'", path, data)
        self._write(path, data, what)

    def write_int(self, path: Path, val: int, what: str = "value"):
        """
        Write an unsigned 64-bit integer value to a pseudo-file.

        Args:
            path: The path to the pseudo-file to write to.
            val: The value to write.
            what: Short description of the value, for messages.

        Raises:
            ErrorBadFormat: If 'val' is not an unsigned 64-bit integer.
        """

        if isinstance(val, bool) or not isinstance(val, int) or val < 0 or val > _U64_MAX:
            raise ErrorBadFormat(f"Bad {what} '{val}' for '{path}': should be an unsigned 64-bit "
                                 f"integer", path=path)

        self._log.debug("write_int '%s': '%d'", path, val)
        self._write(path, str(val), what)

    def write_str(self, path: Path, val: str, what: str = "value"):
        """
        Write a string to a pseudo-file verbatim.

        Args:
            path: The path to the pseudo-file to write to.
            val: The string to write.
            what: Short description of the value, for messages.
        """

        if not isinstance(val, str):
            raise ErrorBadFormat(f"Bad {what} '{val}' for '{path}': should be a string", path=path)

        self._log.debug("write_str '%s': '%s'", path, val.replace("\n", "\\n"))
        self._write(path, val, what)

    def write_str_list(self, path: Path, vals: Iterable[str], what: str = "value"):
        """
        Write a list of strings to a pseudo-file, separated by single spaces.

        Args:
            path: The path to the pseudo-file to write to.
            vals: The strings to write. They must be non-empty and contain no white-spaces.
            what: Short description of the value, for messages.
        """

        vals = list(vals)
        for val in vals:
            if not isinstance(val, str) or not val or len(val.split()) != 1 or val.strip() != val:
                raise ErrorBadFormat(f"Bad {what} element '{val}' for '{path}': should be a "
                                     f"non-empty string without white-spaces", path=path)

        data = " ".join(vals)
        self._log.debug("write_str_list '%s': '%s'", path, data)
        self._write(path, data, what)
