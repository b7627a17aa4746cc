# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
The base class for file-system managers.

A file-system manager provides a uniform API for accessing files on the local host or on a remote
host. The file I/O methods ('read()', 'write()', 'listdir()', 'readlink()') raise 'OSError'
exceptions with the 'errno' attribute set, when possible, and leave the interpretation of the error
to the caller. This matters for sysfs, where the same errno may mean "the feature is not present"
in one case and "the operation failed" in another.
"""

from  __future__ import annotations # Remove when switching to Python 3.10+.

from pathlib import Path
from cpuxlibs.helperlibs import ClassHelpers

class FSManagerBase(ClassHelpers.SimpleCloseContext):
    """
    Base class for file-system managers.
    """

    def __init__(self):
        """Initialize the class instance."""

        # Whether the file-system manager is managing a remote host.
        self.is_remote = False
        # The hostname of the host.
        self.hostname = "localhost"
        # The message referring to the host to add to error messages.
        self.hostmsg = ""

    def read(self, path: str | Path) -> str:
        """
        Read the entire contents of a text file.

        Args:
            path: The path to the file to read.

        Returns:
            The contents of the file.

        Raises:
            OSError: If the file could not be opened or read.
            UnicodeDecodeError: If the file contents are not valid UTF-8.
        """

        raise NotImplementedError("FSManagerBase.read()")

    def write(self, path: str | Path, data: str):
        """
        Write a string to an existing file in a single write operation. Missing files are not
        created.

        Args:
            path: The path to the file to write to.
            data: The string to write.

        Raises:
            OSError: If the file could not be opened or written to.
        """

        raise NotImplementedError("FSManagerBase.write()")

    def listdir(self, path: str | Path) -> list[str]:
        """
        Return a sorted list of names of the entries in a directory.

        Args:
            path: The directory path to list.

        Raises:
            OSError: If the directory could not be listed.
        """

        raise NotImplementedError("FSManagerBase.listdir()")

    def readlink(self, path: str | Path) -> Path:
        """
        Return the path a symbolic link points to.

        Args:
            path: The path to the symbolic link.

        Raises:
            OSError: If the link could not be read.
        """

        raise NotImplementedError("FSManagerBase.readlink()")

    def exists(self, path: str | Path) -> bool:
        """
        Check if the specified path exists.

        Args:
            path: The path to check.

        Returns:
            True if the path exists, False otherwise.
        """

        raise NotImplementedError("FSManagerBase.exists()")

    def is_dir(self, path: str | Path) -> bool:
        """
        Check if the given path exists and is a directory.

        Args:
            path: The path to check.

        Returns:
            True if the path exists and is a directory, False otherwise.
        """

        raise NotImplementedError("FSManagerBase.is_dir()")
