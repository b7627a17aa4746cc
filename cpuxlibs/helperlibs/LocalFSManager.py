# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Provide API for accessing files on the local host. Implement the 'FSManagerBase' API, with the
idea of having a unified API for accessing files locally and remotely.
"""

from  __future__ import annotations # Remove when switching to Python 3.10+.

import os
from pathlib import Path
from cpuxlibs.helperlibs import _FSManagerBase
from cpuxlibs.helperlibs.Exceptions import Error

class LocalFSManager(_FSManagerBase.FSManagerBase):
    """
    Provide API for accessing files on the local host.
    """

    def read(self, path: str | Path) -> str:
        """Refer to 'FSManagerBase.read()'."""

        with open(path, "r", encoding="utf-8") as fobj:
            return fobj.read()

    def write(self, path: str | Path, data: str):
        """Refer to 'FSManagerBase.write()'."""

        # Sysfs files must be written with a single 'write()' system call, so do not buffer. Do not
        # create missing files either, a missing pseudo-file means a missing control.
        fd = os.open(path, os.O_WRONLY | os.O_TRUNC)
        with open(fd, "wb", buffering=0) as fobj:
            fobj.write(data.encode("utf-8"))

    def listdir(self, path: str | Path) -> list[str]:
        """Refer to 'FSManagerBase.listdir()'."""
        return sorted(os.listdir(path))

    def readlink(self, path: str | Path) -> Path:
        """Refer to 'FSManagerBase.readlink()'."""
        return Path(os.readlink(path))

    def exists(self, path: str | Path) -> bool:
        """Refer to 'FSManagerBase.exists()'."""

        try:
            return Path(path).exists()
        except OSError as err:
            msg = Error(str(err)).indent(2)
            raise Error(f"Failed to check if '{path}' exists:\n{msg}") from None

    def is_dir(self, path: str | Path) -> bool:
        """Refer to 'FSManagerBase.is_dir()'."""

        try:
            return Path(path).is_dir()
        except OSError as err:
            msg = Error(str(err)).indent(2)
            raise Error(f"Failed to check if '{path}' exists and it is a directory:\n{msg}") \
                        from None
