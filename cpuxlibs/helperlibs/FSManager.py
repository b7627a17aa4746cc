# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
This module provides a unified way of creating a file-system manager object for local or remote
hosts.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import typing
from pathlib import Path
from cpuxlibs.helperlibs import LocalFSManager, SSHFSManager

if typing.TYPE_CHECKING:
    from typing import Union

    FSManagerType = Union[LocalFSManager.LocalFSManager, SSHFSManager.SSHFSManager]

def get_fsman(hostname: str,
              username: str = "",
              privkeypath: str | Path | None = None,
              timeout: int | float | None = None) -> FSManagerType:
    """
    Create and return a file-system manager object for the specified host.

    If 'hostname' is "localhost" and no 'username' was specified, return a 'LocalFSManager' object.
    Otherwise return an 'SSHFSManager' object connected to the host.

    Args:
         hostname: The host name to create a file-system manager object for.
         username: The user name for logging into the host over SSH.
         privkeypath: Path to the SSH private key for authentication.
         timeout: The SSH connection timeout in seconds.

    Returns:
         An instance of the appropriate file-system manager class.

    Usage example:
        with get_fsman(hostname) as fsman:
            fsman.read("/sys/devices/system/cpu/present")
    """

    if hostname == "localhost" and not username:
        return LocalFSManager.LocalFSManager()

    return SSHFSManager.SSHFSManager(hostname, username=username, privkeypath=privkeypath,
                                     timeout=timeout)
