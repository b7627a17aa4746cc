# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Provide the base class for the domain controller classes ('CPUOnline', 'CPUFreq', etc).
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import typing
from pathlib import Path
from cpuxlibs import Availability, PseudoFS, SysfsPaths
from cpuxlibs.helperlibs import Logging, ClassHelpers, LocalFSManager

if typing.TYPE_CHECKING:
    from typing import Any, Callable, Iterable
    from cpuxlibs.helperlibs.FSManager import FSManagerType

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.cpux.{__name__}")

class ControllerBase(ClassHelpers.SimpleCloseContext):
    """
    The base class for domain controllers. A domain controller provides a pair of raw methods for
    every control, which perform exactly one pseudo-file operation and log it, and a pair of
    availability-wrapped methods, which turn "the control does not exist" into 'None' or a no-op.
    """

    def __init__(self,
                 fsman: FSManagerType | None = None,
                 sysfs_base: Path | str = SysfsPaths.SYSFS_BASE,
                 absent_errnos: Iterable[int] | None = None,
                 logger: Logging.Logger | None = None):
        """
        Initialize a class instance.

        Args:
            fsman: The file-system manager object for the host to operate on. Use the local host if
                   not provided.
            sysfs_base: The sysfs mount point.
            absent_errnos: The errno values, in addition to 'ENOENT', that mean "the control does
                           not exist". Refer to 'PseudoFS.PseudoFS' for details.
            logger: The logger to log the operations with. Use the module logger if not provided.
        """

        self._close_fsman = fsman is None

        if not fsman:
            fsman = LocalFSManager.LocalFSManager()

        self._fsman = fsman
        self._sysfs_base = Path(sysfs_base)
        self._log = logger if logger else _LOG

        self._pfs = PseudoFS.PseudoFS(fsman=fsman, absent_errnos=absent_errnos, logger=self._log)

    def close(self):
        """Uninitialize the class object."""
        ClassHelpers.close(self, close_attrs=("_pfs", "_fsman",))

    def _probe(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Run 'Availability.probe()' with the controller's file-system manager and logger."""
        return Availability.probe(self._fsman, func, *args, logger=self._log, **kwargs)

    def _probe_write(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> bool:
        """Run 'Availability.probe_write()' with the controller's file-system manager and logger."""
        return Availability.probe_write(self._fsman, func, *args, logger=self._log, **kwargs)

    def _or_default(self, func: Callable[..., Any], default: Any, *args: Any,
                    **kwargs: Any) -> Any:
        """Run 'Availability.or_default()' with the controller's file-system manager and logger."""
        return Availability.or_default(self._fsman, func, default, *args, logger=self._log,
                                       **kwargs)
