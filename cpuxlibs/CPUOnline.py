# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Provide an API for enumerating CPUs and for onlining and offlining them.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import typing
from pathlib import Path
from cpuxlibs import _ControllerBase, SysfsPaths
from cpuxlibs.helperlibs import Logging, Trivial
from cpuxlibs.helperlibs.Exceptions import Error, ErrorBadFormat

if typing.TYPE_CHECKING:
    from typing import Iterable
    from cpuxlibs.helperlibs.FSManager import FSManagerType

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.cpux.{__name__}")

class CPUOnline(_ControllerBase.ControllerBase):
    """
    Enumerate CPUs, and get or set their online state. Public methods overview.

    Enumerate CPUs.
      - 'get_cpus()' - all present CPUs.
      - 'cpu_exists()' - check if a CPU is present.
      - 'validate_cpus()' - check that CPUs have sysfs directories.
    Raw access to the online state (exactly one pseudo-file operation each).
      - 'read_online()', 'write_online()'.
    Availability-wrapped access to the online state.
      - 'get_online()' - 'None' if the CPU has no online control.
      - 'set_online()' - a no-op if the CPU has no online control.
      - 'is_online()' - 'True' if the CPU has no online control.
    """

    def __init__(self,
                 fsman: FSManagerType | None = None,
                 sysfs_base: Path | str = SysfsPaths.SYSFS_BASE,
                 absent_errnos: Iterable[int] | None = None,
                 logger: Logging.Logger | None = None):
        """Refer to 'ControllerBase.__init__()'."""

        super().__init__(fsman=fsman, sysfs_base=sysfs_base, absent_errnos=absent_errnos,
                         logger=logger if logger else _LOG)

    def get_cpus(self) -> list[int]:
        """
        Return the sorted list of present CPU numbers.

        Raises:
            ErrorNotFound: If the file listing present CPUs does not exist.
            ErrorBadFormat: If the file listing present CPUs has bad contents.
        """

        path = SysfsPaths.cpus_present(self._sysfs_base)
        val = self._pfs.read_str(path, what="present CPUs list")

        try:
            cpus = Trivial.split_csv_line_int(val, dedup=True, what="present CPUs list")
        except Error as err:
            raise ErrorBadFormat(f"Bad contents of '{path}'{self._fsman.hostmsg}:\n"
                                 f"{err.indent(2)}", path=path) from err

        return sorted(cpus)

    def cpu_exists(self, cpu: int) -> bool:
        """Return 'True' if CPU 'cpu' is present in the system, otherwise return 'False'."""
        return cpu in self.get_cpus()

    def validate_cpus(self, cpus: Iterable[int]):
        """
        Validate that CPUs exist, so that missing controls of an existing CPU can be told from
        controls of a CPU that does not exist.

        Args:
            cpus: The CPU numbers to validate.

        Raises:
            Error: If there is no sysfs directory for one of the CPUs.
        """

        bad = []
        for cpu in cpus:
            if not self._fsman.is_dir(SysfsPaths.cpu_dir(cpu, self._sysfs_base)):
                bad.append(cpu)

        if bad:
            raise Error(f"CPU(s) {Trivial.rangify(bad)} do not exist{self._fsman.hostmsg}")

    def read_online(self, cpu: int) -> bool:
        """
        Read the online state of a CPU.

        Args:
            cpu: The CPU number.

        Returns:
            'True' if the CPU is online, 'False' if it is offline.

        Raises:
            ErrorNotFound: If the CPU has no online control.
        """

        path = SysfsPaths.cpu_online(cpu, self._sysfs_base)
        online = self._pfs.read_bool(path, what=f"CPU{cpu} online state")
        self._log.debug("online get cpu%d %s", cpu, online)
        return online

    def write_online(self, cpu: int, online: bool):
        """
        Write the online state of a CPU.

        Args:
            cpu: The CPU number.
            online: 'True' to online the CPU, 'False' to offline it.

        Raises:
            ErrorNotFound: If the CPU has no online control.
        """

        self._log.info("online set cpu%d %s", cpu, online)
        path = SysfsPaths.cpu_online(cpu, self._sysfs_base)
        self._pfs.write_bool(path, online, what=f"CPU{cpu} online state")

    def get_online(self, cpu: int) -> bool | None:
        """Same as 'read_online()', but return 'None' if the CPU has no online control."""
        return self._probe(self.read_online, cpu)

    def set_online(self, cpu: int, online: bool) -> bool:
        """
        Same as 'write_online()', but do nothing if the CPU has no online control.

        Returns:
            'True' if the online state was written, 'False' if the CPU has no online control.
        """

        return self._probe_write(self.write_online, cpu, online)

    def is_online(self, cpu: int) -> bool:
        """
        Return the online state of a CPU. If the CPU has no online control, assume it is online.
        This is typical for CPU 0, which often cannot be offlined.
        """

        return self._or_default(self.read_online, True, cpu)
