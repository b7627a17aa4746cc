# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Provide an API for the energy versus performance hints: EPB (Energy Performance Bias), EPP (Energy
Performance Preference), and the 'intel_pstate' driver operation mode.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import typing
from pathlib import Path
from cpuxlibs import _ControllerBase, SysfsPaths
from cpuxlibs.helperlibs import Logging
from cpuxlibs.helperlibs.Exceptions import ErrorBadFormat

if typing.TYPE_CHECKING:
    from typing import Iterable
    from cpuxlibs.helperlibs.FSManager import FSManagerType

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.cpux.{__name__}")

# The EPB value range.
EPB_MIN = 0
EPB_MAX = 15

# The 'intel_pstate' driver operation modes.
PSTATE_STATUSES = ("active", "passive", "off")

class EnergyPerf(_ControllerBase.ControllerBase):
    """
    Get and set energy versus performance hints. Public methods overview.

    Raw access (exactly one pseudo-file operation each, raise 'ErrorNotFound' if the control does
    not exist).
      - 'read_epb()', 'write_epb()'.
      - 'read_epp()', 'write_epp()', 'read_epps()'.
      - 'read_pstate_status()', 'write_pstate_status()'.
    Availability-wrapped access (getters return 'None' and setters return 'False' if the control
    does not exist).
      - 'get_epb()', 'set_epb()'.
      - 'get_epp()', 'set_epp()', 'get_epps()'.
      - 'get_pstate_status()', 'set_pstate_status()'.
    """

    def __init__(self,
                 fsman: FSManagerType | None = None,
                 sysfs_base: Path | str = SysfsPaths.SYSFS_BASE,
                 absent_errnos: Iterable[int] | None = None,
                 logger: Logging.Logger | None = None):
        """Refer to 'ControllerBase.__init__()'."""

        super().__init__(fsman=fsman, sysfs_base=sysfs_base, absent_errnos=absent_errnos,
                         logger=logger if logger else _LOG)

    def read_epb(self, cpu: int) -> int:
        """Read and return the EPB of CPU 'cpu'."""

        path = SysfsPaths.epb(cpu, self._sysfs_base)
        epb = self._pfs.read_int(path, what=f"CPU{cpu} EPB")
        self._log.debug("epb get cpu%d %d", cpu, epb)
        return epb

    def write_epb(self, cpu: int, epb: int):
        """
        Write the EPB of a CPU.

        Args:
            cpu: The CPU number.
            epb: The EPB value, from 0 (maximum performance) to 15 (maximum energy saving).

        Raises:
            ErrorBadFormat: If 'epb' is out of range.
        """

        if isinstance(epb, bool) or not isinstance(epb, int) or epb < EPB_MIN or epb > EPB_MAX:
            raise ErrorBadFormat(f"Bad EPB value '{epb}': should be an integer in the "
                                 f"[{EPB_MIN},{EPB_MAX}] range")

        self._log.info("epb set cpu%d %d", cpu, epb)
        path = SysfsPaths.epb(cpu, self._sysfs_base)
        self._pfs.write_int(path, epb, what=f"CPU{cpu} EPB")

    def read_epp(self, cpu: int) -> str:
        """Read and return the EPP of CPU 'cpu', for example "balance_performance"."""

        path = SysfsPaths.epp(cpu, self._sysfs_base)
        epp = self._pfs.read_str(path, what=f"CPU{cpu} EPP")
        self._log.debug("epp get cpu%d %s", cpu, epp)
        return epp

    def write_epp(self, cpu: int, epp: str):
        """
        Write the EPP of a CPU.

        Args:
            cpu: The CPU number.
            epp: The EPP name, for example "power" or "performance".
        """

        self._log.info("epp set cpu%d %s", cpu, epp)
        path = SysfsPaths.epp(cpu, self._sysfs_base)
        self._pfs.write_str(path, epp, what=f"CPU{cpu} EPP")

    def read_epps(self, cpu: int) -> list[str]:
        """Read and return the list of available EPP names of CPU 'cpu'."""

        path = SysfsPaths.epps(cpu, self._sysfs_base)
        epps = self._pfs.read_str_list(path, what=f"CPU{cpu} available EPPs")
        self._log.debug("epps get cpu%d %s", cpu, " ".join(epps))
        return epps

    def read_pstate_status(self) -> str:
        """Read and return the 'intel_pstate' driver operation mode."""

        path = SysfsPaths.intel_pstate_status(self._sysfs_base)
        status = self._pfs.read_str(path, what="intel_pstate status")
        self._log.debug("intel_pstate get status %s", status)
        return status

    def write_pstate_status(self, status: str):
        """
        Write the 'intel_pstate' driver operation mode.

        Args:
            status: The operation mode, one of "active", "passive", or "off".

        Raises:
            ErrorBadFormat: If 'status' is not a known operation mode.
        """

        if status not in PSTATE_STATUSES:
            statuses = ", ".join(PSTATE_STATUSES)
            raise ErrorBadFormat(f"Bad intel_pstate status '{status}', use one of: {statuses}")

        self._log.info("intel_pstate set status %s", status)
        path = SysfsPaths.intel_pstate_status(self._sysfs_base)
        self._pfs.write_str(path, status, what="intel_pstate status")

    def get_epb(self, cpu: int) -> int | None:
        """Same as 'read_epb()', but return 'None' if the control does not exist."""
        return self._probe(self.read_epb, cpu)

    def set_epb(self, cpu: int, epb: int) -> bool:
        """
        Same as 'write_epb()', but do nothing if the control does not exist.

        Returns:
            'True' if the EPB was written, 'False' if the control does not exist.
        """

        return self._probe_write(self.write_epb, cpu, epb)

    def get_epp(self, cpu: int) -> str | None:
        """Same as 'read_epp()', but return 'None' if the control does not exist."""
        return self._probe(self.read_epp, cpu)

    def set_epp(self, cpu: int, epp: str) -> bool:
        """Same as 'write_epp()', but do nothing if the control does not exist."""
        return self._probe_write(self.write_epp, cpu, epp)

    def get_epps(self, cpu: int) -> list[str] | None:
        """Same as 'read_epps()', but return 'None' if the control does not exist."""
        return self._probe(self.read_epps, cpu)

    def get_pstate_status(self) -> str | None:
        """Same as 'read_pstate_status()', but return 'None' if the driver is not used."""
        return self._probe(self.read_pstate_status)

    def set_pstate_status(self, status: str) -> bool:
        """Same as 'write_pstate_status()', but do nothing if the driver is not used."""
        return self._probe_write(self.write_pstate_status, status)
