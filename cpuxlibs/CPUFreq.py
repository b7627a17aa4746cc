# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Provide an API for CPU frequency scaling controls: the current frequency, the frequency limits, and
the scaling governor. All frequencies are in kHz, same as in sysfs.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import typing
from pathlib import Path
from cpuxlibs import _ControllerBase, SysfsPaths
from cpuxlibs.helperlibs import Logging

if typing.TYPE_CHECKING:
    from typing import Iterable
    from cpuxlibs.helperlibs.FSManager import FSManagerType

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.cpux.{__name__}")

class CPUFreq(_ControllerBase.ControllerBase):
    """
    Get and set CPU frequency scaling controls. Public methods overview.

    Raw access (exactly one pseudo-file operation each, raise 'ErrorNotFound' if the control does
    not exist).
      - 'read_cur_freq()'.
      - 'read_min_freq()', 'write_min_freq()'.
      - 'read_max_freq()', 'write_max_freq()'.
      - 'read_min_freq_limit()', 'read_max_freq_limit()'.
      - 'read_governor()', 'write_governor()', 'read_governors()'.
    Availability-wrapped access (getters return 'None' and setters return 'False' if the control
    does not exist).
      - 'get_cur_freq()'.
      - 'get_min_freq()', 'set_min_freq()'.
      - 'get_max_freq()', 'set_max_freq()'.
      - 'get_min_freq_limit()', 'get_max_freq_limit()'.
      - 'get_governor()', 'set_governor()', 'get_governors()'.
    Miscellaneous.
      - 'is_available()' - check if the cpufreq sub-system is present.
    """

    def __init__(self,
                 fsman: FSManagerType | None = None,
                 sysfs_base: Path | str = SysfsPaths.SYSFS_BASE,
                 absent_errnos: Iterable[int] | None = None,
                 logger: Logging.Logger | None = None):
        """Refer to 'ControllerBase.__init__()'."""

        super().__init__(fsman=fsman, sysfs_base=sysfs_base, absent_errnos=absent_errnos,
                         logger=logger if logger else _LOG)

    def _read_freq(self, cpu: int, fname: str, what: str) -> int:
        """Read frequency file 'fname' of CPU 'cpu' and log the result."""

        path = SysfsPaths.cpufreq_file(cpu, fname, self._sysfs_base)
        khz = self._pfs.read_int(path, what=f"CPU{cpu} {what}")
        self._log.debug("cpufreq get %s cpu%d %d kHz", fname, cpu, khz)
        return khz

    def _write_freq(self, cpu: int, fname: str, khz: int, what: str):
        """Write frequency 'khz' to frequency file 'fname' of CPU 'cpu'."""

        self._log.info("cpufreq set %s cpu%d %d kHz", fname, cpu, khz)
        path = SysfsPaths.cpufreq_file(cpu, fname, self._sysfs_base)
        self._pfs.write_int(path, khz, what=f"CPU{cpu} {what}")

    def is_available(self) -> bool:
        """Return 'True' if the cpufreq sub-system is present, otherwise return 'False'."""
        return self._fsman.is_dir(SysfsPaths.cpus_dir(self._sysfs_base) / "cpufreq")

    def read_cur_freq(self, cpu: int) -> int:
        """Read and return the current frequency of CPU 'cpu' in kHz."""
        return self._read_freq(cpu, "scaling_cur_freq", "current frequency")

    def read_min_freq(self, cpu: int) -> int:
        """Read and return the minimum frequency of CPU 'cpu' in kHz."""
        return self._read_freq(cpu, "scaling_min_freq", "minimum frequency")

    def read_max_freq(self, cpu: int) -> int:
        """Read and return the maximum frequency of CPU 'cpu' in kHz."""
        return self._read_freq(cpu, "scaling_max_freq", "maximum frequency")

    def read_min_freq_limit(self, cpu: int) -> int:
        """Read and return the minimum frequency limit of CPU 'cpu' in kHz."""
        return self._read_freq(cpu, "cpuinfo_min_freq", "minimum frequency limit")

    def read_max_freq_limit(self, cpu: int) -> int:
        """Read and return the maximum frequency limit of CPU 'cpu' in kHz."""
        return self._read_freq(cpu, "cpuinfo_max_freq", "maximum frequency limit")

    def write_min_freq(self, cpu: int, khz: int):
        """
        Write the minimum frequency of a CPU.

        Args:
            cpu: The CPU number.
            khz: The frequency to write, in kHz.
        """

        self._write_freq(cpu, "scaling_min_freq", khz, "minimum frequency")

    def write_max_freq(self, cpu: int, khz: int):
        """
        Write the maximum frequency of a CPU.

        Args:
            cpu: The CPU number.
            khz: The frequency to write, in kHz.
        """

        self._write_freq(cpu, "scaling_max_freq", khz, "maximum frequency")

    def read_governor(self, cpu: int) -> str:
        """Read and return the scaling governor name of CPU 'cpu'."""

        path = SysfsPaths.cpufreq_governor(cpu, self._sysfs_base)
        governor = self._pfs.read_str(path, what=f"CPU{cpu} governor")
        self._log.debug("cpufreq get governor cpu%d %s", cpu, governor)
        return governor

    def write_governor(self, cpu: int, governor: str):
        """
        Write the scaling governor of a CPU.

        Args:
            cpu: The CPU number.
            governor: Name of the governor to write, for example "performance".
        """

        self._log.info("cpufreq set governor cpu%d %s", cpu, governor)
        path = SysfsPaths.cpufreq_governor(cpu, self._sysfs_base)
        self._pfs.write_str(path, governor, what=f"CPU{cpu} governor")

    def read_governors(self, cpu: int) -> list[str]:
        """Read and return the list of available scaling governors of CPU 'cpu'."""

        path = SysfsPaths.cpufreq_governors(cpu, self._sysfs_base)
        governors = self._pfs.read_str_list(path, what=f"CPU{cpu} available governors")
        self._log.debug("cpufreq get governors cpu%d %s", cpu, " ".join(governors))
        return governors

    def get_cur_freq(self, cpu: int) -> int | None:
        """Same as 'read_cur_freq()', but return 'None' if the control does not exist."""
        return self._probe(self.read_cur_freq, cpu)

    def get_min_freq(self, cpu: int) -> int | None:
        """Same as 'read_min_freq()', but return 'None' if the control does not exist."""
        return self._probe(self.read_min_freq, cpu)

    def get_max_freq(self, cpu: int) -> int | None:
        """Same as 'read_max_freq()', but return 'None' if the control does not exist."""
        return self._probe(self.read_max_freq, cpu)

    def get_min_freq_limit(self, cpu: int) -> int | None:
        """Same as 'read_min_freq_limit()', but return 'None' if the control does not exist."""
        return self._probe(self.read_min_freq_limit, cpu)

    def get_max_freq_limit(self, cpu: int) -> int | None:
        """Same as 'read_max_freq_limit()', but return 'None' if the control does not exist."""
        return self._probe(self.read_max_freq_limit, cpu)

    def get_governor(self, cpu: int) -> str | None:
        """Same as 'read_governor()', but return 'None' if the control does not exist."""
        return self._probe(self.read_governor, cpu)

    def get_governors(self, cpu: int) -> list[str] | None:
        """Same as 'read_governors()', but return 'None' if the control does not exist."""
        return self._probe(self.read_governors, cpu)

    def set_min_freq(self, cpu: int, khz: int) -> bool:
        """
        Same as 'write_min_freq()', but do nothing if the control does not exist.

        Returns:
            'True' if the frequency was written, 'False' if the control does not exist.
        """

        return self._probe_write(self.write_min_freq, cpu, khz)

    def set_max_freq(self, cpu: int, khz: int) -> bool:
        """Same as 'set_min_freq()', but for the maximum frequency."""
        return self._probe_write(self.write_max_freq, cpu, khz)

    def set_governor(self, cpu: int, governor: str) -> bool:
        """Same as 'write_governor()', but do nothing if the control does not exist."""
        return self._probe_write(self.write_governor, cpu, governor)
