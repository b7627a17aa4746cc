# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Apply a configuration request to a list of CPUs.

Frequency, governor, and energy hint controls usually can only be written when the CPU is online.
Therefore, every offline CPU is onlined before the controls are applied, and then offlined back,
unless the request explicitly asks for the CPU to be online. All the CPUs are validated first, a CPU
without a sysfs directory is an error, not a CPU without controls. The per-CPU algorithm is:

1. Read the online state, assume "online" if the CPU has no online control.
2. If the CPU is offline, online it. Failures are only reported as warnings.
3. Apply the requested controls in the following order: governor, maximum frequency, minimum
   frequency, EPB, EPP. Controls that do not exist are skipped, other errors abort the whole pass.
4. If the request specifies the online state, it replaces the state read at step 1.
5. If the resulting state is "offline", offline the CPU.

After all CPUs are processed, the online toggles vector is applied. The vector element index is
the CPU number, so it is applied in CPU number order, and 'None' elements are skipped. This pass
goes last and has the final say on the online state.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import typing
from typing import NamedTuple
from pathlib import Path
from cpuxlibs import CPUOnline, CPUFreq, EnergyPerf, SysfsPaths
from cpuxlibs.helperlibs import Logging, ClassHelpers, LocalFSManager, Trivial
from cpuxlibs.helperlibs.Exceptions import Error

if typing.TYPE_CHECKING:
    from typing import Sequence, Iterable
    from cpuxlibs.helperlibs.FSManager import FSManagerType

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.cpux.{__name__}")

class ConfigRequest(NamedTuple):
    """
    A configuration request. 'None' values mean "do not change".

    Attributes:
        online: The online state to leave the CPUs in.
        governor: The scaling governor name.
        max_freq: The maximum CPU frequency in kHz.
        min_freq: The minimum CPU frequency in kHz.
        epb: The EPB value.
        epp: The EPP name.
        online_toggles: The online state per CPU number, applied after everything else. 'None'
                        elements mean "do not change".
    """

    online: bool | None = None
    governor: str | None = None
    max_freq: int | None = None
    min_freq: int | None = None
    epb: int | None = None
    epp: str | None = None
    online_toggles: Sequence[bool | None] | None = None

    def has_controls(self) -> bool:
        """Return 'True' if the request includes at least one control to apply."""

        for val in self[:-1]:
            if val is not None:
                return True
        return bool(self.online_toggles)

class CPUConfig(ClassHelpers.SimpleCloseContext):
    """
    Apply configuration requests to CPUs. Public methods overview.

      - 'apply()' - apply a configuration request to a list of CPUs.
    """

    def __init__(self,
                 fsman: FSManagerType | None = None,
                 sysfs_base: Path | str = SysfsPaths.SYSFS_BASE,
                 absent_errnos: Iterable[int] | None = None,
                 cpuonline: CPUOnline.CPUOnline | None = None,
                 cpufreq: CPUFreq.CPUFreq | None = None,
                 energyperf: EnergyPerf.EnergyPerf | None = None,
                 logger: Logging.Logger | None = None):
        """
        Initialize a class instance.

        Args:
            fsman: The file-system manager object for the host to operate on. Use the local host if
                   not provided.
            sysfs_base: The sysfs mount point.
            absent_errnos: The errno values, in addition to 'ENOENT', that mean "the control does
                           not exist".
            cpuonline: The 'CPUOnline' object to use. Create a new one if not provided.
            cpufreq: The 'CPUFreq' object to use. Create a new one if not provided.
            energyperf: The 'EnergyPerf' object to use. Create a new one if not provided.
            logger: The logger to log the operations with. Use the module logger if not provided.
        """

        self._close_fsman = fsman is None
        self._close_cpuonline = cpuonline is None
        self._close_cpufreq = cpufreq is None
        self._close_energyperf = energyperf is None

        if not fsman:
            fsman = LocalFSManager.LocalFSManager()
        self._fsman = fsman

        self._log = logger if logger else _LOG

        kwargs = {"fsman": fsman, "sysfs_base": sysfs_base, "absent_errnos": absent_errnos,
                  "logger": logger}

        if not cpuonline:
            cpuonline = CPUOnline.CPUOnline(**kwargs)
        self._cpuonline = cpuonline

        if not cpufreq:
            cpufreq = CPUFreq.CPUFreq(**kwargs)
        self._cpufreq = cpufreq

        if not energyperf:
            energyperf = EnergyPerf.EnergyPerf(**kwargs)
        self._energyperf = energyperf

    def close(self):
        """Uninitialize the class object."""

        close_attrs = ("_energyperf", "_cpufreq", "_cpuonline", "_fsman")
        ClassHelpers.close(self, close_attrs=close_attrs)

    def _force_online(self, cpu: int):
        """Online CPU 'cpu', only warn about failures."""

        try:
            self._cpuonline.write_online(cpu, True)
        except Error as err:
            self._log.warning("failed to online CPU%d before configuring it:\n%s",
                              cpu, err.indent(2))

    def _apply_controls(self, cpu: int, request: ConfigRequest):
        """Apply the requested controls to CPU 'cpu' in the fixed order."""

        steps = (
            (request.governor, self._cpufreq.set_governor, "governor"),
            (request.max_freq, self._cpufreq.set_max_freq, "maximum frequency"),
            (request.min_freq, self._cpufreq.set_min_freq, "minimum frequency"),
            (request.epb, self._energyperf.set_epb, "EPB"),
            (request.epp, self._energyperf.set_epp, "EPP"),
        )

        for val, setter, name in steps:
            if val is None:
                continue
            if not setter(cpu, val):
                self._log.debug("CPU%d has no %s control, skipping", cpu, name)

    def _apply_cpu(self, cpu: int, request: ConfigRequest):
        """Apply configuration request 'request' to CPU 'cpu'."""

        online = self._cpuonline.is_online(cpu)

        if not online:
            self._force_online(cpu)

        self._apply_controls(cpu, request)

        if request.online is not None:
            online = request.online

        if not online:
            self._cpuonline.set_online(cpu, False)

    def _apply_toggles(self, toggles: Sequence[bool | None]):
        """Apply the online toggles vector, the vector index is the CPU number."""

        for cpu, online in enumerate(toggles):
            if online is None:
                continue
            self._cpuonline.set_online(cpu, online)

    def apply(self, request: ConfigRequest, cpus: Iterable[int]):
        """
        Apply a configuration request to a list of CPUs.

        Args:
            request: The configuration request to apply.
            cpus: The CPU numbers to apply the request to, processed in the given order.

        Raises:
            Error: If a CPU in 'cpus' or a CPU with a non-'None' online toggle does not exist,
                   nothing is written in this case. Also if a control could not be applied,
                   processing stops at the first error.
        """

        cpus = list(cpus)
        toggled = []
        if request.online_toggles:
            toggled = [cpu for cpu, online in enumerate(request.online_toggles)
                       if online is not None]
        self._cpuonline.validate_cpus(Trivial.list_dedup(cpus + toggled))

        for cpu in cpus:
            self._log.debug("configuring CPU%d", cpu)
            self._apply_cpu(cpu, request)

        if request.online_toggles:
            self._apply_toggles(request.online_toggles)
