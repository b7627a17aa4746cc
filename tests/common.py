# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""Common functions for cpux tests: a fake sysfs tree builder and test file-system managers."""

from __future__ import annotations # Remove when switching to Python 3.10+.

import os
import typing
from pathlib import Path
from cpuxlibs.helperlibs import LocalFSManager
from cpuxlibs.helperlibs.Exceptions import Error
from cpuxtool import _Cpux

if typing.TYPE_CHECKING:
    from typing import Iterable

# CPU frequency files of every CPU in the fake sysfs tree and their values in kHz.
CPU_FREQS = {
    "scaling_cur_freq": 2400000,
    "scaling_min_freq": 800000,
    "scaling_max_freq": 4000000,
    "cpuinfo_min_freq": 400000,
    "cpuinfo_max_freq": 4500000,
}

GOVERNORS = ["performance", "powersave"]
EPPS = ["default", "performance", "balance_performance", "balance_power", "power"]

# Graphics card frequency files of 'card0' in the fake sysfs tree and their values in MHz.
GPU_FREQS = {
    "gt_act_freq_mhz": 350,
    "gt_cur_freq_mhz": 350,
    "gt_min_freq_mhz": 300,
    "gt_max_freq_mhz": 1300,
    "gt_boost_freq_mhz": 1300,
    "gt_RP0_freq_mhz": 1300,
    "gt_RP1_freq_mhz": 700,
    "gt_RPn_freq_mhz": 300,
}

def write_file(path: Path, data: str):
    """Create file 'path' with contents 'data', create parent directories if needed."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(data, encoding="utf-8")

def read_file(path: Path) -> str:
    """Return contents of file 'path'."""
    return path.read_text(encoding="utf-8")

def _add_card(base: Path, card: int, driver: str):
    """Add graphics card 'card' driven by 'driver' to the fake sysfs tree at 'base'."""

    carddir = base / "class/drm" / f"card{card}"
    (carddir / "device").mkdir(parents=True)
    os.symlink(f"../../../../bus/pci/drivers/{driver}", carddir / "device/driver")

    if driver == "i915":
        for fname, mhz in GPU_FREQS.items():
            write_file(carddir / fname, f"{mhz}\n")

def build_sysfs(base: Path, ncpus: int = 4, offline: Iterable[int] = (),
                gpu: bool = True) -> Path:
    """
    Build a fake sysfs tree.

    Args:
        base: The directory to build the tree in, it is used as the sysfs mount point.
        ncpus: Count of CPUs to create. CPU 0 has no online control, like on most real systems.
        offline: Numbers of CPUs to mark as offline.
        gpu: Whether to add the 'i915' driver and graphics cards.

    Returns:
        The 'base' path.
    """

    offline = set(offline)
    cpusdir = base / "devices/system/cpu"

    write_file(cpusdir / "present", f"0-{ncpus - 1}\n")
    (cpusdir / "cpufreq").mkdir(parents=True, exist_ok=True)
    write_file(cpusdir / "intel_pstate/status", "active\n")

    for cpu in range(ncpus):
        cpudir = cpusdir / f"cpu{cpu}"
        if cpu != 0:
            write_file(cpudir / "online", "0\n" if cpu in offline else "1\n")

        for fname, khz in CPU_FREQS.items():
            write_file(cpudir / "cpufreq" / fname, f"{khz}\n")

        write_file(cpudir / "cpufreq/scaling_governor", "powersave\n")
        write_file(cpudir / "cpufreq/scaling_available_governors", " ".join(GOVERNORS) + "\n")
        write_file(cpudir / "cpufreq/energy_performance_preference", "balance_performance\n")
        write_file(cpudir / "cpufreq/energy_performance_available_preferences",
                   " ".join(EPPS) + " \n")
        write_file(cpudir / "power/energy_perf_bias", "6\n")

    if gpu:
        (base / "module/i915").mkdir(parents=True)
        _add_card(base, 0, "i915")
        _add_card(base, 1, "nouveau")
        # A connector entry, not a graphics card.
        (base / "class/drm/card0-HDMI-A-1").mkdir(parents=True)

    return base

class FaultyFSManager(LocalFSManager.LocalFSManager):
    """
    A local file-system manager which records write operations and fails operations on
    selected paths with selected errno values.
    """

    def __init__(self):
        """Initialize a class instance."""

        super().__init__()

        # Operation type ("read" or "write") and path to errno value to fail the operation with.
        self.faults: dict[tuple[str, Path], int] = {}
        # The successful write operations, in order: path and data.
        self.writes: list[tuple[Path, str]] = []

    def add_fault(self, path: Path, errno: int, op: str = "read"):
        """Make operation 'op' on 'path' fail with 'errno'."""
        self.faults[(op, Path(path))] = errno

    def _inject(self, op: str, path: str | Path):
        """Raise 'OSError' if a fault was added for operation 'op' on 'path'."""

        errno = self.faults.get((op, Path(path)))
        if errno is not None:
            raise OSError(errno, os.strerror(errno), str(path))

    def read(self, path: str | Path) -> str:
        """Refer to 'FSManagerBase.read()'."""

        self._inject("read", path)
        return super().read(path)

    def write(self, path: str | Path, data: str):
        """Refer to 'FSManagerBase.write()'."""

        self._inject("write", path)
        super().write(path, data)
        self.writes.append((Path(path), data))

    def listdir(self, path: str | Path) -> list[str]:
        """Refer to 'FSManagerBase.listdir()'."""

        self._inject("read", path)
        return super().listdir(path)

    def readlink(self, path: str | Path) -> Path:
        """Refer to 'FSManagerBase.readlink()'."""

        self._inject("read", path)
        return super().readlink(path)

def run_cpux(arguments: str,
             sysfs_base: Path,
             fsman: LocalFSManager.LocalFSManager | None = None,
             exp_exc: type[Exception] | None = None):
    """
    Run a 'cpux' command against a fake sysfs tree and verify the outcome.

    Args:
        arguments: The command-line arguments to run 'cpux' with, e.g., 'info --cpus 0-3'.
        sysfs_base: The fake sysfs tree to run the command against.
        fsman: The file-system manager to run the command with. Defaults to a 'LocalFSManager'.
        exp_exc: The expected exception. By default, any exception is considered a failure.
    """

    argv = ["--sysfs-base", str(sysfs_base)] + arguments.split()

    try:
        args = _Cpux.parse_arguments(argv)
        if fsman:
            args.func(args, fsman)
        else:
            with LocalFSManager.LocalFSManager() as local_fsman:
                args.func(args, local_fsman)
    except Error as err:
        if exp_exc is None:
            assert False, f"command 'cpux {arguments}' raised the following exception:\n" \
                          f"- {type(err).__name__}({err})"

        assert isinstance(err, exp_exc), \
               f"command 'cpux {arguments}' raised the following exception:\n" \
               f"- {type(err).__name__}({err})\nbut it was expected to raise the following " \
               f"exception:\n- {exp_exc.__name__}"
        return

    if exp_exc is not None:
        assert False, f"command 'cpux {arguments}' did not raise the following exception " \
                      f"type:\n- {exp_exc.__name__}"
