# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Implement the 'cpux info' command: print summary tables of CPU and graphics card controls.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import sys
import time
import typing
import colorama
from cpuxlibs import Availability, CPUOnline, CPUFreq, EnergyPerf, GPUFreq
from cpuxlibs.helperlibs import Logging, ClassHelpers, Human, YAML
from cpuxtool import _CpuxCommon

if typing.TYPE_CHECKING:
    import argparse
    from pathlib import Path
    from typing import Any, Callable, TextIO
    from cpuxlibs.helperlibs.FSManager import FSManagerType

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.cpux.{__name__}")

# The placeholder for values that are not available.
NA = "n/a"

# The CPU table columns: column title, YAML key, 'CPUFreq' method name.
_CPU_FREQ_COLUMNS = (
    ("Cur", "cur_freq_khz", "read_cur_freq"),
    ("Min", "min_freq_khz", "read_min_freq"),
    ("Max", "max_freq_khz", "read_max_freq"),
    ("Min limit", "min_freq_limit_khz", "read_min_freq_limit"),
    ("Max limit", "max_freq_limit_khz", "read_max_freq_limit"),
)

# The graphics card table columns: column title, YAML key, frequency control name.
_GPU_FREQ_COLUMNS = (
    ("Actual", "act_freq_mhz", "act_freq"),
    ("Requested", "cur_freq_mhz", "cur_freq"),
    ("Min", "min_freq_mhz", "min_freq"),
    ("Max", "max_freq_mhz", "max_freq"),
    ("Boost", "boost_freq_mhz", "boost_freq"),
    ("Min limit", "rpn_freq_mhz", "rpn_freq"),
    ("Optimal", "rp1_freq_mhz", "rp1_freq"),
    ("Max limit", "rp0_freq_mhz", "rp0_freq"),
)

def format_table(header: list[str], rows: list[list[str]], indent: int = 2) -> str:
    """
    Format a table with left-aligned columns.

    Args:
        header: The column titles.
        rows: The table rows, each row is a list of cells.
        indent: How many spaces to indent the table with.

    Returns:
        The formatted table, a separator line goes after the header.
    """

    widths = [len(title) for title in header]
    for row in rows:
        for idx, cell in enumerate(row):
            widths[idx] = max(widths[idx], len(cell))

    pfx = " " * indent
    lines = []
    for row in [header, ["-" * width for width in widths]] + rows:
        cells = [cell.ljust(width) for cell, width in zip(row, widths)]
        lines.append(pfx + " ".join(cells).rstrip())

    return "\n".join(lines)

def _fmt(res: Availability.AvailabilityType, func: Callable[[Any], str] = str) -> str:
    """Format an availability result for a table cell, 'n/a' if the value is not available."""

    if isinstance(res, Availability.Present):
        return func(res.value)
    return NA

def _yaml_val(res: Availability.AvailabilityType) -> Any:
    """Return the value of an availability result for YAML output, 'None' if not available."""

    if isinstance(res, Availability.Present):
        return res.value
    return None

def _fmt_khz(khz: int) -> str:
    """Format a CPU frequency in kHz."""
    return Human.format_freq(khz, unit="kHz")

def _fmt_mhz(mhz: int) -> str:
    """Format a graphics card frequency in MHz."""
    return Human.format_freq(mhz, unit="MHz")

def _fmt_list(vals: list[str]) -> str:
    """Format a list of strings."""
    return ",".join(vals)

class InfoCollector(ClassHelpers.SimpleCloseContext):
    """
    Read the controls to display. Every control is read with 'Availability.check()', so a control
    that is absent or failed to be read results in a placeholder instead of an exception.
    """

    def __init__(self, fsman: FSManagerType, sysfs_base: Path | str):
        """
        Initialize a class instance.

        Args:
            fsman: The file-system manager object for the host to read the controls on.
            sysfs_base: The sysfs mount point.
        """

        self._fsman = fsman

        self.cpuonline = CPUOnline.CPUOnline(fsman=fsman, sysfs_base=sysfs_base)
        self.cpufreq = CPUFreq.CPUFreq(fsman=fsman, sysfs_base=sysfs_base)
        self.energyperf = EnergyPerf.EnergyPerf(fsman=fsman, sysfs_base=sysfs_base)
        self.gpufreq = GPUFreq.GPUFreq(fsman=fsman, sysfs_base=sysfs_base)

    def close(self):
        """Uninitialize the class object."""
        ClassHelpers.close(self, close_attrs=("gpufreq", "energyperf", "cpufreq", "cpuonline"))

    def _check(self, func: Callable[..., Any], *args: Any) -> Availability.AvailabilityType:
        """Run 'Availability.check()' and log failures."""

        res = Availability.check(self._fsman, func, *args)
        if isinstance(res, Availability.Failed):
            _LOG.debug("%s failed:\n%s", getattr(func, "__name__", func), res.error.indent(2))
        return res

    def online(self, cpu: int) -> Availability.AvailabilityType:
        """Return the online state of CPU 'cpu'. CPUs without the online control are online."""

        res = self._check(self.cpuonline.read_online, cpu)
        if isinstance(res, Availability.Absent):
            return Availability.Present(True)
        return res

    def cpu_info(self, cpu: int) -> dict[str, Availability.AvailabilityType]:
        """Return the online state and frequencies of CPU 'cpu'."""

        info = {"online": self.online(cpu)}
        for _, key, method in _CPU_FREQ_COLUMNS:
            info[key] = self._check(getattr(self.cpufreq, method), cpu)
        return info

    def freq_info(self, cpu: int) -> dict[str, Availability.AvailabilityType]:
        """Return the governor and available governors of CPU 'cpu'."""

        return {"governor": self._check(self.cpufreq.read_governor, cpu),
                "governors": self._check(self.cpufreq.read_governors, cpu)}

    def pstate_info(self, cpu: int) -> dict[str, Availability.AvailabilityType]:
        """Return the EPB, EPP, and available EPPs of CPU 'cpu'."""

        return {"epb": self._check(self.energyperf.read_epb, cpu),
                "epp": self._check(self.energyperf.read_epp, cpu),
                "epps": self._check(self.energyperf.read_epps, cpu)}

    def pstate_status(self) -> Availability.AvailabilityType:
        """Return the 'intel_pstate' driver operation mode."""
        return self._check(self.energyperf.read_pstate_status)

    def gpu_info(self, card: int) -> dict[str, Availability.AvailabilityType]:
        """Return the frequencies of graphics card 'card'."""

        info = {}
        for _, key, fname in _GPU_FREQ_COLUMNS:
            info[key] = self._check(self.gpufreq.read_freq, card, fname)
        return info

def _get_sections(args: argparse.Namespace) -> tuple[bool, bool, bool, bool]:
    """Return which of the CPU, frequency, P-state, and GPU sections should be printed."""

    if getattr(args, "all", False):
        return True, True, True, True

    cpu, freq = getattr(args, "cpu", False), getattr(args, "freq", False)
    pstate, gpu = getattr(args, "pstate", False), getattr(args, "gpu", False)
    if not (cpu or freq or pstate or gpu):
        return True, True, False, False
    return cpu, freq, pstate, gpu

def format_summary(coll: InfoCollector, cpus: list[int], cpu: bool = True, freq: bool = True,
                   pstate: bool = False, gpu: bool = False) -> str:
    """
    Format the human-readable summary.

    Args:
        coll: The information collector object to read the controls with.
        cpus: The CPU numbers to include.
        cpu: Include the online state and frequencies table.
        freq: Include the governors table.
        pstate: Include the 'intel_pstate' status and energy hints table.
        gpu: Include the graphics card frequencies table.

    Returns:
        The summary text.
    """

    sections = []

    if pstate:
        rows = []
        for num in cpus:
            info = coll.pstate_info(num)
            rows.append([f"cpu{num}", _fmt(info["epb"]), _fmt(info["epp"]),
                         _fmt(info["epps"], _fmt_list)])
        text = f"  intel_pstate: {_fmt(coll.pstate_status())}\n\n"
        text += format_table(["CPU", "EPB", "EP Pref", "EP Prefs"], rows)
        sections.append(text)

    if freq:
        rows = []
        for num in cpus:
            info = coll.freq_info(num)
            rows.append([f"cpu{num}", _fmt(info["governor"]), _fmt(info["governors"], _fmt_list)])
        sections.append(format_table(["CPU", "Governor", "Governors"], rows))

    if cpu:
        rows = []
        for num in cpus:
            info = coll.cpu_info(num)
            row = [f"cpu{num}", _fmt(info["online"], lambda val: "yes" if val else "no")]
            row += [_fmt(info[key], _fmt_khz) for _, key, _ in _CPU_FREQ_COLUMNS]
            rows.append(row)
        header = ["CPU", "Online"] + [title for title, _, _ in _CPU_FREQ_COLUMNS]
        sections.append(format_table(header, rows))

    if gpu:
        if not coll.gpufreq.is_available():
            sections.append(f"  The '{GPUFreq.DRIVER_NAME}' driver is not loaded")
        else:
            rows = []
            for card in coll.gpufreq.get_cards():
                info = coll.gpu_info(card)
                rows.append([f"card{card}"] + [_fmt(info[key], _fmt_mhz)
                                               for _, key, _ in _GPU_FREQ_COLUMNS])
            header = ["Card"] + [title for title, _, _ in _GPU_FREQ_COLUMNS]
            sections.append(format_table(header, rows))

    return "\n\n".join(sections)

def build_yaml_info(coll: InfoCollector, cpus: list[int], cpu: bool = True, freq: bool = True,
                    pstate: bool = False, gpu: bool = False) -> dict[str, Any]:
    """
    Build the summary dictionary for YAML output. The arguments are the same as in
    'format_summary()'. Values that are not available are 'None'.
    """

    info: dict[str, Any] = {}

    if pstate:
        info["intel_pstate"] = {"status": _yaml_val(coll.pstate_status())}

    if cpu or freq or pstate:
        cpus_info: dict[int, dict[str, Any]] = {}
        for num in cpus:
            cpu_info: dict[str, Any] = {}
            if cpu:
                cpu_info.update(coll.cpu_info(num))
            if freq:
                cpu_info.update(coll.freq_info(num))
            if pstate:
                cpu_info.update(coll.pstate_info(num))
            cpus_info[num] = {key: _yaml_val(res) for key, res in cpu_info.items()}
        info["cpus"] = cpus_info

    if gpu:
        cards_info: dict[int, dict[str, Any]] = {}
        if coll.gpufreq.is_available():
            for card in coll.gpufreq.get_cards():
                cards_info[card] = {key: _yaml_val(res)
                                    for key, res in coll.gpu_info(card).items()}
        info["cards"] = cards_info

    return info

def print_summary(args: argparse.Namespace, coll: InfoCollector, cpus: list[int],
                  fobj: TextIO | None = None):
    """
    Print the summary in the format requested by the command line arguments.

    Args:
        args: The command line arguments.
        coll: The information collector object to read the controls with.
        cpus: The CPU numbers to include.
        fobj: The file object to print YAML output to. Defaults to the standard output.
    """

    cpu, freq, pstate, gpu = _get_sections(args)

    if getattr(args, "yaml", False):
        info = build_yaml_info(coll, cpus, cpu=cpu, freq=freq, pstate=pstate, gpu=gpu)
        YAML.dump(info, fobj if fobj else sys.stdout)
    else:
        _LOG.info("%s", format_summary(coll, cpus, cpu=cpu, freq=freq, pstate=pstate, gpu=gpu))

def _clear_screen():
    """Clear the terminal screen and move the cursor to the top-left corner."""

    sys.stdout.write(colorama.ansi.clear_screen() + colorama.Cursor.POS(1, 1))
    sys.stdout.flush()

def info_command(args: argparse.Namespace, fsman: FSManagerType):
    """
    Implement the 'info' command.

    Args:
        args: The command line arguments.
        fsman: The file-system manager object that defines the target host.
    """

    with InfoCollector(fsman, args.sysfs_base) as coll:
        cpus = _CpuxCommon.parse_cpus_string(args.cpus, coll.cpuonline.get_cpus(),
                                             hostmsg=fsman.hostmsg)

        if args.wait is None:
            print_summary(args, coll, cpus)
            return

        interval = args.wait if args.wait > 0 else 1
        while True:
            _clear_screen()
            print_summary(args, coll, cpus)
            time.sleep(interval)
