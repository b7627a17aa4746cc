# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Map targets (CPU numbers, graphics card numbers) and control names to sysfs paths.

All functions are pure: they only build paths and never touch the file-system. Every function
accepts the sysfs mount point, so that the whole tree can be relocated (e.g., to a fake tree in
tests).
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

from pathlib import Path

# The default sysfs mount point.
SYSFS_BASE = Path("/sys")

# The graphics card frequency control names and their file name in the card directory.
I915_FREQ_FILES = {
    "act_freq": "gt_act_freq_mhz",
    "cur_freq": "gt_cur_freq_mhz",
    "min_freq": "gt_min_freq_mhz",
    "max_freq": "gt_max_freq_mhz",
    "boost_freq": "gt_boost_freq_mhz",
    "rp0_freq": "gt_RP0_freq_mhz",
    "rp1_freq": "gt_RP1_freq_mhz",
    "rpn_freq": "gt_RPn_freq_mhz",
}

def cpus_dir(sysfs_base: Path = SYSFS_BASE) -> Path:
    """Return path to the directory with all the CPU sub-directories."""
    return sysfs_base / "devices/system/cpu"

def cpus_present(sysfs_base: Path = SYSFS_BASE) -> Path:
    """Return path to the file listing present CPUs (e.g., '0-3,8')."""
    return cpus_dir(sysfs_base) / "present"

def cpu_dir(cpu: int, sysfs_base: Path = SYSFS_BASE) -> Path:
    """Return path to the sysfs directory of CPU 'cpu'."""
    return cpus_dir(sysfs_base) / f"cpu{cpu}"

def cpu_online(cpu: int, sysfs_base: Path = SYSFS_BASE) -> Path:
    """Return path to the online flag file of CPU 'cpu'."""
    return cpu_dir(cpu, sysfs_base) / "online"

def cpufreq_dir(cpu: int, sysfs_base: Path = SYSFS_BASE) -> Path:
    """Return path to the cpufreq directory of CPU 'cpu'."""
    return cpu_dir(cpu, sysfs_base) / "cpufreq"

def cpufreq_file(cpu: int, name: str, sysfs_base: Path = SYSFS_BASE) -> Path:
    """
    Return path to a file in the cpufreq directory of a CPU.

    Args:
        cpu: The CPU number.
        name: Name of the file, for example "scaling_max_freq".
        sysfs_base: The sysfs mount point.
    """

    return cpufreq_dir(cpu, sysfs_base) / name

def cpufreq_cur_freq(cpu: int, sysfs_base: Path = SYSFS_BASE) -> Path:
    """Return path to the current frequency (kHz) file of CPU 'cpu'."""
    return cpufreq_file(cpu, "scaling_cur_freq", sysfs_base)

def cpufreq_min_freq(cpu: int, sysfs_base: Path = SYSFS_BASE) -> Path:
    """Return path to the minimum frequency (kHz) file of CPU 'cpu'."""
    return cpufreq_file(cpu, "scaling_min_freq", sysfs_base)

def cpufreq_max_freq(cpu: int, sysfs_base: Path = SYSFS_BASE) -> Path:
    """Return path to the maximum frequency (kHz) file of CPU 'cpu'."""
    return cpufreq_file(cpu, "scaling_max_freq", sysfs_base)

def cpufreq_min_freq_limit(cpu: int, sysfs_base: Path = SYSFS_BASE) -> Path:
    """Return path to the minimum frequency limit (kHz) file of CPU 'cpu'."""
    return cpufreq_file(cpu, "cpuinfo_min_freq", sysfs_base)

def cpufreq_max_freq_limit(cpu: int, sysfs_base: Path = SYSFS_BASE) -> Path:
    """Return path to the maximum frequency limit (kHz) file of CPU 'cpu'."""
    return cpufreq_file(cpu, "cpuinfo_max_freq", sysfs_base)

def cpufreq_governor(cpu: int, sysfs_base: Path = SYSFS_BASE) -> Path:
    """Return path to the scaling governor file of CPU 'cpu'."""
    return cpufreq_file(cpu, "scaling_governor", sysfs_base)

def cpufreq_governors(cpu: int, sysfs_base: Path = SYSFS_BASE) -> Path:
    """Return path to the available scaling governors file of CPU 'cpu'."""
    return cpufreq_file(cpu, "scaling_available_governors", sysfs_base)

def epb(cpu: int, sysfs_base: Path = SYSFS_BASE) -> Path:
    """Return path to the energy performance bias file of CPU 'cpu'."""
    return cpu_dir(cpu, sysfs_base) / "power/energy_perf_bias"

def epp(cpu: int, sysfs_base: Path = SYSFS_BASE) -> Path:
    """Return path to the energy performance preference file of CPU 'cpu'."""
    return cpufreq_file(cpu, "energy_performance_preference", sysfs_base)

def epps(cpu: int, sysfs_base: Path = SYSFS_BASE) -> Path:
    """Return path to the available energy performance preferences file of CPU 'cpu'."""
    return cpufreq_file(cpu, "energy_performance_available_preferences", sysfs_base)

def intel_pstate_dir(sysfs_base: Path = SYSFS_BASE) -> Path:
    """Return path to the global 'intel_pstate' driver directory."""
    return cpus_dir(sysfs_base) / "intel_pstate"

def intel_pstate_status(sysfs_base: Path = SYSFS_BASE) -> Path:
    """Return path to the 'intel_pstate' driver status file."""
    return intel_pstate_dir(sysfs_base) / "status"

def drm_dir(sysfs_base: Path = SYSFS_BASE) -> Path:
    """Return path to the DRM class directory with the 'cardN' entries."""
    return sysfs_base / "class/drm"

def drm_card_dir(card: int, sysfs_base: Path = SYSFS_BASE) -> Path:
    """Return path to the sysfs directory of graphics card 'card'."""
    return drm_dir(sysfs_base) / f"card{card}"

def drm_card_driver(card: int, sysfs_base: Path = SYSFS_BASE) -> Path:
    """Return path to the driver symlink of graphics card 'card'."""
    return drm_card_dir(card, sysfs_base) / "device/driver"

def i915_module(sysfs_base: Path = SYSFS_BASE) -> Path:
    """Return path to the 'i915' kernel module directory."""
    return sysfs_base / "module/i915"

def i915_freq(card: int, name: str, sysfs_base: Path = SYSFS_BASE) -> Path:
    """
    Return path to a frequency file (MHz) of an 'i915' graphics card.

    Args:
        card: The graphics card number.
        name: The frequency control name, one of the 'I915_FREQ_FILES' keys.
        sysfs_base: The sysfs mount point.
    """

    return drm_card_dir(card, sysfs_base) / I915_FREQ_FILES[name]
