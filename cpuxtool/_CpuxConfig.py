# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Implement the 'cpux config' command.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import typing
from cpuxlibs import CPUConfig, EnergyPerf, GPUFreq
from cpuxlibs.helperlibs import Logging, Human, Trivial
from cpuxlibs.helperlibs.Exceptions import Error
from cpuxtool import _CpuxCommon, _CpuxInfo

if typing.TYPE_CHECKING:
    import argparse
    from cpuxlibs.helperlibs.FSManager import FSManagerType

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.cpux.{__name__}")

# The graphics card frequency options: 'argparse' destination and frequency control name.
_GPU_FREQ_OPTIONS = (
    ("gpu_min_freq", "min_freq"),
    ("gpu_max_freq", "max_freq"),
    ("gpu_boost_freq", "boost_freq"),
)

def build_request(args: argparse.Namespace) -> CPUConfig.ConfigRequest:
    """
    Build the CPU configuration request out of the command line arguments.

    Args:
        args: The command line arguments.

    Returns:
        The configuration request.
    """

    online = None
    if args.online is not None:
        online = _CpuxCommon.parse_onoff(args.online, what="--online option value")

    toggles = None
    if args.online_each is not None:
        toggles = _CpuxCommon.parse_online_toggles(args.online_each)

    max_freq = None
    if args.max_freq is not None:
        max_freq = Human.parse_freq(args.max_freq, unit="kHz", what="maximum CPU")

    min_freq = None
    if args.min_freq is not None:
        min_freq = Human.parse_freq(args.min_freq, unit="kHz", what="minimum CPU")

    epb = None
    if args.epb is not None:
        epb = Trivial.str_to_int(args.epb, base=10, what="EPB value")

    return CPUConfig.ConfigRequest(online=online, governor=args.governor, max_freq=max_freq,
                                   min_freq=min_freq, epb=epb, epp=args.epp,
                                   online_toggles=toggles)

def _parse_gpu_freqs(args: argparse.Namespace) -> dict[str, int]:
    """Parse the graphics card frequency options, return a frequency control name to MHz dict."""

    freqs = {}
    for dest, fname in _GPU_FREQ_OPTIONS:
        val = getattr(args, dest, None)
        if val is not None:
            freqs[fname] = Human.parse_freq(val, unit="MHz", what=f"graphics card {fname}")
    return freqs

def _get_cards(args: argparse.Namespace, gpufreq: GPUFreq.GPUFreq,
               fsman: FSManagerType) -> list[int]:
    """Return the list of graphics card numbers to configure, validated against the system."""

    if not gpufreq.is_available():
        raise Error(f"the '{GPUFreq.DRIVER_NAME}' driver is not loaded{fsman.hostmsg}")

    return _CpuxCommon.parse_nums_string(args.cards, gpufreq.get_cards(), what="card",
                                         hostmsg=fsman.hostmsg)

def _validate_toggles(toggles: list[bool | None], all_cpus: list[int], fsman: FSManagerType):
    """Verify that every CPU with an online toggle other than '-' exists."""

    valid = set(all_cpus)
    bad = [cpu for cpu, online in enumerate(toggles) if online is not None and cpu not in valid]
    if bad:
        raise Error(f"the '--online-each' vector toggles non-existing CPU(s) "
                    f"{Trivial.rangify(bad)}{fsman.hostmsg}, available CPUs are: "
                    f"{Trivial.rangify(all_cpus)}")

def _config_gpu(gpufreq: GPUFreq.GPUFreq, cards: list[int], freqs: dict[str, int],
                fsman: FSManagerType):
    """Write frequencies 'freqs' to graphics cards 'cards'."""

    for card in cards:
        for fname, mhz in freqs.items():
            if not gpufreq.set_freq(card, fname, mhz):
                _LOG.warning("card%d has no '%s' control%s", card, fname, fsman.hostmsg)

def _config_pstate_status(status: str, energyperf: EnergyPerf.EnergyPerf, fsman: FSManagerType):
    """Write the 'intel_pstate' driver operation mode."""

    if not energyperf.set_pstate_status(status):
        raise Error(f"the 'intel_pstate' driver is not used{fsman.hostmsg}")

def config_command(args: argparse.Namespace, fsman: FSManagerType):
    """
    Implement the 'config' command. All the options are parsed and the CPU and card numbers are
    validated before the first write.

    Args:
        args: The command line arguments.
        fsman: The file-system manager object that defines the target host.
    """

    request = build_request(args)
    freqs = _parse_gpu_freqs(args)

    if not request.has_controls() and args.pstate_status is None and not freqs:
        raise Error("please, specify at least one option to configure, use '-h' for help")
    if args.cards is not None and not freqs:
        raise Error("the '--cards' option requires one of the graphics card frequency options")

    with _CpuxInfo.InfoCollector(fsman, args.sysfs_base) as coll:
        all_cpus = coll.cpuonline.get_cpus()
        cpus = _CpuxCommon.parse_cpus_string(args.cpus, all_cpus, hostmsg=fsman.hostmsg)
        if request.online_toggles:
            _validate_toggles(request.online_toggles, all_cpus, fsman)

        cards: list[int] = []
        if freqs:
            cards = _get_cards(args, coll.gpufreq, fsman)

        # The 'intel_pstate' driver mode goes first, because changing it may change the set of
        # available CPU frequency controls.
        if args.pstate_status is not None:
            _config_pstate_status(args.pstate_status, coll.energyperf, fsman)

        if request.has_controls():
            with CPUConfig.CPUConfig(fsman=fsman, sysfs_base=args.sysfs_base,
                                     cpuonline=coll.cpuonline, cpufreq=coll.cpufreq,
                                     energyperf=coll.energyperf) as cpuconfig:
                cpuconfig.apply(request, cpus)

        if freqs:
            _config_gpu(coll.gpufreq, cards, freqs, fsman)

        pstate = args.pstate_status is not None or request.epb is not None or \
                 request.epp is not None
        _LOG.info("%s", _CpuxInfo.format_summary(coll, cpus, cpu=request.has_controls(),
                                                 freq=request.governor is not None,
                                                 pstate=pstate, gpu=bool(freqs)))
