# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
cpux - a tool for viewing and changing CPU and Intel graphics card power and frequency controls on
Linux.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import sys
import typing
import argcomplete
from cpuxlibs import SysfsPaths
from cpuxlibs.helperlibs import ArgParse, Logging, FSManager
from cpuxlibs.helperlibs.Exceptions import Error

if typing.TYPE_CHECKING:
    import argparse
    from typing import Sequence
    from cpuxlibs.helperlibs.ArgParse import ArgTypedDict
    from cpuxlibs.helperlibs.FSManager import FSManagerType

_VERSION = "1.0.0"
TOOLNAME = "cpux"

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.cpux").configure(prefix=TOOLNAME)

_SYSFS_BASE_OPTION: ArgTypedDict = {
    "short": None,
    "long": "--sysfs-base",
    "argcomplete": "DirectoriesCompleter",
    "kwargs": {
        "dest": "sysfs_base",
        "default": str(SysfsPaths.SYSFS_BASE),
        "help": """This option is for debugging and testing. It specifies the path to use as the
                   sysfs mount point instead of '/sys', for example a directory with a copy of
                   sysfs files."""
    },
}

_CPUS_HELP = """List of CPUs to operate on. Specify individual CPU numbers or ranges, e.g.,
                '1-4,7,8,10-12' for CPUs 1 to 4, 7, 8, and 10 to 12. Use 'all' to specify all CPUs.
                The default is all CPUs."""

def build_arguments_parser() -> ArgParse.ArgsParser:
    """Build and return the command-line arguments parser object."""

    text = "cpux - view and change CPU and Intel graphics card power and frequency controls."
    parser = ArgParse.ArgsParser(description=text, prog=TOOLNAME, ver=_VERSION)

    parser.add_global_options(ArgParse.SSH_OPTIONS)
    parser.add_global_options((_SYSFS_BASE_OPTION,))

    subparsers = parser.add_subparsers(title="commands", dest="a command")
    subparsers.required = True

    #
    # Create parser for the 'info' command.
    #
    text = "Print CPU and graphics card controls."
    descr = """Print summary tables of CPU online state, frequencies, governors, energy hints, and
               graphics card frequencies. The CPU and governor tables are printed by default."""
    subpars = subparsers.add_parser("info", help=text, description=descr)
    subpars.set_defaults(func=_info_command)

    text = "Print the CPU online state and frequencies table."
    subpars.add_argument("--cpu", action="store_true", help=text)

    text = "Print the CPU frequency governors table."
    subpars.add_argument("--freq", action="store_true", help=text)

    text = "Print the 'intel_pstate' driver mode and the CPU energy hints (EPB and EPP) table."
    subpars.add_argument("--pstate", action="store_true", help=text)

    text = "Print the Intel graphics card frequencies table."
    subpars.add_argument("--gpu", action="store_true", help=text)

    text = "Print all tables."
    subpars.add_argument("-a", "--all", dest="all", action="store_true", help=text)

    subpars.add_argument("--cpus", help=_CPUS_HELP)

    text = "Print the information in YAML format instead of tables."
    subpars.add_argument("--yaml", action="store_true", help=text)

    text = """Keep printing the information every WAIT seconds until interrupted. Zero means one
              second."""
    subpars.add_argument("-w", "--wait", type=float, metavar="WAIT", help=text)

    #
    # Create parser for the 'config' command.
    #
    text = "Change CPU and graphics card controls."
    descr = """Change CPU online state, frequencies, governor, energy hints, and graphics card
               frequencies. Offline CPUs are temporarily brought online to change their controls.
               Controls that do not exist on a CPU are skipped."""
    subpars = subparsers.add_parser("config", help=text, description=descr)
    subpars.set_defaults(func=_config_command)

    subpars.add_argument("--cpus", help=_CPUS_HELP)

    text = """Leave the CPUs online ('on') or offline ('off'). By default, the CPUs are left in the
              online state they were in."""
    subpars.add_argument("--online", metavar="on|off", help=text)

    text = """The online state per CPU, applied after all other changes. Each character stands for
              the CPU with the same number as the character position: '1' means online, '0' means
              offline, and '-' means "do not change". For example, '1-0' onlines CPU 0 and
              offlines CPU 2."""
    subpars.add_argument("--online-each", dest="online_each", metavar="VECTOR", help=text)

    text = "The CPU frequency governor name, for example 'powersave'."
    subpars.add_argument("--governor", help=text)

    text = """The maximum CPU frequency. The default unit is 'kHz', but 'Hz', 'MHz', and 'GHz' can
              also be used, for example '2GHz'."""
    subpars.add_argument("--max-freq", dest="max_freq", metavar="FREQ", help=text)

    text = """The minimum CPU frequency. The default unit is 'kHz', but 'Hz', 'MHz', and 'GHz' can
              also be used, for example '800MHz'."""
    subpars.add_argument("--min-freq", dest="min_freq", metavar="FREQ", help=text)

    text = """The Energy Performance Bias (EPB) value, from 0 (performance) to 15 (power
              saving)."""
    subpars.add_argument("--epb", help=text)

    text = """The Energy Performance Preference (EPP) name, for example 'balance_performance'. Use
              'info --pstate' to get the list of available names."""
    subpars.add_argument("--epp", help=text)

    text = "The 'intel_pstate' driver mode: 'active', 'passive', or 'off'."
    subpars.add_argument("--pstate-status", dest="pstate_status", metavar="MODE", help=text)

    text = """List of Intel graphics cards to operate on, same format as '--cpus'. The default is
              all cards."""
    subpars.add_argument("--cards", help=text)

    text = """The minimum graphics card frequency. The default unit is 'MHz', but 'kHz' and 'GHz'
              can also be used."""
    subpars.add_argument("--gpu-min-freq", dest="gpu_min_freq", metavar="FREQ", help=text)

    text = """The maximum graphics card frequency. The default unit is 'MHz', but 'kHz' and 'GHz'
              can also be used."""
    subpars.add_argument("--gpu-max-freq", dest="gpu_max_freq", metavar="FREQ", help=text)

    text = """The boost graphics card frequency. The default unit is 'MHz', but 'kHz' and 'GHz' can
              also be used."""
    subpars.add_argument("--gpu-boost-freq", dest="gpu_boost_freq", metavar="FREQ", help=text)

    argcomplete.autocomplete(parser)

    return parser

def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: The arguments to parse. Defaults to 'sys.argv[1:]'.

    Returns:
        The parsed arguments, with the SSH options validated and normalized.
    """

    parser = build_arguments_parser()
    args = parser.parse_args(argv)

    ArgParse.normalize_ssh_args(args)

    return args

# pylint: disable=import-outside-toplevel

def _info_command(args: argparse.Namespace, fsman: FSManagerType):
    """Implement the 'info' command."""

    from cpuxtool import _CpuxInfo

    _CpuxInfo.info_command(args, fsman)

def _config_command(args: argparse.Namespace, fsman: FSManagerType):
    """Implement the 'config' command."""

    from cpuxtool import _CpuxConfig

    _CpuxConfig.config_command(args, fsman)

def main(argv: Sequence[str] | None = None) -> int:
    """
    Script entry point.

    Args:
        argv: The command-line arguments. Defaults to 'sys.argv[1:]'.

    Returns:
        The program exit code.
    """

    try:
        args = parse_arguments(argv)

        if not getattr(args, "func", None):
            _LOG.error("please, run '%s -h' for help", TOOLNAME)
            return -1

        with FSManager.get_fsman(args.hostname, username=args.username,
                                 privkeypath=args.privkey, timeout=args.timeout) as fsman:
            args.func(args, fsman)
    except KeyboardInterrupt:
        _LOG.info("\nInterrupted, exiting")
        return -1
    except Error as err:
        _LOG.error_out(err)

    return 0

if __name__ == "__main__":
    sys.exit(main())
