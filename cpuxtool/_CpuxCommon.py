# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Misc. helpers shared between various 'cpux' commands.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

from cpuxlibs.helperlibs import Logging, Trivial
from cpuxlibs.helperlibs.Exceptions import Error, ErrorBadFormat

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.cpux.{__name__}")

# The accepted spellings of the "on" and "off" values.
_ON_VALUES = ("on", "1", "true", "yes", "enable")
_OFF_VALUES = ("off", "0", "false", "no", "disable")

def parse_nums_string(nums: str | None, all_nums: list[int], what: str = "CPU",
                      hostmsg: str = "") -> list[int]:
    """
    Parse and validate a string with a comma-separated list of numbers and number ranges.

    Args:
        nums: The string to parse, for example '0,2-4'. "all" or 'None' mean all numbers.
        all_nums: All the valid numbers.
        what: Name of the numbered objects, for messages, for example "CPU".
        hostmsg: The host message to add to error messages.

    Returns:
        The list of numbers, without duplicates, in the order they were specified.

    Raises:
        ErrorBadFormat: If 'nums' has a bad format.
        Error: If 'nums' includes numbers that are not in 'all_nums'.
    """

    if nums is None or nums.strip() == "all":
        return list(all_nums)

    result = Trivial.split_csv_line_int(nums, dedup=True, what=f"{what} numbers list")
    if not result:
        raise ErrorBadFormat(f"Bad {what} numbers list '{nums}': no numbers specified")

    valid = set(all_nums)
    bad = [num for num in result if num not in valid]
    if bad:
        if all_nums:
            valid_str = f", available {what}s are: {Trivial.rangify(all_nums)}"
        else:
            valid_str = f", no {what}s available"
        if len(bad) == 1:
            msg = f"{what} {bad[0]} does not exist"
        else:
            msg = f"{what}s {Trivial.rangify(bad)} do not exist"
        raise Error(f"{msg}{hostmsg}{valid_str}")

    return result

def parse_cpus_string(cpus: str | None, all_cpus: list[int], hostmsg: str = "") -> list[int]:
    """Same as 'parse_nums_string()', but for CPU numbers."""
    return parse_nums_string(cpus, all_cpus, what="CPU", hostmsg=hostmsg)

def parse_online_toggles(vector: str) -> list[bool | None]:
    """
    Parse the online toggles vector. The vector consists of '1' (online), '0' (offline), and '-'
    (do not change) characters. The character position is the CPU number. White-spaces are
    ignored.

    Args:
        vector: The vector string to parse, for example '10-1'.

    Returns:
        A list of booleans and 'None' values ('None' stands for "do not change").

    Raises:
        ErrorBadFormat: If the vector includes unexpected characters.
    """

    toggles: list[bool | None] = []
    for char in vector:
        if char.isspace():
            continue
        if char == "1":
            toggles.append(True)
        elif char == "0":
            toggles.append(False)
        elif char == "-":
            toggles.append(None)
        else:
            raise ErrorBadFormat(f"Bad online toggles vector '{vector}': unexpected character "
                                 f"'{char}', use '0', '1', or '-'")

    return toggles

def parse_onoff(val: str, what: str = "value") -> bool:
    """
    Parse an "on" or "off" value.

    Args:
        val: The value to parse, for example "on" or "off". Case-insensitive.
        what: Name of the value, for messages.

    Returns:
        'True' for "on" and 'False' for "off".
    """

    lval = val.strip().lower()
    if lval in _ON_VALUES:
        return True
    if lval in _OFF_VALUES:
        return False

    raise ErrorBadFormat(f"Bad {what} '{val}': use 'on' or 'off'")
