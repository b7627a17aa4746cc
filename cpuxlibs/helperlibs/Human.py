# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Miscellaneous helper functions for converting frequency values between human-readable and
machine-readable formats.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import math
from cpuxlibs.helperlibs import Trivial
from cpuxlibs.helperlibs.Exceptions import Error, ErrorBadFormat

# The SI prefixes allowed in frequency units and their scalers relative to hertz. Sorted from the
# largest to the smallest, the formatting code relies on this.
_SIPFX_SCALERS = {
    "T": 1000000000000,
    "G": 1000000000,
    "M": 1000000,
    "k": 1000,
    "": 1,
}

def separate_si_prefix(unit: str) -> tuple[str, str]:
    """
    Split a SI-unit prefix from a frequency unit.

    Args:
        unit: The frequency unit, like "kHz" or "Hz". Case-insensitive.

    Returns:
        A tuple of the normalized SI prefix (empty string if there is none) and the base unit "Hz".

    Raises:
        ErrorBadFormat: If 'unit' is not a frequency unit.

    Examples:
        >>> separate_si_prefix("kHz")
        ("k", "Hz")
        >>> separate_si_prefix("ghz")
        ("G", "Hz")
    """

    if not unit.lower().endswith("hz"):
        raise ErrorBadFormat(f"Bad frequency unit '{unit}': should end with 'Hz'")

    sipfx = unit[:-2]
    for pfx in _SIPFX_SCALERS:
        if sipfx.lower() == pfx.lower():
            return pfx, "Hz"

    raise ErrorBadFormat(f"Bad frequency unit '{unit}': unknown prefix '{sipfx}'")

def parse_freq(hval: str | int | float, unit: str = "kHz", what: str | None = None) -> int:
    """
    Convert a user-provided frequency value into an integer amount of 'unit' units.

    Args:
        hval: The value to convert. A number without a unit is taken as an amount of 'unit' units.
              A string may end with a case-insensitive unit, like "MHz" or "ghz".
        unit: The unit of the result, for example "kHz" for CPU frequencies and "MHz" for GPU
              frequencies.
        what: An optional name associated with the value, used only in case of an error for
              formatting a nicer message.

    Returns:
        The frequency in 'unit' units, rounded to the nearest integer.

    Raises:
        ErrorBadFormat: If the value cannot be parsed or is negative.

    Examples:
        >>> parse_freq("4100000", unit="kHz")
        4100000
        >>> parse_freq("4100mhz", unit="kHz")
        4100000
        >>> parse_freq("4.1GHz", unit="kHz")
        4100000
        >>> parse_freq("1.5GHz", unit="MHz")
        1500
    """

    what = f" {what}" if what else ""
    target_pfx, _ = separate_si_prefix(unit)

    sval = str(hval).strip()
    if Trivial.is_num(sval):
        num = sval
        pfx = target_pfx
    else:
        idx = sval.lower().rfind("hz")
        if idx < 1 or sval[idx + 2:]:
            raise ErrorBadFormat(f"Bad{what} frequency value '{hval}': use a number optionally "
                                 f"followed by a unit, e.g., '4100000', '4100MHz', or '4.1GHz'")
        # Separate the number from the unit, the unit may have a 1-letter prefix.
        num = sval[:idx].rstrip()
        pfx_letter = ""
        if num and not num[-1].isdigit() and num[-1] != ".":
            pfx_letter = num[-1]
            num = num[:-1]
        try:
            pfx, _ = separate_si_prefix(f"{pfx_letter}Hz")
        except Error as err:
            raise ErrorBadFormat(f"Bad{what} frequency value '{hval}':\n{err.indent(2)}") from err

        if not Trivial.is_num(num.strip()):
            raise ErrorBadFormat(f"Bad{what} frequency value '{hval}': '{num}' is not a number")
        num = num.strip()

    hz = float(num) * _SIPFX_SCALERS[pfx]
    if not math.isfinite(hz):
        raise ErrorBadFormat(f"Bad{what} frequency value '{hval}': should be a finite number")
    if hz < 0:
        raise ErrorBadFormat(f"Bad{what} frequency value '{hval}': should not be negative")

    return round(hz / _SIPFX_SCALERS[target_pfx])

def format_freq(value: int | float, unit: str = "kHz", decp: int = 1, sep: str = " ") -> str:
    """
    Format a frequency value in a human-friendly way, picking the largest SI prefix that keeps the
    number at or above 1.

    Args:
        value: The frequency value in 'unit' units.
        unit: The unit of 'value', for example "kHz" or "MHz".
        decp: Number of decimal places to use when the value is scaled.
        sep: The separator string to use between the number and the unit.

    Returns:
        The human-readable frequency string.

    Examples:
        >>> format_freq(800, unit="kHz")
        "800 kHz"
        >>> format_freq(4100000, unit="kHz")
        "4.1 GHz"
        >>> format_freq(1300, unit="MHz")
        "1.3 GHz"
    """

    if decp < 0:
        raise Error(f"BUG: Bad decimal points count '{decp}'")

    src_pfx, _ = separate_si_prefix(unit)
    hz = float(value) * _SIPFX_SCALERS[src_pfx]

    pfx, scaler = src_pfx, _SIPFX_SCALERS[src_pfx]
    for pfx, scaler in _SIPFX_SCALERS.items():
        if abs(hz) >= scaler:
            break
    else:
        # Zero or less than 1Hz, keep the original unit.
        pfx = src_pfx

    if pfx == src_pfx:
        return f"{value}{sep}{unit}"

    return f"{hz / scaler:.{decp}f}{sep}{pfx}Hz"
