# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Common trivial helpers: number conversions and number lists like "0,2-5".
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import typing
from itertools import groupby
from cpuxlibs.helperlibs.Exceptions import Error, ErrorBadFormat

if typing.TYPE_CHECKING:
    from typing import Iterable

def str_to_int(snum: str | int, base: int = 0, what: str = "") -> int:
    """
    Convert a string to an integer.

    Args:
        snum: The value to convert.
        base: Base of 'snum'. Auto-detected from the prefix (e.g., '0x') by default.
        what: Description of the value for the error message.

    Returns:
        The integer value.

    Raises:
        ErrorBadFormat: If 'snum' is not an integer.
    """

    what = what if what else "value"

    # 'int(True)' works, but a boolean is not a valid integer value here.
    if isinstance(snum, bool):
        raise ErrorBadFormat(f"Bad {what} '{snum}': should be an integer, not boolean")

    try:
        return int(str(snum), base)
    except (ValueError, TypeError):
        kind = f"a base {base} integer" if base else "an integer"
        raise ErrorBadFormat(f"Bad {what} '{snum}': should be {kind}") from None

def str_to_num(snum: str | int | float, what: str = "") -> int | float:
    """Same as 'str_to_int()', but floating point numbers are accepted too."""

    try:
        return int(str(snum), 0)
    except (ValueError, TypeError):
        pass

    try:
        return float(str(snum))
    except (ValueError, TypeError):
        what = what if what else "value"
        raise ErrorBadFormat(f"Bad {what} '{snum}': should be an integer or floating point "
                             f"number") from None

def is_num(value: str | int | float) -> bool:
    """Return 'True' if 'value' is an integer or floating point number."""

    try:
        float(str(value))
    except (ValueError, TypeError):
        return False
    return True

def list_dedup(elts: Iterable) -> list:
    """Return a list of unique elements in 'elts', the order is preserved."""
    return list(dict.fromkeys(elts))

def split_csv_line_int(csv_line: str, sep: str = ",", dedup: bool = False,
                       what: str = "") -> list[int]:
    """
    Parse a list of integers and integer ranges, for example "0,1-3,7" results in
    '[0, 1, 2, 3, 7]'.

    Args:
        csv_line: The line to parse. White-spaces around the numbers and empty elements are
                  ignored.
        sep: The list elements separator.
        dedup: Remove duplicate numbers from the result.
        what: Description of the list for the error message.

    Returns:
        The list of integers in the order they appear in 'csv_line'.

    Raises:
        ErrorBadFormat: If 'csv_line' has a bad format.
    """

    what = what if what else "value"

    result: list[int] = []
    for elt in csv_line.split(sep):
        elt = elt.strip()
        if not elt:
            continue

        if "-" not in elt:
            result.append(str_to_int(elt, base=10, what=what))
            continue

        bounds = [bound.strip() for bound in elt.split("-")]
        if len(bounds) != 2 or not all(bounds):
            raise ErrorBadFormat(f"Bad {what} '{csv_line}': bad range '{elt}', should be two "
                                 f"integers separated by '-'")

        first, last = [str_to_int(bound, base=10, what=what) for bound in bounds]
        if first > last:
            raise ErrorBadFormat(f"Bad {what} '{csv_line}': bad range '{elt}', the first number "
                                 f"should not be greater than the second one")

        result += range(first, last + 1)

    if dedup:
        return list_dedup(result)
    return result

def rangify(numbers: Iterable[int | str]) -> str:
    """
    The reverse of 'split_csv_line_int()': turn a list of numbers into a sorted comma-separated
    string with runs of 3 or more consecutive numbers squeezed into ranges, for example
    '[7, 0, 1, 2, 4, 5]' results in "0-2,4,5,7".
    """

    try:
        nums = sorted(int(number) for number in numbers)
    except (ValueError, TypeError) as err:
        raise Error(f"failed to translate numbers to ranges, expected a list of numbers, got "
                    f"'{numbers}'") from err

    elts: list[str] = []
    # Consecutive numbers have the same difference between their index and value.
    for _, group in groupby(enumerate(nums), lambda pair: pair[0] - pair[1]):
        run = [num for _, num in group]
        if len(run) > 2:
            elts.append(f"{run[0]}-{run[-1]}")
        else:
            elts += [str(num) for num in run]

    return ",".join(elts)
