# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Provide an API for Intel graphics card ('i915' driver) frequency controls. All frequencies are in
MHz, same as in sysfs.

The frequency controls are referred to by name:
  * act_freq - the actual frequency (read-only).
  * cur_freq - the requested frequency (read-only).
  * min_freq - the minimum frequency.
  * max_freq - the maximum frequency.
  * boost_freq - the boost frequency.
  * rp0_freq - the maximum frequency limit (RP0, read-only).
  * rp1_freq - the most efficient frequency (RP1, read-only).
  * rpn_freq - the minimum frequency limit (RPn, read-only).
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import re
import typing
from pathlib import Path
from cpuxlibs import _ControllerBase, SysfsPaths
from cpuxlibs.helperlibs import Logging
from cpuxlibs.helperlibs.Exceptions import Error

if typing.TYPE_CHECKING:
    from typing import Iterable
    from cpuxlibs.helperlibs.FSManager import FSManagerType

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.cpux.{__name__}")

# Name of the supported graphics driver.
DRIVER_NAME = "i915"

# All frequency control names and their descriptions.
FREQS = {
    "act_freq": "actual frequency",
    "cur_freq": "requested frequency",
    "min_freq": "minimum frequency",
    "max_freq": "maximum frequency",
    "boost_freq": "boost frequency",
    "rp0_freq": "maximum frequency limit",
    "rp1_freq": "optimal frequency",
    "rpn_freq": "minimum frequency limit",
}

# The writable frequency controls.
WRITABLE_FREQS = ("min_freq", "max_freq", "boost_freq")

# Matches the DRM class directory entries of graphics cards, but not connectors (e.g.,
# 'card0-HDMI-A-1').
_CARD_REGEX = re.compile(r"^card(\d+)$")

class GPUFreq(_ControllerBase.ControllerBase):
    """
    Enumerate 'i915' graphics cards and get or set their frequency controls. Public methods
    overview.

    Enumerate graphics cards.
      - 'is_available()' - check if the 'i915' driver is loaded.
      - 'get_cards()' - all graphics cards driven by 'i915'.
      - 'get_card_driver()' - name of the driver of a graphics card.
    Raw access (exactly one pseudo-file operation each, raise 'ErrorNotFound' if the control does
    not exist).
      - 'read_freq()', 'write_freq()'.
    Availability-wrapped access ('get_freq()' returns 'None' and 'set_freq()' returns 'False' if
    the control does not exist).
      - 'get_freq()', 'set_freq()'.
    """

    def __init__(self,
                 fsman: FSManagerType | None = None,
                 sysfs_base: Path | str = SysfsPaths.SYSFS_BASE,
                 absent_errnos: Iterable[int] | None = None,
                 logger: Logging.Logger | None = None):
        """Refer to 'ControllerBase.__init__()'."""

        super().__init__(fsman=fsman, sysfs_base=sysfs_base, absent_errnos=absent_errnos,
                         logger=logger if logger else _LOG)

    @staticmethod
    def _validate_fname(fname: str, write: bool = False):
        """Validate frequency control name 'fname'."""

        names = WRITABLE_FREQS if write else FREQS
        if fname not in names:
            names_str = ", ".join(names)
            action = "writable " if write else ""
            raise Error(f"Unknown {action}graphics card frequency control '{fname}', use one of: "
                        f"{names_str}")

    def is_available(self) -> bool:
        """Return 'True' if the 'i915' driver is loaded, otherwise return 'False'."""
        return self._fsman.is_dir(SysfsPaths.i915_module(self._sysfs_base))

    def read_card_driver(self, card: int) -> str:
        """
        Read and return the name of the driver of a graphics card.

        Args:
            card: The graphics card number.

        Raises:
            ErrorNotFound: If the graphics card or its driver symlink does not exist.
        """

        path = SysfsPaths.drm_card_driver(card, self._sysfs_base)
        driver = self._pfs.readlink(path, what=f"card{card} driver symlink").name
        self._log.debug("drm get driver card%d %s", card, driver)
        return driver

    def get_card_driver(self, card: int) -> str | None:
        """Same as 'read_card_driver()', but return 'None' if the driver symlink does not exist."""
        return self._probe(self.read_card_driver, card)

    def get_cards(self) -> list[int]:
        """
        Return the sorted list of graphics card numbers driven by the 'i915' driver. Return an empty
        list if there is no DRM class directory.
        """

        entries = self._probe(self._pfs.listdir, SysfsPaths.drm_dir(self._sysfs_base),
                              what="DRM directory")
        if not entries:
            return []

        cards = []
        for entry in entries:
            mobj = _CARD_REGEX.match(entry)
            if not mobj:
                continue

            card = int(mobj.group(1))
            driver = self.get_card_driver(card)
            if driver != DRIVER_NAME:
                self._log.debug("skipping card%d: driver is '%s', not '%s'",
                                card, driver, DRIVER_NAME)
                continue

            cards.append(card)

        return sorted(cards)

    def read_freq(self, card: int, fname: str) -> int:
        """
        Read a frequency control of a graphics card.

        Args:
            card: The graphics card number.
            fname: Name of the frequency control, for example "min_freq".

        Returns:
            The frequency in MHz.

        Raises:
            ErrorNotFound: If the control does not exist.
        """

        self._validate_fname(fname)

        path = SysfsPaths.i915_freq(card, fname, self._sysfs_base)
        mhz = self._pfs.read_int(path, what=f"card{card} {FREQS[fname]}")
        self._log.debug("i915 get %s card%d %d MHz", fname, card, mhz)
        return mhz

    def write_freq(self, card: int, fname: str, mhz: int):
        """
        Write a frequency control of a graphics card.

        Args:
            card: The graphics card number.
            fname: Name of the frequency control, one of "min_freq", "max_freq", or "boost_freq".
            mhz: The frequency to write, in MHz.

        Raises:
            ErrorNotFound: If the control does not exist.
        """

        self._validate_fname(fname, write=True)

        self._log.info("i915 set %s card%d %d MHz", fname, card, mhz)
        path = SysfsPaths.i915_freq(card, fname, self._sysfs_base)
        self._pfs.write_int(path, mhz, what=f"card{card} {FREQS[fname]}")

    def get_freq(self, card: int, fname: str) -> int | None:
        """Same as 'read_freq()', but return 'None' if the control does not exist."""
        return self._probe(self.read_freq, card, fname)

    def set_freq(self, card: int, fname: str, mhz: int) -> bool:
        """
        Same as 'write_freq()', but do nothing if the control does not exist.

        Returns:
            'True' if the frequency was written, 'False' if the control does not exist.
        """

        return self._probe_write(self.write_freq, card, fname, mhz)
