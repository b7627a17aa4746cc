# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""Common fixtures for cpux tests."""

from __future__ import annotations # Remove when switching to Python 3.10+.

import logging
import pytest
from common import build_sysfs, FaultyFSManager
from cpuxlibs.helperlibs import Logging

@pytest.fixture(name="sysfs_base")
def fixture_sysfs_base(tmp_path):
    """Build a fake sysfs tree with 4 CPUs and graphics cards, and return its path."""
    return build_sysfs(tmp_path / "sys")

@pytest.fixture(name="fsman")
def fixture_fsman():
    """Yield a file-system manager which records writes and injects failures."""

    with FaultyFSManager() as fsman:
        yield fsman

@pytest.fixture(name="cpux_log")
def fixture_cpux_log(caplog):
    """Capture 'INFO' and higher level messages of the 'cpux' loggers."""

    caplog.set_level(logging.INFO, logger=f"{Logging.MAIN_LOGGER_NAME}.cpux")
    return caplog
