# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Tests for the 'Human' module.
"""

from  __future__ import annotations # Remove when switching to Python 3.10+.

from typing import TypedDict
import pytest
from cpuxlibs.helperlibs import Human
from cpuxlibs.helperlibs.Exceptions import ErrorBadFormat

class _ParseFreqTestDataType(TypedDict):
    """Type for the '_PARSE_FREQ_TEST_DATA' list."""
    hval: str | int | float
    unit: str
    result: int

_PARSE_FREQ_TEST_DATA: list[_ParseFreqTestDataType] = [
    {"hval": "4100000", "unit": "kHz", "result": 4100000},
    {"hval": 4100000, "unit": "kHz", "result": 4100000},
    {"hval": "4100000khz", "unit": "kHz", "result": 4100000},
    {"hval": "4100MHz", "unit": "kHz", "result": 4100000},
    {"hval": "4100 mhz", "unit": "kHz", "result": 4100000},
    {"hval": "4.1GHz", "unit": "kHz", "result": 4100000},
    {"hval": "4.1ghz", "unit": "kHz", "result": 4100000},
    {"hval": "800000000Hz", "unit": "kHz", "result": 800000},
    {"hval": "0", "unit": "kHz", "result": 0},
    {"hval": "1.5GHz", "unit": "MHz", "result": 1500},
    {"hval": "1300", "unit": "MHz", "result": 1300},
    {"hval": "300000kHz", "unit": "MHz", "result": 300},
]

_BAD_FREQS = ["", "abc", "GHz", "4.1 XHz", "-1", "-1GHz", "4.1GHzz", "1e999", "4..1GHz"]

_FORMAT_FREQ_TEST_DATA = [
    {"value": 800, "unit": "kHz", "result": "800 kHz"},
    {"value": 800000, "unit": "kHz", "result": "800.0 MHz"},
    {"value": 4100000, "unit": "kHz", "result": "4.1 GHz"},
    {"value": 0, "unit": "kHz", "result": "0 kHz"},
    {"value": 300, "unit": "MHz", "result": "300 MHz"},
    {"value": 1300, "unit": "MHz", "result": "1.3 GHz"},
]

def test_parse_freq():
    """Test 'parse_freq()' with good input."""

    for entry in _PARSE_FREQ_TEST_DATA:
        result = Human.parse_freq(entry["hval"], unit=entry["unit"])
        assert result == entry["result"], \
               f"Bad result of parse_freq({entry['hval']}, unit={entry['unit']}):\n" \
               f"expected '{entry['result']}', got '{result}'"

@pytest.mark.parametrize("hval", _BAD_FREQS)
def test_parse_freq_bad(hval):
    """Test 'parse_freq()' with bad input."""

    with pytest.raises(ErrorBadFormat):
        Human.parse_freq(hval, unit="kHz", what="maximum CPU")

def test_format_freq():
    """Test 'format_freq()'."""

    for entry in _FORMAT_FREQ_TEST_DATA:
        result = Human.format_freq(entry["value"], unit=entry["unit"])
        assert result == entry["result"], \
               f"Bad result of format_freq({entry['value']}, unit={entry['unit']}):\n" \
               f"expected '{entry['result']}', got '{result}'"

    assert Human.format_freq(4100000, unit="kHz", decp=2, sep="") == "4.10GHz"
