# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Tests for the 'Availability' module: the "absent" versus "failed" decision.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import pytest
from common import write_file
from cpuxlibs import Availability
from cpuxlibs.helperlibs.Exceptions import Error, ErrorIO, ErrorNotFound, ErrorPermissionDenied
from cpuxlibs.helperlibs.Exceptions import ErrorBadFormat

def _raiser(exc):
    """Return a function which raises 'exc'."""

    def _func(*_, **__):
        raise exc

    return _func

def test_is_absent(tmp_path, fsman):
    """Test the classification of exceptions into "absent" and "real error"."""

    existing = tmp_path / "existing"
    write_file(existing, "1\n")
    missing = tmp_path / "missing"

    assert Availability.is_absent(fsman, ErrorNotFound("not found", path=missing))
    assert Availability.is_absent(fsman, ErrorNotFound("not found"))
    assert Availability.is_absent(fsman, ErrorPermissionDenied("denied", path=missing))

    assert not Availability.is_absent(fsman, ErrorPermissionDenied("denied", path=existing))
    assert not Availability.is_absent(fsman, ErrorPermissionDenied("denied"))
    assert not Availability.is_absent(fsman, ErrorBadFormat("bad", path=existing))
    assert not Availability.is_absent(fsman, ErrorIO("I/O error", path=existing))
    assert not Availability.is_absent(fsman, Error("error"))

def test_probe(tmp_path, fsman):
    """Test 'probe()'."""

    existing = tmp_path / "existing"
    write_file(existing, "1\n")
    missing = tmp_path / "missing"

    assert Availability.probe(fsman, lambda val: val * 2, 21) == 42
    assert Availability.probe(fsman, lambda: 0) == 0
    assert Availability.probe(fsman, _raiser(ErrorNotFound("absent", path=missing))) is None
    assert Availability.probe(fsman, _raiser(ErrorPermissionDenied("denied", path=missing))) \
           is None

    with pytest.raises(ErrorPermissionDenied):
        Availability.probe(fsman, _raiser(ErrorPermissionDenied("denied", path=existing)))
    with pytest.raises(ErrorBadFormat):
        Availability.probe(fsman, _raiser(ErrorBadFormat("bad", path=existing)))
    with pytest.raises(ErrorIO):
        Availability.probe(fsman, _raiser(ErrorIO("I/O error", path=existing)))

def test_or_default(tmp_path, fsman):
    """Test 'or_default()'."""

    existing = tmp_path / "existing"
    write_file(existing, "0\n")
    missing = tmp_path / "missing"

    assert Availability.or_default(fsman, lambda: False, True) is False
    assert Availability.or_default(fsman, _raiser(ErrorNotFound("absent", path=missing)), True)
    assert Availability.or_default(fsman, _raiser(ErrorPermissionDenied("x", path=missing)), True)

    with pytest.raises(ErrorPermissionDenied):
        Availability.or_default(fsman, _raiser(ErrorPermissionDenied("x", path=existing)), True)
    with pytest.raises(ErrorBadFormat):
        Availability.or_default(fsman, _raiser(ErrorBadFormat("bad", path=existing)), True)

def test_probe_write(tmp_path, fsman):
    """Test 'probe_write()'."""

    written = []
    missing = tmp_path / "missing"

    assert Availability.probe_write(fsman, written.append, 5) is True
    assert written == [5]
    assert Availability.probe_write(fsman, _raiser(ErrorNotFound("absent", path=missing))) is False

    with pytest.raises(ErrorIO):
        Availability.probe_write(fsman, _raiser(ErrorIO("I/O error", path=missing)))

def test_check(tmp_path, fsman):
    """Test that 'check()' returns the tri-state result and does not raise."""

    existing = tmp_path / "existing"
    write_file(existing, "1\n")
    missing = tmp_path / "missing"

    assert Availability.check(fsman, lambda: "powersave") == Availability.Present("powersave")

    res = Availability.check(fsman, _raiser(ErrorNotFound("absent", path=missing)))
    assert isinstance(res, Availability.Absent)
    assert res.path == missing

    err = ErrorPermissionDenied("denied", path=existing)
    res = Availability.check(fsman, _raiser(err))
    assert isinstance(res, Availability.Failed)
    assert res.error is err

    res = Availability.check(fsman, _raiser(ErrorBadFormat("bad", path=existing)))
    assert isinstance(res, Availability.Failed)

def test_non_project_exceptions(fsman):
    """Test that exceptions not derived from 'Error' are propagated as is."""

    with pytest.raises(ZeroDivisionError):
        Availability.probe(fsman, lambda: 1 / 0)
    with pytest.raises(ZeroDivisionError):
        Availability.check(fsman, lambda: 1 / 0)
