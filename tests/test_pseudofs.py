# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Tests for the 'PseudoFS' module: value encodings and I/O error classification.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import errno
import pytest
from common import write_file, read_file
from cpuxlibs import PseudoFS
from cpuxlibs.helperlibs.Exceptions import ErrorIO, ErrorNotFound, ErrorPermissionDenied
from cpuxlibs.helperlibs.Exceptions import ErrorBadFormat

@pytest.fixture(name="pfs")
def fixture_pfs(fsman):
    """Yield a 'PseudoFS' object using the fault-injecting file-system manager."""

    with PseudoFS.PseudoFS(fsman=fsman) as pfs:
        yield pfs

@pytest.mark.parametrize("data, value", [("1\n", True), ("0\n", False), ("1", True)])
def test_read_bool(tmp_path, pfs, data, value):
    """Test reading good boolean values."""

    path = tmp_path / "flag"
    write_file(path, data)
    assert pfs.read_bool(path) is value

@pytest.mark.parametrize("data", ["2\n", "", "1\n\n", " 1", "true\n"])
def test_read_bool_bad(tmp_path, pfs, data):
    """Test that only "0" and "1" are accepted as boolean values."""

    path = tmp_path / "flag"
    write_file(path, data)
    with pytest.raises(ErrorBadFormat):
        pfs.read_bool(path)

@pytest.mark.parametrize("data, value", [("4100000\n", 4100000), ("0", 0),
                                         (f"{2**64 - 1}\n", 2**64 - 1)])
def test_read_int(tmp_path, pfs, data, value):
    """Test reading good unsigned integer values."""

    path = tmp_path / "freq"
    write_file(path, data)
    assert pfs.read_int(path) == value

@pytest.mark.parametrize("data", ["-1\n", " 5\n", "5 \n", "5\n\n", "0x10\n", "4.1\n", "\n",
                                  f"{2**64}"])
def test_read_int_bad(tmp_path, pfs, data):
    """Test that malformed integers result in 'ErrorBadFormat', not in an I/O error."""

    path = tmp_path / "freq"
    write_file(path, data)
    with pytest.raises(ErrorBadFormat) as excinfo:
        pfs.read_int(path)
    assert excinfo.value.path == path

def test_read_str(tmp_path, pfs):
    """Test that reading strips exactly one trailing newline and nothing else."""

    path = tmp_path / "governor"
    write_file(path, "powersave\n")
    assert pfs.read_str(path) == "powersave"

    write_file(path, " power save \n\n")
    assert pfs.read_str(path) == " power save \n"

@pytest.mark.parametrize("method", ["read_str", "read_int", "read_bool", "read_str_list"])
def test_read_bad_encoding(tmp_path, pfs, method):
    """Test that contents which are not UTF-8 text result in 'ErrorBadFormat'."""

    path = tmp_path / "governor"
    path.write_bytes(b"\xff\xfe\n")
    with pytest.raises(ErrorBadFormat) as excinfo:
        getattr(pfs, method)(path)
    assert excinfo.value.path == path

@pytest.mark.parametrize("data, value", [("performance powersave\n", ["performance", "powersave"]),
                                         ("a  b\tc \n", ["a", "b", "c"]),
                                         ("\n", []),
                                         ("", [])])
def test_read_str_list(tmp_path, pfs, data, value):
    """Test reading string lists."""

    path = tmp_path / "governors"
    write_file(path, data)
    assert pfs.read_str_list(path) == value

def test_write_good(tmp_path, pfs, fsman):
    """Test the encoding of written values."""

    path = tmp_path / "file"
    write_file(path, "")

    pfs.write_bool(path, True)
    assert read_file(path) == "1"
    pfs.write_bool(path, False)
    assert read_file(path) == "0"

    pfs.write_int(path, 4100000)
    assert read_file(path) == "4100000"

    pfs.write_str(path, "balance_power")
    assert read_file(path) == "balance_power"

    pfs.write_str_list(path, ["performance", "powersave"])
    assert read_file(path) == "performance powersave"

    assert [data for _, data in fsman.writes] == ["1", "0", "4100000", "balance_power",
                                                  "performance powersave"]

@pytest.mark.parametrize("method, value", [("write_bool", 1),
                                           ("write_bool", "1"),
                                           ("write_int", -1),
                                           ("write_int", True),
                                           ("write_int", 2**64),
                                           ("write_int", "5"),
                                           ("write_str", 5),
                                           ("write_str_list", ["a b"]),
                                           ("write_str_list", [""]),
                                           ("write_str_list", ["a", "b\n"])])
def test_write_bad(tmp_path, pfs, fsman, method, value):
    """Test that bad values are rejected before anything is written."""

    path = tmp_path / "file"
    write_file(path, "")

    with pytest.raises(ErrorBadFormat):
        getattr(pfs, method)(path, value)
    assert not fsman.writes

def test_not_found(tmp_path, pfs):
    """Test that operations on non-existing files result in 'ErrorNotFound' with the path."""

    path = tmp_path / "missing"

    with pytest.raises(ErrorNotFound) as excinfo:
        pfs.read_int(path)
    assert excinfo.value.path == path
    assert excinfo.value.errno == errno.ENOENT

    with pytest.raises(ErrorNotFound):
        pfs.write_int(path, 1)
    assert not path.exists()

    with pytest.raises(ErrorNotFound):
        pfs.listdir(tmp_path / "missing-dir")

    with pytest.raises(ErrorNotFound):
        pfs.readlink(path)

@pytest.mark.parametrize("err", [errno.ENXIO, errno.EBUSY])
def test_absent_errnos(tmp_path, fsman, err):
    """Test that the absence policy errno values are classified as 'ErrorNotFound'."""

    path = tmp_path / "file"
    write_file(path, "1\n")
    fsman.add_fault(path, err)
    fsman.add_fault(path, err, op="write")

    with PseudoFS.PseudoFS(fsman=fsman) as pfs:
        with pytest.raises(ErrorNotFound):
            pfs.read_bool(path)
        with pytest.raises(ErrorNotFound):
            pfs.write_bool(path, True)

    # With an empty absence policy the same errors are regular I/O errors.
    with PseudoFS.PseudoFS(fsman=fsman, absent_errnos=()) as pfs:
        with pytest.raises(ErrorIO) as excinfo:
            pfs.read_bool(path)
        assert type(excinfo.value) is ErrorIO # pylint: disable=unidiomatic-typecheck
        assert excinfo.value.errno == err

@pytest.mark.parametrize("err", [errno.EACCES, errno.EPERM])
def test_permission_denied(tmp_path, pfs, fsman, err):
    """Test the classification of permission errors."""

    path = tmp_path / "file"
    write_file(path, "1\n")
    fsman.add_fault(path, err, op="write")

    with pytest.raises(ErrorPermissionDenied) as excinfo:
        pfs.write_bool(path, False)
    assert excinfo.value.path == path
    assert read_file(path) == "1\n"

def test_other_io_error(tmp_path, pfs, fsman):
    """Test that other I/O errors are classified as plain 'ErrorIO'."""

    path = tmp_path / "file"
    write_file(path, "1\n")
    fsman.add_fault(path, errno.EIO)

    with pytest.raises(ErrorIO) as excinfo:
        pfs.read_bool(path)
    assert type(excinfo.value) is ErrorIO # pylint: disable=unidiomatic-typecheck
    assert excinfo.value.path == path
    assert excinfo.value.errno == errno.EIO

def test_no_caching(tmp_path, pfs):
    """Test that every read re-reads the file."""

    path = tmp_path / "freq"
    write_file(path, "100\n")
    assert pfs.read_int(path) == 100
    write_file(path, "200\n")
    assert pfs.read_int(path) == 200

def test_listdir_readlink(tmp_path, pfs):
    """Test listing directories and reading symbolic links."""

    write_file(tmp_path / "dir/b", "")
    write_file(tmp_path / "dir/a", "")
    (tmp_path / "link").symlink_to("dir/a")

    assert pfs.listdir(tmp_path / "dir") == ["a", "b"]
    assert str(pfs.readlink(tmp_path / "link")) == "dir/a"
    assert pfs.exists(tmp_path / "dir")
    assert not pfs.exists(tmp_path / "missing")
