# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Test the 'cpux' command-line tool against fake sysfs trees.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import shutil
import pytest
import yaml
from common import build_sysfs, read_file, run_cpux
from cpuxlibs import SysfsPaths
from cpuxlibs.helperlibs.Exceptions import Error, ErrorBadFormat
from cpuxtool import _Cpux, _CpuxInfo

def _get_output(cpux_log):
    """Return the 'INFO' level messages of 'cpux' joined into one string."""
    return "\n".join(rec.getMessage() for rec in cpux_log.records if rec.levelname == "INFO")

def test_info_default(sysfs_base, cpux_log):
    """Test the 'info' command without options: the governors and CPU tables are printed."""

    run_cpux("info", sysfs_base)

    output = _get_output(cpux_log)
    assert "Governor" in output
    assert "Online" in output
    assert output.index("Governor") < output.index("Online")
    assert "intel_pstate" not in output
    assert "card0" not in output
    assert "2.4 GHz" in output
    for cpu in range(4):
        assert f"cpu{cpu}" in output

def test_info_all(sysfs_base, cpux_log):
    """Test the 'info --all' command: all tables are printed in a fixed order."""

    run_cpux("info --all", sysfs_base)

    output = _get_output(cpux_log)
    assert "intel_pstate: active" in output
    assert "balance_performance" in output
    assert "card0" in output
    assert "card1" not in output
    assert "1.3 GHz" in output
    assert output.index("EP Pref") < output.index("Governor") < output.index("Online") < \
           output.index("card0")

def test_info_placeholders(sysfs_base, cpux_log):
    """Test that unavailable values are printed as placeholders."""

    SysfsPaths.cpu_online(1, sysfs_base).write_text("0\n", encoding="utf-8")
    shutil.rmtree(SysfsPaths.cpufreq_dir(2, sysfs_base))
    SysfsPaths.epb(3, sysfs_base).write_text("bad\n", encoding="utf-8")

    run_cpux("info --cpu --pstate --cpus 1-3", sysfs_base)

    lines = _get_output(cpux_log).splitlines()
    cpu1 = [line for line in lines if line.strip().startswith("cpu1") and "Hz" in line][0]
    assert cpu1.split()[1] == "no"
    cpu2 = [line for line in lines if line.strip().startswith("cpu2") and "yes" in line][0]
    assert "n/a" in cpu2
    cpu3 = [line for line in lines if line.strip().startswith("cpu3") and "power" in line][0]
    assert cpu3.split()[1] == "n/a"
    assert not [line for line in lines if line.strip().startswith("cpu0")]

def test_info_bad_encoding(sysfs_base, fsman):
    """Test that a control with contents that are not UTF-8 text is printed as a placeholder."""

    SysfsPaths.cpufreq_governor(1, sysfs_base).write_bytes(b"\xff\xfe\n")

    with _CpuxInfo.InfoCollector(fsman, sysfs_base) as coll:
        with pytest.raises(ErrorBadFormat):
            coll.cpufreq.read_governor(1)

        lines = _CpuxInfo.format_summary(coll, [0, 1, 2, 3], cpu=False).splitlines()

    cpu0 = [line for line in lines if line.strip().startswith("cpu0")][0]
    assert cpu0.split()[1] == "powersave"
    cpu1 = [line for line in lines if line.strip().startswith("cpu1")][0]
    assert cpu1.split()[1] == "n/a"

def test_info_no_gpu(tmp_path, cpux_log):
    """Test the 'info --gpu' command on a system without the graphics driver."""

    base = build_sysfs(tmp_path / "sys", gpu=False)
    run_cpux("info --gpu", base)
    assert "The 'i915' driver is not loaded" in _get_output(cpux_log)

def test_info_yaml(sysfs_base, capsys):
    """Test the 'info --yaml' command."""

    shutil.rmtree(SysfsPaths.cpufreq_dir(3, sysfs_base))

    run_cpux("info --yaml --all", sysfs_base)

    info = yaml.safe_load(capsys.readouterr().out)
    assert info["intel_pstate"]["status"] == "active"
    assert sorted(info["cpus"]) == [0, 1, 2, 3]
    assert info["cpus"][0]["online"] is True
    assert info["cpus"][0]["max_freq_khz"] == 4000000
    assert info["cpus"][0]["governors"] == ["performance", "powersave"]
    assert info["cpus"][1]["epb"] == 6
    assert info["cpus"][3]["governor"] is None
    assert info["cards"][0]["max_freq_mhz"] == 1300
    assert list(info["cards"]) == [0]

def test_info_bad_cpus(sysfs_base):
    """Test the 'info' command with bad CPU numbers."""

    run_cpux("info --cpus 9", sysfs_base, exp_exc=Error)
    run_cpux("info --cpus 1-", sysfs_base, exp_exc=ErrorBadFormat)

def test_config_cpus(tmp_path, fsman, cpux_log):
    """Test configuring CPU frequency and governor of an offline CPU."""

    base = build_sysfs(tmp_path / "sys", offline=[1])

    run_cpux("config --cpus 1 --max-freq 4.1GHz --min-freq 1200MHz --governor performance",
             base, fsman=fsman)

    assert read_file(SysfsPaths.cpufreq_max_freq(1, base)) == "4100000"
    assert read_file(SysfsPaths.cpufreq_min_freq(1, base)) == "1200000"
    assert read_file(SysfsPaths.cpufreq_governor(1, base)) == "performance"
    assert read_file(SysfsPaths.cpu_online(1, base)) == "0"
    assert fsman.writes[0] == (SysfsPaths.cpu_online(1, base), "1")
    assert fsman.writes[-1] == (SysfsPaths.cpu_online(1, base), "0")

    # The other CPUs are not touched.
    assert read_file(SysfsPaths.cpufreq_max_freq(2, base)) == "4000000\n"

    output = _get_output(cpux_log)
    assert "cpufreq set scaling_max_freq cpu1 4100000 kHz" in output
    assert "Governor" in output

def test_config_online(sysfs_base, fsman):
    """Test the '--online' and '--online-each' options."""

    run_cpux("config --cpus 2-3 --online off", sysfs_base, fsman=fsman)
    assert read_file(SysfsPaths.cpu_online(2, sysfs_base)) == "0"
    assert read_file(SysfsPaths.cpu_online(3, sysfs_base)) == "0"

    run_cpux("config --online-each 10-1", sysfs_base, fsman=fsman)
    assert read_file(SysfsPaths.cpu_online(1, sysfs_base)) == "0"
    assert read_file(SysfsPaths.cpu_online(2, sysfs_base)) == "0"
    assert read_file(SysfsPaths.cpu_online(3, sysfs_base)) == "1"

def test_config_energy(sysfs_base, cpux_log):
    """Test configuring the energy hints and the 'intel_pstate' mode."""

    run_cpux("config --cpus 0,2 --epb 3 --epp power --pstate-status passive", sysfs_base)

    assert read_file(SysfsPaths.epb(0, sysfs_base)) == "3"
    assert read_file(SysfsPaths.epb(2, sysfs_base)) == "3"
    assert read_file(SysfsPaths.epb(1, sysfs_base)) == "6\n"
    assert read_file(SysfsPaths.epp(2, sysfs_base)) == "power"
    assert read_file(SysfsPaths.intel_pstate_status(sysfs_base)) == "passive"
    assert "intel_pstate: passive" in _get_output(cpux_log)

def test_config_gpu(sysfs_base):
    """Test configuring graphics card frequencies."""

    run_cpux("config --gpu-max-freq 1.1GHz --gpu-min-freq 400", sysfs_base)
    assert read_file(SysfsPaths.i915_freq(0, "max_freq", sysfs_base)) == "1100"
    assert read_file(SysfsPaths.i915_freq(0, "min_freq", sysfs_base)) == "400"

    run_cpux("config --cards 0 --gpu-boost-freq 1200", sysfs_base)
    assert read_file(SysfsPaths.i915_freq(0, "boost_freq", sysfs_base)) == "1200"

    # Card 1 is not driven by 'i915'.
    run_cpux("config --cards 1 --gpu-boost-freq 1200", sysfs_base, exp_exc=Error)

def test_config_errors(tmp_path, sysfs_base, fsman):
    """Test bad 'config' command usage: nothing is written."""

    run_cpux("config", sysfs_base, fsman=fsman, exp_exc=Error)
    run_cpux("config --cpus 1", sysfs_base, fsman=fsman, exp_exc=Error)
    run_cpux("config --cards 0 --governor performance", sysfs_base, fsman=fsman, exp_exc=Error)
    run_cpux("config --epb 16", sysfs_base, fsman=fsman, exp_exc=ErrorBadFormat)
    run_cpux("config --epb high", sysfs_base, fsman=fsman, exp_exc=ErrorBadFormat)
    run_cpux("config --max-freq 4.1XHz", sysfs_base, fsman=fsman, exp_exc=ErrorBadFormat)
    run_cpux("config --online maybe", sysfs_base, fsman=fsman, exp_exc=ErrorBadFormat)
    run_cpux("config --online-each 1x", sysfs_base, fsman=fsman, exp_exc=ErrorBadFormat)
    run_cpux("config --pstate-status turbo", sysfs_base, fsman=fsman, exp_exc=ErrorBadFormat)
    run_cpux("config --cpus 7 --governor performance", sysfs_base, fsman=fsman, exp_exc=Error)
    assert not fsman.writes

    base = build_sysfs(tmp_path / "nogpu", gpu=False)
    run_cpux("config --gpu-max-freq 1000", base, fsman=fsman, exp_exc=Error)

    shutil.rmtree(SysfsPaths.intel_pstate_dir(base))
    run_cpux("config --pstate-status active", base, fsman=fsman, exp_exc=Error)
    assert not fsman.writes

def test_config_validated_first(sysfs_base, fsman):
    """Test that CPU and card numbers are validated before anything is written."""

    run_cpux("config --online-each 11111", sysfs_base, fsman=fsman, exp_exc=Error)
    run_cpux("config --online-each 1-1--0", sysfs_base, fsman=fsman, exp_exc=Error)
    run_cpux("config --pstate-status passive --cpus 9 --epb 3", sysfs_base, fsman=fsman,
             exp_exc=Error)
    run_cpux("config --pstate-status passive --cards 1 --gpu-max-freq 1000", sysfs_base,
             fsman=fsman, exp_exc=Error)
    assert not fsman.writes
    assert read_file(SysfsPaths.intel_pstate_status(sysfs_base)) == "active\n"

    # Trailing '-' elements do not refer to CPUs.
    run_cpux("config --online-each 1-0-----", sysfs_base, fsman=fsman)
    assert read_file(SysfsPaths.cpu_online(2, sysfs_base)) == "0"

def test_parser():
    """Test parsing global options and bad commands."""

    args = _Cpux.parse_arguments(["info", "--sysfs-base", "/tmp/sys"])
    assert args.sysfs_base == "/tmp/sys"
    assert args.hostname == "localhost"
    assert args.timeout is None

    args = _Cpux.parse_arguments(["config", "--epb", "0", "-H", "host1"])
    assert args.hostname == "host1"
    assert args.username == "root"
    assert args.timeout == 8

    args = _Cpux.parse_arguments(["-H", "host1", "-U", "admin", "info", "-T", "2.5"])
    assert args.username == "admin"
    assert args.timeout == 2.5

    args = _Cpux.parse_arguments(["info"])
    assert args.sysfs_base == "/sys"
    assert args.wait is None

    with pytest.raises(Error) as excinfo:
        _Cpux.parse_arguments(["infoo"])
    assert "info" in str(excinfo.value)

    with pytest.raises(Error):
        _Cpux.parse_arguments(["info", "--sysfs-base"])
    with pytest.raises(Error):
        _Cpux.parse_arguments(["info", "-U", "user"])

def test_main(sysfs_base, cpux_log):
    """Test the script entry point."""

    assert _Cpux.main(["--sysfs-base", str(sysfs_base), "info", "--freq"]) == 0
    assert "powersave" in _get_output(cpux_log)

    with pytest.raises(SystemExit) as excinfo:
        _Cpux.main(["--sysfs-base", str(sysfs_base), "info", "--cpus", "100"])
    assert excinfo.value.code == 1
