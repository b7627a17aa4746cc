#!/usr/bin/python3
#
# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""The standard python packaging script."""

import re
from setuptools import setup, find_namespace_packages

def get_version(filename):
    """Fetch the project version number."""

    with open(filename, "r", encoding="utf-8") as fobj:
        for line in fobj:
            matchobj = re.match(r'^_VERSION = "(\d+.\d+.\d+)"$', line)
            if matchobj:
                return matchobj.group(1)
    return None

setup(
    name="cpux",
    description="""CPU and Intel graphics card power and frequency configuration tool""",
    python_requires=">=3.8",
    version=get_version("cpuxtool/_Cpux.py"),
    scripts=["cpux"],
    packages=find_namespace_packages(include=["cpuxlibs", "cpuxlibs.*", "cpuxtool",
                                              "cpuxtool.*"]),
    long_description="""A tool for viewing and changing CPU online state, frequencies, governors,
                        energy hints, and Intel graphics card frequencies on Linux, locally or
                        over SSH.""",
    install_requires=["paramiko", "pyyaml", "colorama", "argcomplete"],
    extras_require={"test": ["pytest"]},
    classifiers=[
        "Intended Audience :: Developers",
        "Topic :: System :: Hardware",
        "Topic :: System :: Operating System Kernels :: Linux",
        "License :: OSI Approved :: BSD License",
        "Programming Language :: Python :: 3 :: Only",
        "Development Status :: 4 - Beta",
    ],
)
