#!/usr/bin/env python3
#
# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
The main entry point for the 'cpux' tool when it is run as a zipapp archive or a directory.
"""

import sys
from cpuxtool._Cpux import main

if __name__ == "__main__":
    sys.exit(main())
