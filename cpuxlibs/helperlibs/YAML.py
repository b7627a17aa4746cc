# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Dump data in YAML format.
"""

from  __future__ import annotations # Remove when switching to Python 3.10+.

from pathlib import PurePath
from typing import Any, IO
import yaml
from cpuxlibs.helperlibs import Logging
from cpuxlibs.helperlibs.Exceptions import Error

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.cpux.{__name__}")

class _Dumper(yaml.SafeDumper):
    """
    A safe YAML dumper which writes 'None' as an empty value and paths as strings, and never uses
    anchors and aliases for repeated objects.
    """

    def ignore_aliases(self, data: Any) -> bool:
        """Do not use aliases, repeated lists like available governors are written in full."""
        return True

def _represent_none(dumper: _Dumper, _: None) -> yaml.ScalarNode:
    """Represent 'None' as an empty value."""
    return dumper.represent_scalar("tag:yaml.org,2002:null", "")

def _represent_path(dumper: _Dumper, path: PurePath) -> yaml.ScalarNode:
    """Represent a path as a string."""
    return dumper.represent_str(str(path))

_Dumper.add_representer(type(None), _represent_none)
_Dumper.add_multi_representer(PurePath, _represent_path)

def dump(data: dict[Any, Any], dst: str | PurePath | IO[str]):
    """
    Dump dictionary 'data' in YAML format. The keys order is preserved.

    Args:
        data: The dictionary to dump.
        dst: The file object or path of the file to dump to.

    Raises:
        Error: If the file could not be written.
    """

    kwargs = {"Dumper": _Dumper, "default_flow_style": False, "sort_keys": False}

    if hasattr(dst, "write"):
        yaml.dump(data, dst, **kwargs)
        return

    try:
        with open(dst, "w", encoding="utf-8") as fobj:
            yaml.dump(data, fobj, **kwargs)
    except OSError as err:
        errmsg = Error(str(err)).indent(2)
        raise Error(f"failed to write YAML file '{dst}':\n{errmsg}") from err

    _LOG.debug("wrote YAML file '%s'", dst)
