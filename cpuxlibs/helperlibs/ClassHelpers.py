# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Helpers for classes which own other closable objects.
"""

from  __future__ import annotations # Remove when switching to Python 3.10+.

from typing import Any, Iterable
from cpuxlibs.helperlibs import Logging

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.cpux.{__name__}")

class SimpleCloseContext:
    """
    A base class for objects that have to be closed. Makes the object a context manager which calls
    'close()' on exit.
    """

    def close(self):
        """Uninitialize the class object. Supposed to be implemented by the subclass."""

    def __enter__(self):
        """Enter the runtime context."""
        return self

    def __exit__(self, *_: Any):
        """Exit the runtime context and close the object."""
        self.close()

def close(obj: Any, close_attrs: Iterable[str] = ()):
    """
    Close the objects that attributes of object 'obj' refer to, and set the attributes to 'None'.

    An object passed to the constructor by the caller belongs to the caller and must not be closed.
    Such objects are marked with a 'False' value of the '_close_<name>' attribute, where '<name>'
    is the attribute name without the leading underscore. For example, the '_fsman' attribute is
    not closed if 'obj._close_fsman' is 'False'.

    Args:
        obj: The object to close the attributes of.
        close_attrs: Names of the attributes to close.
    """

    for attr in close_attrs:
        if not hasattr(obj, attr):
            _LOG.warning("cannot close non-existing attribute '%s' of '%s'", attr, obj)
            continue

        val = getattr(obj, attr)
        if val is None:
            continue

        if getattr(obj, f"_close_{attr.lstrip('_')}", True):
            if hasattr(val, "close"):
                val.close()
            else:
                _LOG.debug("cannot close attribute '%s' of '%s': no 'close()' method", attr, obj)

        setattr(obj, attr, None)
