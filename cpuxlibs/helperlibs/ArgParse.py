# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
An 'argparse.ArgumentParser' extension with the standard options, "global" options that are
accepted after a sub-command, and errors raised as exceptions instead of exiting the program.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import typing
import difflib
import argparse
import argcomplete
from cpuxlibs.helperlibs import Trivial
from cpuxlibs.helperlibs.Exceptions import Error

if typing.TYPE_CHECKING:
    from typing import TypedDict, Iterable, Any, Sequence

    class ArgKwargsTypedDict(TypedDict, total=False):
        """
        The keyword arguments for the 'argparse.add_argument()' method.

        Attributes:
            dest: The 'argparse' attribute name to store the option value in.
            default: The default option value.
            metavar: The option value name in the help text.
            help: The option description.
        """

        dest: str
        default: str | int
        metavar: str
        help: str

    class ArgTypedDict(TypedDict, total=False):
        """
        A command line option definition.

        Attributes:
            short: The short option name, 'None' if there is no short name.
            long: The long option name.
            argcomplete: Name of the 'argcomplete' completer class for the option value.
            kwargs: The keyword arguments for 'argparse.add_argument()'.
        """

        short: str | None
        long: str
        argcomplete: str | None
        kwargs: ArgKwargsTypedDict

# The default SSH connection timeout in seconds.
SSH_TIMEOUT = 8

SSH_OPTIONS: list[ArgTypedDict] = [
    {
        "short" : "-H",
        "long" : "--host",
        "argcomplete" : None,
        "kwargs" : {
            "dest" : "hostname",
            "default" : "localhost",
            "help" : "Name or IP address of the host to read and change the controls on. The "
                     "host is accessed over SSH. The local host is used by default."
        },
    },
    {
        "short" : "-U",
        "long" : "--username",
        "argcomplete" : None,
        "kwargs" : {
            "dest" : "username",
            "default" : "",
            "help" : "Name of the user to log into the remote host as. Defaults to 'root'."
        },
    },
    {
        "short" : "-K",
        "long" : "--priv-key",
        "argcomplete" : "FilesCompleter",
        "kwargs" : {
            "dest" : "privkey",
            "default" : "",
            "help" : "Path to the private SSH key for logging into the remote host. By default, "
                     "the SSH agent and the keys in '$HOME/.ssh' are used."
        },
    },
    {
        "short" : "-T",
        "long" : "--timeout",
        "argcomplete" : None,
        "kwargs" : {
            "dest" : "timeout",
            "default" : "",
            "help" : f"SSH connection timeout in seconds. Defaults to {SSH_TIMEOUT}."
        },
    },
]

def add_options(parser: argparse.ArgumentParser, options: Iterable[ArgTypedDict]):
    """
    Add command line options to a parser.

    Args:
        parser: The parser to add the options to.
        options: The option definitions.
    """

    for opt in options:
        names = [name for name in (opt["short"], opt["long"]) if name]
        arg = parser.add_argument(*names, **opt["kwargs"])
        if opt["argcomplete"]:
            setattr(arg, "completer", getattr(argcomplete.completers, opt["argcomplete"]))

def normalize_ssh_args(args: argparse.Namespace):
    """
    Validate the SSH options in 'args' and fill in the defaults that depend on whether the host is
    remote: the user name and the connection timeout. For the local host, the timeout is 'None'.

    Args:
        args: The parsed command-line arguments, modified in place.

    Raises:
        Error: If an SSH option is used without a remote host.
    """

    hostname = getattr(args, "hostname", "localhost")

    if hostname == "localhost":
        for dest, optname in (("username", "--username"), ("privkey", "--priv-key"),
                              ("timeout", "--timeout")):
            if getattr(args, dest, None):
                raise Error(f"The '{optname}' option requires the '--host' option")
        args.username = ""
        args.privkey = ""
        args.timeout = None
        return

    if not getattr(args, "username", None):
        args.username = "root"
    if not getattr(args, "privkey", None):
        args.privkey = ""

    timeout = getattr(args, "timeout", None)
    if timeout:
        args.timeout = Trivial.str_to_num(timeout, what="--timeout option value")
    else:
        args.timeout = SSH_TIMEOUT

class _SubParsersAction(argparse._SubParsersAction): # pylint: disable=protected-access
    """
    The sub-commands action. Sub-command descriptions are often triple-quoted strings, squeeze
    the white-spaces in them.
    """

    def add_parser(self, name: str, **kwargs: Any) -> argparse.ArgumentParser:
        """Create and return a sub-command parser."""

        if "description" in kwargs:
            kwargs["description"] = " ".join(kwargs["description"].split())
        return super().add_parser(name, **kwargs)

class ArgsParser(argparse.ArgumentParser):
    """
    Enhance 'argparse.ArgumentParser'.
      - Add the '-h', '-q', '-d' and '--force-color' options, and '--version' if 'ver' is given.
      - Support "global" options, which are accepted both before and after the sub-command.
      - Raise 'Error' instead of exiting on bad arguments, suggest the closest sub-command name
        for a mistyped one.
    """

    def __init__(self, *args: Any, ver: str | None = None, **kwargs: Any):
        """
        Initialize a class instance.

        Args:
            *args: Positional arguments for 'argparse.ArgumentParser'.
            ver: The program version for the '--version' option. No '--version' if 'None'.
            **kwargs: Keyword arguments for 'argparse.ArgumentParser'.
        """

        kwargs["add_help"] = False
        super().__init__(*args, **kwargs)

        self.register("action", "parsers", _SubParsersAction)

        # The "global" option definitions.
        self._global_opts: list[ArgTypedDict] = []

        text = "Show this help message and exit."
        self.add_argument("-h", "--help", dest="help", action="help", help=text)

        text = "Be quiet, print only warnings and errors."
        self.add_argument("-q", "--quiet", dest="quiet", action="store_true", help=text)

        text = "Print debugging information."
        self.add_argument("-d", "--debug", dest="debug", action="store_true", help=text)

        text = "Colorize the output even if it does not go to a terminal."
        self.add_argument("--force-color", action="store_true", help=text)

        if ver:
            text = "Print the version number and exit."
            self.add_argument("--version", action="version", help=text, version=ver)

    def add_global_options(self, options: Iterable[ArgTypedDict]):
        """
        Add options which can be specified before and after the sub-command.

        Args:
            options: The option definitions.
        """

        options = list(options)
        add_options(self, options)
        self._global_opts += options

    def _take_global_options(self, args: argparse.Namespace, uargs: list[str]):
        """
        The sub-command parsers do not know about the global options, so global options that go
        after the sub-command end up in the unknown arguments list 'uargs'. Move them from 'uargs'
        to 'args'.
        """

        for opt in self._global_opts:
            for optname in (opt["short"], opt["long"]):
                if not optname or optname not in uargs:
                    continue

                idx = uargs.index(optname)
                if idx + 1 >= len(uargs) or uargs[idx + 1].startswith("-"):
                    self.error(f"argument {optname}: expected one argument")

                setattr(args, opt["kwargs"]["dest"], uargs[idx + 1])
                del uargs[idx:idx + 2]

    def parse_args(self, args: Sequence[str] | None = None, # type: ignore[override]
                   namespace: Any = None) -> argparse.Namespace:
        """
        Parse the command-line arguments.

        Args:
            args: The arguments to parse. Defaults to 'sys.argv[1:]'.
            namespace: The namespace object to store the results in.

        Returns:
            The parsed arguments.
        """

        _args, uargs = self.parse_known_args(args=args, namespace=namespace)

        if uargs:
            self._take_global_options(_args, uargs)
            if uargs:
                self.error(f"unrecognized arguments: {' '.join(uargs)}")

        if getattr(_args, "quiet", False) and getattr(_args, "debug", False):
            raise Error("The '-q' and '-d' options cannot be used together")

        return _args

    def error(self, message: str):
        """
        Raise an 'Error' exception with an improved message instead of exiting the program.

        Args:
            message: The original error message.
        """

        suggestion = None
        if "invalid choice: " in message and " (choose from " in message:
            offending, choices = message.split(" (choose from ", 1)
            offending = offending.split("invalid choice: ", 1)[1].strip("'")
            choices = [choice.strip(")' ") for choice in choices.split(",")]
            suggestions = difflib.get_close_matches(offending, choices, n=1)
            if suggestions:
                suggestion = suggestions[0]

        if suggestion:
            message = f"bad argument '{offending}', use '{self.prog} -h'.\n\nThe most " \
                      f"similar argument is\n  {suggestion}"
        else:
            message += "\nUse -h for help."

        raise Error(message)
