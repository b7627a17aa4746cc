# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Access sysfs files of a remote host over SFTP. Implements the 'FSManagerBase' API.

SECURITY NOTICE: this module and any part of it should only be used for debugging and development
purposes. No security audit had been done. Not for production use.
"""

from  __future__ import annotations # Remove when switching to Python 3.10+.

import os
import stat
import errno
import getpass
import logging
from pathlib import Path
import paramiko
from cpuxlibs.helperlibs import Logging, _FSManagerBase, ClassHelpers
from cpuxlibs.helperlibs.Exceptions import Error, ErrorConnect

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.cpux.{__name__}")

# Paramiko is a bit too noisy, lower its log level.
logging.getLogger("paramiko").setLevel(logging.WARNING)

# The SSH configuration files to look up the private key in.
_SSH_CONFIG_FILES = ("/etc/ssh/ssh_config", "~/.ssh/config")

class SSHFSManager(_FSManagerBase.FSManagerBase):
    """
    Access files of a remote host over SFTP. One SSH connection and one SFTP session are used for
    all the operations.
    """

    def __init__(self,
                 hostname: str,
                 port: int | None = None,
                 username: str = "",
                 privkeypath: str | Path | None = None,
                 timeout: int | float | None = None):
        """
        Initialize a class instance and connect to the remote host.

        Args:
            hostname: Name or IP address of the host to connect to.
            port: The SSH port. Defaults to 22.
            username: The user name to log in as. Defaults to the current user name.
            privkeypath: Path to the private SSH key. By default, the key is looked up in the SSH
                         configuration files, and the SSH agent and the standard key paths are
                         tried.
            timeout: The connection timeout in seconds. Defaults to 60.

        Raises:
            ErrorConnect: If the connection could not be established.
        """

        super().__init__()

        self.is_remote = True
        self.hostname = hostname
        self.hostmsg = f" on host '{hostname}'"

        self.port = port if port else 22
        self.username = username if username else os.getenv("USER") or getpass.getuser()
        self.timeout = float(timeout) if timeout else 60.0

        self.privkeypath: str | None
        if privkeypath:
            self.privkeypath = str(privkeypath)
        else:
            self.privkeypath = self._lookup_privkey(hostname, self.username)
        if self.privkeypath:
            self._check_privkey(self.privkeypath)

        self._sftp: paramiko.SFTPClient | None = None
        self.ssh = self._connect()

    def _connect(self) -> paramiko.SSHClient:
        """Establish the SSH connection and return the SSH client object."""

        _LOG.debug("connecting to %s:%d as '%s', timeout %s seconds, private key '%s'",
                   self.hostname, self.port, self.username, self.timeout, self.privkeypath)

        ssh = paramiko.SSHClient()
        ssh.set_missing_host_key_policy(paramiko.AutoAddPolicy())

        try:
            ssh.connect(hostname=self.hostname, port=self.port, username=self.username,
                        key_filename=self.privkeypath, timeout=self.timeout, allow_agent=True,
                        look_for_keys=True)
        except paramiko.AuthenticationException as err:
            ssh.close()
            errmsg = Error(str(err)).indent(2)
            raise ErrorConnect(f"SSH authentication as '{self.username}' failed:\n{errmsg}",
                               host=self.hostname) from err
        except (OSError, paramiko.SSHException) as err:
            ssh.close()
            errmsg = Error(str(err)).indent(2)
            raise ErrorConnect(f"SSH connection failed, timeout {self.timeout} seconds:\n"
                               f"{errmsg}", host=self.hostname) from err

        return ssh

    def close(self):
        """Close the SFTP session and the SSH connection."""

        _LOG.debug("closing SSH connection to %s:%d", self.hostname, self.port)
        ClassHelpers.close(self, close_attrs=("_sftp", "ssh"))

        super().close()

    @staticmethod
    def _lookup_privkey(hostname: str, username: str) -> str | None:
        """
        Look up the private SSH key for user 'username' on host 'hostname' in the SSH configuration
        files. Return the key path or 'None' if it was not found.
        """

        for cfgfile in _SSH_CONFIG_FILES:
            cfgfile = os.path.expanduser(cfgfile)
            if not os.path.exists(cfgfile):
                continue

            try:
                config = paramiko.SSHConfig.from_path(cfgfile)
            except (OSError, paramiko.ConfigParseError) as err:
                _LOG.debug("skipping bad SSH config file '%s':\n%s",
                           cfgfile, Error(str(err)).indent(2))
                continue

            cfg = config.lookup(hostname)
            if "identityfile" in cfg and cfg.get("user", username) == username:
                return cfg["identityfile"][0]

        return None

    @staticmethod
    def _check_privkey(privkeypath: str):
        """Verify that private SSH key 'privkeypath' is a regular file not accessible by others."""

        try:
            mode = os.stat(privkeypath).st_mode
        except OSError as err:
            errmsg = Error(str(err)).indent(2)
            raise Error(f"bad private SSH key '{privkeypath}':\n{errmsg}") from None

        if not stat.S_ISREG(mode):
            raise Error(f"bad private SSH key '{privkeypath}': not a regular file")

        if mode & stat.S_IRWXO:
            raise Error(f"bad private SSH key '{privkeypath}': permissions are too wide, make sure "
                        f"it is not accessible by others")

    def _get_sftp(self) -> paramiko.SFTPClient:
        """Return the SFTP client object, open the SFTP session on the first call."""

        if not self._sftp:
            try:
                self._sftp = self.ssh.open_sftp()
            except (OSError, paramiko.SSHException) as err:
                errmsg = Error(str(err)).indent(2)
                raise Error(f"failed to open SFTP session{self.hostmsg}:\n{errmsg}") from err

        return self._sftp

    def read(self, path: str | Path) -> str:
        """Refer to 'FSManagerBase.read()'."""

        with self._get_sftp().open(str(path), "r") as fobj:
            data = fobj.read()

        return data.decode("utf-8")

    def write(self, path: str | Path, data: str):
        """Refer to 'FSManagerBase.write()'."""

        # Open for update rather than for writing to avoid creating missing files.
        with self._get_sftp().open(str(path), "r+") as fobj:
            fobj.write(data.encode("utf-8"))

    def listdir(self, path: str | Path) -> list[str]:
        """Refer to 'FSManagerBase.listdir()'."""
        return sorted(self._get_sftp().listdir(str(path)))

    def readlink(self, path: str | Path) -> Path:
        """Refer to 'FSManagerBase.readlink()'."""

        target = self._get_sftp().readlink(str(path))
        if target is None:
            raise OSError(errno.EINVAL, f"'{path}' is not a symbolic link{self.hostmsg}", str(path))
        return Path(target)

    def _stat(self, path: str | Path) -> paramiko.SFTPAttributes | None:
        """Return SFTP attributes of 'path' or 'None' if it does not exist."""

        try:
            return self._get_sftp().stat(str(path))
        except FileNotFoundError:
            return None
        except OSError as err:
            if err.errno == errno.ENOENT:
                return None
            msg = Error(str(err)).indent(2)
            raise Error(f"Failed to stat '{path}'{self.hostmsg}:\n{msg}") from None

    def exists(self, path: str | Path) -> bool:
        """Refer to 'FSManagerBase.exists()'."""
        return self._stat(path) is not None

    def is_dir(self, path: str | Path) -> bool:
        """Refer to 'FSManagerBase.is_dir()'."""

        attrs = self._stat(path)
        if attrs is None or attrs.st_mode is None:
            return False
        return stat.S_ISDIR(attrs.st_mode)
