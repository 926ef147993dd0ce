"""Startup validation"""

import os
import stat
from typing import Optional

from keepmounted.exceptions import (
    MissingOptionException, PrivilegeException, TargetPathException
)


def require_option(value: Optional[str], description: str) -> str:
    """Return value, or raise if it is missing or empty"""
    if value is None or value == '':
        raise MissingOptionException(description)
    return value


def require_file_name(value: Optional[str], description: str) -> str:
    """Return value if it names a single entry inside a directory"""
    name = require_option(value, f"{description} file name must not be empty")
    if os.path.basename(name) != name or name in ('.', '..') or \
            (os.altsep and os.altsep in name):
        raise MissingOptionException(f"{description} must be a plain file name, got {name!r}")
    return name


def ensure_root():
    """Raise unless the effective user is root"""
    try:
        euid = os.geteuid()
    except AttributeError as e:
        raise PrivilegeException(f"unable to lookup current user: {e}")

    if euid != 0:
        raise PrivilegeException("keepmounted can only be executed as root!")


def ensure_target_directory(path: str):
    """
    Check that the target exists and is a directory.

    Raises:
        TargetPathException if the path is missing, unreadable or not a dir
    """
    try:
        st = os.stat(path)
    except FileNotFoundError:
        raise TargetPathException(f"error, expected target path to exist: {path}")
    except OSError as e:
        raise TargetPathException(f"error, failed to read target path: {e}")

    if not stat.S_ISDIR(st.st_mode):
        raise TargetPathException(f"error, target path is not a dir: {path}")


def parse_seconds(value, description: str, minimum: int = 0) -> int:
    """Parse a whole number of seconds"""
    try:
        seconds = int(value)
    except (TypeError, ValueError):
        raise MissingOptionException(f"{description} must be a whole number of seconds, got {value!r}")

    if seconds < minimum:
        raise MissingOptionException(f"{description} must be >= {minimum}, got {seconds}")
    return seconds
