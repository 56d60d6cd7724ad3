"""Process environment helpers: variable expansion and platform detection."""
from __future__ import annotations

import os
import re
import sys
from typing import Mapping, Optional

# Matches ${name} and $name
_VARIABLE_PATTERN = re.compile(r"\$(?:\{(?P<braced>[^}]*)\}|(?P<plain>[A-Za-z_][A-Za-z0-9_]*))")

POSIX_FAMILIES = frozenset({"linux", "cygwin", "macos", "freebsd"})
GENERIC_POSIX_FAMILY = "unix"


def expand_variables(template: str, environment: Optional[Mapping[str, str]] = None) -> str:
    """Replace ``${name}`` and ``$name`` tokens with values from *environment*.

    Tokens without a value are left untouched.
    """
    values = os.environ if environment is None else environment

    def _replace(match: re.Match) -> str:
        name = match.group("braced")
        if name is None:
            name = match.group("plain")
        value = values.get(name)
        return match.group(0) if value is None else value

    return _VARIABLE_PATTERN.sub(_replace, template)


def current_platform_family() -> str:
    platform = sys.platform
    if platform.startswith("win"):
        return "windows"
    if platform.startswith("cygwin"):
        return "cygwin"
    if platform.startswith("linux"):
        return "linux"
    if platform == "darwin":
        return "macos"
    if platform.startswith("freebsd"):
        return "freebsd"
    return platform


def is_posix_family(family: str) -> bool:
    return family in POSIX_FAMILIES
