"""Hierarchical resolution of the data, reference and output directories."""
from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Union

from harness.core.errors import ApplicationPathNotSet, DirectoryNotConfigured, UnknownContextVariable
from harness.utils.environment import (
    GENERIC_POSIX_FAMILY,
    current_platform_family,
    expand_variables,
    is_posix_family,
)

DEFAULT_ID = "(default)"
DATA = "data"
REFERENCE = "reference"
OUTPUT = "output"
ROLES = (DATA, REFERENCE, OUTPUT)

PathLike = Union[str, Path]

_CONTEXT_VARIABLE_PATTERN = re.compile(r"\$\{(context\.[^}]+)\}")


class PathResolution(Enum):
    NONE = "none"
    PLATFORM = "platform"


class TestContext:
    """Directories used by a test, inherited from the enclosing context.

    A local mapping is appended to the directory resolved by the parent, a
    missing one falls through to the parent unchanged.
    """

    __test__ = False

    def __init__(self, parent: Optional["TestContext"] = None) -> None:
        self._parent = parent
        self._directories: Dict[str, Dict[str, Path]] = {role: {} for role in ROLES}
        self._application_path: Optional[Path] = None

    @classmethod
    def create_default(cls) -> "TestContext":
        """Return a root context where every role defaults to the empty path."""
        context = cls()
        for role in ROLES:
            context._directories[role][DEFAULT_ID] = Path("")
        return context

    @property
    def parent(self) -> Optional["TestContext"]:
        return self._parent

    def attach(self, parent: Optional["TestContext"]) -> None:
        ancestor = parent
        while ancestor is not None:
            if ancestor is self:
                raise ValueError("A context cannot be attached to itself or to one of its descendants")
            ancestor = ancestor.parent
        self._parent = parent

    def get_directory(self, role: str, id: str = DEFAULT_ID) -> Path:
        local = self._mappings(role).get(id)
        if self._parent is not None:
            inherited = self._parent.get_directory(role, id)
            return inherited if local is None else inherited / local
        if local is None:
            raise DirectoryNotConfigured(role, id)
        return local

    def set_directory(self, role: str, path: PathLike, id: str = DEFAULT_ID) -> None:
        self._mappings(role)[id] = Path(expand_variables(str(path)))

    def get_path(self, role: str, path: PathLike, id: str = DEFAULT_ID) -> Path:
        return self.get_directory(role, id) / path

    def _mappings(self, role: str) -> Dict[str, Path]:
        try:
            return self._directories[role]
        except KeyError:
            raise ValueError(f"Unknown context role: {role}") from None

    def get_data_directory(self, id: str = DEFAULT_ID) -> Path:
        return self.get_directory(DATA, id)

    def set_data_directory(self, path: PathLike, id: str = DEFAULT_ID) -> None:
        self.set_directory(DATA, path, id)

    def get_data_path(self, path: PathLike, id: str = DEFAULT_ID) -> Path:
        return self.get_path(DATA, path, id)

    def get_output_directory(self, id: str = DEFAULT_ID) -> Path:
        return self.get_directory(OUTPUT, id)

    def set_output_directory(self, path: PathLike, id: str = DEFAULT_ID) -> None:
        self.set_directory(OUTPUT, path, id)

    def get_output_path(self, path: PathLike, id: str = DEFAULT_ID) -> Path:
        return self.get_path(OUTPUT, path, id)

    def get_reference_directory(self, id: str = DEFAULT_ID) -> Path:
        return self.get_directory(REFERENCE, id)

    def set_reference_directory(self, path: PathLike, id: str = DEFAULT_ID) -> None:
        self.set_directory(REFERENCE, path, id)

    def get_reference_path(
        self,
        path: PathLike,
        resolution: PathResolution = PathResolution.NONE,
        id: str = DEFAULT_ID,
        platform_family: Optional[str] = None,
    ) -> Path:
        """Locate a reference file, preferring a platform specific variant.

        With ``PathResolution.PLATFORM`` the candidates for ``foo.expected``
        on linux are ``foo.linux.expected``, ``foo.unix.expected`` and
        finally ``foo.expected``.
        """
        directory = self.get_reference_directory(id)
        path = Path(path)
        if resolution is PathResolution.NONE:
            return directory / path

        family = platform_family or current_platform_family()
        candidate = directory / _qualify(path, family)
        if candidate.exists():
            return candidate
        if is_posix_family(family):
            candidate = directory / _qualify(path, GENERIC_POSIX_FAMILY)
            if candidate.exists():
                return candidate
        return directory / path

    def get_application_path(self) -> Path:
        if self._application_path is not None:
            return self._application_path
        if self._parent is not None:
            return self._parent.get_application_path()
        raise ApplicationPathNotSet()

    def set_application_path(self, path: PathLike) -> None:
        self._application_path = Path(path)

    def expand(self, variable: str) -> str:
        if variable == "context.data":
            return str(self.get_data_directory())
        if variable == "context.output":
            return str(self.get_output_directory())
        if variable == "context.reference":
            return str(self.get_reference_directory())
        raise UnknownContextVariable(variable)

    def substitute(self, template: str) -> str:
        """Replace the ``${context.*}`` variables found in *template*."""
        return _CONTEXT_VARIABLE_PATTERN.sub(lambda match: self.expand(match.group(1)), template)


def _qualify(path: Path, qualifier: str) -> Path:
    return path.with_name(f"{path.stem}.{qualifier}{path.suffix}")
