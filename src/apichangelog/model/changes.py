"""Change records produced by the differ and the checksum comparer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from apichangelog.model.elements import ApiElement


class ChangeType(str, Enum):
    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"


class Severity(str, Enum):
    """SemVer impact of a change. Ordered: PATCH < MINOR < MAJOR."""

    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {Severity.PATCH: 0, Severity.MINOR: 1, Severity.MAJOR: 2}


@dataclass(frozen=True, slots=True)
class Change:
    """One typed, severity-tagged API change.

    ``element`` is the new-state element for MODIFIED and the sole element
    for ADDED/REMOVED. ``old_element`` is set only for MODIFIED.
    """

    change_type: ChangeType
    severity: Severity
    element: ApiElement
    old_element: ApiElement | None = None
    description: str = ""

    @property
    def fqn(self) -> str:
        return self.element.fqn

    @property
    def is_internal(self) -> bool:
        """True if either side of the change is marked ``@internal``."""
        if self.element.is_internal:
            return True
        return self.old_element is not None and self.old_element.is_internal


@dataclass(frozen=True, slots=True)
class FileChange:
    """A source file whose checksum changed without producing an API change."""

    relative_path: str
    old_checksum: str
    new_checksum: str
