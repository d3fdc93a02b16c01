"""API diff package: structural differ, severity rules, checksum comparer.

Public API re-exports for the diff subpackage.
"""

from apichangelog.diff.checksums import compare_checksums, files_with_api_changes
from apichangelog.diff.engine import diff_snapshots
from apichangelog.diff.severity import (
    callable_severity,
    callable_signature,
    class_severity,
    constant_severity,
    interface_severity,
    is_parameter_change_breaking,
    is_return_type_change_breaking,
    removal_severity,
)

__all__ = [
    "callable_severity",
    "callable_signature",
    "class_severity",
    "compare_checksums",
    "constant_severity",
    "diff_snapshots",
    "files_with_api_changes",
    "interface_severity",
    "is_parameter_change_breaking",
    "is_return_type_change_breaking",
    "removal_severity",
]
