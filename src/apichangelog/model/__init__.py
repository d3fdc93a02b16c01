"""API snapshot data model.

Public API re-exports for the model subpackage.
"""

from apichangelog.model.changes import Change, ChangeType, FileChange, Severity
from apichangelog.model.elements import (
    MEMBER_SEPARATOR,
    NAMESPACE_SEPARATOR,
    ApiElement,
    CallableElement,
    ClassElement,
    ConstantElement,
    ElementKind,
    FunctionElement,
    InterfaceElement,
    MemberContainer,
    MethodElement,
    Parameter,
    Visibility,
    by_name,
    has_internal_tag,
    qualify,
)
from apichangelog.model.snapshot import ApiSnapshot

__all__ = [
    "MEMBER_SEPARATOR",
    "NAMESPACE_SEPARATOR",
    "ApiElement",
    "ApiSnapshot",
    "CallableElement",
    "Change",
    "ChangeType",
    "ClassElement",
    "ConstantElement",
    "ElementKind",
    "FileChange",
    "FunctionElement",
    "InterfaceElement",
    "MemberContainer",
    "MethodElement",
    "Parameter",
    "Severity",
    "Visibility",
    "by_name",
    "has_internal_tag",
    "qualify",
]
