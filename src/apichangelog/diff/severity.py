"""Severity rules for modified elements.

Pure functions; no logging, no I/O. Each ``*_severity`` function assumes
the caller already established that the element changed (see the matching
``*_signature`` function).

Precedence for every element kind:
1. ``@internal`` removed (old internal, new public) -> PATCH
2. ``@internal`` added (old public, new internal) -> MAJOR
3. Kind-specific rules. For callables and constants that stay internal
   the result is at most MINOR.
"""

from __future__ import annotations

from collections.abc import Sequence

from apichangelog.model import (
    CallableElement,
    ClassElement,
    ConstantElement,
    InterfaceElement,
    MethodElement,
    Parameter,
    Severity,
)

Signature = tuple[object, ...]


def normalize_parameters(parameters: Sequence[Parameter]) -> tuple[tuple[object, ...], ...]:
    """Positional parameter shapes without names."""
    return tuple(param.normalized() for param in parameters)


# =============================================================================
# Signatures
# =============================================================================


def callable_signature(element: CallableElement) -> Signature:
    """Effective signature of a method or function."""
    params = normalize_parameters(element.parameters)
    if isinstance(element, MethodElement):
        return (
            params,
            element.return_type,
            element.visibility,
            element.is_static,
            element.is_abstract,
            element.is_final,
            element.is_internal,
        )
    return (params, element.return_type, element.is_internal)


def class_signature(element: ClassElement) -> Signature:
    return (
        element.is_abstract,
        element.is_final,
        element.extends,
        element.implements,
        element.is_internal,
    )


def interface_signature(element: InterfaceElement) -> Signature:
    return (element.extends, element.is_internal)


def constant_signature(element: ConstantElement) -> Signature:
    # Strict value comparison: include the value's type alongside the value.
    return (type(element.value), element.value, element.is_internal)


# =============================================================================
# Shared rules
# =============================================================================


def _internal_transition(old_internal: bool, new_internal: bool) -> Severity | None:
    if old_internal and not new_internal:
        return Severity.PATCH
    if not old_internal and new_internal:
        return Severity.MAJOR
    return None


def is_parameter_change_breaking(
    old_params: Sequence[Parameter], new_params: Sequence[Parameter]
) -> bool:
    """Breaking if more required parameters, or any shared position changes type or by-ref.

    Comparison is positional; parameter names never matter.
    """
    old_required = sum(1 for p in old_params if not p.has_default)
    new_required = sum(1 for p in new_params if not p.has_default)
    if new_required > old_required:
        return True

    for old, new in zip(old_params, new_params, strict=False):
        if old.type != new.type or old.by_ref != new.by_ref:
            return True
    return False


def is_return_type_change_breaking(old_type: str | None, new_type: str | None) -> bool:
    """Type expressions are opaque strings: any difference is breaking."""
    if (old_type is None) != (new_type is None):
        return True
    return old_type != new_type


# =============================================================================
# Per-kind severity
# =============================================================================


def _standard_callable_severity(old: CallableElement, new: CallableElement) -> Severity:
    if is_parameter_change_breaking(old.parameters, new.parameters):
        return Severity.MAJOR

    if old.return_type != new.return_type:
        if is_return_type_change_breaking(old.return_type, new.return_type):
            return Severity.MAJOR
        return Severity.MINOR

    if isinstance(old, MethodElement) and isinstance(new, MethodElement):
        if (
            old.is_static != new.is_static
            or old.is_abstract != new.is_abstract
            or old.is_final != new.is_final
        ):
            return Severity.MAJOR
        if old.visibility != new.visibility:
            return Severity.MINOR

    return Severity.PATCH


def callable_severity(old: CallableElement, new: CallableElement) -> Severity:
    transition = _internal_transition(old.is_internal, new.is_internal)
    if transition is not None:
        return transition

    if old.is_internal or new.is_internal:
        return _internal_callable_severity(old, new)
    return _standard_callable_severity(old, new)


def _internal_callable_severity(old: CallableElement, new: CallableElement) -> Severity:
    """Both sides internal: signature and visibility/static changes are MINOR.

    Abstract and final flips fall through to PATCH.
    """
    if is_parameter_change_breaking(old.parameters, new.parameters):
        return Severity.MINOR
    if old.return_type != new.return_type:
        return Severity.MINOR
    if isinstance(old, MethodElement) and isinstance(new, MethodElement):
        if old.visibility != new.visibility or old.is_static != new.is_static:
            return Severity.MINOR
    return Severity.PATCH


def class_severity(old: ClassElement, new: ClassElement) -> Severity:
    transition = _internal_transition(old.is_internal, new.is_internal)
    if transition is not None:
        return transition

    if old.is_abstract != new.is_abstract or old.is_final != new.is_final:
        return Severity.MAJOR

    if old.extends != new.extends:
        if old.extends is not None:
            # Switching parents or dropping the parent
            return Severity.MAJOR
        return Severity.MINOR

    if old.implements != new.implements:
        return Severity.MINOR

    return Severity.PATCH


def interface_severity(old: InterfaceElement, new: InterfaceElement) -> Severity:
    transition = _internal_transition(old.is_internal, new.is_internal)
    if transition is not None:
        return transition

    if set(old.extends) - set(new.extends):
        return Severity.MAJOR
    if set(new.extends) - set(old.extends):
        return Severity.MINOR
    # Reordered only
    return Severity.PATCH


def constant_severity(old: ConstantElement, new: ConstantElement) -> Severity:
    transition = _internal_transition(old.is_internal, new.is_internal)
    if transition is not None:
        return transition

    if old.is_internal or new.is_internal:
        return Severity.MINOR
    return Severity.MAJOR


def removal_severity(is_internal: bool) -> Severity:
    """Removing a public element breaks callers; removing an internal one does not."""
    return Severity.MINOR if is_internal else Severity.MAJOR
