"""Pure structural diff engine over two API snapshots.

Compares an old and a new ``ApiSnapshot`` and classifies every difference
as a ``Change``. No I/O, no shared state; safe to call concurrently with
distinct snapshot pairs.

Output order is deterministic:
- category order: classes, interfaces, functions, constants
- within a category: additions/modifications in new-snapshot order,
  then removals in old-snapshot order
- a modified container emits its own change first, then its methods,
  then its constants (same added/modified/removed ordering)
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TypeVar

import structlog

from apichangelog.diff.severity import (
    callable_severity,
    callable_signature,
    class_severity,
    class_signature,
    constant_severity,
    constant_signature,
    interface_severity,
    interface_signature,
    removal_severity,
)
from apichangelog.model import (
    MEMBER_SEPARATOR,
    ApiElement,
    ApiSnapshot,
    CallableElement,
    Change,
    ChangeType,
    ClassElement,
    ConstantElement,
    FunctionElement,
    InterfaceElement,
    MemberContainer,
    MethodElement,
    Severity,
)

log = structlog.get_logger(__name__)

_E = TypeVar("_E", bound=ApiElement)

# (old, new) -> changes for an element present in both snapshots
_Comparer = Callable[[_E, _E], list[Change]]


def diff_snapshots(old: ApiSnapshot, new: ApiSnapshot) -> list[Change]:
    """Compute the ordered list of API changes between two snapshots."""
    changes: list[Change] = []
    changes.extend(_diff_map(old.classes, new.classes, "class", _diff_class))
    changes.extend(_diff_map(old.interfaces, new.interfaces, "interface", _diff_interface))
    changes.extend(_diff_map(old.functions, new.functions, "function", _diff_callable))
    changes.extend(_diff_map(old.constants, new.constants, "constant", _diff_constant))

    log.debug(
        "api_diff_computed",
        changes=len(changes),
        old_elements=old.element_count,
        new_elements=new.element_count,
    )
    return changes


def _diff_map(
    old_map: Mapping[str, _E],
    new_map: Mapping[str, _E],
    label: str,
    compare: _Comparer[_E],
    *,
    qualify: Callable[[str], str] | None = None,
) -> list[Change]:
    """Added/modified in new-map order, then removed in old-map order.

    ``qualify`` maps a key to the display name used in descriptions;
    defaults to the key itself (top-level maps are keyed by FQN).
    """
    display = qualify or (lambda key: key)
    changes: list[Change] = []

    for key, new_element in new_map.items():
        old_element = old_map.get(key)
        if old_element is None:
            changes.append(
                Change(
                    change_type=ChangeType.ADDED,
                    severity=Severity.MINOR,
                    element=new_element,
                    description=f"Added {label} {display(key)}",
                )
            )
        else:
            changes.extend(compare(old_element, new_element))

    for key, old_element in old_map.items():
        if key not in new_map:
            changes.append(
                Change(
                    change_type=ChangeType.REMOVED,
                    severity=removal_severity(old_element.is_internal),
                    element=old_element,
                    description=f"Removed {label} {display(key)}",
                )
            )

    return changes


def _modified(
    old: ApiElement, new: ApiElement, severity: Severity, label: str, name: str
) -> Change:
    return Change(
        change_type=ChangeType.MODIFIED,
        severity=severity,
        element=new,
        old_element=old,
        description=f"Modified {label} {name}",
    )


def _diff_members(old: MemberContainer, new: MemberContainer) -> list[Change]:
    """Diff the methods and constants of two versions of one container."""

    def member_name(key: str) -> str:
        return f"{new.fqn}{MEMBER_SEPARATOR}{key}"

    def compare_method(old_m: MethodElement, new_m: MethodElement) -> list[Change]:
        return _diff_callable(old_m, new_m, display_name=member_name(new_m.name))

    def compare_constant(old_c: ConstantElement, new_c: ConstantElement) -> list[Change]:
        return _diff_constant(old_c, new_c, display_name=member_name(new_c.name))

    changes: list[Change] = []
    changes.extend(
        _diff_map(old.methods, new.methods, "method", compare_method, qualify=member_name)
    )
    changes.extend(
        _diff_map(old.constants, new.constants, "constant", compare_constant, qualify=member_name)
    )
    return changes


def _diff_class(old: ClassElement, new: ClassElement) -> list[Change]:
    changes: list[Change] = []
    if class_signature(old) != class_signature(new):
        changes.append(_modified(old, new, class_severity(old, new), "class", new.fqn))
    changes.extend(_diff_members(old, new))
    return changes


def _diff_interface(old: InterfaceElement, new: InterfaceElement) -> list[Change]:
    changes: list[Change] = []
    if interface_signature(old) != interface_signature(new):
        changes.append(_modified(old, new, interface_severity(old, new), "interface", new.fqn))
    changes.extend(_diff_members(old, new))
    return changes


def _diff_callable(
    old: CallableElement,
    new: CallableElement,
    *,
    display_name: str | None = None,
) -> list[Change]:
    if callable_signature(old) == callable_signature(new):
        return []
    label = "function" if isinstance(new, FunctionElement) else "method"
    severity = callable_severity(old, new)
    return [_modified(old, new, severity, label, display_name or new.fqn)]


def _diff_constant(
    old: ConstantElement,
    new: ConstantElement,
    *,
    display_name: str | None = None,
) -> list[Change]:
    if constant_signature(old) == constant_signature(new):
        return []
    return [_modified(old, new, constant_severity(old, new), "constant", display_name or new.fqn)]
