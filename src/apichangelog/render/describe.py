"""Human-readable descriptions of individual changes."""

from __future__ import annotations

from typing import Any

from apichangelog.model import (
    Change,
    ChangeType,
    ClassElement,
    ConstantElement,
    FunctionElement,
    InterfaceElement,
    MethodElement,
    Parameter,
)

_UNTYPED = "mixed"


def describe_change(change: Change) -> str:
    """Return the one-line description shown next to a change."""
    kind = change.element.kind.value
    if change.change_type == ChangeType.ADDED:
        return f"New {kind} added"
    if change.change_type == ChangeType.REMOVED:
        return f"{kind} removed"
    return describe_modification(change)


def describe_modification(change: Change) -> str:
    old, new = change.old_element, change.element
    kind = new.kind.value
    if old is None:
        return f"{kind} modified"

    details: list[str] = []
    if isinstance(old, MethodElement | FunctionElement) and isinstance(
        new, MethodElement | FunctionElement
    ):
        details.extend(_parameter_details(old.parameters, new.parameters))
        if old.return_type != new.return_type:
            details.append(
                f"return type changed from {old.return_type or _UNTYPED} "
                f"to {new.return_type or _UNTYPED}"
            )
    if isinstance(old, MethodElement) and isinstance(new, MethodElement):
        if old.visibility != new.visibility:
            details.append(
                f"visibility changed from {old.visibility.value} to {new.visibility.value}"
            )
        details.extend(_flag_details("static", old.is_static, new.is_static))
    if isinstance(old, MethodElement | ClassElement) and isinstance(
        new, MethodElement | ClassElement
    ):
        details.extend(_flag_details("abstract", old.is_abstract, new.is_abstract))
        details.extend(_flag_details("final", old.is_final, new.is_final))
    if isinstance(old, ClassElement) and isinstance(new, ClassElement):
        details.extend(_extends_details(old.extends, new.extends))
        details.extend(_list_details("implements", old.implements, new.implements))
    if isinstance(old, InterfaceElement) and isinstance(new, InterfaceElement):
        details.extend(_list_details("extends", old.extends, new.extends))
    if isinstance(old, ConstantElement) and isinstance(new, ConstantElement):
        if not old.same_value(new):
            details.append(
                f"value changed from {format_value(old.value)} to {format_value(new.value)}"
            )

    if old.is_internal != new.is_internal:
        details.append("marked as @internal" if new.is_internal else "no longer @internal")

    if not details:
        return f"{kind} signature modified"
    text = ", ".join(details)
    return text[0].upper() + text[1:]


def format_value(value: Any) -> str:
    """Render a constant value the way it reads in PHP source."""
    if isinstance(value, str):
        return f"'{value}'"
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def _parameter_details(old: tuple[Parameter, ...], new: tuple[Parameter, ...]) -> list[str]:
    details: list[str] = []
    if len(new) > len(old):
        added = len(new) - len(old)
        details.append(f"added {added} parameter{'s' if added > 1 else ''}")
    elif len(old) > len(new):
        removed = len(old) - len(new)
        details.append(f"removed {removed} parameter{'s' if removed > 1 else ''}")

    for position, (before, after) in enumerate(zip(old, new, strict=False)):
        name = after.name or f"param{position}"
        if before.type != after.type:
            details.append(
                f"parameter ${name} type changed from {before.type or _UNTYPED} "
                f"to {after.type or _UNTYPED}"
            )
        if before.has_default != after.has_default:
            state = "optional" if after.has_default else "required"
            details.append(f"parameter ${name} became {state}")
    return details


def _flag_details(flag: str, before: bool, after: bool) -> list[str]:
    if before == after:
        return []
    return [f"became {flag}" if after else f"no longer {flag}"]


def _extends_details(before: str | None, after: str | None) -> list[str]:
    if before == after:
        return []
    if before is None:
        return [f"now extends {after}"]
    if after is None:
        return [f"no longer extends {before}"]
    return [f"extends changed from {before} to {after}"]


def _list_details(verb: str, before: tuple[str, ...], after: tuple[str, ...]) -> list[str]:
    added = [name for name in after if name not in before]
    removed = [name for name in before if name not in after]
    details = []
    if added:
        details.append(f"now {verb} {', '.join(added)}")
    if removed:
        details.append(f"no longer {verb} {', '.join(removed)}")
    return details
