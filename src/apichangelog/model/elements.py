"""Declared API elements: the comparison units of a snapshot.

All elements are frozen dataclasses. The five variants form a closed set
(see ``ApiElement``); code that needs variant-specific fields dispatches
with ``isinstance`` on the concrete class rather than probing attributes.

Members (methods, class/interface constants) are built with their owning
container name in ``parent``, so ``fqn`` is fully determined at
construction time.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Protocol, TypeVar

NAMESPACE_SEPARATOR = "\\"
MEMBER_SEPARATOR = "::"

# A tag counts only when it opens a doc-block line: "/** @internal", " * @internal".
_INTERNAL_TAG = re.compile(r"^[ \t]*(?:/\*\*|\*)?[ \t]*@internal(?![\w-])", re.MULTILINE)


class ElementKind(str, Enum):
    """Element variants of an API snapshot."""

    CLASS = "class"
    INTERFACE = "interface"
    METHOD = "method"
    FUNCTION = "function"
    CONSTANT = "constant"


class Visibility(str, Enum):
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"


def has_internal_tag(doc_comment: str | None) -> bool:
    """Return True if the doc comment carries a standalone ``@internal`` tag.

    The word appearing inside prose ("... but is not @internal") does not count.
    """
    if not doc_comment:
        return False
    return _INTERNAL_TAG.search(doc_comment) is not None


def qualify(namespace: str, name: str) -> str:
    """Join a namespace and a simple name. Global names stay unqualified."""
    namespace = namespace.strip(NAMESPACE_SEPARATOR)
    if not namespace:
        return name
    return f"{namespace}{NAMESPACE_SEPARATOR}{name}"


class _Declaration:
    """Attributes and derived properties shared by every element variant."""

    __slots__ = ()

    name: str
    namespace: str
    doc_comment: str | None
    source_file: str | None

    @property
    def is_internal(self) -> bool:
        return has_internal_tag(self.doc_comment)

    @property
    def fqn(self) -> str:
        return qualify(self.namespace, self.name)


class _Member(_Declaration):
    """A declaration that may belong to a class or interface."""

    __slots__ = ()

    parent: str | None

    @property
    def fqn(self) -> str:
        if self.parent is not None:
            return f"{qualify(self.namespace, self.parent)}{MEMBER_SEPARATOR}{self.name}"
        return qualify(self.namespace, self.name)


@dataclass(frozen=True, slots=True)
class Parameter:
    """One positional parameter of a callable.

    ``name`` is informational only; comparison uses ``normalized()``.
    """

    name: str
    type: str | None = None
    has_default: bool = False
    is_variadic: bool = False
    by_ref: bool = False

    def normalized(self) -> tuple[str | None, bool, bool, bool]:
        return (self.type, self.has_default, self.is_variadic, self.by_ref)


@dataclass(frozen=True, slots=True)
class MethodElement(_Member):
    kind: ClassVar[ElementKind] = ElementKind.METHOD

    name: str
    namespace: str
    parent: str | None = None
    parameters: tuple[Parameter, ...] = ()
    return_type: str | None = None
    is_static: bool = False
    is_abstract: bool = False
    is_final: bool = False
    visibility: Visibility = Visibility.PUBLIC
    doc_comment: str | None = None
    source_file: str | None = None


@dataclass(frozen=True, slots=True)
class FunctionElement(_Declaration):
    kind: ClassVar[ElementKind] = ElementKind.FUNCTION

    name: str
    namespace: str
    parameters: tuple[Parameter, ...] = ()
    return_type: str | None = None
    doc_comment: str | None = None
    source_file: str | None = None


@dataclass(frozen=True, slots=True)
class ConstantElement(_Member):
    kind: ClassVar[ElementKind] = ElementKind.CONSTANT

    name: str
    namespace: str
    parent: str | None = None
    value: Any = None
    value_type: str | None = None
    doc_comment: str | None = None
    source_file: str | None = None

    def same_value(self, other: ConstantElement) -> bool:
        """Strict comparison: equal values of the same type (``1`` is not ``1.0`` or ``True``)."""
        return type(self.value) is type(other.value) and self.value == other.value


@dataclass(frozen=True, slots=True)
class ClassElement(_Declaration):
    kind: ClassVar[ElementKind] = ElementKind.CLASS

    name: str
    namespace: str
    methods: Mapping[str, MethodElement] = field(default_factory=dict)
    constants: Mapping[str, ConstantElement] = field(default_factory=dict)
    is_abstract: bool = False
    is_final: bool = False
    extends: str | None = None
    implements: tuple[str, ...] = ()
    doc_comment: str | None = None
    source_file: str | None = None


@dataclass(frozen=True, slots=True)
class InterfaceElement(_Declaration):
    kind: ClassVar[ElementKind] = ElementKind.INTERFACE

    name: str
    namespace: str
    methods: Mapping[str, MethodElement] = field(default_factory=dict)
    constants: Mapping[str, ConstantElement] = field(default_factory=dict)
    extends: tuple[str, ...] = ()
    doc_comment: str | None = None
    source_file: str | None = None


ApiElement = ClassElement | InterfaceElement | MethodElement | FunctionElement | ConstantElement
CallableElement = MethodElement | FunctionElement


class MemberContainer(Protocol):
    """Structural view shared by classes and interfaces for member diffing."""

    @property
    def methods(self) -> Mapping[str, MethodElement]: ...

    @property
    def constants(self) -> Mapping[str, ConstantElement]: ...

    @property
    def fqn(self) -> str: ...


_M = TypeVar("_M", MethodElement, ConstantElement)


def by_name(members: Iterable[_M]) -> dict[str, _M]:
    """Index members by simple name. A later duplicate replaces an earlier one."""
    return {member.name: member for member in members}
