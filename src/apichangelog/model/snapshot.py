"""API snapshot: every exported declaration of one codebase version."""

from __future__ import annotations

from dataclasses import dataclass, field

from apichangelog.model.elements import (
    ApiElement,
    ClassElement,
    ConstantElement,
    FunctionElement,
    InterfaceElement,
)


@dataclass
class ApiSnapshot:
    """Top-level elements keyed by FQN, plus per-file content checksums.

    Populated once by the snapshot builder, read-only once handed to the
    differ. Insertion order of each map is preserved and drives the
    order of emitted changes.
    """

    classes: dict[str, ClassElement] = field(default_factory=dict)
    interfaces: dict[str, InterfaceElement] = field(default_factory=dict)
    functions: dict[str, FunctionElement] = field(default_factory=dict)
    constants: dict[str, ConstantElement] = field(default_factory=dict)
    file_checksums: dict[str, str] = field(default_factory=dict)

    def add_class(self, element: ClassElement) -> None:
        self.classes[element.fqn] = element

    def add_interface(self, element: InterfaceElement) -> None:
        self.interfaces[element.fqn] = element

    def add_function(self, element: FunctionElement) -> None:
        self.functions[element.fqn] = element

    def add_constant(self, element: ConstantElement) -> None:
        self.constants[element.fqn] = element

    def add_file_checksum(self, relative_path: str, checksum: str) -> None:
        self.file_checksums[relative_path] = checksum

    def all_elements(self) -> list[ApiElement]:
        """Top-level elements in category order (classes, interfaces, functions, constants)."""
        return [
            *self.classes.values(),
            *self.interfaces.values(),
            *self.functions.values(),
            *self.constants.values(),
        ]

    @property
    def element_count(self) -> int:
        return len(self.classes) + len(self.interfaces) + len(self.functions) + len(self.constants)
