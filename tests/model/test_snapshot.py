"""Tests for ApiSnapshot."""

from __future__ import annotations

from apichangelog.model import (
    ApiSnapshot,
    ClassElement,
    ConstantElement,
    FunctionElement,
    InterfaceElement,
)


class TestApiSnapshot:
    def test_elements_keyed_by_fqn(self) -> None:
        snapshot = ApiSnapshot()
        snapshot.add_class(ClassElement(name="Widget", namespace="App"))
        snapshot.add_function(FunctionElement(name="helper", namespace=""))

        assert list(snapshot.classes) == ["App\\Widget"]
        assert list(snapshot.functions) == ["helper"]

    def test_all_elements_in_category_order(self) -> None:
        snapshot = ApiSnapshot()
        const = ConstantElement(name="C", namespace="", value=1)
        func = FunctionElement(name="f", namespace="")
        iface = InterfaceElement(name="I", namespace="")
        cls = ClassElement(name="A", namespace="")
        snapshot.add_constant(const)
        snapshot.add_function(func)
        snapshot.add_interface(iface)
        snapshot.add_class(cls)

        assert snapshot.all_elements() == [cls, iface, func, const]
        assert snapshot.element_count == 4

    def test_same_fqn_in_different_kinds_coexist(self) -> None:
        snapshot = ApiSnapshot()
        snapshot.add_class(ClassElement(name="Thing", namespace="App"))
        snapshot.add_interface(InterfaceElement(name="Thing", namespace="App"))
        assert snapshot.element_count == 2

    def test_file_checksums(self) -> None:
        snapshot = ApiSnapshot()
        snapshot.add_file_checksum("src/A.php", "abc")
        assert snapshot.file_checksums == {"src/A.php": "abc"}
