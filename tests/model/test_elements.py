"""Tests for model/elements.py and model/changes.py.

Covers:
- has_internal_tag() tag detection
- qualify() and fqn composition for top-level and member elements
- Parameter.normalized()
- ConstantElement.same_value() strictness
- Severity ordering and capping
- Change.is_internal
"""

from __future__ import annotations

import pytest

from apichangelog.model import (
    Change,
    ChangeType,
    ClassElement,
    ConstantElement,
    ElementKind,
    FunctionElement,
    InterfaceElement,
    MethodElement,
    Parameter,
    Severity,
    by_name,
    has_internal_tag,
    qualify,
)


class TestHasInternalTag:
    """Tests for has_internal_tag."""

    @pytest.mark.parametrize(
        "doc",
        [
            "/** @internal */",
            "/**\n * @internal\n */",
            "/**\n * Helper.\n *\n * @internal Used by the kernel only\n */",
            "/**\n\t* @internal\n */",
        ],
    )
    def test_standalone_tag_is_detected(self, doc: str) -> None:
        assert has_internal_tag(doc) is True

    @pytest.mark.parametrize(
        "doc",
        [
            None,
            "",
            "/** Public helper. */",
            "/**\n * This method is not @internal, it is public.\n */",
            "/**\n * @internalized\n */",
            "/**\n * @internal-use\n */",
        ],
    )
    def test_prose_or_absent_tag_is_not_detected(self, doc: str | None) -> None:
        assert has_internal_tag(doc) is False


class TestQualifiedNames:
    """FQN composition."""

    def test_namespaced_class(self) -> None:
        cls = ClassElement(name="Widget", namespace="App\\Ui")
        assert cls.fqn == "App\\Ui\\Widget"

    def test_global_namespace_keeps_bare_name(self) -> None:
        assert FunctionElement(name="helper", namespace="").fqn == "helper"

    def test_surrounding_separators_are_ignored(self) -> None:
        assert qualify("\\App\\", "Widget") == "App\\Widget"

    def test_method_uses_parent(self) -> None:
        method = MethodElement(name="render", namespace="App", parent="Widget")
        assert method.fqn == "App\\Widget::render"

    def test_member_without_parent_is_top_level(self) -> None:
        constant = ConstantElement(name="VERSION", namespace="App", value="1")
        assert constant.fqn == "App\\VERSION"

    def test_global_class_constant(self) -> None:
        constant = ConstantElement(name="MAX", namespace="", parent="Limits", value=3)
        assert constant.fqn == "Limits::MAX"


class TestElementKinds:
    """Each variant reports its kind."""

    @pytest.mark.parametrize(
        ("element", "kind"),
        [
            (ClassElement(name="A", namespace=""), ElementKind.CLASS),
            (InterfaceElement(name="I", namespace=""), ElementKind.INTERFACE),
            (MethodElement(name="m", namespace=""), ElementKind.METHOD),
            (FunctionElement(name="f", namespace=""), ElementKind.FUNCTION),
            (ConstantElement(name="C", namespace=""), ElementKind.CONSTANT),
        ],
    )
    def test_kind(self, element: object, kind: ElementKind) -> None:
        assert element.kind is kind  # type: ignore[attr-defined]
        assert kind.value == kind  # str enum


class TestParameter:
    def test_normalized_drops_name(self) -> None:
        a = Parameter(name="a", type="string", has_default=True)
        b = Parameter(name="b", type="string", has_default=True)
        assert a != b
        assert a.normalized() == b.normalized()

    def test_normalized_keeps_by_ref_and_variadic(self) -> None:
        plain = Parameter(name="x", type="array")
        assert Parameter(name="x", type="array", by_ref=True).normalized() != plain.normalized()
        variadic = Parameter(name="x", type="array", is_variadic=True)
        assert variadic.normalized() != plain.normalized()


class TestConstantSameValue:
    """Strict value comparison."""

    @pytest.mark.parametrize(
        ("left", "right", "expected"),
        [
            ("a", "a", True),
            (1, 1, True),
            (1, 1.0, False),
            (1, "1", False),
            (True, 1, False),
            ("array", "array", True),
        ],
    )
    def test_same_value(self, left: object, right: object, expected: bool) -> None:
        old = ConstantElement(name="C", namespace="", value=left)
        new = ConstantElement(name="C", namespace="", value=right)
        assert old.same_value(new) is expected


class TestSeverity:
    def test_rank_order(self) -> None:
        assert Severity.PATCH.rank < Severity.MINOR.rank < Severity.MAJOR.rank


class TestChange:
    def test_is_internal_checks_both_sides(self) -> None:
        public = FunctionElement(name="f", namespace="")
        internal = FunctionElement(name="f", namespace="", doc_comment="/** @internal */")

        assert not Change(ChangeType.ADDED, Severity.MINOR, public).is_internal
        assert Change(ChangeType.ADDED, Severity.MINOR, internal).is_internal
        assert Change(ChangeType.MODIFIED, Severity.PATCH, public, internal).is_internal

    def test_fqn_comes_from_element(self) -> None:
        method = MethodElement(name="run", namespace="App", parent="Job")
        change = Change(ChangeType.REMOVED, Severity.MAJOR, method)
        assert change.fqn == "App\\Job::run"

    def test_change_is_immutable(self) -> None:
        change = Change(ChangeType.ADDED, Severity.MINOR, FunctionElement(name="f", namespace=""))
        with pytest.raises(AttributeError):
            change.severity = Severity.MAJOR  # type: ignore[misc]


class TestByName:
    def test_later_duplicate_wins(self) -> None:
        first = MethodElement(name="run", namespace="", return_type="int")
        second = MethodElement(name="run", namespace="", return_type="string")
        assert by_name([first, second]) == {"run": second}
