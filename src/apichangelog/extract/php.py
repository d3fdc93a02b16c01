"""PHP declaration extraction with tree-sitter.

Walks a tree-sitter-php syntax tree and records the public surface of a
file:

- classes (abstract/final, extends, implements) and interfaces
  (multiple extends), with their public methods and public constants
- top-level functions and ``const`` constants
- doc comments (the nearest ``/** ... */`` before a declaration)

Native parameter and return types win; ``@param`` / ``@return`` doc tags
fill in where no native type is declared. Names are recorded as written,
minus a leading ``\\``; ``use`` imports are not resolved.
"""

from __future__ import annotations

import importlib
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import tree_sitter

from apichangelog.core.errors import SnapshotError
from apichangelog.extract import docblock
from apichangelog.model import (
    ClassElement,
    ConstantElement,
    FunctionElement,
    InterfaceElement,
    MethodElement,
    Parameter,
    Visibility,
    by_name,
)

if TYPE_CHECKING:
    from tree_sitter import Node

GRAMMAR_MODULE = "tree_sitter_php"
GRAMMAR_FUNC = "language_php"

_PARAMETER_NODES = frozenset(
    {"simple_parameter", "variadic_parameter", "property_promotion_parameter"}
)
_NAME_NODES = frozenset({"name", "qualified_name", "namespace_name"})
# Constant expressions that read as a name: true, PHP_EOL, \Foo\BAR
_NAME_VALUE_NODES = frozenset({"name", "qualified_name", "boolean", "null"})
# Children of a double-quoted string without interpolation
_PLAIN_STRING_PARTS = frozenset({"string_content", "string_value", "escape_sequence", '"'})
_LEADING_BACKSLASH = re.compile(r"(^|[|&?(])\\")
_WHITESPACE = re.compile(r"\s+")
_DOUBLE_QUOTED_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "v": "\v",
    "e": "\x1b",
    "f": "\f",
    "\\": "\\",
    "$": "$",
    '"': '"',
}
_DOUBLE_QUOTED_ESCAPE = re.compile(r"\\([ntrvef\\$\"])")
_SINGLE_QUOTED_ESCAPE = re.compile(r"\\([\\'])")

UNKNOWN_VALUE = "unknown"
ARRAY_VALUE = "array"


@dataclass
class ExtractedFile:
    """Top-level declarations found in one source file."""

    source_file: str
    classes: list[ClassElement] = field(default_factory=list)
    interfaces: list[InterfaceElement] = field(default_factory=list)
    functions: list[FunctionElement] = field(default_factory=list)
    constants: list[ConstantElement] = field(default_factory=list)

    @property
    def element_count(self) -> int:
        return len(self.classes) + len(self.interfaces) + len(self.functions) + len(self.constants)


def load_language() -> tree_sitter.Language:
    """Load the PHP grammar (``<?php`` aware variant)."""
    try:
        module = importlib.import_module(GRAMMAR_MODULE)
        return tree_sitter.Language(getattr(module, GRAMMAR_FUNC)())
    except (ImportError, AttributeError) as err:
        raise SnapshotError.grammar_unavailable("tree-sitter-php") from err


def _text(node: Node | None) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def _name_text(node: Node | None) -> str:
    return _WHITESPACE.sub("", _text(node)).lstrip("\\")


def _type_text(node: Node | None) -> str | None:
    if node is None:
        return None
    text = _LEADING_BACKSLASH.sub(r"\1", _WHITESPACE.sub("", _text(node)))
    return text or None


def _first_error(node: Node) -> Node | None:
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def _child_types(node: Node) -> set[str]:
    return {child.type for child in node.children}


def _doc_comment(node: Node) -> str | None:
    """Nearest doc comment among the comments directly before ``node``."""
    sibling = node.prev_sibling
    while sibling is not None and sibling.type == "comment":
        text = _text(sibling)
        if text.startswith("/**"):
            return text
        sibling = sibling.prev_sibling
    return None


def _visibility(node: Node) -> Visibility:
    for child in node.children:
        if child.type == "visibility_modifier":
            return Visibility(_text(child).strip().lower())
    return Visibility.PUBLIC


def _clause_names(clause: Node) -> tuple[str, ...]:
    return tuple(_name_text(c) for c in clause.named_children if c.type in _NAME_NODES)


def _return_type_node(node: Node) -> Node | None:
    found = node.child_by_field_name("return_type")
    if found is not None:
        return found
    after_colon = False
    for child in node.children:
        if child.type == ":":
            after_colon = True
        elif after_colon and child.is_named:
            return None if child.type == "compound_statement" else child
    return None


def _parameter_name(node: Node) -> tuple[str, bool]:
    """Return ``(name, by_ref)`` for a parameter node."""
    name_node = node.child_by_field_name("name")
    by_ref = any(c.type in ("reference_modifier", "&") for c in node.children)
    if name_node is not None and name_node.type == "by_ref":
        by_ref = True
        name_node = next(
            (c for c in name_node.named_children if c.type == "variable_name"), name_node
        )
    if name_node is None:
        name_node = next((c for c in node.named_children if c.type == "variable_name"), None)
    return _text(name_node).lstrip("&").lstrip("$"), by_ref


def _php_int(text: str) -> int:
    digits = text.replace("_", "").lower()
    if digits.startswith(("0x", "0b", "0o")):
        return int(digits, 0)
    if len(digits) > 1 and digits.startswith("0"):
        return int(digits, 8)
    return int(digits)


def _unquote(text: str) -> str:
    if text[:1] in ("b", "B"):
        text = text[1:]
    return text[1:-1]


def constant_value(node: Node | None) -> Any:
    """Decode a constant initializer.

    Strings and numbers become Python values, name-like expressions keep
    their name, arrays become ``"array"`` and anything else ``"unknown"``.
    """
    if node is None:
        return UNKNOWN_VALUE
    kind = node.type
    text = _text(node)
    try:
        if kind == "string":
            return _SINGLE_QUOTED_ESCAPE.sub(r"\1", _unquote(text))
        if kind == "encapsed_string":
            if any(c.type not in _PLAIN_STRING_PARTS for c in node.children):
                return UNKNOWN_VALUE
            return _DOUBLE_QUOTED_ESCAPE.sub(
                lambda m: _DOUBLE_QUOTED_ESCAPES[m.group(1)], _unquote(text)
            )
        if kind == "integer":
            return _php_int(text)
        if kind == "float":
            return float(text.replace("_", ""))
    except ValueError:
        return UNKNOWN_VALUE
    if kind in _NAME_VALUE_NODES:
        return _name_text(node)
    if kind == "array_creation_expression":
        return ARRAY_VALUE
    return UNKNOWN_VALUE


class PhpExtractor:
    """Extract API declarations from PHP source bytes.

    One extractor holds one tree-sitter parser and is not thread-safe.
    """

    def __init__(self, language: tree_sitter.Language | None = None) -> None:
        self._parser = tree_sitter.Parser()
        self._parser.language = language or load_language()

    def extract(self, content: bytes, source_file: str) -> ExtractedFile:
        """Parse ``content`` and collect its declarations.

        Raises:
            SnapshotError: The file does not parse cleanly. Nothing from a
                broken file is kept.
        """
        tree = self._parser.parse(content)
        root = tree.root_node
        if root.has_error:
            error = _first_error(root) or root
            line = error.start_point[0] + 1
            raise SnapshotError.parse_failed(source_file, f"syntax error near line {line}")

        extracted = ExtractedFile(source_file)
        self._visit_statements(root.children, "", extracted)
        return extracted

    def _visit_statements(self, nodes: list[Node], namespace: str, out: ExtractedFile) -> None:
        for node in nodes:
            kind = node.type
            if kind == "namespace_definition":
                name = _name_text(node.child_by_field_name("name"))
                body = node.child_by_field_name("body")
                if body is not None:
                    self._visit_statements(body.children, name, out)
                else:
                    # Unbraced form applies to the statements that follow
                    namespace = name
            elif kind == "class_declaration":
                out.classes.append(self._class(node, namespace, out.source_file))
            elif kind == "interface_declaration":
                out.interfaces.append(self._interface(node, namespace, out.source_file))
            elif kind == "function_definition":
                out.functions.append(self._function(node, namespace, out.source_file))
            elif kind == "const_declaration":
                out.constants.extend(self._constants(node, namespace, None, out.source_file))
            elif kind in ("trait_declaration", "enum_declaration", "anonymous_class"):
                continue
            elif node.named_child_count:
                # Conditional declarations: if/else blocks, declare(...) { }
                self._visit_statements(node.children, namespace, out)

    def _members(
        self, body: Node | None, namespace: str, parent: str, source_file: str
    ) -> tuple[dict[str, MethodElement], dict[str, ConstantElement]]:
        methods: list[MethodElement] = []
        constants: list[ConstantElement] = []
        if body is None:
            return {}, {}
        for child in body.named_children:
            if child.type == "method_declaration" and _visibility(child) is Visibility.PUBLIC:
                methods.append(self._method(child, namespace, parent, source_file))
            elif child.type == "const_declaration" and _visibility(child) is Visibility.PUBLIC:
                constants.extend(self._constants(child, namespace, parent, source_file))
        return by_name(methods), by_name(constants)

    def _class(self, node: Node, namespace: str, source_file: str) -> ClassElement:
        name = _name_text(node.child_by_field_name("name"))
        extends: str | None = None
        implements: tuple[str, ...] = ()
        for child in node.children:
            if child.type == "base_clause":
                parents = _clause_names(child)
                extends = parents[0] if parents else None
            elif child.type == "class_interface_clause":
                implements = _clause_names(child)

        modifiers = _child_types(node)
        methods, constants = self._members(
            node.child_by_field_name("body"), namespace, name, source_file
        )
        return ClassElement(
            name=name,
            namespace=namespace,
            methods=methods,
            constants=constants,
            is_abstract="abstract_modifier" in modifiers,
            is_final="final_modifier" in modifiers,
            extends=extends,
            implements=implements,
            doc_comment=_doc_comment(node),
            source_file=source_file,
        )

    def _interface(self, node: Node, namespace: str, source_file: str) -> InterfaceElement:
        name = _name_text(node.child_by_field_name("name"))
        extends: tuple[str, ...] = ()
        for child in node.children:
            if child.type == "base_clause":
                extends = _clause_names(child)

        methods, constants = self._members(
            node.child_by_field_name("body"), namespace, name, source_file
        )
        return InterfaceElement(
            name=name,
            namespace=namespace,
            methods=methods,
            constants=constants,
            extends=extends,
            doc_comment=_doc_comment(node),
            source_file=source_file,
        )

    def _method(
        self, node: Node, namespace: str, parent: str, source_file: str
    ) -> MethodElement:
        doc = _doc_comment(node)
        modifiers = _child_types(node)
        return MethodElement(
            name=_name_text(node.child_by_field_name("name")),
            namespace=namespace,
            parent=parent,
            parameters=self._parameters(node.child_by_field_name("parameters"), doc),
            return_type=_type_text(_return_type_node(node)) or docblock.return_type(doc),
            is_static="static_modifier" in modifiers,
            is_abstract="abstract_modifier" in modifiers,
            is_final="final_modifier" in modifiers,
            visibility=_visibility(node),
            doc_comment=doc,
            source_file=source_file,
        )

    def _function(self, node: Node, namespace: str, source_file: str) -> FunctionElement:
        doc = _doc_comment(node)
        return FunctionElement(
            name=_name_text(node.child_by_field_name("name")),
            namespace=namespace,
            parameters=self._parameters(node.child_by_field_name("parameters"), doc),
            return_type=_type_text(_return_type_node(node)) or docblock.return_type(doc),
            doc_comment=doc,
            source_file=source_file,
        )

    def _parameters(self, node: Node | None, doc: str | None) -> tuple[Parameter, ...]:
        if node is None:
            return ()
        doc_types = docblock.param_types(doc)
        parameters = []
        for child in node.named_children:
            if child.type not in _PARAMETER_NODES:
                continue
            name, by_ref = _parameter_name(child)
            declared = _type_text(child.child_by_field_name("type"))
            parameters.append(
                Parameter(
                    name=name,
                    type=declared or doc_types.get(name),
                    has_default=child.child_by_field_name("default_value") is not None,
                    is_variadic=child.type == "variadic_parameter",
                    by_ref=by_ref,
                )
            )
        return tuple(parameters)

    def _constants(
        self, node: Node, namespace: str, parent: str | None, source_file: str
    ) -> list[ConstantElement]:
        doc = _doc_comment(node)
        value_type = _type_text(node.child_by_field_name("type"))
        constants = []
        for element in node.named_children:
            if element.type != "const_element":
                continue
            parts = element.named_children
            if not parts:
                continue
            value_node = parts[-1] if len(parts) > 1 else None
            constants.append(
                ConstantElement(
                    name=_name_text(parts[0]),
                    namespace=namespace,
                    parent=parent,
                    value=constant_value(value_node),
                    value_type=value_type,
                    doc_comment=doc,
                    source_file=source_file,
                )
            )
        return constants
