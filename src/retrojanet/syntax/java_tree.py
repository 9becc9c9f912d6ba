from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

import tree_sitter
import tree_sitter_java

from retrojanet.errors import SourceParseError, SourceReadError
from retrojanet.syntax.model import (
    ImportDecl,
    SourceAnnotation,
    SourceMethod,
    SourceParameter,
    SourceUnit,
)

JAVA_LANGUAGE = tree_sitter.Language(tree_sitter_java.language())

_ANNOTATION_TYPES = ("annotation", "marker_annotation")
_NAME_TYPES = ("identifier", "scoped_identifier")
_COMMENT_TYPES = ("line_comment", "block_comment")


def parse_java_source(source: str | bytes) -> SourceUnit:
    """
    Parse a Java compilation unit and collect package, imports and every
    method declaration (nested types included) in declaration order.
    Raises SourceParseError if tree-sitter reports syntax errors.
    """
    if isinstance(source, str):
        data = source.encode("utf-8")
    else:
        data = source
        try:
            data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SourceParseError(f"Java source is not valid UTF-8 at byte {e.start}") from e
    parser = tree_sitter.Parser(JAVA_LANGUAGE)
    tree = parser.parse(data)
    root = tree.root_node
    if root.has_error:
        raise SourceParseError(f"Java source has syntax errors near line {_first_error_line(root)}")

    package: Optional[str] = None
    imports: list[ImportDecl] = []
    for child in root.named_children:
        if child.type == "package_declaration":
            package = _package_name(child)
        elif child.type == "import_declaration":
            imports.append(_import_decl(child))

    methods = tuple(_method(node) for node in _iter_method_declarations(root))
    return SourceUnit(package=package, imports=tuple(imports), methods=methods)


def read_java_file(path: Path) -> SourceUnit:
    try:
        data = path.read_bytes()
    except OSError as e:
        raise SourceReadError(f"Cannot read source file {path}: {e}") from e
    return parse_java_source(data)


def _text(node: tree_sitter.Node) -> str:
    return node.text.decode("utf-8") if node.text else ""


def _first_error_line(root: tree_sitter.Node) -> int:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node.start_point[0] + 1
        stack.extend(reversed(node.children))
    return root.start_point[0] + 1


def _iter_method_declarations(root: tree_sitter.Node) -> Iterable[tree_sitter.Node]:
    # pre-order, so methods come out in source order
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "method_declaration":
            yield node
        stack.extend(reversed(node.named_children))


def _package_name(node: tree_sitter.Node) -> Optional[str]:
    for child in node.named_children:
        if child.type in _NAME_TYPES:
            return _text(child)
    return None


def _import_decl(node: tree_sitter.Node) -> ImportDecl:
    name = ""
    static = False
    wildcard = False
    for child in node.children:
        if child.type == "static":
            static = True
        elif child.type == "asterisk":
            wildcard = True
        elif child.type in _NAME_TYPES:
            name = _text(child)
    return ImportDecl(name=name, static=static, wildcard=wildcard)


def _annotations(node: tree_sitter.Node) -> tuple[SourceAnnotation, ...]:
    """Annotations from the `modifiers` child of a declaration."""
    out: list[SourceAnnotation] = []
    for child in node.named_children:
        if child.type != "modifiers":
            continue
        for mod in child.named_children:
            if mod.type in _ANNOTATION_TYPES:
                out.append(_annotation(mod))
    return tuple(out)


def _annotation(node: tree_sitter.Node) -> SourceAnnotation:
    name_node = node.child_by_field_name("name")
    # @retrofit2.http.GET -> GET
    name = _text(name_node).rsplit(".", 1)[-1] if name_node else ""

    args = node.child_by_field_name("arguments")
    if args is None:
        return SourceAnnotation(name=name)

    elements = [c for c in args.named_children if c.type not in _COMMENT_TYPES]
    pairs: list[tuple[str, str]] = []
    for el in elements:
        if el.type == "element_value_pair":
            key = el.child_by_field_name("key")
            value = el.child_by_field_name("value")
            if key is not None and value is not None:
                pairs.append((_text(key), _text(value)))

    if pairs:
        return SourceAnnotation(name=name, pairs=tuple(pairs))
    if elements:
        return SourceAnnotation(name=name, value=_text(elements[0]))
    return SourceAnnotation(name=name)


def _parameter(node: tree_sitter.Node) -> Optional[SourceParameter]:
    if node.type == "formal_parameter":
        type_node = node.child_by_field_name("type")
        name_node = node.child_by_field_name("name")
        if type_node is None or name_node is None:
            return None
        type_text = _text(type_node)
        dims = node.child_by_field_name("dimensions")
        if dims is not None:
            type_text += _text(dims)
        return SourceParameter(
            type=type_text,
            name=_text(name_node),
            annotations=_annotations(node),
        )

    if node.type == "spread_parameter":
        # String... values
        type_text = ""
        name = ""
        for child in node.named_children:
            if child.type == "modifiers":
                continue
            if child.type == "variable_declarator":
                name_node = child.child_by_field_name("name")
                name = _text(name_node) if name_node else _text(child)
            elif not type_text:
                type_text = _text(child)
        if not name:
            return None
        return SourceParameter(
            type=f"{type_text}...",
            name=name,
            annotations=_annotations(node),
        )

    return None


def _method(node: tree_sitter.Node) -> SourceMethod:
    name_node = node.child_by_field_name("name")
    type_node = node.child_by_field_name("type")
    params_node = node.child_by_field_name("parameters")

    params: list[SourceParameter] = []
    if params_node is not None:
        for child in params_node.named_children:
            p = _parameter(child)
            if p is not None:
                params.append(p)

    return SourceMethod(
        name=_text(name_node) if name_node else "",
        response_type=_text(type_node) if type_node else "void",
        parameters=tuple(params),
        annotations=_annotations(node),
        line=node.start_point[0] + 1,
    )
