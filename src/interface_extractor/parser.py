from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional

import tree_sitter_go
from tree_sitter import Language, Node, Parser

from .errors import GoParseError
from .filesystem import discover_go_files
from .models import FieldGroup, GoFile, GoPackage, ImportSpec, MethodDecl, TypeDecl

logger = logging.getLogger(__name__)

GO_LANGUAGE = Language(tree_sitter_go.language())


class GoSourceParser(ABC):
    """Port for turning Go sources into the package/file model."""

    @abstractmethod
    def parse_file(self, path: Path) -> GoFile:
        """Parse a single Go file.

        Raises:
            GoParseError: If the file cannot be read or contains syntax errors
        """
        ...

    def parse_dir(self, source_dir: Path) -> Dict[str, GoPackage]:
        """Parse every Go file in source_dir, grouped by declared package name."""
        packages: Dict[str, GoPackage] = {}
        for path in discover_go_files(source_dir):
            go_file = self.parse_file(path)
            package = packages.setdefault(go_file.package, GoPackage(name=go_file.package))
            package.files.append(go_file)
        logger.info(f"Parsed {sum(len(p.files) for p in packages.values())} files in {len(packages)} package(s) from {source_dir}")
        return packages


def _text(node: Optional[Node], source: bytes) -> str:
    if node is None:
        return ""
    return source[node.start_byte:node.end_byte].decode("utf-8")


# Leaf-like nodes whose children must not be split into separate tokens
_ATOMIC_NODES = {"interpreted_string_literal", "raw_string_literal", "rune_literal"}
_ARRAY_NODES = {"slice_type", "array_type", "implicit_length_array_type"}
_NO_SPACE_AFTER = {"[", "(", "*", ".", "...", "~"}
_NO_SPACE_BEFORE = {"]", ")", ",", ";", ".", "["}

# A `[` that opens a slice or array type is spaced like a word: `p []byte`
_OPEN_ARRAY = "\0["


def _type_tokens(node: Node, source: bytes, out: List[str]) -> None:
    if node.type == "comment":
        return
    if node.child_count == 0 or node.type in _ATOMIC_NODES:
        text = _text(node, source)
        if not text.strip():
            # newline terminators inside struct and interface bodies
            if "\n" in text:
                out.append(";")
            return
        out.append(text)
        return
    for i, child in enumerate(node.children):
        if i == 0 and child.type == "[" and node.type in _ARRAY_NODES:
            out.append(_OPEN_ARRAY)
        else:
            _type_tokens(child, source, out)


def _needs_space(prev2: Optional[str], prev: str, tok: str) -> bool:
    if prev == "{":
        return tok != "}"
    if tok == "}":
        return prev != "{"
    if tok == "{":
        return False
    if tok == "(":
        return prev == ")"
    if tok == "<-":
        return prev != "chan"
    if prev == "<-":
        return prev2 == "chan"
    if tok in _NO_SPACE_BEFORE:
        return False
    if prev in (",", ";"):
        return True
    if prev in ("]", _OPEN_ARRAY) or prev in _NO_SPACE_AFTER:
        return False
    return True


def type_text(node: Optional[Node], source: bytes) -> str:
    """Print a type node on one line the way the Go printer does, without comments."""
    if node is None:
        return ""
    tokens: List[str] = []
    _type_tokens(node, source, tokens)

    cleaned: List[str] = []
    for tok in tokens:
        if tok in (")", "}") and cleaned and cleaned[-1] in (",", ";"):
            cleaned.pop()
        if tok == ";" and (not cleaned or cleaned[-1] in ("{", ";")):
            continue
        cleaned.append(tok)

    parts: List[str] = []
    for i, tok in enumerate(cleaned):
        if i and _needs_space(cleaned[i - 2] if i > 1 else None, cleaned[i - 1], tok):
            parts.append(" ")
        parts.append("[" if tok == _OPEN_ARRAY else tok)
    return "".join(parts)


def _first_error(node: Node) -> Optional[Node]:
    if node.is_error or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def _comment_text(node: Node, source: bytes) -> str:
    text = _text(node, source)
    if text.startswith("//"):
        text = text.replace("\r", "")
    return text


def _doc_comments(node: Node, source: bytes) -> List[str]:
    """Return the comment group that ends on the line right above node.

    Comments on the same line as the previous declaration belong to that
    declaration, and a blank line ends the group.
    """
    anchor = node.prev_named_sibling
    while anchor is not None and anchor.type == "comment":
        anchor = anchor.prev_named_sibling
    anchor_row = anchor.end_point[0] if anchor is not None else -1

    group: List[Node] = []
    next_row = node.start_point[0]
    sibling = node.prev_named_sibling
    while sibling is not None and sibling.type == "comment":
        if sibling.start_point[0] == anchor_row:
            break
        if not group and sibling.end_point[0] + 1 != next_row:
            break
        if group and sibling.end_point[0] + 1 < next_row:
            break
        group.append(sibling)
        next_row = sibling.start_point[0]
        sibling = sibling.prev_named_sibling
    return [_comment_text(c, source) for c in reversed(group)]


def _field_groups(node: Node, source: bytes) -> List[FieldGroup]:
    groups: List[FieldGroup] = []
    for child in node.named_children:
        if child.type == "parameter_declaration":
            rendered = type_text(child.child_by_field_name("type"), source)
        elif child.type == "variadic_parameter_declaration":
            rendered = "..." + type_text(child.child_by_field_name("type"), source)
        else:
            continue
        names = [_text(n, source) for n in child.children_by_field_name("name")]
        groups.append(FieldGroup(names=names, type=rendered))
    return groups


def _import_specs(node: Node, source: bytes) -> List[ImportSpec]:
    specs: List[ImportSpec] = []
    candidates = []
    for child in node.named_children:
        if child.type == "import_spec":
            candidates.append(child)
        elif child.type == "import_spec_list":
            candidates.extend(c for c in child.named_children if c.type == "import_spec")
    for spec in candidates:
        path = _text(spec.child_by_field_name("path"), source).strip("\"`")
        alias_node = spec.child_by_field_name("name")
        specs.append(ImportSpec(path=path, alias=_text(alias_node, source) if alias_node else None))
    return specs


def _type_decls(node: Node, source: bytes) -> List[TypeDecl]:
    # A grouped declaration shares the doc comment above the `type` keyword
    doc = _doc_comments(node, source)
    decls: List[TypeDecl] = []
    for child in node.named_children:
        if child.type not in ("type_spec", "type_alias"):
            continue
        type_node = child.child_by_field_name("type")
        decls.append(TypeDecl(
            name=_text(child.child_by_field_name("name"), source),
            is_struct=type_node is not None and type_node.type == "struct_type",
            doc=doc,
            line=child.start_point[0] + 1,
        ))
    return decls


def _method_decl(node: Node, source: bytes, path: Path) -> Optional[MethodDecl]:
    receiver = node.child_by_field_name("receiver")
    receivers = [c for c in receiver.named_children if c.type == "parameter_declaration"] if receiver else []
    if not receivers:
        return None
    receiver_type = type_text(receivers[0].child_by_field_name("type"), source)

    params_node = node.child_by_field_name("parameters")
    result_node = node.child_by_field_name("result")
    results: Optional[List[FieldGroup]] = None
    if result_node is not None:
        if result_node.type == "parameter_list":
            results = _field_groups(result_node, source)
        else:
            results = [FieldGroup(type=type_text(result_node, source))]

    return MethodDecl(
        name=_text(node.child_by_field_name("name"), source),
        receiver_type=receiver_type,
        params=_field_groups(params_node, source) if params_node is not None else None,
        results=results,
        source_file=path,
        line=node.start_point[0] + 1,
    )


class TreeSitterGoParser(GoSourceParser):
    """GoSourceParser backed by tree-sitter and the tree-sitter-go grammar."""

    def __init__(self) -> None:
        self._parser = Parser(GO_LANGUAGE)

    def parse_file(self, path: Path) -> GoFile:
        try:
            source = path.read_bytes()
        except OSError as e:
            raise GoParseError(path, str(e)) from e
        return self.parse_source(source, path)

    def parse_source(self, source: bytes, path: Path) -> GoFile:
        try:
            source.decode("utf-8")
        except UnicodeDecodeError as e:
            raise GoParseError(path, f"invalid UTF-8: {e}") from e

        tree = self._parser.parse(source)
        root = tree.root_node
        if root.has_error:
            bad = _first_error(root) or root
            kind = f"missing {bad.type}" if bad.is_missing else "syntax error"
            raise GoParseError(path, kind, line=bad.start_point[0] + 1, column=bad.start_point[1] + 1)

        package: Optional[str] = None
        type_decls: List[TypeDecl] = []
        methods: List[MethodDecl] = []
        imports: List[ImportSpec] = []
        for node in root.named_children:
            if node.type == "package_clause":
                ident = next((c for c in node.named_children if c.type == "package_identifier"), None)
                package = _text(ident, source)
            elif node.type == "import_declaration":
                imports.extend(_import_specs(node, source))
            elif node.type == "type_declaration":
                type_decls.extend(_type_decls(node, source))
            elif node.type == "method_declaration":
                method = _method_decl(node, source, path)
                if method is not None:
                    methods.append(method)

        if not package:
            raise GoParseError(path, "missing package clause")

        logger.debug(f"{path}: package {package}, {len(type_decls)} type(s), {len(methods)} method(s)")
        return GoFile(path=path, package=package, types=type_decls, methods=methods, imports=imports)
