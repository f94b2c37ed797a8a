from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from .config.settings import INTERFACE_SUFFIX, OUTPUT_SUFFIX
from .models import FieldGroup, ImportSpec, MethodDecl, TaggedType


_QUALIFIER_RE = re.compile(r"(?<![\w.])([A-Za-z_]\w*)\.[A-Za-z_]")
_MAJOR_VERSION_RE = re.compile(r"^v\d+$")


def output_path_for(tagged: TaggedType) -> Path:
    """Where the interface for ``tagged`` is written: next to the struct's file."""
    stem = tagged.interface_name.lower().split(INTERFACE_SUFFIX.lower())[0]
    return Path(tagged.source_file).parent / f"{stem}{OUTPUT_SUFFIX}"


def _flatten(groups: Iterable[FieldGroup]) -> List[str]:
    parts: List[str] = []
    for group in groups:
        if group.names:
            parts.extend(f"{name} {group.type}" for name in group.names)
        else:
            parts.append(group.type)
    return parts


def format_field_list(groups: Optional[Sequence[FieldGroup]]) -> str:
    if groups is None:
        return "()"
    return "(" + ", ".join(_flatten(groups)) + ")"


def format_result_list(groups: Optional[Sequence[FieldGroup]]) -> str:
    if not groups:
        return ""
    parts = _flatten(groups)
    # special case: single result, no names
    if len(parts) == 1 and " " not in parts[0]:
        return " " + parts[0]
    return " (" + ", ".join(parts) + ")"


def render_method(method: MethodDecl) -> str:
    return method.name + format_field_list(method.params) + format_result_list(method.results)


def _package_name_for(spec: ImportSpec) -> str:
    if spec.alias:
        return spec.alias
    segments = [s for s in spec.path.split("/") if s]
    if not segments:
        return ""
    name = segments[-1]
    if _MAJOR_VERSION_RE.match(name) and len(segments) > 1:
        name = segments[-2]
    # gopkg.in/yaml.v3 style
    name = re.sub(r"\.v\d+$", "", name)
    return name.replace("-", "_")


def _qualifiers(method: MethodDecl) -> List[str]:
    found: List[str] = []
    for group in list(method.params or []) + list(method.results or []):
        found.extend(_QUALIFIER_RE.findall(group.type))
    return found


def required_imports(
    methods: Iterable[MethodDecl],
    imports_by_file: Mapping[Path, Sequence[ImportSpec]],
) -> List[ImportSpec]:
    """Resolve the package qualifiers used in method signatures.

    Each qualifier is looked up in the imports of the file that declares the
    method. Unresolved qualifiers are left for the formatter.
    """
    resolved: Dict[str, ImportSpec] = {}
    for method in methods:
        known: Dict[str, ImportSpec] = {}
        for spec in imports_by_file.get(method.source_file, ()):
            if spec.alias in ("_", "."):
                continue
            known[_package_name_for(spec)] = spec
        for qualifier in _qualifiers(method):
            spec = known.get(qualifier)
            if spec is not None:
                resolved[spec.path] = spec
    return [resolved[path] for path in sorted(resolved)]


def _render_import(spec: ImportSpec) -> str:
    if spec.alias:
        return f'{spec.alias} "{spec.path}"'
    return f'"{spec.path}"'


def render_interface(
    package_name: str,
    tagged: TaggedType,
    methods: Sequence[MethodDecl],
    imports: Sequence[ImportSpec] = (),
) -> str:
    lines = [f"package {package_name}", ""]
    if len(imports) == 1:
        lines.extend([f"import {_render_import(imports[0])}", ""])
    elif imports:
        lines.append("import (")
        lines.extend(f"\t{_render_import(spec)}" for spec in imports)
        lines.extend([")", ""])
    lines.append(f"type {tagged.interface_name} interface {{")
    lines.extend(f"\t{render_method(m)}" for m in methods)
    lines.append("}")
    return "\n".join(lines) + "\n"
