from __future__ import annotations

import logging
from typing import Dict, List, Mapping

from .errors import DuplicateDeclarationError
from .models import GoPackage, MethodDecl, TaggedType

logger = logging.getLogger(__name__)


def receiver_type_name(expr_text: str) -> str:
    """Resolve a receiver type expression to the bare type name.

    One level of pointer indirection is unwrapped, so ``*T`` and ``T`` both give
    ``T``. Anything else (generic, qualified or parenthesized receivers) gives "".
    """
    name = expr_text[1:].lstrip() if expr_text.startswith("*") else expr_text
    if not name.isidentifier():
        return ""
    return name


def collect_methods(
    package: GoPackage,
    tagged: Mapping[str, TaggedType],
    strict: bool = False,
) -> Dict[str, List[MethodDecl]]:
    """Second pass: gather the methods of every tagged type across all files."""
    methods: Dict[str, List[MethodDecl]] = {}
    for go_file in package.sorted_files():
        for method in go_file.methods:
            recv = receiver_type_name(method.receiver_type)
            if not recv or recv not in tagged:
                continue
            collected = methods.setdefault(recv, [])
            if any(m.name == method.name for m in collected):
                message = f"Method {recv}.{method.name} is declared more than once ({method.source_file}:{method.line})"
                if strict:
                    raise DuplicateDeclarationError(message)
                logger.warning(message)
            collected.append(method)
    for name, found in methods.items():
        logger.debug(f"{name}: {', '.join(m.name for m in found)}")
    return methods
