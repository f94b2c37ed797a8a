from __future__ import annotations

import logging
from typing import Dict

from .errors import DuplicateDeclarationError
from .models import GoPackage, TaggedType

logger = logging.getLogger(__name__)


def is_marker_line(comment_text: str, marker: str) -> bool:
    """Exact, byte-for-byte comparison of one comment against the marker."""
    return comment_text == marker


def scan_tagged_types(package: GoPackage, marker: str, strict: bool = False) -> Dict[str, TaggedType]:
    """First pass: find struct types whose doc comment carries the marker.

    Files are visited in sorted path order. When two files tag the same name the
    later one wins, unless ``strict`` turns that into an error.
    """
    tagged: Dict[str, TaggedType] = {}
    for go_file in package.sorted_files():
        for decl in go_file.types:
            if not decl.is_struct:
                continue
            if not any(is_marker_line(line, marker) for line in decl.doc):
                continue
            previous = tagged.get(decl.name)
            if previous is not None and previous.source_file != go_file.path:
                message = (
                    f"Struct '{decl.name}' in package '{package.name}' is tagged in both "
                    f"{previous.source_file} and {go_file.path}"
                )
                if strict:
                    raise DuplicateDeclarationError(message)
                logger.warning(f"{message}; using {go_file.path}")
            tagged[decl.name] = TaggedType.for_struct(decl.name, go_file.path)
            logger.debug(f"Tagged struct {decl.name} at {go_file.path}:{decl.line}")
    logger.info(f"Package {package.name}: {len(tagged)} tagged struct(s)")
    return tagged
