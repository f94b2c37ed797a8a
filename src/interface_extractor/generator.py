from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

from .collector import collect_methods
from .config.settings import settings
from .filesystem import resolve_source_dir
from .formatter import SourceFormatter, get_formatter
from .models import GeneratedFile, GoPackage
from .parser import GoSourceParser, TreeSitterGoParser
from .render import output_path_for, render_interface, required_imports
from .scanner import scan_tagged_types

logger = logging.getLogger(__name__)


def generate_package(
    package: GoPackage,
    marker: str,
    formatter: SourceFormatter,
    write: bool = True,
    strict: bool = False,
) -> List[GeneratedFile]:
    """Run tag scan, method collection and rendering for one package.

    Each file is written as soon as it is formatted; a later failure leaves the
    earlier files in place.
    """
    tagged = scan_tagged_types(package, marker, strict=strict)
    methods = collect_methods(package, tagged, strict=strict)
    imports_by_file = {f.path: f.imports for f in package.files}

    generated: List[GeneratedFile] = []
    for name in sorted(tagged):
        info = tagged[name]
        found = methods.get(name, [])
        path = output_path_for(info)
        source = render_interface(package.name, info, found, required_imports(found, imports_by_file))
        formatted = formatter.format(path, source)
        if write:
            path.write_text(formatted, encoding="utf-8")
            logger.info(f"Wrote {info.interface_name} ({len(found)} methods) to {path}")
        generated.append(GeneratedFile(
            path=path,
            package=package.name,
            type_name=name,
            interface_name=info.interface_name,
            source=formatted,
            methods=[m.name for m in found],
        ))
    return generated


def generate_interfaces(
    root: Union[str, Path],
    marker: Optional[str] = None,
    *,
    parser: Optional[GoSourceParser] = None,
    formatter: Optional[SourceFormatter] = None,
    write: bool = True,
    strict: Optional[bool] = None,
) -> List[GeneratedFile]:
    """Generate ``<Type>Interface`` declarations for every tagged struct under root.

    ``root`` may be a directory or any file inside it. Packages are processed in
    name order and tagged types in name order, so output is deterministic.
    """
    source_dir = resolve_source_dir(Path(root))
    marker = marker if marker is not None else settings.MARKER
    strict = settings.STRICT if strict is None else strict
    parser = parser or TreeSitterGoParser()
    formatter = formatter or get_formatter(settings.FORMATTER)

    logger.info(f"Generating interfaces in {source_dir} (marker={marker!r}, formatter={formatter.name})")
    packages = parser.parse_dir(source_dir)

    generated: List[GeneratedFile] = []
    for name in sorted(packages):
        generated.extend(generate_package(packages[name], marker, formatter, write=write, strict=strict))
    return generated
