"""Generate Go interfaces from the method sets of marker-tagged structs.

Exposes a simple API:
    generate_interfaces(root, marker=None, ...) -> list[GeneratedFile]
which writes one ``<type>.interface.go`` per tagged struct under root.
"""

from .generator import generate_interfaces  # noqa: F401

__all__ = ["generate_interfaces"]
