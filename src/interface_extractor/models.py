from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FieldGroup(BaseModel):
    """One parameter or result declaration, e.g. ``a, b int``.

    ``names`` is empty for unnamed entries. ``type`` is the normalized type text,
    including the ``...`` prefix of a variadic parameter.
    """

    names: List[str] = Field(default_factory=list)
    type: str


class ImportSpec(BaseModel):
    path: str
    alias: Optional[str] = None


class TypeDecl(BaseModel):
    name: str
    is_struct: bool
    doc: List[str] = Field(default_factory=list)
    line: int = 0


class MethodDecl(BaseModel):
    name: str
    receiver_type: str
    params: Optional[List[FieldGroup]] = None
    results: Optional[List[FieldGroup]] = None
    source_file: Path
    line: int = 0


class GoFile(BaseModel):
    path: Path
    package: str
    types: List[TypeDecl] = Field(default_factory=list)
    methods: List[MethodDecl] = Field(default_factory=list)
    imports: List[ImportSpec] = Field(default_factory=list)


class GoPackage(BaseModel):
    name: str
    files: List[GoFile] = Field(default_factory=list)

    def sorted_files(self) -> List[GoFile]:
        return sorted(self.files, key=lambda f: str(f.path))


class TaggedType(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    interface_name: str
    source_file: Path

    @classmethod
    def for_struct(cls, name: str, source_file: Path) -> "TaggedType":
        return cls(name=name, interface_name=f"{name}Interface", source_file=source_file)


class GeneratedFile(BaseModel):
    path: Path
    package: str
    type_name: str
    interface_name: str
    source: str
    methods: List[str] = Field(default_factory=list)
