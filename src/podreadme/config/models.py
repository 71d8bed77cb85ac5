"""Pydantic option models with code-baked defaults.

Sparse TOML contract: defaults baked here, podreadme.toml only contains
overrides. Each field is checked by its rule from
:mod:`podreadme.domain.types`, attached as ``Annotated`` metadata.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel

from podreadme.domain.handles import DirectoryHandle, FileHandle
from podreadme.domain.types import Dir, File, HeadingLevel, Indentation, TargetName

TargetNameField = Annotated[str, TargetName()]
IndentationField = Annotated[int | str, Indentation()]
HeadingLevelField = Annotated[int | str, HeadingLevel()]
DirField = Annotated[DirectoryHandle, Dir()]
FileField = Annotated[FileHandle, File()]


class ReadmeOptions(BaseModel):
    """Options handed to the README converter, frozen after construction."""

    model_config = {"frozen": True, "extra": "forbid"}

    target: TargetNameField = "readme"
    verbatim_indent: IndentationField = 2
    heading_level: HeadingLevelField = 1
    base_dir: DirField | None = None
    input_file: FileField | None = None
    output_file: FileField | None = None
