"""Checked types for README conversion options."""

from podreadme.domain.types import (
    IO,
    TYPE_NAMES,
    Dir,
    File,
    HeadingLevel,
    Indentation,
    ReadIO,
    TargetName,
    ValidatedType,
    ValidationFailure,
    WriteIO,
    get_type,
)

__version__ = "1.0.1"

__all__ = [
    "IO",
    "TYPE_NAMES",
    "Dir",
    "File",
    "HeadingLevel",
    "Indentation",
    "ReadIO",
    "TargetName",
    "ValidatedType",
    "ValidationFailure",
    "WriteIO",
    "get_type",
]
