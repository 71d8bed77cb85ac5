"""Checked types for README conversion options.

Each type is a :class:`ValidatedType`: a name, a membership predicate,
an error message and an ordered list of coercions. Validation accepts a
value that already satisfies the predicate, otherwise tries the first
coercion whose source shape matches and re-checks the result.

INVARIANT: every rule is built once per process (``functools.cache`` on
its factory) and never mutated. :meth:`ValidatedType.plus_coercions`
returns a new rule.
"""

from __future__ import annotations

import functools
import logging
import os
import re
import reprlib
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from podreadme.domain.handles import (
    STREAM_HANDLES,
    DirectoryHandle,
    FileHandle,
    StreamHandle,
    is_raw_os_handle,
)

logger = logging.getLogger(__name__)

Predicate = Callable[[Any], bool]
Transform = Callable[[Any], Any]

_DIGITS = re.compile(r"[0-9]+")
_HEADING_LEVEL = re.compile(r"[123]")
_WORD = re.compile(r"\w+")


class ValidationFailure(ValueError):
    """A value was rejected by a checked type."""

    def __init__(self, type_name: str, value: Any, reason: str) -> None:
        self.type_name = type_name
        self.value = value
        self.reason = reason
        super().__init__(f"{type_name}: {reason} (got {_describe(value)})")


def _describe(value: Any) -> str:
    """Shortened repr; ints past the str conversion limit render as their type."""
    try:
        if isinstance(value, int):
            return repr(value)
        return reprlib.repr(value)
    except ValueError:
        return f"<{type(value).__name__}>"


@dataclass(frozen=True)
class Coercion:
    """Convert a recognised raw shape into the canonical representation."""

    matches: Predicate
    transform: Transform


def _safe(predicate: Predicate, value: Any) -> bool:
    try:
        return bool(predicate(value))
    except Exception:
        return False


@dataclass(frozen=True)
class ValidatedType:
    """A named membership rule with optional coercions.

    Attributes:
        name: Type name used in failure messages.
        constraint: Membership predicate.
        message: Builds the failure reason from the rejected value.
        coercions: Tried in order when the predicate fails.
    """

    name: str
    constraint: Predicate
    message: Callable[[Any], str]
    coercions: tuple[Coercion, ...] = ()

    @property
    def has_coercion(self) -> bool:
        return bool(self.coercions)

    def check(self, value: Any) -> bool:
        """Return whether *value* is a member. Never raises."""
        return _safe(self.constraint, value)

    def coerce(self, value: Any) -> Any:
        """Apply the first matching coercion, or return *value* unchanged."""
        if self.check(value):
            return value
        for coercion in self.coercions:
            if _safe(coercion.matches, value):
                result = coercion.transform(value)
                logger.debug(
                    "Coerced %s value %s to %s", self.name, _describe(value), _describe(result)
                )
                return result
        return value

    def validate(self, value: Any) -> Any:
        """Return the canonical value or raise :class:`ValidationFailure`."""
        if self.check(value):
            return value
        try:
            coerced = self.coerce(value)
        except (OSError, ValueError) as exc:
            raise ValidationFailure(self.name, value, self.message(value)) from exc
        if coerced is not value and self.check(coerced):
            return coerced
        raise ValidationFailure(self.name, value, self.message(value))

    def __call__(self, value: Any) -> Any:
        return self.validate(value)

    def plus_coercions(self, *pairs: tuple[Predicate, Transform]) -> ValidatedType:
        """Return a copy with *pairs* appended to the coercion list."""
        extra = tuple(Coercion(matches, transform) for matches, transform in pairs)
        return replace(self, coercions=self.coercions + extra)

    def __get_pydantic_core_schema__(
        self, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Use this rule as ``Annotated`` metadata on a pydantic field."""
        return core_schema.no_info_plain_validator_function(self.validate)

    def __repr__(self) -> str:
        return f"ValidatedType({self.name!r})"


# ---------------------------------------------------------------------------
# Source-shape matchers
# ---------------------------------------------------------------------------


def _is_text(value: Any) -> bool:
    return isinstance(value, str | int) and not isinstance(value, bool)


def _is_path_like(value: Any) -> bool:
    return isinstance(value, str | os.PathLike) and not isinstance(
        value, DirectoryHandle | FileHandle
    )


def _is_fd(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _is_indentation(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value >= 2
    # compare the text form, int() refuses very long digit strings
    return (
        isinstance(value, str)
        and _DIGITS.fullmatch(value) is not None
        and value.lstrip("0") not in ("", "1")
    )


def _raw_fileno(value: Any) -> int:
    return value.fileno()


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


def _built(rule: ValidatedType) -> ValidatedType:
    logger.debug("Constructed checked type %s", rule.name)
    return rule


@functools.cache
def Indentation() -> ValidatedType:  # noqa: N802
    """Indentation for verbatim text: an integer >= 2."""
    return _built(
        ValidatedType(
            name="Indentation",
            constraint=_is_indentation,
            message=lambda v: "must be an integer >= 2",
        )
    )


@functools.cache
def HeadingLevel() -> ValidatedType:  # noqa: N802
    """Heading level for plugin headings: 1, 2 or 3.

    Level 4 is excluded since some plugins use subheadings.
    """
    return _built(
        ValidatedType(
            name="HeadingLevel",
            constraint=lambda v: _is_text(v) and _HEADING_LEVEL.fullmatch(str(v)) is not None,
            message=lambda v: "must be an integer between 1 and 3",
        )
    )


@functools.cache
def TargetName() -> ValidatedType:  # noqa: N802
    """Name of an output target, e.g. ``"readme"``."""
    return _built(
        ValidatedType(
            name="TargetName",
            constraint=lambda v: isinstance(v, str) and _WORD.fullmatch(v) is not None,
            message=lambda v: "must be an alphanumeric string",
        )
    )


@functools.cache
def _base_dir() -> ValidatedType:
    return ValidatedType(
        name="Dir",
        constraint=lambda v: isinstance(v, DirectoryHandle) and v.is_dir(),
        message=lambda v: "must be a directory",
    )


@functools.cache
def Dir() -> ValidatedType:  # noqa: N802
    """An existing directory, given as a string or a DirectoryHandle."""
    rule = _base_dir().plus_coercions((_is_path_like, lambda v: DirectoryHandle(os.fspath(v))))
    return _built(rule)


@functools.cache
def _base_file() -> ValidatedType:
    return ValidatedType(
        name="File",
        constraint=lambda v: isinstance(v, FileHandle),
        message=lambda v: "must be a file",
    )


@functools.cache
def File() -> ValidatedType:  # noqa: N802
    """A file path, given as a string or a FileHandle."""
    rule = _base_file().plus_coercions((_is_path_like, lambda v: FileHandle(os.fspath(v))))
    return _built(rule)


@functools.cache
def IO() -> ValidatedType:  # noqa: N802
    """An open stream handle or in-memory stream handle."""
    return _built(
        ValidatedType(
            name="IO",
            constraint=lambda v: isinstance(v, STREAM_HANDLES),
            message=lambda v: "must be an IO::Handle or IO::String",
        )
    )


@functools.cache
def ReadIO() -> ValidatedType:  # noqa: N802
    """A stream to read from.

    Raw descriptors are opened for reading. Raw OS handles are opened
    for writing.
    """
    rule = IO().plus_coercions(
        (_is_fd, lambda v: StreamHandle.from_fd(v, "r")),
        (is_raw_os_handle, lambda v: StreamHandle.from_fd(_raw_fileno(v), "w")),
    )
    return _built(replace(rule, name="ReadIO"))


@functools.cache
def WriteIO() -> ValidatedType:  # noqa: N802
    """A stream to write to. Raw descriptors and OS handles are opened for writing."""
    rule = IO().plus_coercions(
        (_is_fd, lambda v: StreamHandle.from_fd(v, "w")),
        (is_raw_os_handle, lambda v: StreamHandle.from_fd(_raw_fileno(v), "w")),
    )
    return _built(replace(rule, name="WriteIO"))


TYPE_REGISTRY: dict[str, Callable[[], ValidatedType]] = {
    "Dir": Dir,
    "File": File,
    "Indentation": Indentation,
    "IO": IO,
    "ReadIO": ReadIO,
    "WriteIO": WriteIO,
    "HeadingLevel": HeadingLevel,
    "TargetName": TargetName,
}

TYPE_NAMES: tuple[str, ...] = tuple(TYPE_REGISTRY)


def get_type(name: str) -> ValidatedType:
    """Return the checked type called *name*, building it on first use."""
    try:
        factory = TYPE_REGISTRY[name]
    except KeyError:
        msg = f"Unknown checked type {name!r}; expected one of {', '.join(TYPE_NAMES)}"
        raise KeyError(msg) from None
    return factory()
