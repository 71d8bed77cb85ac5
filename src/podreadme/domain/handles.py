"""Handle variants accepted by the checked types.

Four variants make up the handle union:

- ``DirectoryHandle`` and ``FileHandle`` wrap a path string without
  touching the filesystem at construction time.
- ``StreamHandle`` wraps an open stream, usually built from a raw
  descriptor via :meth:`StreamHandle.from_fd`.
- ``InMemoryStreamHandle`` wraps a string-backed buffer.

Membership checks in :mod:`podreadme.domain.types` are plain
``isinstance`` tests against these classes.
"""

from __future__ import annotations

import io
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from types import TracebackType
from typing import IO, Any, Self


@dataclass(frozen=True)
class DirectoryHandle:
    """A directory path. Existence is checked on demand, never on creation."""

    path: str

    def as_path(self) -> Path:
        return Path(self.path)

    def exists(self) -> bool:
        return self.as_path().exists()

    def is_dir(self) -> bool:
        return self.as_path().is_dir()

    def file(self, *parts: str) -> FileHandle:
        """Return a file handle for *parts* below this directory."""
        return FileHandle(str(self.as_path().joinpath(*parts)))

    def subdir(self, *parts: str) -> DirectoryHandle:
        """Return a directory handle for *parts* below this directory."""
        return DirectoryHandle(str(self.as_path().joinpath(*parts)))

    def __fspath__(self) -> str:
        return self.path

    def __str__(self) -> str:
        return self.path


@dataclass(frozen=True)
class FileHandle:
    """A file path. The file does not have to exist."""

    path: str

    def as_path(self) -> Path:
        return Path(self.path)

    def exists(self) -> bool:
        return self.as_path().is_file()

    @property
    def basename(self) -> str:
        return self.as_path().name

    def dir(self) -> DirectoryHandle:
        """Return the parent directory."""
        return DirectoryHandle(str(self.as_path().parent))

    def __fspath__(self) -> str:
        return self.path

    def __str__(self) -> str:
        return self.path


class _StreamMixin(ABC):
    """Stream surface shared by both stream variants."""

    @property
    @abstractmethod
    def _io(self) -> IO[Any]:
        """The wrapped stream."""
        ...

    def read(self, size: int = -1) -> Any:
        return self._io.read(size)

    def readline(self) -> Any:
        return self._io.readline()

    def write(self, data: Any) -> int:
        return self._io.write(data)

    def flush(self) -> None:
        self._io.flush()

    def close(self) -> None:
        self._io.close()

    @property
    def closed(self) -> bool:
        return self._io.closed

    def readable(self) -> bool:
        return self._io.readable()

    def writable(self) -> bool:
        return self._io.writable()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


@dataclass(frozen=True, eq=False)
class StreamHandle(_StreamMixin):
    """An open stream with the mode it was opened in."""

    stream: IO[Any]
    mode: str

    @property
    def _io(self) -> IO[Any]:
        return self.stream

    @classmethod
    def from_fd(cls, fd: int, mode: str) -> StreamHandle:
        """Open a new stream on a duplicate of *fd*.

        The caller's descriptor stays open when the handle is closed.
        """
        dup = os.dup(fd)
        try:
            stream = os.fdopen(dup, mode)
        except Exception:
            os.close(dup)
            raise
        return cls(stream=stream, mode=mode)

    def fileno(self) -> int:
        return self.stream.fileno()


@dataclass(frozen=True, eq=False)
class InMemoryStreamHandle(_StreamMixin):
    """A string-backed stream."""

    buffer: io.StringIO = field(default_factory=io.StringIO)

    @property
    def _io(self) -> IO[Any]:
        return self.buffer

    @classmethod
    def from_text(cls, text: str) -> InMemoryStreamHandle:
        return cls(buffer=io.StringIO(text))

    def getvalue(self) -> str:
        return self.buffer.getvalue()


Handle = DirectoryHandle | FileHandle | StreamHandle | InMemoryStreamHandle

STREAM_HANDLES: tuple[type, ...] = (StreamHandle, InMemoryStreamHandle)


def is_raw_os_handle(value: object) -> bool:
    """Whether *value* is an unwrapped OS-level handle.

    Matches any object other than a handle or an int whose ``fileno()``
    returns a descriptor. Never raises.
    """
    if isinstance(value, (bool, int, *STREAM_HANDLES)):
        return False
    fileno = getattr(value, "fileno", None)
    if not callable(fileno):
        return False
    try:
        fd = fileno()
    except (OSError, ValueError):
        return False
    return isinstance(fd, int) and fd >= 0
