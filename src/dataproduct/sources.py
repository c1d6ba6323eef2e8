"""
Raw-data sources for simple data packages.

A source knows where the unparsed text behind a package lives and returns
it from ``read()``, or raises SourceNotFoundError.
"""

from __future__ import annotations

import importlib.resources
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from .errors import ParseError, SourceNotFoundError


@runtime_checkable
class Source(Protocol):
    """Anything that can hand out raw package content."""

    def read(self) -> str: ...


@dataclass(frozen=True)
class TextSource:
    """Content held in memory, usually a module-level string literal."""

    text: str

    def read(self) -> str:
        return self.text

    def __str__(self) -> str:
        return f"<text {len(self.text)} chars>"


@dataclass(frozen=True)
class FileSource:
    """Content stored in a file on disk."""

    path: Path
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", Path(self.path))

    def read(self) -> str:
        try:
            return self.path.read_text(encoding=self.encoding)
        except FileNotFoundError as exc:
            raise SourceNotFoundError(self.path) from exc
        except IsADirectoryError as exc:
            raise SourceNotFoundError(self.path, "is a directory") from exc
        except UnicodeDecodeError as exc:
            raise ParseError(self.encoding, f"{self.path}: {exc}") from exc

    def __str__(self) -> str:
        return str(self.path)


@dataclass(frozen=True)
class ResourceSource:
    """Content shipped as a resource file inside an importable package."""

    package: str
    resource: str
    encoding: str = "utf-8"

    def read(self) -> str:
        try:
            return importlib.resources.files(self.package).joinpath(self.resource).read_text(encoding=self.encoding)
        except ModuleNotFoundError as exc:
            raise SourceNotFoundError(self, f"package {self.package} is not importable") from exc
        except (FileNotFoundError, IsADirectoryError) as exc:
            raise SourceNotFoundError(self) from exc
        except UnicodeDecodeError as exc:
            raise ParseError(self.encoding, f"{self}: {exc}") from exc

    def __str__(self) -> str:
        return f"{self.package}:{self.resource}"


def as_source(value: object) -> Source:
    """
    Normalize a configured source.

    Strings are taken as literal content and path-like objects as files.

    Raises:
        TypeError: If the value is none of the supported kinds
    """
    if isinstance(value, str):
        return TextSource(value)
    if isinstance(value, os.PathLike):
        return FileSource(Path(value))
    if isinstance(value, Source):
        return value
    raise TypeError(f"Cannot use {type(value).__name__} as a data source")
