"""
Per-package configuration.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class PackageConfig:
    """
    Static configuration attached to a data package type.

    Attributes:
        provides: Explicit ordered capability list. When set it is the single
            source of truth for ``provides`` and ``get``; bindings missing from
            it stay callable but unreachable through the resolver.
        loader_override: Codec used by simple packages to thaw raw content.
        source_override: Raw-data source used by simple packages.
    """

    provides: tuple[type, ...] | None = None
    loader_override: Callable[[str], Any] | None = None
    source_override: Any = None

    def __post_init__(self) -> None:
        # Accept any iterable for convenience, store an immutable copy.
        # Non-iterables are left alone so the registry can report them.
        if self.provides is not None and not isinstance(self.provides, tuple | str):
            try:
                object.__setattr__(self, "provides", tuple(self.provides))
            except TypeError:
                pass

    @property
    def has_explicit_list(self) -> bool:
        return self.provides is not None

    @staticmethod
    def default() -> PackageConfig:
        return _DEFAULT


_DEFAULT = PackageConfig()
