"""
RepresentationKey implementation for provider tables.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Any, TypeVar

from .errors import DeclarationError

T = TypeVar("T")


def _registered_subclasses(want: abc.ABCMeta) -> list[type]:
    """Classes passed to ``want.register()``."""
    # The registry is only exposed through this debugging helper
    registry, _cache, _negative_cache, _version = abc._get_dump(want)  # type: ignore[attr-defined]
    return [cls for ref in registry if (cls := ref()) is not None]


def declared_subclass(cls: type, want: type, _seen: set[type] | None = None) -> bool:
    """
    Check whether ``cls`` is-a ``want`` through inheritance or ``ABCMeta.register``.

    Unlike ``issubclass`` this never consults ``__subclasshook__`` or runtime
    protocols, so a class with a ``__len__`` is not a ``Sized`` unless it says so.
    """
    if want in cls.__mro__:
        return True
    if not isinstance(want, abc.ABCMeta):
        return False

    seen = set() if _seen is None else _seen
    if want in seen:
        return False
    seen.add(want)

    for registered in _registered_subclasses(want):
        if declared_subclass(cls, registered, seen):
            return True

    return any(declared_subclass(cls, sub, seen) for sub in type.__subclasses__(want))


@dataclass(frozen=True)
class RepresentationKey:
    """A key that identifies one representation type a data package can produce."""

    target_type: type

    def __post_init__(self) -> None:
        if not isinstance(self.target_type, type):
            raise DeclarationError(self.target_type, "representation type must be a class")

    @classmethod
    def of(cls, target_type: type[T]) -> RepresentationKey:
        """Create a RepresentationKey for the given type."""
        return cls(target_type)

    def is_a(self, want: type[Any]) -> bool:
        """
        Check whether this representation satisfies a requested type.

        Only nominal subclassing and relations declared with ``ABCMeta.register``
        count. No structural matching is attempted.
        """
        return declared_subclass(self.target_type, want)

    def __str__(self) -> str:
        module = getattr(self.target_type, "__module__", "")
        qualname = getattr(self.target_type, "__qualname__", str(self.target_type))
        if module in ("builtins", ""):
            return qualname
        return f"{module}.{qualname}"

    def __hash__(self) -> int:
        return hash(self.target_type)
