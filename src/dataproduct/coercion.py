"""
Generic coercion facility.

A Coercer adapts an already-produced value into another, compatible type.
Adapters are registered explicitly per (source type, target type) pair;
a target class may also offer a ``__coerce_from__`` classmethod hook.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from .errors import CoercionError, UnsupportedCoercionError

logger = logging.getLogger(__name__)

T = TypeVar("T")

Adapter = Callable[[Any], Any]

COERCE_HOOK = "__coerce_from__"


class Coercer:
    """Registry of adapters between representation types."""

    def __init__(self) -> None:
        self._adapters: dict[tuple[type, type], Adapter] = {}

    def register(self, source: type, target: type, fn: Adapter) -> None:
        """Register an adapter turning instances of ``source`` into ``target``."""
        if (source, target) in self._adapters:
            raise ValueError(f"Adapter {source.__qualname__} -> {target.__qualname__} is already registered")
        self._adapters[(source, target)] = fn

    def adapter(self, source: type, target: type[T]) -> Callable[[Callable[[Any], T]], Callable[[Any], T]]:
        """Decorator form of ``register``."""

        def decorator(fn: Callable[[Any], T]) -> Callable[[Any], T]:
            self.register(source, target, fn)
            return fn

        return decorator

    def find_adapter(self, source_type: type, target: type) -> Adapter | None:
        """Find the adapter for the most specific registered base of ``source_type``."""
        for base in source_type.__mro__:
            fn = self._adapters.get((base, target))
            if fn is not None:
                return fn
        return None

    def can_coerce(self, source_type: type, target: type) -> bool:
        """Check whether values of ``source_type`` can be turned into ``target`` without asking hooks."""
        return issubclass(source_type, target) or self.find_adapter(source_type, target) is not None

    def coerce(self, value: Any, target: type[T]) -> T:
        """
        Adapt ``value`` into an instance of ``target``.

        Raises:
            UnsupportedCoercionError: If no adapter or hook can handle the value
            CoercionError: If an adapter returned something that is not a ``target``
        """
        if isinstance(value, target):
            return value

        source_type = type(value)
        fn = self.find_adapter(source_type, target)
        if fn is not None:
            logger.debug("Adapting %s to %s", source_type.__qualname__, target.__qualname__)
            return self._checked(fn(value), source_type, target)

        hook = getattr(target, COERCE_HOOK, None)
        if hook is not None:
            result = hook(value)
            if result is not NotImplemented:
                return self._checked(result, source_type, target)

        raise UnsupportedCoercionError(source_type, target)

    def copy(self) -> Coercer:
        """Create an independent coercer starting with the same adapters."""
        clone = Coercer()
        clone._adapters = dict(self._adapters)
        return clone

    def __len__(self) -> int:
        return len(self._adapters)

    @staticmethod
    def _checked(result: Any, source_type: type, target: type[T]) -> T:
        if not isinstance(result, target):
            raise CoercionError(
                source_type, target, f"adapter returned {type(result).__qualname__}"
            )
        return result


default_coercer = Coercer()
