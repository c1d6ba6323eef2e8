"""
Declaration DSL for binding representation types to providers.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from .bindings import ProviderBinding
from .functoid import (
    Functoid,
    class_functoid,
    function_functoid,
    method_functoid,
    value_functoid,
)
from .keys import RepresentationKey

T = TypeVar("T")

PROVIDER_MARKER = "__dataproduct_provides__"


@dataclass(frozen=True)
class ProviderDef:
    """
    An ordered collection of provider bindings.

    Assign one to the ``providers`` attribute of a DataPackage subclass:

        class Config(DataPackage):
            providers = ProviderDef()
            providers.make(IniMap).using().func(load_ini)
    """

    bindings: list[ProviderBinding]

    def __init__(self) -> None:
        # Use object.__setattr__ since we're frozen
        object.__setattr__(self, "bindings", [])

    def add_binding(self, binding: ProviderBinding) -> None:
        """Add a binding to this definition."""
        new_bindings = self.bindings + [binding]
        object.__setattr__(self, "bindings", new_bindings)

    def make(self, target_type: type[T]) -> ProviderBindingBuilder[T]:
        """Create a binding builder for the given representation type."""
        return ProviderBindingBuilder(target_type, self)

    def representations(self) -> list[type]:
        return [binding.representation for binding in self.bindings]

    def __len__(self) -> int:
        return len(self.bindings)


class ProviderBindingBuilder[T]:
    """Builder for creating provider bindings."""

    def __init__(self, target_type: type[T], definition: ProviderDef):
        self._key = RepresentationKey.of(target_type)
        self._definition = definition

    def using(self) -> UsingBuilder[T]:
        """Create a UsingBuilder for fluent binding configuration."""

        def finalize_binding(functoid: Functoid[T]) -> None:
            self._definition.add_binding(ProviderBinding(self._key, functoid))

        return UsingBuilder(finalize_binding)


class UsingBuilder[T]:
    """Builder that picks how the representation gets produced."""

    def __init__(self, finalize_callback: Callable[[Functoid[T]], None]):
        self._finalize_callback = finalize_callback

    def value(self, instance: T) -> None:
        """Bind to a specific instance value."""
        self._finalize_callback(value_functoid(instance))

    def type(self, cls: type[T]) -> None:
        """Bind to a class that will be instantiated with no arguments."""
        self._finalize_callback(class_functoid(cls))

    def func(self, factory: Callable[..., T]) -> None:
        """Bind to a factory taking nothing, or the package handle."""
        self._finalize_callback(function_functoid(factory))

    def method(self, fn: Callable[[Any], T]) -> None:
        """Bind to a function that always receives the package handle."""
        self._finalize_callback(method_functoid(fn))


def provider(target_type: type[T]) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Mark a package method as the provider of ``target_type``.

    The method stays an ordinary method and can still be called directly.

        class Config(DataPackage):
            @provider(IniMap)
            def as_ini(self) -> IniMap:
                ...
    """
    key = RepresentationKey.of(target_type)

    def decorator(fn: Callable[..., T]) -> Callable[..., T]:
        target = fn.__func__ if isinstance(fn, staticmethod | classmethod) else fn
        setattr(target, PROVIDER_MARKER, key)
        return fn

    return decorator


def provider_key_of(member: Any) -> RepresentationKey | None:
    """Return the representation a class member was marked with, if any."""
    target = member.__func__ if isinstance(member, staticmethod | classmethod) else member
    key = getattr(target, PROVIDER_MARKER, None)
    return key if isinstance(key, RepresentationKey) else None
