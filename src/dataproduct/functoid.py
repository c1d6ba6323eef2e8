"""
Functoids: uniform wrappers around the callables that produce representations.

Every functoid is invoked with the package handle. Whether the wrapped
callable actually receives the handle depends on its signature.
"""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from .errors import DeclarationError


class Functoid[T](ABC):
    """A zero-argument factory bound to one representation."""

    @abstractmethod
    def call(self, handle: Any) -> T:
        """Produce a value for the given handle."""

    @property
    @abstractmethod
    def origin(self) -> Any:
        """The object this functoid wraps."""


class ValueFunctoid[T](Functoid[T]):
    def __init__(self, value: T):
        self._value = value

    def call(self, handle: Any) -> T:  # noqa: ARG002
        return self._value

    @property
    def origin(self) -> Any:
        return self._value

    def __repr__(self) -> str:
        return f"ValueFunctoid({self._value!r})"


class ClassFunctoid[T](Functoid[T]):
    def __init__(self, cls: type[T]):
        self._cls = cls

    def call(self, handle: Any) -> T:  # noqa: ARG002
        return self._cls()

    @property
    def origin(self) -> Any:
        return self._cls

    def __repr__(self) -> str:
        return f"ClassFunctoid({self._cls.__qualname__})"


class FunctionFunctoid[T](Functoid[T]):
    """Wraps a plain factory. It receives the handle only if it declares a parameter for it."""

    def __init__(self, factory: Callable[..., T], pass_handle: bool):
        self._factory = factory
        self._pass_handle = pass_handle

    def call(self, handle: Any) -> T:
        if self._pass_handle:
            return self._factory(handle)
        return self._factory()

    @property
    def origin(self) -> Any:
        return self._factory

    @property
    def passes_handle(self) -> bool:
        return self._pass_handle

    def __repr__(self) -> str:
        name = getattr(self._factory, "__qualname__", repr(self._factory))
        return f"FunctionFunctoid({name}, pass_handle={self._pass_handle})"


def _required_positional_count(factory: Callable[..., Any]) -> int:
    try:
        signature = inspect.signature(factory)
    except (TypeError, ValueError):
        # Builtins without introspectable signatures are treated as zero-argument
        return 0

    return sum(
        1
        for param in signature.parameters.values()
        if param.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
        and param.default is inspect.Parameter.empty
    )


def value_functoid[T](value: T) -> Functoid[T]:
    """Create a functoid that always returns the same value."""
    return ValueFunctoid(value)


def class_functoid[T](cls: type[T]) -> Functoid[T]:
    """Create a functoid that instantiates a class with no arguments."""
    return ClassFunctoid(cls)


def function_functoid[T](factory: Callable[..., T]) -> FunctionFunctoid[T]:
    """
    Create a functoid from a factory taking either nothing or the handle.

    Raises:
        DeclarationError: If the factory requires more than one positional argument
    """
    required = _required_positional_count(factory)
    if required > 1:
        reason = f"a provider takes at most one argument (the handle), this one takes {required}"
        raise DeclarationError(factory, reason)
    return FunctionFunctoid(factory, pass_handle=required == 1)


def method_functoid[T](method: Callable[..., T]) -> FunctionFunctoid[T]:
    """Create a functoid from a function that is always called with the handle, like a method."""
    return FunctionFunctoid(method, pass_handle=True)


class MemberFunctoid[T](Functoid[T]):
    """Looks a provider method up on the handle by name and calls it."""

    def __init__(self, owner: type, name: str):
        self._owner = owner
        self._name = name

    def call(self, handle: Any) -> T:
        return getattr(handle, self._name)()

    @property
    def origin(self) -> Any:
        return self._owner.__dict__.get(self._name)

    @property
    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"MemberFunctoid({self._owner.__qualname__}.{self._name})"


def member_functoid[T](owner: type, name: str) -> Functoid[T]:
    """Create a functoid that calls ``handle.<name>()``, honouring overrides in subclasses."""
    return MemberFunctoid(owner, name)
