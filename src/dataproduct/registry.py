"""
Capability registry: which representations a data package type can produce.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from .bindings import ProviderBinding
from .config import PackageConfig
from .core import ProviderDef, provider_key_of
from .errors import ConfigurationError
from .functoid import member_functoid
from .keys import RepresentationKey

if TYPE_CHECKING:
    from .package import DataPackage

logger = logging.getLogger(__name__)

ProviderTable = Mapping[RepresentationKey, ProviderBinding]


def build_provider_table(cls: type[DataPackage]) -> ProviderTable:
    """
    Build the immutable provider table of a package class.

    Inherited bindings come first, in the order their classes registered
    them. The class's own decorated methods follow in class-body order, then
    its ``providers`` definition. Rebinding an inherited representation keeps
    its original position.

    Raises:
        ConfigurationError: If the class declares the same representation twice,
            or ``providers``/``config`` hold something unexpected
    """
    table: dict[RepresentationKey, ProviderBinding] = {}

    for base in reversed(cls.__mro__[1:]):
        inherited = base.__dict__.get("_provider_table")
        if inherited is not None:
            table.update(inherited)

    config = cls.__dict__.get("config")
    if config is not None and not isinstance(config, PackageConfig):
        raise ConfigurationError(cls, f"config must be a PackageConfig, got {type(config).__name__}")

    own: set[RepresentationKey] = set()

    def register(binding: ProviderBinding) -> None:
        if binding.key in own:
            raise ConfigurationError(cls, f"representation {binding.key} is bound more than once")
        own.add(binding.key)
        table[binding.key] = binding

    for name, member in list(cls.__dict__.items()):
        key = provider_key_of(member)
        if key is not None:
            register(ProviderBinding(key, member_functoid(cls, name), origin=f"method {name}"))

    definition = cls.__dict__.get("providers")
    if definition is not None:
        if not isinstance(definition, ProviderDef):
            raise ConfigurationError(cls, f"providers must be a ProviderDef, got {type(definition).__name__}")
        for binding in definition.bindings:
            register(binding)

    for binding in table.values():
        logger.debug("%s: %s", cls.__qualname__, binding)

    return MappingProxyType(table)


class CapabilityRegistry:
    """
    Answers which representation types a package type can produce.

    The registry holds no state of its own; everything it reports is derived
    from the static provider table and config of the package type. It never
    invokes a provider.
    """

    def package_type_of(self, package: Any) -> type[DataPackage]:
        """
        Normalize a package type or handle to the package type.

        Raises:
            ConfigurationError: If ``package`` is not a data package type or handle
        """
        from .package import DataPackage

        if isinstance(package, DataPackage):
            return type(package)
        if isinstance(package, type) and issubclass(package, DataPackage):
            return package
        raise ConfigurationError(package, "not a DataPackage type or handle")

    def capabilities(self, package: Any) -> list[type]:
        """
        Get the full ordered capability list.

        Returns the explicit ``config.provides`` list when one is declared,
        otherwise the representations of the provider table in registration order.

        Raises:
            ConfigurationError: If the explicit list is malformed
        """
        package_type = self.package_type_of(package)
        config = package_type.config

        if not config.has_explicit_list:
            return [key.target_type for key in package_type._provider_table]

        declared = config.provides
        if not isinstance(declared, tuple):
            raise ConfigurationError(
                package_type, f"explicit provides list must be a sequence of classes, got {declared!r}"
            )

        result: list[type] = []
        for entry in declared:
            if not isinstance(entry, type):
                raise ConfigurationError(package_type, f"explicit provides list contains non-class {entry!r}")
            if entry in result:
                raise ConfigurationError(package_type, f"explicit provides list repeats {entry.__qualname__}")
            result.append(entry)
        return result

    def provides(self, package: Any, want: type | None = None) -> list[type]:
        """
        Get the ordered capability list, optionally filtered.

        Args:
            package: A DataPackage subclass or handle
            want: Optional class; only representations that are-a ``want`` are kept

        Returns:
            The representation types, most preferred first

        Raises:
            ConfigurationError: If the package metadata cannot be determined
            TypeError: If ``want`` is not a class
        """
        if want is not None and not isinstance(want, type):
            raise TypeError(f"Requested representation must be a class, got {want!r}")

        capabilities = self.capabilities(package)
        if want is None:
            return capabilities

        return [rep for rep in capabilities if RepresentationKey.of(rep).is_a(want)]

    def count(self, package: Any, want: type | None = None) -> int:
        """Get the number of representations ``provides`` would return."""
        return len(self.provides(package, want))

    def bindings(self, package: Any) -> list[ProviderBinding]:
        """Get all provider bindings of a package, reachable or not, in table order."""
        return list(self.package_type_of(package)._provider_table.values())

    def binding_for(self, package: Any, representation: type) -> ProviderBinding | None:
        """Get the binding registered for exactly ``representation``, if any."""
        table = self.package_type_of(package)._provider_table
        return table.get(RepresentationKey.of(representation))

    def has_binding(self, package: Any, representation: type) -> bool:
        return self.binding_for(package, representation) is not None


default_registry = CapabilityRegistry()
