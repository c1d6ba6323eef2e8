"""
Resolution of data packages into concrete representations.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .bindings import ProviderBinding
from .coercion import Coercer, default_coercer
from .errors import (
    CoercionError,
    ConfigurationError,
    RepresentationNotProvidedError,
    SourceDiscoveryNotImplementedError,
    UnsupportedCoercionError,
)
from .keys import RepresentationKey
from .registry import CapabilityRegistry, default_registry

if TYPE_CHECKING:
    from .package import DataPackage

logger = logging.getLogger(__name__)

# Raised as-is by providers: they describe a broken declaration, not a failed load
_PASSTHROUGH_ERRORS = (ConfigurationError, SourceDiscoveryNotImplementedError)


class PackageResolver:
    """
    Produces data instances from package types.

    ``get`` picks the first representation ``provides`` reports for the
    request and invokes exactly one provider for it. When that provider or
    the following coercion fails the call fails; other candidates are never
    tried.
    """

    def __init__(self, registry: CapabilityRegistry | None = None, coercer: Coercer | None = None):
        self._registry = registry if registry is not None else default_registry
        self._coercer = coercer if coercer is not None else default_coercer

    @property
    def registry(self) -> CapabilityRegistry:
        return self._registry

    @property
    def coercer(self) -> Coercer:
        return self._coercer

    def get(self, package: Any, want: type | None = None) -> Any | None:
        """
        Get the package data, optionally as a representation that is-a ``want``.

        Args:
            package: A DataPackage subclass or handle
            want: Optional requested class

        Returns:
            The data instance, or None when the package provides nothing matching

        Raises:
            ConfigurationError: If the package metadata cannot be determined
            CoercionError: If the chosen provider or the coercion step fails
        """
        package_type = self._registry.package_type_of(package)
        candidates = self._registry.provides(package_type, want)
        if not candidates:
            logger.debug("%s provides nothing for %s", package_type.__qualname__, want)
            return None

        chosen = candidates[0]
        handle = package_type.new()
        return self.coerce(handle, chosen)

    def require(self, package: Any, want: type | None = None) -> Any:
        """
        Like ``get``, but a missing representation is an error.

        Raises:
            RepresentationNotProvidedError: If the package provides nothing matching
        """
        package_type = self._registry.package_type_of(package)
        if not self._registry.provides(package_type, want):
            raise RepresentationNotProvidedError(package_type, want)
        return self.get(package_type, want)

    def coerce(self, handle: DataPackage, target: type) -> Any:
        """
        Produce an instance of ``target`` from a package handle.

        Raises:
            CoercionError: If no provider can produce ``target``, the provider fails,
                or its result cannot be adapted
        """
        package_type = type(handle)
        binding = self._select_provider(package_type, target)
        logger.debug("Resolving %s as %s via %s", package_type.__qualname__, target.__qualname__, binding)

        try:
            value = binding.invoke(handle)
        except _PASSTHROUGH_ERRORS:
            raise
        except Exception as exc:
            produced_as = binding.representation.__qualname__
            raise CoercionError(package_type, target, f"provider for {produced_as} failed: {exc}") from exc

        if isinstance(value, target):
            return value

        try:
            return self._coercer.coerce(value, target)
        except UnsupportedCoercionError as exc:
            raise CoercionError(
                package_type, target, f"provider returned {type(value).__qualname__} which cannot be adapted"
            ) from exc
        except CoercionError as exc:
            raise CoercionError(package_type, target, exc.reason) from exc
        except Exception as exc:
            raise CoercionError(package_type, target, f"adapter failed: {exc}") from exc

    def _select_provider(self, package_type: type[DataPackage], target: type) -> ProviderBinding:
        binding = self._registry.binding_for(package_type, target)
        if binding is not None:
            return binding

        default = package_type.default_provider(target)
        if default is not None:
            return ProviderBinding(RepresentationKey.of(target), default, origin="default")

        # Adapt from a reachable representation that has a provider of its own
        for rep in self._registry.capabilities(package_type):
            source = self._registry.binding_for(package_type, rep)
            if source is not None and self._coercer.can_coerce(rep, target):
                return source

        raise CoercionError(package_type, target, "no provider is bound and no adapter applies")


default_resolver = PackageResolver()
