"""
SimpleDataPackage: data packages backed by one raw source and one thaw codec.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from .errors import (
    ConfigurationError,
    DataPackageError,
    ParseError,
    SourceDiscoveryNotImplementedError,
)
from .functoid import Functoid, method_functoid
from .package import DataPackage
from .sources import Source, as_source

logger = logging.getLogger(__name__)


class SimpleDataPackage(DataPackage):
    """
    A quick way to publish a structure stored in a freeze/thaw format.

    The loader is ``config.loader_override`` or a ``thaw`` static method on
    the class; the raw text comes from ``config.source_override``. Every
    representation listed in ``config.provides`` that has no provider of its
    own is produced by thawing the source and coercing the result:

        class Countries(SimpleDataPackage):
            config = PackageConfig(
                provides=(dict,),
                loader_override=yaml_thaw,
                source_override=ResourceSource("mydata", "countries.yaml"),
            )

        Countries.get()  # {'nz': 'New Zealand', ...}

    A simple package can later be replaced by a full DataPackage with the
    same name without its consumers noticing.
    """

    @classmethod
    def loader(cls) -> Callable[[str], Any] | None:
        """Determine the thaw codec, or None if the package declares none."""
        if cls.config.loader_override is not None:
            return cls.config.loader_override

        thaw = getattr(cls, "thaw", None)
        if callable(thaw):
            return thaw

        return None

    @classmethod
    def source(cls) -> Source:
        """
        Determine the raw-data source.

        Raises:
            SourceDiscoveryNotImplementedError: If no source_override is configured.
                Finding data embedded alongside the package is not supported.
            ConfigurationError: If the configured source is not usable
        """
        configured = cls.config.source_override
        if configured is None:
            raise SourceDiscoveryNotImplementedError(cls)

        try:
            return as_source(configured)
        except TypeError as exc:
            raise ConfigurationError(cls, str(exc)) from exc

    def load(self) -> Any:
        """
        Read the raw source and thaw it.

        Raises:
            ConfigurationError: If no loader is available
            SourceNotFoundError: If the source has no content
            ParseError: If the codec rejects the content
        """
        loader = self.loader()
        if loader is None:
            raise ConfigurationError(type(self), "no loader_override and no thaw method")

        source = self.source()
        raw = source.read()
        logger.debug("Thawing %s from %s", self.name, source)

        try:
            return loader(raw)
        except DataPackageError:
            raise
        except Exception as exc:
            codec = getattr(loader, "__qualname__", type(loader).__name__)
            raise ParseError(codec, str(exc)) from exc

    @classmethod
    def default_provider(cls, representation: type) -> Functoid[Any] | None:  # noqa: ARG003
        """Every unbound representation comes from the thawed structure."""
        return method_functoid(cls.load)
