"""
DataPackage: base class for packages whose value is data, not behaviour.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, ClassVar, Self

from .config import PackageConfig
from .core import ProviderDef
from .functoid import Functoid
from .registry import ProviderTable, build_provider_table


class DataPackage:
    """
    Base class for data packages.

    A subclass names one data product and declares the representations it
    can be delivered as. Consumers only ever call ``provides`` and ``get``:

        class GlobalConfig(DataPackage):
            @provider(IniMap)
            def as_ini(self) -> IniMap:
                return IniMap.parse(RAW)

        GlobalConfig.provides()        # [IniMap]
        GlobalConfig.get()             # IniMap instance
        GlobalConfig.get(XmlDoc)       # None

    Both methods work on the class and on handles (instances) alike. The
    provider table is built once, when the subclass is defined.
    """

    name: ClassVar[str] = "dataproduct.DataPackage"
    version: ClassVar[str] = "0.01"
    config: ClassVar[PackageConfig] = PackageConfig.default()
    providers: ClassVar[ProviderDef | None] = None

    _provider_table: ClassVar[ProviderTable] = MappingProxyType({})

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "name" not in cls.__dict__:
            cls.name = f"{cls.__module__}.{cls.__qualname__}"
        cls._provider_table = build_provider_table(cls)

    @property
    def package_type(self) -> type[Self]:
        """The package type this handle was created for."""
        return type(self)

    @classmethod
    def new(cls) -> Self:
        """Create a lightweight handle to the data."""
        return cls()

    @classmethod
    def provides(cls, want: type | None = None) -> list[type]:
        """
        List the representations this package can deliver its data as.

        The first entry is what ``get`` returns when called with the same
        argument. With ``want`` only representations that are-a ``want`` remain.
        """
        from .resolver import default_resolver

        return default_resolver.registry.provides(cls, want)

    @classmethod
    def count(cls, want: type | None = None) -> int:
        """Number of representations ``provides`` would list."""
        from .resolver import default_resolver

        return default_resolver.registry.count(cls, want)

    @classmethod
    def get(cls, want: type | None = None) -> Any | None:
        """
        Load the data and return it, optionally as a representation that is-a ``want``.

        Returns None if the package cannot provide the data in that form.
        """
        from .resolver import default_resolver

        return default_resolver.get(cls, want)

    @classmethod
    def require(cls, want: type | None = None) -> Any:
        """Like ``get``, but raise RepresentationNotProvidedError instead of returning None."""
        from .resolver import default_resolver

        return default_resolver.require(cls, want)

    @classmethod
    def default_provider(cls, representation: type) -> Functoid[Any] | None:  # noqa: ARG003
        """
        Provider used for a listed representation that has no binding.

        The base class has none; subclasses that derive every representation
        from one underlying structure override this.
        """
        return None

    def __repr__(self) -> str:
        return f"<{type(self).__qualname__} handle of {self.name} {self.version}>"
