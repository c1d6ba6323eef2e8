"""
dataproduct - publish data as named, versioned packages.

A data package is a class whose value is a data structure rather than
behaviour. Consumers ask it what it ``provides`` and ``get`` the data in the
representation they want, without caring how it is stored or loaded.
"""

from .coercion import Coercer, default_coercer
from .config import PackageConfig
from .core import ProviderDef, provider
from .errors import (
    CoercionError,
    ConfigurationError,
    DataPackageError,
    DeclarationError,
    ParseError,
    RepresentationNotProvidedError,
    SourceDiscoveryNotImplementedError,
    SourceNotFoundError,
    UnsupportedCoercionError,
)
from .keys import RepresentationKey
from .package import DataPackage
from .registry import CapabilityRegistry
from .resolver import PackageResolver
from .simple import SimpleDataPackage
from .sources import FileSource, ResourceSource, TextSource
from .thaw import json_thaw, yaml_thaw

__version__ = "0.1.0"

__all__ = [
    "CapabilityRegistry",
    "Coercer",
    "CoercionError",
    "ConfigurationError",
    "DataPackage",
    "DataPackageError",
    "DeclarationError",
    "FileSource",
    "PackageConfig",
    "PackageResolver",
    "ParseError",
    "ProviderDef",
    "RepresentationKey",
    "RepresentationNotProvidedError",
    "ResourceSource",
    "SimpleDataPackage",
    "SourceDiscoveryNotImplementedError",
    "SourceNotFoundError",
    "TextSource",
    "UnsupportedCoercionError",
    "default_coercer",
    "json_thaw",
    "provider",
    "yaml_thaw",
]
