#!/usr/bin/env python3
"""
Demonstration of dataproduct data packages.

This demo shows:
1. Declaring providers with the @provider decorator
2. Declaring providers with a ProviderDef
3. Explicit capability lists
4. Filtering with provides / get
5. Coercing a provided value into a compatible type
6. Absent results versus failures
"""

import configparser
import json
import logging
from abc import ABC

from dataproduct import (
    CoercionError,
    DataPackage,
    PackageConfig,
    ProviderDef,
    default_coercer,
    provider,
)

RAW_INI = """
[section]
foo = 1
bar = 2
"""


class Document(ABC):
    """Marker for document-like representations."""


class IniMap(dict[str, dict[str, str]]):
    """Sections of an INI file."""

    @classmethod
    def parse(cls, text: str) -> "IniMap":
        parser = configparser.ConfigParser()
        parser.read_string(text)
        return cls({name: dict(parser[name]) for name in parser.sections()})


class JsonDoc(str):
    """A serialized JSON document."""


class XmlDoc(str):
    """A serialized XML document."""


Document.register(JsonDoc)


class GlobalConfig(DataPackage):
    """Configuration shared by every service."""

    version = "1.2"

    @provider(IniMap)
    def as_ini(self) -> IniMap:
        return IniMap.parse(RAW_INI)

    @provider(JsonDoc)
    def as_json(self) -> JsonDoc:
        return JsonDoc(json.dumps(self.as_ini(), sort_keys=True))


def load_limits() -> dict[str, int]:
    return {"max_connections": 10, "timeout": 30}


class Limits(DataPackage):
    """Operational limits, listed JSON first."""

    providers = ProviderDef()
    providers.make(dict).using().func(load_limits)
    providers.make(JsonDoc).using().method(lambda handle: JsonDoc(json.dumps(handle.get(dict))))

    config = PackageConfig(provides=(JsonDoc, dict))


class Broken(DataPackage):
    @provider(IniMap)
    def as_ini(self) -> IniMap:
        raise OSError("disk on fire")


def main() -> None:
    logging.basicConfig(level=logging.INFO)

    print("=== Data packages demo ===\n")

    print("1. Decorated providers:")
    print("-" * 30)
    print(f"{GlobalConfig.name} {GlobalConfig.version} provides {GlobalConfig.provides()}")
    print(f"Default representation: {GlobalConfig.get()!r}")

    print("\n2. Filtering by type:")
    print("-" * 30)
    print(f"Documents: {GlobalConfig.provides(Document)}")
    print(f"As a document: {GlobalConfig.get(Document)!r}")
    print(f"As XML: {GlobalConfig.get(XmlDoc)!r}")

    print("\n3. Explicit capability list:")
    print("-" * 30)
    print(f"Limits provides {Limits.provides()} ({Limits.count()} representations)")
    print(f"Preferred: {Limits.get()!r}")
    print(f"As dict: {Limits.get(dict)!r}")

    print("\n4. Coercion into a registered target:")
    print("-" * 30)

    class Settings(dict[str, str]):
        pass

    default_coercer.register(IniMap, Settings, lambda ini: Settings(ini["section"]))

    class SettingsOnly(DataPackage):
        config = PackageConfig(provides=(Settings, IniMap))

        @provider(IniMap)
        def as_ini(self) -> IniMap:
            return IniMap.parse(RAW_INI)

    print(f"Settings: {SettingsOnly.get()!r}")

    print("\n5. Failures are not absences:")
    print("-" * 30)
    try:
        Broken.get()
    except CoercionError as e:
        print(f"Caught expected failure: {e}")
    print(f"Broken still provides {Broken.provides()}")

    print("\nDemo completed successfully!")


if __name__ == "__main__":
    main()
