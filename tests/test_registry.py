#!/usr/bin/env python3
"""
Unit tests for the capability registry and provides().
"""

import unittest
from abc import ABC
from collections.abc import Sized
from typing import Protocol, runtime_checkable

from dataproduct import (
    CapabilityRegistry,
    ConfigurationError,
    DataPackage,
    PackageConfig,
    ProviderDef,
    provider,
)


class IniMap(dict):
    pass


class JsonDoc(str):
    pass


class XmlDoc(str):
    pass


class Document(ABC):
    pass


Document.register(JsonDoc)


class Config(DataPackage):
    config = PackageConfig(provides=(IniMap, JsonDoc))

    @provider(JsonDoc)
    def as_json(self) -> JsonDoc:
        return JsonDoc('{"section": {}}')

    @provider(IniMap)
    def as_ini(self) -> IniMap:
        return IniMap(section={})


class Empty(DataPackage):
    pass


class TestExplicitList(unittest.TestCase):
    """Test packages that declare an explicit capability list."""

    def test_explicit_list_is_returned_in_order(self):
        """Test that provides() returns the explicit list exactly."""
        self.assertEqual(Config.provides(), [IniMap, JsonDoc])

    def test_filter_keeps_matching_entries(self):
        """Test filtering to a single declared type."""
        self.assertEqual(Config.provides(JsonDoc), [JsonDoc])
        self.assertEqual(Config.provides(IniMap), [IniMap])

    def test_filter_by_base_class(self):
        """Test that a filter matches every entry that is-a the requested type."""
        self.assertEqual(Config.provides(object), [IniMap, JsonDoc])
        self.assertEqual(Config.provides(dict), [IniMap])
        self.assertEqual(Config.provides(str), [JsonDoc])

    def test_filter_honours_registered_abc_relations(self):
        """Test that ABC registration counts as a declared is-a relation."""
        self.assertEqual(Config.provides(Document), [JsonDoc])

    def test_filter_with_undeclared_type(self):
        """Test that an unknown filter yields an empty list."""
        self.assertEqual(Config.provides(XmlDoc), [])

    def test_explicit_list_hides_unlisted_bindings(self):
        """Test that bindings missing from the explicit list are not reported."""

        class Partial(DataPackage):
            config = PackageConfig(provides=[JsonDoc])

            @provider(IniMap)
            def as_ini(self) -> IniMap:
                return IniMap()

            @provider(JsonDoc)
            def as_json(self) -> JsonDoc:
                return JsonDoc("{}")

        self.assertEqual(Partial.provides(), [JsonDoc])
        self.assertEqual(Partial.provides(IniMap), [])
        # Still directly callable
        self.assertEqual(Partial().as_ini(), IniMap())

    def test_explicit_list_without_bindings(self):
        """Test that an explicit list is authoritative even without bindings."""

        class Declared(DataPackage):
            config = PackageConfig(provides=(IniMap,))

        self.assertEqual(Declared.provides(), [IniMap])

    def test_empty_explicit_list(self):
        """Test that an explicit empty list overrides registered bindings."""

        class Hidden(DataPackage):
            config = PackageConfig(provides=())

            @provider(IniMap)
            def as_ini(self) -> IniMap:
                return IniMap()

        self.assertEqual(Hidden.provides(), [])


class Blob:
    """Has a __len__ but never claims to be Sized."""

    def __len__(self) -> int:
        return 0


class DeclaredBlob:
    def __len__(self) -> int:
        return 0


Sized.register(DeclaredBlob)


@runtime_checkable
class Renderable(Protocol):
    def render(self) -> str: ...


class Page:
    def render(self) -> str:
        return "<p/>"


class TestDeclaredRelationsOnly(unittest.TestCase):
    """Test that filtering never matches by shape."""

    def test_subclasshook_is_ignored(self):
        """Test that an ABC's __subclasshook__ does not make a match."""
        calls: list[str] = []

        class Blobs(DataPackage):
            @provider(Blob)
            def as_blob(self) -> Blob:
                calls.append("blob")
                return Blob()

        self.assertTrue(issubclass(Blob, Sized))
        self.assertEqual(Blobs.provides(Sized), [])
        self.assertIsNone(Blobs.get(Sized))
        self.assertEqual(calls, [])

    def test_registered_virtual_subclass_matches(self):
        """Test that ABCMeta.register is a declared relation."""

        class Blobs(DataPackage):
            providers = ProviderDef()
            providers.make(Blob).using().type(Blob)
            providers.make(DeclaredBlob).using().type(DeclaredBlob)

        self.assertEqual(Blobs.provides(Sized), [DeclaredBlob])
        self.assertIsInstance(Blobs.get(Sized), DeclaredBlob)

    def test_registration_on_a_sub_abc_matches(self):
        """Test that registering with a more specific ABC satisfies its bases."""

        class SubDocument(Document):
            pass

        class Note(str):
            pass

        SubDocument.register(Note)

        class Notes(DataPackage):
            providers = ProviderDef()
            providers.make(Note).using().value(Note("n"))

        self.assertEqual(Notes.provides(Document), [Note])

    def test_runtime_protocol_is_ignored(self):
        """Test that a runtime-checkable Protocol does not match structurally."""

        class Pages(DataPackage):
            providers = ProviderDef()
            providers.make(Page).using().type(Page)

        self.assertTrue(issubclass(Page, Renderable))
        self.assertEqual(Pages.provides(Renderable), [])

    def test_explicit_protocol_subclass_matches(self):
        """Test that inheriting from the Protocol is a nominal relation."""

        class ExplicitPage(Renderable):
            def render(self) -> str:
                return "<p/>"

        class Pages(DataPackage):
            providers = ProviderDef()
            providers.make(ExplicitPage).using().type(ExplicitPage)

        self.assertEqual(Pages.provides(Renderable), [ExplicitPage])


class TestProvidesIsPure(unittest.TestCase):
    """Test that provides() only reads metadata."""

    def test_provides_never_invokes_providers(self):
        """Test that listing and filtering leave every provider uncalled."""
        calls: list[str] = []

        class Recorded(DataPackage):
            providers = ProviderDef()
            providers.make(JsonDoc).using().func(lambda: calls.append("json") or JsonDoc("{}"))

            @provider(IniMap)
            def as_ini(self) -> IniMap:
                calls.append("ini")
                return IniMap()

        self.assertEqual(Recorded.provides(), [IniMap, JsonDoc])
        self.assertEqual(Recorded.provides(JsonDoc), [JsonDoc])
        self.assertEqual(Recorded.provides(XmlDoc), [])
        self.assertEqual(Recorded.count(), 2)
        self.assertEqual(Recorded().provides(IniMap), [IniMap])
        self.assertEqual(calls, [])

        Recorded.get(JsonDoc)
        self.assertEqual(calls, ["json"])


class TestRegisteredBindings(unittest.TestCase):
    """Test packages without an explicit list."""

    def test_registration_order(self):
        """Test that decorated methods are listed in class-body order."""

        class Ordered(DataPackage):
            @provider(XmlDoc)
            def as_xml(self) -> XmlDoc:
                return XmlDoc("<a/>")

            @provider(IniMap)
            def as_ini(self) -> IniMap:
                return IniMap()

            @provider(JsonDoc)
            def as_json(self) -> JsonDoc:
                return JsonDoc("{}")

        self.assertEqual(Ordered.provides(), [XmlDoc, IniMap, JsonDoc])

    def test_methods_before_provider_def(self):
        """Test that decorated methods come before ProviderDef bindings."""

        class Mixed(DataPackage):
            providers = ProviderDef()
            providers.make(JsonDoc).using().value(JsonDoc("{}"))

            @provider(IniMap)
            def as_ini(self) -> IniMap:
                return IniMap()

        self.assertEqual(Mixed.provides(), [IniMap, JsonDoc])

    def test_no_duplicates_and_stable(self):
        """Test that repeated calls return equal lists without duplicates."""

        class Many(DataPackage):
            providers = ProviderDef()
            providers.make(IniMap).using().type(IniMap)
            providers.make(JsonDoc).using().value(JsonDoc("{}"))
            providers.make(XmlDoc).using().func(lambda: XmlDoc("<a/>"))

        first = Many.provides()
        second = Many.provides()

        self.assertEqual(first, second)
        self.assertEqual(len(first), 3)
        self.assertEqual(set(first), {IniMap, JsonDoc, XmlDoc})

    def test_empty_package(self):
        """Test that a package without providers provides nothing."""
        self.assertEqual(Empty.provides(), [])
        self.assertEqual(Empty.provides(IniMap), [])
        self.assertEqual(Empty.count(), 0)

    def test_base_class_provides_nothing(self):
        """Test that DataPackage itself is a valid, empty package."""
        self.assertEqual(DataPackage.provides(), [])


class TestCount(unittest.TestCase):
    """Test the count form of provides."""

    def test_count_matches_provides(self):
        """Test that count() equals the length of provides()."""
        self.assertEqual(Config.count(), 2)
        self.assertEqual(Config.count(JsonDoc), 1)
        self.assertEqual(Config.count(XmlDoc), 0)


class TestHandles(unittest.TestCase):
    """Test that handles answer like their package type."""

    def test_handle_provides(self):
        """Test calling provides() on an instance."""
        handle = Config.new()

        self.assertIsInstance(handle, Config)
        self.assertIs(handle.package_type, Config)
        self.assertEqual(handle.provides(), Config.provides())
        self.assertEqual(handle.provides(JsonDoc), [JsonDoc])

    def test_registry_accepts_handles(self):
        """Test that the registry normalizes handles to their type."""
        registry = CapabilityRegistry()
        self.assertIs(registry.package_type_of(Config()), Config)
        self.assertEqual(registry.provides(Config()), [IniMap, JsonDoc])


class TestConfigurationErrors(unittest.TestCase):
    """Test metadata that cannot be determined."""

    def test_not_a_package(self):
        """Test that arbitrary objects are rejected."""
        registry = CapabilityRegistry()

        with self.assertRaises(ConfigurationError):
            registry.provides(dict)

        with self.assertRaises(ConfigurationError):
            registry.provides("Config")

    def test_explicit_list_with_non_class(self):
        """Test that an explicit list of strings is malformed."""

        class Malformed(DataPackage):
            config = PackageConfig(provides=(IniMap, "JsonDoc"))  # type: ignore[arg-type]

        with self.assertRaises(ConfigurationError) as ctx:
            Malformed.provides()

        self.assertIs(ctx.exception.package_type, Malformed)

    def test_explicit_list_as_string(self):
        """Test that a bare string is not taken as a list of names."""

        class Stringly(DataPackage):
            config = PackageConfig(provides="IniMap")  # type: ignore[arg-type]

        with self.assertRaises(ConfigurationError):
            Stringly.provides()

    def test_explicit_list_with_duplicates(self):
        """Test that repeated entries are rejected."""

        class Repeated(DataPackage):
            config = PackageConfig(provides=(IniMap, JsonDoc, IniMap))

        with self.assertRaises(ConfigurationError):
            Repeated.provides()

    def test_filter_must_be_a_class(self):
        """Test that filtering by a non-class is a caller error."""
        with self.assertRaises(TypeError):
            Config.provides("JsonDoc")  # type: ignore[arg-type]


class TestRegistryInspection(unittest.TestCase):
    """Test binding lookups."""

    def test_binding_for(self):
        """Test looking up the binding of one representation."""
        registry = CapabilityRegistry()

        binding = registry.binding_for(Config, IniMap)
        self.assertIsNotNone(binding)
        self.assertIs(binding.representation, IniMap)
        self.assertIn("as_ini", str(binding))

        self.assertIsNone(registry.binding_for(Config, XmlDoc))
        self.assertTrue(registry.has_binding(Config, JsonDoc))
        self.assertFalse(registry.has_binding(Empty, JsonDoc))

    def test_bindings_in_table_order(self):
        """Test that bindings() follows registration order, not the explicit list."""
        registry = CapabilityRegistry()
        self.assertEqual([b.representation for b in registry.bindings(Config)], [JsonDoc, IniMap])


if __name__ == "__main__":
    unittest.main()
