"""
Exception hierarchy for data packages.

Every error raised by the library derives from DataPackageError. An absent
representation is not an error: ``get`` returns None for it.
"""

from __future__ import annotations

from typing import Any


def _type_name(value: Any) -> str:
    return getattr(value, "__qualname__", None) or getattr(value, "__name__", None) or str(value)


class DataPackageError(Exception):
    """Base class for all data package errors."""


class ConfigurationError(DataPackageError):
    """Raised when a package type's provider metadata cannot be determined."""

    def __init__(self, package_type: Any, reason: str):
        self.package_type = package_type
        self.reason = reason
        super().__init__(f"Invalid data package {_type_name(package_type)}: {reason}")


class DeclarationError(ConfigurationError, TypeError):
    """Raised while a package class body runs, for a provider declaration that cannot work."""

    def __init__(self, declared: Any, reason: str):
        self.declared = declared
        self.package_type = None
        self.reason = reason
        DataPackageError.__init__(self, f"Invalid provider declaration {_type_name(declared)}: {reason}")


class CoercionError(DataPackageError):
    """Raised when the chosen provider fails or its result cannot be adapted."""

    def __init__(self, package_type: Any, target_type: Any, reason: str):
        self.package_type = package_type
        self.target_type = target_type
        self.reason = reason
        super().__init__(
            f"Cannot produce {_type_name(target_type)} from {_type_name(package_type)}: {reason}"
        )


class UnsupportedCoercionError(CoercionError):
    """Raised by a Coercer that has no way to adapt a value to the target type."""

    def __init__(self, source_type: Any, target_type: Any):
        self.source_type = source_type
        super().__init__(source_type, target_type, "no adapter registered")


class RepresentationNotProvidedError(DataPackageError, LookupError):
    """Raised by ``require`` when no declared representation matches the request."""

    def __init__(self, package_type: Any, want: Any = None):
        self.package_type = package_type
        self.want = want
        if want is None:
            msg = f"{_type_name(package_type)} provides no representations"
        else:
            msg = f"{_type_name(package_type)} cannot provide {_type_name(want)}"
        super().__init__(msg)


class SourceNotFoundError(DataPackageError, LookupError):
    """Raised when a raw-data source has no content to offer."""

    def __init__(self, location: Any, detail: str | None = None):
        self.location = location
        msg = f"No raw data found at {location}"
        if detail:
            msg += f" ({detail})"
        super().__init__(msg)


class ParseError(DataPackageError, ValueError):
    """Raised when a codec cannot thaw raw content into a structure."""

    def __init__(self, codec: str, detail: str):
        self.codec = codec
        self.detail = detail
        super().__init__(f"{codec} codec failed: {detail}")


class SourceDiscoveryNotImplementedError(DataPackageError, NotImplementedError):
    """Raised when a package relies on default raw-data discovery, which does not exist yet."""

    def __init__(self, package_type: Any):
        self.package_type = package_type
        super().__init__(
            f"{_type_name(package_type)} has no source_override and default source "
            "discovery is not implemented"
        )
