"""
Provider binding definitions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .functoid import Functoid
from .keys import RepresentationKey


@dataclass(frozen=True)
class ProviderBinding:
    """Associates one representation type with the functoid that produces it."""

    key: RepresentationKey
    functoid: Functoid[Any]
    origin: str = "builder"

    @property
    def representation(self) -> type:
        return self.key.target_type

    def invoke(self, handle: Any) -> Any:
        """Call the provider for the given handle."""
        return self.functoid.call(handle)

    def __str__(self) -> str:
        impl = self.functoid.origin
        impl_name = getattr(impl, "__qualname__", None) or repr(impl)
        return f"{self.key} -> {impl_name} ({self.origin})"
