#!/usr/bin/env python3
"""
Demonstration of SimpleDataPackage with YAML and JSON sources.
"""

import tempfile
from pathlib import Path

from dataproduct import (
    FileSource,
    PackageConfig,
    SimpleDataPackage,
    SourceDiscoveryNotImplementedError,
    TextSource,
    json_thaw,
    yaml_thaw,
)


class Children(SimpleDataPackage):
    config = PackageConfig(
        provides=(dict,),
        loader_override=yaml_thaw,
        source_override=TextSource(
            """
foo: bar
this: that
children:
  - one
  - two
  - three
  - four
"""
        ),
    )


class Undiscovered(SimpleDataPackage):
    config = PackageConfig(provides=(dict,))
    thaw = staticmethod(yaml_thaw)


def main() -> None:
    print("=== Simple data packages demo ===\n")

    print(f"Children: {Children.get()}")

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "regions.json"
        path.write_text('{"nz": "New Zealand", "au": "Australia"}', encoding="utf-8")

        class Regions(SimpleDataPackage):
            config = PackageConfig(provides=(dict,), loader_override=json_thaw, source_override=FileSource(path))

        print(f"Regions: {Regions.get()}")

    try:
        Undiscovered.get()
    except SourceDiscoveryNotImplementedError as e:
        print(f"Caught expected gap: {e}")

    print("\nDemo completed successfully!")


if __name__ == "__main__":
    main()
