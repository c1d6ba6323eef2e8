"""
Codecs that thaw raw package content into Python structures.
"""

from __future__ import annotations

import json
from typing import Any

import yaml

from .errors import ParseError


def yaml_thaw(text: str) -> Any:
    """Thaw a YAML document with ``yaml.safe_load``."""
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ParseError("yaml", str(exc)) from exc


def json_thaw(text: str) -> Any:
    """Thaw a JSON document."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError("json", str(exc)) from exc
