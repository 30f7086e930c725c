"""Document file loading and validation."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from crptapi.errors.exceptions import Misconfiguration
from crptapi.types import DocumentInput

_JSON_SUFFIXES = {".json"}
_YAML_SUFFIXES = {".yaml", ".yml"}


def load_document_file(path: str | Path) -> DocumentInput:
    """Load a YAML or JSON document file and return a validated DocumentInput.

    The file holds a mapping with ``description`` and ``products``, using the
    same snake_case keys as the wire payload.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Document file not found: {path}")

    raw = _read_mapping(path)

    if "description" not in raw:
        raise Misconfiguration(
            f"Invalid document file: missing top-level 'description' key in {path}",
            setting="description",
        )

    try:
        return DocumentInput(**raw)
    except ValidationError as e:
        raise Misconfiguration(f"Invalid document file {path}: {e}") from e


def _read_mapping(path: Path) -> dict[str, Any]:
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")

    try:
        if suffix in _JSON_SUFFIXES:
            raw = json.loads(text)
        elif suffix in _YAML_SUFFIXES:
            raw = yaml.safe_load(text)
        else:
            raise Misconfiguration(
                f"Unsupported document file type '{suffix}': expected .json, .yaml or .yml"
            )
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise Misconfiguration(f"Cannot parse document file {path}: {e}") from e

    if not isinstance(raw, dict):
        raise Misconfiguration(
            f"Expected a mapping in document file, got {type(raw).__name__} in {path}"
        )
    return raw
