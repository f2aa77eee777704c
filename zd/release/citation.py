"""Readers for the files that carry a version number.

``CITATION.cff`` is YAML; the target metadata file (typically ``.zenodo.json``)
is JSON. Both expose the version under the top-level ``version`` key.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import yaml

from zd.core.result import Err, Ok, Result
from zd.core.structured import StrDict, as_str_dict

__all__ = [
    "CITATION_FILENAME",
    "CitationError",
    "load_citation",
    "load_metadata_file",
    "version_field",
]

CITATION_FILENAME = "CITATION.cff"


@dataclass(frozen=True, slots=True)
class CitationError:
    message: str
    path: Path


def load_citation(path: Path) -> Result[StrDict, CitationError]:
    """Load a CITATION.cff file as a mapping."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return Err(CitationError(f"cannot read {path.name}: {e}", path=path))

    try:
        obj: object = yaml.safe_load(text)
    except yaml.YAMLError as e:
        return Err(CitationError(f"invalid YAML in {path.name}: {e}", path=path))

    data = as_str_dict(obj)
    if data is None:
        return Err(CitationError(f"{path.name} must contain a YAML mapping", path=path))
    return Ok(data)


def load_metadata_file(path: Path) -> Result[StrDict, CitationError]:
    """Load a JSON metadata file (e.g. ``.zenodo.json``) as a mapping."""
    try:
        obj: object = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        return Err(CitationError(f"cannot read {path.name}: {e}", path=path))
    except json.JSONDecodeError as e:
        return Err(CitationError(f"invalid JSON in {path.name}: {e}", path=path))

    data = as_str_dict(obj)
    if data is None:
        return Err(CitationError(f"{path.name} must contain a JSON object", path=path))
    return Ok(data)


def version_field(data: Mapping[str, object]) -> str | None:
    """Return the ``version`` value as text.

    YAML and JSON both turn ``version: 1.2`` into a number, so numbers are
    stringified. Any other type counts as no version.
    """
    value = data.get("version")
    if isinstance(value, bool):
        return None
    if isinstance(value, str | int | float):
        return str(value)
    return None
