"""Pick the tag for a new release.

Three sources can name a version:

- ``fallback``: always available, used when neither file has a version
- ``citation``: the ``version`` field of CITATION.cff
- ``target``: the ``version`` field of the caller's metadata file, or of
  ``.zenodo.json`` when the caller names none

The caller's filename decides which sources count and in what order; when
both files carry a version they must agree, whatever the filename.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from zd.core.result import Err, Ok, Result
from zd.release.citation import CITATION_FILENAME, load_citation, load_metadata_file, version_field
from zd.release.errors import ReleaseError

__all__ = [
    "DEFAULT_METADATA_FILENAME",
    "FALLBACK_VERSION",
    "citation_version",
    "resolve_tag",
    "target_filename",
    "target_version",
]

FALLBACK_VERSION = "qarq3w3"
DEFAULT_METADATA_FILENAME = ".zenodo.json"

VersionSource = Literal["target", "citation", "fallback"]

_NO_TARGET: tuple[VersionSource, ...] = ("target", "citation", "fallback")
_CITATION_TARGET: tuple[VersionSource, ...] = ("citation", "fallback")
_OTHER_TARGET: tuple[VersionSource, ...] = ("target", "fallback")


def preference(filename: str) -> tuple[VersionSource, ...]:
    """Sources to try, in order, for a given target filename."""
    if filename == "":
        return _NO_TARGET
    if filename == CITATION_FILENAME:
        return _CITATION_TARGET
    return _OTHER_TARGET


# An empty filename reads .zenodo.json rather than skipping the target source,
# so a bare manual dispatch still cross-checks it against CITATION.cff.
def target_filename(filename: str) -> str:
    """File read as the target source; ``""`` means the default metadata file."""
    return filename or DEFAULT_METADATA_FILENAME


def citation_version(root: Path) -> str | None:
    result = load_citation(root / CITATION_FILENAME)
    if isinstance(result, Err):
        return None
    return version_field(result.value)


def target_version(root: Path, filename: str) -> str | None:
    result = load_metadata_file(root / target_filename(filename))
    if isinstance(result, Err):
        return None
    return version_field(result.value)


def resolve_tag(
    filename: str,
    *,
    root: Path,
    fallback: str = FALLBACK_VERSION,
) -> Result[str, ReleaseError]:
    """Resolve the release tag for ``filename``.

    Args:
        filename: ``""`` for no particular file, ``CITATION.cff``, or the
            name of a JSON metadata file relative to ``root``
        root: Repository working copy
        fallback: Version used when no file provides one

    Returns:
        Ok(tag), or Err(inconsistent_versions) when CITATION.cff and the
        target file carry different versions
    """
    versions: dict[VersionSource, str | None] = {
        "target": target_version(root, filename),
        "citation": citation_version(root),
        "fallback": fallback,
    }

    cff, target = versions["citation"], versions["target"]
    if cff is not None and target is not None and cff != target:
        name = target_filename(filename)
        return Err(
            ReleaseError(
                kind="inconsistent_versions",
                message=f"Inconsistent versions found in {CITATION_FILENAME} and {name}",
                hint=f"{CITATION_FILENAME}: {cff}, {name}: {target}",
            )
        )

    for source in preference(filename):
        value = versions[source]
        if value:
            return Ok(value)
    return Ok(fallback)
