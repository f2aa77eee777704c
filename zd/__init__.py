"""Keep GitHub tags and releases in sync with a DOI-carrying CITATION.cff."""

__version__ = "0.3.0"
