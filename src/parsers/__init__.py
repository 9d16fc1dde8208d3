"""Parsers for the YAML vocabulary source: loading, entry normalization, namespaces."""

from parsers.entry import normalize_entry, normalize_vocab
from parsers.namespace import (
    CORE_PREFIXES,
    EXTRA_DATATYPES,
    NAMESPACES,
    default_prefixes,
    is_datatype_curie,
    is_full_url,
    split_curie,
)
from parsers.source import load_source, validate

__all__ = [
    # Source loading
    "load_source",
    "validate",
    # Entry normalization
    "normalize_entry",
    "normalize_vocab",
    # Namespaces
    "NAMESPACES",
    "CORE_PREFIXES",
    "EXTRA_DATATYPES",
    "default_prefixes",
    "is_datatype_curie",
    "is_full_url",
    "split_curie",
]
