"""Namespace prefixes and curie handling."""

from typing import Optional

from rdflib.namespace import DCTERMS, OWL, RDF, RDFS, XSD

from errors import InvalidCurie
from models import Prefix

# Prefixes added to every vocabulary, after the vocabulary's own and the declared ones
NAMESPACES = {
    "dc": str(DCTERMS),
    "owl": str(OWL),
    "rdf": str(RDF),
    "rdfs": str(RDFS),
    "xsd": str(XSD),
    "vs": "http://www.w3.org/2003/06/sw-vocab-status/ns#",
    "schema": "http://schema.org/",
    "jsonld": "http://www.w3.org/ns/json-ld#",
}

# Terms in these namespaces are neither local nor external: they are the RDF core
CORE_PREFIXES = frozenset({"rdf", "rdfs", "owl"})

# Identifiers starting with one of these are URLs, not curies
URL_SCHEMES = ("http:", "https:", "urn:", "doi:", "ftp:", "mailto:", "did:", "file:")

# Datatypes formally defined in RDF beyond the XSD ones
EXTRA_DATATYPES = ("rdf:JSON", "rdf:HTML", "rdf:XMLLiteral", "rdf:PlainLiteral", "rdf:langString")


def default_prefixes() -> list[Prefix]:
    return [Prefix(prefix=prefix, url=url) for prefix, url in NAMESPACES.items()]


def is_full_url(value: str) -> bool:
    return value.startswith(URL_SCHEMES)


def is_curie(value: str) -> bool:
    return ":" in value


def make_curie(value: str, vocab_prefix: str) -> str:
    """Bare local names belong to the vocabulary itself."""
    return value if is_curie(value) else f"{vocab_prefix}:{value}"


def split_curie(curie: str) -> tuple[str, str]:
    """Split at the first colon; the reference itself may contain colons."""
    prefix, sep, reference = curie.partition(":")
    if not sep:
        raise InvalidCurie(curie)
    return prefix, reference


def is_datatype_curie(curie: str) -> bool:
    """Whether the curie names an XSD datatype or one of the extra RDF datatypes."""
    return curie.startswith("xsd:") or curie in EXTRA_DATATYPES


def prefix_url(prefixes: list[Prefix], prefix: str) -> Optional[str]:
    for p in prefixes:
        if p.prefix == prefix:
            return p.url
    return None
