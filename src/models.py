"""
Data models for the vocabulary conversion.
"""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from build_context import BuildContext


class Status(str, Enum):
    """Stability of a term; drives the deprecated types and the status tally."""
    STABLE = "stable"
    RESERVED = "reserved"
    DEPRECATED = "deprecated"


class TermKind(str, Enum):
    CLASS = "class"
    PROPERTY = "property"
    INDIVIDUAL = "individual"
    DATATYPE = "datatype"
    CORE = "core"
    UNKNOWN = "unknown"
    FULL_URL = "full-url"


# Kinds that may still be promoted to a concrete kind
PROVISIONAL_KINDS = frozenset({TermKind.UNKNOWN, TermKind.CORE})


class Container(str, Enum):
    LIST = "list"
    SET = "set"
    GRAPH = "graph"


# --- Raw (normalized) input models ---

class Link(BaseModel):
    """A 'see also' hyperlink."""
    label: str = Field(default="", description="Text of the link")
    url: str = Field(description="Target URL")


class Example(BaseModel):
    """An example block shown with a term."""
    model_config = ConfigDict(populate_by_name=True)

    label: Optional[str] = Field(default=None, description="Optional title of the example")
    code: str = Field(alias="json", description="The example itself, usually JSON-LD")


class VocabEntry(BaseModel):
    """One entry of the YAML source in canonical shape (see parsers.entry)."""
    id: str = ""
    property: Optional[str] = None
    value: Optional[str] = None
    label: str = ""
    comment: Optional[str] = None
    upper_value: list[str] = Field(default_factory=list)
    upper_union: bool = False
    type: list[str] = Field(default_factory=list)
    domain: list[str] = Field(default_factory=list)
    range: list[str] = Field(default_factory=list)
    range_union: bool = False
    one_of: list[str] = Field(default_factory=list)
    pattern: Optional[str] = None
    deprecated: bool = False
    status: Status = Status.STABLE
    external: Optional[bool] = None
    defined_by: list[str] = Field(default_factory=list)
    see_also: list[Link] = Field(default_factory=list)
    example: list[Example] = Field(default_factory=list)
    dataset: bool = False
    container: Optional[Container] = None
    context: list[str] = Field(default_factory=list)
    known_as: Optional[str] = None


class RawVocab(BaseModel):
    """The YAML source with every section normalized."""
    vocab: list[VocabEntry]
    ontology: list[VocabEntry]
    prefix: list[VocabEntry] = Field(default_factory=list)
    klass: list[VocabEntry] = Field(default_factory=list, alias="class")
    property: list[VocabEntry] = Field(default_factory=list)
    individual: list[VocabEntry] = Field(default_factory=list)
    datatype: list[VocabEntry] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


# --- Term graph ---

class Term(BaseModel):
    """
    An addressable vocabulary element.

    The kind-specific part lives in ``details``; promotion swaps that variant and
    the ``kind`` tag but never the Term object itself, so every reference handed
    out by the factory stays valid.
    """
    id: str = Field(description="Local name, without the namespace prefix")
    prefix: str = Field(description="Namespace prefix ('' for full URLs)")
    url: str = Field(description="Full URL of the term")
    curie: str = Field(description="prefix:id, or the URL itself for full URLs")
    html_id: str = Field(description="Anchor id in the HTML output")
    kind: TermKind = TermKind.UNKNOWN
    type: list["Term"] = Field(default_factory=list, description="All rdf:type values")
    user_type: list["Term"] = Field(default_factory=list, description="Types given in the source")
    label: str = ""
    comment: Optional[str] = None
    defined_by: list[str] = Field(default_factory=list)
    see_also: list[Link] = Field(default_factory=list)
    status: Status = Status.STABLE
    deprecated: bool = False
    external: bool = False
    example: list[Example] = Field(default_factory=list)
    context: list[str] = Field(default_factory=list)
    known_as: Optional[str] = None
    details: Optional[Union["ClassDetails", "PropertyDetails", "IndividualDetails", "DatatypeDetails"]] = None

    def __eq__(self, other):
        if not isinstance(other, Term):
            return NotImplemented
        return (self.id, self.prefix) == (other.id, other.prefix)

    def __hash__(self):
        return hash((self.id, self.prefix))

    def __str__(self) -> str:
        return self.curie

    def __repr__(self) -> str:
        return f"Term({self.curie!r}, kind={self.kind.value})"


class ClassDetails(BaseModel):
    superclasses: list[Term] = Field(default_factory=list)
    upper_union: bool = False
    one_of: list[Term] = Field(default_factory=list, description="Enumerated individuals")
    # Cross references hold property ids
    range_of: list[str] = Field(default_factory=list)
    domain_of: list[str] = Field(default_factory=list)
    includes_range_of: list[str] = Field(default_factory=list)
    included_in_domain_of: list[str] = Field(default_factory=list)


class PropertyDetails(BaseModel):
    super_properties: list[Term] = Field(default_factory=list)
    domain: list[Term] = Field(default_factory=list)
    range: list[Term] = Field(default_factory=list)
    range_union: bool = False
    one_of: list[Term] = Field(default_factory=list, description="Allowed values")
    dataset: bool = False
    container: Optional[Container] = None
    strong_url: bool = Field(default=False, description="Range was given as the IRI/URL sentinel")


class IndividualDetails(BaseModel):
    pass


class DatatypeDetails(BaseModel):
    superclasses: list[Term] = Field(default_factory=list)
    upper_union: bool = False
    one_of: list[str] = Field(default_factory=list, description="Enumerated literal values")
    pattern: Optional[str] = None
    range_of: list[str] = Field(default_factory=list)
    includes_range_of: list[str] = Field(default_factory=list)


# Enable forward references between Term and its details
Term.model_rebuild()


class Prefix(BaseModel):
    """A namespace prefix, used in Turtle and in JSON-LD contexts."""
    prefix: str
    url: str


class OntologyProperty(BaseModel):
    """Vocabulary-level metadata (title, date, description, ...)."""
    property: str
    value: str
    url: bool = Field(default=False, description="Whether the value is to be used as a URL")


class Vocab(BaseModel):
    """The finished term graph; consumers must not mutate it."""
    prefixes: list[Prefix] = Field(default_factory=list)
    ontology_properties: list[OntologyProperty] = Field(default_factory=list)
    classes: list[Term] = Field(default_factory=list)
    properties: list[Term] = Field(default_factory=list)
    individuals: list[Term] = Field(default_factory=list)
    datatypes: list[Term] = Field(default_factory=list)
    build: BuildContext = Field(description="State collected while building the vocabulary")
