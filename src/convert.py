"""
Convert the parsed YAML description of a vocabulary into its internal representation
(see the Vocab model).

The order of the steps matters: the vocabulary identity comes first (curies cannot be
resolved without it), properties come before classes and datatypes (the cross
references are computed against the finished property list), and forward references
that were never defined are promoted last.
"""

from datetime import date
from typing import Optional

from pydantic import AnyUrl, TypeAdapter, ValidationError

from build_context import NO_CONTEXT, VOCAB_CONTEXT, BuildContext
from crossref import link_class, link_datatype
from errors import ExternalTermError, IncompleteTerm, InvalidCurie, InvalidRange, UnknownPrefix, VocabError
from factory import TermFactory
from log import get_logger
from models import OntologyProperty, Prefix, RawVocab, Status, Term, TermKind, Vocab, VocabEntry
from parsers.entry import normalize_vocab
from parsers.namespace import default_prefixes, is_curie, is_datatype_curie, is_full_url, prefix_url, split_curie

logger = get_logger(__name__)

_url_adapter = TypeAdapter(AnyUrl)

# A single range value of this kind means "any resource" (owl:ObjectProperty)
URL_RANGES = ("IRI", "URL")


def is_url(value: str) -> bool:
    """Whether an ontology property value should be used as a URL."""
    try:
        _url_adapter.validate_python(value)
        return True
    except ValidationError:
        return False


def assemble_prefixes(raw: RawVocab, context: BuildContext) -> list[Prefix]:
    """
    The vocabulary's own prefix, the declared ones, then the defaults.

    The first registration of a short name wins, so a declared prefix is never
    overridden by a default one.
    """
    candidates = [Prefix(prefix=context.vocab_prefix, url=context.vocab_url)]
    candidates += [Prefix(prefix=entry.id, url=entry.value or "") for entry in raw.prefix]
    candidates += default_prefixes()

    prefixes: list[Prefix] = []
    for candidate in candidates:
        if all(p.prefix != candidate.prefix for p in prefixes):
            prefixes.append(candidate)
    return prefixes


def _check_property_name(name: str, prefixes: list[Prefix]) -> None:
    if is_full_url(name):
        return
    if not is_curie(name):
        raise InvalidCurie(name)
    prefix, _ = split_curie(name)
    if prefix_url(prefixes, prefix) is None:
        raise UnknownPrefix(prefix, name)


def assemble_ontology_properties(raw: RawVocab, prefixes: list[Prefix], today: date) -> list[OntologyProperty]:
    """
    Declared ontology properties plus dc:date, unless a date is given already.

    Every property must be a full URL or a curie with a known prefix.
    """
    for entry in raw.ontology:
        _check_property_name(entry.property or "", prefixes)

    properties = [
        OntologyProperty(
            property=entry.property or "",
            value=entry.value or "",
            url=is_url(entry.value) if entry.value else False,
        )
        for entry in raw.ontology
    ]
    if not any(p.property == "dc:date" for p in properties):
        properties.append(OntologyProperty(property="dc:date", value=today.isoformat()))
    return properties


class VocabBuilder:
    """Builds one Vocab; create a new builder (and context) for every conversion."""

    def __init__(self, context: Optional[BuildContext] = None, today: Optional[date] = None):
        self.context = context or BuildContext()
        self.today = today or date.today()
        self.factory: Optional[TermFactory] = None

    def build(self, raw: dict) -> Vocab:
        vocab = normalize_vocab(raw)
        self._set_identity(vocab.vocab[0])

        prefixes = assemble_prefixes(vocab, self.context)
        self.factory = TermFactory(self.context, prefixes)
        ontology_properties = assemble_ontology_properties(vocab, prefixes, self.today)

        logger.debug(
            "sections normalized",
            properties=len(vocab.property),
            classes=len(vocab.klass),
            individuals=len(vocab.individual),
            datatypes=len(vocab.datatype),
        )

        properties = [self._property(entry) for entry in vocab.property]
        classes = [self._class(entry, properties) for entry in vocab.klass]
        individuals = [self._individual(entry) for entry in vocab.individual]
        datatypes = [self._datatype(entry, properties) for entry in vocab.datatype]
        self._close_forward_references(properties, classes, datatypes)

        logger.info(
            "vocabulary built",
            vocab=self.context.vocab_url,
            terms=len(self.factory),
            deprecated=self.context.status_counter.counter(Status.DEPRECATED),
        )
        return Vocab(
            prefixes=prefixes,
            ontology_properties=ontology_properties,
            classes=classes,
            properties=properties,
            individuals=individuals,
            datatypes=datatypes,
            build=self.context,
        )

    # --- Helpers ---

    def _set_identity(self, entry: VocabEntry) -> None:
        if not entry.id:
            raise VocabError("The vocabulary has no prefix")
        if not entry.value:
            raise VocabError("The vocabulary has no identifier")
        # Normalization fills in the 'vocab' shorthand, which means nothing here
        contexts = [c for c in entry.context if c not in (VOCAB_CONTEXT, NO_CONTEXT)]
        self.context.set_vocabulary(entry.id, entry.value, contexts[0] if contexts else None)

    def _terms(self, curies: list[str]) -> list[Term]:
        terms: list[Term] = []
        for curie in curies:
            term = self.factory.resolve(curie)
            if term not in terms:
                terms.append(term)
        return terms

    def _is_external(self, entry: VocabEntry) -> bool:
        """
        A curie as an id means, by default, an external term; a bare id is local
        and cannot be flagged external.
        """
        if is_curie(entry.id):
            self.context.add_real_curie(entry.id)
            if entry.external is not None:
                return entry.external
            return split_curie(entry.id)[0] != self.context.vocab_prefix
        if entry.external:
            raise ExternalTermError(entry.id)
        return False

    def _declare(self, entry: VocabEntry, kind: TermKind) -> Term:
        """Create (or promote) the term of an entry and fill in the common fields."""
        external = self._is_external(entry)
        if not external and not entry.comment and not entry.defined_by:
            raise IncompleteTerm(entry.id)

        create = {
            TermKind.CLASS: self.factory.as_class,
            TermKind.PROPERTY: self.factory.as_property,
            TermKind.INDIVIDUAL: self.factory.as_individual,
            TermKind.DATATYPE: self.factory.as_datatype,
        }[kind]
        term = create(entry.id)

        term.external = external
        term.label = entry.label
        term.comment = entry.comment
        term.defined_by = entry.defined_by
        term.see_also = entry.see_also
        term.example = entry.example
        term.status = entry.status
        term.deprecated = entry.deprecated
        term.known_as = entry.known_as
        term.user_type = self._terms(entry.type)
        term.context = self.context.resolve_contexts(entry.context, term.curie)
        self.context.status_counter.add(entry.status)
        return term

    # --- Categories ---

    def _property(self, entry: VocabEntry) -> Term:
        term = self._declare(entry, TermKind.PROPERTY)
        details = term.details
        details.super_properties = self._terms(entry.upper_value)
        details.domain = self._terms(entry.domain)
        details.range_union = entry.range_union
        details.one_of = self._terms(entry.one_of)
        details.dataset = entry.dataset
        details.container = entry.container

        types = ["rdf:Property", "owl:DeprecatedProperty"] if entry.status is Status.DEPRECATED else ["rdf:Property"]
        types += entry.type
        if len(entry.range) > 1 and any(rg.upper() in URL_RANGES for rg in entry.range):
            raise InvalidRange(entry.id, entry.range)
        if len(entry.range) == 1 and entry.range[0].upper() in URL_RANGES:
            details.strong_url = True
            types.append("owl:ObjectProperty")
        else:
            details.range = self._terms(entry.range)
            if entry.range and all(is_datatype_curie(rg) for rg in entry.range):
                types.append("owl:DatatypeProperty")
        term.type = self._terms(types)
        return term

    def _class(self, entry: VocabEntry, properties: list[Term]) -> Term:
        term = self._declare(entry, TermKind.CLASS)
        details = term.details
        details.superclasses = self._terms(entry.upper_value)
        details.upper_union = entry.upper_union
        details.one_of = self._terms(entry.one_of)

        types = ["rdfs:Class", "owl:DeprecatedClass"] if entry.status is Status.DEPRECATED else ["rdfs:Class"]
        term.type = self._terms(types + entry.type)
        link_class(term, properties)
        return term

    def _individual(self, entry: VocabEntry) -> Term:
        term = self._declare(entry, TermKind.INDIVIDUAL)
        # upper_value is the older way of giving the type of an individual
        term.user_type = self._terms(entry.type + entry.upper_value)
        term.type = list(term.user_type)
        return term

    def _datatype(self, entry: VocabEntry, properties: list[Term]) -> Term:
        term = self._declare(entry, TermKind.DATATYPE)
        details = term.details
        details.superclasses = self._terms(entry.upper_value)
        details.upper_union = entry.upper_union
        details.one_of = entry.one_of
        details.pattern = entry.pattern
        term.type = self._terms(["rdfs:Datatype"] + entry.type)

        dt_property = self.factory.resolve("owl:DatatypeProperty")
        for prop in link_datatype(term, properties):
            if dt_property not in prop.type:
                prop.type.append(dt_property)
        return term

    def _close_forward_references(self, properties: list[Term], classes: list[Term], datatypes: list[Term]) -> None:
        """Promote the references that were never defined by an entry of their own."""
        promoted_classes: list[Term] = []
        promoted_datatypes: list[Term] = []

        def promote(term: Term, as_datatype: bool) -> None:
            if term.kind is not TermKind.UNKNOWN:
                return
            if as_datatype:
                promoted_datatypes.append(self.factory.promote_to_datatype(term))
            else:
                promoted_classes.append(self.factory.promote_to_class(term))

        for prop in properties:
            for ref in prop.details.domain:
                promote(ref, as_datatype=False)
            for ref in prop.details.range:
                promote(ref, as_datatype=is_datatype_curie(ref.curie))
        for cls in classes:
            for ref in cls.details.superclasses:
                promote(ref, as_datatype=False)
        for dt in datatypes:
            for ref in dt.details.superclasses:
                promote(ref, as_datatype=True)

        for cls in promoted_classes:
            link_class(cls, properties)
        for dt in promoted_datatypes:
            link_datatype(dt, properties)
        if promoted_classes or promoted_datatypes:
            logger.debug(
                "forward references promoted",
                classes=[t.curie for t in promoted_classes],
                datatypes=[t.curie for t in promoted_datatypes],
            )


def build_vocab(raw: dict, context: Optional[BuildContext] = None, today: Optional[date] = None) -> Vocab:
    """Build the term graph of one vocabulary from its parsed (and validated) source."""
    return VocabBuilder(context, today).build(raw)
