"""
RDF export of a finished vocabulary.

The term graph is turned into an rdflib Graph; Turtle and JSON-LD are plain rdflib
serializations of that graph. Terms flagged external are referenced, never described.
"""

from bs4 import BeautifulSoup
from rdflib import BNode, Graph, Literal, Namespace, URIRef
from rdflib.collection import Collection
from rdflib.namespace import DCTERMS, OWL, RDF, RDFS, XSD

from errors import UnknownPrefix
from models import Container, Prefix, Status, Term, Vocab
from parsers.namespace import NAMESPACES, is_full_url, prefix_url, split_curie

VS = Namespace(NAMESPACES["vs"])
SCHEMA = Namespace(NAMESPACES["schema"])
JSONLD = Namespace(NAMESPACES["jsonld"])


def plain_comment(text: str) -> str:
    """Comments may contain HTML markup and line breaks; return the bare text."""
    return " ".join(BeautifulSoup(text, "html.parser").get_text().split())


def expand(prefixes: list[Prefix], curie: str) -> str:
    """Full URL for a curie, using the prefixes of the vocabulary."""
    if is_full_url(curie):
        return curie
    prefix, reference = split_curie(curie)
    base = prefix_url(prefixes, prefix)
    if base is None:
        raise UnknownPrefix(prefix, curie)
    return f"{base}{reference}"


class _GraphWriter:
    def __init__(self, vocab: Vocab, html_comments: bool):
        self.vocab = vocab
        self.html_comments = html_comments
        self.graph = Graph()
        self.vocab_node = URIRef(vocab.build.vocab_url)

    def union(self, members: list[Term]) -> BNode:
        """[ a owl:Class; owl:unionOf (members) ]"""
        node, head = BNode(), BNode()
        Collection(self.graph, head, [URIRef(m.url) for m in members])
        self.graph.add((node, RDF.type, OWL.Class))
        self.graph.add((node, OWL.unionOf, head))
        return node

    def comment(self, text: str) -> Literal:
        if self.html_comments:
            return Literal(f"<div>{text}</div>", datatype=RDF.HTML)
        return Literal(plain_comment(text), lang="en")

    def common(self, node: URIRef, term: Term) -> None:
        g = self.graph
        for t in term.type:
            g.add((node, RDF.type, URIRef(t.url)))
        if term.status is Status.DEPRECATED:
            g.add((node, OWL.deprecated, Literal(True)))
        g.add((node, RDFS.label, Literal(term.label)))
        if term.comment:
            g.add((node, RDFS.comment, self.comment(term.comment)))
        for url in term.defined_by:
            g.add((node, RDFS.isDefinedBy, URIRef(url)))
        g.add((node, RDFS.isDefinedBy, self.vocab_node))
        g.add((node, VS.term_status, Literal(term.status.value)))
        for link in term.see_also:
            g.add((node, RDFS.seeAlso, URIRef(link.url)))

    def ontology(self) -> None:
        g = self.graph
        g.add((self.vocab_node, RDF.type, OWL.Ontology))
        for prop in self.vocab.ontology_properties:
            predicate = URIRef(expand(self.vocab.prefixes, prop.property))
            if predicate == DCTERMS.date:
                value = Literal(prop.value, datatype=XSD.date)
            elif predicate == DCTERMS.description:
                value = Literal(prop.value, datatype=RDF.HTML)
            elif prop.url:
                value = URIRef(prop.value)
            else:
                value = Literal(prop.value, lang="en")
            g.add((self.vocab_node, predicate, value))

    def property(self, term: Term) -> None:
        g, node, details = self.graph, URIRef(term.url), term.details
        self.common(node, term)
        for sup in details.super_properties:
            g.add((node, RDFS.subPropertyOf, URIRef(sup.url)))

        if len(details.domain) == 1:
            g.add((node, RDFS.domain, URIRef(details.domain[0].url)))
        elif details.domain:
            g.add((node, RDFS.domain, self.union(details.domain)))

        if details.container is Container.LIST:
            g.add((node, RDFS.range, RDF.List))
        elif len(details.range) > 1 and details.range_union:
            g.add((node, RDFS.range, self.union(details.range)))
        else:
            for rg in details.range:
                g.add((node, RDFS.range, URIRef(rg.url)))

    def klass(self, term: Term) -> None:
        g, node, details = self.graph, URIRef(term.url), term.details
        self.common(node, term)
        if len(details.superclasses) > 1 and details.upper_union:
            g.add((node, RDFS.subClassOf, self.union(details.superclasses)))
        else:
            for sup in details.superclasses:
                g.add((node, RDFS.subClassOf, URIRef(sup.url)))
        if details.one_of:
            head = BNode()
            Collection(g, head, [URIRef(ind.url) for ind in details.one_of])
            g.add((node, OWL.oneOf, head))

    def datatype(self, term: Term) -> None:
        g, node, details = self.graph, URIRef(term.url), term.details
        self.common(node, term)
        for sup in details.superclasses:
            g.add((node, RDFS.subClassOf, URIRef(sup.url)))
        if details.one_of:
            head = BNode()
            Collection(g, head, [Literal(value) for value in details.one_of])
            g.add((node, OWL.oneOf, head))
        if details.pattern:
            restriction, head = BNode(), BNode()
            g.add((restriction, XSD.pattern, Literal(details.pattern)))
            Collection(g, head, [restriction])
            if len(details.superclasses) == 1:
                g.add((node, OWL.onDatatype, URIRef(details.superclasses[0].url)))
            g.add((node, OWL.withRestrictions, head))

    def contexts(self) -> None:
        g = self.graph
        for ctx, curies in self.vocab.build.context_mentions.items():
            if not curies:
                continue
            node = URIRef(ctx)
            g.add((node, RDF.type, JSONLD.Context))
            for curie in sorted(curies):
                g.add((node, SCHEMA.mentions, URIRef(expand(self.vocab.prefixes, curie))))

    def write(self) -> Graph:
        for p in self.vocab.prefixes:
            self.graph.bind(p.prefix, p.url, override=True, replace=True)
        self.ontology()

        sections = (
            (self.vocab.properties, self.property),
            (self.vocab.classes, self.klass),
            (self.vocab.individuals, lambda term: self.common(URIRef(term.url), term)),
            (self.vocab.datatypes, self.datatype),
        )
        for terms, writer in sections:
            for term in terms:
                if not term.external:
                    writer(term)
        self.contexts()
        return self.graph


def to_graph(vocab: Vocab, html_comments: bool = True) -> Graph:
    """Build an rdflib Graph of the vocabulary; the vocabulary itself is not modified."""
    return _GraphWriter(vocab, html_comments).write()


def to_turtle(vocab: Vocab) -> str:
    return to_graph(vocab).serialize(format="turtle")


def to_jsonld(vocab: Vocab) -> str:
    return to_graph(vocab).serialize(format="json-ld", indent=4)
