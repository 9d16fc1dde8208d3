"""
Tests for building the term graph from a parsed vocabulary.

Run with: pytest tests/test_convert.py -v
"""

import sys
from datetime import date
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from build_context import BuildContext
from convert import assemble_prefixes, build_vocab, is_url
from errors import (
    ExternalTermError,
    IncompleteTerm,
    InvalidCurie,
    InvalidRange,
    TypeConflict,
    UnknownPrefix,
    VocabError,
)
from models import Status, TermKind
from parsers.entry import normalize_vocab

TODAY = date(2024, 5, 17)


def make_raw(**sections) -> dict:
    raw = {
        "vocab": {"id": "ex", "value": "http://example.org/"},
        "ontology": [{"property": "dc:title", "value": "Example vocabulary"}],
    }
    raw.update(sections)
    return raw


def build(**sections):
    return build_vocab(make_raw(**sections), today=TODAY)


def curies(terms) -> list[str]:
    return [t.curie for t in terms]


class TestPrefixes:

    def test_order_and_defaults(self):
        vocab = build(prefix=[{"id": "cred", "value": "https://www.w3.org/2018/credentials#"}])
        names = [p.prefix for p in vocab.prefixes]
        assert names == ["ex", "cred", "dc", "owl", "rdf", "rdfs", "xsd", "vs", "schema", "jsonld"]

    def test_declared_prefix_is_not_overridden(self):
        raw = make_raw(prefix=[{"id": "schema", "value": "https://schema.org/"}])
        context = BuildContext()
        context.set_vocabulary("ex", "http://example.org/")
        prefixes = assemble_prefixes(normalize_vocab(raw), context)
        schema = [p for p in prefixes if p.prefix == "schema"]
        assert len(schema) == 1
        assert schema[0].url == "https://schema.org/"


class TestOntologyProperties:

    def test_date_is_added(self):
        vocab = build()
        props = {p.property: p for p in vocab.ontology_properties}
        assert props["dc:date"].value == "2024-05-17"
        assert props["dc:title"].url is False

    def test_user_date_is_kept(self):
        raw = make_raw()
        raw["ontology"].append({"property": "dc:date", "value": "2020-01-01"})
        vocab = build_vocab(raw, today=TODAY)
        dates = [p.value for p in vocab.ontology_properties if p.property == "dc:date"]
        assert dates == ["2020-01-01"]

    def test_url_values(self):
        assert is_url("https://github.com/w3c/vocab")
        assert not is_url("Example vocabulary")

    def test_bare_property_name(self):
        raw = make_raw()
        raw["ontology"].append({"property": "title", "value": "No prefix"})
        with pytest.raises(InvalidCurie) as exc:
            build_vocab(raw, today=TODAY)
        assert exc.value.value == "title"

    def test_undeclared_property_prefix(self):
        raw = make_raw()
        raw["ontology"].append({"property": "foo:title", "value": "Unknown prefix"})
        with pytest.raises(UnknownPrefix) as exc:
            build_vocab(raw, today=TODAY)
        assert exc.value.prefix == "foo"

    def test_declared_and_url_properties(self):
        raw = make_raw(prefix=[{"id": "cred", "value": "https://www.w3.org/2018/credentials#"}])
        raw["ontology"] += [
            {"property": "cred:note", "value": "Declared prefix"},
            {"property": "http://purl.org/dc/terms/creator", "value": "Full URL"},
        ]
        vocab = build_vocab(raw, today=TODAY)
        names = [p.property for p in vocab.ontology_properties]
        assert "cred:note" in names
        assert "http://purl.org/dc/terms/creator" in names


class TestForwardReferences:

    def test_domain_before_class(self):
        vocab = build(
            property=[{"id": "p", "domain": "ex:C", "comment": "A property"}],
            **{"class": [{"id": "C", "comment": "A class"}]},
        )
        cls = vocab.classes[0]
        assert cls.kind is TermKind.CLASS
        assert cls.details.domain_of == ["p"]
        # The property refers to the very same term
        assert vocab.properties[0].details.domain[0] is cls

    def test_undeclared_domain_is_promoted(self):
        vocab = build(property=[{"id": "p", "domain": "schema:Person", "comment": "A property"}])
        person = vocab.properties[0].details.domain[0]
        assert person.kind is TermKind.CLASS
        assert person.external is True
        assert person.details.domain_of == ["p"]

    def test_undeclared_range_datatype_is_promoted(self):
        vocab = build(property=[
            {"id": "p", "range": "xsd:string", "comment": "A property"},
            {"id": "q", "range": "schema:Thing", "comment": "Another property"},
        ])
        assert vocab.properties[0].details.range[0].kind is TermKind.DATATYPE
        assert vocab.properties[1].details.range[0].kind is TermKind.CLASS

    def test_core_references_stay_core(self):
        vocab = build(property=[{"id": "p", "range": "rdfs:Literal", "comment": "A property"}])
        assert vocab.properties[0].details.range[0].kind is TermKind.CORE

    def test_type_conflict_across_sections(self):
        with pytest.raises(TypeConflict) as exc:
            build(
                property=[{"id": "Thing", "comment": "A property"}],
                **{"class": [{"id": "Thing", "comment": "A class"}]},
            )
        assert exc.value.curie == "ex:Thing"
        assert exc.value.existing == "property"
        assert exc.value.requested == "class"


class TestCrossReferences:

    def test_single_domain(self):
        vocab = build(
            property=[{"id": "p", "domain": "C", "comment": "A property"}],
            **{"class": [{"id": "C", "comment": "A class"}]},
        )
        details = vocab.classes[0].details
        assert details.domain_of == ["p"]
        assert details.included_in_domain_of == []

    def test_multiple_domain(self):
        vocab = build(
            property=[{"id": "p", "domain": ["C1", "C2"], "comment": "A property"}],
            **{"class": [{"id": "C1", "comment": "First"}, {"id": "C2", "comment": "Second"}]},
        )
        for cls in vocab.classes:
            assert cls.details.included_in_domain_of == ["p"]
            assert cls.details.domain_of == []

    def test_ranges(self):
        vocab = build(
            property=[
                {"id": "p", "range": "C", "comment": "Single range"},
                {"id": "q", "range": ["C", "D"], "comment": "Multiple range"},
            ],
            **{"class": [{"id": "C", "comment": "A class"}]},
        )
        details = vocab.classes[0].details
        assert details.range_of == ["p"]
        assert details.includes_range_of == ["q"]

    def test_match_by_local_name(self):
        vocab = build(
            property=[{"id": "p", "domain": "schema:C", "comment": "A property"}],
            **{"class": [{"id": "C", "comment": "A class"}]},
        )
        assert vocab.classes[0].details.domain_of == ["p"]

    def test_datatype_range(self):
        vocab = build(
            property=[
                {"id": "p", "range": "Code", "comment": "Single range"},
                {"id": "q", "range": ["Code", "xsd:string"], "comment": "Multiple range"},
            ],
            datatype=[{"id": "Code", "comment": "A datatype", "upper_value": "xsd:string", "pattern": "[A-Z]+"}],
        )
        dt = vocab.datatypes[0]
        assert dt.details.range_of == ["p"]
        assert dt.details.includes_range_of == ["q"]
        assert dt.details.pattern == "[A-Z]+"
        assert curies(dt.details.superclasses) == ["xsd:string"]
        for prop in vocab.properties:
            assert "owl:DatatypeProperty" in curies(prop.type)


class TestTypes:

    def test_property_types(self):
        vocab = build(property=[
            {"id": "p", "comment": "Plain"},
            {"id": "q", "comment": "Deprecated", "status": "deprecated"},
            {"id": "r", "comment": "Link", "range": "IRI"},
            {"id": "s", "comment": "Data", "range": ["xsd:string", "rdf:JSON"]},
            {"id": "t", "comment": "User type", "type": "owl:FunctionalProperty"},
        ])
        p, q, r, s, t = vocab.properties
        assert curies(p.type) == ["rdf:Property"]
        assert curies(q.type) == ["rdf:Property", "owl:DeprecatedProperty"]
        assert curies(r.type) == ["rdf:Property", "owl:ObjectProperty"]
        assert r.details.range == []
        assert r.details.strong_url is True
        assert curies(s.type) == ["rdf:Property", "owl:DatatypeProperty"]
        assert curies(t.type) == ["rdf:Property", "owl:FunctionalProperty"]
        assert curies(t.user_type) == ["owl:FunctionalProperty"]

    @pytest.mark.parametrize("range_values", [["IRI", "xsd:string"], ["schema:Thing", "url"]])
    def test_url_range_must_be_alone(self, range_values):
        with pytest.raises(InvalidRange) as exc:
            build(property=[{"id": "p", "comment": "Mixed", "range": range_values}])
        assert exc.value.term_id == "p"

    def test_url_range_is_case_insensitive(self):
        vocab = build(property=[{"id": "p", "comment": "Link", "range": "url"}])
        assert "owl:ObjectProperty" in curies(vocab.properties[0].type)

    def test_class_types(self):
        vocab = build(**{"class": [
            {"id": "A", "comment": "A class"},
            {"id": "B", "comment": "Old class", "deprecated": True},
        ]})
        a, b = vocab.classes
        assert curies(a.type) == ["rdfs:Class"]
        assert curies(b.type) == ["rdfs:Class", "owl:DeprecatedClass"]
        assert b.status is Status.DEPRECATED

    def test_individual_types(self):
        vocab = build(individual=[
            {"id": "red", "comment": "Red", "type": "Colour", "upper_value": ["Colour", "schema:Thing"]},
        ])
        assert curies(vocab.individuals[0].type) == ["ex:Colour", "schema:Thing"]

    def test_class_enumeration(self):
        vocab = build(
            individual=[{"id": "red", "comment": "Red"}, {"id": "green", "comment": "Green"}],
            **{"class": [{"id": "Colour", "comment": "Colours", "one_of": ["red", "green"]}]},
        )
        one_of = vocab.classes[0].details.one_of
        assert one_of == vocab.individuals
        assert all(t.kind is TermKind.INDIVIDUAL for t in one_of)


class TestEntryIdentity:

    def test_incomplete_term(self):
        with pytest.raises(IncompleteTerm) as exc:
            build(**{"class": [{"id": "Thing"}]})
        assert exc.value.term_id == "Thing"
        assert "Thing" in str(exc.value)

    def test_defined_by_is_enough(self):
        vocab = build(**{"class": [{"id": "Thing", "defined_by": "https://example.org/doc#Thing"}]})
        assert vocab.classes[0].defined_by == ["https://example.org/doc#Thing"]

    def test_curie_id_is_external(self):
        vocab = build(**{"class": [{"id": "schema:Person"}]})
        person = vocab.classes[0]
        assert person.external is True
        assert person.prefix == "schema"
        assert "schema:Person" in vocab.build.real_curies

    def test_curie_id_forced_local(self):
        with pytest.raises(IncompleteTerm):
            build(**{"class": [{"id": "schema:Person", "external": False}]})

    def test_bare_id_cannot_be_external(self):
        with pytest.raises(ExternalTermError):
            build(**{"class": [{"id": "Person", "external": True}]})

    def test_default_prefix_domain(self):
        vocab = build(property=[{"id": "p", "domain": "xsd:integer", "comment": "A property"}])
        assert vocab.properties[0].details.domain[0].external is True

    def test_unknown_prefix_in_domain(self):
        with pytest.raises(UnknownPrefix) as exc:
            build(property=[{"id": "p", "domain": "foo:Bar", "comment": "A property"}])
        assert exc.value.prefix == "foo"

    def test_unknown_prefix_in_id(self):
        with pytest.raises(UnknownPrefix):
            build(**{"class": [{"id": "foo:Bar"}]})

    def test_missing_vocab_value(self):
        with pytest.raises(VocabError):
            build_vocab({"vocab": {"id": "ex"}, "ontology": []})


class TestAggregates:

    def test_status_tally(self):
        vocab = build(
            property=[
                {"id": "p", "comment": "Old", "status": "deprecated"},
                {"id": "q", "comment": "Reserved", "deprecated": False},
            ],
            individual=[{"id": "i", "comment": "Old", "deprecated": True}],
            datatype=[{"id": "D", "comment": "Old", "status": "deprecated"}],
            **{"class": [{"id": "C", "comment": "Fine"}]},
        )
        counter = vocab.build.status_counter
        assert counter.counter(Status.DEPRECATED) == 3
        assert counter.counter(Status.RESERVED) == 1
        assert counter.counter(Status.STABLE) == 1

    def test_context_inversion(self):
        raw = make_raw(
            property=[{"id": "p", "comment": "In two", "context": ["https://a.example/ctx", "https://b.example/ctx"]}],
            **{"class": [
                {"id": "C", "comment": "Default"},
                {"id": "D", "comment": "Nowhere", "context": "none"},
            ]},
        )
        raw["vocab"]["context"] = "https://example.org/ctx"
        vocab = build_vocab(raw, today=TODAY)
        mentions = vocab.build.context_mentions

        assert vocab.properties[0].context == ["https://a.example/ctx", "https://b.example/ctx"]
        keys_with_p = [ctx for ctx, terms in mentions.items() if "ex:p" in terms]
        assert keys_with_p == ["https://a.example/ctx", "https://b.example/ctx"]

        assert vocab.classes[0].context == ["https://example.org/ctx"]
        assert mentions["https://example.org/ctx"] == ["ex:C"]
        assert vocab.classes[1].context == []
        assert all("ex:D" not in terms for terms in mentions.values())

    def test_no_default_context(self):
        vocab = build(**{"class": [{"id": "C", "comment": "A class"}]})
        assert vocab.classes[0].context == []
        assert vocab.build.context_mentions == {}

    def test_builds_are_isolated(self):
        first = build(**{"class": [{"id": "C", "comment": "A class", "status": "deprecated"}]})
        second = build(**{"class": [{"id": "C", "comment": "A class", "status": "deprecated"}]})
        assert first.build is not second.build
        assert second.build.status_counter.counter(Status.DEPRECATED) == 1
        assert first.classes[0] is not second.classes[0]

    def test_insertion_order(self):
        vocab = build(**{"class": [{"id": name, "comment": name} for name in ("Zeta", "Alpha", "Mu")]})
        assert [c.id for c in vocab.classes] == ["Zeta", "Alpha", "Mu"]
