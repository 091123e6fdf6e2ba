"""
Unit tests for ontology signature computation.

HOW TO RUN:
From the project root, run:
    pytest src/patterns/test_signature.py -v
"""

import pytest
from rdflib import Graph, OWL, RDFS, URIRef, XSD

from patterns.signature import EntityKind, compute_signature, is_builtin, ontology_iri, short_form

NS = "http://ex.org/p#"

FRAGMENT = """
@prefix rdfs: <http://www.w3.org/2000/01/rdf-schema#> .
@prefix owl:  <http://www.w3.org/2002/07/owl#> .
@prefix xsd:  <http://www.w3.org/2001/XMLSchema#> .
@prefix :     <http://ex.org/p#> .

<http://ex.org/p> a owl:Ontology ;
    owl:imports <http://ex.org/imported> .

:Whole a owl:Class ;
    rdfs:label "Whole" ;
    rdfs:subClassOf [ a owl:Restriction ; owl:onProperty :hasPart ; owl:someValuesFrom :Part ] ,
                    [ a owl:Restriction ; owl:onProperty :weight ; owl:someValuesFrom xsd:decimal ] .
:hasPart a owl:ObjectProperty , owl:TransitiveProperty .
:note a owl:AnnotationProperty .
:car1 a :Car ; :hasPart :wheel1 ; :note "spare" .
"""


@pytest.fixture
def signature():
    graph = Graph()
    graph.parse(data=FRAGMENT, format="turtle")
    return compute_signature(graph)


def iri(name):
    return URIRef(NS + name)


def test_declared_kinds(signature):
    assert signature[iri("Whole")] == EntityKind.CLASS
    assert signature[iri("hasPart")] == EntityKind.OBJECT_PROPERTY
    assert signature[iri("note")] == EntityKind.ANNOTATION_PROPERTY


def test_inferred_kinds(signature):
    assert signature[iri("Part")] == EntityKind.CLASS
    assert signature[iri("weight")] == EntityKind.DATA_PROPERTY
    assert signature[XSD.decimal] == EntityKind.DATATYPE
    assert signature[iri("Car")] == EntityKind.CLASS
    assert signature[iri("car1")] == EntityKind.NAMED_INDIVIDUAL
    assert signature[iri("wheel1")] == EntityKind.NAMED_INDIVIDUAL


def test_ontology_header_and_imports_excluded(signature):
    assert URIRef("http://ex.org/p") not in signature
    assert URIRef("http://ex.org/imported") not in signature


def parse(data):
    graph = Graph()
    graph.parse(data="@prefix owl: <http://www.w3.org/2002/07/owl#> .\n"
                     "@prefix rdf: <http://www.w3.org/1999/02/22-rdf-syntax-ns#> .\n"
                     "@prefix dct: <http://purl.org/dc/terms/> .\n"
                     "@prefix :    <http://ex.org/p#> .\n" + data, format="turtle")
    return compute_signature(graph)


def test_property_characteristics_declare_object_properties():
    signature = parse(":rel a owl:IrreflexiveProperty . :A :rel :B .")

    assert signature[iri("rel")] == EntityKind.OBJECT_PROPERTY
    assert signature[iri("A")] == EntityKind.NAMED_INDIVIDUAL


def test_functional_property_kind_follows_usage():
    signature = parse(":age a owl:FunctionalProperty . :bob :age 42 .")

    assert signature[iri("age")] == EntityKind.DATA_PROPERTY
    assert signature[iri("bob")] == EntityKind.NAMED_INDIVIDUAL


def test_unused_rdf_property_defaults_to_object_property():
    signature = parse(":related a rdf:Property .")

    assert signature[iri("related")] == EntityKind.OBJECT_PROPERTY


def test_annotation_values_are_not_entities():
    signature = parse(":Whole a owl:Class ; dct:creator <http://ex.org/people/karl> .")

    assert signature[URIRef("http://purl.org/dc/terms/creator")] == EntityKind.ANNOTATION_PROPERTY
    assert URIRef("http://ex.org/people/karl") not in signature


def test_header_annotations_ignored():
    signature = parse("<http://ex.org/p> a owl:Ontology ; :madeBy <http://ex.org/people/karl> .")

    assert signature == {}


def test_builtins_are_flagged():
    assert is_builtin(RDFS.label)
    assert is_builtin(OWL.Thing)
    assert is_builtin(XSD.string)
    assert not is_builtin(iri("Whole"))


@pytest.mark.parametrize("value, expected", [
    ("http://ex.org/p#hasPart", "hasPart"),
    ("http://ex.org/p/hasPart", "hasPart"),
    ("http://ex.org/p/Parthood/", "Parthood"),
    ("urn:isbn:123", "urn:isbn:123"),
])
def test_short_form(value, expected):
    assert short_form(URIRef(value)) == expected


def test_ontology_iri():
    graph = Graph()
    graph.parse(data=FRAGMENT, format="turtle")

    assert ontology_iri(graph) == URIRef("http://ex.org/p")
    assert ontology_iri(Graph()) is None
