"""
Unit tests for reading class expressions and subclass axioms from RDF.

HOW TO RUN:
From the project root, run:
    pytest src/sdont/test_expressions.py -v
"""

import pytest
from rdflib import BNode, Graph, Literal, OWL, RDF, RDFS, URIRef, XSD

from sdont.expressions import (
    AtomicClass, ExistentialRestriction, OtherExpression, SubClassAxiom,
    UniversalRestriction, parse_class_expression, render_expression, subclass_axioms,
)

EX = "http://ex.org/onto#"
A, B = URIRef(EX + "A"), URIRef(EX + "B")
R = URIRef(EX + "r")


def add_restriction(graph, prop, quantifier, filler):
    node = BNode()
    graph.add((node, RDF.type, OWL.Restriction))
    graph.add((node, OWL.onProperty, prop))
    graph.add((node, quantifier, filler))
    return node


def test_named_class_is_atomic():
    assert parse_class_expression(Graph(), A) == AtomicClass(A)


def test_existential_restriction():
    graph = Graph()
    node = add_restriction(graph, R, OWL.someValuesFrom, B)

    assert parse_class_expression(graph, node) == ExistentialRestriction(R, B)


def test_universal_restriction():
    graph = Graph()
    node = add_restriction(graph, R, OWL.allValuesFrom, B)

    assert parse_class_expression(graph, node) == UniversalRestriction(R, B)


def test_datatype_filler_is_kept_as_entity():
    graph = Graph()
    node = add_restriction(graph, R, OWL.someValuesFrom, XSD.string)

    assert parse_class_expression(graph, node) == ExistentialRestriction(R, XSD.string)


def test_complex_filler_is_other():
    graph = Graph()
    inner = add_restriction(graph, R, OWL.someValuesFrom, B)
    outer = add_restriction(graph, R, OWL.someValuesFrom, inner)

    expression = parse_class_expression(graph, outer)

    assert isinstance(expression, OtherExpression)
    assert expression.kind == "SomeValuesFrom"


def test_cardinality_restriction_is_other():
    graph = Graph()
    node = BNode()
    graph.add((node, RDF.type, OWL.Restriction))
    graph.add((node, OWL.onProperty, R))
    graph.add((node, OWL.minCardinality, Literal(1)))

    assert parse_class_expression(graph, node) == OtherExpression("MinCardinality", node)


def test_intersection_is_other():
    graph = Graph()
    node = BNode()
    graph.add((node, RDF.type, OWL.Class))
    graph.add((node, OWL.intersectionOf, RDF.nil))

    assert parse_class_expression(graph, node).kind == "ObjectIntersectionOf"


def test_subclass_axioms_reads_every_statement():
    graph = Graph()
    graph.add((A, RDFS.subClassOf, B))
    graph.add((A, RDFS.subClassOf, add_restriction(graph, R, OWL.someValuesFrom, B)))

    axioms = set(subclass_axioms(graph))

    assert SubClassAxiom(AtomicClass(A), AtomicClass(B)) in axioms
    assert SubClassAxiom(AtomicClass(A), ExistentialRestriction(R, B)) in axioms
    assert len(axioms) == 2


def test_render_expression():
    assert render_expression(AtomicClass(A)) == f"<{A}>"
    assert str(SubClassAxiom(AtomicClass(A), UniversalRestriction(R, B))) == \
        f"SubClassOf(<{A}> AllValuesFrom(<{R}> <{B}>))"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
