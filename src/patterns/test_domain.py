"""
Unit tests for the pattern domain models.

HOW TO RUN:
From the project root, run:
    pytest src/patterns/test_domain.py -v
"""

from rdflib import URIRef

from patterns.domain import ANY_CATEGORY, Category, Pattern


def test_category_identity_is_iri_only():
    a = Category("Mereology", URIRef("http://ex.org/idx#Mereology"))
    b = Category("Part-whole", URIRef("http://ex.org/idx#Mereology"))

    assert a == b
    assert hash(a) == hash(b)
    assert {a: 1, b: 2} == {a: 2}


def test_pattern_identity_is_iri_only():
    a = Pattern("Parthood", URIRef("http://ex.org/p/Parthood"))
    b = Pattern("Parthood Pattern", URIRef("http://ex.org/p/Parthood"))
    c = Pattern("Parthood", URIRef("http://ex.org/p/Other"))

    assert a == b
    assert a != c


def test_pattern_and_category_are_distinct_types():
    iri = URIRef("http://ex.org/x")

    assert Pattern("x", iri) != Category("x", iri)


def test_any_category():
    assert ANY_CATEGORY.label == "Any"
    assert str(ANY_CATEGORY.iri) == "https://w3id.org/comodide/ModlIndex#AnyCategory"
    assert str(ANY_CATEGORY) == "Any"
