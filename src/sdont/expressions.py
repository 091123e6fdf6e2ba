"""
Class expression grammar for subclass axioms.

Only the shapes the diagram can draw are modeled precisely: named classes
and existential/universal property restrictions with a named filler.
Everything else is kept as an OtherExpression so callers can report it.
"""

from dataclasses import dataclass
from typing import Iterator, Union

from rdflib import BNode, Graph, OWL, RDF, RDFS, URIRef
from rdflib.term import Node


@dataclass(frozen=True)
class AtomicClass:
    """A named class, e.g. ``A``."""
    iri: URIRef


@dataclass(frozen=True)
class ExistentialRestriction:
    """``∃R.F`` - some values of ``property`` come from ``filler``."""
    property: URIRef
    filler: URIRef


@dataclass(frozen=True)
class UniversalRestriction:
    """``∀R.F`` - all values of ``property`` come from ``filler``."""
    property: URIRef
    filler: URIRef


@dataclass(frozen=True)
class OtherExpression:
    """Any expression outside the supported grammar."""
    kind: str
    node: Node


ClassExpression = Union[AtomicClass, ExistentialRestriction, UniversalRestriction, OtherExpression]
Restriction = (ExistentialRestriction, UniversalRestriction)


@dataclass(frozen=True)
class SubClassAxiom:
    """``sub ⊑ sup``"""
    sub: ClassExpression
    sup: ClassExpression

    def __str__(self) -> str:
        return f"SubClassOf({render_expression(self.sub)} {render_expression(self.sup)})"


# Constructors recognized when naming unsupported expressions
_EXPRESSION_KINDS = [
    (OWL.intersectionOf, "ObjectIntersectionOf"),
    (OWL.unionOf, "ObjectUnionOf"),
    (OWL.complementOf, "ObjectComplementOf"),
    (OWL.oneOf, "ObjectOneOf"),
]

_RESTRICTION_KINDS = [
    (OWL.hasValue, "HasValue"),
    (OWL.hasSelf, "HasSelf"),
    (OWL.minCardinality, "MinCardinality"),
    (OWL.maxCardinality, "MaxCardinality"),
    (OWL.cardinality, "ExactCardinality"),
    (OWL.minQualifiedCardinality, "MinCardinality"),
    (OWL.maxQualifiedCardinality, "MaxCardinality"),
    (OWL.qualifiedCardinality, "ExactCardinality"),
]


def parse_class_expression(graph: Graph, node: Node) -> ClassExpression:
    """Read the class expression rooted at ``node``.

    Args:
        graph: Graph holding the expression triples
        node: IRI of a named class or blank node of an anonymous expression

    Returns:
        One of the ClassExpression variants
    """
    if isinstance(node, URIRef):
        return AtomicClass(node)

    if not isinstance(node, BNode):
        return OtherExpression("Literal", node)

    if (node, RDF.type, OWL.Restriction) in graph:
        return _parse_restriction(graph, node)

    for predicate, kind in _EXPRESSION_KINDS:
        if graph.value(node, predicate) is not None:
            return OtherExpression(kind, node)

    return OtherExpression("AnonymousClass", node)


def _parse_restriction(graph: Graph, node: BNode) -> ClassExpression:
    prop = graph.value(node, OWL.onProperty)
    some_filler = graph.value(node, OWL.someValuesFrom)
    all_filler = graph.value(node, OWL.allValuesFrom)

    if isinstance(prop, URIRef):
        # Only a single quantifier with a named filler is drawable
        if some_filler is not None and all_filler is None and isinstance(some_filler, URIRef):
            return ExistentialRestriction(prop, some_filler)
        if all_filler is not None and some_filler is None and isinstance(all_filler, URIRef):
            return UniversalRestriction(prop, all_filler)

    if some_filler is not None:
        return OtherExpression("SomeValuesFrom", node)
    if all_filler is not None:
        return OtherExpression("AllValuesFrom", node)
    for predicate, kind in _RESTRICTION_KINDS:
        if graph.value(node, predicate) is not None:
            return OtherExpression(kind, node)
    return OtherExpression("Restriction", node)


def subclass_axioms(graph: Graph) -> Iterator[SubClassAxiom]:
    """Yield every ``rdfs:subClassOf`` statement of the graph as an axiom."""
    for sub, sup in graph.subject_objects(RDFS.subClassOf):
        yield SubClassAxiom(
            sub=parse_class_expression(graph, sub),
            sup=parse_class_expression(graph, sup),
        )


def render_expression(expression: ClassExpression) -> str:
    """Short functional-syntax rendering used in log messages."""
    if isinstance(expression, AtomicClass):
        return f"<{expression.iri}>"
    if isinstance(expression, ExistentialRestriction):
        return f"SomeValuesFrom(<{expression.property}> <{expression.filler}>)"
    if isinstance(expression, UniversalRestriction):
        return f"AllValuesFrom(<{expression.property}> <{expression.filler}>)"
    return f"{expression.kind}(_:{expression.node})"
