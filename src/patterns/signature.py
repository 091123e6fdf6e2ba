"""
Entity signature of an RDF ontology graph.

The signature lists every named entity (class, property, individual,
datatype) the graph's axioms mention, together with its kind.
"""

from enum import Enum
from typing import Dict, Iterator, Set, Tuple

from rdflib import BNode, DCTERMS, DC, Graph, Literal, OWL, RDF, RDFS, URIRef, XSD


class EntityKind(str, Enum):
    """Kinds of named ontology entities."""
    CLASS = "class"
    OBJECT_PROPERTY = "object_property"
    DATA_PROPERTY = "data_property"
    ANNOTATION_PROPERTY = "annotation_property"
    NAMED_INDIVIDUAL = "named_individual"
    DATATYPE = "datatype"

    @property
    def is_property(self) -> bool:
        return self in (EntityKind.OBJECT_PROPERTY, EntityKind.DATA_PROPERTY)


BUILTIN_NAMESPACES = (str(RDF), str(RDFS), str(OWL), str(XSD))

_DECLARATIONS = {
    OWL.Class: EntityKind.CLASS,
    RDFS.Class: EntityKind.CLASS,
    OWL.ObjectProperty: EntityKind.OBJECT_PROPERTY,
    OWL.TransitiveProperty: EntityKind.OBJECT_PROPERTY,
    OWL.SymmetricProperty: EntityKind.OBJECT_PROPERTY,
    OWL.InverseFunctionalProperty: EntityKind.OBJECT_PROPERTY,
    OWL.IrreflexiveProperty: EntityKind.OBJECT_PROPERTY,
    OWL.AsymmetricProperty: EntityKind.OBJECT_PROPERTY,
    OWL.ReflexiveProperty: EntityKind.OBJECT_PROPERTY,
    OWL.DatatypeProperty: EntityKind.DATA_PROPERTY,
    OWL.AnnotationProperty: EntityKind.ANNOTATION_PROPERTY,
    OWL.NamedIndividual: EntityKind.NAMED_INDIVIDUAL,
    RDFS.Datatype: EntityKind.DATATYPE,
}

# Predicates whose subject and object are both classes
_CLASS_AXIOM_PREDICATES = (RDFS.subClassOf, OWL.equivalentClass, OWL.disjointWith)
# Predicates whose subject and object are both object properties
_OBJECT_PROPERTY_PREDICATES = (OWL.inverseOf, OWL.propertyDisjointWith)
_FILLER_PREDICATES = (OWL.someValuesFrom, OWL.allValuesFrom, OWL.onClass, OWL.onDataRange)
# Types that mark a property without saying whether it is object or data
_PROPERTY_TYPES = (RDF.Property, OWL.FunctionalProperty)

_STRUCTURAL_TYPES = (
    OWL.Restriction, OWL.Class, RDFS.Datatype, OWL.AllDisjointClasses,
    OWL.AllDifferent, OWL.AllDisjointProperties, OWL.Axiom, OWL.NegativePropertyAssertion,
)
_STRUCTURAL_PREDICATES = (
    OWL.intersectionOf, OWL.unionOf, OWL.complementOf, OWL.oneOf, OWL.onProperty,
    RDF.first, RDF.rest, OWL.members, OWL.distinctMembers, OWL.annotatedSource,
    OWL.withRestrictions, OWL.onDatatype,
)

_BUILTIN_ANNOTATION_PROPERTIES = (
    RDFS.label, RDFS.comment, RDFS.seeAlso, RDFS.isDefinedBy, OWL.versionInfo, OWL.deprecated,
)
_ANNOTATION_NAMESPACES = (str(DC), str(DCTERMS))


def is_builtin(iri: URIRef) -> bool:
    """Whether the IRI is part of the RDF, RDFS, OWL or XSD vocabularies."""
    return str(iri).startswith(BUILTIN_NAMESPACES)


def short_form(iri: URIRef) -> str:
    """The local part of an IRI: text after the last ``#``, else after the last ``/``."""
    value = str(iri)
    if "#" in value:
        local = value.rsplit("#", 1)[1]
    else:
        local = value.rstrip("/").rsplit("/", 1)[-1]
    return local or value


def ontology_iri(graph: Graph):
    """IRI of the graph's ``owl:Ontology`` header, or None for an anonymous ontology."""
    for subject in graph.subjects(RDF.type, OWL.Ontology):
        if isinstance(subject, URIRef):
            return subject
    return None


def _is_datatype_term(graph: Graph, term) -> bool:
    if not isinstance(term, URIRef):
        return False
    if str(term).startswith(str(XSD)) or term in (RDFS.Literal, RDF.PlainLiteral, RDF.langString):
        return True
    return (term, RDF.type, RDFS.Datatype) in graph


def ontology_headers(graph: Graph) -> Set:
    """Nodes typed ``owl:Ontology``; their triples are annotations, not axioms."""
    return set(graph.subjects(RDF.type, OWL.Ontology))


def axiom_triples(graph: Graph) -> Iterator[Tuple]:
    """Every triple of the graph except those describing the ontology header."""
    headers = ontology_headers(graph)
    for triple in graph:
        if triple[0] not in headers:
            yield triple


def structural_blank_nodes(graph: Graph) -> Set[BNode]:
    """Blank nodes that encode class expressions, lists or axiom helpers.

    These have no identity of their own, unlike anonymous individuals.
    """
    structural = set()
    for predicate in _STRUCTURAL_PREDICATES:
        for node in graph.subjects(predicate, None):
            if isinstance(node, BNode):
                structural.add(node)
    for type_ in _STRUCTURAL_TYPES:
        for node in graph.subjects(RDF.type, type_):
            if isinstance(node, BNode):
                structural.add(node)
    return structural


def _is_annotation_predicate(predicate, declared: Dict[URIRef, EntityKind]) -> bool:
    if declared.get(predicate) == EntityKind.ANNOTATION_PROPERTY:
        return True
    return predicate in _BUILTIN_ANNOTATION_PROPERTIES or str(predicate).startswith(_ANNOTATION_NAMESPACES)


def compute_signature(graph: Graph) -> Dict[URIRef, EntityKind]:
    """Map each named entity mentioned in the graph's axioms to its kind.

    Explicit declarations win; undeclared entities are typed from how the
    axioms use them. Ontology header triples are ignored, and the header IRI
    and import targets are not entities. IRI values of annotations are not
    entities either. Built-in entities are included; filter with ``is_builtin``.
    """
    non_entities = ontology_headers(graph)
    non_entities.update(graph.objects(None, OWL.imports))

    axioms = Graph()
    for triple in axiom_triples(graph):
        axioms.add(triple)

    declared: Dict[URIRef, EntityKind] = {}
    inferred: Dict[URIRef, EntityKind] = {}
    untyped_properties = set()

    def infer(term, kind: EntityKind):
        if isinstance(term, URIRef) and term not in non_entities:
            inferred.setdefault(term, kind)

    for subject, type_ in axioms.subject_objects(RDF.type):
        if not isinstance(subject, URIRef) or subject in non_entities:
            continue
        kind = _DECLARATIONS.get(type_)
        if kind is not None:
            # A property declared with several types keeps its most specific kind
            if declared.get(subject) not in (EntityKind.OBJECT_PROPERTY, EntityKind.DATA_PROPERTY):
                declared[subject] = kind
        elif type_ in _PROPERTY_TYPES:
            untyped_properties.add(subject)
        elif type_ not in _STRUCTURAL_TYPES:
            infer(type_, EntityKind.CLASS)
            infer(subject, EntityKind.NAMED_INDIVIDUAL)

    for predicate in _CLASS_AXIOM_PREDICATES:
        for subject, obj in axioms.subject_objects(predicate):
            infer(subject, EntityKind.CLASS)
            infer(obj, EntityKind.CLASS)

    for predicate in _OBJECT_PROPERTY_PREDICATES:
        for subject, obj in axioms.subject_objects(predicate):
            infer(subject, EntityKind.OBJECT_PROPERTY)
            infer(obj, EntityKind.OBJECT_PROPERTY)

    for restriction, prop in axioms.subject_objects(OWL.onProperty):
        data_restriction = any(
            _is_datatype_term(axioms, axioms.value(restriction, predicate))
            for predicate in _FILLER_PREDICATES
        )
        infer(prop, EntityKind.DATA_PROPERTY if data_restriction else EntityKind.OBJECT_PROPERTY)

    for predicate in _FILLER_PREDICATES:
        for filler in axioms.objects(None, predicate):
            infer(filler, EntityKind.DATATYPE if _is_datatype_term(axioms, filler) else EntityKind.CLASS)

    for domain in axioms.objects(None, RDFS.domain):
        infer(domain, EntityKind.CLASS)
    for range_ in axioms.objects(None, RDFS.range):
        infer(range_, EntityKind.DATATYPE if _is_datatype_term(axioms, range_) else EntityKind.CLASS)

    for subject, predicate, obj in axioms:
        if predicate == RDF.type:
            continue
        if _is_annotation_predicate(predicate, declared) or (isinstance(obj, Literal) and is_builtin(predicate)):
            kind = EntityKind.ANNOTATION_PROPERTY
        elif isinstance(obj, Literal):
            kind = EntityKind.DATA_PROPERTY
        else:
            kind = EntityKind.OBJECT_PROPERTY
        infer(predicate, kind)

    # rdf:Property and owl:FunctionalProperty say nothing about object vs data
    for prop in untyped_properties:
        if prop not in declared and inferred.get(prop) not in (EntityKind.OBJECT_PROPERTY, EntityKind.DATA_PROPERTY):
            inferred[prop] = EntityKind.OBJECT_PROPERTY

    # Subjects and objects of property assertions are individuals
    kinds = dict(inferred)
    kinds.update(declared)
    for subject, predicate, obj in axioms:
        if is_builtin(predicate):
            continue
        kind = kinds.get(predicate)
        if kind == EntityKind.OBJECT_PROPERTY:
            infer(subject, EntityKind.NAMED_INDIVIDUAL)
            infer(obj, EntityKind.NAMED_INDIVIDUAL)
        elif kind == EntityKind.DATA_PROPERTY:
            infer(subject, EntityKind.NAMED_INDIVIDUAL)

    signature = dict(inferred)
    signature.update(declared)
    return signature
