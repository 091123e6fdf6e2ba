"""
Ontology parser producing the structured diagram graph.

The parser loads an ontology with rdflib, wraps its named classes as nodes
and classifies every subclass axiom into an edge between those nodes.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Set, Union

from rdflib import Graph, OWL, RDF, RDFS, URIRef, XSD

from .classifier import AxiomClassifier
from .domain import SDEdge, SDGraph, SDNode
from .expressions import subclass_axioms

logger = logging.getLogger(__name__)

_BUILTIN_NAMESPACES = (str(RDF), str(RDFS), str(OWL), str(XSD))
_LITERAL_TYPES = {RDFS.Literal, RDF.PlainLiteral, RDF.langString}


def is_datatype(graph: Graph, entity: URIRef) -> bool:
    """Whether the entity names a data range rather than a class."""
    if str(entity).startswith(str(XSD)) or entity in _LITERAL_TYPES:
        return True
    return (entity, RDF.type, RDFS.Datatype) in graph


class ConceptParser:
    """Extracts one node per named class of an ontology."""

    def __init__(self, graph: Graph):
        self.graph = graph

    def provide_nodes(self) -> Set[SDNode]:
        classes = set(self.graph.subjects(RDF.type, OWL.Class))
        classes.update(self.graph.subjects(RDF.type, RDFS.Class))

        nodes = set()
        for entity in classes:
            if isinstance(entity, URIRef) and not str(entity).startswith(_BUILTIN_NAMESPACES):
                nodes.add(SDNode(entity))
        return nodes


class AxiomParser:
    """Classifies the subclass axioms of an ontology into edges."""

    def __init__(self, graph: Graph, classifier: Optional[AxiomClassifier] = None):
        self.graph = graph
        self.classifier = classifier or AxiomClassifier()

    def provide_edges(self, nodes: Set[SDNode]) -> Set[SDEdge]:
        """Classify all subclass axioms against the given node set.

        Edge endpoints are replaced by the matching node from ``nodes`` so the
        graph shares node instances (and their layout coordinates). Datatype
        endpoints missing from the set are added to it as literal nodes.

        Args:
            nodes: Node set from the concept parser; may be extended in place

        Returns:
            Set of edges whose endpoints are all members of ``nodes``
        """
        by_entity: Dict[URIRef, SDNode] = {node.entity: node for node in nodes}
        edges = set()

        for axiom in subclass_axioms(self.graph):
            edge = self.classifier.classify(axiom)
            if edge is None:
                continue

            source = self._resolve(edge.source, by_entity)
            target = self._resolve(edge.target, by_entity)
            if source is None or target is None:
                logger.warning("Skipping edge %s with endpoint outside the node set: %s",
                               edge.relation, axiom)
                continue

            edges.add(SDEdge(source, target, edge.directed, edge.relation))

        nodes.update(by_entity.values())
        return edges

    def _resolve(self, node: SDNode, by_entity: Dict[URIRef, SDNode]) -> Optional[SDNode]:
        known = by_entity.get(node.entity)
        if known is not None:
            return known
        if is_datatype(self.graph, node.entity):
            literal = SDNode(node.entity, is_literal=True)
            by_entity[node.entity] = literal
            return literal
        return None


class OntologyParser:
    """Builds an SDGraph from an ontology document or an rdflib graph."""

    def __init__(self, source: Union[str, Path, Graph], format: Optional[str] = None):
        """Initialize the parser.

        Args:
            source: Path of an ontology document, or an already loaded graph
            format: rdflib format name; guessed from the file name if None
        """
        if isinstance(source, Graph):
            self.graph = source
        else:
            self.graph = Graph()
            self.graph.parse(str(source), format=format)
            logger.info("Loaded %d triples from %s", len(self.graph), source)

        self.concept_parser = ConceptParser(self.graph)
        self.axiom_parser = AxiomParser(self.graph)

    def parse_ontology(self) -> SDGraph:
        nodes = self.concept_parser.provide_nodes()
        edges = self.axiom_parser.provide_edges(nodes)
        return SDGraph.build(nodes, edges)
