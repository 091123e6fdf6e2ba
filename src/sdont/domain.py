"""
Domain models for the structured diagram graph.

These models are the nodes and edges produced from an ontology and handed
to the diagram editor for layout and rendering.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Mapping

from rdflib import RDFS, URIRef

# Label of every "is-a" edge
SUBCLASS_RELATION = RDFS.subClassOf


@dataclass(eq=False)
class SDNode:
    """Wraps one ontology entity for display in the diagram.

    Identity is the wrapped entity: two nodes over the same IRI are
    interchangeable. Only the layout coordinates may change after creation.
    """

    entity: URIRef
    is_literal: bool = False
    x: float = 0.0                      # set by the layout collaborator
    y: float = 0.0

    def __post_init__(self):
        if self.entity is None:
            raise ValueError("SDNode requires an entity")

    def __eq__(self, other) -> bool:
        if not isinstance(other, SDNode):
            return NotImplemented
        return self.entity == other.entity

    def __hash__(self) -> int:
        return hash(self.entity)

    def __repr__(self) -> str:
        return f"SDNode({self.entity!s}, literal={self.is_literal})"


@dataclass(frozen=True)
class SDEdge:
    """A relation between two nodes, labeled with an ontology entity.

    Subclass edges are directed; property edges are not.
    """

    source: SDNode
    target: SDNode
    directed: bool
    relation: URIRef

    def __post_init__(self):
        if self.source is None or self.target is None:
            raise ValueError("SDEdge requires both a source and a target node")
        if self.relation is None:
            raise ValueError("SDEdge requires a relation")
        if self.directed != (self.relation == SUBCLASS_RELATION):
            raise ValueError(
                f"Edge labeled {self.relation} must have directed={not self.directed}"
            )

    @property
    def is_subclass(self) -> bool:
        return self.relation == SUBCLASS_RELATION


@dataclass(frozen=True)
class SDGraph:
    """Node set plus edge set, fixed once constructed.

    Nodes are keyed by entity IRI. Every edge endpoint must be in the node
    set; nodes without edges are allowed.
    """

    nodes: Mapping[URIRef, SDNode]
    edges: FrozenSet[SDEdge] = field(default_factory=frozenset)

    def __post_init__(self):
        for edge in self.edges:
            for endpoint in (edge.source, edge.target):
                if endpoint.entity not in self.nodes:
                    raise ValueError(
                        f"Edge {edge.relation} references unknown node {endpoint.entity}"
                    )

    @classmethod
    def build(cls, nodes: Iterable[SDNode], edges: Iterable[SDEdge]) -> "SDGraph":
        """Create a graph from node and edge iterables, keeping the first node per entity.

        Raises:
            ValueError: If an edge endpoint is missing from the node set
        """
        node_map: Dict[URIRef, SDNode] = {}
        for node in nodes:
            node_map.setdefault(node.entity, node)

        return cls(nodes=MappingProxyType(node_map), edges=frozenset(edges))

    def get_node(self, entity: URIRef) -> SDNode:
        return self.nodes[entity]

    def edges_from(self, entity: URIRef):
        """All edges whose source wraps the given entity."""
        return [edge for edge in self.edges if edge.source.entity == entity]
