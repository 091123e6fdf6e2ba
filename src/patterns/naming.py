"""
Naming context of a target ontology.

The instantiator consults this to place renamed pattern entities in the
target namespace and to avoid property name collisions.
"""

import uuid
from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Dict, Optional, Set

from rdflib import Graph, URIRef

from .signature import compute_signature, is_builtin, ontology_iri, short_form


def generate_document_iri() -> URIRef:
    """Fresh IRI for an ontology that has none."""
    return URIRef(f"urn:uuid:{uuid.uuid4()}")


class NamingContext(ABC):
    """Interface of the target ontology's naming collaborator."""

    @property
    @abstractmethod
    def ontology_iri(self) -> URIRef:
        """IRI of the target ontology."""
        pass

    @property
    @abstractmethod
    def separator(self) -> str:
        """Preferred separator between namespace and short name, e.g. ``#``."""
        pass

    @abstractmethod
    def find_entities_by_short_name(self, name: str) -> Set[URIRef]:
        """Entities of the target whose short name equals ``name``."""
        pass


class GraphNamingContext(NamingContext):
    """Naming context computed from an rdflib graph of the target ontology.

    The short-name lookup is a snapshot taken at construction time.
    """

    def __init__(self, graph: Graph, separator: str = "#", iri: Optional[URIRef] = None):
        """Initialize the naming context.

        Args:
            graph: The target ontology
            separator: Preferred separator for new entity IRIs
            iri: Ontology IRI override; defaults to the graph's header IRI, or
                a generated document IRI for an anonymous ontology
        """
        self._separator = separator
        self._iri = iri or ontology_iri(graph) or generate_document_iri()

        self._by_short_name: Dict[str, Set[URIRef]] = defaultdict(set)
        for entity in compute_signature(graph):
            if not is_builtin(entity):
                self._by_short_name[short_form(entity)].add(entity)

    @property
    def ontology_iri(self) -> URIRef:
        return self._iri

    @property
    def separator(self) -> str:
        return self._separator

    def find_entities_by_short_name(self, name: str) -> Set[URIRef]:
        return set(self._by_short_name.get(name, ()))
