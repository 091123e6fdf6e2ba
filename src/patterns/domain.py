"""
Domain models for the pattern catalog and pattern instantiation.
"""

from dataclasses import dataclass, field
from typing import Dict

from rdflib import Graph, URIRef

from .vocabulary import MODL_INDEX


@dataclass(frozen=True)
class Category:
    """A pattern category from the catalog. Identity is the IRI only."""

    label: str = field(compare=False)
    iri: URIRef

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class Pattern:
    """An ontology design pattern listed in the catalog. Identity is the IRI only."""

    label: str = field(compare=False)
    iri: URIRef

    def __str__(self) -> str:
        return self.label


# Every pattern belongs to this category, whatever the catalog says
ANY_CATEGORY = Category("Any", MODL_INDEX.AnyCategory)


@dataclass
class InstantiationResult:
    """Output of one pattern instantiation.

    Both axiom sets must be merged into the target ontology together.
    """

    module_iri: URIRef
    instantiation_axioms: Graph
    module_annotation_axioms: Graph
    renamed: Dict[URIRef, URIRef] = field(default_factory=dict)  # original IRI -> IRI in target
