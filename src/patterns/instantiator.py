"""
Pattern instantiator.

Given a pattern fragment and a target ontology, produces two axiom sets:

1. the logical axioms of the pattern, optionally cloned into the target
   namespace, and
2. OPLa metadata recording that the new axioms form a module which reuses
   the pattern as a template, with every instantiated entity marked as
   native to that module.

Neither the fragment nor the target graph is modified; the caller merges
both returned graphs into the target.
"""

import logging
from typing import Dict, Optional

from rdflib import BNode, Graph, Literal, RDF, RDFS, URIRef

from .config import PatternConfig
from .naming import NamingContext, generate_document_iri
from .signature import (
    axiom_triples, compute_signature, is_builtin, ontology_iri, short_form, structural_blank_nodes,
)
from .vocabulary import (
    IS_NATIVE_TO, MODULE_CLASS, PATTERN_CLASS, REUSES_PATTERN_AS_TEMPLATE,
    in_opla_core, in_reserved_vocabulary,
)

logger = logging.getLogger(__name__)

COLLISION_SUFFIX = "-1"


class NamingCollisionError(RuntimeError):
    """Raised when no free property name is found within the attempt limit."""
    pass


def module_iri_for(target_iri: URIRef, pattern_label: str) -> URIRef:
    """IRI of the module created by instantiating a pattern, e.g. ``<target>#Parthood_Pattern_Module``."""
    module_name = f"{pattern_label} Module".replace(" ", "_")
    return URIRef(f"{target_iri}#{module_name}")


def rename_graph(graph: Graph, rename_map: Dict[URIRef, URIRef]) -> Graph:
    """Copy of the axioms of ``graph`` with every IRI in ``rename_map`` substituted.

    The ontology header (the owl:Ontology node and its annotations) is not an
    axiom and is left out. Blank nodes of restrictions, class expressions and
    lists get fresh identifiers on every call, so two copies of one fragment
    never share them; anonymous individuals keep their identity.
    """
    terms: Dict = dict(rename_map)
    for node in structural_blank_nodes(graph):
        terms[node] = BNode()

    renamed = Graph()
    for prefix, namespace in graph.namespaces():
        renamed.bind(prefix, namespace, override=False)
    for triple in axiom_triples(graph):
        renamed.add(tuple(terms.get(term, term) for term in triple))
    return renamed


class PatternInstantiator:
    """Instantiates one pattern fragment into one target ontology."""

    def __init__(self,
                 pattern: Graph,
                 pattern_label: str,
                 naming: NamingContext,
                 config: Optional[PatternConfig] = None):
        """
        Initialize the instantiator for a single instantiation attempt.

        Args:
            pattern: Fragment ontology of the pattern; treated as read-only
            pattern_label: Display label of the pattern
            naming: Naming context of the target ontology
            config: Instantiation settings (defaults if None)
        """
        self.pattern = pattern
        self.pattern_label = pattern_label
        self.naming = naming
        self.config = config or PatternConfig()

        self.target_iri = naming.ontology_iri
        self.pattern_iri = ontology_iri(pattern) or generate_document_iri()
        self.module_iri = module_iri_for(self.target_iri, pattern_label)

        self._signature = compute_signature(pattern)
        self._rename_map: Optional[Dict[URIRef, URIRef]] = None

    @property
    def use_target_namespace(self) -> bool:
        return self.config.use_target_namespace

    def compute_rename_map(self) -> Dict[URIRef, URIRef]:
        """Map each renamable pattern entity to its new IRI in the target namespace.

        Computed once per instantiator. Object and data properties get a
        ``-1`` suffix for as long as their short name clashes with an entity
        of the target; classes and individuals are renamed as they are.

        Raises:
            NamingCollisionError: If a property name still collides after
                ``max_rename_attempts`` suffixes
        """
        if self._rename_map is not None:
            return self._rename_map

        rename_map: Dict[URIRef, URIRef] = {}
        for entity in sorted(self._signature, key=str):
            if is_builtin(entity) or in_reserved_vocabulary(entity):
                continue

            entity_short_name = short_form(entity)
            if self._signature[entity].is_property:
                entity_short_name = self._free_property_name(entity_short_name)

            new_iri = URIRef(f"{self.target_iri}{self.naming.separator}{entity_short_name}")
            if new_iri != entity:
                rename_map[entity] = new_iri
                logger.debug("Renaming %s -> %s", entity, new_iri)

        self._rename_map = rename_map
        return rename_map

    def _free_property_name(self, short_name: str) -> str:
        candidate = short_name
        attempts = 0
        while self.naming.find_entities_by_short_name(candidate):
            if attempts >= self.config.max_rename_attempts:
                raise NamingCollisionError(
                    f"Property name '{short_name}' still collides after {attempts} renaming attempts"
                )
            candidate = candidate + COLLISION_SUFFIX
            attempts += 1
        return candidate

    def compute_instantiation_axioms(self) -> Graph:
        """Logical axioms of the pattern, in the target namespace if so configured."""
        if not self.use_target_namespace:
            return rename_graph(self.pattern, {})

        rename_map = self.compute_rename_map()
        logger.info("Instantiating '%s' into %s with %d renamed entities",
                    self.pattern_label, self.target_iri, len(rename_map))
        return rename_graph(self.pattern, rename_map)

    def compute_module_annotation_axioms(self) -> Graph:
        """OPLa metadata describing the module created by this instantiation.

        Each instantiated entity is linked to the module with opla:isNativeTo;
        when namespace merging is enabled the link uses the entity's new IRI.
        """
        rename_map = self.compute_rename_map() if self.use_target_namespace else {}
        axioms = Graph()

        # <pattern> a opla:Pattern ; rdfs:label "label"
        axioms.add((self.pattern_iri, RDF.type, PATTERN_CLASS))
        axioms.add((self.pattern_iri, RDFS.label, Literal(self.pattern_label)))

        # <module> a opla:Module ; opla:reusesPatternAsTemplate <pattern>
        axioms.add((self.module_iri, RDF.type, MODULE_CLASS))
        axioms.add((self.module_iri, REUSES_PATTERN_AS_TEMPLATE, self.pattern_iri))

        for entity in self._signature:
            if is_builtin(entity) or in_opla_core(entity):
                continue
            axioms.add((rename_map.get(entity, entity), IS_NATIVE_TO, self.module_iri))

        return axioms
