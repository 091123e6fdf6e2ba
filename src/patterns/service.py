"""
High-level pattern service providing the public interface for pattern operations.

This is the only public interface into the patterns module. All other
components are private implementation details.
"""

import logging
from typing import List, Optional

from rdflib import Graph

from .config import PatternConfig
from .domain import Category, InstantiationResult, Pattern
from .instantiator import PatternInstantiator
from .library import PatternLibrary
from .naming import GraphNamingContext, NamingContext

logger = logging.getLogger(__name__)


class PatternService:
    """Browse the pattern catalog and instantiate patterns into ontologies."""

    def __init__(self, library: Optional[PatternLibrary] = None, config: Optional[PatternConfig] = None):
        """Initialize the pattern service.

        Args:
            library: Optional pattern library. If None, creates one from the config.
            config: Optional configuration. If None, reads it from the environment.
        """
        self.config = config if config is not None else PatternConfig.from_env()
        if library is None:
            library = PatternLibrary(self.config.catalog_path, self.config.fragment_dir)
        self.library = library

    def list_categories(self) -> List[Category]:
        return self.library.list_categories()

    def patterns_for(self, category: Category) -> List[Pattern]:
        return self.library.patterns_for(category)

    def rebuild_index(self) -> None:
        self.library.rebuild()

    def instantiate(self,
                    pattern_fragment: Graph,
                    pattern_label: str,
                    target: Graph,
                    naming: Optional[NamingContext] = None) -> InstantiationResult:
        """Compute the axioms that instantiate a pattern fragment into a target ontology.

        The target is not modified; pass the result to ``apply``.

        Args:
            pattern_fragment: Fragment ontology of the pattern
            pattern_label: Display label of the pattern
            target: Target ontology
            naming: Naming context of the target; derived from ``target`` if None

        Returns:
            InstantiationResult with both axiom sets

        Raises:
            NamingCollisionError: If a property cannot be given a free name
        """
        if naming is None:
            naming = GraphNamingContext(target, separator=self.config.entity_separator)

        instantiator = PatternInstantiator(pattern_fragment, pattern_label, naming, self.config)
        instantiation_axioms = instantiator.compute_instantiation_axioms()
        module_annotation_axioms = instantiator.compute_module_annotation_axioms()

        renamed = dict(instantiator.compute_rename_map()) if self.config.use_target_namespace else {}
        return InstantiationResult(
            module_iri=instantiator.module_iri,
            instantiation_axioms=instantiation_axioms,
            module_annotation_axioms=module_annotation_axioms,
            renamed=renamed,
        )

    def instantiate_pattern(self, pattern: Pattern, target: Graph,
                            naming: Optional[NamingContext] = None) -> InstantiationResult:
        """Instantiate a catalog pattern, loading its bundled fragment.

        Raises:
            PatternNotFoundError: If the pattern has no fragment document
        """
        fragment = self.library.load_pattern_fragment(pattern)
        return self.instantiate(fragment, pattern.label, target, naming)

    def apply(self, target: Graph, result: InstantiationResult) -> int:
        """Merge both axiom sets of an instantiation into the target.

        Returns:
            Number of triples added to the target
        """
        if result.instantiation_axioms is None or result.module_annotation_axioms is None:
            raise ValueError("Instantiation result is incomplete; nothing was applied")

        before = len(target)
        target += result.instantiation_axioms
        target += result.module_annotation_axioms
        added = len(target) - before

        logger.info("Applied module %s to target (%d new triples)", result.module_iri, added)
        return added
