"""
Pattern library index over an OPLa-annotated pattern catalog.

The index maps each category to the patterns assigned to it. It is built on
first use and can be rebuilt as a whole; readers always see a complete
snapshot. A catalog that cannot be loaded yields an index holding only the
"Any" category with no patterns.
"""

import logging
import threading
from pathlib import Path
from typing import Dict, List, Optional, Union

from rdflib import Graph, Literal, RDF, RDFS, URIRef

from .domain import ANY_CATEGORY, Category, Pattern
from .config import DEFAULT_CATALOG_PATH, DEFAULT_FRAGMENT_DIR
from .signature import short_form
from .vocabulary import CATEGORIZATION, PATTERN_CLASS

logger = logging.getLogger(__name__)

FRAGMENT_SUFFIXES = (".ttl", ".owl", ".rdf", ".nt", ".jsonld")


class PatternNotFoundError(LookupError):
    """Raised when no fragment document exists for a catalog pattern."""
    pass


class PatternLibrary:
    """Category -> patterns index built from a catalog ontology."""

    def __init__(self,
                 catalog_path: Optional[Union[str, Path]] = None,
                 fragment_dir: Optional[Union[str, Path]] = None,
                 catalog_format: Optional[str] = None):
        """
        Initialize the pattern library. The catalog is read on first access.

        Args:
            catalog_path: Catalog ontology document (bundled catalog if None)
            fragment_dir: Directory holding one fragment document per pattern
            catalog_format: rdflib format of the catalog; guessed if None
        """
        self.catalog_path = Path(catalog_path) if catalog_path else DEFAULT_CATALOG_PATH
        self.fragment_dir = Path(fragment_dir) if fragment_dir else DEFAULT_FRAGMENT_DIR
        self.catalog_format = catalog_format

        self._rebuild_lock = threading.Lock()
        self._categories: Optional[Dict[Category, List[Pattern]]] = None
        self.last_error: Optional[Exception] = None

    def rebuild(self) -> None:
        """Reload the catalog and replace the whole index.

        Load failures are logged and leave an index with only ANY_CATEGORY.
        """
        with self._rebuild_lock:
            self._rebuild()

    def _rebuild(self) -> None:
        error = None
        try:
            catalog = Graph()
            catalog.parse(str(self.catalog_path), format=self.catalog_format)
            categories = self._parse_index(catalog)
        except Exception as e:
            logger.exception("Unable to reindex pattern library from %s; setting up empty index.",
                             self.catalog_path)
            categories = {ANY_CATEGORY: []}
            error = e

        # Publish the finished snapshot in a single assignment
        self._categories = categories
        self.last_error = error
        logger.info("Pattern library indexed %d patterns in %d categories",
                    len(categories[ANY_CATEGORY]), len(categories))

    def _snapshot(self) -> Dict[Category, List[Pattern]]:
        categories = self._categories
        if categories is None:
            with self._rebuild_lock:
                if self._categories is None:
                    self._rebuild()
                categories = self._categories
        return categories

    def _parse_index(self, catalog: Graph) -> Dict[Category, List[Pattern]]:
        # Regardless of catalog structure there is always the Any category
        categories: Dict[Category, List[Pattern]] = {ANY_CATEGORY: []}

        pattern_iris = sorted(
            (s for s in set(catalog.subjects(RDF.type, PATTERN_CLASS)) if isinstance(s, URIRef)),
            key=str,
        )
        for pattern_iri in pattern_iris:
            pattern = Pattern(self._label(catalog, pattern_iri), pattern_iri)

            pattern_categories = [ANY_CATEGORY]
            for category_iri in sorted(set(catalog.objects(pattern_iri, CATEGORIZATION)), key=str):
                if not isinstance(category_iri, URIRef):
                    continue
                category = Category(self._label(catalog, category_iri), category_iri)
                if category not in pattern_categories:
                    pattern_categories.append(category)

            for category in pattern_categories:
                categories.setdefault(category, []).append(pattern)

        return categories

    @staticmethod
    def _label(catalog: Graph, entity: URIRef) -> str:
        """First rdfs:label of the entity, or its IRI if it has none."""
        labels = sorted(str(obj) for obj in catalog.objects(entity, RDFS.label) if isinstance(obj, Literal))
        if labels:
            return labels[0]
        return str(entity)

    def list_categories(self) -> List[Category]:
        """All categories with patterns, ANY_CATEGORY first."""
        categories = [c for c in self._snapshot() if c != ANY_CATEGORY]
        return [ANY_CATEGORY] + categories

    def patterns_for(self, category: Category) -> List[Pattern]:
        """Patterns of a category; empty if the category is unknown."""
        return list(self._snapshot().get(category, []))

    def find_pattern(self, iri: Union[str, URIRef]) -> Optional[Pattern]:
        target = URIRef(str(iri))
        for pattern in self._snapshot()[ANY_CATEGORY]:
            if pattern.iri == target:
                return pattern
        return None

    def load_pattern_fragment(self, pattern: Pattern) -> Graph:
        """Parse the fragment ontology of a catalog pattern into a new graph.

        Raises:
            PatternNotFoundError: If no fragment document exists for the pattern
        """
        name = short_form(pattern.iri)
        for suffix in FRAGMENT_SUFFIXES:
            path = self.fragment_dir / f"{name}{suffix}"
            if path.is_file():
                fragment = Graph()
                fragment.parse(str(path))
                logger.debug("Loaded fragment for %s from %s", pattern.iri, path)
                return fragment
        raise PatternNotFoundError(f"No fragment document for pattern {pattern.iri} in {self.fragment_dir}")
