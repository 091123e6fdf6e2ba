"""
Axiom classifier turning subclass axioms into diagram edges.

Supported shapes, checked in this order:

    A ⊑ B          directed "is-a" edge A -> B
    A ⊑ ∃R.B       property edge, source A, target B, label R
    A ⊑ ∀R.B       (same as above)
    ∃R.A ⊑ B       property edge, source B, target A, label R
    ∀R.A ⊑ B       (same as above)

Any other axiom is reported as unsupported and produces no edge.
"""

import logging
from typing import Optional

from .domain import SDEdge, SDNode, SUBCLASS_RELATION
from .expressions import AtomicClass, Restriction, SubClassAxiom

logger = logging.getLogger(__name__)


class AxiomClassifier:
    """Classifies one subclass axiom at a time; holds no state between calls."""

    def classify(self, axiom: SubClassAxiom) -> Optional[SDEdge]:
        """Convert a subclass axiom into an edge.

        Args:
            axiom: The ``sub ⊑ sup`` axiom to classify

        Returns:
            The edge for a supported shape, or None if the shape is unsupported
            (a warning is logged in that case)
        """
        left, right = axiom.sub, axiom.sup

        if isinstance(left, AtomicClass) and isinstance(right, AtomicClass):
            return self._atomic_subclass(left, right)

        if isinstance(left, AtomicClass) and isinstance(right, Restriction):
            return self._right_complex(left, right)

        if isinstance(left, Restriction) and isinstance(right, AtomicClass):
            return self._left_complex(left, right)

        logger.warning("Rendering of the axiom is not supported: %s", axiom)
        return None

    def _atomic_subclass(self, left: AtomicClass, right: AtomicClass) -> SDEdge:
        source = SDNode(left.iri)
        target = SDNode(right.iri)
        return SDEdge(source, target, True, SUBCLASS_RELATION)

    def _right_complex(self, left: AtomicClass, right) -> SDEdge:
        # A ⊑ QR.B: the atomic side is the source, the filler the target
        source = SDNode(left.iri)
        target = SDNode(right.filler)
        return SDEdge(source, target, False, right.property)

    def _left_complex(self, left, right: AtomicClass) -> SDEdge:
        # QR.A ⊑ B: still the atomic side is the source, the filler the target
        source = SDNode(right.iri)
        target = SDNode(left.filler)
        return SDEdge(source, target, False, left.property)
