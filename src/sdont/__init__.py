"""
Structured Diagram Ontology (SDOnt) Module

This module turns the subclass axioms of an ontology into a labeled graph
that a diagram editor can render.

Public Interface:
- OntologyParser: Loads an ontology and produces its SDGraph
- AxiomClassifier: Converts a single subclass axiom into an SDEdge

Private Components:
- Domain models: SDNode, SDEdge, SDGraph
- Class expression grammar and axiom reader
"""

from .classifier import AxiomClassifier
from .parser import OntologyParser

__all__ = ["OntologyParser", "AxiomClassifier"]
