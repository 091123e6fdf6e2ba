"""
Ontology Design Pattern Module

This module indexes a catalog of ontology design patterns by category and
instantiates selected patterns into a target ontology, together with OPLa
metadata tracing the new axioms back to the pattern they came from.

Public Interface:
- PatternService: High-level service for all pattern operations

Private Components:
- PatternLibrary: Category -> patterns index over the catalog ontology
- PatternInstantiator: Namespace rewriting and module annotations
- Domain models: Pattern, Category, InstantiationResult
"""

from .service import PatternService

__all__ = ["PatternService"]
