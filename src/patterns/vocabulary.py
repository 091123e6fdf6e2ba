"""
OPLa vocabularies used for pattern catalogs and module provenance.
"""

from rdflib import Namespace

# Ontology Pattern Language core annotations
OPLA_CORE = Namespace("http://ontologydesignpatterns.org/opla#")
# Structural-diagram (layout) annotations written by the diagram editor
OPLA_SD = Namespace("https://w3id.org/opla-sd#")

# Catalog index vocabulary
MODL_INDEX = Namespace("https://w3id.org/comodide/ModlIndex#")

PATTERN_CLASS = OPLA_CORE.Pattern
MODULE_CLASS = OPLA_CORE.Module
CATEGORIZATION = OPLA_CORE.categorization
REUSES_PATTERN_AS_TEMPLATE = OPLA_CORE.reusesPatternAsTemplate
IS_NATIVE_TO = OPLA_CORE.isNativeTo

RESERVED_VOCABULARIES = (str(OPLA_CORE), str(OPLA_SD))


def in_opla_core(iri) -> bool:
    return str(OPLA_CORE) in str(iri)


def in_reserved_vocabulary(iri) -> bool:
    """Whether the IRI belongs to OPLa core or OPLa structural-diagram."""
    value = str(iri)
    return any(namespace in value for namespace in RESERVED_VOCABULARIES)
