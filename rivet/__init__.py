"""Rivet - GraphQL query assembly from component data dependencies."""

from .client import RivetClient
from .collectors import collect_fragments, collect_variables
from .dependencies import (
    FragmentSpec,
    OpaqueDependency,
    SpecDependency,
    classify_dependency,
    extract_fragment_specs,
    fragment_name,
    fragment_spec,
)
from .pipeline import Rivet, assemble_query, create, create_from_config
from .retry import with_retry
from .rewriter import inject_variables


__version__ = "1.0.0"

__all__ = [
    "FragmentSpec",
    "OpaqueDependency",
    "Rivet",
    "RivetClient",
    "SpecDependency",
    "assemble_query",
    "classify_dependency",
    "collect_fragments",
    "collect_variables",
    "create",
    "create_from_config",
    "extract_fragment_specs",
    "fragment_name",
    "fragment_spec",
    "inject_variables",
    "with_retry",
]
