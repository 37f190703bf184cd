"""
Contractsmith: a declarative builder and printer for Soroban smart contracts.

This package provides the main public API: the contract builder that feature
modules record traits, functions and imports into, the printer that renders a
built contract to source, dependency resolution against an external library
table, and batch generation of every option combination.
"""

# Models
from contractsmith.models.contract import (
    Argument,
    BaseFunction,
    BaseTrait,
    ResultType,
)

# Core
from contractsmith.core.builder import Contract, ContractBuilder
from contractsmith.core.printer import print_contract
from contractsmith.core.dependencies import SourceLibrary, get_imports, reachable
from contractsmith.core.errors import (
    ContractsmithError,
    MissingSourceError,
    NamingError,
    OptionsError,
    UnknownKindError,
)
from contractsmith.core.settings import ContractsmithSettings

# Generation
from contractsmith.core.build_generic import GenericOptions, build_generic, parse_options
from contractsmith.core.sources import (
    generate_contract_subset,
    generate_sources,
    write_generated_sources,
)
from contractsmith.kinds.fungible import FungibleOptions
from contractsmith.kinds.non_fungible import NonFungibleOptions

__all__ = [
    # Model records
    "Argument",
    "BaseFunction",
    "BaseTrait",
    "ResultType",
    # Builder and printer
    "Contract",
    "ContractBuilder",
    "print_contract",
    # Dependencies
    "SourceLibrary",
    "get_imports",
    "reachable",
    # Errors
    "ContractsmithError",
    "MissingSourceError",
    "NamingError",
    "OptionsError",
    "UnknownKindError",
    # Settings
    "ContractsmithSettings",
    # Generation
    "GenericOptions",
    "FungibleOptions",
    "NonFungibleOptions",
    "build_generic",
    "parse_options",
    "generate_contract_subset",
    "generate_sources",
    "write_generated_sources",
]
