"""
contractsmith/core/builder.py

The contract model and the builder API used by every feature module.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, List, Mapping, Optional, Union

from contractsmith.core.naming import to_identifier
from contractsmith.core.settings import DEFAULT_SETTINGS, ContractsmithSettings
from contractsmith.core.store import KeyedStore
from contractsmith.models.contract import (
    Argument,
    BaseFunction,
    BaseTrait,
    Constant,
    ContractError,
    ContractFunction,
    Storage,
    Trait,
    UseClause,
    Variable,
)

logger = logging.getLogger(__name__)

TraitRef = Union[BaseTrait, str, None]


class ContractBuilder:
    """
    Accumulates declarative facts about a single contract.

    Every collection is a :class:`KeyedStore`, so repeated requests for the same
    trait, function, import, variable, constant, error or storage slot resolve to
    the entry created by the first request. The only accumulating operations are
    constructor code lines and function prologues, which keep call order.

    A builder belongs to one build pass. It is not shared between threads and is
    not expected to change once it has been handed to the printer.

    Parameters
    ----------
    name : str
        Free-text contract name, converted to a capitalized identifier.
    license : Optional[str]
        SPDX license identifier. Defaults to the license in ``settings``.
    settings : Optional[ContractsmithSettings]
        Injected configuration. Defaults to ``DEFAULT_SETTINGS``.

    Raises
    ------
    NamingError
        If ``name`` is empty or contains no valid identifier characters.
    """

    def __init__(
        self,
        name: str,
        license: Optional[str] = None,
        settings: Optional[ContractsmithSettings] = None,
    ) -> None:
        self.name: str = to_identifier(name, capitalize=True)
        self.license: str = license or (settings or DEFAULT_SETTINGS).license
        self.security_contact: Optional[str] = None
        self.ownable: bool = False

        self.documentations: List[str] = []
        self.constructor_args: List[Argument] = []
        self.constructor_code: List[str] = []

        self._traits: KeyedStore[str, Trait] = KeyedStore()
        self._free_functions: KeyedStore[str, ContractFunction] = KeyedStore()
        self._use_clauses: KeyedStore[str, UseClause] = KeyedStore()
        self._variables: KeyedStore[str, Variable] = KeyedStore()
        self._constants: KeyedStore[str, Constant] = KeyedStore()
        self._errors: KeyedStore[str, ContractError] = KeyedStore()
        self._storages: KeyedStore[str, Storage] = KeyedStore()

    # --- Read surface ---

    @property
    def traits(self) -> List[Trait]:
        return self._traits.values()

    @property
    def free_functions(self) -> List[ContractFunction]:
        return self._free_functions.values()

    @property
    def use_clauses(self) -> List[UseClause]:
        return self._use_clauses.values()

    @property
    def variables(self) -> List[Variable]:
        return self._variables.values()

    @property
    def constants(self) -> List[Constant]:
        return self._constants.values()

    @property
    def errors(self) -> List[ContractError]:
        return self._errors.values()

    @property
    def storages(self) -> List[Storage]:
        return self._storages.values()

    def trait_exists(self, name: str) -> bool:
        return name in self._traits

    def get_trait(self, name: str) -> Optional[Trait]:
        return self._traits.get(name)

    # --- Traits and functions ---

    def add_trait(
        self,
        trait: Union[BaseTrait, str],
        *,
        priority: Optional[int] = None,
        section: Optional[str] = None,
    ) -> Trait:
        """
        Look up a trait by name, creating it on first request.

        ``trait`` is either a :class:`BaseTrait` or a bare name, in which case the
        ``priority`` and ``section`` keywords describe the new trait. On a hit the
        existing instance is returned unchanged.
        """
        if isinstance(trait, str):
            trait = BaseTrait(name=trait, priority=priority, section=section)

        return self._traits.setdefault(
            trait.name,
            lambda: Trait(
                name=trait.name,
                struct_name=trait.struct_name,
                tags=list(trait.tags),
                section=trait.section,
                priority=trait.priority,
                storage=trait.storage,
            ),
        )

    def add_function(self, trait: TraitRef, fn: BaseFunction) -> ContractFunction:
        """
        Add ``fn`` to ``trait``, or to the contract's own impl block when ``trait`` is None.

        Functions are identified by name plus argument names. When a function with
        the same identity already exists it is returned as-is and the body of
        ``fn`` is ignored.
        """
        if trait is None:
            return self._free_functions.setdefault(
                fn.signature, lambda: ContractFunction.from_base(fn, pub=True)
            )

        t = self.add_trait(trait)
        for existing in t.functions:
            if existing.signature == fn.signature:
                return existing

        contract_fn = ContractFunction.from_base(fn)
        t.functions.append(contract_fn)
        return contract_fn

    def add_functions(
        self,
        trait: TraitRef,
        functions: Union[Mapping[str, BaseFunction], Iterable[BaseFunction]],
    ) -> None:
        values = functions.values() if isinstance(functions, Mapping) else functions
        for fn in values:
            self.add_function(trait, fn)

    def add_function_code_before(
        self, trait: TraitRef, fn: BaseFunction, code_before: Iterable[str]
    ) -> None:
        existing = self.add_function(trait, fn)
        existing.code_before.extend(code_before)

    def add_function_tag(self, trait: TraitRef, fn: BaseFunction, tag: str) -> None:
        existing = self.add_function(trait, fn)
        if tag not in existing.tags:
            existing.tags.append(tag)

    def set_function_code(self, trait: TraitRef, fn: BaseFunction, code: Iterable[str]) -> None:
        existing = self.add_function(trait, fn)
        existing.code = list(code)

    # --- Imports ---

    def add_use_clause(
        self,
        container_path: str,
        name: str,
        *,
        groupable: bool = True,
        alias: Optional[str] = None,
    ) -> bool:
        """
        Register ``use container_path::name``.

        The import is keyed by its alias when one is given, otherwise by its name.
        The first registration for a key wins; any later request for the same key
        is dropped even if it points somewhere else.
        """
        clause = UseClause(
            container_path=container_path,
            name=name,
            groupable=groupable,
            alias=alias or None,
        )
        added = self._use_clauses.add(clause.key, clause)
        if not added:
            existing = self._use_clauses.get(clause.key)
            if existing != clause:
                logger.debug(
                    "[contractsmith] Dropping use clause %s::%s; '%s' already imported from %s",
                    container_path,
                    clause.name_with_alias,
                    clause.key,
                    existing.container_path if existing else "?",
                )
        return added

    # --- Constructor ---

    def add_constructor_argument(self, arg: Argument) -> None:
        if any(existing.name == arg.name for existing in self.constructor_args):
            return
        self.constructor_args.append(arg)

    def add_constructor_code(self, line: str) -> None:
        self.constructor_code.append(line)

    # --- Named records ---

    def add_variable(self, variable: Variable) -> bool:
        return self._variables.add(variable.name, variable)

    def add_constant(self, constant: Constant) -> bool:
        return self._constants.add(constant.name, constant)

    def add_error(self, error: ContractError) -> bool:
        """
        Declare a contract error. Errors without an ordinal get the next free one.

        The error macro import is registered together with the first error.
        """
        if error.name in self._errors:
            return False
        if error.num is None:
            used = [e.num for e in self._errors.values() if e.num is not None]
            error = replace(error, num=max(used, default=0) + 1)
        self.add_use_clause("soroban_sdk", "contracterror")
        return self._errors.add(error.name, error)

    def add_storage(self, storage: Storage) -> bool:
        return self._storages.add(storage.name, storage)

    # --- Header ---

    def add_documentation(self, line: str) -> None:
        self.documentations.append(line)

    def __repr__(self) -> str:
        return f"ContractBuilder(name={self.name!r}, traits={self._traits.keys()!r})"


Contract = ContractBuilder
