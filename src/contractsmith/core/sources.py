"""
contractsmith/core/sources.py

Generates contract sources for every option combination of every kind, or for
a minimal subset whose traits cover the same ground.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, List, Literal, Optional, Union, assert_never

from contractsmith.core.build_generic import GenericOptions, Kind, build_generic
from contractsmith.core.builder import ContractBuilder
from contractsmith.core.cover import find_cover
from contractsmith.core.errors import OptionsError
from contractsmith.core.identity import IdentityManager
from contractsmith.core.printer import print_contract
from contractsmith.core.settings import ContractsmithSettings
from contractsmith.kinds.fungible import generate_fungible_options
from contractsmith.kinds.non_fungible import generate_non_fungible_options

logger = logging.getLogger(__name__)

Subset = Literal["all", "minimal-cover"]
SUBSETS: tuple[Subset, ...] = ("all", "minimal-cover")


@dataclass(frozen=True)
class GeneratedContract:
    id: str
    options: GenericOptions
    contract: ContractBuilder


@dataclass(frozen=True)
class GeneratedSource(GeneratedContract):
    source: str


def generate_options(kind: Optional[Kind] = None) -> Iterator[GenericOptions]:
    if kind is None or kind == "Fungible":
        yield from generate_fungible_options()
    if kind is None or kind == "NonFungible":
        yield from generate_non_fungible_options()


def _trait_names(generated: GeneratedContract) -> List[str]:
    return [t.name for t in generated.contract.traits]


def _upgradeable_set_to(is_upgradeable: bool) -> Callable[[GeneratedContract], bool]:
    def _filter(generated: GeneratedContract) -> bool:
        opts = generated.options
        match opts.kind:
            case "Fungible":
                return opts.upgradeable == is_upgradeable
            case "NonFungible":
                # Non-fungible contracts have no upgradeable option.
                return not is_upgradeable
            case _:
                assert_never(opts.kind)

    return _filter


def generate_contract_subset(
    subset: Subset = "all",
    kind: Optional[Kind] = None,
    identity: Optional[IdentityManager] = None,
    settings: Optional[ContractsmithSettings] = None,
) -> List[GeneratedContract]:
    """
    Build every option combination, then optionally down-sample to a cover.

    Combinations rejected with ``OptionsError`` are skipped; any other error
    aborts generation.

    Parameters
    ----------
    subset : {"all", "minimal-cover"}
        ``"all"`` keeps every buildable combination. ``"minimal-cover"`` keeps a
        greedy cover over trait names, computed separately for upgradeable and
        non-upgradeable contracts.
    kind : Optional[Kind]
        Restrict generation to one kind.
    identity : Optional[IdentityManager]
        Id strategy; defaults to SHA-1 over canonical option JSON.
    settings : Optional[ContractsmithSettings]
        Injected configuration passed to every build.
    """
    identity = identity or IdentityManager()
    contracts: List[GeneratedContract] = []
    skipped = 0

    for options in generate_options(kind):
        contract_id = identity.compute_options_id(options)
        try:
            contract = build_generic(options, settings)
        except OptionsError as e:
            skipped += 1
            logger.debug("[contractsmith] Skipping options %s: %s", contract_id, e.messages)
            continue
        contracts.append(GeneratedContract(id=contract_id, options=options, contract=contract))

    logger.debug(
        "[contractsmith] Built %d contracts (%d combinations skipped)", len(contracts), skipped
    )

    if subset == "all":
        return contracts

    upgradeable = [c for c in contracts if _upgradeable_set_to(True)(c)]
    not_upgradeable = [c for c in contracts if _upgradeable_set_to(False)(c)]
    return [
        *find_cover(upgradeable, _trait_names),
        *find_cover(not_upgradeable, _trait_names),
    ]


def generate_sources(
    subset: Subset = "all",
    unique_name: bool = False,
    kind: Optional[Kind] = None,
    settings: Optional[ContractsmithSettings] = None,
) -> Iterator[GeneratedSource]:
    """
    Print every generated contract.

    With ``unique_name`` the contracts are rebuilt as ``Contract1``, ``Contract2``...
    in generation order so they can live side by side in one crate. Ids still
    refer to the original options.
    """
    for counter, generated in enumerate(
        generate_contract_subset(subset, kind, settings=settings), start=1
    ):
        contract = generated.contract
        if unique_name:
            contract = build_generic(
                generated.options.model_copy(update={"name": f"Contract{counter}"}),
                settings,
            )
        source = print_contract(contract, settings)
        yield GeneratedSource(
            id=generated.id,
            options=generated.options,
            contract=contract,
            source=source,
        )


def write_generated_sources(
    directory: Union[str, Path],
    subset: Subset = "all",
    unique_name: bool = False,
    kind: Optional[Kind] = None,
    settings: Optional[ContractsmithSettings] = None,
) -> List[str]:
    """
    Write each generated source to ``<directory>/<name>.rs``.

    Files are named by contract name with ``unique_name``, otherwise by id.

    Returns
    -------
    List[str]
        The written file stems, in generation order.
    """
    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)
    names: List[str] = []

    for generated in generate_sources(subset, unique_name, kind, settings):
        name = generated.contract.name if unique_name else generated.id
        (out_dir / f"{name}.rs").write_text(generated.source, encoding="utf-8")
        names.append(name)

    logger.info("[contractsmith] Wrote %d sources to %s", len(names), out_dir)
    return names
