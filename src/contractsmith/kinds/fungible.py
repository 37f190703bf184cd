"""
Fungible token contracts built on ``stellar_tokens::fungible``.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Iterator, Literal, Optional

from contractsmith.core.alternatives import generate_alternatives
from contractsmith.core.builder import ContractBuilder
from contractsmith.core.errors import OptionsError
from contractsmith.core.naming import escape_string, to_uint
from contractsmith.core.settings import ContractsmithSettings
from contractsmith.kinds.access_control import require_access_control, set_access_control
from contractsmith.kinds.common import (
    ACCESS_OPTIONS,
    INFO_OPTIONS,
    CommonContractOptions,
    Access,
    get_self_arg,
    set_info,
)
from contractsmith.kinds.pausable import add_pausable, tag_when_not_paused
from contractsmith.kinds.upgradeable import add_upgradeable
from contractsmith.models.contract import Argument, BaseFunction, BaseTrait

PREMINT_PATTERN = re.compile(r"^(\d*\.?\d*)$")
DECIMALS = 18


class FungibleOptions(CommonContractOptions):
    kind: Literal["Fungible"] = "Fungible"
    name: str = "MyToken"
    symbol: str = "MTK"
    burnable: bool = False
    pausable: bool = False
    upgradeable: bool = False
    premint: str = "0"
    mintable: bool = False

booleans = [True, False]

blueprint: Dict[str, Any] = {
    "name": ["MyToken"],
    "symbol": ["MTK"],
    "burnable": booleans,
    "pausable": booleans,
    "upgradeable": booleans,
    "premint": ["1"],
    "mintable": booleans,
    "access": list(ACCESS_OPTIONS),
    "info": list(INFO_OPTIONS),
}


def generate_fungible_options() -> Iterator[FungibleOptions]:
    for alternative in generate_alternatives(blueprint):
        yield FungibleOptions(**alternative)


def build_fungible(
    opts: FungibleOptions, settings: Optional[ContractsmithSettings] = None
) -> ContractBuilder:
    c = ContractBuilder(opts.name, settings=settings)

    add_base(c, escape_string(opts.name), escape_string(opts.symbol), opts.pausable)

    if opts.premint:
        add_premint(c, opts.premint)

    if opts.pausable:
        add_pausable(c, opts.access)

    if opts.upgradeable:
        add_upgradeable(c, opts.access)

    if opts.burnable:
        add_burnable(c, opts.pausable)

    if opts.mintable:
        add_mintable(c, opts.access, opts.pausable)

    set_access_control(c, opts.access)
    set_info(c, opts.info)

    return c


FUNGIBLE_TOKEN_TRAIT = BaseTrait(
    name="FungibleToken",
    tags=("contractimpl",),
    priority=1,
)


def add_base(c: ContractBuilder, name: str, symbol: str, pausable: bool) -> None:
    c.add_constructor_code(
        f'fungible::metadata::set_metadata(e, {DECIMALS}, String::from_str(e, "{name}"), '
        f'String::from_str(e, "{symbol}"));'
    )

    c.add_use_clause("stellar_tokens::fungible", "self", alias="fungible")
    c.add_use_clause("stellar_tokens::fungible", "FungibleToken")
    for sdk_name in ("contract", "contractimpl", "Address", "String", "Env"):
        c.add_use_clause("soroban_sdk", sdk_name)

    trait = FUNGIBLE_TOKEN_TRAIT
    for key in (
        "total_supply",
        "balance",
        "allowance",
        "transfer",
        "transfer_from",
        "approve",
        "decimals",
        "name",
        "symbol",
    ):
        c.add_function(trait, functions[key])

    if pausable:
        tag_when_not_paused(c, trait, functions["transfer"], functions["transfer_from"])


def add_burnable(c: ContractBuilder, pausable: bool) -> None:
    c.add_use_clause("stellar_tokens::fungible", "burnable::FungibleBurnable")

    trait = BaseTrait(
        name="FungibleBurnable",
        tags=("contractimpl",),
        section="Extensions",
    )
    c.add_function(trait, functions["burn"])
    c.add_function(trait, functions["burn_from"])

    if pausable:
        tag_when_not_paused(c, trait, functions["burn"], functions["burn_from"])


def add_premint(c: ContractBuilder, amount: str) -> None:
    if amount == "0":
        return
    if not PREMINT_PATTERN.match(amount):
        raise OptionsError({"premint": "Not a valid number"})

    premint_absolute = to_uint(get_initial_supply(amount, DECIMALS), "premint", "u128")

    c.add_constructor_argument(Argument(name="recipient", type="Address"))
    c.add_constructor_code(f"fungible::mintable::mint(e, &recipient, {premint_absolute});")


def get_initial_supply(premint: str, decimals: int) -> str:
    """
    Scale a premint amount in token units to the smallest unit.

    ``premint`` may be fractional; zeros are padded or the value rejected based on
    ``decimals``. Leading zeros are removed from the result.

    Raises
    ------
    OptionsError
        If ``premint`` has more than one decimal point or more fractional digits
        than ``decimals`` allows.
    """
    segments = premint.split(".")
    if len(segments) > 2:
        raise OptionsError({"premint": "Not a valid number"})

    first = segments[0]
    last = segments[1] if len(segments) > 1 else ""
    if decimals > len(last):
        last += "0" * (decimals - len(last))
    elif decimals < len(last):
        raise OptionsError({"premint": "Too many decimals"})

    result = (first + last).lstrip("0")
    return result or "0"


def add_mintable(c: ContractBuilder, access: Access, pausable: bool) -> None:
    c.add_use_clause("stellar_tokens::fungible", "mintable::FungibleMintable")

    trait = BaseTrait(
        name="FungibleMintable",
        tags=("contractimpl",),
        section="Extensions",
    )
    c.add_function(trait, functions["mint"])
    require_access_control(c, trait, functions["mint"], access)

    if pausable:
        tag_when_not_paused(c, trait, functions["mint"])


functions = {
    # Token Functions
    "total_supply": BaseFunction(
        name="total_supply",
        args=(get_self_arg(),),
        returns="i128",
        code=("fungible::total_supply(e)",),
    ),
    "balance": BaseFunction(
        name="balance",
        args=(get_self_arg(), Argument(name="account", type="Address")),
        returns="i128",
        code=("fungible::balance(e, &account)",),
    ),
    "allowance": BaseFunction(
        name="allowance",
        args=(
            get_self_arg(),
            Argument(name="owner", type="Address"),
            Argument(name="spender", type="Address"),
        ),
        returns="i128",
        code=("fungible::allowance(e, &owner, &spender)",),
    ),
    "transfer": BaseFunction(
        name="transfer",
        args=(
            get_self_arg(),
            Argument(name="from", type="Address"),
            Argument(name="to", type="Address"),
            Argument(name="amount", type="i128"),
        ),
        code=("fungible::transfer(e, &from, &to, amount)",),
    ),
    "transfer_from": BaseFunction(
        name="transfer_from",
        args=(
            get_self_arg(),
            Argument(name="spender", type="Address"),
            Argument(name="from", type="Address"),
            Argument(name="to", type="Address"),
            Argument(name="amount", type="i128"),
        ),
        code=("fungible::transfer_from(e, &spender, &from, &to, amount)",),
    ),
    "approve": BaseFunction(
        name="approve",
        args=(
            get_self_arg(),
            Argument(name="owner", type="Address"),
            Argument(name="spender", type="Address"),
            Argument(name="amount", type="i128"),
            Argument(name="live_until_ledger", type="u32"),
        ),
        code=("fungible::approve(e, &owner, &spender, amount, live_until_ledger)",),
    ),
    "decimals": BaseFunction(
        name="decimals",
        args=(get_self_arg(),),
        returns="u32",
        code=("fungible::metadata::decimals(e)",),
    ),
    "name": BaseFunction(
        name="name",
        args=(get_self_arg(),),
        returns="String",
        code=("fungible::metadata::name(e)",),
    ),
    "symbol": BaseFunction(
        name="symbol",
        args=(get_self_arg(),),
        returns="String",
        code=("fungible::metadata::symbol(e)",),
    ),
    # Extensions
    "burn": BaseFunction(
        name="burn",
        args=(
            get_self_arg(),
            Argument(name="from", type="Address"),
            Argument(name="amount", type="i128"),
        ),
        code=("fungible::burnable::burn(e, &from, amount)",),
    ),
    "burn_from": BaseFunction(
        name="burn_from",
        args=(
            get_self_arg(),
            Argument(name="spender", type="Address"),
            Argument(name="from", type="Address"),
            Argument(name="amount", type="i128"),
        ),
        code=("fungible::burnable::burn_from(e, &spender, &from, amount)",),
    ),
    "mint": BaseFunction(
        name="mint",
        args=(
            get_self_arg(),
            Argument(name="account", type="Address"),
            Argument(name="amount", type="i128"),
        ),
        code=("fungible::mintable::mint(e, &account, amount);",),
    ),
}
