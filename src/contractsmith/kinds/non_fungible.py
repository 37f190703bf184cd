"""
Non-fungible token contracts built on ``stellar_tokens::non_fungible``.
"""

from __future__ import annotations

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
    Access,
    CommonContractOptions,
    get_self_arg,
    set_info,
)
from contractsmith.kinds.pausable import add_pausable, tag_when_not_paused
from contractsmith.models.contract import Argument, BaseFunction, BaseTrait


class NonFungibleOptions(CommonContractOptions):
    kind: Literal["NonFungible"] = "NonFungible"
    name: str = "MyToken"
    symbol: str = "MTK"
    uri: str = "www.mytoken.com"
    burnable: bool = False
    pausable: bool = False
    premint: str = "0"
    mintable: bool = False

booleans = [True, False]

blueprint: Dict[str, Any] = {
    "name": ["MyToken"],
    "symbol": ["MTK"],
    "burnable": booleans,
    "pausable": booleans,
    "premint": ["1"],
    "mintable": booleans,
    "access": list(ACCESS_OPTIONS),
    "info": list(INFO_OPTIONS),
}


def generate_non_fungible_options() -> Iterator[NonFungibleOptions]:
    for alternative in generate_alternatives(blueprint):
        yield NonFungibleOptions(**alternative)


def build_non_fungible(
    opts: NonFungibleOptions, settings: Optional[ContractsmithSettings] = None
) -> ContractBuilder:
    c = ContractBuilder(opts.name, settings=settings)

    add_base(
        c,
        escape_string(opts.uri),
        escape_string(opts.name),
        escape_string(opts.symbol),
        opts.pausable,
    )

    if opts.premint:
        add_premint(c, opts.premint)

    if opts.pausable:
        add_pausable(c, opts.access)

    if opts.burnable:
        add_burnable(c, opts.pausable)

    if opts.mintable:
        add_mintable(c, opts.access, opts.pausable)

    set_access_control(c, opts.access)
    set_info(c, opts.info)

    return c


def add_base(c: ContractBuilder, uri: str, name: str, symbol: str, pausable: bool) -> None:
    c.add_constructor_code(
        f'non_fungible::Base::set_metadata(e, String::from_str(e, "{uri}"), '
        f'String::from_str(e, "{name}"), String::from_str(e, "{symbol}"));'
    )

    c.add_use_clause("stellar_tokens::non_fungible", "self", alias="non_fungible")
    c.add_use_clause("stellar_tokens::non_fungible", "NonFungibleToken")
    for sdk_name in ("contract", "contractimpl", "Address", "String", "Env"):
        c.add_use_clause("soroban_sdk", sdk_name)

    trait = BaseTrait(
        name="NonFungibleToken",
        tags=("contractimpl",),
        priority=1,
    )
    for key in (
        "balance",
        "owner_of",
        "transfer",
        "transfer_from",
        "approve",
        "approve_for_all",
        "get_approved",
        "is_approved_for_all",
        "name",
        "symbol",
        "token_uri",
    ):
        c.add_function(trait, functions[key])

    if pausable:
        tag_when_not_paused(c, trait, functions["transfer"], functions["transfer_from"])


def add_burnable(c: ContractBuilder, pausable: bool) -> None:
    c.add_use_clause("stellar_tokens::non_fungible", "burnable::NonFungibleBurnable")

    trait = BaseTrait(
        name="NonFungibleBurnable",
        tags=("contractimpl",),
        section="Extensions",
    )
    c.add_function(trait, functions["burn"])
    c.add_function(trait, functions["burn_from"])

    if pausable:
        tag_when_not_paused(c, trait, functions["burn"], functions["burn_from"])


def add_premint(c: ContractBuilder, token_id: str) -> None:
    if token_id == "0":
        return
    # Token ids are whole numbers, unlike fungible premint amounts.
    if not token_id.isdigit():
        raise OptionsError({"premint": "Not a valid number"})
    premint_id = to_uint(token_id, "premint", "u32")

    c.add_constructor_argument(Argument(name="recipient", type="Address"))
    c.add_constructor_code(f"non_fungible::Base::mint(e, &recipient, {premint_id});")


def add_mintable(c: ContractBuilder, access: Access, pausable: bool) -> None:
    # Minting is not part of a trait, so it lives in the contract's own impl block.
    c.add_function(None, functions["mint"])
    require_access_control(c, None, functions["mint"], access)

    if pausable:
        tag_when_not_paused(c, None, functions["mint"])


functions = {
    "balance": BaseFunction(
        name="balance",
        args=(get_self_arg(), Argument(name="owner", type="Address")),
        returns="u32",
        code=("Self::ContractType::balance(e, &owner)",),
    ),
    "owner_of": BaseFunction(
        name="owner_of",
        args=(get_self_arg(), Argument(name="token_id", type="u32")),
        returns="Address",
        code=("Self::ContractType::owner_of(e, token_id)",),
    ),
    "transfer": BaseFunction(
        name="transfer",
        args=(
            get_self_arg(),
            Argument(name="from", type="Address"),
            Argument(name="to", type="Address"),
            Argument(name="token_id", type="u32"),
        ),
        code=("Self::ContractType::transfer(e, &from, &to, token_id)",),
    ),
    "transfer_from": BaseFunction(
        name="transfer_from",
        args=(
            get_self_arg(),
            Argument(name="spender", type="Address"),
            Argument(name="from", type="Address"),
            Argument(name="to", type="Address"),
            Argument(name="token_id", type="u32"),
        ),
        code=("Self::ContractType::transfer_from(e, &spender, &from, &to, token_id)",),
    ),
    "approve": BaseFunction(
        name="approve",
        args=(
            get_self_arg(),
            Argument(name="approver", type="Address"),
            Argument(name="approved", type="Address"),
            Argument(name="token_id", type="u32"),
            Argument(name="live_until_ledger", type="u32"),
        ),
        code=(
            "Self::ContractType::approve(e, &approver, &approved, token_id, live_until_ledger)",
        ),
    ),
    "approve_for_all": BaseFunction(
        name="approve_for_all",
        args=(
            get_self_arg(),
            Argument(name="owner", type="Address"),
            Argument(name="operator", type="Address"),
            Argument(name="live_until_ledger", type="u32"),
        ),
        code=("Self::ContractType::approve_for_all(e, &owner, &operator, live_until_ledger)",),
    ),
    "get_approved": BaseFunction(
        name="get_approved",
        args=(get_self_arg(), Argument(name="token_id", type="u32")),
        returns="Option<Address>",
        code=("Self::ContractType::get_approved(e, token_id)",),
    ),
    "is_approved_for_all": BaseFunction(
        name="is_approved_for_all",
        args=(
            get_self_arg(),
            Argument(name="owner", type="Address"),
            Argument(name="operator", type="Address"),
        ),
        returns="bool",
        code=("Self::ContractType::is_approved_for_all(e, &owner, &operator)",),
    ),
    "name": BaseFunction(
        name="name",
        args=(get_self_arg(),),
        returns="String",
        code=("Self::ContractType::name(e)",),
    ),
    "symbol": BaseFunction(
        name="symbol",
        args=(get_self_arg(),),
        returns="String",
        code=("Self::ContractType::symbol(e)",),
    ),
    "token_uri": BaseFunction(
        name="token_uri",
        args=(get_self_arg(), Argument(name="token_id", type="u32")),
        returns="String",
        code=("Self::ContractType::token_uri(e, token_id)",),
    ),
    # Extensions
    "burn": BaseFunction(
        name="burn",
        args=(
            get_self_arg(),
            Argument(name="from", type="Address"),
            Argument(name="token_id", type="u32"),
        ),
        code=("non_fungible::Base::burn(e, &from, token_id)",),
    ),
    "burn_from": BaseFunction(
        name="burn_from",
        args=(
            get_self_arg(),
            Argument(name="spender", type="Address"),
            Argument(name="from", type="Address"),
            Argument(name="token_id", type="u32"),
        ),
        code=("non_fungible::Base::burn_from(e, &spender, &from, token_id)",),
    ),
    "mint": BaseFunction(
        name="mint",
        args=(
            get_self_arg(),
            Argument(name="to", type="Address"),
            Argument(name="token_id", type="u32"),
        ),
        code=("non_fungible::Base::mint(e, &to, token_id);",),
    ),
}
