from __future__ import annotations

from contractsmith.core.builder import ContractBuilder, TraitRef
from contractsmith.kinds.access_control import require_access_control
from contractsmith.kinds.common import DEFAULT_ACCESS_CONTROL, Access, get_self_arg
from contractsmith.models.contract import Argument, BaseFunction, BaseTrait

WHEN_NOT_PAUSED = "when_not_paused"


PAUSABLE_TRAIT = BaseTrait(
    name="Pausable",
    tags=("contractimpl",),
    section="Utils",
)


def add_pausable(c: ContractBuilder, access: Access) -> None:
    c.add_use_clause("stellar_contract_utils::pausable", "self", alias="pausable")
    c.add_use_clause("stellar_contract_utils::pausable", "Pausable")
    c.add_use_clause("soroban_sdk", "Address")

    trait = PAUSABLE_TRAIT
    c.add_function(trait, functions["paused"])
    c.add_function(trait, functions["pause"])
    c.add_function(trait, functions["unpause"])

    effective_access = DEFAULT_ACCESS_CONTROL if access is False else access
    require_access_control(c, trait, functions["pause"], effective_access, caller="caller")
    require_access_control(c, trait, functions["unpause"], effective_access, caller="caller")


def tag_when_not_paused(c: ContractBuilder, trait: TraitRef, *fns: BaseFunction) -> None:
    """Gate each of ``fns`` behind the ``when_not_paused`` macro."""
    c.add_use_clause("stellar_macros", WHEN_NOT_PAUSED)
    for fn in fns:
        c.add_function_tag(trait, fn, WHEN_NOT_PAUSED)


functions = {
    "paused": BaseFunction(
        name="paused",
        args=(get_self_arg(),),
        returns="bool",
        code=("pausable::paused(e)",),
    ),
    "pause": BaseFunction(
        name="pause",
        args=(get_self_arg(), Argument(name="caller", type="Address")),
        code=("pausable::pause(e)",),
    ),
    "unpause": BaseFunction(
        name="unpause",
        args=(get_self_arg(), Argument(name="caller", type="Address")),
        code=("pausable::unpause(e)",),
    ),
}
