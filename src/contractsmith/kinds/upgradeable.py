from __future__ import annotations

from contractsmith.core.builder import ContractBuilder
from contractsmith.kinds.access_control import require_access_control
from contractsmith.kinds.common import Access, get_self_arg
from contractsmith.models.contract import Argument, BaseFunction, BaseTrait, ResultType


def add_upgradeable(c: ContractBuilder, access: Access) -> None:
    c.add_use_clause("stellar_contract_utils::upgradeable", "UpgradeableInternal")
    c.add_use_clause("stellar_contract_utils::upgradeable", "UpgradeableError")
    c.add_use_clause("stellar_macros", "Upgradeable")
    c.add_use_clause("soroban_sdk", "Address")

    trait = BaseTrait(
        name="UpgradeableInternal",
        section="Utils",
    )

    # The upgrade hook receives the operator explicitly, so ownable contracts
    # check it against the stored owner instead of requiring its signature.
    fn = functions["_require_auth"]
    c.add_function(trait, fn)
    require_access_control(c, trait, fn, access, caller="*operator")


functions = {
    "_require_auth": BaseFunction(
        name="_require_auth",
        args=(get_self_arg(), Argument(name="operator", type="&Address")),
        returns=ResultType(ok="()", err="UpgradeableError"),
        code=("operator.require_auth();",),
    ),
}
