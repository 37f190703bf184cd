"""
Ownable access control for Soroban contracts.

The owner is passed to the constructor and kept in instance storage under the
``OWNER`` key. Restricted functions either require the owner's authorization
or, when the function receives the caller explicitly, compare the caller with
the stored owner and panic with ``Unauthorized`` on mismatch.
"""

from __future__ import annotations

from typing import Optional, assert_never

from contractsmith.core.builder import ContractBuilder, TraitRef
from contractsmith.kinds.common import DEFAULT_ACCESS_CONTROL, Access
from contractsmith.models.contract import Argument, BaseFunction, ContractError, Variable

GET_OWNER = (
    'let owner: Address = e.storage().instance().get(&OWNER).expect("owner should be set");'
)


def set_access_control(c: ContractBuilder, access: Access) -> None:
    """Set up access control: store the owner passed to the constructor."""
    if access is False:
        return
    elif access == "ownable":
        if c.ownable:
            return
        c.ownable = True
        c.add_use_clause("soroban_sdk", "symbol_short")
        c.add_use_clause("soroban_sdk", "Symbol")
        c.add_use_clause("soroban_sdk", "Address")
        c.add_variable(Variable(name="OWNER", type="Symbol", value='symbol_short!("OWNER")'))
        c.add_constructor_argument(Argument(name="owner", type="Address"))
        c.add_constructor_code("e.storage().instance().set(&OWNER, &owner);")
    else:
        assert_never(access)


def require_access_control(
    c: ContractBuilder,
    trait: TraitRef,
    fn: BaseFunction,
    access: Access,
    caller: Optional[str] = None,
) -> None:
    """
    Enable access control and restrict ``fn`` to the owner.

    When access control is disabled it is switched to ``ownable``, since the
    function cannot be left unrestricted.
    """
    if access is False:
        access = DEFAULT_ACCESS_CONTROL
    set_access_control(c, access)

    if access == "ownable":
        if caller:
            c.add_use_clause("soroban_sdk", "panic_with_error")
            c.add_error(ContractError(name="Unauthorized", num=1))
            c.add_function_code_before(
                trait,
                fn,
                [
                    GET_OWNER,
                    f"if owner != {caller} {{",
                    f"    panic_with_error!(e, {c.name}Error::Unauthorized)",
                    "}",
                ],
            )
        else:
            c.add_function_code_before(trait, fn, [GET_OWNER, "owner.require_auth();"])
    else:
        assert_never(access)
