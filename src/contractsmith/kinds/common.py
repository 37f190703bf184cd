from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from contractsmith.core.builder import ContractBuilder
from contractsmith.models.contract import SELF_ARG, Argument

Access = Literal[False, "ownable"]
ACCESS_OPTIONS: tuple[Access, ...] = (False, "ownable")
DEFAULT_ACCESS_CONTROL: Access = "ownable"


class Info(BaseModel):
    """License and contact details printed in the contract header."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    license: str = "MIT"
    security_contact: str = ""


INFO_OPTIONS = (
    Info(),
    Info(license="WTFPL", security_contact="security@example.com"),
)


class CommonContractOptions(BaseModel):
    model_config = ConfigDict(extra="forbid")

    access: Access = False
    info: Info = Field(default_factory=Info)


def get_self_arg() -> Argument:
    return SELF_ARG


def set_info(c: ContractBuilder, info: Union[Info, None]) -> None:
    if info is None:
        return
    if info.license:
        c.license = info.license
    if info.security_contact:
        c.security_contact = info.security_contact
