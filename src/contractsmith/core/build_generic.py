"""
contractsmith/core/build_generic.py

Maps a tagged options record to the build function for its kind.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, Literal, Mapping, Optional, Union, assert_never

from pydantic import Field, TypeAdapter, ValidationError

from contractsmith.core.builder import ContractBuilder
from contractsmith.core.errors import OptionsError, UnknownKindError
from contractsmith.core.settings import ContractsmithSettings
from contractsmith.kinds.fungible import FungibleOptions, build_fungible
from contractsmith.kinds.non_fungible import NonFungibleOptions, build_non_fungible

GenericOptions = Annotated[
    Union[FungibleOptions, NonFungibleOptions], Field(discriminator="kind")
]

Kind = Literal["Fungible", "NonFungible"]
KINDS: tuple[Kind, ...] = ("Fungible", "NonFungible")

_generic_options_adapter: TypeAdapter[GenericOptions] = TypeAdapter(GenericOptions)


def parse_options(raw: Mapping[str, Any]) -> GenericOptions:
    """
    Validate a raw ``{"kind": ..., **fields}`` mapping into a typed options record.

    Raises
    ------
    UnknownKindError
        If ``kind`` is missing or not one of ``KINDS``.
    OptionsError
        If the fields do not validate for that kind.
    """
    kind = raw.get("kind")
    if kind not in KINDS:
        raise UnknownKindError(f"Unknown kind: {kind!r}")
    try:
        return _generic_options_adapter.validate_python(dict(raw))
    except ValidationError as e:
        messages: Dict[str, str] = {}
        for error in e.errors():
            field = ".".join(str(p) for p in error["loc"][1:]) or "options"
            messages.setdefault(field, error["msg"])
        raise OptionsError(messages) from e


def build_generic(
    opts: GenericOptions, settings: Optional[ContractsmithSettings] = None
) -> ContractBuilder:
    match opts.kind:
        case "Fungible":
            return build_fungible(opts, settings)
        case "NonFungible":
            return build_non_fungible(opts, settings)
        case _:
            assert_never(opts.kind)
