"""
contractsmith/core/alternatives.py

Exhaustive enumeration of option combinations from a blueprint.
"""

from __future__ import annotations

import itertools
from typing import Any, Dict, Iterator, Mapping, Sequence

Blueprint = Mapping[str, Sequence[Any]]


def generate_alternatives(
    blueprint: Blueprint, force_true: bool = False
) -> Iterator[Dict[str, Any]]:
    """
    Yield every combination of candidate values in ``blueprint``.

    Keys keep their declaration order. The first-declared key varies slowest and
    the last-declared key varies fastest, so ``{"x": [1, 2], "y": [True, False]}``
    yields ``x=1,y=True``, ``x=1,y=False``, ``x=2,y=True``, ``x=2,y=False``.

    Each call returns a fresh generator and each record is a new dict. The number
    of records is the product of the candidate-list lengths: any empty list yields
    nothing, and an empty blueprint yields a single empty record.

    Parameters
    ----------
    blueprint : Mapping[str, Sequence[Any]]
        Option key to its ordered candidate values. Values may be nested records.
    force_true : bool, default False
        Collapse every ``[True, False]`` candidate list to ``[True]``.
    """
    real_blueprint = _with_forced_true(blueprint, force_true)
    keys = list(real_blueprint)

    for values in itertools.product(*(real_blueprint[k] for k in keys)):
        yield dict(zip(keys, values))


def count_alternatives(blueprint: Blueprint, force_true: bool = False) -> int:
    total = 1
    for values in _with_forced_true(blueprint, force_true).values():
        total *= len(values)
    return total


def _with_forced_true(blueprint: Blueprint, force_true: bool) -> Dict[str, Sequence[Any]]:
    if not force_true:
        return dict(blueprint)
    return {
        key: [True] if _is_boolean_toggle(values) else values
        for key, values in blueprint.items()
    }


def _is_boolean_toggle(values: Sequence[Any]) -> bool:
    return (
        len(values) == 2
        and any(v is True for v in values)
        and any(v is False for v in values)
    )
