from __future__ import annotations

from typing import Callable, Hashable, Iterable, List, Set, TypeVar

T = TypeVar("T")


def find_cover(items: Iterable[T], tags_of: Callable[[T], Iterable[Hashable]]) -> List[T]:
    """
    Greedily select a subset of ``items`` whose tags cover all tags of ``items``.

    Each round picks the unselected item adding the most uncovered tags; ties go
    to the item seen first. Selection stops once every tag is covered or no item
    adds anything new. This approximates a minimum set cover, it does not
    guarantee one.

    Returns
    -------
    List[T]
        Selected items in the order they were picked.
    """
    candidates = [(item, set(tags_of(item))) for item in items]
    uncovered: Set[Hashable] = set().union(*(tags for _, tags in candidates))

    selected: List[T] = []
    remaining = list(range(len(candidates)))
    while uncovered and remaining:
        best_position = -1
        best_gain = 0
        for position, index in enumerate(remaining):
            gain = len(candidates[index][1] & uncovered)
            if gain > best_gain:
                best_position, best_gain = position, gain
        if best_gain == 0:
            break
        index = remaining.pop(best_position)
        item, tags = candidates[index]
        selected.append(item)
        uncovered -= tags
    return selected
