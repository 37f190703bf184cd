"""
contractsmith/core/dependencies.py

Resolves every library source a contract needs, including transitive ones.
"""

from __future__ import annotations

import json
import logging
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Hashable, Iterable, List, Mapping, Set, TypeVar, Union

from contractsmith.core.builder import ContractBuilder
from contractsmith.core.errors import MissingSourceError

logger = logging.getLogger(__name__)

N = TypeVar("N", bound=Hashable)


@dataclass(frozen=True)
class SourceFile:
    content: str


@dataclass(frozen=True)
class SourceLibrary:
    """
    A fixed external library: source contents plus its direct dependency table.

    Attributes
    ----------
    sources : Dict[str, str]
        Mapping from source identifier (module path) to its literal content.
    dependencies : Dict[str, List[str]]
        Mapping from source identifier to the identifiers it directly depends on.
    """

    sources: Dict[str, str] = field(default_factory=dict)
    dependencies: Dict[str, List[str]] = field(default_factory=dict)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "SourceLibrary":
        """Load a library table written as ``{"sources": {...}, "dependencies": {...}}``."""
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
        if not isinstance(payload, dict):
            raise ValueError(f"Library table at {path} must be a JSON object.")
        sources = payload.get("sources", {})
        dependencies = payload.get("dependencies", {})
        logger.debug(
            "[contractsmith] Loaded library %s (%d sources, %d dependency entries)",
            path,
            len(sources),
            len(dependencies),
        )
        return cls(
            sources={str(k): str(v) for k, v in sources.items()},
            dependencies={str(k): [str(d) for d in v] for k, v in dependencies.items()},
        )


def reachable(adjacency: Mapping[N, Iterable[N]], start: N) -> Set[N]:
    """
    Return every node reachable from ``start``, ``start`` included.

    Breadth-first traversal guarded by a visited set, so each node is enqueued at
    most once and cyclic graphs terminate. Nodes missing from ``adjacency`` are
    treated as leaves.
    """
    visited: Set[N] = {start}
    queue = deque([start])
    while queue:
        node = queue.popleft()
        for neighbour in adjacency.get(node, ()):
            if neighbour not in visited:
                visited.add(neighbour)
                queue.append(neighbour)
    return visited


def materialize(
    content_map: Mapping[str, str], nodes: Iterable[str]
) -> Dict[str, SourceFile]:
    """
    Pair each node with its content, in sorted node order.

    Raises
    ------
    MissingSourceError
        If any node has no entry in ``content_map``. A gap means the dependency
        table and the source table disagree, so the build must stop.
    """
    result: Dict[str, SourceFile] = {}
    for node in sorted(nodes):
        content = content_map.get(node)
        if content is None:
            raise MissingSourceError(node)
        result[node] = SourceFile(content=content)
    return result


def contract_file_name(contract: ContractBuilder) -> str:
    return f"{contract.name}.rs"


def contract_dependencies(contract: ContractBuilder) -> List[str]:
    """The library modules a contract imports directly, as sorted unique container paths."""
    return sorted({clause.container_path for clause in contract.use_clauses})


def get_imports(contract: ContractBuilder, library: SourceLibrary) -> Dict[str, SourceFile]:
    """
    Get the sources of all imports of a contract, including transitive dependencies.

    The contract itself is not part of the result; print it separately.
    """
    file_name = contract_file_name(contract)
    dependencies: Dict[str, List[str]] = {
        **library.dependencies,
        file_name: contract_dependencies(contract),
    }

    all_imports = reachable(dependencies, file_name)
    all_imports.discard(file_name)
    return materialize(library.sources, all_imports)
