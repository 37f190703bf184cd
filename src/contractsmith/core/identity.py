"""
contractsmith/core/identity.py

Stable identifiers for generated contracts.
"""

import hashlib
import json
import logging
from typing import Any, List, Optional, Set


class IdentityManager:
    """
    Derives content-based identifiers for option records and rendered sources.

    A generated contract's id is the SHA-1 of its options serialized as canonical
    JSON, so the same options produce the same id on every run and on every
    machine, regardless of dictionary insertion order or the model class used to
    carry them.

    id = SHA1( canonical_json(options) )
    """

    def __init__(self, hash_algorithm: str = "sha1") -> None:
        """
        Parameters
        ----------
        hash_algorithm : str
            Any algorithm name accepted by ``hashlib.new``.
        """
        self.hash_algorithm = hash_algorithm

    def canonical_json_str(
        self, obj: Any, exclude_keys: Optional[List[str]] = None
    ) -> str:
        """
        Serialize ``obj`` deterministically.

        This method implements **canonical serialization** by:
        1.  Removing specified ``exclude_keys`` at every nesting level.
        2.  Dumping Pydantic models to JSON-compatible dictionaries.
        3.  Sorting dictionary keys and set members so the representation does
            not depend on insertion order.
        """
        cleaned = self._clean_structure(obj, set(exclude_keys or []))
        # ensure_ascii=True ensures locale independence
        return json.dumps(
            cleaned, sort_keys=True, ensure_ascii=True, separators=(",", ":")
        )

    def compute_options_id(
        self, options: Any, exclude_keys: Optional[List[str]] = None
    ) -> str:
        """
        Hash an options record (mapping or Pydantic model) to a hex digest.

        Parameters
        ----------
        options : Any
            The options used to build a contract.
        exclude_keys : Optional[List[str]], optional
            Keys that must not influence the id.

        Returns
        -------
        str
            Hex digest of the canonical JSON representation.
        """
        json_str = self.canonical_json_str(options, exclude_keys)
        return hashlib.new(self.hash_algorithm, json_str.encode("utf-8")).hexdigest()

    def compute_source_hash(self, source: str) -> str:
        """SHA256 of a rendered source, used to compare generated output across runs."""
        return hashlib.sha256(source.encode("utf-8")).hexdigest()

    # --- Internal Utilities ---

    def _clean_structure(self, obj: Any, exclude_keys: Set[str]) -> Any:
        """
        Recursively clean a structure (dictionary, list, tuple, set, Pydantic model).

        - Pydantic models are dumped in JSON mode first.
        - Sets become sorted lists so their order is deterministic.
        """
        if hasattr(obj, "model_dump"):
            return self._clean_structure(obj.model_dump(mode="json"), exclude_keys)

        if isinstance(obj, dict):
            return {
                k: self._clean_structure(v, exclude_keys)
                for k, v in obj.items()
                if k not in exclude_keys
            }

        elif isinstance(obj, (list, tuple)):
            return [self._clean_structure(x, exclude_keys) for x in obj]

        elif isinstance(obj, (set, frozenset)):
            try:
                return sorted(self._clean_structure(x, exclude_keys) for x in obj)
            except TypeError:
                logging.warning(
                    "contractsmith: Encountered unsortable set in options. Id stability not guaranteed."
                )
                return [self._clean_structure(x, exclude_keys) for x in obj]

        return obj
