"""
contractsmith/core/errors.py

Error taxonomy shared by the builder, the resolver and the generation pipeline.

Option errors are recoverable: callers surface the messages to a user, or skip
the offending combination during batch enumeration. Everything else signals a
broken invariant and must abort the current build.
"""

from __future__ import annotations

from typing import Dict, Mapping


class ContractsmithError(Exception):
    """Base class for all contractsmith errors."""


class OptionsError(ContractsmithError):
    """
    Raised when user-supplied option values are malformed.

    Attributes
    ----------
    messages : Dict[str, str]
        Mapping from option field name to a human-readable message.
    """

    def __init__(self, messages: Mapping[str, str]) -> None:
        self.messages: Dict[str, str] = dict(messages)
        detail = "; ".join(f"{field}: {msg}" for field, msg in self.messages.items())
        super().__init__(f"Invalid options ({detail})")


class NamingError(OptionsError):
    """Raised when an identifier is empty or has no valid characters."""


class MissingSourceError(ContractsmithError, KeyError):
    """Raised when a reachable dependency node has no source content."""

    def __init__(self, node: str) -> None:
        self.node = node
        super().__init__(f"Source for {node} not found")

    def __str__(self) -> str:
        return self.args[0]


class UnknownKindError(ContractsmithError, ValueError):
    """Raised when an options record names a kind with no build function."""
