from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


def _env_str(name: str, default: Optional[str]) -> Optional[str]:
    raw = os.getenv(name, "")
    if raw.strip() == "":
        return default
    return raw.strip()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "")
    if raw == "":
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value if value > 0 else default


@dataclass(frozen=True)
class ContractsmithSettings:
    license: str = "MIT"
    compatible_version: str = "^0.4.1"
    max_use_clause_line_length: int = 90
    max_inline_args_length: int = 80
    library_path: Optional[str] = None

    @classmethod
    def from_env(cls) -> "ContractsmithSettings":
        return cls(
            license=_env_str("CONTRACTSMITH_LICENSE", "MIT") or "MIT",
            compatible_version=_env_str("CONTRACTSMITH_COMPATIBLE_VERSION", "^0.4.1")
            or "^0.4.1",
            max_use_clause_line_length=_env_int(
                "CONTRACTSMITH_MAX_USE_CLAUSE_LINE_LENGTH", 90
            ),
            max_inline_args_length=_env_int("CONTRACTSMITH_MAX_INLINE_ARGS_LENGTH", 80),
            library_path=_env_str("CONTRACTSMITH_LIBRARY", None),
        )


DEFAULT_SETTINGS = ContractsmithSettings()
