import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from contractsmith.core.builder import ContractBuilder


# --- Core Fixtures ---


@pytest.fixture
def contract() -> ContractBuilder:
    """A fresh, empty builder named ``MyContract``."""
    return ContractBuilder("MyContract")


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """
    Removes every CONTRACTSMITH_* variable so settings resolve to their defaults
    unless a test sets them explicitly.
    """
    for name in (
        "CONTRACTSMITH_LICENSE",
        "CONTRACTSMITH_COMPATIBLE_VERSION",
        "CONTRACTSMITH_MAX_USE_CLAUSE_LINE_LENGTH",
        "CONTRACTSMITH_MAX_INLINE_ARGS_LENGTH",
        "CONTRACTSMITH_LIBRARY",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def library_table(tmp_path: Path):
    """
    Factory fixture that writes a JSON library table and returns its path.
    """

    def _make_library(sources, dependencies, name: str = "library.json") -> Path:
        path = tmp_path / name
        path.write_text(
            json.dumps({"sources": sources, "dependencies": dependencies}),
            encoding="utf-8",
        )
        return path

    return _make_library
