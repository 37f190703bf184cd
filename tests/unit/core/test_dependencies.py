import json

import pytest

from contractsmith.core.dependencies import (
    SourceFile,
    SourceLibrary,
    contract_dependencies,
    get_imports,
    materialize,
    reachable,
)
from contractsmith.core.errors import MissingSourceError


class TestReachable:
    def test_transitive_closure_includes_start(self):
        graph = {"a": ["b"], "b": ["c"], "c": []}

        assert reachable(graph, "a") == {"a", "b", "c"}
        assert reachable(graph, "c") == {"c"}

    def test_cycles_terminate(self):
        graph = {"a": ["b"], "b": ["c", "a"], "c": ["c"]}

        assert reachable(graph, "a") == {"a", "b", "c"}

    def test_unknown_nodes_are_leaves(self):
        assert reachable({"a": ["ghost"]}, "a") == {"a", "ghost"}
        assert reachable({}, "x") == {"x"}


class TestMaterialize:
    def test_returns_sorted_sources(self):
        result = materialize({"b": "B", "a": "A", "c": "C"}, {"b", "a"})

        assert list(result) == ["a", "b"]
        assert result["a"] == SourceFile(content="A")

    def test_missing_source_raises(self):
        with pytest.raises(MissingSourceError) as excinfo:
            materialize({"a": "A"}, ["a", "b"])

        assert excinfo.value.node == "b"
        assert str(excinfo.value) == "Source for b not found"
        assert isinstance(excinfo.value, KeyError)


LIBRARY = SourceLibrary(
    sources={
        "soroban_sdk": "// sdk",
        "stellar_contract_utils::pausable": "// pausable",
        "stellar_tokens::fungible": "// fungible",
        "unused": "// unused",
    },
    dependencies={
        "stellar_tokens::fungible": ["stellar_contract_utils::pausable"],
        "stellar_contract_utils::pausable": ["soroban_sdk", "stellar_tokens::fungible"],
    },
)


class TestGetImports:
    def test_contract_dependencies_are_unique_container_paths(self, contract):
        contract.add_use_clause("soroban_sdk", "Env")
        contract.add_use_clause("soroban_sdk", "Address")
        contract.add_use_clause("stellar_tokens::fungible", "FungibleToken")

        assert contract_dependencies(contract) == ["soroban_sdk", "stellar_tokens::fungible"]

    def test_resolves_transitive_imports(self, contract):
        contract.add_use_clause("stellar_tokens::fungible", "FungibleToken")

        imports = get_imports(contract, LIBRARY)

        assert list(imports) == [
            "soroban_sdk",
            "stellar_contract_utils::pausable",
            "stellar_tokens::fungible",
        ]
        assert "MyContract.rs" not in imports
        assert imports["soroban_sdk"].content == "// sdk"

    def test_contract_without_imports_needs_nothing(self, contract):
        assert get_imports(contract, LIBRARY) == {}

    def test_missing_library_source_aborts(self, contract):
        contract.add_use_clause("stellar_access::ownable", "Ownable")

        with pytest.raises(MissingSourceError, match="stellar_access::ownable"):
            get_imports(contract, LIBRARY)


class TestSourceLibrary:
    def test_from_json(self, library_table):
        path = library_table({"a": "A", "b": "B"}, {"a": ["b"]})

        library = SourceLibrary.from_json(path)

        assert library.sources == {"a": "A", "b": "B"}
        assert library.dependencies == {"a": ["b"]}

    def test_from_json_requires_an_object(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(["not", "an", "object"]), encoding="utf-8")

        with pytest.raises(ValueError):
            SourceLibrary.from_json(path)
