"""
Unit tests for the contract printer.

Covers the overall section layout, import grouping and wrapping, trait ordering,
function body assembly and the blank-line rules of the formatter.
"""

import pytest

from contractsmith.core.builder import ContractBuilder
from contractsmith.core.printer import (
    function_body,
    print_contract,
    split_long_use_clause_line,
)
from contractsmith.core.settings import ContractsmithSettings
from contractsmith.models.contract import (
    SELF_ARG,
    Argument,
    BaseFunction,
    BaseTrait,
    Constant,
    ContractError,
    ContractFunction,
    ResultType,
    Storage,
    Variable,
)

HEADER = (
    "// SPDX-License-Identifier: MIT\n"
    "// Compatible with OpenZeppelin Stellar Soroban Contracts ^0.4.1\n"
    "#![no_std]\n"
)


def _use_lines(source: str):
    return [line for line in source.splitlines() if line.startswith("use ")]


class TestLayout:
    def test_empty_contract(self, contract):
        assert print_contract(contract) == (
            HEADER + "\n" + "#[contract]\n" + "pub struct MyContract;\n"
        )

    def test_basic_contract(self, contract):
        contract.add_use_clause("soroban_sdk", "contract")
        contract.add_use_clause("soroban_sdk", "contractimpl")
        contract.add_use_clause("soroban_sdk", "Env")
        contract.add_constructor_argument(Argument(name="owner", type="Address"))
        contract.add_constructor_code("e.storage().instance().set(&OWNER, &owner)")
        contract.add_function(
            BaseTrait(name="Greeter", tags=("contractimpl",)),
            BaseFunction(name="hello", args=(SELF_ARG,), returns="u32", code=("42",)),
        )

        assert print_contract(contract) == HEADER + (
            "\n"
            "use soroban_sdk::{Env, contract, contractimpl};\n"
            "\n"
            "#[contract]\n"
            "pub struct MyContract;\n"
            "\n"
            "#[contractimpl]\n"
            "impl MyContract {\n"
            "    pub fn __constructor(e: &Env, owner: Address) {\n"
            "        e.storage().instance().set(&OWNER, &owner);\n"
            "    }\n"
            "}\n"
            "\n"
            "#[contractimpl]\n"
            "impl Greeter for MyContract {\n"
            "    fn hello(e: &Env) -> u32 {\n"
            "        42\n"
            "    }\n"
            "}\n"
        )

    def test_documentation_and_security_contact(self, contract):
        contract.add_documentation("A test contract")
        contract.security_contact = "security@example.com"

        assert (
            "#![no_std]\n"
            "\n"
            "//! A test contract\n"
            "//!\n"
            "//! # Security\n"
            "//!\n"
            "//! For security issues, please contact: security@example.com\n"
        ) in print_contract(contract)

    def test_license_comes_from_contract(self):
        c = ContractBuilder("MyContract", license="Apache-2.0")

        assert print_contract(c).startswith("// SPDX-License-Identifier: Apache-2.0\n")

    def test_compatible_version_comes_from_settings(self, contract):
        settings = ContractsmithSettings(compatible_version="^1.0.0")

        assert "Stellar Soroban Contracts ^1.0.0\n" in print_contract(contract, settings)

    def test_constants_and_variables(self, contract):
        contract.add_variable(
            Variable(name="OWNER", type="Symbol", value='symbol_short!("OWNER")')
        )
        contract.add_constant(Constant(name="CAP", type="u32", value="10", comment="cap"))
        contract.add_constant(
            Constant(name="MAX", type="u32", value="20;", comment="max", inline_comment=True)
        )

        assert (
            'const OWNER: Symbol = symbol_short!("OWNER");\n'
            "// cap\n"
            "const CAP: u32 = 10;\n"
            "const MAX: u32 = 20; // max\n"
        ) in print_contract(contract)

    def test_struct_with_storage(self, contract):
        contract.add_trait(
            BaseTrait(name="Counter", storage=Storage(name="counter", type="Counter"))
        )
        contract.add_storage(Storage(name="count", type="u32"))

        assert (
            "#[contract]\n"
            "pub struct MyContract {\n"
            "    counter: Counter,\n"
            "    count: u32,\n"
            "}\n"
        ) in print_contract(contract)

    def test_errors_enum(self, contract):
        contract.add_error(ContractError(name="Unauthorized"))
        contract.add_error(ContractError(name="Overflow"))

        source = print_contract(contract)
        assert "use soroban_sdk::contracterror;\n" in source
        assert (
            "#[contracterror]\n"
            "#[derive(Copy, Clone, Debug, Eq, PartialEq, PartialOrd, Ord)]\n"
            "#[repr(u32)]\n"
            "pub enum MyContractError {\n"
            "    Unauthorized = 1,\n"
            "    Overflow = 2,\n"
            "}\n"
        ) in source

    def test_struct_name_override(self, contract):
        contract.add_trait(BaseTrait(name="Hook", struct_name="Other"))

        assert "impl Hook for Other {}\n" in print_contract(contract)


class TestUseClauses:
    def test_grouped_and_standalone_imports(self, contract):
        contract.add_use_clause("stellar_macros", "when_not_paused")
        contract.add_use_clause("soroban_sdk", "contract")
        contract.add_use_clause("soroban_sdk", "Env", groupable=False)
        contract.add_use_clause("soroban_sdk", "Address")
        contract.add_use_clause("stellar_tokens::fungible", "self", alias="fungible")
        contract.add_use_clause("stellar_tokens::fungible", "FungibleToken")

        assert _use_lines(print_contract(contract)) == [
            "use soroban_sdk::{Address, contract};",
            "use soroban_sdk::Env;",
            "use stellar_macros::when_not_paused;",
            "use stellar_tokens::fungible::{FungibleToken, self as fungible};",
        ]

    def test_lone_self_import_keeps_braces(self, contract):
        contract.add_use_clause("stellar_contract_utils::pausable", "self", alias="pausable")

        assert _use_lines(print_contract(contract)) == [
            "use stellar_contract_utils::pausable::{self as pausable};"
        ]

    def test_long_import_is_wrapped(self, contract):
        names = [
            "FungibleToken",
            "FungibleBurnable",
            "FungibleMintable",
            "FungibleAllowlist",
            "FungibleBlocklist",
            "FungibleCapped",
        ]
        for name in names:
            contract.add_use_clause("stellar_tokens::fungible", name)

        source = print_contract(contract)
        assert (
            "use stellar_tokens::fungible::{\n"
            "    FungibleAllowlist, FungibleBlocklist, FungibleBurnable, FungibleCapped,\n"
            "    FungibleMintable, FungibleToken\n"
            "};\n"
        ) in source

        block = source.split("use stellar_tokens::fungible::{\n")[1].split("};")[0]
        wrapped = {name.strip() for name in block.replace("\n", " ").split(",")}
        assert wrapped == set(names)
        assert all(len(line) <= 90 for line in source.splitlines())

    def test_split_respects_limit(self):
        assert split_long_use_clause_line("use a::{b, c};", 10) == [
            "use a::{",
            "    b, c",
            "};",
        ]

    def test_short_or_unbraced_lines_are_untouched(self):
        assert split_long_use_clause_line("use a::{b, c};", 90) == ["use a::{b, c};"]
        assert split_long_use_clause_line("use a::b;", 3) == ["use a::b;"]

    def test_wrap_threshold_comes_from_settings(self, contract):
        contract.add_use_clause("soroban_sdk", "Address")
        contract.add_use_clause("soroban_sdk", "Env")
        settings = ContractsmithSettings(max_use_clause_line_length=20)

        assert _use_lines(print_contract(contract, settings)) == ["use soroban_sdk::{"]


class TestTraits:
    def test_traits_sorted_by_priority_and_grouped_by_section(self, contract):
        contract.add_trait("Z")
        contract.add_trait("U", section="Utils")
        contract.add_trait("A", priority=2)
        contract.add_trait("E", section="Extensions")
        contract.add_trait("B", priority=1)

        source = print_contract(contract)
        assert source.endswith(
            "impl B for MyContract {}\n"
            "\n"
            "impl A for MyContract {}\n"
            "\n"
            "impl Z for MyContract {}\n"
            "\n"
            "//\n"
            "// Extensions\n"
            "//\n"
            "\n"
            "impl E for MyContract {}\n"
            "\n"
            "//\n"
            "// Utils\n"
            "//\n"
            "\n"
            "impl U for MyContract {}\n"
        )

    def test_function_tags_and_long_argument_lists(self, contract):
        args = (
            SELF_ARG,
            Argument(name="spender", type="Address"),
            Argument(name="from", type="Address"),
            Argument(name="to", type="Address"),
            Argument(name="amount", type="i128"),
            Argument(name="live_until_ledger", type="u32"),
        )
        fn = BaseFunction(name="wide", args=args, code=("do_it()",))
        contract.add_function(None, fn)
        contract.add_function_tag(None, fn, "when_not_paused")

        assert (
            "#[contractimpl]\n"
            "impl MyContract {\n"
            "    #[when_not_paused]\n"
            "    pub fn wide(\n"
            "        e: &Env,\n"
            "        spender: Address,\n"
            "        from: Address,\n"
            "        to: Address,\n"
            "        amount: i128,\n"
            "        live_until_ledger: u32,\n"
            "    ) {\n"
            "        do_it();\n"
            "    }\n"
            "}\n"
        ) in print_contract(contract)

    def test_functions_in_a_trait_are_separated_by_blank_lines(self, contract):
        trait = BaseTrait(name="T")
        contract.add_function(trait, BaseFunction(name="a", args=(SELF_ARG,)))
        contract.add_function(trait, BaseFunction(name="b", args=(SELF_ARG,)))

        assert (
            "impl T for MyContract {\n"
            "    fn a(e: &Env) {}\n"
            "\n"
            "    fn b(e: &Env) {}\n"
            "}\n"
        ) in print_contract(contract)


def _fn(code, returns=None, return_line=None, code_before=()):
    return ContractFunction(
        name="f",
        args=[SELF_ARG],
        code=list(code),
        returns=returns,
        return_line=return_line,
        code_before=list(code_before),
    )


RESULT = ResultType(ok="()", err="MyError")


class TestFunctionBody:
    @pytest.mark.parametrize(
        "fn,expected",
        [
            (_fn(["let x = 1"], returns="u32", return_line="x"), ["let x = 1;", "x"]),
            (_fn(["doWork()"], returns=RESULT, return_line="Ok(x)"), ["doWork();", "Ok(x)"]),
            (_fn(["a()"], return_line="return"), ["a();", "return"]),
            (_fn(["foo(e)"], returns=RESULT), ["Ok(foo(e))"]),
            (
                _fn(["operator.require_auth();"], returns=RESULT),
                ["operator.require_auth();", "Ok(())"],
            ),
            (_fn([], returns=RESULT), ["Ok(())"]),
            (_fn(["a()", "b();"], returns="u32"), ["a();", "b()"]),
            (_fn(["a()", "if x {", "}"]), ["a();", "if x {", "}"]),
            (_fn(["run()"], code_before=["check()"]), ["check();", "run();"]),
            (_fn([]), []),
        ],
    )
    def test_return_wrapping(self, fn, expected):
        assert function_body(fn) == expected

    def test_result_type_is_printed_in_signature(self, contract):
        contract.add_function(
            BaseTrait(name="T"),
            BaseFunction(name="check", args=(SELF_ARG,), returns=RESULT, code=("verify(e)",)),
        )

        assert (
            "    fn check(e: &Env) -> Result<(), MyError> {\n"
            "        Ok(verify(e))\n"
            "    }\n"
        ) in print_contract(contract)

    def test_explicit_return_line_skips_result_wrapping(self, contract):
        contract.add_function(
            BaseTrait(name="T"),
            BaseFunction(
                name="finish",
                args=(SELF_ARG,),
                returns=RESULT,
                code=("doWork()",),
                return_line="Ok(done)",
            ),
        )

        assert (
            "    fn finish(e: &Env) -> Result<(), MyError> {\n"
            "        doWork();\n"
            "        Ok(done)\n"
            "    }\n"
        ) in print_contract(contract)


class TestDeterminism:
    def test_printing_twice_is_identical(self, contract):
        contract.add_use_clause("soroban_sdk", "Env")
        contract.add_trait("B", priority=1)
        contract.add_trait("A", priority=1)

        assert print_contract(contract) == print_contract(contract)

    def test_mutation_after_printing_does_not_change_earlier_output(self, contract):
        before = print_contract(contract)
        snapshot = str(before)
        contract.add_use_clause("soroban_sdk", "Env")

        after = print_contract(contract)
        assert before == snapshot
        assert after != before
        assert "use soroban_sdk::Env;" in after

    def test_blank_line_invariants(self, contract):
        contract.add_documentation("doc")
        contract.add_use_clause("soroban_sdk", "Env")
        contract.add_trait("T", section="Utils")
        contract.add_constructor_code("init()")

        source = print_contract(contract)
        assert not source.startswith("\n")
        assert source.endswith("}\n") or source.endswith(";\n")
        assert not source.endswith("\n\n")
        assert "\n\n\n" not in source
