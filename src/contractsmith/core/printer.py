"""
contractsmith/core/printer.py

Renders a contract model to Soroban-flavoured Rust source.

The printer only reads the model. Given the same model state it always
produces byte-identical text: imports and traits are sorted, while constructor
lines and function prologues keep the order in which they were added.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple, Union

from contractsmith.core.builder import ContractBuilder
from contractsmith.core.format_lines import INDENT, Lines, format_lines, space_between
from contractsmith.core.settings import DEFAULT_SETTINGS, ContractsmithSettings
from contractsmith.models.contract import (
    SELF_ARG,
    Argument,
    ContractFunction,
    ResultType,
    ReturnType,
    Trait,
    UseClause,
)

STATEMENT_ENDINGS = ("{", "}", ";")


def print_contract(
    contract: ContractBuilder, settings: Optional[ContractsmithSettings] = None
) -> str:
    """
    Render ``contract`` to source text terminated by a single newline.

    Parameters
    ----------
    contract : ContractBuilder
        The fully built contract model.
    settings : Optional[ContractsmithSettings]
        Layout thresholds and header values. Defaults to ``DEFAULT_SETTINGS``.

    Returns
    -------
    str
        The formatted source.
    """
    settings = settings or DEFAULT_SETTINGS
    sorted_groups = sort_traits_to_groups(contract.traits)

    return format_lines(
        *space_between(
            [
                f"// SPDX-License-Identifier: {contract.license}",
                f"// Compatible with OpenZeppelin Stellar Soroban Contracts {settings.compatible_version}",
                "#![no_std]",
            ],
            _print_documentation(contract),
            _print_use_clauses(contract, settings),
            _print_constants(contract),
            _print_struct(contract, sorted_groups),
            _print_errors(contract),
            _print_contract_impl(contract, settings),
            _print_traits(sorted_groups, contract.name, settings),
        )
    )


# --- Header ---


def _print_documentation(contract: ContractBuilder) -> List[Lines]:
    lines: List[Lines] = [f"//! {doc}" for doc in contract.documentations]
    if contract.security_contact:
        if lines:
            lines.append("//!")
        lines.extend(
            [
                "//! # Security",
                "//!",
                f"//! For security issues, please contact: {contract.security_contact}",
            ]
        )
    return lines


# --- Use clauses ---


def use_clause_sort_key(clause: UseClause) -> str:
    return f"{clause.container_path}::{clause.key}"


def _print_use_clauses(
    contract: ContractBuilder, settings: ContractsmithSettings
) -> List[Lines]:
    clauses = sorted(contract.use_clauses, key=use_clause_sort_key)

    # Clauses are already sorted, so a group appears at the position of its first member.
    groups: Dict[str, List[UseClause]] = {}
    order: List[Union[str, UseClause]] = []
    for clause in clauses:
        if clause.groupable:
            if clause.container_path not in groups:
                groups[clause.container_path] = []
                order.append(clause.container_path)
            groups[clause.container_path].append(clause)
        else:
            order.append(clause)

    lines: List[Lines] = []
    for entry in order:
        if isinstance(entry, UseClause):
            line = f"use {entry.container_path}::{entry.name_with_alias};"
        else:
            members = groups[entry]
            # A lone `self` import is only valid inside braces.
            if len(members) == 1 and members[0].name != "self":
                line = f"use {entry}::{members[0].name_with_alias};"
            else:
                names = ", ".join(m.name_with_alias for m in members)
                line = f"use {entry}::{{{names}}};"
        lines.extend(split_long_use_clause_line(line, settings.max_use_clause_line_length))
    return lines


def split_long_use_clause_line(line: str, limit: int) -> List[str]:
    """
    Wrap a braced use statement longer than ``limit``.

    The statement is split right after its first ``{``; the names are then packed
    greedily onto indented continuation lines that stay within ``limit``, breaking
    only after commas, and the statement is closed by ``};`` on its own line.
    """
    if "{" not in line or len(line) <= limit:
        return [line]

    brace = line.index("{")
    names = line[brace + 1 : -2].split(", ")

    lines = [line[: brace + 1]]
    current = ""
    for position, name in enumerate(names):
        piece = name if position == len(names) - 1 else f"{name},"
        candidate = f"{current} {piece}" if current else piece
        if current and len(INDENT + candidate) > limit:
            lines.append(INDENT + current)
            current = piece
        else:
            current = candidate
    if current:
        lines.append(INDENT + current)
    lines.append("};")
    return lines


# --- Constants, struct and errors ---


def _with_semicolon(line: str) -> str:
    return line if line.endswith(";") else f"{line};"


def _print_constants(contract: ContractBuilder) -> List[Lines]:
    lines: List[Lines] = [
        _with_semicolon(f"const {v.name}: {v.type} = {v.value}") for v in contract.variables
    ]
    for constant in contract.constants:
        declaration = _with_semicolon(
            f"const {constant.name}: {constant.type} = {constant.value}"
        )
        if constant.comment and constant.inline_comment:
            lines.append(f"{declaration} // {constant.comment}")
        elif constant.comment:
            lines.append(f"// {constant.comment}")
            lines.append(declaration)
        else:
            lines.append(declaration)
    return lines


def _print_struct(
    contract: ContractBuilder, sorted_groups: List[Tuple[Optional[str], List[Trait]]]
) -> List[Lines]:
    fields: List[Lines] = [
        f"{trait.storage.name}: {trait.storage.type},"
        for _, traits in sorted_groups
        for trait in traits
        if trait.storage is not None
    ]
    fields.extend(f"{s.name}: {s.type}," for s in contract.storages)

    if not fields:
        return ["#[contract]", f"pub struct {contract.name};"]
    return ["#[contract]", f"pub struct {contract.name} {{", fields, "}"]


def _print_errors(contract: ContractBuilder) -> List[Lines]:
    if not contract.errors:
        return []
    return [
        "#[contracterror]",
        "#[derive(Copy, Clone, Debug, Eq, PartialEq, PartialOrd, Ord)]",
        "#[repr(u32)]",
        f"pub enum {contract.name}Error {{",
        [f"{e.name} = {e.num}," for e in contract.errors],
        "}",
    ]


# --- Contract impl block ---


def _print_contract_impl(
    contract: ContractBuilder, settings: ContractsmithSettings
) -> List[Lines]:
    blocks: List[List[Lines]] = []
    if contract.constructor_code or contract.constructor_args:
        args = [SELF_ARG, *contract.constructor_args]
        blocks.append(
            _print_function_block(
                "pub fn __constructor",
                [_print_argument(a) for a in args],
                [],
                None,
                _statements(contract.constructor_code),
                settings,
            )
        )
    blocks.extend(_print_function(fn, settings) for fn in contract.free_functions)

    if not blocks:
        return []
    return ["#[contractimpl]", f"impl {contract.name} {{", space_between(*blocks), "}"]


# --- Traits ---


def trait_sort_key(trait: Trait) -> Tuple[bool, int, str]:
    return (trait.priority is None, trait.priority or 0, trait.name)


def sort_traits_to_groups(
    traits: List[Trait],
) -> List[Tuple[Optional[str], List[Trait]]]:
    """
    Sort traits by priority then name, and group them by section.

    Traits without a section come first; named sections follow in alphabetical
    order. Each group keeps the trait order.
    """
    grouped: Dict[Optional[str], List[Trait]] = {}
    for trait in sorted(traits, key=trait_sort_key):
        grouped.setdefault(trait.section, []).append(trait)
    return sorted(grouped.items(), key=lambda item: (item[0] is not None, item[0] or ""))


def _print_traits(
    sorted_groups: List[Tuple[Optional[str], List[Trait]]],
    contract_name: str,
    settings: ContractsmithSettings,
) -> List[Lines]:
    sections: List[List[Lines]] = []
    for section, traits in sorted_groups:
        banner: List[Lines] = [] if section is None else ["//", f"// {section}", "//"]
        sections.append(
            space_between(banner, *(_print_trait(t, contract_name, settings) for t in traits))
        )
    return space_between(*sections)


def _print_trait(
    trait: Trait, contract_name: str, settings: ContractsmithSettings
) -> List[Lines]:
    lines: List[Lines] = [f"#[{tag}]" for tag in trait.tags]
    head = f"impl {trait.name} for {trait.struct_name or contract_name}"
    if not trait.functions:
        lines.append(f"{head} {{}}")
        return lines
    functions = [_print_function(fn, settings) for fn in trait.functions]
    lines.extend([f"{head} {{", space_between(*functions), "}"])
    return lines


# --- Functions ---


def _is_statement(line: str) -> bool:
    return line.endswith(STATEMENT_ENDINGS)


def _statements(lines: List[str]) -> List[Lines]:
    return [line if not line or _is_statement(line) else f"{line};" for line in lines]


def function_body(fn: ContractFunction) -> List[Lines]:
    """
    Assemble the printed body of ``fn``: prologue lines then the main code.

    An explicit ``return_line`` is always printed literally after the code. Without
    one, a function returning a ``ResultType`` has its final expression wrapped in
    ``Ok(...)`` (or gets ``Ok(())`` when the body ends in a statement), a plain
    return type keeps its final line as the tail expression, and a function with
    no return type ends every line as a statement.
    """
    lines = [*fn.code_before, *fn.code]

    if fn.return_line is not None:
        return [*_statements(lines), fn.return_line]

    if isinstance(fn.returns, ResultType):
        if lines and not _is_statement(lines[-1]):
            return [*_statements(lines[:-1]), f"Ok({lines[-1]})"]
        return [*_statements(lines), "Ok(())"]

    if fn.returns is not None and lines:
        tail = lines[-1]
        if tail.endswith(";"):
            tail = tail[:-1]
        return [*_statements(lines[:-1]), tail]

    return _statements(lines)


def _print_function(fn: ContractFunction, settings: ContractsmithSettings) -> List[Lines]:
    head = f"pub fn {fn.name}" if fn.pub else f"fn {fn.name}"
    return _print_function_block(
        head,
        [_print_argument(a) for a in fn.args],
        fn.tags,
        fn.returns,
        function_body(fn),
        settings,
    )


def _print_function_block(
    head: str,
    args: List[str],
    tags: List[str],
    returns: ReturnType,
    body: List[Lines],
    settings: ContractsmithSettings,
) -> List[Lines]:
    """Shared layout for functions and the constructor, e.g. ``head = 'pub fn foo'``."""
    fn: List[Lines] = [f"#[{tag}]" for tag in tags]

    accum = f"{head}("
    if args:
        formatted_args = ", ".join(args)
        if len(formatted_args) > settings.max_inline_args_length:
            fn.append(accum)
            fn.append([f"{arg}," for arg in args])
            accum = ""
        else:
            accum += formatted_args
    accum += ")"

    if returns is not None:
        accum += f" -> {returns}"

    if not body:
        fn.append(f"{accum} {{}}")
        return fn

    fn.append(f"{accum} {{")
    fn.append(body)
    fn.append("}")
    return fn


def _print_argument(arg: Argument) -> str:
    if arg.type is not None:
        return f"{arg.name}: {arg.type}"
    return arg.name
