"""
Records that make up the in-memory contract model.

Feature modules describe traits and functions with the frozen ``Base*`` records
and hand them to :class:`contractsmith.core.builder.ContractBuilder`, which owns
the mutable ``Trait`` and ``ContractFunction`` instances stored in the model.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union


@dataclass(frozen=True)
class Argument:
    name: str
    type: Optional[str] = None


@dataclass(frozen=True)
class ResultType:
    """Paired success/error return type, printed as ``Result<ok, err>``."""

    ok: str
    err: str

    def __str__(self) -> str:
        return f"Result<{self.ok}, {self.err}>"


ReturnType = Union[str, ResultType, None]


@dataclass(frozen=True)
class Storage:
    name: str
    type: str


@dataclass(frozen=True)
class BaseFunction:
    """
    Declarative description of a function.

    Attributes
    ----------
    name : str
        Function name.
    args : Tuple[Argument, ...]
        Ordered arguments. Only their names take part in the function identity.
    code : Tuple[str, ...]
        Body lines.
    returns : Union[str, ResultType, None]
        Plain return type, paired success/error type, or nothing.
    return_line : Optional[str]
        Explicit trailing return line, printed literally after the body.
    pub : bool
        Whether the function is printed with ``pub`` visibility.
    """

    name: str
    args: Tuple[Argument, ...] = ()
    code: Tuple[str, ...] = ()
    returns: ReturnType = None
    return_line: Optional[str] = None
    pub: bool = False

    @property
    def signature(self) -> str:
        return "".join([self.name, "(", *(a.name for a in self.args), ")"])


@dataclass
class ContractFunction:
    name: str
    args: List[Argument]
    code: List[str]
    returns: ReturnType = None
    return_line: Optional[str] = None
    pub: bool = False
    code_before: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)

    @classmethod
    def from_base(cls, fn: BaseFunction, pub: Optional[bool] = None) -> "ContractFunction":
        return cls(
            name=fn.name,
            args=list(fn.args),
            code=list(fn.code),
            returns=fn.returns,
            return_line=fn.return_line,
            pub=fn.pub if pub is None else pub,
        )

    @property
    def signature(self) -> str:
        return "".join([self.name, "(", *(a.name for a in self.args), ")"])


@dataclass(frozen=True)
class BaseTrait:
    """
    Declarative description of a trait implementation block.

    ``priority`` orders traits in the printed output: lower numbers print first
    and traits without a priority print after all prioritized ones.
    """

    name: str
    struct_name: Optional[str] = None
    tags: Tuple[str, ...] = ()
    section: Optional[str] = None
    priority: Optional[int] = None
    storage: Optional[Storage] = None


@dataclass
class Trait:
    name: str
    struct_name: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    section: Optional[str] = None
    priority: Optional[int] = None
    storage: Optional[Storage] = None
    functions: List[ContractFunction] = field(default_factory=list)


@dataclass(frozen=True)
class UseClause:
    container_path: str
    name: str
    groupable: bool = True
    alias: Optional[str] = None

    @property
    def key(self) -> str:
        return self.alias if self.alias else self.name

    @property
    def name_with_alias(self) -> str:
        return f"{self.name} as {self.alias}" if self.alias else self.name


@dataclass(frozen=True)
class Variable:
    name: str
    type: str
    value: str


@dataclass(frozen=True)
class Constant:
    name: str
    type: str
    value: str
    comment: Optional[str] = None
    inline_comment: bool = False


@dataclass(frozen=True)
class ContractError:
    name: str
    num: Optional[int] = None


SELF_ARG = Argument(name="e", type="&Env")
