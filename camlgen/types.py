"""Data types for native entities and emitted declarations"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Union

from .errors import ArityMismatch


@dataclass(frozen=True)
class NativeType:
    """Type defined in the wrapped native library"""
    name: str
    arity: int = 0

    def __getitem__(self, args) -> "Applied":
        if not isinstance(args, tuple):
            args = (args,)
        if len(args) != self.arity:
            raise ArityMismatch(
                f"{self.name} takes {self.arity} type argument(s), got {len(args)}"
            )
        return Applied(self, args)


@dataclass(frozen=True)
class Builtin(NativeType):
    """OCaml primitive type, always in scope and never registered"""


@dataclass(frozen=True)
class Placeholder:
    """Numbered generic slot"""
    slot: int
    name: str

    @property
    def type_var(self) -> str:
        return f"'{self.name.lower()}"


@dataclass(frozen=True)
class Applied:
    """Generic type applied to type arguments"""
    head: NativeType
    args: tuple


@dataclass(frozen=True)
class Tuple:
    """Product type, only used in function signatures"""
    items: tuple


TypeExpr = Union[NativeType, Placeholder, Applied, Tuple]


@dataclass(frozen=True)
class NativeFunction:
    """Function exported by the native library.

    ``params`` and ``returns`` form an optional signature. When they are
    omitted the function is declared with an opaque type.
    """
    name: str
    params: Optional[tuple] = None
    returns: Optional[TypeExpr] = None

    @property
    def has_signature(self) -> bool:
        return self.params is not None and self.returns is not None

    def signature_types(self) -> tuple:
        if not self.has_signature:
            return ()
        return tuple(self.params) + (self.returns,)


class DeclKind(str, Enum):
    TYPE = "type"
    TYPE_ALIAS = "type-alias"
    FUNCTION = "function"
    MODULE_OPEN = "module-open"
    MODULE_CLOSE = "module-close"
    DOC = "doc"


@dataclass(frozen=True)
class ForeignDeclaration:
    """One emitted unit of OCaml text"""
    kind: DeclKind
    name: str
    path: tuple
    text: str
    placeholders: tuple = ()
    target: Optional[TypeExpr] = None

    @property
    def qualified_name(self) -> str:
        return ".".join(self.path + (self.name,))


@dataclass(frozen=True)
class Binding:
    """What the registry keeps for each declared foreign name"""
    path: tuple
    name: str
    kind: DeclKind
    arity: int = 0
    native: Optional[Union[NativeType, NativeFunction]] = None
    target: Optional[TypeExpr] = None

    @property
    def module_path(self) -> str:
        return ".".join(self.path)

    @property
    def key(self) -> tuple:
        return (self.module_path, self.name)


@dataclass
class ScopeFrame:
    """Open module on the scope stack"""
    name: str
    path: tuple
    visible: bool = True
    declarations: list[ForeignDeclaration] = field(default_factory=list)
    sealed: bool = False

    @property
    def qualified(self) -> str:
        return ".".join(self.path)


def walk(expr: TypeExpr) -> Iterator[TypeExpr]:
    """Yield ``expr`` and every type expression nested inside it"""
    yield expr
    if isinstance(expr, Applied):
        yield expr.head
        for arg in expr.args:
            yield from walk(arg)
    elif isinstance(expr, Tuple):
        for item in expr.items:
            yield from walk(item)


def natives_in(expr: TypeExpr) -> list[NativeType]:
    """Native (non-builtin) types referenced by ``expr``, in order"""
    found = []
    for node in walk(expr):
        if isinstance(node, NativeType) and not isinstance(node, Builtin) and node not in found:
            found.append(node)
    return found


def placeholders_in(expr: TypeExpr) -> list[Placeholder]:
    """Distinct placeholders referenced by ``expr``, sorted by slot"""
    found = {node for node in walk(expr) if isinstance(node, Placeholder)}
    return sorted(found, key=lambda p: p.slot)
