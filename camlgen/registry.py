"""Name registry: foreign names bound during one generation pass"""

from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from .errors import DuplicateDeclaration, UnknownTarget
from .types import (
    Binding, DeclKind, NativeFunction, NativeType, TypeExpr,
    natives_in, placeholders_in,
)


def _module_path(path) -> str:
    if isinstance(path, str):
        return path
    return ".".join(path)


def _path_tuple(path) -> tuple:
    if isinstance(path, str):
        return tuple(path.split(".")) if path else ()
    return tuple(path)


class NameRegistry:
    """Append-only map of (module path, foreign name) to bindings.

    Types and functions share one namespace per module. ``imports`` are
    read-only snapshots exported by earlier passes; they satisfy type
    references but are never part of this registry's own keys.
    """

    def __init__(self, imports: Iterable[Mapping[NativeType, Binding]] = ()):
        self._bindings: dict[tuple, Binding] = {}
        self._types: dict[NativeType, Binding] = {}
        self._functions: dict[NativeFunction, Binding] = {}
        self._modules: set[tuple] = set()
        self._imports = tuple(imports)

    def __len__(self) -> int:
        return len(self._bindings)

    def __contains__(self, key) -> bool:
        return key in self._bindings

    def keys(self) -> set:
        return set(self._bindings)

    def bindings(self) -> list[Binding]:
        """All bindings in declaration order"""
        return list(self._bindings.values())

    def get(self, path, name: str) -> Optional[Binding]:
        return self._bindings.get((_module_path(path), name))

    def arity(self, path, name: str) -> int:
        binding = self.get(path, name)
        if binding is None:
            raise UnknownTarget(f"{_module_path(path)}.{name} is not declared")
        return binding.arity

    def has_module(self, path, name: str) -> bool:
        return (_module_path(path), name) in self._modules

    def resolve(self, native: NativeType) -> Binding:
        """Binding of a fresh native type, from this pass first, then imports"""
        if native in self._types:
            return self._types[native]
        for snapshot in self._imports:
            if native in snapshot:
                return snapshot[native]
        raise UnknownTarget(f"native type {native.name} has not been declared")

    def note_module(self, path, name: str):
        self._modules.add((_module_path(path), name))

    def declare_type(self, path, native: NativeType, foreign_name: str,
                     arity: Optional[int] = None) -> Binding:
        if arity is None:
            arity = native.arity
        self._check_free(path, foreign_name)
        if native in self._types:
            previous = self._types[native]
            raise DuplicateDeclaration(
                f"native type {native.name} already declared as "
                f"{previous.module_path}.{previous.name}"
            )
        binding = Binding(
            path=_path_tuple(path), name=foreign_name, kind=DeclKind.TYPE,
            arity=arity, native=native,
        )
        self._bindings[binding.key] = binding
        self._types[native] = binding
        return binding

    def declare_alias(self, path, foreign_name: str, target: TypeExpr) -> Binding:
        """Register ``foreign_name`` as a synonym for ``target``.

        A bare generic target keeps its own arity; otherwise the alias
        is generic over the placeholders the target mentions. Emitters pass
        the expanded target, in which every generic is already applied.
        """
        self._check_free(path, foreign_name)
        self._check_resolvable(target)
        if isinstance(target, NativeType):
            arity = target.arity
        else:
            arity = len(placeholders_in(target))
        binding = Binding(
            path=_path_tuple(path), name=foreign_name, kind=DeclKind.TYPE_ALIAS,
            arity=arity, target=target,
        )
        self._bindings[binding.key] = binding
        return binding

    def declare_function(self, path, native: NativeFunction, foreign_name: str) -> Binding:
        self._check_free(path, foreign_name)
        if native in self._functions:
            previous = self._functions[native]
            raise DuplicateDeclaration(
                f"native function {native.name} already declared as "
                f"{previous.module_path}.{previous.name}"
            )
        for expr in native.signature_types():
            self._check_resolvable(expr)
        binding = Binding(
            path=_path_tuple(path), name=foreign_name, kind=DeclKind.FUNCTION,
            native=native,
        )
        self._bindings[binding.key] = binding
        self._functions[native] = binding
        return binding

    def export(self) -> Mapping[NativeType, Binding]:
        """Read-only snapshot of the fresh types declared in this pass"""
        return MappingProxyType(dict(self._types))

    def _check_free(self, path, foreign_name: str):
        key = (_module_path(path), foreign_name)
        if key in self._bindings:
            raise DuplicateDeclaration(f"{key[0]}.{foreign_name} is already declared")

    def _check_resolvable(self, expr: TypeExpr):
        for native in natives_in(expr):
            self.resolve(native)
