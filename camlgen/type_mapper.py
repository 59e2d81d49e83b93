"""Type mapping from native type expressions to OCaml type text"""

from .errors import ShadowedReference
from .generics import PlaceholderTable
from .registry import NameRegistry
from .types import (
    Applied, Binding, Builtin, DeclKind, NativeFunction, NativeType,
    Placeholder, Tuple, TypeExpr,
)

# Built-in OCaml types usable in function signatures
UNIT = Builtin("unit")
BOOL = Builtin("bool")
INT = Builtin("int")
STRING = Builtin("string")
BYTES = Builtin("bytes")
OPTION = Builtin("option", 1)
ARRAY = Builtin("array", 1)

_TYPE_KINDS = (DeclKind.TYPE, DeclKind.TYPE_ALIAS)


class TypeMapper:
    """Renders type expressions relative to the module being written"""

    def __init__(self, registry: NameRegistry, placeholders: PlaceholderTable):
        self.registry = registry
        self.placeholders = placeholders

    def expand(self, expr: TypeExpr) -> TypeExpr:
        """Apply bare generic types to the leading placeholder slots"""
        if isinstance(expr, Placeholder):
            return self.placeholders.check(expr)
        if isinstance(expr, NativeType):
            if expr.arity == 0:
                return expr
            return Applied(expr, self.placeholders.slots(expr.arity))
        if isinstance(expr, Applied):
            return Applied(expr.head, tuple(self.expand(arg) for arg in expr.args))
        if isinstance(expr, Tuple):
            return Tuple(tuple(self.expand(item) for item in expr.items))
        raise TypeError(f"not a type expression: {expr!r}")

    def to_ocaml(self, expr: TypeExpr, scope: tuple) -> str:
        expr = self.expand(expr)
        if isinstance(expr, Placeholder):
            return expr.type_var
        if isinstance(expr, Tuple):
            return "(" + " * ".join(self.to_ocaml(item, scope) for item in expr.items) + ")"
        if isinstance(expr, Applied):
            args = [self.to_ocaml(arg, scope) for arg in expr.args]
            return self.apply(self._head(expr.head, scope), args)
        return self._head(expr, scope)

    def signature(self, native: NativeFunction, scope: tuple) -> str:
        """Arrow type of a native function, or an opaque type variable"""
        if not native.has_signature:
            return "'a"
        parts = [self.to_ocaml(param, scope) for param in native.params]
        parts.append(self.to_ocaml(native.returns, scope))
        return " -> ".join(parts)

    def reference(self, binding: Binding, scope: tuple) -> str:
        """Name of ``binding`` relative to ``scope``.

        Enclosing modules are not bound inside their own struct, so a name
        hidden by a nearer type or module has no longer path to fall back on.
        """
        target = binding.path
        common = 0
        while common < min(len(target), len(scope)) and target[common] == scope[common]:
            common += 1
        relative = target[common:] + (binding.name,)
        if self._shadowed(relative, scope, common):
            raise ShadowedReference(
                f"{'.'.join(target + (binding.name,))} is hidden by "
                f"{relative[0]} inside {'.'.join(scope)}"
            )
        return ".".join(relative)

    @staticmethod
    def apply(head: str, args: list) -> str:
        if not args:
            return head
        if len(args) == 1:
            return f"{args[0]} {head}"
        return f"({', '.join(args)}) {head}"

    @staticmethod
    def params(placeholders) -> str:
        """Type parameter prefix of a declaration, e.g. ``('t1, 't2) ``"""
        names = [p.type_var for p in placeholders]
        if not names:
            return ""
        return TypeMapper.apply("", names)

    def _head(self, native: NativeType, scope: tuple) -> str:
        if isinstance(native, Builtin):
            return native.name
        return self.reference(self.registry.resolve(native), scope)

    def _shadowed(self, relative: tuple, scope: tuple, common: int) -> bool:
        first = relative[0]
        for depth in range(common + 1, len(scope) + 1):
            frame = scope[:depth]
            if len(relative) > 1:
                if self.registry.has_module(frame, first):
                    return True
            else:
                binding = self.registry.get(frame, first)
                if binding is not None and binding.kind in _TYPE_KINDS:
                    return True
        return False
