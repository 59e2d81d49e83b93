"""Declaration emitter - writes OCaml declarations for native entities"""

import re
from contextlib import contextmanager
from typing import Optional

from .errors import DuplicateDeclaration, InvalidName
from .generics import PlaceholderTable
from .registry import NameRegistry
from .scope import ScopeStack
from .sink import Sink
from .type_mapper import TypeMapper
from .types import (
    DeclKind, ForeignDeclaration, NativeFunction, NativeType, Placeholder,
    Tuple, TypeExpr, placeholders_in,
)

_NAME_RE = re.compile(r"^[^\s.]+$")


class Emitter:
    """Writes one declaration line per request, in request order.

    Each declaration is validated, rendered and recorded in the registry
    before anything is written, so a rejected declaration leaves no output.
    """

    def __init__(self, sink: Sink, registry: Optional[NameRegistry] = None,
                 scopes: Optional[ScopeStack] = None,
                 placeholders: Optional[PlaceholderTable] = None,
                 indent: str = "  "):
        self.sink = sink
        self.registry = registry if registry is not None else NameRegistry()
        self.scopes = scopes if scopes is not None else ScopeStack()
        self.placeholders = placeholders if placeholders is not None else PlaceholderTable()
        self.types = TypeMapper(self.registry, self.placeholders)
        self.indent = indent

    def placeholder(self, index: int) -> Placeholder:
        return self.placeholders.placeholder(index)

    # ── Modules ──────────────────────────────────────────────────────

    def enter(self, name: str, visible: bool = True):
        """Open a child module of the current one.

        An invisible module still qualifies every declaration inside it
        but writes no ``module ... = struct`` line; it is used for the
        root module of a pass written to its own file.
        """
        self._check_name(name)
        parent = self.scopes.path
        if self.registry.has_module(parent, name):
            qualified = ".".join(parent + (name,))
            raise DuplicateDeclaration(f"module {qualified} is already declared")
        self.registry.note_module(parent, name)
        text = f"module {name} = struct"
        decl = ForeignDeclaration(DeclKind.MODULE_OPEN, name, parent, text)
        if visible:
            self._write(text)
        if self.scopes:
            self.scopes.innermost.declarations.append(decl)
        return self.scopes.enter(name, visible=visible)

    def exit(self):
        frame = self.scopes.exit()
        if frame.visible:
            self._write("end")
        if self.scopes:
            decl = ForeignDeclaration(DeclKind.MODULE_CLOSE, frame.name, self.scopes.path, "end")
            self.scopes.innermost.declarations.append(decl)
        return frame

    @contextmanager
    def module(self, name: str):
        """Declare a nested module; exits only if the body completes"""
        frame = self.enter(name)
        yield frame
        self.exit()

    # ── Declarations ─────────────────────────────────────────────────

    def declare_type(self, native: NativeType, name: str,
                     arity: Optional[int] = None) -> ForeignDeclaration:
        """Declare a fresh (abstract) OCaml type for a native type"""
        path = self._open_path(name)
        if arity is None:
            arity = native.arity
        params = self.placeholders.slots(arity)
        self.registry.declare_type(path, native, name, arity)
        text = f"type nonrec {self.types.params(params)}{name}"
        return self._emit(DeclKind.TYPE, name, path, text, params)

    def declare_alias(self, name: str, target: TypeExpr) -> ForeignDeclaration:
        """Declare ``name`` as a synonym for an already-declared type"""
        path = self._open_path(name)
        expanded = self.types.expand(target)
        rhs = self.types.to_ocaml(expanded, path)
        self.registry.declare_alias(path, name, expanded)
        params = tuple(placeholders_in(expanded))
        text = f"type nonrec {self.types.params(params)}{name} = {rhs}"
        return self._emit(DeclKind.TYPE_ALIAS, name, path, text, params, target)

    def declare_function(self, native: NativeFunction, name: str) -> ForeignDeclaration:
        """Declare an ``external`` bound to a native function symbol"""
        path = self._open_path(name)
        signature_types = [self.types.expand(expr) for expr in native.signature_types()]
        signature = self.types.signature(native, path)
        self.registry.declare_function(path, native, name)
        params = placeholders_in(Tuple(tuple(signature_types)))
        text = f'external {name} : {signature} = "{native.name}"'
        return self._emit(DeclKind.FUNCTION, name, path, text, tuple(params))

    def doc(self, text: str) -> ForeignDeclaration:
        """Write a documentation comment for the declaration that follows"""
        path = self.scopes.innermost.path
        return self._emit(DeclKind.DOC, "", path, f"(** {text} *)")

    # ── Internals ────────────────────────────────────────────────────

    def _open_path(self, name: str) -> tuple:
        frame = self.scopes.innermost
        self._check_name(name)
        return frame.path

    @staticmethod
    def _check_name(name: str):
        if not isinstance(name, str) or not _NAME_RE.match(name):
            raise InvalidName(f"invalid foreign name: {name!r}")

    def _emit(self, kind: DeclKind, name: str, path: tuple, text: str,
              params: tuple = (), target: Optional[TypeExpr] = None) -> ForeignDeclaration:
        decl = ForeignDeclaration(kind, name, path, text, tuple(params), target)
        self._write(text)
        self.scopes.innermost.declarations.append(decl)
        return decl

    def _write(self, text: str):
        self.sink.write_line(self.indent * self.scopes.visible_depth + text)
