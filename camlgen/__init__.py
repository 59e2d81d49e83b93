"""
OCaml Stub Generator Package

Declares native Kimchi/Pasta entities and generates OCaml declarations:
  1. Kimchi_types    - generic proof system types
  2. Pasta_bindings  - Pasta fields and curves
  3. Kimchi_bindings - vectors, SRS, indexes, oracles and proofs
  4. Snarky_bindings - constraint system and snarky state
"""

from .types import (
    NativeType, NativeFunction, Builtin, Placeholder, Applied, Tuple,
    ForeignDeclaration, Binding, DeclKind, ScopeFrame,
)
from .errors import (
    CamlgenError, DeclarationError, DuplicateDeclaration, UnknownTarget,
    UnknownPlaceholder, ArityMismatch, InvalidName, ShadowedReference, ScopeError,
    ScopeUnderflow, UnbalancedScope, SinkUnavailable,
)
from .generics import PlaceholderTable, DEFAULT_PLACEHOLDERS, placeholder_names
from .scope import ScopeStack
from .registry import NameRegistry
from .type_mapper import TypeMapper
from .sink import Sink, open_sink, HEADER
from .emitter import Emitter
from .campaign import Pass, PASSES, run_pass, run_campaign

__all__ = [
    'NativeType', 'NativeFunction', 'Builtin', 'Placeholder', 'Applied', 'Tuple',
    'ForeignDeclaration', 'Binding', 'DeclKind', 'ScopeFrame',
    'CamlgenError', 'DeclarationError', 'DuplicateDeclaration', 'UnknownTarget',
    'UnknownPlaceholder', 'ArityMismatch', 'InvalidName', 'ShadowedReference', 'ScopeError',
    'ScopeUnderflow', 'UnbalancedScope', 'SinkUnavailable',
    'PlaceholderTable', 'DEFAULT_PLACEHOLDERS', 'placeholder_names',
    'ScopeStack', 'NameRegistry', 'TypeMapper',
    'Sink', 'open_sink', 'HEADER',
    'Emitter',
    'Pass', 'PASSES', 'run_pass', 'run_campaign',
]
