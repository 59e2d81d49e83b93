"""Errors raised while generating declarations.

Every error is fatal to the pass that raised it.
"""


class CamlgenError(Exception):
    """Base class for generator errors"""


class DeclarationError(CamlgenError):
    """A declaration could not be recorded"""


class DuplicateDeclaration(DeclarationError):
    """Same qualified name (or native entity) declared twice in one pass"""


class UnknownTarget(DeclarationError):
    """Reference to a native type never declared in this pass or its imports"""


class UnknownPlaceholder(DeclarationError):
    """Generic slot index beyond the registered placeholder table"""


class ArityMismatch(DeclarationError):
    """Generic type applied to the wrong number of arguments"""


class InvalidName(DeclarationError):
    """Foreign name is empty or contains a path separator or whitespace"""


class ShadowedReference(DeclarationError):
    """Declared type cannot be named from the current module because a
    nearer type or module of the same name hides every path to it"""


class ScopeError(CamlgenError):
    """Module scope stack misuse"""


class ScopeUnderflow(ScopeError):
    """No module scope is open"""


class UnbalancedScope(ScopeError):
    """A pass ended with module scopes still open"""


class SinkUnavailable(CamlgenError):
    """Output destination cannot be opened for writing"""
