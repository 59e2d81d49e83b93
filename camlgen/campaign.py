"""Campaign driver - runs the four declaration passes"""

import sys
from dataclasses import dataclass
from typing import Callable, Iterable, Mapping, Optional, Sequence, TextIO

from . import passes
from .emitter import Emitter
from .generics import DEFAULT_PLACEHOLDERS, PlaceholderTable
from .registry import NameRegistry
from .scope import ScopeStack
from .sink import Sink, open_sink


@dataclass(frozen=True)
class Pass:
    """One root module and the earlier passes whose types it references"""
    root: str
    body: Callable[[Emitter], None]
    imports: tuple = ()


PASSES = (
    Pass("Kimchi_types", passes.kimchi_types),
    Pass("Pasta_bindings", passes.pasta_bindings, ("Kimchi_types",)),
    Pass("Kimchi_bindings", passes.kimchi_bindings, ("Kimchi_types", "Pasta_bindings")),
    Pass("Snarky_bindings", passes.snarky_bindings, ("Kimchi_types",)),
)


def run_pass(root: str, body: Callable[[Emitter], None], sink: Sink,
             imports: Iterable[Mapping] = (), wrap_root: bool = True,
             placeholders: Sequence[str] = DEFAULT_PLACEHOLDERS) -> Mapping:
    """Run one pass with a fresh registry and scope stack.

    Returns the read-only snapshot of types the pass declared, for later
    passes to import. A file already named after the root module does not
    need the root wrapper, so ``wrap_root=False`` only qualifies with it.
    """
    registry = NameRegistry(imports)
    scopes = ScopeStack()
    emitter = Emitter(sink, registry, scopes, PlaceholderTable(tuple(placeholders)))

    sink.write_header()
    emitter.enter(root, visible=wrap_root)
    body(emitter)
    scopes.ensure_balanced(depth=1)
    emitter.exit()
    scopes.ensure_balanced()
    return registry.export()


def run_campaign(destinations: Sequence = (), placeholders: Sequence[str] = DEFAULT_PLACEHOLDERS,
                 stdout: Optional[TextIO] = None, campaign: Sequence[Pass] = PASSES) -> dict:
    """Run every pass in order, writing each to its destination or stdout.

    The first error aborts the campaign. Returns the exported snapshots
    keyed by root module name.
    """
    if len(destinations) > len(campaign):
        raise ValueError(f"at most {len(campaign)} destinations, got {len(destinations)}")

    exports = {}
    for index, spec in enumerate(campaign):
        destination = destinations[index] if index < len(destinations) else None
        imports = [exports[name] for name in spec.imports]
        with open_sink(destination, stdout=stdout) as sink:
            exports[spec.root] = run_pass(
                spec.root, spec.body, sink, imports,
                wrap_root=not sink.is_file, placeholders=placeholders,
            )
        if sink.is_file:
            print(f"Generated: {sink.path}", file=sys.stderr)
    return exports
