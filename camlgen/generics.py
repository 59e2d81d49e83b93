"""Generic placeholder table"""

from .errors import UnknownPlaceholder
from .types import Placeholder

DEFAULT_PLACEHOLDERS = ("T1", "T2", "T3")


def placeholder_names(count: int) -> tuple:
    """Display names for a table of ``count`` slots: T1, T2, ..."""
    return tuple(f"T{i + 1}" for i in range(count))


class PlaceholderTable:
    """Fixed pool of positional generic slots, registered once per pass.

    Placeholders are kept apart from the name registry, so a real type
    named ``T1`` never collides with slot 0.
    """

    def __init__(self, names: tuple = DEFAULT_PLACEHOLDERS):
        names = tuple(names)
        if len(set(names)) != len(names):
            raise ValueError(f"duplicate placeholder names: {names}")
        self._slots = tuple(Placeholder(i, name) for i, name in enumerate(names))

    def __len__(self) -> int:
        return len(self._slots)

    def placeholder(self, index: int) -> Placeholder:
        if not 0 <= index < len(self._slots):
            raise UnknownPlaceholder(
                f"placeholder slot {index} is not registered ({len(self._slots)} available)"
            )
        return self._slots[index]

    def slots(self, count: int) -> tuple:
        """First ``count`` placeholders, for a generic declaration of that arity"""
        if count < 0:
            raise UnknownPlaceholder(f"negative generic arity {count}")
        if count > len(self._slots):
            raise UnknownPlaceholder(
                f"{count} generic parameters requested, only {len(self._slots)} registered"
            )
        return self._slots[:count]

    def check(self, placeholder: Placeholder) -> Placeholder:
        """Ensure a placeholder reference belongs to this table"""
        registered = self.placeholder(placeholder.slot)
        if registered != placeholder:
            raise UnknownPlaceholder(
                f"placeholder {placeholder.name!r} does not match slot {placeholder.slot}"
            )
        return registered
