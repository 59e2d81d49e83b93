"""Module scope stack"""

from .errors import ScopeUnderflow, UnbalancedScope
from .types import ScopeFrame


class ScopeStack:
    """Stack of open modules.

    Scoping is strictly stack-disciplined: ``exit`` always pops the frame
    pushed last, and a frame is never popped while a child is still open.
    """

    def __init__(self):
        self._frames: list[ScopeFrame] = []

    def __len__(self) -> int:
        return len(self._frames)

    @property
    def frames(self) -> tuple:
        return tuple(self._frames)

    @property
    def path(self) -> tuple:
        if not self._frames:
            return ()
        return self._frames[-1].path

    @property
    def innermost(self) -> ScopeFrame:
        if not self._frames:
            raise ScopeUnderflow("no module scope is open")
        return self._frames[-1]

    @property
    def visible_depth(self) -> int:
        """Number of open modules that were written to the output"""
        return sum(1 for frame in self._frames if frame.visible)

    def current_path(self) -> str:
        return ".".join(self.path)

    def enter(self, name: str, visible: bool = True) -> ScopeFrame:
        frame = ScopeFrame(name=name, path=self.path + (name,), visible=visible)
        self._frames.append(frame)
        return frame

    def exit(self) -> ScopeFrame:
        if not self._frames:
            raise ScopeUnderflow("exit() called with no open module scope")
        frame = self._frames.pop()
        frame.sealed = True
        return frame

    def ensure_balanced(self, depth: int = 0):
        """Raise UnbalancedScope unless exactly ``depth`` frames are open"""
        if len(self._frames) > depth:
            raise UnbalancedScope(f"module {self.innermost.qualified} is still open")
        if len(self._frames) < depth:
            raise ScopeUnderflow(
                f"expected {depth} open module scope(s), found {len(self._frames)}"
            )
