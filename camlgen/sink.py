"""Output sinks for generated declaration text"""

import os
import secrets
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Optional, TextIO

from .errors import SinkUnavailable

HEADER = "(* This file is generated automatically with camlgen. *)"

STDOUT = "-"


class Sink:
    """Append-only text stream: one header, then declaration lines"""

    def __init__(self, stream: TextIO, path: Optional[Path] = None):
        self.stream = stream
        self.path = path
        self.lines_written = 0
        self._header_written = False

    @property
    def is_file(self) -> bool:
        return self.path is not None

    def write_header(self):
        if self._header_written:
            raise RuntimeError("header already written to this sink")
        self.stream.write(HEADER + "\n")
        self._header_written = True

    def write_line(self, text: str):
        self.stream.write(text + "\n")
        self.lines_written += 1


def _create_temporary(path: Path):
    """Create an exclusive temporary file beside ``path``.

    Opened with mode 0o666 so the process umask applies as it would to
    a plain open of the destination.
    """
    tmp_path = path.with_name(f".{path.name}.{secrets.token_hex(4)}.tmp")
    fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o666)
    return fd, tmp_path


@contextmanager
def open_sink(destination=None, stdout: Optional[TextIO] = None):
    """Open the sink for one pass.

    ``None`` or ``"-"`` selects standard output. A file destination is
    written through a temporary file that only replaces the destination
    once the pass has completed, so a failed pass leaves no partial file.
    """
    if destination is None or str(destination) == STDOUT:
        yield Sink(stdout if stdout is not None else sys.stdout)
        return

    path = Path(destination)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = _create_temporary(path)
    except OSError as exc:
        raise SinkUnavailable(f"cannot open {path} for writing: {exc}") from exc

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            yield Sink(handle, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise

    try:
        os.replace(tmp_path, path)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        raise SinkUnavailable(f"cannot write {path}: {exc}") from exc
