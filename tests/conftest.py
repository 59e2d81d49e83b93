import io

import pytest

from camlgen import Emitter, Sink


class Capture:
    """Emitter writing into an in-memory sink"""

    def __init__(self, **kwargs):
        self.buffer = io.StringIO()
        self.sink = Sink(self.buffer)
        self.emitter = Emitter(self.sink, **kwargs)

    @property
    def lines(self):
        return self.buffer.getvalue().splitlines()


@pytest.fixture
def capture():
    return Capture()


@pytest.fixture
def capture_factory():
    return Capture
