import io
import sys
from abc import ABC, abstractmethod


class IOHandler(ABC):
    """Pairs the byte source and byte sink a program runs against."""

    @property
    @abstractmethod
    def input(self): ...

    @property
    @abstractmethod
    def output(self): ...

    def flush(self) -> None:
        self.output.flush()


class ConsoleIO(IOHandler):
    """Binary stdin/stdout, used by the CLI."""

    @property
    def input(self):
        return getattr(sys.stdin, "buffer", sys.stdin)

    @property
    def output(self):
        return getattr(sys.stdout, "buffer", sys.stdout)


class BufferIO(IOHandler):
    """In-memory streams for benchmarks and tests."""

    def __init__(self, data: bytes = b""):
        self._input = io.BytesIO(data)
        self._output = io.BytesIO()

    @property
    def input(self):
        return self._input

    @property
    def output(self):
        return self._output

    def getvalue(self) -> bytes:
        return self._output.getvalue()

    def reset(self) -> None:
        self._input.seek(0)
        self._output.seek(0)
        self._output.truncate()
