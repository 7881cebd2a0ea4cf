import logging
import sys
from typing import Callable, Optional, Union

from .codegen import specialize
from .models import RuntimeConfig
from .ops import Op
from .render import reconstruct, render

logger = logging.getLogger(__name__)


def ensure_recursion_headroom(limit: int) -> None:
    if sys.getrecursionlimit() < limit:
        sys.setrecursionlimit(limit)


class Executable:
    """A specialized chain plus its lazily bound entry point.

    The entry point is resolved once, on first use, and reused by every
    later ``run``. Runs share nothing but the immutable chain, so one
    Executable may serve any number of tapes and streams.
    """

    def __init__(self, code: Union[Op, str], config: Optional[RuntimeConfig] = None):
        if isinstance(code, str):
            code = reconstruct(code)
        if not isinstance(code, Op):
            raise TypeError(f"Executable needs a chain node, got {type(code).__name__}")
        self._code = code
        self.config = config if config is not None else RuntimeConfig()
        self._entrypoint: Optional[Callable] = None

    @property
    def code(self) -> Op:
        return self._code

    @property
    def entrypoint(self) -> Callable:
        if self._entrypoint is None:
            ensure_recursion_headroom(self.config.max_recursion)
            if self.config.backend == "interpreted":
                self._entrypoint = self._code.run
            else:
                self._entrypoint = specialize(self._code, self.config)
            logger.debug("Bound %s entry point", self.config.backend)
        return self._entrypoint

    def run(self, memory, input, output) -> int:
        """Run against ``memory`` from pointer 0 and return the final pointer.

        ``input`` needs ``read(n)`` returning bytes (empty at end of stream),
        ``output`` needs ``write(bytes)``. Exhausted input halts the whole
        program; it is not an error.
        """
        if len(memory) == 0:
            raise ValueError("Tape must hold at least one cell")
        return self.entrypoint(0, memory, input, output)

    def __str__(self) -> str:
        return render(self._code)

    def to_friendly_string(self) -> str:
        return render(self._code, friendly=True)

    def __repr__(self) -> str:
        return f"Executable({self.config.backend})"
