"""Specialized chain nodes.

A chain is a right-nested value: each node holds its own operand and the
whole remaining program as ``next``. ``Stop`` closes every chain; inside a
``Loop`` body it means "return to the loop", at the top level "end".
"""

from dataclasses import dataclass
from typing import Iterator, Tuple

from .nums import Int


class Op:
    """Base of every chain node. ``name`` is the canonical registry name."""

    __slots__ = ()
    name = "Op"

    def arguments(self) -> Tuple:
        """Operands in canonical order; the continuation always comes last."""
        return ()

    def run(self, address, memory, input, output) -> int:
        # Avoid circular import at top-level
        from .interpreter import ChainInterpreter

        return ChainInterpreter(input, output).run(self, address, memory)


@dataclass(frozen=True)
class Stop(Op):
    name = "Stop"


@dataclass(frozen=True)
class Loop(Op):
    body: Op
    next: Op
    name = "Loop"

    def arguments(self):
        return (self.body, self.next)


@dataclass(frozen=True)
class AddPointer(Op):
    offset: Int
    next: Op
    name = "AddPointer"

    def arguments(self):
        return (self.offset, self.next)


@dataclass(frozen=True)
class AddData(Op):
    delta: Int
    next: Op
    name = "AddData"

    def arguments(self):
        return (self.delta, self.next)


@dataclass(frozen=True)
class OutputData(Op):
    next: Op
    name = "OutputData"

    def arguments(self):
        return (self.next,)


@dataclass(frozen=True)
class InputData(Op):
    next: Op
    name = "InputData"

    def arguments(self):
        return (self.next,)


STOP = Stop()


def iter_chain(op: Op) -> Iterator[Op]:
    """Yield the nodes along the ``next`` spine, ``Stop`` excluded."""
    node = op
    while not isinstance(node, Stop):
        yield node
        node = node.next


def chain_length(op: Op) -> int:
    """Count every node of the chain, loop bodies included."""
    count = 1
    pending = [op]
    while pending:
        for node in iter_chain(pending.pop()):
            count += 1
            if isinstance(node, Loop):
                pending.append(node.body)
                count += 1
    return count
