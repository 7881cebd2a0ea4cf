import logging
from typing import Dict, List, Optional, Tuple

from . import ops
from .exceptions import MalformedProgram
from .executable import Executable, ensure_recursion_headroom
from .models import AddData, Input, Instruction, LoopBody, MovePointer, Output, RuntimeConfig
from .nums import encode_int

logger = logging.getLogger(__name__)

POINTER_STEPS = {">": 1, "<": -1}
DATA_STEPS = {"+": 1, "-": -1}


def parse(source: str) -> List[Instruction]:
    """Reduce program text to a run-length-merged instruction tree.

    Any character outside ``><+-.,[]`` is a comment. Consecutive pointer
    moves (either direction) merge into one ``MovePointer`` holding the net
    offset; consecutive ``+``/``-`` merge into one ``AddData``.
    """
    stack: List[List[Instruction]] = [[]]
    opened: List[int] = []
    i = 0
    length = len(source)
    while i < length:
        c = source[i]
        if c in POINTER_STEPS or c in DATA_STEPS:
            steps = POINTER_STEPS if c in POINTER_STEPS else DATA_STEPS
            total = 0
            while i < length and source[i] in steps:
                total += steps[source[i]]
                i += 1
            stack[-1].append(MovePointer(total) if steps is POINTER_STEPS else AddData(total))
            continue
        if c == ".":
            stack[-1].append(Output())
        elif c == ",":
            stack[-1].append(Input())
        elif c == "[":
            stack.append([])
            opened.append(i)
        elif c == "]":
            if len(stack) == 1:
                raise MalformedProgram(f"Mismatched ']' at offset {i + 1}: no matching '['.")
            body = stack.pop()
            opened.pop()
            stack[-1].append(LoopBody(body))
        i += 1

    if len(stack) != 1:
        raise MalformedProgram(f"Mismatched '[' at offset {opened[-1] + 1}: missing ']'.")
    return stack.pop()


class Lowerer:
    """Folds an instruction tree into a specialized chain, right to left.

    Structurally equal sub-chains come out as one shared instance; since
    children are interned first, a node is identified by its class, its
    operand and the identities of its children.
    """

    def __init__(self):
        self._interned: Dict[Tuple, ops.Op] = {}
        self.stop = self._intern(ops.Stop, ())

    def _intern(self, cls, args) -> ops.Op:
        key = (cls,) + tuple(id(a) if isinstance(a, ops.Op) else a for a in args)
        node = self._interned.get(key)
        if node is None:
            node = cls(*args)
            self._interned[key] = node
        return node

    def lower(self, instructions: List[Instruction]) -> ops.Op:
        code = self.stop
        for instruction in reversed(instructions):
            if isinstance(instruction, MovePointer):
                code = self._intern(ops.AddPointer, (encode_int(instruction.offset), code))
            elif isinstance(instruction, AddData):
                code = self._intern(ops.AddData, (encode_int(instruction.delta), code))
            elif isinstance(instruction, Output):
                code = self._intern(ops.OutputData, (code,))
            elif isinstance(instruction, Input):
                code = self._intern(ops.InputData, (code,))
            elif isinstance(instruction, LoopBody):
                code = self._intern(ops.Loop, (self.lower(instruction.body), code))
            else:
                raise TypeError(f"Illegal instruction: {instruction!r}")
        return code


def lower(instructions: List[Instruction]) -> ops.Op:
    return Lowerer().lower(instructions)


def compile_program(source: str, config: Optional[RuntimeConfig] = None) -> Executable:
    config = config if config is not None else RuntimeConfig()
    ensure_recursion_headroom(config.max_recursion)
    instructions = parse(source)
    chain = lower(instructions)
    logger.debug(
        "Compiled %d characters into %d top-level instructions, %d chain nodes",
        len(source),
        len(instructions),
        ops.chain_length(chain),
    )
    return Executable(chain, config)
