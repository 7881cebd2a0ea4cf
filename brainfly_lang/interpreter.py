from typing import Callable, Dict, List, Tuple

from .exceptions import TapeFault
from .ops import Loop, Op

# Returned in place of a continuation when input runs dry.
HALT = object()


class ChainInterpreter:
    """Walks a specialized chain node by node.

    Each handler applies one node's rule and hands back the new pointer and
    the node to continue with (``None`` after the outermost ``Stop``,
    ``HALT`` when the input is exhausted). Entered loops are kept on an
    explicit stack, so nesting depth costs no host stack frames.
    """

    def __init__(self, input, output):
        self._read = input.read
        self._write = output.write
        self._loops: List[Loop] = []
        self._dispatch: Dict[str, Callable] = {
            name: getattr(self, name)
            for name in ("Stop", "Loop", "AddPointer", "AddData", "OutputData", "InputData")
        }

    def run(self, chain: Op, address: int, memory) -> int:
        address, _ = self.walk(chain, address, memory)
        return address

    def walk(self, node, address: int, memory) -> Tuple[int, bool]:
        dispatch = self._dispatch
        self._loops = []
        while node is not None:
            address, node = dispatch[node.name](node, address, memory)
            if node is HALT:
                return address, True
        return address, False

    # --- Nodes ---

    def Stop(self, node, address, memory):
        if not self._loops:
            return address, None
        # End of a loop body: test the cell again.
        loop = self._loops[-1]
        if memory[address]:
            return address, loop.body
        self._loops.pop()
        return address, loop.next

    def AddPointer(self, node, address, memory):
        address += node.offset.value
        if not 0 <= address < len(memory):
            raise TapeFault(address, len(memory))
        return address, node.next

    def AddData(self, node, address, memory):
        memory[address] = (memory[address] + node.delta.value) & 0xFF
        return address, node.next

    def OutputData(self, node, address, memory):
        self._write(bytes((memory[address],)))
        return address, node.next

    def InputData(self, node, address, memory):
        data = self._read(1)
        if not data:
            return address, HALT
        memory[address] = data[0]
        return address, node.next

    def Loop(self, node, address, memory):
        if not memory[address]:
            return address, node.next
        self._loops.append(node)
        return address, node.body
