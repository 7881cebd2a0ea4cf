"""Specializes a chain into one dedicated Python routine.

The routine is generated as source text with every operand written as a
literal and every node inlined in chain order, then compiled once. Loops
nest as ``while`` statements until ``inline_depth``; deeper bodies are
hoisted into helper functions because CPython caps statically nested
blocks per function.
"""

import hashlib
import logging
from functools import lru_cache
from typing import Callable, Dict, List, Optional

from .exceptions import TapeFault
from .models import RuntimeConfig
from .ops import AddData, AddPointer, InputData, Loop, Op, OutputData, iter_chain

logger = logging.getLogger(__name__)

ENTRY_NAME = "run"

# Shared by the generated routine and by standalone bundles.
PRELUDE = [
    "_BYTES = [bytes((i,)) for i in range(256)]",
    "",
    "",
    "class _Halt(Exception):",
    "    def __init__(self, address):",
    "        super().__init__(address)",
    "        self.address = address",
]


def indent(lines, level):
    pad = "    " * level
    return [pad + line if line else line for line in lines]


class _Emitter:
    def __init__(self, inline_depth: int):
        self.inline_depth = inline_depth
        self.helpers: List[List[str]] = []
        self._helper_names: Dict[int, str] = {}
        # Keeps hoisted loops alive so their ids stay unique.
        self._hoisted: List[Loop] = []

    def chain(self, op: Op, depth: int, in_helper: bool) -> List[str]:
        lines: List[str] = []
        for node in iter_chain(op):
            if isinstance(node, AddPointer):
                offset = node.offset.value
                if offset > 0:
                    lines.append(f"address += {offset}")
                    lines.append("if address >= size:")
                    lines.append("    raise TapeFault(address, size)")
                elif offset < 0:
                    lines.append(f"address -= {-offset}")
                    lines.append("if address < 0:")
                    lines.append("    raise TapeFault(address, size)")
            elif isinstance(node, AddData):
                delta = node.delta.value & 0xFF
                if delta:
                    lines.append(f"memory[address] = (memory[address] + {delta}) & 255")
            elif isinstance(node, OutputData):
                lines.append("write(_BYTES[memory[address]])")
            elif isinstance(node, InputData):
                lines.append("data = read(1)")
                lines.append("if not data:")
                if in_helper:
                    lines.append("    raise _Halt(address)")
                else:
                    lines.append("    return address")
                lines.append("memory[address] = data[0]")
            elif isinstance(node, Loop):
                if depth >= self.inline_depth:
                    name = self.hoist(node)
                    lines.append(f"address = {name}(address, memory, read, write, size)")
                else:
                    body = self.chain(node.body, depth + 1, in_helper)
                    lines.append("while memory[address]:")
                    lines.extend(indent(body or ["pass"], 1))
            else:
                raise TypeError(f"Cannot specialize {node!r}")
        return lines

    def hoist(self, loop: Loop) -> str:
        name = self._helper_names.get(id(loop))
        if name is not None:
            return name
        name = f"_loop_{len(self._helper_names)}"
        self._helper_names[id(loop)] = name
        self._hoisted.append(loop)
        body = self.chain(loop.body, 1, True)
        helper = [f"def {name}(address, memory, read, write, size):"]
        helper.append("    while memory[address]:")
        helper.extend(indent(body or ["pass"], 2))
        helper.append("    return address")
        self.helpers.append(helper)
        return name


def nesting_depth(op: Op) -> int:
    """Deepest loop nesting in ``op`` (0 for a loop-free chain)."""
    deepest = 0
    pending = [(op, 0)]
    while pending:
        chain, depth = pending.pop()
        deepest = max(deepest, depth)
        for node in iter_chain(chain):
            if isinstance(node, Loop):
                pending.append((node.body, depth + 1))
    return deepest


def generate_source(op: Op, config: Optional[RuntimeConfig] = None) -> str:
    """Emit the Python source of the routine specialized for ``op``."""
    config = config or RuntimeConfig()
    hoisting = nesting_depth(op) > config.inline_depth
    # The entry point wraps its body in ``try`` when helpers exist, which
    # costs one nesting level.
    emitter = _Emitter(config.inline_depth - 1 if hoisting else config.inline_depth)
    body = emitter.chain(op, 0, False)
    if hoisting:
        body = (
            ["try:"]
            + indent(body or ["pass"], 1)
            + ["except _Halt as halt:", "    return halt.address"]
        )

    lines = list(PRELUDE)
    for helper in emitter.helpers:
        lines += ["", ""] + helper
    lines += [
        "",
        "",
        f"def {ENTRY_NAME}(address, memory, input, output):",
        "    read = input.read",
        "    write = output.write",
        "    size = len(memory)",
    ]
    lines += indent(body, 1)
    lines.append("    return address")
    return "\n".join(lines) + "\n"


@lru_cache(maxsize=128)
def _compile_source(source: str) -> Callable:
    digest = hashlib.sha1(source.encode("utf-8")).hexdigest()[:12]
    code = compile(source, f"<brainfly:{digest}>", "exec")
    namespace = {"__name__": f"brainfly_specialized_{digest}", "TapeFault": TapeFault}
    exec(code, namespace)
    logger.debug("Specialized routine %s (%d bytes of source)", digest, len(source))
    return namespace[ENTRY_NAME]


def specialize(op: Op, config: Optional[RuntimeConfig] = None) -> Callable:
    """Return the compiled entry point for ``op``.

    Equal chains generate equal source, so they share one compiled routine.
    """
    if not isinstance(op, Op):
        raise TypeError(f"Expected a chain node, got {op!r}")
    return _compile_source(generate_source(op, config))


__all__ = ["ENTRY_NAME", "PRELUDE", "generate_source", "nesting_depth", "specialize"]
