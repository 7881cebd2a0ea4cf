from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path

import brainfly_lang


ROOT = Path(__file__).resolve().parents[1]
FIXTURES = ROOT / "tests" / "fixtures"

HELLO_WORLD = b"Hello World!\n"


@dataclass
class _ExecResult:
    stdout: bytes
    address: int | None
    memory: bytearray
    error: Exception | None


def _read_fixture(fixture_name: str) -> str:
    fixture_path = FIXTURES / fixture_name
    if not fixture_path.exists():
        raise FileNotFoundError(f"Missing fixture: {fixture_path}")
    return fixture_path.read_text(encoding="utf-8")


def _execute(
    exe: brainfly_lang.Executable, stdin: bytes = b"", memory_size: int = 30000
) -> _ExecResult:
    memory = bytearray(memory_size)
    source, sink = io.BytesIO(stdin), io.BytesIO()
    address = None
    err: Exception | None = None
    try:
        address = exe.run(memory, source, sink)
    except Exception as e:
        err = e
    return _ExecResult(stdout=sink.getvalue(), address=address, memory=memory, error=err)


def _execute_fixture(
    fixture_name: str,
    *,
    stdin: bytes = b"",
    memory_size: int = 30000,
    config: brainfly_lang.RuntimeConfig | None = None,
) -> _ExecResult:
    exe = brainfly_lang.compile_program(_read_fixture(fixture_name), config)
    return _execute(exe, stdin, memory_size)


def reference_run(source: str, stdin: bytes = b"", memory_size: int = 30000):
    """Plain character-at-a-time interpreter used as the oracle.

    Returns ``(output, final_pointer, memory)`` with halt-on-EOF semantics.
    """
    program = [c for c in source if c in "<>+-.,[]"]
    jumps = {}
    open_at = []
    for pc, c in enumerate(program):
        if c == "[":
            open_at.append(pc)
        elif c == "]":
            start = open_at.pop()
            jumps[start] = pc
            jumps[pc] = start

    memory = bytearray(memory_size)
    data = io.BytesIO(stdin)
    out = bytearray()
    pointer = 0
    pc = 0
    while pc < len(program):
        c = program[pc]
        if c == ">":
            pointer += 1
        elif c == "<":
            pointer -= 1
        elif c == "+":
            memory[pointer] = (memory[pointer] + 1) & 0xFF
        elif c == "-":
            memory[pointer] = (memory[pointer] - 1) & 0xFF
        elif c == ".":
            out.append(memory[pointer])
        elif c == ",":
            b = data.read(1)
            if not b:
                break
            memory[pointer] = b[0]
        elif c == "[" and memory[pointer] == 0:
            pc = jumps[pc]
        elif c == "]" and memory[pointer] != 0:
            pc = jumps[pc]
        pc += 1
    return bytes(out), pointer, memory
