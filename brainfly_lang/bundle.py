"""Self-contained Python scripts built from a compiled program."""

from .codegen import ENTRY_NAME, generate_source
from .executable import Executable

BUNDLE_HEADER = [
    "#!/usr/bin/env python3",
    '"""Standalone Brainfly program.',
    "",
    "Usage: python {script} [memory_size]",
    '"""',
    "import sys",
    "",
    "CHAIN = {chain!r}",
    "",
    "",
    "class TapeFault(Exception):",
    "    def __init__(self, address, size):",
    '        super().__init__(f"Pointer {{address}} is outside the tape [0, {{size}})")',
    "",
    "",
]

BUNDLE_FOOTER = [
    "",
    "",
    "def main(argv):",
    "    size = max(int(argv[0]) if argv else 30000, 128)",
    "    memory = bytearray(size)",
    f"    address = {ENTRY_NAME}(0, memory, sys.stdin.buffer, sys.stdout.buffer)",
    "    sys.stdout.buffer.flush()",
    "    return address & 0xFF",
    "",
    "",
    'if __name__ == "__main__":',
    "    sys.exit(main(sys.argv[1:]))",
]


def build_bundle(exe: Executable, script: str = "program.py") -> str:
    """Return a script that runs ``exe`` with only the standard library."""
    header = "\n".join(BUNDLE_HEADER).format(script=script, chain=str(exe))
    routine = generate_source(exe.code, exe.config)
    return header + "\n" + routine + "\n".join(BUNDLE_FOOTER) + "\n"
