"""Canonical text for specialized chains, and its inverse.

``render`` writes a chain as nested names, for example
``AddData<Int<Hex0, Hex0, Hex0, Hex0, Hex0, Hex0, Hex0, Hex3>, Stop>``.
``reconstruct`` parses that text back into an equal chain. Both walk the
``next`` spine iteratively, so chain length is not bounded by the host
recursion limit; only loop nesting recurses in ``render``.
"""

import logging
from functools import lru_cache

from lark import Lark
from lark.exceptions import UnexpectedInput

from .exceptions import ArtifactError
from .grammar import CHAIN_GRAMMAR
from .nums import INT_MAX, INT_MIN, HexDigit, Int, encode_int
from .ops import Op
from .registry import resolve

logger = logging.getLogger(__name__)


def render(node, friendly: bool = False) -> str:
    """Render ``node`` canonically, or with decimal operands if ``friendly``."""
    parts = []
    _render_into(node, parts, friendly)
    return "".join(parts)


def _render_into(node, parts, friendly):
    closers = 0
    while True:
        if isinstance(node, HexDigit):
            parts.append(node.name)
            break
        if isinstance(node, Int):
            if friendly:
                parts.append(str(node.value))
            else:
                parts.append(f"Int<{', '.join(d.name for d in node.digits)}>")
            break
        args = node.arguments()
        if not args:
            parts.append(node.name)
            break
        parts.append(f"{node.name}<")
        for arg in args[:-1]:
            _render_into(arg, parts, friendly)
            parts.append(", ")
        closers += 1
        node = args[-1]
    parts.append(">" * closers)


@lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(CHAIN_GRAMMAR, parser="lalr")


def reconstruct(text: str):
    """Rebuild the chain described by a canonical (or friendly) rendering.

    Raises ``UnknownSymbol`` for names outside the registry and
    ``ArtifactError`` for anything else that does not describe a chain.
    """
    try:
        tree = _parser().parse(text)
    except UnexpectedInput as e:
        raise ArtifactError(f"Malformed artifact: {e}") from e

    # iter_subtrees yields children before their parents.
    built = {}
    for subtree in tree.iter_subtrees():
        if subtree.data == "leaf":
            value = resolve(str(subtree.children[0])).build(())
        elif subtree.data == "node":
            symbol = resolve(str(subtree.children[0]))
            value = symbol.build([built[id(c)] for c in subtree.children[1:]])
        elif subtree.data == "literal":
            number = int(subtree.children[0])
            if not INT_MIN <= number <= INT_MAX:
                raise ArtifactError(f"Operand {number} does not fit in 32 bits")
            value = encode_int(number)
        else:
            value = built[id(subtree.children[0])]
        built[id(subtree)] = value

    root = built[id(tree)]
    if not isinstance(root, Op):
        raise ArtifactError(f"Artifact describes a {type(root).__name__}, not a chain")
    logger.debug("Reconstructed %s from %d characters", type(root).__name__, len(text))
    return root
