"""Persisted forms of a compiled program.

``.bft`` holds the canonical rendering as UTF-8 text, ``.bfo`` the same
bytes compressed. Anything else is treated as program source.
"""

import logging
import os
import zlib
from typing import Optional

from .compiler import compile_program
from .exceptions import ArtifactError
from .executable import Executable
from .models import RuntimeConfig

logger = logging.getLogger(__name__)

TEXT_SUFFIX = ".bft"
OBJECT_SUFFIX = ".bfo"


def compress(data: bytes) -> bytes:
    return zlib.compress(data, 9)


def decompress(data: bytes) -> bytes:
    return zlib.decompress(data)


def save_text(exe: Executable, path: str) -> str:
    with open(path, "w", encoding="utf-8") as f:
        f.write(str(exe))
    return path


def save_artifact(exe: Executable, path: str) -> str:
    raw = str(exe).encode("utf-8")
    packed = compress(raw)
    with open(path, "wb") as f:
        f.write(packed)
    logger.debug("Wrote %s: %d bytes (%d uncompressed)", path, len(packed), len(raw))
    return path


def load_artifact(path: str, config: Optional[RuntimeConfig] = None) -> Executable:
    """Load ``path`` as an artifact or, failing the suffix check, as source."""
    ext = os.path.splitext(path)[1].lower()
    if ext == OBJECT_SUFFIX:
        with open(path, "rb") as f:
            packed = f.read()
        try:
            text = decompress(packed).decode("utf-8")
        except (zlib.error, UnicodeDecodeError) as e:
            raise ArtifactError(f"Corrupt artifact {path}: {e}") from e
        return Executable(text, config)
    if ext == TEXT_SUFFIX:
        return Executable(_read_text(path), config)
    return compile_program(_read_text(path), config)


def _read_text(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise ArtifactError(f"{path} is not UTF-8 text: {e}") from e
