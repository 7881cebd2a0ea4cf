class BrainflyError(Exception):
    """Base exception for the engine."""

    pass


class MalformedProgram(BrainflyError):
    """Raised when a program's brackets do not balance."""

    pass


class ArtifactError(BrainflyError):
    """Raised when a canonical artifact cannot be turned back into a chain."""

    pass


class UnknownSymbol(ArtifactError):
    """Raised when an artifact names a node or digit outside the registry."""

    def __init__(self, name: str):
        super().__init__(f"Unknown symbol '{name}'")
        self.name = name


class TapeFault(BrainflyError):
    """Raised when a program drives the pointer off the tape."""

    def __init__(self, address: int, size: int):
        super().__init__(f"Pointer {address} is outside the tape [0, {size})")
        self.address = address
        self.size = size
