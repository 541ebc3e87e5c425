"""
structkit.errors — exception types raised by structkit.

Misuse (unequal parallel sequences, negative weights, writes through an
empty path) raises.  Degenerate but legitimate input (empty sequences,
zero total weight, missing path segments) returns a sentinel instead.
"""


class StructkitError(Exception):
    """Base class for all structkit errors."""


class LengthMismatch(StructkitError, ValueError):
    """Two parallel sequences (items/weights, values/weights) differ in length."""

    def __init__(self, left: int, right: int, what: str = "Items and weights"):
        self.left = left
        self.right = right
        super().__init__(f"{what} must have the same length (got {left} and {right})")


class InvalidWeight(StructkitError, ValueError):
    """A sampling weight is negative."""

    def __init__(self, index: int, weight: float):
        self.index = index
        self.weight = weight
        super().__init__(f"Weights must be non-negative (weight[{index}] = {weight!r})")


class InvalidPath(StructkitError, ValueError):
    """A path cannot address a writable location (e.g. the empty path)."""

    def __init__(self, path: str, reason: str = "empty path cannot be written"):
        self.path = path
        super().__init__(f"Invalid path {path!r}: {reason}")
