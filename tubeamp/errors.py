from __future__ import annotations


class TubeAmpError(Exception):
    """Base class for errors raised by tubeamp."""


class RootNotFound(TubeAmpError, RuntimeError):
    """
    Raised when the bisection solver exhausts its iteration budget.

    Attributes:
        lo: Lower end of the bracket when the search stopped.
        hi: Upper end of the bracket when the search stopped.
        iterations: Number of iterations performed.
    """

    def __init__(self, message: str, lo: float, hi: float, iterations: int) -> None:
        super().__init__(message)
        self.lo = lo
        self.hi = hi
        self.iterations = iterations


class UnsupportedModel(TubeAmpError, ValueError):
    """Raised when no tube model exists for a (category, type) combination."""

    def __init__(self, category: str, model_type: str) -> None:
        super().__init__(f"No such model: category '{category}', type '{model_type}'.")
        self.category = category
        self.model_type = model_type
