"""
Scalar root finding.
"""

from .bisection import bisect  # noqa: F401

__all__ = ["bisect"]
