from __future__ import annotations
from typing import Sequence, List, TypeVar
import numpy as np

Array = np.ndarray
P = TypeVar("P")


def frange(start: float, stop: float, step: float) -> Array:
    """
    Evenly spaced samples from start to stop, both ends included when
    stop lies on the grid.

    Args:
        start: First sample.
        stop: Last sample (included if reachable in whole steps).
        step: Spacing between samples, must be positive.

    Returns:
        1-D array ``start + i*step`` for ``i = 0..floor((stop-start)/step)``.
    """
    if step <= 0:
        raise ValueError("frange step must be positive.")
    if stop < start:
        return np.empty(0)
    n = int(np.floor((stop - start) / step + 1e-9)) + 1
    return start + step * np.arange(n)


def clamp(x: float, lo: float | None = None, hi: float | None = None) -> float:
    """
    Clamp x into [lo, hi]; a missing bound is not enforced.
    """
    if lo is not None:
        x = max(x, lo)
    if hi is not None:
        x = min(x, hi)
    return x


def _segment_distance_sq(px: Array, py: Array, ax: float, ay: float, bx: float, by: float) -> Array:
    dx = bx - ax
    dy = by - ay
    if dx == 0 and dy == 0:
        return (px - ax) ** 2 + (py - ay) ** 2
    t = ((px - ax) * dx + (py - ay) * dy) / (dx * dx + dy * dy)
    t = np.clip(t, 0.0, 1.0)
    cx = ax + t * dx
    cy = ay + t * dy
    return (px - cx) ** 2 + (py - cy) ** 2


def simplify_mask(x: Sequence[float], y: Sequence[float], tolerance: float) -> Array:
    """
    Ramer-Douglas-Peucker reduction of a polyline.

    Args:
        x: Abscissae of the vertices.
        y: Ordinates of the vertices.
        tolerance: Maximum distance of a dropped vertex from the kept polyline.

    Returns:
        Boolean mask selecting the vertices to keep. End points are always kept.
    """
    xs = np.asarray(x, dtype=float)
    ys = np.asarray(y, dtype=float)
    n = xs.size
    keep = np.zeros(n, dtype=bool)
    if n == 0:
        return keep
    keep[0] = keep[-1] = True
    if n < 3:
        return keep

    tol_sq = tolerance * tolerance
    stack = [(0, n - 1)]
    while stack:
        first, last = stack.pop()
        if last - first < 2:
            continue
        d = _segment_distance_sq(xs[first + 1:last], ys[first + 1:last],
                                 xs[first], ys[first], xs[last], ys[last])
        k = int(np.argmax(d))
        if d[k] > tol_sq:
            index = first + 1 + k
            keep[index] = True
            stack.append((first, index))
            stack.append((index, last))
    return keep


def simplify(points: List[P], tolerance: float) -> List[P]:
    """
    Drop the vertices of a list of points (objects with ``x``/``y``) that do
    not change the drawn polyline by more than ``tolerance``.
    """
    if len(points) < 3:
        return list(points)
    mask = simplify_mask([p.x for p in points], [p.y for p in points], tolerance)
    return [p for p, k in zip(points, mask) if k]
