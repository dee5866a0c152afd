"""positioncore.interpolation

Lagrange interpolation through a small set of points.

Used to derive configuration values from short curves, so the O(n^2) cost per
query does not matter. All `xs` must be distinct; equal x-coordinates divide
by zero and are not checked.
"""

from typing import Sequence


def interpolate(x, xs: Sequence[float], ys: Sequence[float]):
    """
    Value at `x` of the polynomial of degree len(xs) - 1 through (xs, ys).

    `x` may be a float or a NumPy array; arrays are evaluated element-wise and
    an array is returned.

    Raises
    ------
    ValueError
        If xs and ys differ in length.
    """
    if len(xs) != len(ys):
        raise ValueError(f"xs and ys must have the same length ({len(xs)} != {len(ys)})")

    n = len(xs)
    result = 0.0
    for i in range(n):
        term = ys[i]
        for j in range(n):
            if i != j:
                term = term * ((x - xs[j]) / (xs[i] - xs[j]))
        result = result + term
    return result
