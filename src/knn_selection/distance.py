"""
Distance metrics used to rank training samples against a query.

Every metric maps two equal-length numeric vectors to a non-negative float.
Metrics are stateless (Minkowski only carries its order ``p``), so one
instance can be shared freely between estimators and folds.
"""

import numpy as np


def _check_vectors(a, b):
    if a is None or b is None:
        raise ValueError("Vectors must not be None")
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    if a.ndim != 1 or b.ndim != 1:
        raise ValueError("Vectors must be one-dimensional")
    if a.shape[0] != b.shape[0]:
        raise ValueError(
            f"Vectors must have the same length (a={a.shape[0]}, b={b.shape[0]})"
        )
    return a, b


def _manhattan(diff: np.ndarray) -> float:
    return float(np.sum(np.abs(diff)))


def _euclidean(diff: np.ndarray) -> float:
    return float(np.sqrt(np.sum(diff * diff)))


class DistanceMetric:
    """
    Base class for distance metrics.

    Subclasses implement ``_compute`` on the coordinate differences
    ``b - a``; validation and the zero-length case live here.
    """

    def distance(self, a, b) -> float:
        """
        Compute the distance between two vectors

        Parameters
        ----------
        a : array-like of shape (n_features,)
            First vector
        b : array-like of shape (n_features,)
            Second vector

        Returns
        -------
        distance : float
            Non-negative distance from a to b

        Raises
        ------
        ValueError
            If either vector is None or their lengths differ
        """
        a, b = _check_vectors(a, b)
        if a.shape[0] == 0:
            return 0.0
        return self._compute(b - a)

    def __call__(self, a, b) -> float:
        return self.distance(a, b)

    def _compute(self, diff: np.ndarray) -> float:
        raise NotImplementedError

    def __repr__(self):
        return type(self).__name__

    def __eq__(self, other):
        return type(self) is type(other)

    def __hash__(self):
        return hash(type(self).__name__)


class EuclideanDistance(DistanceMetric):
    """L2 distance: sqrt(sum((b_i - a_i)^2))."""

    def _compute(self, diff):
        return _euclidean(diff)


class ManhattanDistance(DistanceMetric):
    """L1 distance: sum(|b_i - a_i|)."""

    def _compute(self, diff):
        return _manhattan(diff)


class ChebyshevDistance(DistanceMetric):
    """L-infinity distance: the largest absolute coordinate difference."""

    def _compute(self, diff):
        return float(np.max(np.abs(diff)))


class MinkowskiDistance(DistanceMetric):
    """
    Minkowski distance of order p: (sum(|b_i - a_i|^p))^(1/p)

    p = 1 and p = 2 are computed with the Manhattan and Euclidean formulas
    themselves, so ``MinkowskiDistance(2)`` returns exactly what
    ``EuclideanDistance`` returns for the same inputs.

    Parameters
    ----------
    p : float
        Order of the norm, must be >= 1
    """

    def __init__(self, p: float):
        # also rejects NaN
        if not p >= 1.0:
            raise ValueError(f"p must be >= 1, but got p={p!r}")
        self.p = float(p)

    def _compute(self, diff):
        if self.p == 1.0:
            return _manhattan(diff)
        if self.p == 2.0:
            return _euclidean(diff)
        return float(np.sum(np.abs(diff) ** self.p) ** (1.0 / self.p))

    def __repr__(self):
        return f"MinkowskiDistance(p={self.p!r})"

    def __eq__(self, other):
        return isinstance(other, MinkowskiDistance) and self.p == other.p

    def __hash__(self):
        return hash((type(self).__name__, self.p))


_METRICS = {
    "euclidean": EuclideanDistance,
    "manhattan": ManhattanDistance,
    "chebyshev": ChebyshevDistance,
}


def get_distance_metric(metric) -> DistanceMetric:
    """Resolve a metric instance or registered name ('euclidean', 'manhattan', 'chebyshev')."""
    if isinstance(metric, DistanceMetric):
        return metric
    if isinstance(metric, str) and metric.lower() in _METRICS:
        return _METRICS[metric.lower()]()
    raise ValueError(f"Unknown metric: {metric}")
