"""
Voting strategies: reduce the k closest neighbors to one predicted label.

Both strategies read only the first k entries of a distance-sorted neighbor
sequence. When labels tie on score, the label that appears first in the
sequence (the closest one) wins.
"""

import numbers
from collections import Counter, defaultdict

EPSILON = 1e-10


def _check_vote_args(k, neighbors):
    if neighbors is None or len(neighbors) == 0:
        raise ValueError("Neighbors list cannot be None or empty")
    if isinstance(k, bool) or not isinstance(k, numbers.Integral):
        raise ValueError(f"k must be an integer, got {k!r}")
    if k <= 0:
        raise ValueError("k must be positive")
    if k > len(neighbors):
        raise ValueError(
            f"k ({k}) cannot exceed number of neighbors ({len(neighbors)})"
        )


def _top_label(scores):
    # dicts keep first-seen order, and max() keeps the first maximal key
    return max(scores, key=scores.get)


class VotingStrategy:
    def vote(self, k: int, neighbors) -> int:
        raise NotImplementedError

    def __repr__(self):
        return type(self).__name__

    def __eq__(self, other):
        return type(self) is type(other)

    def __hash__(self):
        return hash(type(self).__name__)


class MajorityVoting(VotingStrategy):
    """Plain vote count over the first k labels."""

    def vote(self, k, neighbors):
        _check_vote_args(k, neighbors)
        counts = Counter(neighbor.label for neighbor in neighbors[:k])
        return _top_label(counts)


class WeightedMajorityVoting(VotingStrategy):
    """
    Inverse-distance weighted vote.

    Each of the first k neighbors adds ``1 / (distance + EPSILON)`` to its
    label's total, so closer neighbors dominate regardless of raw counts.
    EPSILON keeps an exact coordinate match finite.
    """

    def vote(self, k, neighbors):
        _check_vote_args(k, neighbors)
        weights = defaultdict(float)
        for neighbor in neighbors[:k]:
            weights[neighbor.label] += 1.0 / (neighbor.distance + EPSILON)
        return _top_label(weights)


_STRATEGIES = {
    "majority": MajorityVoting,
    "uniform": MajorityVoting,
    "weighted": WeightedMajorityVoting,
    "distance": WeightedMajorityVoting,
}


def get_voting_strategy(voting) -> VotingStrategy:
    if isinstance(voting, VotingStrategy):
        return voting
    if isinstance(voting, str) and voting.lower() in _STRATEGIES:
        return _STRATEGIES[voting.lower()]()
    raise ValueError(f"Unknown voting strategy: {voting}")
