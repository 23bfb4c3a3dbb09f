from dataclasses import dataclass


@dataclass(frozen=True)
class Neighbor:
    """A training sample's label and its distance to the current query."""

    label: int
    distance: float
    index: int = -1
