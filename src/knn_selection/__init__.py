from knn_selection.classifier import KNNClassifier
from knn_selection.distance import (
    ChebyshevDistance,
    DistanceMetric,
    EuclideanDistance,
    ManhattanDistance,
    MinkowskiDistance,
    get_distance_metric,
)
from knn_selection.errors import NotTrainedError
from knn_selection.model_selection import CrossValidationSuite
from knn_selection.neighbors import Neighbor
from knn_selection.results import CrossValidationResult, HyperparameterSearchResult
from knn_selection.voting import (
    MajorityVoting,
    VotingStrategy,
    WeightedMajorityVoting,
    get_voting_strategy,
)

__all__ = [
    "KNNClassifier",
    "CrossValidationSuite",
    "CrossValidationResult",
    "HyperparameterSearchResult",
    "Neighbor",
    "NotTrainedError",
    "DistanceMetric",
    "EuclideanDistance",
    "ManhattanDistance",
    "ChebyshevDistance",
    "MinkowskiDistance",
    "get_distance_metric",
    "VotingStrategy",
    "MajorityVoting",
    "WeightedMajorityVoting",
    "get_voting_strategy",
]
