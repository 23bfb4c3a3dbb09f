import logging
import numbers

import numpy as np
from sklearn.base import BaseEstimator
from sklearn.metrics import accuracy_score

from knn_selection.distance import get_distance_metric
from knn_selection.errors import NotTrainedError
from knn_selection.model_selection import CrossValidationSuite
from knn_selection.neighbors import Neighbor
from knn_selection.voting import get_voting_strategy


logger = logging.getLogger(__name__)


def _check_training_data(X_train, y_train):
    if X_train is None:
        raise ValueError("X_train cannot be None")
    if y_train is None:
        raise ValueError("y_train cannot be None")
    if len(X_train) != len(y_train):
        raise ValueError(
            f"X_train and y_train lengths must match ({len(X_train)} != {len(y_train)})"
        )
    if len(X_train) == 0:
        raise ValueError("X_train cannot be empty")

    rows = []
    n_features = None
    for i, row in enumerate(X_train):
        if row is None or np.ndim(row) != 1:
            raise ValueError(f"sample {i} is not a one-dimensional vector")
        row = np.asarray(row, dtype=float)
        if n_features is None:
            n_features = row.shape[0]
        elif row.shape[0] != n_features:
            raise ValueError(
                f"sample {i} has dimension {row.shape[0]}, expected {n_features}"
            )
        rows.append(row)

    X = np.array(rows, dtype=float).reshape(len(rows), n_features)
    y = np.asarray(y_train)
    if y.ndim != 1:
        raise ValueError("y_train must be one-dimensional")
    return X, y


class KNNClassifier(BaseEstimator):
    def __init__(self, n_neighbors=5, metric="euclidean", voting="majority"):
        """
        K-Nearest Neighbors Classifier

        Parameters
        ----------
        n_neighbors : int, default=5
            Number of neighbors used by ``predict``
        metric : str or DistanceMetric, default='euclidean'
            Distance metric ('euclidean', 'manhattan', 'chebyshev' or an instance)
        voting : str or VotingStrategy, default='majority'
            Voting strategy ('majority', 'weighted' or an instance)
        """
        self.n_neighbors = n_neighbors
        self.metric = metric
        self.voting = voting

    def fit(self, X_train, y_train):
        """
        Fit the KNN classifier by storing the training data

        The previous training set, if any, is replaced only once the new one
        has been validated.

        Parameters
        ----------
        X_train : array-like of shape (n_samples, n_features)
            Training data
        y_train : array-like of shape (n_samples,)
            Integer class labels

        Returns
        -------
        self : object
            Returns self
        """
        X, y = _check_training_data(X_train, y_train)
        self.X_train_ = X
        self.y_train_ = y
        self.classes_ = np.unique(y)
        self.n_samples_ = X.shape[0]
        self.n_features_in_ = X.shape[1]
        logger.debug(
            "fitted n_samples=%s n_features=%s classes=%s",
            self.n_samples_,
            self.n_features_in_,
            len(self.classes_),
        )
        return self

    def is_trained(self) -> bool:
        return hasattr(self, "X_train_")

    def _check_trained(self):
        if not self.is_trained():
            raise NotTrainedError("KNNClassifier must be trained before use. Call fit first.")

    def _check_k(self, k):
        if isinstance(k, bool) or not isinstance(k, numbers.Integral):
            raise ValueError(f"k must be an integer, got {k!r}")
        if k <= 0:
            raise ValueError("k must be positive")
        if k > self.n_samples_:
            raise ValueError(
                f"k ({k}) cannot exceed training sample count ({self.n_samples_})"
            )

    def _check_query(self, query):
        if query is None:
            raise ValueError("query cannot be None")
        query = np.asarray(query, dtype=float)
        if query.ndim != 1:
            raise ValueError("query must be a one-dimensional vector")
        if query.shape[0] != self.n_features_in_:
            raise ValueError(
                f"query dimension ({query.shape[0]}) does not match "
                f"training dimension ({self.n_features_in_})"
            )
        return query

    def kneighbors(self, query, metric="euclidean"):
        """
        Rank every training sample by distance to ``query``

        Parameters
        ----------
        query : array-like of shape (n_features,)
            Query point
        metric : str or DistanceMetric, default='euclidean'
            Distance metric

        Returns
        -------
        neighbors : list of Neighbor
            All training samples, closest first; equal distances keep
            training order
        """
        self._check_trained()
        query = self._check_query(query)
        distance = get_distance_metric(metric)

        distances = np.array([distance(row, query) for row in self.X_train_], dtype=float)
        order = np.argsort(distances, kind="stable")
        labels = self.y_train_.tolist()
        return [
            Neighbor(label=labels[i], distance=float(distances[i]), index=int(i))
            for i in order
        ]

    def predict_one(self, k, query, metric="euclidean", voting="majority"):
        """
        Predict the class of a single query point

        Parameters
        ----------
        k : int
            Number of neighbors consulted, 1 <= k <= n_samples_
        query : array-like of shape (n_features,)
            Query point
        metric : str or DistanceMetric, default='euclidean'
            Distance metric
        voting : str or VotingStrategy, default='majority'
            Voting strategy

        Returns
        -------
        prediction : int
            Predicted class label

        Raises
        ------
        NotTrainedError
            If called before ``fit``
        ValueError
            If k is out of range or the query is missing or mis-sized
        """
        self._check_trained()
        self._check_k(k)
        strategy = get_voting_strategy(voting)
        return strategy.vote(k, self.kneighbors(query, metric))

    def predict(self, X_test):
        """
        Predict class labels for samples in X_test using the estimator's
        own ``n_neighbors``, ``metric`` and ``voting``

        Parameters
        ----------
        X_test : array-like of shape (n_samples, n_features)
            Test samples

        Returns
        -------
        y_pred : array of shape (n_samples,)
            Predicted class labels
        """
        self._check_trained()
        predictions = [
            self.predict_one(self.n_neighbors, x, self.metric, self.voting) for x in X_test
        ]
        return np.array(predictions)

    def score(self, X_test, y_test):
        return accuracy_score(y_test, self.predict(X_test))

    def cross_validate(
        self, n_folds, candidate_ks, metric="euclidean", voting="majority", random_state=None
    ):
        """k-fold cross-validation of the training set. See ``CrossValidationSuite.run``."""
        suite = CrossValidationSuite(self, n_folds=n_folds, random_state=random_state)
        return suite.run(candidate_ks, metric, voting)

    def find_best_hyperparameters(
        self, n_folds, candidate_ks, metrics, votings, random_state=None, progress=False
    ):
        """Grid search over ks, metrics and voting strategies. See ``CrossValidationSuite.search``."""
        suite = CrossValidationSuite(
            self, n_folds=n_folds, random_state=random_state, progress=progress
        )
        return suite.search(candidate_ks, metrics, votings)
