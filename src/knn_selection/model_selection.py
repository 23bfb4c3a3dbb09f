import logging
import numbers
from typing import Dict, List, Tuple

import numpy as np
from sklearn.base import clone
from sklearn.metrics import accuracy_score
from sklearn.utils import check_random_state
from tqdm import tqdm

from knn_selection.distance import get_distance_metric
from knn_selection.errors import NotTrainedError
from knn_selection.results import CrossValidationResult, HyperparameterSearchResult
from knn_selection.voting import get_voting_strategy


logger = logging.getLogger(__name__)


class CrossValidationSuite:
    """
    k-fold cross-validation and grid search over a fitted KNNClassifier.

    The estimator's training set is the data being validated. Each fold is
    scored by a fresh ``clone`` of the estimator, so the caller's model is
    never refitted. ``random_state`` drives the shuffle and accepts None, an
    int seed or a ``numpy.random.RandomState``.
    """

    def __init__(self, estimator, n_folds: int = 5, random_state=None, progress: bool = False):
        self.estimator = estimator
        self.n_folds = n_folds
        self.random_state = random_state
        self.progress = progress
        self._rng = check_random_state(random_state)

    def _check_ready(self) -> int:
        if not hasattr(self.estimator, "X_train_"):
            raise NotTrainedError("Estimator must be trained before cross-validation. Call fit first.")
        n = self.estimator.n_samples_
        if self.n_folds < 2:
            raise ValueError(f"n_folds must be at least 2, got {self.n_folds}")
        if self.n_folds > n:
            raise ValueError(
                f"n_folds ({self.n_folds}) cannot exceed training sample count ({n})"
            )
        return n

    def max_k(self) -> int:
        """Largest k every fold's training partition can serve."""
        n = self._check_ready()
        largest_fold = n // self.n_folds + n % self.n_folds
        return n - largest_fold

    def _select_ks(self, candidate_ks) -> List[int]:
        if candidate_ks is None:
            raise ValueError("candidate_ks cannot be None")
        ks = list(dict.fromkeys(candidate_ks))
        for k in ks:
            if isinstance(k, bool) or not isinstance(k, numbers.Integral):
                raise ValueError(f"candidate k must be an integer, got {k!r}")
            if k <= 0:
                raise ValueError(f"candidate k must be positive, got {k}")

        max_k = self.max_k()
        kept = [k for k in ks if k <= max_k]
        dropped = [k for k in ks if k > max_k]
        if dropped:
            logger.warning("dropping candidate ks=%s above max_k=%s", dropped, max_k)
        if not kept:
            raise ValueError(
                f"No candidate k fits the smallest training partition (max k = {max_k})"
            )
        return kept

    def partition(self) -> List[Tuple[np.ndarray, np.ndarray]]:
        """
        Split a shuffled copy of the training indices into folds.

        Returns one ``(validation_indices, training_indices)`` pair per fold.
        Validation slices are disjoint and cover every sample once; the last
        fold also takes the ``n % n_folds`` remainder.
        """
        n = self._check_ready()
        order = self._rng.permutation(n)
        fold_size = n // self.n_folds

        folds = []
        for i in range(self.n_folds):
            start = i * fold_size
            stop = n if i == self.n_folds - 1 else start + fold_size
            validation = order[start:stop]
            training = np.concatenate([order[:start], order[stop:]])
            folds.append((validation, training))
        return folds

    def _evaluate(self, folds, ks, metric, strategy) -> Dict[int, CrossValidationResult]:
        X = self.estimator.X_train_
        y = self.estimator.y_train_
        accuracies = {k: [] for k in ks}

        for fold_index, (validation, training) in enumerate(folds):
            model = clone(self.estimator).fit(X[training], y[training])
            ranked = [model.kneighbors(X[i], metric) for i in validation]
            y_true = y[validation]
            for k in ks:
                y_pred = [strategy.vote(k, neighbors) for neighbors in ranked]
                accuracies[k].append(float(accuracy_score(y_true, y_pred)))
            logger.debug(
                "fold=%s/%s validation=%s training=%s",
                fold_index + 1,
                len(folds),
                len(validation),
                len(training),
            )

        return {k: CrossValidationResult(tuple(scores)) for k, scores in accuracies.items()}

    def run(self, candidate_ks, metric="euclidean", voting="majority") -> Dict[int, CrossValidationResult]:
        """
        Cross-validate every candidate k under one metric and voting strategy.

        Candidates larger than the smallest training partition are dropped;
        a ValueError is raised if none remain. Returns ``{k: result}`` in
        candidate order.
        """
        self._check_ready()
        ks = self._select_ks(candidate_ks)
        metric = get_distance_metric(metric)
        strategy = get_voting_strategy(voting)

        results = self._evaluate(self.partition(), ks, metric, strategy)
        logger.info(
            "cross-validated metric=%s voting=%s folds=%s ks=%s",
            metric,
            strategy,
            self.n_folds,
            ks,
        )
        return results

    def search(self, candidate_ks, metrics, votings) -> HyperparameterSearchResult:
        """
        Cross-validate every (metric, voting) pair and keep the best (k, metric, voting).

        All configurations are scored on the same fold partition. The search
        follows input order and only a strictly greater mean accuracy
        replaces the current best, so the first-seen triple wins ties.
        """
        self._check_ready()
        if metrics is None or len(metrics) == 0:
            raise ValueError("metrics cannot be empty")
        if votings is None or len(votings) == 0:
            raise ValueError("votings cannot be empty")
        ks = self._select_ks(candidate_ks)
        metrics = [get_distance_metric(m) for m in metrics]
        strategies = [get_voting_strategy(v) for v in votings]
        if len(set(metrics)) != len(metrics):
            raise ValueError(f"metrics contain duplicates: {metrics}")
        if len(set(strategies)) != len(strategies):
            raise ValueError(f"votings contain duplicates: {strategies}")
        folds = self.partition()

        configs = [(metric, strategy) for metric in metrics for strategy in strategies]
        all_results = {}
        best = None
        for metric, strategy in tqdm(configs, desc="hyperparameter search", disable=not self.progress):
            key = f"{metric} + {strategy}"
            results = self._evaluate(folds, ks, metric, strategy)
            all_results[key] = results
            for k, result in results.items():
                if best is None or result.mean_accuracy > best[3]:
                    best = (k, metric, strategy, result.mean_accuracy)
            logger.info("evaluated config=%s ks=%s", key, ks)

        best_k, best_metric, best_strategy, best_accuracy = best
        logger.info(
            "best k=%s metric=%s voting=%s accuracy=%.4f",
            best_k,
            best_metric,
            best_strategy,
            best_accuracy,
        )
        return HyperparameterSearchResult(
            best_k=best_k,
            best_distance=best_metric,
            best_voting=best_strategy,
            best_accuracy=best_accuracy,
            all_results=all_results,
        )
