from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np

from knn_selection.distance import DistanceMetric
from knn_selection.voting import VotingStrategy


@dataclass(frozen=True)
class CrossValidationResult:
    """Per-fold accuracies for one k. Summary statistics are recomputed on access."""

    accuracies: Tuple[float, ...]

    def __post_init__(self):
        object.__setattr__(self, "accuracies", tuple(float(a) for a in self.accuracies))

    @property
    def mean_accuracy(self) -> float:
        if not self.accuracies:
            return 0.0
        return float(np.mean(self.accuracies))

    @property
    def std_accuracy(self) -> float:
        # population deviation (ddof=0)
        if not self.accuracies:
            return 0.0
        return float(np.std(self.accuracies))

    def __str__(self):
        folds = ", ".join(f"{a:.4f}" for a in self.accuracies)
        return (
            "Cross-Validation Results:\n"
            f"  Mean Accuracy: {self.mean_accuracy:.4f}\n"
            f"  Std Deviation: {self.std_accuracy:.4f}\n"
            f"  Fold Accuracies: [{folds}]"
        )


@dataclass(frozen=True)
class HyperparameterSearchResult:
    best_k: int
    best_distance: DistanceMetric
    best_voting: VotingStrategy
    best_accuracy: float
    all_results: Dict[str, Dict[int, CrossValidationResult]]

    def __str__(self):
        return (
            "Best Hyperparameters:\n"
            f"  k = {self.best_k}\n"
            f"  Distance Metric = {self.best_distance}\n"
            f"  Voting Metric = {self.best_voting}\n"
            f"  Accuracy = {self.best_accuracy:.4f}"
        )

    def format_table(self) -> str:
        """
        Render every evaluated (configuration, k) as a text table, best mean first.
        Equal means keep search order.
        """
        rows = [
            (config, k, result)
            for config, per_k in self.all_results.items()
            for k, result in per_k.items()
        ]
        rows.sort(key=lambda row: row[2].mean_accuracy, reverse=True)

        roww = max([24] + [len(config) + 2 for config, _, _ in rows])
        header = "Configuration".ljust(roww) + "k".ljust(6) + "Accuracy".ljust(20)
        lines = [header, "-" * len(header)]
        for config, k, result in rows:
            lines.append(
                config.ljust(roww)
                + str(k).ljust(6)
                + f"{result.mean_accuracy:.4f} (±{result.std_accuracy:.4f})"
            )
        return "\n".join(line.rstrip() for line in lines)
