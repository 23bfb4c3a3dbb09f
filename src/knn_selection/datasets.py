# src/knn_selection/datasets.py

from typing import Tuple

import numpy as np
from sklearn.datasets import load_breast_cancer, load_digits, load_iris, load_wine


_BUILTINS = {
    "Iris": load_iris,
    "Wine": load_wine,
    "Breast Cancer": load_breast_cancer,
    "Digits": load_digits,
}


def load_builtin_dataset(name: str) -> Tuple[np.ndarray, np.ndarray]:
    """Return (X, y) for one of the datasets bundled with scikit-learn. Features are left unscaled."""
    if name not in _BUILTINS:
        raise ValueError(
            f"Dataset '{name}' not supported. Supported: {list(_BUILTINS.keys())}"
        )
    X, y = _BUILTINS[name](return_X_y=True)
    return np.asarray(X, dtype=float), np.asarray(y)


def make_two_clusters() -> Tuple[np.ndarray, np.ndarray]:
    # lower-left cluster is class 0, upper-right cluster is class 1
    X = np.array([[1, 2], [2, 3], [3, 1], [6, 5], [7, 7], [8, 6]], dtype=float)
    y = np.array([0, 0, 0, 1, 1, 1])
    return X, y
