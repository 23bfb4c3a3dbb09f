import dataclasses
import unittest

from knn_selection.datasets import load_builtin_dataset, make_two_clusters
from knn_selection.distance import EuclideanDistance, ManhattanDistance
from knn_selection.results import CrossValidationResult, HyperparameterSearchResult
from knn_selection.voting import MajorityVoting


class CrossValidationResultTests(unittest.TestCase):
    def test_population_statistics(self) -> None:
        result = CrossValidationResult((1.0, 0.5))
        self.assertAlmostEqual(result.mean_accuracy, 0.75)
        self.assertAlmostEqual(result.std_accuracy, 0.25)

    def test_empty_result(self) -> None:
        result = CrossValidationResult(())
        self.assertEqual(result.mean_accuracy, 0.0)
        self.assertEqual(result.std_accuracy, 0.0)

    def test_accuracies_are_frozen(self) -> None:
        result = CrossValidationResult([0.5, 1.0])
        self.assertEqual(result.accuracies, (0.5, 1.0))
        with self.assertRaises(dataclasses.FrozenInstanceError):
            result.accuracies = (1.0,)

    def test_report(self) -> None:
        text = str(CrossValidationResult((1.0, 0.5)))
        self.assertIn("Mean Accuracy: 0.7500", text)
        self.assertIn("Std Deviation: 0.2500", text)
        self.assertIn("Fold Accuracies: [1.0000, 0.5000]", text)


class HyperparameterSearchResultTests(unittest.TestCase):
    def setUp(self) -> None:
        self.result = HyperparameterSearchResult(
            best_k=3,
            best_distance=EuclideanDistance(),
            best_voting=MajorityVoting(),
            best_accuracy=0.9,
            all_results={
                "ManhattanDistance + MajorityVoting": {
                    1: CrossValidationResult((0.5, 0.7)),
                },
                "EuclideanDistance + MajorityVoting": {
                    1: CrossValidationResult((0.8, 0.8)),
                    3: CrossValidationResult((1.0, 0.8)),
                },
            },
        )

    def test_report(self) -> None:
        text = str(self.result)
        self.assertIn("k = 3", text)
        self.assertIn("Distance Metric = EuclideanDistance", text)
        self.assertIn("Voting Metric = MajorityVoting", text)
        self.assertIn("Accuracy = 0.9000", text)

    def test_table_lists_best_rows_first(self) -> None:
        lines = self.result.format_table().splitlines()
        self.assertTrue(lines[0].startswith("Configuration"))
        self.assertEqual(len(lines), 5)
        self.assertTrue(lines[2].startswith("EuclideanDistance + MajorityVoting"))
        self.assertTrue(lines[2].endswith("0.9000 (±0.1000)"))
        self.assertTrue(lines[4].endswith("0.6000 (±0.1000)"))
        self.assertTrue(lines[4].startswith("ManhattanDistance + MajorityVoting"))

    def test_best_distance_is_kept_as_metric(self) -> None:
        self.assertNotEqual(self.result.best_distance, ManhattanDistance())


class DatasetTests(unittest.TestCase):
    def test_builtin_dataset(self) -> None:
        X, y = load_builtin_dataset("Iris")
        self.assertEqual(X.shape, (150, 4))
        self.assertEqual(y.shape, (150,))

    def test_unknown_dataset(self) -> None:
        with self.assertRaises(ValueError):
            load_builtin_dataset("MNIST")

    def test_two_clusters(self) -> None:
        X, y = make_two_clusters()
        self.assertEqual(X.shape, (6, 2))
        self.assertEqual(y.tolist(), [0, 0, 0, 1, 1, 1])


if __name__ == "__main__":
    unittest.main()
