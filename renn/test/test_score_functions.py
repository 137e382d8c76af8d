import unittest

import numpy as np

from renn import score_functions


class TestScoreFunctions(unittest.TestCase):

    def test_mean_absolute_error(self):
        predicted = np.array([[0.2, 0.4], [0.5, 0.5]])
        expected = np.array([[0.3, 0.1], [0.5, 0.7]])

        # Rows: 0.1 + 0.3 = 0.4 and 0.0 + 0.2 = 0.2
        error = score_functions.mean_absolute_error(predicted, expected)
        self.assertAlmostEqual(error, 0.3)

    def test_mean_absolute_error_single_output(self):
        error = score_functions.mean_absolute_error([[0.5]], [[0.25]])
        self.assertAlmostEqual(error, 0.25)

    def test_mean_absolute_error_shape_mismatch(self):
        with self.assertRaises(ValueError):
            score_functions.mean_absolute_error(np.zeros((3, 1)),
                                                np.zeros((2, 1)))

    def test_mape(self):
        estimated = [110.0, 180.0, 300.0]
        actual = [100.0, 200.0, 300.0]

        # (10% + 10% + 0%) / 3
        mape = score_functions.mean_absolute_percentage_error(
            estimated, actual)
        self.assertAlmostEqual(mape, 20.0 / 3)

    def test_mape_zero_reference(self):
        with self.assertRaises(ValueError):
            score_functions.mean_absolute_percentage_error([1.0], [0.0])
