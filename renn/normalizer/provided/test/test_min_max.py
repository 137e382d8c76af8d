import unittest

import numpy as np

from renn.normalizer.provided.min_max import (
    FeatureNormalizer, MinMaxNormalizer, PriceNormalizer)


class TestMinMaxNormalizer(unittest.TestCase):

    def test_bad_bounds(self):
        with self.assertRaises(ValueError):
            MinMaxNormalizer(1.0, 1.0)
        with self.assertRaises(ValueError):
            MinMaxNormalizer([0.0, 5.0], [1.0, 4.0])
        with self.assertRaises(ValueError):
            MinMaxNormalizer([0.0, 1.0], [1.0, 2.0, 3.0])

    def test_outside_bounds_not_clipped(self):
        normalizer = MinMaxNormalizer(10.0, 20.0)

        self.assertAlmostEqual(normalizer.normalize(25.0), 1.5)
        self.assertAlmostEqual(normalizer.normalize(5.0), -0.5)


class TestFeatureNormalizer(unittest.TestCase):

    def setUp(self):
        self.normalizer = FeatureNormalizer(
            feature_min=[30.0, 1.0, 1.0, 0.0, 1.0],
            feature_max=[250.0, 5.0, 3.0, 10.0, 10.0])

    def test_bounds_map_to_unit_interval(self):
        low = self.normalizer.normalize([30.0, 1.0, 1.0, 0.0, 1.0])
        high = self.normalizer.normalize([250.0, 5.0, 3.0, 10.0, 10.0])

        self.assertLess(np.abs(low).max(), 1e-12)
        self.assertLess(np.abs(high - 1).max(), 1e-12)

    def test_known_value(self):
        normalized = self.normalizer.normalize([140.0, 3.0, 2.0, 5.0, 5.5])
        self.assertLess(np.abs(normalized - 0.5).max(), 1e-12)

    def test_rows(self):
        features = np.array([[80.0, 3.0, 1.0, 2.0, 7.0],
                             [150.0, 4.0, 2.0, 3.0, 8.0]])
        normalized = self.normalizer.normalize(features)

        self.assertEqual(normalized.shape, (2, 5))
        for row, normalized_row in zip(features, normalized):
            self.assertTrue(np.allclose(self.normalizer.normalize(row),
                                        normalized_row))

    def test_denormalize_inverts(self):
        features = np.array([80.0, 3.0, 1.0, 2.0, 7.0])
        restored = self.normalizer.denormalize(
            self.normalizer.normalize(features))

        self.assertLess(np.abs(restored - features).max(), 1e-9)

    def test_wrong_width(self):
        with self.assertRaises(ValueError):
            self.normalizer.normalize([80.0, 3.0, 1.0, 2.0])
        with self.assertRaises(ValueError):
            self.normalizer.normalize(np.zeros((3, 6)))

    def test_bounds_must_be_vectors(self):
        with self.assertRaises(ValueError):
            FeatureNormalizer(0.0, 1.0)


class TestPriceNormalizer(unittest.TestCase):

    def setUp(self):
        self.normalizer = PriceNormalizer(50000.0, 900000.0)

    def test_scalar(self):
        normalized = self.normalizer.normalize(475000.0)

        self.assertIsInstance(normalized, float)
        self.assertAlmostEqual(normalized, 0.5)
        self.assertAlmostEqual(self.normalizer.denormalize(0.5), 475000.0)

    def test_array(self):
        prices = np.array([220000.0, 380000.0, 150000.0])
        normalized = self.normalizer.normalize(prices)

        self.assertEqual(normalized.shape, (3,))
        self.assertTrue(np.allclose(self.normalizer.denormalize(normalized),
                                    prices))

    def test_bounds_must_be_scalars(self):
        with self.assertRaises(ValueError):
            PriceNormalizer([0.0, 1.0], [1.0, 2.0])
