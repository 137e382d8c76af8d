import unittest

import numpy as np

from renn.core import model as model_module
from renn.core.model import RealEstateNeuralNetwork
from renn.neural_network import NeuralNetwork
from renn.normalizer import FeatureNormalizer, NormalizerBase, PriceNormalizer


TRAINING_FEATURES = np.array([
    [80.0, 3.0, 1.0, 2.0, 7.0],
    [150.0, 4.0, 2.0, 3.0, 8.0],
    [50.0, 2.0, 1.0, 1.0, 5.0],
    [200.0, 5.0, 3.0, 4.0, 9.0],
    [90.0, 3.0, 1.0, 3.0, 6.0],
])
TRAINING_PRICES = np.array(
    [220000.0, 380000.0, 150000.0, 650000.0, 260000.0])


class MockNetwork:
    """ Records training calls and always predicts the same value """

    def __init__(self, prediction=0.5):
        self.prediction = prediction
        self.train_calls = []
        self.predict_calls = []

    def train(self, inputs, expected):
        self.train_calls.append((np.array(inputs), np.array(expected)))

    def predict(self, inputs):
        self.predict_calls.append(np.array(inputs))
        return np.array([self.prediction])


class TestRealEstateNeuralNetwork(unittest.TestCase):

    def setUp(self):
        self.random_state = np.random.RandomState(1234)

    def test_default_configuration(self):
        estimator = RealEstateNeuralNetwork(random_state=self.random_state)
        network = estimator.network

        self.assertIsInstance(network, NeuralNetwork)
        self.assertEqual(network.n_input, len(model_module.FEATURE_NAMES))
        self.assertEqual(network.n_hidden, model_module.DEFAULT_N_HIDDEN)
        self.assertEqual(network.n_output, 1)
        self.assertEqual(network.learning_rate,
                         model_module.DEFAULT_LEARNING_RATE)
        self.assertEqual(network.dropout_rate,
                         model_module.DEFAULT_DROPOUT_RATE)

    def test_untrained_estimate_is_finite(self):
        estimator = RealEstateNeuralNetwork(random_state=self.random_state)

        price = estimator.estimate_price(100.0, 3, 1, 2, 5)

        self.assertIsInstance(price, float)
        self.assertTrue(np.isfinite(price))

    def test_extreme_properties(self):
        estimator = RealEstateNeuralNetwork(random_state=self.random_state)

        small = estimator.estimate_price(30.0, 1, 1, 0, 1)
        large = estimator.estimate_price(250.0, 5, 3, 10, 10)

        # Sigmoid output keeps estimates inside the price bounds
        for price in (small, large):
            self.assertTrue(np.isfinite(price))
            self.assertGreater(price, model_module.DEFAULT_PRICE_MIN)
            self.assertLess(price, model_module.DEFAULT_PRICE_MAX)

    def test_estimate_price_normalizes_and_denormalizes(self):
        network = MockNetwork(prediction=0.5)
        estimator = RealEstateNeuralNetwork(network=network)

        price = estimator.estimate_price(140.0, 3, 2, 5, 5.5)

        self.assertAlmostEqual(price, 475000.0)
        self.assertLess(np.abs(network.predict_calls[0] - 0.5).max(), 1e-12)

    def test_custom_normalizers(self):
        network = MockNetwork(prediction=0.25)
        estimator = RealEstateNeuralNetwork(
            network=network,
            feature_normalizer=FeatureNormalizer([0] * 5, [10] * 5),
            price_normalizer=PriceNormalizer(0.0, 1000.0))

        price = estimator.estimate_price(5, 5, 5, 5, 5)

        self.assertAlmostEqual(price, 250.0)

    def test_estimate_prices_matches_estimate_price(self):
        estimator = RealEstateNeuralNetwork(random_state=self.random_state)

        prices = estimator.estimate_prices(TRAINING_FEATURES)

        self.assertEqual(prices.shape, (len(TRAINING_FEATURES),))
        for row, price in zip(TRAINING_FEATURES, prices):
            self.assertAlmostEqual(estimator.estimate_price(*row), price)

    def test_train_passes_normalized_data(self):
        network = MockNetwork()
        estimator = RealEstateNeuralNetwork(network=network)

        history = estimator.train(TRAINING_FEATURES, TRAINING_PRICES,
                                  epochs=3)

        self.assertEqual(len(network.train_calls), 3 * 5)
        inputs, expected = network.train_calls[0]
        self.assertTrue(np.allclose(
            inputs, estimator.feature_normalizer.normalize(
                TRAINING_FEATURES[0])))
        self.assertTrue(np.allclose(
            expected, [(220000.0 - 50000.0) / 850000.0]))
        self.assertIs(history, estimator.error_history)

    def test_train_bad_arguments(self):
        estimator = RealEstateNeuralNetwork(network=MockNetwork())

        with self.assertRaises(ValueError):
            estimator.train(TRAINING_FEATURES, TRAINING_PRICES[:-1], epochs=1)
        with self.assertRaises(ValueError):
            estimator.train(TRAINING_FEATURES, TRAINING_PRICES, epochs=0)
        with self.assertRaises(ValueError):
            estimator.train(TRAINING_FEATURES[:, :4], TRAINING_PRICES,
                            epochs=1)

    def test_network_without_predict(self):
        class NoPredict:
            def train(self, inputs, expected):
                pass

        with self.assertRaises(TypeError):
            RealEstateNeuralNetwork(network=NoPredict())

    def test_evaluate(self):
        network = MockNetwork(prediction=0.5)
        estimator = RealEstateNeuralNetwork(network=network)

        # Every estimate is 475000
        mape = estimator.evaluate([[100, 3, 1, 2, 5], [100, 3, 1, 2, 5]],
                                  [500000.0, 380000.0])

        self.assertAlmostEqual(mape, 100 * (0.05 + 0.25) / 2)

    def test_evaluate_truncates_counts(self):
        network = MockNetwork()
        estimator = RealEstateNeuralNetwork(network=network)

        estimator.evaluate([[100.5, 3.7, 1.2, 2.9, 5.5]], [300000.0])

        expected = estimator.feature_normalizer.normalize(
            [100.5, 3.0, 1.0, 2.0, 5.0])
        self.assertTrue(np.allclose(network.predict_calls[0], expected))

    def test_evaluate_wrong_width(self):
        estimator = RealEstateNeuralNetwork(network=MockNetwork())

        with self.assertRaises(ValueError):
            estimator.evaluate([[100, 3, 1, 2, 5, 999]], [300000.0])
        with self.assertRaises(ValueError):
            estimator.evaluate([[100, 3, 1, 2]], [300000.0])

    def test_arithmetic_price_normalizer(self):
        # Plain arithmetic on a single price gives back a numpy scalar
        class ThousandsNormalizer(NormalizerBase):
            def transform(self, arr):
                return arr / 1000.0

            def inverse_transform(self, arr):
                return arr * 1000.0

        estimator = RealEstateNeuralNetwork(
            network=MockNetwork(prediction=0.25),
            price_normalizer=ThousandsNormalizer())

        price = estimator.estimate_price(100.0, 3, 1, 2, 5)

        self.assertIsInstance(price, float)
        self.assertAlmostEqual(price, 250.0)

    def test_training_reduces_error(self):
        estimator = RealEstateNeuralNetwork(random_state=self.random_state)

        history = estimator.train(TRAINING_FEATURES, TRAINING_PRICES,
                                  epochs=3000, log_every=1000)

        epochs = [epoch for epoch, _ in history]
        self.assertEqual(epochs, [-1, 0, 1000, 2000, 2999])
        self.assertLess(history[-1][1], history[0][1])

    def test_training_convergence(self):
        network = NeuralNetwork(5, 8, 1, learning_rate=0.5,
                                random_state=self.random_state)
        estimator = RealEstateNeuralNetwork(network=network)

        mape_before = estimator.evaluate(TRAINING_FEATURES, TRAINING_PRICES)
        estimator.train(TRAINING_FEATURES, TRAINING_PRICES, epochs=3000)
        mape_after = estimator.evaluate(TRAINING_FEATURES, TRAINING_PRICES)

        self.assertLess(mape_after, mape_before)
        self.assertLess(mape_after, 30.0)

    def test_zone_effect(self):
        network = NeuralNetwork(5, 8, 1, learning_rate=0.5,
                                random_state=self.random_state)
        estimator = RealEstateNeuralNetwork(network=network)

        features = [[100.0, 3.0, 1.0, 2.0, 3.0],
                    [100.0, 3.0, 1.0, 2.0, 8.0]]
        prices = [180000.0, 350000.0]
        estimator.train(features, prices, epochs=3000)

        price_zone4 = estimator.estimate_price(100.0, 3, 1, 2, 4)
        price_zone8 = estimator.estimate_price(100.0, 3, 1, 2, 8)

        self.assertGreater(price_zone8, price_zone4)


if __name__ == '__main__':
    unittest.main()
