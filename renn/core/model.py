import logging

import numpy

from renn.core.fit_job_handler import DEFAULT_LOG_EVERY, FitJobHandler
from renn.neural_network import NeuralNetwork
from renn.normalizer import FeatureNormalizer, PriceNormalizer
from renn.score_functions import mean_absolute_percentage_error


_logger_name = __name__.rsplit('.', 1)[-1]
logger = logging.getLogger(_logger_name)

FEATURE_NAMES = (
    'square_meters',
    'rooms',
    'bathrooms',
    'floor',
    'zone_rating',
)

# Bounds used for min-max normalization of the features, in the
# order of FEATURE_NAMES
DEFAULT_FEATURE_MIN = (30.0, 1.0, 1.0, 0.0, 1.0)
DEFAULT_FEATURE_MAX = (250.0, 5.0, 3.0, 10.0, 10.0)

DEFAULT_PRICE_MIN = 50000.0
DEFAULT_PRICE_MAX = 900000.0

DEFAULT_N_HIDDEN = 8
DEFAULT_LEARNING_RATE = 0.05
DEFAULT_DROPOUT_RATE = 0.1


class RealEstateNeuralNetwork:
    """ Estimates property prices from five features (see `FEATURE_NAMES`)
    using a neural network trained on normalized features and prices
    """

    def __init__(self, network=None, feature_normalizer=None,
                 price_normalizer=None, random_state=None):
        """
        Initialize a real estate price estimator

        Parameters
        ----------
        network: object, default=None
            Has methods `train(inputs, expected)` and `predict(inputs)`
            operating on normalized vectors. The default (None) creates a
            :class:`renn.neural_network.NeuralNetwork` with
            `len(FEATURE_NAMES)` inputs, `DEFAULT_N_HIDDEN` hidden units,
            one output, `DEFAULT_LEARNING_RATE` and `DEFAULT_DROPOUT_RATE`.

        feature_normalizer: NormalizerBase, default=None
            Maps raw feature vectors to the network's input range. The
            default (None) uses min-max scaling with `DEFAULT_FEATURE_MIN`
            and `DEFAULT_FEATURE_MAX`.

        price_normalizer: NormalizerBase, default=None
            Maps prices to and from the network's output range. The default
            (None) uses min-max scaling with `DEFAULT_PRICE_MIN` and
            `DEFAULT_PRICE_MAX`.

        random_state: numpy.random.RandomState, default=None
            Only used when `network` is None, for the default network's
            weight initialization and dropout.
        """
        if network is None:
            network = NeuralNetwork(
                n_input=len(FEATURE_NAMES), n_hidden=DEFAULT_N_HIDDEN,
                n_output=1, learning_rate=DEFAULT_LEARNING_RATE,
                dropout_rate=DEFAULT_DROPOUT_RATE, random_state=random_state)
        elif random_state is not None:
            logger.warning("`random_state` is ignored when `network` is given")

        for method in ('train', 'predict'):
            if not callable(getattr(network, method, None)):
                msg = "`network` ({}) has no `{}` method"
                raise TypeError(msg.format(type(network).__name__, method))

        if feature_normalizer is None:
            feature_normalizer = FeatureNormalizer(
                DEFAULT_FEATURE_MIN, DEFAULT_FEATURE_MAX)

        if price_normalizer is None:
            price_normalizer = PriceNormalizer(
                DEFAULT_PRICE_MIN, DEFAULT_PRICE_MAX)

        self.network = network
        self.feature_normalizer = feature_normalizer
        self.price_normalizer = price_normalizer

        self.error_history = []

        msg = "Real estate estimator initialized with model {}"
        logger.info(msg.format(type(network).__name__))

    def _normalize_data(self, features, prices):
        features = numpy.atleast_2d(numpy.asarray(features, dtype=float))
        prices = numpy.atleast_1d(numpy.asarray(prices, dtype=float))

        if prices.ndim != 1:
            msg = "`prices` should be 1d but was shape {}"
            raise ValueError(msg.format(prices.shape))

        if features.shape[0] != prices.shape[0]:
            msg = "Mismatch in number of properties: features ({}), prices ({})"
            raise ValueError(msg.format(features.shape[0], prices.shape[0]))

        normalized_features = self.feature_normalizer.normalize(features)
        normalized_prices = numpy.asarray(
            self.price_normalizer.normalize(prices)).reshape(-1, 1)

        return normalized_features, normalized_prices

    def train(self, features, prices, epochs, log_every=DEFAULT_LOG_EVERY):
        """ Train the network on the given properties

        Parameters
        ----------
        features: array-like, shape=(n_properties, 5)
            Raw property features, one property per row, ordered as in
            `FEATURE_NAMES`.

        prices: array-like, shape=(n_properties,)
            The respective property prices.

        epochs: int
            Number of passes over the properties.

        log_every: int, default=1000
            Log the training error every `log_every` epochs.

        Returns
        -------
        error_history: list of (int, float)
            The (epoch, normalized error) pairs recorded during training;
            epoch -1 is the error before training. The history is also
            kept as the `error_history` attribute.
        """
        normalized_features, normalized_prices = self._normalize_data(
            features, prices)

        fit_job_handler = FitJobHandler(
            network=self.network,
            features=normalized_features,
            targets=normalized_prices,
            epochs=epochs,
            log_every=log_every)

        self.error_history = fit_job_handler.fit()

        return self.error_history

    def estimate_price(self, square_meters, rooms, bathrooms, floor,
                       zone_rating):
        """ Estimate the price of a single property

        Returns
        -------
        price: float
            The estimated price, in the same units as the training prices.
        """
        msg = ("Estimating property: {} sqm, {} rooms, {} bathrooms, "
               "floor {}, zone {}")
        logger.info(msg.format(square_meters, rooms, bathrooms, floor,
                               zone_rating))

        features = [square_meters, rooms, bathrooms, floor, zone_rating]
        normalized_features = self.feature_normalizer.normalize(features)

        normalized_price = self.network.predict(normalized_features)[0]
        price = float(self.price_normalizer.denormalize(normalized_price))

        logger.info("Estimated price: {:.0f}".format(price))

        return price

    def estimate_prices(self, features):
        """ Estimate the prices of many properties at once

        Parameters
        ----------
        features: array-like, shape=(n_properties, 5)
            Raw property features, one property per row.

        Returns
        -------
        prices: ndarray, shape=(n_properties,)
        """
        normalized_features = self.feature_normalizer.normalize(
            numpy.atleast_2d(numpy.asarray(features, dtype=float)))

        normalized_prices = numpy.array([
            self.network.predict(row)[0] for row in normalized_features
        ])

        return self.price_normalizer.denormalize(normalized_prices)

    def evaluate(self, features, prices):
        """ Compute the mean absolute percentage error of the estimates
        for the given properties

        Note
        ----
        Rooms, bathrooms, floor and zone rating are truncated to integers
        before estimating.

        Returns
        -------
        mape: float
            The error in percent (e.g., 12.5 means 12.5%).
        """
        features = numpy.atleast_2d(numpy.asarray(features, dtype=float))
        prices = numpy.atleast_1d(numpy.asarray(prices, dtype=float))

        if features.shape[0] != prices.shape[0]:
            msg = "Mismatch in number of properties: features ({}), prices ({})"
            raise ValueError(msg.format(features.shape[0], prices.shape[0]))

        if features.ndim != 2 or features.shape[1] != len(FEATURE_NAMES):
            msg = "Features were shape {} but should have {} columns"
            raise ValueError(msg.format(features.shape, len(FEATURE_NAMES)))

        logger.info("Evaluating model on {} properties".format(
            features.shape[0]))

        estimated = numpy.zeros(prices.shape[0])

        for i, row in enumerate(features):
            estimated[i] = self.estimate_price(
                square_meters=row[0], rooms=int(row[1]),
                bathrooms=int(row[2]), floor=int(row[3]),
                zone_rating=int(row[4]))

            msg = "Property {}: actual {:.0f}, estimated {:.0f}, error {:.1f}%"
            logger.debug(msg.format(
                i, prices[i], estimated[i],
                100 * abs(estimated[i] - prices[i]) / prices[i]))

        mape = mean_absolute_percentage_error(estimated, prices)

        logger.info("Mean absolute percentage error = {:.2f}%".format(mape))

        return mape
