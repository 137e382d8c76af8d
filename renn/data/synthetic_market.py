import logging

import numpy as np

from renn.core.model import (
    DEFAULT_FEATURE_MAX, DEFAULT_FEATURE_MIN,
    DEFAULT_PRICE_MAX, DEFAULT_PRICE_MIN)


_logger_name = __name__.rsplit('.', 1)[-1]
logger = logging.getLogger(_logger_name)

# Price per square meter, before the adjustments below
BASE_PRICE_PER_SQM = 1800.0


def price_rule(square_meters, rooms, bathrooms, floor, zone_rating):
    """
    The noise-free pricing rule used for the synthetic market. It is
    increasing in every feature.
    """
    zone_factor = 0.55 + 0.09 * zone_rating
    price = (BASE_PRICE_PER_SQM * square_meters * zone_factor +
             6000.0 * rooms + 15000.0 * bathrooms + 2500.0 * floor)
    return price


def make(n_properties=100, noise=0.05, rs=None):
    """
    Make a random set of properties with prices.

    Parameters
    ----------
    n_properties: int, default=100
        The number of properties to generate.

    noise: float, default=0.05
        Standard deviation of the multiplicative noise applied
        to each price.

    rs: numpy.Random.RandomState
        RandomState object for reproducible results.

    Returns
    -------
    features, prices : ndarray, shape=(n_properties, 5), ndarray
        One property per row, with columns square meters, rooms,
        bathrooms, floor and zone rating (the order of
        `renn.core.model.FEATURE_NAMES`), and the respective prices.
        Features lie within the default normalization bounds and prices
        are clipped to the default price bounds.
    """
    if n_properties < 1:
        raise ValueError("`n_properties` must be positive.")
    if noise < 0:
        raise ValueError("`noise` must be non-negative.")

    rs = rs if rs is not None else np.random.RandomState()

    fmin = np.array(DEFAULT_FEATURE_MIN)
    fmax = np.array(DEFAULT_FEATURE_MAX)

    square_meters = rs.uniform(fmin[0], fmax[0], size=n_properties)

    # Bigger homes tend to have more rooms and bathrooms.
    size_fraction = (square_meters - fmin[0]) / (fmax[0] - fmin[0])
    rooms = np.round(fmin[1] + size_fraction*(fmax[1] - fmin[1]) +
                     rs.randn(n_properties)*0.5)
    rooms = np.clip(rooms, fmin[1], fmax[1])
    bathrooms = np.round(fmin[2] + size_fraction*(fmax[2] - fmin[2]) +
                         rs.randn(n_properties)*0.3)
    bathrooms = np.clip(bathrooms, fmin[2], fmax[2])

    floor = rs.randint(int(fmin[3]), int(fmax[3])+1, size=n_properties)
    zone_rating = rs.randint(int(fmin[4]), int(fmax[4])+1, size=n_properties)

    features = np.c_[square_meters, rooms, bathrooms, floor, zone_rating]
    features = features.astype(float)

    prices = price_rule(*features.T)
    prices *= 1 + noise*rs.randn(n_properties)
    prices = np.clip(prices, DEFAULT_PRICE_MIN, DEFAULT_PRICE_MAX)

    logger.debug("Generated {} synthetic properties".format(n_properties))

    return features, prices
