""" Train the default real estate estimator on a synthetic market and
report its accuracy on held out properties
"""
import logging
import os

import numpy
import matplotlib.pyplot as plt

from renn import RealEstateNeuralNetwork
from renn.core.datasets_handler import (
    DatasetsHandler, TESTING_DATASET_KEY, TRAINING_DATASET_KEY,
    VALIDATION_DATASET_KEY)
from renn.core.fit_job_handler import setup_logging
from renn.data import synthetic_market
from renn.visualize import plot_error_history


logger = logging.getLogger('main')

DATA_FILENAME = 'synthetic-market.h5'
N_PROPERTIES = 300
EPOCHS = 2000


setup_logging(filename='fit-log.txt', level=logging.INFO)

random_state = numpy.random.RandomState(1234)

if not os.path.exists(DATA_FILENAME):
    features, prices = synthetic_market.make(
        n_properties=N_PROPERTIES, rs=random_state)
    datasets_handler = DatasetsHandler(
        h5_file=DATA_FILENAME, features=features, prices=prices)
else:
    datasets_handler = DatasetsHandler(h5_file=DATA_FILENAME)

datasets_handler.assign_examples_to_datasets(
    training=0.6, validation=0.2, testing=0.2, random_state=random_state)

estimator = RealEstateNeuralNetwork(random_state=random_state)

training_features, training_prices = datasets_handler.get_arrays(
    TRAINING_DATASET_KEY)
history = estimator.train(
    training_features, training_prices, epochs=EPOCHS, log_every=100)

for dataset_key in (TRAINING_DATASET_KEY, VALIDATION_DATASET_KEY,
                    TESTING_DATASET_KEY):
    features, prices = datasets_handler.get_arrays(dataset_key)
    mape = estimator.evaluate(features, prices)
    logger.info("MAPE over {} = {:.2f}%".format(dataset_key, mape))

price = estimator.estimate_price(
    square_meters=95.0, rooms=3, bathrooms=2, floor=4, zone_rating=7)
print("Estimated price of a 95 sqm, 3 room flat: {:,.0f}".format(price))

plot_error_history(history)
plt.savefig('training-error.png')
