from collections import namedtuple
import logging
import os

import h5py
import numpy


_logger_name = __name__.rsplit('.', 1)[-1]
logger = logging.getLogger(_logger_name)


TRAINING_DATASET_KEY = 'training'
VALIDATION_DATASET_KEY = 'validation'
TESTING_DATASET_KEY = 'testing'
DATASET_KEYS = (
    TRAINING_DATASET_KEY,
    VALIDATION_DATASET_KEY,
    TESTING_DATASET_KEY
)
EXAMPLE_KEY = "property-{:d}"
FEATURES_KEY = "features"
PRICE_KEY = "price"


# Yielded by `DatasetsHandler.iterate_examples`
DatasetExample = namedtuple(
    'DatasetExample',
    ['index', 'key', 'features', 'price'])


class DatasetsHandler:
    """ Stores property data in an hdf5 file and manages its split into
    training, validation and testing datasets
    """

    def __init__(self, h5_file, features=None, prices=None, compress=True):
        """ Open the property store, creating it first if necessary

        Parameters
        ----------
        h5_file: str
            Path of the hdf5 property store; it need not exist yet

        features: ndarray, shape=(n_properties, n_features), default=None
            Property features, one property per row. Necessary when
            `h5_file` does not exist.

        prices: ndarray, shape=(n_properties,), default=None
            The respective property prices. Necessary when `h5_file`
            does not exist.

        compress: bool, default=True
            Gzip the stored feature vectors when creating the file.

        """
        self.h5_file = os.path.abspath(h5_file)
        self.datasets = {
            dataset_key: [] for dataset_key in DATASET_KEYS}

        if not os.path.exists(self.h5_file):
            if features is None or prices is None:
                msg = ("Provided `h5_file` {} doesn't exist but no feature or "
                       "price data provided")
                raise ValueError(msg.format(h5_file))

            self.convert_to_hdf5(
                features=features, prices=prices, compress=compress)

        with self.open_h5_file() as hf:
            self.n_examples = len(hf.keys())

    def convert_to_hdf5(self, features, prices, compress=True):
        """ Convert a dataset of property features and prices to hdf5.

        Each property gets its own group::

            'property-i'
            |_ features
            |_ attrs
               |_ price

        Parameters
        ----------
        features: ndarray, shape=(n_properties, n_features)
            The property features, one property per row

        prices: ndarray, shape=(n_properties,)
            The respective prices

        compress: bool, default=True
            Gzip the stored feature vectors.

        """
        if os.path.exists(self.h5_file):
            msg = "Dataset already exists at {}"
            raise FileExistsError(msg.format(self.h5_file))

        features = numpy.asarray(features, dtype=float)
        prices = numpy.asarray(prices, dtype=float)
        compress_method = "gzip" if compress else None

        if features.ndim != 2:
            msg = "`features` should be 2d but was shape {}"
            raise ValueError(msg.format(features.shape))

        if prices.ndim != 1:
            msg = "`prices` should be 1d but was shape {}"
            raise ValueError(msg.format(prices.shape))

        if features.shape[0] != prices.shape[0]:
            msg = "Mismatch in number of examples: features ({}), prices ({})"
            raise ValueError(msg.format(features.shape[0], prices.shape[0]))

        if not (prices > 0).all():
            raise ValueError("`prices` must all be positive")

        n_examples = features.shape[0]

        with h5py.File(self.h5_file, mode='w') as hf:
            for i in range(n_examples):

                msg = "Creating dataset entry {} / {}"
                logger.debug(msg.format(i+1, n_examples))

                g = hf.create_group(self._example_key_from_index(i))

                g.create_dataset(FEATURES_KEY,
                                 data=features[i], compression=compress_method)
                g.attrs[PRICE_KEY] = prices[i]

        msg = "Stored {} properties in {}"
        logger.info(msg.format(n_examples, self.h5_file))

    def assign_examples_to_datasets(
            self, training, validation, testing, random_state=None):
        """ Split the properties into training, validation and testing
        datasets

        Either give three fractions that sum to one, in which case the
        properties are shuffled with `random_state` and cut into
        consecutive blocks of those relative sizes, or give three lists of
        property indices.

        random_state: numpy.random.RandomState, default=None
            Only used for the shuffle of a fractional split

        """
        splits = (training, validation, testing)

        if all([isinstance(split, float) for split in splits]):
            indices = self._split_by_fractions(splits, random_state)
        elif all([isinstance(split, list) for split in splits]):
            indices = [list(split) for split in splits]
        else:
            msg = ("`training`, `validation`, and `testing` should be "
                   "all floats or all list of ints")
            raise ValueError(msg)

        all_indices = [index for split in indices for index in split]

        for index in all_indices:
            if isinstance(index, bool) or not isinstance(index, int):
                msg = "Example index {!r} is not an int"
                raise ValueError(msg.format(index))
            if not 0 <= index < self.n_examples:
                msg = "Example index {} out of range [0, {})"
                raise ValueError(msg.format(index, self.n_examples))

        if len(set(all_indices)) != len(all_indices):
            msg = "An example index was assigned to more than one dataset"
            raise ValueError(msg)

        for dataset_key, split in zip(DATASET_KEYS, indices):
            self.datasets[dataset_key] = [
                self._example_key_from_index(index) for index in split]

        msg = "Dataset sizes: {}"
        logger.info(msg.format(", ".join(
            "{} = {}".format(key, len(self.datasets[key]))
            for key in DATASET_KEYS)))

    def _split_by_fractions(self, fractions, random_state):
        if random_state is None:
            random_state = numpy.random.RandomState()
            logger.warning("RandomState not provided; the split will "
                           "not be reproducible")
        elif not isinstance(random_state, numpy.random.RandomState):
            msg = "`random_state` ({}) not instance numpy.random.RandomState"
            raise TypeError(msg.format(type(random_state)))

        if min(fractions) < 0 or abs(sum(fractions) - 1) > 1e-8:
            msg = "Dataset fractions {} should be non-negative and sum to one"
            raise ValueError(msg.format(fractions))

        order = random_state.permutation(self.n_examples)
        stops = numpy.round(
            numpy.cumsum(fractions) * self.n_examples).astype(int)

        return [[int(index) for index in block]
                for block in numpy.split(order, stops[:-1])]

    def open_h5_file(self):
        """ Open the data file read-only; use as a context manager
        """
        return h5py.File(self.h5_file, mode='r')

    def _example_key_from_index(self, index):
        """ Get the example key for the corresponding index
        """
        return EXAMPLE_KEY.format(index)

    def _index_from_example_key(self, example_key):
        return int(example_key.rsplit('-', 1)[-1])

    def iterate_keys(self, dataset_key=None):
        """ Iterate the example keys of the given dataset, or of all
        examples when `dataset_key` is None
        """
        if dataset_key is None:
            for index in range(self.n_examples):
                yield self._example_key_from_index(index)
        elif dataset_key in self.datasets:
            for example_key in self.datasets[dataset_key]:
                yield example_key
        else:
            raise ValueError("Unknown dataset key: {}".format(dataset_key))

    def iterate_examples(self, dataset_key=None):
        """ Iterates through the examples as :class:`DatasetExample`
        instances, either all of them (the default) or only those of the
        given dataset
        """
        with self.open_h5_file() as hf:
            for example_key in self.iterate_keys(dataset_key):
                yield DatasetExample(
                    index=self._index_from_example_key(example_key),
                    key=example_key,
                    features=hf[example_key][FEATURES_KEY][...],
                    price=float(hf[example_key].attrs[PRICE_KEY]))

    def get_arrays(self, dataset_key=None):
        """ Stack the examples of a dataset into arrays

        Returns
        -------
        features, prices: ndarray (n_examples, n_features) and (n_examples,)
        """
        examples = list(self.iterate_examples(dataset_key=dataset_key))

        if not examples:
            msg = "Dataset `{}` is empty"
            raise ValueError(msg.format(dataset_key))

        features = numpy.array([example.features for example in examples])
        prices = numpy.array([example.price for example in examples])

        return features, prices
