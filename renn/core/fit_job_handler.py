import logging
import os

import numpy

from renn.score_functions import mean_absolute_error


_logger_name = __name__.rsplit('.', 1)[-1]
logger = logging.getLogger(_logger_name)

DEFAULT_LOG_EVERY = 1000

# Epoch index used in the error history for the pre-training error
INITIAL_EPOCH = -1


def setup_logging(filename=None, level=logging.DEBUG):
    """ Sets up logging formatting, etc

    Parameters
    ----------
    filename: str, default=None
        If given, the log is written to this file (an existing file of the
        same name is removed first). Otherwise the log goes to stderr.

    level: int, default=logging.DEBUG
        The logging level of the root logger.
    """
    line_fmt = ("[%(asctime)s] [%(name)s:%(lineno)d] "
                "%(levelname)-8s %(message)s")

    date_fmt = "%Y-%m-%d %H:%M:%S"

    if filename is not None and os.path.exists(filename):
        os.remove(filename)

    logging.basicConfig(
        filename=filename, format=line_fmt,
        datefmt=date_fmt, level=level, force=True)


class FitJobHandler:
    """ Manages the normalized training data and the epoch loop
    """
    def __init__(self, network, features, targets, epochs,
                 log_every=DEFAULT_LOG_EVERY):
        """
        Parameters
        ----------
        network: object
            Has methods `train(inputs, expected)` and `predict(inputs)`,
            e.g., :class:`renn.neural_network.NeuralNetwork`.

        features: ndarray, shape=(n_examples, n_input)
            Normalized training inputs, one example per row.

        targets: ndarray, shape=(n_examples, n_output)
            Normalized training targets, one example per row.

        epochs: int
            Number of passes over the training examples.

        log_every: int, default=1000
            The training error is computed and logged every `log_every`
            epochs (and always on the last one).
        """
        features = numpy.asarray(features, dtype=float)
        targets = numpy.asarray(targets, dtype=float)

        if features.ndim != 2 or targets.ndim != 2:
            msg = "`features` ({}d) and `targets` ({}d) should both be 2d"
            raise ValueError(msg.format(features.ndim, targets.ndim))

        if features.shape[0] != targets.shape[0]:
            msg = "Mismatch in number of examples: features ({}), targets ({})"
            raise ValueError(msg.format(features.shape[0], targets.shape[0]))

        if features.shape[0] == 0:
            raise ValueError("No training examples provided")

        if int(epochs) != epochs or epochs < 1:
            msg = "`epochs` must be a positive integer (got {})"
            raise ValueError(msg.format(epochs))

        if int(log_every) != log_every or log_every < 1:
            msg = "`log_every` must be a positive integer (got {})"
            raise ValueError(msg.format(log_every))

        self.network = network
        self.features = features
        self.targets = targets
        self.epochs = int(epochs)
        self.log_every = int(log_every)

        self.epoch = INITIAL_EPOCH
        self.error_history = []

    @property
    def n_examples(self):
        return self.features.shape[0]

    def _log_with_epoch(self, msg, level='info'):
        """ Write to the logger with the current epoch prepended
        to the log message
        """
        full_message = "(Epoch = {:d}) {:s}".format(self.epoch, msg)

        if level == 'info':
            logger.info(full_message)
        elif level == 'debug':
            logger.debug(full_message)
        elif level == 'warning':
            logger.warning(full_message)
        else:
            raise ValueError("Unknown log level: {}".format(level))

    def compute_error(self):
        """ Average, over the training examples, of the summed absolute
        difference between the network's outputs and the targets
        """
        predicted = numpy.array([
            self.network.predict(example) for example in self.features
        ])
        return mean_absolute_error(predicted, self.targets)

    def collect_error(self):
        """ Compute the current error, store it in the history and log it
        """
        error = self.compute_error()
        self.error_history.append((self.epoch, error))

        if not numpy.isfinite(error):
            self._log_with_epoch("Non-finite training error", level='warning')
        else:
            self._log_with_epoch("Training error = {:.7f}".format(error))

        return error

    def train_epoch(self):
        """ One stochastic gradient descent pass over the examples, in
        their stored order
        """
        for example, target in zip(self.features, self.targets):
            self.network.train(example, target)

    def fit(self):
        """ Run the full training loop

        Returns
        -------
        error_history: list of (int, float)
            The logged (epoch, error) pairs. The first entry has epoch -1
            and holds the error prior to training.
        """
        msg = "Starting training with {} examples for {} epochs"
        logger.info(msg.format(self.n_examples, self.epochs))

        self.epoch = INITIAL_EPOCH
        self.collect_error()

        for epoch in range(self.epochs):
            self.epoch = epoch
            self.train_epoch()

            if epoch % self.log_every == 0 or epoch == self.epochs - 1:
                self.collect_error()

        logger.info("Training complete. Final error = {:.7f}".format(
            self.error_history[-1][1]))

        return self.error_history
