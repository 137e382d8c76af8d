"""
A simple three layer neural network for regression onto (0, 1).

Input (R^n) => Hidden (R^h) => Output (R^m)

Both layers use the logistic sigmoid and there are no bias terms.
Training is plain stochastic gradient descent on a single
(input, target) pair at a time, optionally with dropout applied
to the hidden layer.
"""
import logging

import numpy
from scipy.special import expit


_logger_name = __name__.rsplit('.', 1)[-1]
logger = logging.getLogger(_logger_name)

# Weights are drawn uniformly from (-INIT_RANGE, INIT_RANGE)
INIT_RANGE = 0.5


def sigmoid(x):
    """ The logistic function, 1 / (1 + exp(-x))
    """
    return expit(x)


def sigmoid_derivative(y):
    """ Derivative of the sigmoid expressed in terms of its output.

    Note
    ----
    `y` must already be a sigmoid output, i.e., `y = sigmoid(x)`. The
    sigmoid is not re-applied here.
    """
    return y * (1.0 - y)


class NeuralNetwork(object):
    """
    Single hidden layer neural network with sigmoid activations.

    params: weights_input_hidden, where w[i,j] = weight from input i
                to hidden unit j.
            weights_hidden_output, where w[j,k] = weight from hidden unit j
                to output unit k.

    For a single vector input, the computation chain is:
    hidden = sigmoid( dot(input, weights_input_hidden) )
    output = sigmoid( dot(hidden, weights_hidden_output) )

    The activations from the most recent forward pass are kept in
    `hidden_layer` and `output_layer`. The network mutates these and
    its weights in place, so an instance should be used by a single
    caller at a time.
    """
    def __init__(self, n_input, n_hidden, n_output, learning_rate,
                 dropout_rate=0.0, random_state=None):
        """
        Parameters
        ----------
        n_input: int
            Number of input units.

        n_hidden: int
            Number of hidden units.

        n_output: int
            Number of output units.

        learning_rate: float
            The gradient descent step size used by `train`.

        dropout_rate: float, default=0.0
            Probability in [0, 1) that a hidden unit is zeroed during a
            training step. Zero disables dropout.

        random_state: numpy.random.RandomState, default=None
            Provide a RandomState object for reproducible results. It is
            used both for the weight initialization and the dropout draws.
        """
        for name, size in (('n_input', n_input),
                           ('n_hidden', n_hidden),
                           ('n_output', n_output)):
            if (isinstance(size, bool) or
                    not isinstance(size, (int, numpy.integer))):
                msg = "`{}` should be an int but was {}"
                raise TypeError(msg.format(name, type(size)))
            if size < 1:
                msg = "`{}` must be positive (got {})"
                raise ValueError(msg.format(name, size))

        if not learning_rate > 0:
            msg = "`learning_rate` must be positive (got {})"
            raise ValueError(msg.format(learning_rate))

        if not 0 <= dropout_rate < 1:
            msg = "`dropout_rate` must be in [0, 1) (got {})"
            raise ValueError(msg.format(dropout_rate))

        if random_state is None:
            random_state = numpy.random.RandomState()
        elif not isinstance(random_state, numpy.random.RandomState):
            msg = "`random_state` ({}) not instance numpy.random.RandomState"
            raise TypeError(msg.format(type(random_state)))

        self.n_input = int(n_input)
        self.n_hidden = int(n_hidden)
        self.n_output = int(n_output)
        self.learning_rate = float(learning_rate)
        self.dropout_rate = float(dropout_rate)
        self.random_state = random_state

        self.hidden_layer = numpy.zeros(self.n_hidden)
        self.output_layer = numpy.zeros(self.n_output)

        self.randomize_params()

        msg = ("Created network with {} inputs, {} hidden units, {} outputs, "
               "learning rate {} and dropout rate {}")
        logger.debug(msg.format(self.n_input, self.n_hidden, self.n_output,
                                self.learning_rate, self.dropout_rate))

    def __repr__(self):
        return "<NeuralNetwork n_input=%d, n_hidden=%d, n_output=%d>" % (
            self.n_input, self.n_hidden, self.n_output)

    def randomize_params(self):
        """
        Draw every weight independently and uniformly from
        (-INIT_RANGE, INIT_RANGE).
        """
        self.weights_input_hidden = self.random_state.uniform(
            -INIT_RANGE, INIT_RANGE, size=(self.n_input, self.n_hidden))
        self.weights_hidden_output = self.random_state.uniform(
            -INIT_RANGE, INIT_RANGE, size=(self.n_hidden, self.n_output))

    def get_params(self, flat=False):
        """
        Parameters
        ----------
        flat: bool, default=False
            If True, the parameters are flattened into a single array.

        Returns
        -------
        params: list or array
            If `flat` is False (default), then copies of the parameters are
            returned as [weights_input_hidden, weights_hidden_output].
            Otherwise, these are flattened into a single array and returned.
        """
        params = [self.weights_input_hidden.copy(),
                  self.weights_hidden_output.copy()]
        if flat:
            return numpy.hstack([p.flatten() for p in params])
        else:
            return params

    def set_params(self, weights_input_hidden, weights_hidden_output):
        """
        Set the parameter values to those provided in the arguments.
        """
        weights_input_hidden = numpy.array(weights_input_hidden, dtype=float)
        weights_hidden_output = numpy.array(weights_hidden_output,
                                            dtype=float)

        expected_shape = (self.n_input, self.n_hidden)
        if weights_input_hidden.shape != expected_shape:
            msg = "`weights_input_hidden` was shape {} but should be {}"
            raise ValueError(msg.format(weights_input_hidden.shape,
                                        expected_shape))

        expected_shape = (self.n_hidden, self.n_output)
        if weights_hidden_output.shape != expected_shape:
            msg = "`weights_hidden_output` was shape {} but should be {}"
            raise ValueError(msg.format(weights_hidden_output.shape,
                                        expected_shape))

        self.weights_input_hidden = weights_input_hidden
        self.weights_hidden_output = weights_hidden_output

    def _validate_vector(self, name, values, size):
        values = numpy.asarray(values, dtype=float)
        if values.shape != (size,):
            msg = "`{}` was shape {} but should be ({},)"
            raise ValueError(msg.format(name, values.shape, size))
        return values

    def feed_forward(self, inputs):
        """
        Parameters
        ----------
        inputs: array-like, shape=(n_input,)
            A single input vector.

        Returns
        -------
        output: ndarray, shape=(n_output,)
            A copy of the output layer activations, each in (0, 1).
        """
        inputs = self._validate_vector('inputs', inputs, self.n_input)
        self._forward(inputs)
        return self.output_layer.copy()

    # The adapter layer only knows about `train` and `predict`.
    predict = feed_forward

    def _forward(self, inputs):
        self.hidden_layer = sigmoid(
            numpy.dot(inputs, self.weights_input_hidden))
        self.output_layer = sigmoid(
            numpy.dot(self.hidden_layer, self.weights_hidden_output))

    def apply_dropout(self, layer):
        """
        Zero each entry of `layer` (in place) with probability
        `dropout_rate`. Surviving activations are not rescaled.

        Returns
        -------
        dropped: ndarray, dtype=bool
            Indicator of which entries were zeroed.
        """
        dropped = self.random_state.rand(layer.shape[0]) < self.dropout_rate
        layer[dropped] = 0.0
        return dropped

    def train(self, inputs, expected_outputs):
        """
        Run a single gradient descent step on one (input, target) pair.

        Parameters
        ----------
        inputs: array-like, shape=(n_input,)
            The input vector.

        expected_outputs: array-like, shape=(n_output,)
            The target output, which should lie in (0, 1).
        """
        inputs = self._validate_vector('inputs', inputs, self.n_input)
        expected_outputs = self._validate_vector(
            'expected_outputs', expected_outputs, self.n_output)

        self._forward(inputs)

        output_errors = expected_outputs - self.output_layer

        # Back-propagated through the weights *before* they are updated.
        # The sigmoid derivative is applied in the weight update below.
        hidden_errors = numpy.dot(self.weights_hidden_output, output_errors)

        # Dropout zeroes the stored hidden activations, so both updates
        # below see the dropped units as zero. A dropped unit therefore
        # gets sigmoid_derivative(0) = 0 for its incoming weights too.
        if self.dropout_rate > 0:
            self.apply_dropout(self.hidden_layer)

        self.weights_hidden_output += self.learning_rate * numpy.outer(
            self.hidden_layer,
            output_errors * sigmoid_derivative(self.output_layer))

        self.weights_input_hidden += self.learning_rate * numpy.outer(
            inputs,
            hidden_errors * sigmoid_derivative(self.hidden_layer))
