import numpy
from sklearn.metrics import mean_absolute_percentage_error as _sk_mape


def mean_absolute_error(predicted, expected):
    """ Compute the average, over examples, of the summed absolute
    difference between predicted and expected outputs. Rows are examples
    and columns are output units.
    """
    predicted = numpy.atleast_2d(numpy.asarray(predicted, dtype=float))
    expected = numpy.atleast_2d(numpy.asarray(expected, dtype=float))

    if predicted.shape != expected.shape:
        msg = "`predicted` shape {} does not match `expected` shape {}"
        raise ValueError(msg.format(predicted.shape, expected.shape))

    return numpy.abs(expected - predicted).sum(axis=1).mean()


def mean_absolute_percentage_error(estimated, actual):
    """ Compute the mean absolute percentage error (in percent, so
    10.0 means 10%) of `estimated` with respect to `actual`
    """
    estimated = numpy.asarray(estimated, dtype=float)
    actual = numpy.asarray(actual, dtype=float)

    if estimated.shape != actual.shape:
        msg = "`estimated` shape {} does not match `actual` shape {}"
        raise ValueError(msg.format(estimated.shape, actual.shape))

    if (actual == 0).any():
        raise ValueError("`actual` contains zeros")

    return 100.0 * _sk_mape(actual, estimated)
