import numpy

from renn.normalizer.normalizer_base import NormalizerBase


class MinMaxNormalizer(NormalizerBase):
    """ Reversible min-max scaling, (x - min) / (max - min)

    Values outside of [min, max] are mapped linearly outside of [0, 1];
    nothing is clipped.
    """

    def __init__(self, minimum, maximum):
        """ Initialize a min-max normalizer

        Parameters
        ----------
        minimum: float or array-like
            The raw value(s) that map to 0.

        maximum: float or array-like
            The raw value(s) that map to 1. Must be strictly larger than
            `minimum` in every component.

        """
        minimum = numpy.array(minimum, dtype=float)
        maximum = numpy.array(maximum, dtype=float)

        if minimum.shape != maximum.shape:
            msg = "`minimum` shape {} does not match `maximum` shape {}"
            raise ValueError(msg.format(minimum.shape, maximum.shape))

        if (maximum <= minimum).any():
            msg = "`maximum` ({}) must be greater than `minimum` ({})"
            raise ValueError(msg.format(maximum, minimum))

        self.minimum = minimum
        self.maximum = maximum

    def __repr__(self):
        return "<{} minimum={}, maximum={}>".format(
            self.__class__.__name__, self.minimum, self.maximum)

    @property
    def span(self):
        return self.maximum - self.minimum

    def transform(self, arr):
        return numpy.asarray((arr - self.minimum) / self.span)

    def inverse_transform(self, arr):
        return numpy.asarray(arr * self.span + self.minimum)


class FeatureNormalizer(MinMaxNormalizer):
    """ Min-max scaling with separate bounds for each feature. Accepts a
    single feature vector or an array with a feature vector in each row.
    """

    def __init__(self, feature_min, feature_max):
        super().__init__(minimum=feature_min, maximum=feature_max)

        if self.minimum.ndim != 1:
            msg = "Feature bounds should be 1d but were shape {}"
            raise ValueError(msg.format(self.minimum.shape))

    @property
    def n_features(self):
        return self.minimum.shape[0]

    def _apply(self, func, values):
        arr = numpy.asarray(values, dtype=float)

        if arr.ndim not in (1, 2) or arr.shape[-1] != self.n_features:
            msg = "Features were shape {} but should have {} columns"
            raise ValueError(msg.format(arr.shape, self.n_features))

        return super()._apply(func, arr)


class PriceNormalizer(MinMaxNormalizer):
    """ Min-max scaling of prices. A single float price gives back a
    float; an array of prices gives back an array.
    """

    def __init__(self, price_min, price_max):
        super().__init__(minimum=price_min, maximum=price_max)

        if self.minimum.ndim != 0:
            msg = "Price bounds should be scalars but were shape {}"
            raise ValueError(msg.format(self.minimum.shape))
