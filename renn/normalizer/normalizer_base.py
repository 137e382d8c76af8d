import abc

import numpy


class NormalizerBase(abc.ABC):
    """ The abstract base class for reversible normalizers that map raw
    domain values to and from the range the network works in.
    """

    def __call__(self, values):
        return self.normalize(values)

    def normalize(self, values):
        """ Map raw `values` into the normalized range. Scalars in give
        scalars out; arrays give arrays.
        """
        return self._apply(self.transform, values)

    def denormalize(self, values):
        """ Map normalized `values` back into raw domain units
        """
        return self._apply(self.inverse_transform, values)

    def _apply(self, func, values):
        arr = numpy.asarray(values, dtype=float)

        if not numpy.isfinite(arr).all():
            msg = "Non-finite values encountered: {}"
            raise ValueError(msg.format(values))

        result = func(arr)

        # Arithmetic on 0d arrays gives numpy scalars
        if isinstance(result, numpy.generic):
            result = numpy.asarray(result)

        if not isinstance(result, numpy.ndarray):
            msg = "Returned values were type {} but should be numpy.ndarray"
            raise TypeError(msg.format(type(result)))

        if result.shape != arr.shape:
            msg = "Returned values were shape {} but should be {}"
            raise ValueError(msg.format(result.shape, arr.shape))

        if result.ndim == 0:
            return float(result)
        return result

    @abc.abstractmethod
    def transform(self, arr):
        raise NotImplementedError

    @abc.abstractmethod
    def inverse_transform(self, arr):
        raise NotImplementedError
