import numpy as np
import matplotlib.pyplot as plt


def plot_error_history(error_history, ax=None, **line_kwargs):
    """ Plot the training error recorded by
    :meth:`renn.core.model.RealEstateNeuralNetwork.train`

    Parameters
    ----------
    error_history: list of (int, float)
        The (epoch, error) pairs. The x axis counts completed epochs, so
        the error before training (epoch -1) is drawn at zero.

    ax: matplotlib.axes.Axes, default=None
        The axis to draw on. The default creates a new figure.

    line_kwargs: args
        Any keyword arguments that can be passed to `matplotlib.pyplot.plot`.

    Returns
    -------
    ax: matplotlib.axes.Axes
    """
    if len(error_history) == 0:
        raise ValueError("`error_history` is empty.")

    history = np.array(error_history, dtype=float)
    if history.ndim != 2 or history.shape[1] != 2:
        raise ValueError("`error_history` must be a list of (epoch, error).")

    epochs = history[:, 0] + 1
    errors = history[:, 1]

    if ax is None:
        fig = plt.figure(figsize=(6, 4))
        ax = fig.add_subplot(111)

    kwargs = line_kwargs or dict(c='b', ls='-', lw=2, marker='o')
    ax.plot(epochs, errors, **kwargs)

    ax.set_xlabel('Epoch')
    ax.set_ylabel('Mean absolute error (normalized)')
    ax.set_title('Training error')

    return ax
