# flake8: noqa

from ._version import version as __version__

from .core.model import RealEstateNeuralNetwork
from .neural_network import NeuralNetwork
