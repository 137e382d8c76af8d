# flake8: noqa

from .normalizer_base import NormalizerBase

from .provided.min_max import (
    FeatureNormalizer,
    MinMaxNormalizer,
    PriceNormalizer,
)
