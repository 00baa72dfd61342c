"""Model capability tag.

Closed set of model kinds the scoring layer can wrap.
"""

from enum import Enum


class ModelCapability(str, Enum):
    """Capability of a wrapped model, fixed when its scorer is created.

    Attributes:
        SUPERVISED: Predicts a target (classifiers and regressors)
        GROUPING: Assigns rows to clusters
        UNSUPPORTED: Neither capability
    """

    SUPERVISED = "supervised"
    GROUPING = "grouping"
    UNSUPPORTED = "unsupported"
