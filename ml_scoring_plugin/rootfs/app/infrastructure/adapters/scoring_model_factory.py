"""Scoring model factory.

Picks the IScoringModel variant for a wrapped model from its capability.
"""

import logging
from typing import Any

from domain.interfaces import IScoringModel, UnsupportedModelTypeError
from domain.value_objects import ModelCapability
from sklearn.base import BaseEstimator
from sklearn.utils import get_tags

from .sklearn_scoring_classifier import SklearnScoringClassifier
from .sklearn_scoring_clusterer import SklearnScoringClusterer

_LOGGER = logging.getLogger(__name__)

_DENSITY_ESTIMATOR_TYPES = ("density_estimator", "DensityEstimator")

_SCORERS: dict[ModelCapability, type[IScoringModel]] = {
    ModelCapability.SUPERVISED: SklearnScoringClassifier,
    ModelCapability.GROUPING: SklearnScoringClusterer,
}


def _qualified_name(model: Any) -> str:
    model_type = type(model)
    return f"{model_type.__module__}.{model_type.__qualname__}"


def detect_capability(model: Any) -> ModelCapability:
    """Work out what kind of model is being wrapped.

    scikit-learn estimators are classified from their tags; other objects
    from their _estimator_type attribute. Mixture models with membership
    probabilities count as grouping models.
    """
    if isinstance(model, BaseEstimator):
        estimator_type = get_tags(model).estimator_type
    else:
        estimator_type = getattr(model, "_estimator_type", None)

    if estimator_type in ("classifier", "regressor"):
        return ModelCapability.SUPERVISED
    if estimator_type == "clusterer":
        return ModelCapability.GROUPING
    # Mixture models report as density estimators but assign memberships
    if estimator_type in _DENSITY_ESTIMATOR_TYPES and callable(
        getattr(model, "predict_proba", None)
    ):
        return ModelCapability.GROUPING
    return ModelCapability.UNSUPPORTED


def create_scorer(model: Any) -> IScoringModel:
    """Create the scorer variant matching a model.

    Args:
        model: The model to wrap

    Returns:
        Classifier scorer for supervised models, clusterer scorer for
        grouping models

    Raises:
        UnsupportedModelTypeError: If the model has neither capability
    """
    capability = detect_capability(model)
    scorer_cls = _SCORERS.get(capability)
    if scorer_cls is None:
        raise UnsupportedModelTypeError(f"Unsupported model type: {_qualified_name(model)}")

    _LOGGER.debug("Wrapping %s as %s", _qualified_name(model), capability.value)
    return scorer_cls(model)
