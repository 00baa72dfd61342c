"""Scikit-learn clusterer scoring adapter.

Infrastructure adapter that implements IScoringModel for scikit-learn
clustering estimators.
"""

import numpy as np
from domain.interfaces import Instance, Instances, ScoringError
from domain.value_objects import ModelCapability

from .sklearn_scoring_model import SklearnScoringModel


class SklearnScoringClusterer(SklearnScoringModel):
    """Scorer for grouping models.

    classify() returns the cluster number. distribution() returns the
    membership probabilities when the model has them, otherwise a one-hot
    vector over the clusters.
    """

    capability = ModelCapability.GROUPING

    def is_supervised(self) -> bool:
        return False

    @property
    def num_clusters(self) -> int:
        """Number of clusters the model assigns rows to."""
        for attr in ("n_clusters", "n_components"):
            value = getattr(self._model, attr, None)
            if isinstance(value, (int, np.integer)) and value > 0:
                return int(value)
        centers = getattr(self._model, "cluster_centers_", None)
        if centers is not None:
            return len(centers)
        raise ScoringError(
            f"Cannot determine the number of clusters of {type(self._model).__name__}"
        )

    def classify(self, instance: Instance) -> float:
        self._ensure_open()
        try:
            return self._assign(self._row(instance))[0]
        except ScoringError:
            raise
        except Exception as e:
            raise self._scoring_failed("classify", e) from e

    def distribution(self, instance: Instance) -> list[float]:
        self._ensure_open()
        try:
            return self._distributions(self._row(instance))[0]
        except ScoringError:
            raise
        except Exception as e:
            raise self._scoring_failed("distribution", e) from e

    def batch_classify(self, instances: Instances) -> list[float]:
        self._check_batch("batch_classify")
        try:
            return self._assign(self._rows(instances))
        except ScoringError:
            raise
        except Exception as e:
            raise self._scoring_failed("batch_classify", e) from e

    def batch_distribution(self, instances: Instances) -> list[list[float]]:
        self._check_batch("batch_distribution")
        try:
            return self._distributions(self._rows(instances))
        except ScoringError:
            raise
        except Exception as e:
            raise self._scoring_failed("batch_distribution", e) from e

    def update(self, instance: Instance) -> bool:
        self._check_incremental()
        try:
            self._model.partial_fit(self._row(instance))
        except Exception as e:
            raise self._scoring_failed("update", e) from e
        return True

    def _has_proba(self) -> bool:
        return callable(getattr(self._model, "predict_proba", None))

    def _assign(self, matrix: np.ndarray) -> list[float]:
        if callable(getattr(self._model, "predict", None)):
            labels = self._model.predict(matrix)
        elif self._has_proba():
            labels = np.argmax(self._model.predict_proba(matrix), axis=1)
        else:
            raise ScoringError(
                f"{type(self._model).__name__} cannot assign clusters to new rows"
            )
        return [float(label) for label in np.ravel(labels)]

    def _distributions(self, matrix: np.ndarray) -> list[list[float]]:
        if self._has_proba():
            return np.asarray(self._model.predict_proba(matrix), dtype=float).tolist()
        size = self.num_clusters
        return [self._one_hot(int(label), size) for label in self._assign(matrix)]
