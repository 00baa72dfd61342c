"""Scikit-learn classifier scoring adapter.

Infrastructure adapter that implements IScoringModel for supervised
scikit-learn estimators (classifiers and regressors).
"""

from typing import Any

import numpy as np
from domain.interfaces import Instance, Instances, ScoringError
from domain.value_objects import ModelCapability

from .sklearn_scoring_model import SklearnScoringModel


class SklearnScoringClassifier(SklearnScoringModel):
    """Scorer for supervised models.

    classify() returns the index of the predicted class in the model's
    classes_, or the predicted value for regressors. distribution() has one
    entry per class, or a single entry for regressors.

    Classifiers must be fitted before they are scored or updated. classes_
    is read from the model on each call, so a model fitted after wrapping
    is picked up.
    """

    capability = ModelCapability.SUPERVISED

    @property
    def _classes(self) -> np.ndarray | None:
        classes = getattr(self._model, "classes_", None)
        return None if classes is None else np.asarray(classes)

    @property
    def num_classes(self) -> int:
        return 1 if self._classes is None else len(self._classes)

    def is_supervised(self) -> bool:
        return True

    def classify(self, instance: Instance) -> float:
        self._ensure_open()
        try:
            prediction = self._model.predict(self._row(instance))
            return self._to_output(prediction)[0]
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
            return self._to_output(self._model.predict(self._rows(instances)))
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
        """Apply one partial_fit step with the row's class value.

        Rows with a missing class value are skipped. For classifiers the
        class value must be the index of a class in classes_.
        """
        self._check_incremental()
        class_index = self._class_index()
        if class_index is None:
            raise ScoringError("Updating a supervised model requires a header with a class index")

        try:
            target = np.asarray(instance, dtype=float)[class_index]
            if np.isnan(target):
                return False
            features = self._row(instance)
            classes = self._classes
            if classes is None:
                self._model.partial_fit(features, [target])
            else:
                label = self._class_label(classes, target)
                self._model.partial_fit(features, [label], classes=classes)
        except ScoringError:
            raise
        except Exception as e:
            raise self._scoring_failed("update", e) from e
        return True

    @staticmethod
    def _class_label(classes: np.ndarray, target: float) -> Any:
        if not float(target).is_integer() or not 0 <= target < len(classes):
            raise ScoringError(
                f"Class value {target} is not a class index in [0, {len(classes)})"
            )
        return classes[int(target)]

    def _to_output(self, predictions: np.ndarray) -> list[float]:
        classes = self._classes
        if classes is None:
            return [float(p) for p in np.ravel(predictions)]
        lookup = {label: i for i, label in enumerate(classes.tolist())}
        return [float(lookup[p]) for p in np.ravel(predictions).tolist()]

    def _distributions(self, matrix: np.ndarray) -> list[list[float]]:
        if self._classes is None:
            return [[value] for value in self._to_output(self._model.predict(matrix))]
        if callable(getattr(self._model, "predict_proba", None)):
            return np.asarray(self._model.predict_proba(matrix), dtype=float).tolist()
        return [
            self._one_hot(int(index), self.num_classes)
            for index in self._to_output(self._model.predict(matrix))
        ]
