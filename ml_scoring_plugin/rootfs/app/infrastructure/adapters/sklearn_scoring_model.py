"""Shared base for scikit-learn scoring adapters.

Row preparation and error translation common to every scikit-learn backed
IScoringModel variant.
"""

import logging
from typing import Any

import numpy as np
from domain.interfaces import (
    Instance,
    Instances,
    IScoringModel,
    NotBatchCapableError,
    NotIncrementalError,
    ScoringError,
)

_LOGGER = logging.getLogger(__name__)


class SklearnScoringModel(IScoringModel):
    """Base class for scorers wrapping scikit-learn estimators.

    Rows are numeric vectors laid out like the header. When the header has a
    class attribute, its slot is removed before the row reaches the model.
    """

    def __init__(self, model: Any) -> None:
        super().__init__(model)
        self._incremental = callable(getattr(model, "partial_fit", None))
        self._batch_capable = callable(getattr(model, "predict", None))

    def is_incremental(self) -> bool:
        return self._incremental

    def is_batch_capable(self) -> bool:
        return self._batch_capable

    def _check_batch(self, operation: str) -> None:
        self._ensure_open()
        if not self._batch_capable:
            raise NotBatchCapableError(
                f"{type(self._model).__name__} cannot score in batches; "
                f"check is_batch_capable() before calling {operation}"
            )

    def _check_incremental(self) -> None:
        self._ensure_open()
        if not self._incremental:
            raise NotIncrementalError(
                f"{type(self._model).__name__} cannot be updated incrementally"
            )

    def _class_index(self) -> int | None:
        header = self.get_header()
        return header.class_index if header is not None else None

    def _row(self, instance: Instance) -> np.ndarray:
        """Convert one row into a (1, n_features) matrix."""
        row = np.asarray(instance, dtype=float)
        if row.ndim != 1:
            raise ScoringError(f"Expected a single row, got shape {row.shape}")
        class_index = self._class_index()
        if class_index is not None:
            row = np.delete(row, class_index)
        return row.reshape(1, -1)

    def _rows(self, instances: Instances) -> np.ndarray:
        """Convert rows into an (n_rows, n_features) matrix."""
        matrix = np.asarray(instances, dtype=float)
        if matrix.ndim != 2:
            raise ScoringError(f"Expected a 2-D batch of rows, got shape {matrix.shape}")
        class_index = self._class_index()
        if class_index is not None:
            matrix = np.delete(matrix, class_index, axis=1)
        return matrix

    def _scoring_failed(self, operation: str, error: Exception) -> ScoringError:
        _LOGGER.debug("%s failed for %s: %s", operation, type(self._model).__name__, error)
        return ScoringError(
            f"{operation} failed for {type(self._model).__name__}: {error}"
        )

    @staticmethod
    def _one_hot(index: int, size: int) -> list[float]:
        dist = [0.0] * size
        dist[index] = 1.0
        return dist
