"""Scoring model interface.

Uniform scoring contract over the different kinds of wrapped ML model.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Sequence

from domain.value_objects import DatasetHeader, ModelCapability

Instance = Sequence[float]
Instances = Sequence[Sequence[float]]


class ScoringError(Exception):
    """Raised when the wrapped model fails to score or update."""

    pass


class ScorerClosedError(ScoringError):
    """Raised when a scorer is used after done() was called."""

    pass


class UnsupportedModelTypeError(Exception):
    """Raised when no scorer variant can wrap a model."""

    pass


class NotIncrementalError(Exception):
    """Raised when update() is called on a non-incremental scorer."""

    pass


class NotBatchCapableError(Exception):
    """Raised when a batch method is called on a scorer without batch support."""

    pass


class IScoringModel(ABC):
    """Contract for scoring rows with a wrapped model.

    A scorer is created for one scoring run: optionally given a header and a
    log, used for any number of scoring calls, then closed with done().
    Header consistency with the scored rows is the caller's responsibility.
    """

    capability: ModelCapability = ModelCapability.UNSUPPORTED

    def __init__(self, model: Any) -> None:
        """Initialize the scorer.

        Args:
            model: The wrapped model
        """
        self._model = model
        self._header: DatasetHeader | None = None
        self._log: logging.LoggerAdapter | None = None
        self._closed = False

    def get_model(self) -> Any:
        return self._model

    def set_header(self, header: DatasetHeader | None) -> None:
        """Attach the header of the data the model was trained on."""
        self._header = header

    def get_header(self) -> DatasetHeader | None:
        return self._header

    def set_log(self, logger: logging.Logger) -> None:
        """Pass a log on to the wrapped model.

        Only models exposing a callable set_log take a log; other models
        ignore it.

        Args:
            logger: Logger of the scoring step
        """
        model_set_log = getattr(self._model, "set_log", None)
        if not callable(model_set_log):
            return
        self._log = logging.LoggerAdapter(
            logger, {"model": type(self._model).__name__}
        )
        model_set_log(self._log)

    def is_done(self) -> bool:
        return self._closed

    def done(self) -> None:
        """Tell the scorer that the scoring run is finished."""
        if self._closed:
            return
        if self._log is not None:
            self._model.set_log(None)
            self._log = None
        self._closed = True

    def _ensure_open(self) -> None:
        if self._closed:
            raise ScorerClosedError(
                f"{type(self).__name__} was used after done() was called"
            )

    @abstractmethod
    def classify(self, instance: Instance) -> float:
        """Return a single prediction.

        What the value represents depends on the variant: a class index, a
        numeric prediction, or a cluster number.

        Raises:
            ScoringError: If the wrapped model fails
        """
        pass

    @abstractmethod
    def distribution(self, instance: Instance) -> list[float]:
        """Return a distribution over classes or clusters.

        Raises:
            ScoringError: If the wrapped model fails
        """
        pass

    @abstractmethod
    def batch_classify(self, instances: Instances) -> list[float]:
        """Return one prediction per row.

        Raises:
            NotBatchCapableError: If is_batch_capable() is False
            ScoringError: If the wrapped model fails
        """
        pass

    @abstractmethod
    def batch_distribution(self, instances: Instances) -> list[list[float]]:
        """Return one distribution per row.

        Raises:
            NotBatchCapableError: If is_batch_capable() is False
            ScoringError: If the wrapped model fails
        """
        pass

    @abstractmethod
    def is_supervised(self) -> bool:
        pass

    @abstractmethod
    def is_incremental(self) -> bool:
        pass

    @abstractmethod
    def is_batch_capable(self) -> bool:
        pass

    @abstractmethod
    def update(self, instance: Instance) -> bool:
        """Update the wrapped model with one row.

        Returns:
            True if the model was updated

        Raises:
            NotIncrementalError: If is_incremental() is False
            ScoringError: If the wrapped model fails
        """
        pass
