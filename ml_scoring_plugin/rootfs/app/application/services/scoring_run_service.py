"""Scoring run service.

Application service that scores rows with a stored model, the way a
pipeline step uses the plugin.
"""

import logging
from typing import Any, Callable

from domain.interfaces import Instances, IModelStorage, IScoringModel
from domain.value_objects import ScoringResult

_LOGGER = logging.getLogger(__name__)

ScorerFactory = Callable[[Any], IScoringModel]


class ScoringRunService:
    """Runs scoring passes over rows of tabular data.

    Each run creates a scorer, attaches the stored header and the step log,
    scores the rows, and always closes the scorer with done().
    """

    def __init__(
        self,
        storage: IModelStorage,
        scorer_factory: ScorerFactory,
        batch_size: int = 100,
    ) -> None:
        """Initialize the scoring run service.

        Args:
            storage: Model storage implementation
            scorer_factory: Builds the scorer variant for a model
            batch_size: Rows per batch for batch-capable scorers
        """
        if batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {batch_size}")
        self._storage = storage
        self._scorer_factory = scorer_factory
        self._batch_size = batch_size

    def open_scorer(
        self, model_id: str, log: logging.Logger | None = None
    ) -> IScoringModel:
        """Load a model and wrap it in a scorer ready for scoring calls.

        Raises:
            ModelNotFoundError: If the model doesn't exist
            UnsupportedModelTypeError: If the model cannot be wrapped
        """
        model, header = self._storage.load_model(model_id)
        scorer = self._scorer_factory(model)
        scorer.set_header(header)
        scorer.set_log(log or _LOGGER)
        return scorer

    def score_rows(
        self,
        model_id: str,
        rows: Instances,
        with_distribution: bool = False,
        log: logging.Logger | None = None,
    ) -> ScoringResult:
        """Score rows with a stored model.

        Batch-capable scorers get the rows in batches, other scorers one row
        at a time.

        Args:
            model_id: Identifier of the stored model
            rows: Rows laid out like the model's header
            with_distribution: Also compute one distribution per row
            log: Log of the calling step

        Returns:
            ScoringResult with one prediction per row

        Raises:
            ScoringError: If scoring any row fails
        """
        scorer = self.open_scorer(model_id, log)
        try:
            rows = list(rows)
            batched = scorer.is_batch_capable()
            if batched:
                predictions, distributions = self._score_batches(
                    scorer, rows, with_distribution
                )
            else:
                predictions = [scorer.classify(row) for row in rows]
                distributions = (
                    [scorer.distribution(row) for row in rows]
                    if with_distribution
                    else None
                )
        finally:
            scorer.done()

        _LOGGER.info(
            "Scored %d rows with model %s (%s)",
            len(predictions),
            model_id,
            "batched" if batched else "row by row",
        )
        return ScoringResult(
            model_id=model_id,
            predictions=tuple(predictions),
            distributions=(
                tuple(tuple(d) for d in distributions)
                if distributions is not None
                else None
            ),
            batched=batched,
        )

    def update_model(self, model_id: str, rows: Instances) -> int:
        """Incrementally update a stored model with rows and save it back.

        Returns:
            Number of rows the model was updated with

        Raises:
            NotIncrementalError: If the model cannot be updated incrementally
            ScoringError: If an update step fails
        """
        scorer = self.open_scorer(model_id)
        try:
            updated = sum(1 for row in rows if scorer.update(row))
        finally:
            scorer.done()

        self._storage.save_model(model_id, scorer.get_model(), scorer.get_header())
        _LOGGER.info("Updated model %s with %d rows", model_id, updated)
        return updated

    def _score_batches(
        self,
        scorer: IScoringModel,
        rows: list,
        with_distribution: bool,
    ) -> tuple[list[float], list[list[float]] | None]:
        predictions: list[float] = []
        distributions: list[list[float]] | None = [] if with_distribution else None
        for start in range(0, len(rows), self._batch_size):
            batch = rows[start : start + self._batch_size]
            predictions.extend(scorer.batch_classify(batch))
            if distributions is not None:
                distributions.extend(scorer.batch_distribution(batch))
        return predictions, distributions
