"""Integration tests for scoring runs over stored models."""

import logging
from unittest.mock import Mock

import numpy as np
import pytest
from application.services import ScoringRunService
from domain.interfaces import NotIncrementalError, UnsupportedModelTypeError
from infrastructure.adapters import FileModelStorage, ModelNotFoundError, create_scorer
from infrastructure.host import create_scoring_service


class TestScoringRunService:
    """Test scoring rows with models loaded from storage."""

    def test_batch_scoring_with_classifier(
        self, storage: FileModelStorage, rows: list[list[float]]
    ) -> None:
        """Test that a batch-capable classifier scores rows in batches."""
        service = ScoringRunService(storage, create_scorer, batch_size=3)

        result = service.score_rows("logistic", rows, with_distribution=True)

        # classes_ sorts to ("high", "low")
        assert result.predictions == (1.0, 1.0, 1.0, 1.0, 0.0, 0.0, 0.0, 0.0)
        assert result.batched is True
        assert len(result.distributions) == 8
        assert all(sum(d) == pytest.approx(1.0) for d in result.distributions)

    def test_scoring_with_clusterer(
        self, storage: FileModelStorage, rows: list[list[float]]
    ) -> None:
        service = ScoringRunService(storage, create_scorer)

        result = service.score_rows("kmeans", [row[1:] for row in rows])

        assert len(set(result.predictions[:4])) == 1
        assert len(set(result.predictions[4:])) == 1
        assert result.predictions[0] != result.predictions[4]
        assert result.distributions is None

    def test_scorer_is_closed_after_run(self, storage: FileModelStorage, rows) -> None:
        """Test that done() is called even when scoring fails."""
        scorer = Mock()
        scorer.is_batch_capable.return_value = True
        scorer.batch_classify.side_effect = RuntimeError("bad row")
        service = ScoringRunService(storage, lambda model: scorer)

        with pytest.raises(RuntimeError):
            service.score_rows("logistic", rows)

        scorer.done.assert_called_once()

    def test_non_batch_scorer_scores_row_by_row(self, storage: FileModelStorage, rows) -> None:
        scorer = Mock()
        scorer.is_batch_capable.return_value = False
        scorer.classify.return_value = 1.0
        scorer.distribution.return_value = [0.0, 1.0]
        service = ScoringRunService(storage, lambda model: scorer)

        result = service.score_rows("logistic", rows[:2], with_distribution=True)

        assert result.batched is False
        assert result.predictions == (1.0, 1.0)
        assert result.distributions == ((0.0, 1.0), (0.0, 1.0))
        scorer.batch_classify.assert_not_called()

    def test_header_and_log_attached(self, storage: FileModelStorage, labelled_header) -> None:
        service = ScoringRunService(storage, create_scorer)
        log = logging.getLogger("etl.step")

        scorer = service.open_scorer("logistic", log)

        assert scorer.get_header() == labelled_header
        scorer.done()

    def test_missing_model(self, storage: FileModelStorage, rows) -> None:
        service = ScoringRunService(storage, create_scorer)

        with pytest.raises(ModelNotFoundError):
            service.score_rows("missing", rows)

    def test_unsupported_model(self, storage: FileModelStorage, rows) -> None:
        storage.save_model("not-a-model", {"weights": [1.0]})
        service = ScoringRunService(storage, create_scorer)

        with pytest.raises(UnsupportedModelTypeError, match="builtins.dict"):
            service.score_rows("not-a-model", rows)

    def test_update_model_saves_updated_model(
        self, storage: FileModelStorage, rows: list[list[float]]
    ) -> None:
        """Test incremental updates are persisted back to storage."""
        before, _ = storage.load_model("sgd")
        service = ScoringRunService(storage, create_scorer)
        labelled = [[1.0, 0.0, 0.0], [0.0, 3.0, 3.0], rows[0]]

        updated = service.update_model("sgd", labelled)

        after, header = storage.load_model("sgd")
        assert updated == 2
        assert header.class_index == 0
        assert not np.array_equal(after.coef_, before.coef_)

    def test_update_model_rejects_non_incremental(self, storage: FileModelStorage) -> None:
        service = ScoringRunService(storage, create_scorer)

        with pytest.raises(NotIncrementalError):
            service.update_model("logistic", [[0.0, 1.0, 1.0]])

    def test_invalid_batch_size(self, storage: FileModelStorage) -> None:
        with pytest.raises(ValueError, match="batch_size must be at least 1"):
            ScoringRunService(storage, create_scorer, batch_size=0)

    def test_create_scoring_service_uses_model_path(
        self, storage: FileModelStorage, temp_model_dir, rows
    ) -> None:
        service = create_scoring_service(temp_model_dir)

        assert service.score_rows("logistic", rows[:1]).predictions == (1.0,)
