"""Scoring result value object.

Immutable data structure for the output of a scoring run.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringResult:
    """Predictions produced by one scoring run.

    Attributes:
        model_id: Identifier of the model used
        predictions: One prediction per scored row
        distributions: One distribution per row, when requested
        batched: Whether rows were scored in batches
    """

    model_id: str
    predictions: tuple[float, ...]
    distributions: tuple[tuple[float, ...], ...] | None = None
    batched: bool = False

    def __post_init__(self) -> None:
        """Validate scoring result values."""
        if not self.model_id:
            raise ValueError("model_id cannot be empty")
        if self.distributions is not None and len(self.distributions) != len(
            self.predictions
        ):
            raise ValueError(
                f"distributions has {len(self.distributions)} rows, "
                f"expected {len(self.predictions)}"
            )

    @property
    def size(self) -> int:
        return len(self.predictions)
