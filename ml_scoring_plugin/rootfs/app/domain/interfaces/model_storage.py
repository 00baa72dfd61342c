"""Model storage interface.

Contract for retrieving models to score with.
"""

from abc import ABC, abstractmethod
from typing import Any

from domain.value_objects import DatasetHeader


class IModelStorage(ABC):
    """Contract for model persistence operations."""

    @abstractmethod
    def save_model(
        self,
        model_id: str,
        model: Any,
        header: DatasetHeader | None = None,
    ) -> None:
        """Save a model and its header.

        Args:
            model_id: Unique identifier for the model
            model: The model object
            header: Header of the data the model was trained on

        Raises:
            StorageError: If saving fails
        """
        pass

    @abstractmethod
    def load_model(self, model_id: str) -> tuple[Any, DatasetHeader | None]:
        """Load a model from storage.

        Args:
            model_id: Identifier of the model to load

        Returns:
            Tuple of (model object, header or None)

        Raises:
            ModelNotFoundError: If model doesn't exist
            StorageError: If loading fails
        """
        pass

    @abstractmethod
    def list_models(self) -> list[str]:
        """List the identifiers of stored models."""
        pass
