"""File-based model storage adapter.

Infrastructure adapter that implements IModelStorage using file system.
"""

import json
import logging
import pickle
from pathlib import Path
from typing import Any

from domain.interfaces import IModelStorage
from domain.value_objects import DatasetHeader

_LOGGER = logging.getLogger(__name__)


class ModelNotFoundError(Exception):
    """Raised when a model is not found in storage."""

    pass


class StorageError(Exception):
    """Raised when a storage operation fails."""

    pass


class FileModelStorage(IModelStorage):
    """File-based implementation of model storage.

    Each model is a pickle file, with its header in a JSON file beside it.
    """

    MODEL_FILE_SUFFIX = ".pkl"
    HEADER_FILE_SUFFIX = "_header.json"

    def __init__(self, base_path: str | Path) -> None:
        """Initialize file-based storage.

        Args:
            base_path: Directory path for storing models
        """
        self._base_path = Path(base_path)
        self._base_path.mkdir(parents=True, exist_ok=True)

    def save_model(
        self,
        model_id: str,
        model: Any,
        header: DatasetHeader | None = None,
    ) -> None:
        """Save a model and its header to file storage.

        Args:
            model_id: Unique identifier for the model
            model: The model object
            header: Header of the training data (optional)
        """
        try:
            model_path = self._base_path / f"{model_id}{self.MODEL_FILE_SUFFIX}"
            with open(model_path, "wb") as f:
                pickle.dump(model, f)

            if header is not None:
                header_path = self._base_path / f"{model_id}{self.HEADER_FILE_SUFFIX}"
                with open(header_path, "w") as f:
                    json.dump(header.to_dict(), f, indent=2)

            _LOGGER.info("Model saved: %s", model_id)

        except (OSError, pickle.PickleError) as e:
            raise StorageError(f"Failed to save model {model_id}: {e}") from e

    def load_model(self, model_id: str) -> tuple[Any, DatasetHeader | None]:
        """Load a model and its header from file storage.

        Args:
            model_id: Identifier of the model to load

        Returns:
            Tuple of (model object, header or None if none was saved)
        """
        model_path = self._base_path / f"{model_id}{self.MODEL_FILE_SUFFIX}"
        header_path = self._base_path / f"{model_id}{self.HEADER_FILE_SUFFIX}"

        if not model_path.exists():
            raise ModelNotFoundError(f"Model not found: {model_id}")

        try:
            with open(model_path, "rb") as f:
                model = pickle.load(f)

            header = None
            if header_path.exists():
                with open(header_path) as f:
                    header = DatasetHeader.from_dict(json.load(f))

            _LOGGER.debug("Model loaded: %s", model_id)
            return model, header

        except (
            OSError,
            pickle.UnpicklingError,
            json.JSONDecodeError,
            KeyError,
            ValueError,
        ) as e:
            raise StorageError(f"Failed to load model {model_id}: {e}") from e

    def list_models(self) -> list[str]:
        """List stored model identifiers, sorted by name."""
        return sorted(
            path.name[: -len(self.MODEL_FILE_SUFFIX)]
            for path in self._base_path.glob(f"*{self.MODEL_FILE_SUFFIX}")
        )
