"""Infrastructure adapters for the scoring plugin.

These adapters implement domain interfaces using external libraries
like scikit-learn, requests, pip and file system storage.
"""

from .file_model_storage import FileModelStorage, ModelNotFoundError, StorageError
from .importlib_package_registry import (
    EXTENSION_ENTRY_POINT_GROUP,
    ImportlibPackageRegistry,
)
from .pypi_package_repository import PyPIPackageRepository
from .scoring_model_factory import create_scorer, detect_capability
from .sklearn_scoring_classifier import SklearnScoringClassifier
from .sklearn_scoring_clusterer import SklearnScoringClusterer

__all__ = [
    "EXTENSION_ENTRY_POINT_GROUP",
    "FileModelStorage",
    "ImportlibPackageRegistry",
    "ModelNotFoundError",
    "PyPIPackageRepository",
    "SklearnScoringClassifier",
    "SklearnScoringClusterer",
    "StorageError",
    "create_scorer",
    "detect_capability",
]
