"""Domain interfaces for the scoring plugin.

Interfaces define contracts between the domain and infrastructure layers.
The domain depends on these abstractions, not on concrete implementations.
"""

from .lifecycle_listener import ILifecycleListener
from .model_storage import IModelStorage
from .package_registry import IInstalledPackageRegistry
from .package_repository import (
    IPackageRepository,
    OutputSink,
    PackageInstallError,
    RepositoryUnavailableError,
)
from .scoring_model import (
    Instance,
    Instances,
    IScoringModel,
    NotBatchCapableError,
    NotIncrementalError,
    ScorerClosedError,
    ScoringError,
    UnsupportedModelTypeError,
)

__all__ = [
    "ILifecycleListener",
    "IInstalledPackageRegistry",
    "IModelStorage",
    "Instance",
    "Instances",
    "IPackageRepository",
    "IScoringModel",
    "NotBatchCapableError",
    "NotIncrementalError",
    "OutputSink",
    "PackageInstallError",
    "RepositoryUnavailableError",
    "ScorerClosedError",
    "ScoringError",
    "UnsupportedModelTypeError",
]
