"""Scoring plugin entry points.

Wires domain services to infrastructure adapters from environment
configuration and exposes the lifecycle hooks the hosting ETL engine calls.
"""

import logging
import os
from pathlib import Path

from application.services import ScoringLifecycleListener, ScoringRunService
from domain.services import DependencyInstaller
from domain.value_objects import InstallerConfig
from infrastructure.adapters import (
    FileModelStorage,
    ImportlibPackageRegistry,
    PyPIPackageRepository,
    create_scorer,
)

_LOGGER = logging.getLogger(__name__)

_listener: ScoringLifecycleListener | None = None


def create_lifecycle_listener(
    config: InstallerConfig | None = None,
) -> ScoringLifecycleListener:
    """Build a lifecycle listener backed by PyPI and the local environment.

    Args:
        config: Startup configuration (defaults to environment variables)
    """
    config = config or InstallerConfig.from_env()
    registry = ImportlibPackageRegistry(base_distribution=config.base_distribution)
    repository = PyPIPackageRepository(
        base_distribution=config.base_distribution,
        base_version=registry.get_base_version(),
        index_url=config.index_url,
        timeout=config.timeout_seconds,
    )
    installer = DependencyInstaller(repository, registry)
    return ScoringLifecycleListener(config, installer)


def create_scoring_service(model_path: str | Path | None = None) -> ScoringRunService:
    """Build a scoring service reading models from file storage.

    Args:
        model_path: Model directory (defaults to MODEL_PERSISTENCE_PATH)
    """
    if model_path is None:
        model_path = os.getenv("MODEL_PERSISTENCE_PATH", "/data/models")
    return ScoringRunService(FileModelStorage(model_path), create_scorer)


def on_init() -> None:
    """Environment init hook, called once by the host."""
    global _listener
    if _listener is None:
        try:
            _listener = create_lifecycle_listener()
        except Exception as e:
            _LOGGER.error("Failed to set up scoring plugin startup: %s", e)
            return
    _listener.on_init()


def on_shutdown() -> None:
    """Environment shutdown hook, called once by the host."""
    if _listener is not None:
        _listener.on_shutdown()
