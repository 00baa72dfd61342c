"""Installer configuration value object.

Explicit configuration handed to the plugin at construction time instead of
process-wide properties.
"""

import os
from dataclasses import dataclass

DEFAULT_PACKAGES: tuple[str, ...] = ("imbalanced-learn", "lightgbm", "catboost")
DEFAULT_TOOLKIT_ARCHIVE_HINT = "scikit_learn-1.6.1-py3-none-any.whl"
SUPPORTED_LOG_SINKS: tuple[str, ...] = ("console",)


@dataclass(frozen=True)
class InstallerConfig:
    """Configuration for plugin startup.

    Attributes:
        log_sink: Where plugin log output goes (only "console" is supported)
        toolkit_archive_hint: Fixed filename a downstream distributed engine
            uses to locate the toolkit archive
        index_url: Base URL of the PyPI-compatible package index
        base_distribution: Distribution name of the base ML toolkit
        packages: Extension packages to ensure, in processing order
        timeout_seconds: Timeout for each repository request
        log_level: Logging level name
    """

    log_sink: str = "console"
    toolkit_archive_hint: str = DEFAULT_TOOLKIT_ARCHIVE_HINT
    index_url: str = "https://pypi.org"
    base_distribution: str = "scikit-learn"
    packages: tuple[str, ...] = DEFAULT_PACKAGES
    timeout_seconds: int = 30
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.log_sink not in SUPPORTED_LOG_SINKS:
            raise ValueError(
                f"log_sink must be one of {', '.join(SUPPORTED_LOG_SINKS)}, "
                f"got {self.log_sink!r}"
            )
        if not self.toolkit_archive_hint:
            raise ValueError("toolkit_archive_hint cannot be empty")
        if not self.index_url:
            raise ValueError("index_url cannot be empty")
        if not self.base_distribution:
            raise ValueError("base_distribution cannot be empty")
        if any(not name for name in self.packages):
            raise ValueError("packages cannot contain empty names")
        if self.timeout_seconds < 1:
            raise ValueError(
                f"timeout_seconds must be at least 1, got {self.timeout_seconds}"
            )

    @classmethod
    def from_env(cls) -> "InstallerConfig":
        """Build a configuration from environment variables.

        Unset variables fall back to the field defaults.
        """
        packages_env = os.getenv("EXTENSION_PACKAGES")
        if packages_env is None:
            packages = DEFAULT_PACKAGES
        else:
            packages = tuple(p.strip() for p in packages_env.split(",") if p.strip())

        timeout_env = os.getenv("REPOSITORY_TIMEOUT", "30")
        try:
            timeout_seconds = int(timeout_env)
        except ValueError as e:
            raise ValueError(
                f"timeout_seconds must be an integer, got {timeout_env!r}"
            ) from e

        return cls(
            log_sink=os.getenv("LOG_SINK", "console"),
            toolkit_archive_hint=os.getenv(
                "TOOLKIT_ARCHIVE_HINT", DEFAULT_TOOLKIT_ARCHIVE_HINT
            ),
            index_url=os.getenv("PACKAGE_INDEX_URL", "https://pypi.org"),
            base_distribution=os.getenv("BASE_DISTRIBUTION", "scikit-learn"),
            packages=packages,
            timeout_seconds=timeout_seconds,
            log_level=os.getenv("LOG_LEVEL", "info").upper(),
        )
