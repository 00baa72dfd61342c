"""Package descriptor value objects.

Immutable data structures describing extension packages as seen by the
package repository and the installed-package registry.
"""

from dataclasses import dataclass
from enum import Enum


class InstallStatus(str, Enum):
    """Outcome of ensuring a single package is installed.

    Attributes:
        ALREADY_INSTALLED: Package was present, nothing was done
        INSTALLED: A compatible version was resolved and installed
        FAILED: Resolution or installation failed
    """

    ALREADY_INSTALLED = "already_installed"
    INSTALLED = "installed"
    FAILED = "failed"


@dataclass(frozen=True)
class PackageDescriptor:
    """Description of an extension package.

    Built fresh for every registry or repository query and never persisted;
    the underlying package manager owns the install state.

    Attributes:
        name: Package identifier
        version: Version this record describes (None for a bare listing)
        installed_version: Installed version, if the package is installed
        available_versions: Versions offered by the repository, newest first
        compatible: Whether this version works with the running base toolkit
        requires_toolkit: Raw constraint on the base toolkit, if declared
        requires_python: Raw constraint on the interpreter, if declared
    """

    name: str
    version: str | None = None
    installed_version: str | None = None
    available_versions: tuple[str, ...] = ()
    compatible: bool = False
    requires_toolkit: str | None = None
    requires_python: str | None = None

    def __post_init__(self) -> None:
        """Validate descriptor values."""
        if not self.name:
            raise ValueError("name cannot be empty")

    @property
    def is_installed(self) -> bool:
        """Whether the registry reported an installed version."""
        return self.installed_version is not None


@dataclass(frozen=True)
class PackageOutcome:
    """Result of ensuring one package is installed.

    Attributes:
        name: Package identifier
        status: What happened to the package
        version: Installed or resolved version, when known
        error: Failure message when status is FAILED
    """

    name: str
    status: InstallStatus
    version: str | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        """Validate outcome values."""
        if not self.name:
            raise ValueError("name cannot be empty")
        if self.status is InstallStatus.FAILED and not self.error:
            raise ValueError("error is required when status is FAILED")

    @property
    def succeeded(self) -> bool:
        return self.status is not InstallStatus.FAILED
