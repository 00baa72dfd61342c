"""Package repository interface.

Contract for querying and installing extension packages from a remote
package repository.
"""

from abc import ABC, abstractmethod
from typing import Callable

from domain.value_objects import PackageDescriptor

OutputSink = Callable[[str], None]


class RepositoryUnavailableError(Exception):
    """Raised when the package repository cannot be reached or read."""

    pass


class PackageInstallError(Exception):
    """Raised when installing a package version fails."""

    pass


class IPackageRepository(ABC):
    """Contract for package repository operations."""

    @abstractmethod
    async def list_versions(self, package_name: str) -> tuple[str, ...]:
        """List the versions the repository offers for a package.

        Args:
            package_name: Package identifier

        Returns:
            Version identifiers ordered from newest to oldest

        Raises:
            RepositoryUnavailableError: If the listing cannot be fetched
        """
        pass

    @abstractmethod
    async def get_metadata(self, package_name: str, version: str) -> PackageDescriptor:
        """Fetch the metadata of one package version.

        Args:
            package_name: Package identifier
            version: Version identifier

        Returns:
            PackageDescriptor whose compatible flag is evaluated against
            the running base toolkit

        Raises:
            RepositoryUnavailableError: If the metadata cannot be fetched
        """
        pass

    @abstractmethod
    async def install(
        self, package_name: str, version: str, output_sink: OutputSink
    ) -> None:
        """Install a package version.

        Args:
            package_name: Package identifier
            version: Version to install
            output_sink: Receives installer output, one line per call

        Raises:
            PackageInstallError: If installation fails
        """
        pass
