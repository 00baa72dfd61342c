"""Version resolver service.

Domain service that picks the newest package version compatible with the
running base toolkit.
"""

import logging

from domain.interfaces import IInstalledPackageRegistry, IPackageRepository

_LOGGER = logging.getLogger(__name__)


class NoCompatibleVersionError(Exception):
    """Raised when no repository version works with the running base toolkit."""

    def __init__(self, package_name: str, base_version: str) -> None:
        super().__init__(
            f"Was unable to find a version of '{package_name}' that is "
            f"compatible with base toolkit {base_version}"
        )
        self.package_name = package_name
        self.base_version = base_version


class VersionResolver:
    """Resolves the latest compatible version of a package.

    The repository lists versions newest first; that order is trusted and
    never re-sorted here.
    """

    def __init__(
        self,
        repository: IPackageRepository,
        registry: IInstalledPackageRegistry,
    ) -> None:
        """Initialize the version resolver.

        Args:
            repository: Package repository implementation
            registry: Installed package registry, used for the base version
        """
        self._repository = repository
        self._registry = registry

    async def resolve_latest_compatible_version(self, package_name: str) -> str:
        """Return the first compatible version in repository order.

        Args:
            package_name: Package identifier

        Returns:
            Version identifier

        Raises:
            NoCompatibleVersionError: If no version is compatible
            RepositoryUnavailableError: If the repository cannot be queried
        """
        versions = await self._repository.list_versions(package_name)
        _LOGGER.debug(
            "Repository lists %d versions of %s", len(versions), package_name
        )

        for version in versions:
            descriptor = await self._repository.get_metadata(package_name, version)
            if descriptor.compatible:
                return descriptor.version or version
            _LOGGER.debug("%s %s is not compatible, trying older", package_name, version)

        raise NoCompatibleVersionError(package_name, self._registry.get_base_version())
