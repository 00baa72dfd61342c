"""Dependency installer service.

Domain service that makes sure required extension packages are installed
before the hosting environment proceeds.
"""

import logging

from domain.interfaces import (
    IInstalledPackageRegistry,
    IPackageRepository,
    OutputSink,
)
from domain.value_objects import InstallStatus, PackageOutcome

from .version_resolver import VersionResolver

_LOGGER = logging.getLogger(__name__)

LOG_PREFIX = "[Scoring]"


class DependencyInstaller:
    """Best-effort installer for extension packages.

    Failures are recorded per package and never stop the remaining packages
    from being processed.
    """

    def __init__(
        self,
        repository: IPackageRepository,
        registry: IInstalledPackageRegistry,
        output_sink: OutputSink | None = None,
    ) -> None:
        """Initialize the dependency installer.

        Args:
            repository: Package repository implementation
            registry: Installed package registry implementation
            output_sink: Receives installer output (defaults to the module log)
        """
        self._repository = repository
        self._registry = registry
        self._resolver = VersionResolver(repository, registry)
        self._output_sink = output_sink or _LOGGER.info

    async def ensure_installed(
        self, package_names: tuple[str, ...] | list[str]
    ) -> tuple[PackageOutcome, ...]:
        """Install every missing package, then load all installed packages.

        Packages are processed one after another in the given order. This
        method never raises.

        Args:
            package_names: Packages to ensure, in processing order

        Returns:
            One outcome per package, in the same order
        """
        outcomes = []
        for name in package_names:
            outcomes.append(await self._ensure_one(name))

        try:
            loaded = self._registry.load_all(verbose=False)
            _LOGGER.debug("Loaded %d installed extensions", loaded)
        except Exception as e:
            _LOGGER.error("%s Failed to load installed packages: %s", LOG_PREFIX, e)

        return tuple(outcomes)

    async def _ensure_one(self, name: str) -> PackageOutcome:
        """Ensure a single package, converting any failure into an outcome."""
        try:
            installed = self._registry.get_installed_info(name)
            if installed is not None:
                _LOGGER.info(
                    "%s %s %s is already installed",
                    LOG_PREFIX,
                    name,
                    installed.installed_version,
                )
                return PackageOutcome(
                    name=name,
                    status=InstallStatus.ALREADY_INSTALLED,
                    version=installed.installed_version,
                )

            version = await self._resolver.resolve_latest_compatible_version(name)
            _LOGGER.info(
                "%s %s package is not installed - attempting to install version %s",
                LOG_PREFIX,
                name,
                version,
            )
            await self._repository.install(name, version, self._output_sink)
            return PackageOutcome(name=name, status=InstallStatus.INSTALLED, version=version)
        except Exception as e:
            _LOGGER.error("%s Unable to install %s: %s", LOG_PREFIX, name, e)
            return PackageOutcome(
                name=name,
                status=InstallStatus.FAILED,
                error=str(e) or type(e).__name__,
            )
